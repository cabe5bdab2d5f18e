"""Conversion of sixel HLS colour specifications to packed RGB values."""

import math

__all__ = ["hls_to_rgb"]


def _pack(r: int, g: int, b: int) -> int:
    return (r << 16) + (g << 8) + b


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def _clamp_percent(value: int) -> int:
    return min(max(value, 0), 100)


def hls_to_rgb(hue: int, lum: int, sat: int) -> int:
    """Convert a sixel HLS triple to a packed ``0xRRGGBB`` integer.

    Hue is in degrees with blue at 0, red at 120 and green at 240;
    lightness and saturation are percentages.
    """
    hs = math.fmod(hue + 240, 360)
    hv = hs / 360.0
    lv = lum / 100.0
    sv = sat / 100.0

    if sat == 0:
        grey = _trunc_div(lum * 255, 100)
        return _pack(grey, grey, grey)

    c2 = abs(2.0 * lv - 1.0)
    c = (1.0 - c2) * sv
    hpi = int(hv * 6.0)
    x = c if hpi & 1 else 0.0
    m = lv - 0.5 * c

    sectors = {
        0: (c, x, 0.0),
        1: (x, c, 0.0),
        2: (0.0, c, x),
        3: (0.0, x, c),
        4: (x, 0.0, c),
        5: (c, 0.0, x),
    }
    if hpi not in sectors:
        return _pack(255, 255, 255)

    r1, g1, b1 = sectors[hpi]
    r, g, b = (_clamp_percent(int((v + m) * 100.0 + 0.5)) for v in (r1, g1, b1))
    return _pack(r * 255 // 100, g * 255 // 100, b * 255 // 100)