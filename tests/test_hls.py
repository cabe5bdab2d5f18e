import pytest

from sixelterm.hls import hls_to_rgb


def _channels(value):
    return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF


@pytest.mark.parametrize("lum", [0, 13, 50, 77, 100])
def test_zero_saturation_is_grey(lum):
    r, g, b = _channels(hls_to_rgb(200, lum, 0))
    assert r == g == b


def test_zero_lightness_is_black():
    for hue in (0, 90, 180, 270, 360):
        assert hls_to_rgb(hue, 0, 100) == 0


def test_full_lightness_is_white():
    for hue in (0, 90, 180, 270, 360):
        assert _channels(hls_to_rgb(hue, 100, 100)) == (255, 255, 255)


def test_hue_zero_is_blue():
    assert _channels(hls_to_rgb(0, 50, 100)) == (0, 0, 255)


def test_hue_120_is_red():
    assert _channels(hls_to_rgb(120, 50, 100)) == (255, 0, 0)


@pytest.mark.parametrize("hue", [0, 45, 120, 200, 300, 359])
def test_hue_is_periodic(hue):
    assert hls_to_rgb(hue, 40, 70) == hls_to_rgb(hue + 360, 40, 70)


def test_channels_within_range():
    for hue in range(0, 361, 30):
        for lum in range(0, 101, 25):
            for sat in range(0, 101, 25):
                value = hls_to_rgb(hue, lum, sat)
                assert 0 <= value <= 0xFFFFFF
                assert all(0 <= ch <= 255 for ch in _channels(value))


def test_far_negative_hue_falls_back_to_white():
    assert _channels(hls_to_rgb(-700, 50, 100)) == (255, 255, 255)