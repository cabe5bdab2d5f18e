"""Decoder for DEC sixel graphics data."""

from array import array
from enum import IntEnum

from .hls import hls_to_rgb

__all__ = [
    "PARAMS_MAX",
    "PALETTE_MAX",
    "PARAMVALUE_MAX",
    "WIDTH_MAX",
    "HEIGHT_MAX",
    "DEFAULT_COLOR_TABLE",
    "ParseState",
    "SixelImage",
    "SixelParser",
]

PARAMS_MAX = 16
PALETTE_MAX = 1024
PARAMVALUE_MAX = 65535
WIDTH_MAX = 4096
HEIGHT_MAX = 4096


def _rgb(r: int, g: int, b: int) -> int:
    return r + (g << 8) + (b << 16)


def _palval(n: int, a: int, m: int) -> int:
    return (n * a + m // 2) // m


def _xrgb(r: int, g: int, b: int) -> int:
    return _rgb(_palval(r, 255, 100), _palval(g, 255, 100), _palval(b, 255, 100))


DEFAULT_COLOR_TABLE = (
    _xrgb(0, 0, 0),      # black
    _xrgb(20, 20, 80),   # blue
    _xrgb(80, 13, 13),   # red
    _xrgb(20, 80, 20),   # green
    _xrgb(80, 20, 80),   # magenta
    _xrgb(20, 80, 80),   # cyan
    _xrgb(80, 80, 20),   # yellow
    _xrgb(53, 53, 53),   # gray 50%
    _xrgb(26, 26, 26),   # gray 25%
    _xrgb(33, 33, 60),   # blue*
    _xrgb(60, 26, 26),   # red*
    _xrgb(33, 60, 33),   # green*
    _xrgb(60, 33, 60),   # magenta*
    _xrgb(33, 60, 60),   # cyan*
    _xrgb(60, 60, 33),   # yellow*
    _xrgb(80, 80, 80),   # gray 75%
)


def _blank(size: int) -> array:
    return array("H", bytes(2 * size))


def _round_up(value: int, grid: int) -> int:
    return (value + grid - 1) // grid * grid


class ParseState(IntEnum):
    """States of the sixel parser."""

    ESC = 1
    DECSIXEL = 2
    DECGRA = 3
    DECGRI = 4
    DECGCI = 5


class SixelImage:
    """An indexed-colour pixel buffer with its palette."""

    def __init__(self, width, height, fgcolor=0, bgcolor=0, use_private_register=False):
        if width < 0 or height < 0:
            raise ValueError("image dimensions must not be negative")
        self.width = width
        self.height = height
        self.data = _blank(width * height)
        self.palette = [0] * PALETTE_MAX
        self.palette[0] = bgcolor
        self.use_private_register = bool(use_private_register)
        if self.use_private_register:
            self.palette[1] = fgcolor
        self.ncolors = 2
        self.palette_modified = False

    def resize(self, width, height):
        """Resize the buffer, keeping the top-left content and zero-filling the rest."""
        if width < 0 or height < 0:
            raise ValueError("image dimensions must not be negative")
        buffer = _blank(width * height)
        copy_width = min(width, self.width)
        for row in range(min(height, self.height)):
            src = row * self.width
            dst = row * width
            buffer[dst:dst + copy_width] = self.data[src:src + copy_width]
        self.data = buffer
        self.width = width
        self.height = height

    def set_default_color(self):
        """Fill the palette with the VT340 colours, a colour cube and a grey ramp."""
        palette = self.palette
        palette[1:17] = DEFAULT_COLOR_TABLE
        n = 17
        for r in range(6):
            for g in range(6):
                for b in range(6):
                    palette[n] = _rgb(r * 51, g * 51, b * 51)
                    n += 1
        for i in range(24):
            palette[n] = _rgb(i * 11, i * 11, i * 11)
            n += 1
        white = _rgb(255, 255, 255)
        palette[n:] = [white] * (PALETTE_MAX - n)


class SixelParser:
    """Incremental sixel decoder producing a BGRA pixel buffer."""

    def __init__(self, fgcolor, bgcolor, use_private_register, cell_width, cell_height):
        self.state = ParseState.DECSIXEL
        self.pos_x = 0
        self.pos_y = 0
        self.max_x = 0
        self.max_y = 0
        self.attributed_pan = 2
        self.attributed_pad = 1
        self.attributed_ph = 0
        self.attributed_pv = 0
        self.repeat_count = 1
        self.color_index = 16
        self.grid_width = cell_width
        self.grid_height = cell_height
        self.param = 0
        self.params = []
        self.image = SixelImage(1, 1, fgcolor, bgcolor, use_private_register)

    def parse(self, data):
        """Feed sixel bytes to the parser; return how many bytes were consumed.

        Parsing stops once an ESC byte has been seen; later input is ignored.
        """
        data = bytes(data)
        i = 0
        while i < len(data):
            if self.state is ParseState.ESC:
                break
            ch = data[i]
            if ch == 0x1B:
                self.state = ParseState.ESC
                i += 1
                continue
            handler = {
                ParseState.DECSIXEL: self._body,
                ParseState.DECGRA: self._raster,
                ParseState.DECGRI: self._repeat,
                ParseState.DECGCI: self._color,
            }[self.state]
            if handler(ch):
                i += 1
        return i

    def set_default_color(self):
        """Load the default palette into the image."""
        self.image.set_default_color()

    def finalize(self):
        """Crop the image to its drawn extent and return it as BGRA bytes."""
        image = self.image
        self.max_x += 1
        if self.max_x < self.attributed_ph:
            self.max_x = self.attributed_ph
        self.max_y += 1
        if self.max_y < self.attributed_pv:
            self.max_y = self.attributed_pv

        sx = _round_up(self.max_x, self.grid_width)
        sy = _round_up(self.max_y, self.grid_height)
        if image.width > sx or image.height > sy:
            image.resize(sx, sy)

        if image.use_private_register and image.ncolors > 2 and not image.palette_modified:
            image.set_default_color()

        pixels = [
            bytes(((c >> 16) & 0xFF, (c >> 8) & 0xFF, c & 0xFF, 255))
            for c in image.palette
        ]
        return b"".join(pixels[index] for index in image.data)

    def _reset_params(self):
        self.param = 0
        self.params = []

    def _push_param(self):
        if len(self.params) < PARAMS_MAX:
            self.params.append(self.param)

    def _digit(self, ch):
        self.param = min(self.param * 10 + ch - 0x30, PARAMVALUE_MAX)

    def _body(self, ch):
        if ch == 0x22:  # "
            self._reset_params()
            self.state = ParseState.DECGRA
        elif ch == 0x21:  # !
            self._reset_params()
            self.state = ParseState.DECGRI
        elif ch == 0x23:  # #
            self._reset_params()
            self.state = ParseState.DECGCI
        elif ch == 0x24:  # $ graphics carriage return
            self.pos_x = 0
        elif ch == 0x2D:  # - graphics next line
            self.pos_x = 0
            if self.pos_y < HEIGHT_MAX - 5 - 6:
                self.pos_y += 6
            else:
                self.pos_y = HEIGHT_MAX + 1
        elif 0x3F <= ch <= 0x7E:
            self._draw(ch - 0x3F)
        return True

    def _grow_for_draw(self):
        image = self.image
        need_x = self.pos_x + self.repeat_count
        need_y = self.pos_y + 6
        if ((image.width < need_x or image.height < need_y)
                and image.width < WIDTH_MAX and image.height < HEIGHT_MAX):
            sx = image.width * 2
            sy = image.height * 2
            while sx < need_x or sy < need_y:
                sx *= 2
                sy *= 2
            image.resize(min(sx, WIDTH_MAX), min(sy, HEIGHT_MAX))

    def _fill(self, top, rows, width):
        image = self.image
        run = array("H", [self.color_index]) * width
        for y in range(top, min(top + rows, image.height)):
            start = image.width * y + self.pos_x
            image.data[start:start + width] = run

    def _draw(self, bits):
        image = self.image
        self._grow_for_draw()

        if self.color_index > image.ncolors:
            image.ncolors = self.color_index

        if self.pos_x + self.repeat_count > image.width:
            self.repeat_count = image.width - self.pos_x

        if self.repeat_count > 0 and self.pos_y - 5 < image.height and bits:
            if self.repeat_count <= 1:
                for i in range(6):
                    row = self.pos_y + i
                    if bits & (1 << i) and row < image.height:
                        image.data[image.width * row + self.pos_x] = self.color_index
                        self.max_x = max(self.max_x, self.pos_x)
                        self.max_y = max(self.max_y, row)
            else:
                i = 0
                while i < 6:
                    if bits & (1 << i):
                        n = 1
                        while i + n < 6 and bits & (1 << (i + n)):
                            n += 1
                        self._fill(self.pos_y + i, n, self.repeat_count)
                        self.max_x = max(self.max_x, self.pos_x + self.repeat_count - 1)
                        self.max_y = max(self.max_y, self.pos_y + i + n - 1)
                        i += n
                    else:
                        i += 1

        if self.repeat_count > 0:
            self.pos_x += self.repeat_count
        self.repeat_count = 1

    def _raster(self, ch):
        if 0x30 <= ch <= 0x39:
            self._digit(ch)
            return True
        if ch == 0x3B:
            self._push_param()
            self.param = 0
            return True

        self._push_param()
        params = self.params
        if len(params) > 0:
            self.attributed_pad = params[0]
        if len(params) > 1:
            self.attributed_pan = params[1]
        if len(params) > 2 and params[2] > 0:
            self.attributed_ph = params[2]
        if len(params) > 3 and params[3] > 0:
            self.attributed_pv = params[3]
        if self.attributed_pan <= 0:
            self.attributed_pan = 1
        if self.attributed_pad <= 0:
            self.attributed_pad = 1

        image = self.image
        if image.width < self.attributed_ph or image.height < self.attributed_pv:
            sx = _round_up(max(self.attributed_ph, image.width), self.grid_width)
            sy = _round_up(max(self.attributed_pv, image.height), self.grid_height)
            image.resize(min(sx, WIDTH_MAX), min(sy, HEIGHT_MAX))

        self.state = ParseState.DECSIXEL
        self._reset_params()
        return False

    def _repeat(self, ch):
        if 0x30 <= ch <= 0x39:
            self._digit(ch)
            return True
        self.repeat_count = self.param or 1
        self.state = ParseState.DECSIXEL
        self._reset_params()
        return False

    def _color(self, ch):
        if 0x30 <= ch <= 0x39:
            self._digit(ch)
            return True
        if ch == 0x3B:
            self._push_param()
            self.param = 0
            return True

        self.state = ParseState.DECSIXEL
        self._push_param()
        self.param = 0
        params = self.params

        if params:
            # offset of one: register 0 holds the background colour
            self.color_index = min(max(1 + params[0], 0), PALETTE_MAX - 1)

        if len(params) > 4:
            image = self.image
            image.palette_modified = True
            if params[1] == 1:
                hue = min(params[2], 360)
                lum = min(params[3], 100)
                sat = min(params[4], 100)
                image.palette[self.color_index] = hls_to_rgb(hue, lum, sat)
            elif params[1] == 2:
                r, g, b = (min(v, 100) for v in params[2:5])
                image.palette[self.color_index] = _xrgb(r, g, b)
        return False