import pytest

from sixelterm.hls import hls_to_rgb
from sixelterm.sixel import (
    DEFAULT_COLOR_TABLE,
    PALETTE_MAX,
    PARAMVALUE_MAX,
    ParseState,
    SixelImage,
    SixelParser,
)


def pixel(image, x, y):
    return image.data[y * image.width + x]


def make_parser(private=False, cell=(1, 1), fg=0, bg=0):
    return SixelParser(fg, bg, private, cell[0], cell[1])


def test_image_init_palette_with_private_register():
    image = SixelImage(1, 1, fgcolor=0x112233, bgcolor=0x445566, use_private_register=True)
    assert image.palette[0] == 0x445566
    assert image.palette[1] == 0x112233
    assert image.ncolors == 2


def test_image_init_without_private_register_leaves_fg_unset():
    image = SixelImage(1, 1, fgcolor=0x112233, bgcolor=0x445566)
    assert image.palette[1] == 0


def test_resize_grow_keeps_content_and_zero_fills():
    image = SixelImage(2, 2)
    image.data[0] = 5
    image.data[3] = 7
    image.resize(4, 3)
    assert (image.width, image.height) == (4, 3)
    assert pixel(image, 0, 0) == 5
    assert pixel(image, 1, 1) == 7
    assert pixel(image, 3, 0) == 0
    assert all(pixel(image, x, 2) == 0 for x in range(4))


def test_resize_shrink_keeps_top_left():
    image = SixelImage(3, 3)
    for i in range(9):
        image.data[i] = i + 1
    image.resize(2, 2)
    assert list(image.data) == [1, 2, 4, 5]


def test_resize_negative_raises():
    image = SixelImage(1, 1)
    with pytest.raises(ValueError):
        image.resize(-1, 4)


def test_default_color_table_layout():
    image = SixelImage(1, 1)
    image.set_default_color()
    assert image.palette[1:17] == list(DEFAULT_COLOR_TABLE)
    assert len(set(image.palette[17:233])) == 216
    for value in image.palette[233:257]:
        assert value & 0xFF == (value >> 8) & 0xFF == (value >> 16) & 0xFF
    assert image.palette[232] == image.palette[PALETTE_MAX - 1]
    assert len(image.palette) == PALETTE_MAX


def test_parser_set_default_color_delegates():
    parser = make_parser()
    parser.set_default_color()
    assert parser.image.palette[1:17] == list(DEFAULT_COLOR_TABLE)


def test_single_full_sixel_column():
    parser = make_parser()
    assert parser.parse(b"~") == 1
    image = parser.image
    assert image.height >= 6
    assert [pixel(image, 0, y) for y in range(6)] == [parser.color_index] * 6
    assert parser.max_y == 5
    assert parser.pos_x == 1


def test_single_bit_sixel():
    parser = make_parser()
    parser.parse(b"A")  # bit 1 only
    image = parser.image
    column = [pixel(image, 0, y) for y in range(6)]
    assert column[1] == parser.color_index
    assert column.count(0) == 5


def test_repeat_fills_runs_with_gaps():
    parser = make_parser()
    pattern = 0b101101
    parser.parse(b"!4" + bytes([0x3F + pattern]))
    image = parser.image
    assert parser.pos_x == 4
    for y in range(6):
        expected = parser.color_index if pattern & (1 << y) else 0
        assert [pixel(image, x, y) for x in range(4)] == [expected] * 4
    assert parser.max_x == 3
    assert parser.max_y == 5


def test_repeat_zero_means_one():
    parser = make_parser()
    parser.parse(b"!0~")
    assert parser.pos_x == 1


def test_carriage_return_and_next_line():
    parser = make_parser()
    parser.parse(b"~$#1@")
    image = parser.image
    assert pixel(image, 0, 0) == 2
    assert pixel(image, 0, 1) == 16
    parser.parse(b"-@")
    assert parser.pos_y == 6
    assert pixel(parser.image, 0, 6) == 2
    assert pixel(parser.image, 0, 0) == 2


def test_escape_stops_parsing():
    parser = make_parser()
    assert parser.parse(b"~\x1b~~") == 2
    assert parser.state is ParseState.ESC
    assert parser.parse(b"~") == 0
    assert parser.pos_x == 1


def test_raster_attributes_resize_to_grid():
    parser = make_parser(cell=(8, 16))
    parser.parse(b'"1;1;10;20~')
    image = parser.image
    assert parser.attributed_ph == 10
    assert parser.attributed_pv == 20
    assert image.width % 8 == 0 and image.width >= 10
    assert image.height % 16 == 0 and image.height >= 20
    assert pixel(image, 0, 0) == parser.color_index


def test_raster_zero_aspect_becomes_one():
    parser = make_parser()
    parser.parse(b'"0;0~')
    assert parser.attributed_pan == 1
    assert parser.attributed_pad == 1


def test_color_index_is_clamped():
    parser = make_parser()
    parser.parse(b"#5000~")
    assert parser.color_index == PALETTE_MAX - 1


def test_parameter_value_is_clamped():
    parser = make_parser()
    parser.parse(b"!99999999")
    assert parser.param == PARAMVALUE_MAX
    assert parser.state is ParseState.DECGRI


def test_rgb_color_register():
    parser = make_parser()
    parser.parse(b"#1;2;100;100;100~")
    reference = SixelImage(1, 1)
    reference.set_default_color()
    assert parser.image.palette[2] == reference.palette[PALETTE_MAX - 1]
    assert parser.image.palette_modified


def test_rgb_components_clamped():
    clamped = make_parser()
    clamped.parse(b"#1;2;200;150;300~")
    exact = make_parser()
    exact.parse(b"#1;2;100;100;100~")
    assert clamped.image.palette[2] == exact.image.palette[2]


def test_hls_color_register():
    parser = make_parser()
    parser.parse(b"#3;1;120;50;100~")
    assert parser.image.palette[4] == hls_to_rgb(120, 50, 100)
    clamped = make_parser()
    clamped.parse(b"#3;1;400;50;100~")
    assert clamped.image.palette[4] == hls_to_rgb(360, 50, 100)


def test_finalize_crops_and_emits_bgra():
    parser = make_parser()
    parser.parse(b"#1;2;100;0;0!3~")
    out = parser.finalize()
    image = parser.image
    assert (image.width, image.height) == (3, 6)
    assert len(out) == image.width * image.height * 4
    assert out == bytes([0, 0, 255, 255]) * 18


def test_finalize_pads_with_background_on_grid():
    parser = make_parser(cell=(4, 4), bg=0x030201)
    parser.parse(b"~")
    out = parser.finalize()
    image = parser.image
    assert image.width == 4
    assert image.height % 4 == 0 and image.height >= 6
    assert len(out) == image.width * image.height * 4
    assert out[3::4] == b"\xff" * (image.width * image.height)
    assert out[4:8] == bytes([3, 2, 1, 255])


def test_finalize_loads_default_palette_for_private_register():
    parser = make_parser(private=True)
    parser.parse(b"#5~")
    assert parser.image.ncolors == 6
    parser.finalize()
    assert parser.image.palette[6] == DEFAULT_COLOR_TABLE[5]
    assert parser.image.palette[9] == DEFAULT_COLOR_TABLE[8]


def test_finalize_keeps_modified_palette():
    parser = make_parser(private=True)
    parser.parse(b"#5;2;0;0;0~")
    parser.finalize()
    assert parser.image.palette[9] == 0
    assert parser.image.palette[9] != DEFAULT_COLOR_TABLE[8]