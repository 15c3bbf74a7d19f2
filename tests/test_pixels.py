import pytest

from orsaview.pixels import (
    BLACK,
    GREEN,
    RGBA,
    RGBColor,
    WHITE,
    YELLOW,
    convert_pixel,
)


def test_named_colors():
    assert GREEN == RGBColor(0, 255, 0)
    assert YELLOW == RGBColor(255, 255, 0)
    assert WHITE == RGBColor(255, 255, 255)
    assert BLACK == RGBColor()


@pytest.mark.parametrize("args", [(256, 0, 0), (-1, 0, 0), (0, 0, 1.5)])
def test_rgb_component_out_of_range(args):
    with pytest.raises(ValueError):
        RGBColor(*args)


def test_rgba_alpha_out_of_range():
    with pytest.raises(ValueError):
        RGBA(0, 0, 0, 300)


def test_rgba_default_is_opaque_black():
    assert RGBA() == RGBA(0, 0, 0, 255)


def test_iteration_and_str():
    assert tuple(RGBColor(1, 2, 3)) == (1, 2, 3)
    assert str(RGBColor(1, 2, 3)) == "1 2 3"
    assert tuple(RGBA(1, 2, 3, 4)) == (1, 2, 3, 4)


def test_gray_values():
    assert BLACK.gray() == 0
    assert RGBColor(100, 0, 0).gray() == 30


@pytest.mark.parametrize("color", [RGBColor(10, 200, 30), RGBColor(255, 0, 128), WHITE])
def test_gray_bounded_by_components(color):
    assert min(color) - 1 <= color.gray() <= max(color)


def test_scaled_identity_and_zero():
    color = RGBColor(12, 34, 56)
    assert color.scaled(1) == color
    assert color.scaled(0) == BLACK
    assert color * 1.0 == color
    assert color / 1 == color


def test_add_colors_wraps():
    assert (RGBColor(200, 0, 0) + RGBColor(100, 0, 0)).r == 44


def test_add_neutral_elements():
    color = RGBColor(7, 8, 9)
    assert color + BLACK == color
    assert color + 0 == color


def test_add_unsupported_type():
    with pytest.raises(TypeError):
        RGBColor(1, 2, 3) + "abc"


def test_rgba_from_rgb():
    color = RGBColor(1, 2, 3)
    assert RGBA.from_rgb(color) == RGBA(1, 2, 3, 255)
    assert RGBA.from_rgb(color, 10).a == 10


def test_gray_rgb_gray_round_trip():
    for level in range(256):
        assert convert_pixel(convert_pixel(level, RGBColor), int) == level


def test_gray_rgba_gray_round_trip():
    for level in range(256):
        rgba = convert_pixel(level, RGBA)
        assert rgba.a == 255
        assert convert_pixel(rgba, int) == level


def test_rgba_to_rgb_drops_alpha():
    assert convert_pixel(RGBA(1, 2, 3, 4), RGBColor) == RGBColor(1, 2, 3)


def test_rgb_to_rgba_is_opaque():
    assert convert_pixel(RGBColor(1, 2, 3), RGBA) == RGBA(1, 2, 3, 255)


def test_same_type_conversion_is_identity():
    color = RGBColor(4, 5, 6)
    assert convert_pixel(color, RGBColor) is color


def test_float_to_int_truncates():
    assert convert_pixel(3.7, int) == 3


def test_unsupported_target():
    with pytest.raises(TypeError):
        convert_pixel(1, str)