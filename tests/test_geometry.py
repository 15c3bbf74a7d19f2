import pytest

from orsaview.geometry import Geometry


def test_parse_documented_example():
    geo = Geometry.parse("100x100+0+0")
    assert (geo.x0, geo.y0) == (0, 0)
    assert (geo.x1, geo.y1) == (100, 100)


@pytest.mark.parametrize("text", ["100x50+10+20", "3x7+0+5", "10x10+-5+3"])
def test_round_trip(text):
    assert str(Geometry.parse(text)) == text


def test_str_of_default():
    assert str(Geometry()) == "0x0+0+0"


@pytest.mark.parametrize("bad", ["100y100+0+0", "abc", "100x100+0+0junk", "100x100+0", ""])
def test_parse_rejects_invalid(bad):
    with pytest.raises(ValueError):
        Geometry.parse(bad)


def test_inside_bounds():
    geo = Geometry.parse("100x50+10+20")
    assert geo.inside(geo.x0, geo.y0)
    assert geo.inside(geo.x1 - 1, geo.y1 - 1)
    assert not geo.inside(geo.x1, geo.y1 - 1)
    assert not geo.inside(geo.x1 - 1, geo.y1)
    assert not geo.inside(geo.x0 - 1, geo.y0)


def test_inside_truncates_coordinates():
    geo = Geometry.parse("100x50+10+20")
    assert geo.inside(geo.x1 - 0.5, geo.y1 - 0.5)
    assert not geo.inside(geo.x0 - 1.5, geo.y0)