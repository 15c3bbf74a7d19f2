import io

import pytest

from orsaview.image import Image
from orsaview.image_io import (
    ImageFormat,
    ImageIOError,
    get_format,
    read_image,
    read_pnm_stream,
    read_raw,
    write_image,
    write_jpg,
    write_pnm_stream,
    write_raw,
)
from orsaview.pixels import RGBA, RGBColor


def _two_pixel_gray():
    image = Image(1, 2)
    image[0, 0] = 255
    image[1, 0] = 0
    return image


@pytest.mark.parametrize(
    "name, expected",
    [
        ("something.jpg", ImageFormat.JPG),
        ("something.png", ImageFormat.PNG),
        ("something.pnm", ImageFormat.PNM),
        ("/some/thing.JpG", ImageFormat.JPG),
        ("/some/thing.pNG", ImageFormat.PNG),
        ("some/thing.PNm", ImageFormat.PNM),
        (".s/o.m/e.t/h.i/n.g.JPG", ImageFormat.JPG),
        (".s/o.m/e.t/h.i/n.g.PNG", ImageFormat.PNG),
        (".s/o.m/e.t/h.i/n.g.PNM", ImageFormat.PNM),
        ("photo.jpeg", ImageFormat.JPG),
        ("gray.pgm", ImageFormat.PNM),
        ("color.ppm", ImageFormat.PNM),
        ("noextension", ImageFormat.UNKNOWN),
        ("picture.bmp", ImageFormat.UNKNOWN),
        ("dir.png/file", ImageFormat.UNKNOWN),
    ],
)
def test_get_format(name, expected):
    assert get_format(name) == expected


def test_png_round_trip(tmp_path):
    image = _two_pixel_gray()
    path = tmp_path / "test_write_png.png"
    write_image(path, image)
    assert read_image(path, int) == image


def test_jpg_round_trip_quality_100(tmp_path):
    image = _two_pixel_gray()
    path = tmp_path / "test_write_jpg.jpg"
    write_jpg(path, image, 100)
    assert read_image(path, int) == image


def test_pgm_round_trip(tmp_path):
    image = _two_pixel_gray()
    path = tmp_path / "test_write_pnm.pgm"
    write_image(path, image)
    assert read_image(path, int) == image


def test_ppm_round_trip(tmp_path):
    image = Image(1, 2)
    image[0, 0] = RGBColor(255, 255, 255)
    image[1, 0] = RGBColor(0, 0, 0)
    path = tmp_path / "test_write_pnm.ppm"
    write_image(path, image)
    assert read_image(path, RGBColor) == image


def test_rgba_png_round_trip(tmp_path):
    image = Image.from_pixels(2, 1, [RGBA(10, 20, 30, 40), RGBA(200, 100, 50, 255)])
    path = tmp_path / "alpha.png"
    write_image(path, image)
    assert read_image(path, RGBA) == image


def test_read_pgm(tmp_path):
    path = tmp_path / "two_pixels.pgm"
    path.write_bytes(b"P5\n2 1\n255\n\xff\x00")
    image = read_image(path, int)
    assert (image.width, image.height, image.depth) == (2, 1, 1)
    assert image[0, 0] == 255
    assert image[0, 1] == 0


def test_read_pgm_with_comments(tmp_path):
    path = tmp_path / "two_pixels_gray.pgm"
    path.write_bytes(b"P5\n# a comment\n2 # width\n1\n# max\n255\n\xff\x00")
    image = read_image(path, int)
    assert (image.width, image.height, image.depth) == (2, 1, 1)
    assert image[0, 0] == 255
    assert image[0, 1] == 0


def test_read_ppm(tmp_path):
    path = tmp_path / "two_pixels.ppm"
    path.write_bytes(b"P6\n2 1\n255\n" + bytes([255] * 3 + [0] * 3))
    image = read_image(path, RGBColor)
    assert (image.width, image.height, image.depth) == (2, 1, 3)
    assert image[0, 0] == RGBColor(255, 255, 255)
    assert image[0, 1] == RGBColor(0, 0, 0)


def test_invalid_files(tmp_path):
    with pytest.raises(ImageIOError):
        read_image(tmp_path / "donotexist.jpg", int)
    with pytest.raises(ImageIOError):
        read_image("hopefully_unexisting_file", int)


def test_read_pnm_stream_returns_raw_data():
    data, width, height, depth = read_pnm_stream(io.BytesIO(b"P5 3 1 255 \x01\x02\x03"))
    assert (data, width, height, depth) == (b"\x01\x02\x03", 3, 1, 1)


def test_comment_inside_token():
    stream = io.BytesIO(b"P5\n1#split\n2 1\n255\n" + bytes(range(12)))
    data, width, height, depth = read_pnm_stream(stream)
    assert (width, height, depth) == (12, 1, 1)
    assert data == bytes(range(12))


def test_comment_right_after_magic():
    data, width, height, depth = read_pnm_stream(io.BytesIO(b"P6#x\n1 1\n255\n\x01\x02\x03"))
    assert (data, width, height, depth) == (b"\x01\x02\x03", 1, 1, 3)


@pytest.mark.parametrize(
    "content",
    [
        b"P2\n2 1\n255\n\xff\x00",
        b"Q5\n2 1\n255\n\xff\x00",
        b"P5\n2 1\n65535\n\xff\x00",
        b"P5\n2 x1\n255\n\xff\x00",
        b"P5\n2 1\n255\n\xff",
        b"P5\n2 1 # never ends",
        b"P5\n2 1",
    ],
)
def test_read_pnm_stream_rejects(content):
    with pytest.raises(ImageIOError):
        read_pnm_stream(io.BytesIO(content))


def test_write_pnm_stream_layout():
    stream = io.BytesIO()
    write_pnm_stream(stream, b"\xff\x00", 2, 1, 1)
    assert stream.getvalue() == b"P5\n2 1 255\n\xff\x00"


def test_write_pnm_stream_color_magic():
    stream = io.BytesIO()
    write_pnm_stream(stream, bytes(6), 1, 2, 3)
    assert stream.getvalue().startswith(b"P6\n1 2 255\n")


def test_write_pnm_stream_rejects_depth():
    with pytest.raises(ImageIOError):
        write_pnm_stream(io.BytesIO(), bytes(4), 1, 1, 4)


def test_write_raw_size_mismatch(tmp_path):
    with pytest.raises(ValueError):
        write_raw(tmp_path / "bad.pgm", b"\x00", 2, 1, 1)


def test_write_raw_unknown_format(tmp_path):
    with pytest.raises(ImageIOError):
        write_raw(tmp_path / "image.bmp", b"\x00", 1, 1, 1)


def test_write_png_rejects_two_channels(tmp_path):
    with pytest.raises(ImageIOError):
        write_raw(tmp_path / "gray_alpha.png", bytes(4), 2, 1, 2)


def test_write_jpg_rejects_alpha(tmp_path):
    image = Image.from_pixels(1, 1, [RGBA(1, 2, 3, 4)])
    with pytest.raises(ImageIOError):
        write_jpg(tmp_path / "alpha.jpg", image, 90)


def test_write_jpg_rejects_quality(tmp_path):
    with pytest.raises(ValueError):
        write_jpg(tmp_path / "q.jpg", _two_pixel_gray(), 101)


def test_jpeg_content_with_png_name_is_rejected(tmp_path):
    path = tmp_path / "misnamed.png"
    write_jpg(path, _two_pixel_gray(), 90)
    with pytest.raises(ImageIOError):
        read_image(path, int)


def test_raw_png_round_trip(tmp_path):
    path = tmp_path / "raw.png"
    data = bytes([1, 2, 3, 4, 5, 6])
    write_raw(path, data, 2, 1, 3)
    assert read_raw(path) == (data, 2, 1, 3)


def test_jpg_color_is_close(tmp_path):
    path = tmp_path / "color.jpg"
    image = Image(8, 8, RGBColor(200, 100, 50))
    write_jpg(path, image, 100)
    data, width, height, depth = read_raw(path)
    assert (width, height, depth) == (8, 8, 3)
    for channel, expected in zip(data[:3], (200, 100, 50)):
        assert abs(channel - expected) <= 3


def test_color_read_as_gray(tmp_path):
    path = tmp_path / "bw.ppm"
    path.write_bytes(b"P6\n2 1\n255\n" + bytes([255] * 3 + [0] * 3))
    image = read_image(path, int)
    assert list(image) == [255, 0]


def test_gray_read_as_rgba(tmp_path):
    path = tmp_path / "gray.pgm"
    path.write_bytes(b"P5\n1 1\n255\n\x07")
    image = read_image(path, RGBA)
    assert image[0, 0] == RGBA(7, 7, 7, 255)


def test_rgba_read_as_color_drops_alpha(tmp_path):
    path = tmp_path / "alpha.png"
    write_raw(path, bytes([9, 8, 7, 6]), 1, 1, 4)
    image = read_image(path, RGBColor)
    assert image[0, 0] == RGBColor(9, 8, 7)


def test_read_image_rejects_target():
    with pytest.raises(TypeError):
        read_image("whatever.pgm", str)