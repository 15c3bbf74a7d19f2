"""Reading and writing PNM, PNG and JPEG images."""

from __future__ import annotations

import os
from enum import Enum
from typing import Any, BinaryIO, Iterable, Iterator, Tuple

import numpy as np
from PIL import Image as PILImage

from orsaview.image import Image, convert_image
from orsaview.pixels import RGBA, RGBColor

RawImage = Tuple[bytes, int, int, int]

_MAX_TOKEN_LENGTH = 256
_DEFAULT_JPG_QUALITY = 90


class ImageFormat(Enum):
    """Image file formats recognised from the file extension."""

    PNM = "pnm"
    PNG = "png"
    JPG = "jpg"
    UNKNOWN = "unknown"


class ImageIOError(OSError):
    """An image file could not be read or written."""


_EXTENSIONS = {
    ".png": ImageFormat.PNG,
    ".ppm": ImageFormat.PNM,
    ".pgm": ImageFormat.PNM,
    ".pbm": ImageFormat.PNM,
    ".pnm": ImageFormat.PNM,
    ".jpg": ImageFormat.JPG,
    ".jpeg": ImageFormat.JPG,
}


def get_format(filename: "str | os.PathLike[str]") -> ImageFormat:
    """Format deduced from the text after the last dot, case-insensitively."""
    name = os.fspath(filename)
    dot = name.rfind(".")
    if dot < 0:
        return ImageFormat.UNKNOWN
    return _EXTENSIONS.get(name[dot:].lower(), ImageFormat.UNKNOWN)


def _check_size(data: bytes, width: int, height: int, depth: int) -> None:
    if width < 0 or height < 0:
        raise ValueError(f"invalid image size {width}x{height}")
    expected = width * height * depth
    if len(data) != expected:
        raise ValueError(
            f"expected {expected} bytes for {width}x{height}x{depth}, got {len(data)}"
        )


# ---------------------------------------------------------------- PNM


def _read_magic(stream: BinaryIO) -> Tuple[int, bytes]:
    """Read ``P<number>``; return the number and the byte read after it."""
    if stream.read(1) != b"P":
        raise ImageIOError("not a PNM stream: missing magic number")
    char = stream.read(1)
    while char and char.isspace():
        char = stream.read(1)
    digits = b""
    if char in (b"+", b"-"):
        digits = char
        char = stream.read(1)
    while char and char.isdigit():
        digits += char
        char = stream.read(1)
    try:
        return int(digits), char
    except ValueError:
        raise ImageIOError("not a PNM stream: invalid magic number") from None


def read_pnm_stream(stream: BinaryIO) -> RawImage:
    """Read a binary PGM (P5) or PPM (P6) stream.

    Returns ``(data, width, height, depth)``. Comments may appear anywhere in
    the header, even inside numbers.
    """
    magic, pending = _read_magic(stream)
    depths = {5: 1, 6: 3}
    if magic not in depths:
        raise ImageIOError(f"unsupported PNM magic number P{magic}")
    depth = depths[magic]

    values = []
    token = b""
    lookahead: "bytes | None" = pending
    while len(values) < 3:
        if lookahead is not None:
            char, lookahead = lookahead, None
        else:
            char = stream.read(1)
        if not char:
            raise ImageIOError("truncated PNM header")
        if char.isspace():
            if token:
                values.append(int(token))
                token = b""
                if len(values) == 3 and values[2] > 255:
                    raise ImageIOError(f"unsupported PNM maximum value {values[2]}")
        elif char.isdigit():
            token += char
            if len(token) == _MAX_TOKEN_LENGTH:
                raise ImageIOError("PNM header token too long")
        elif char == b"#":
            char = stream.read(1)
            while char and char != b"\n":
                char = stream.read(1)
            if not char:
                raise ImageIOError("unterminated comment in PNM header")
        else:
            raise ImageIOError(f"unexpected character {char!r} in PNM header")

    width, height = values[0], values[1]
    size = width * height * depth
    data = stream.read(size)
    if len(data) != size:
        raise ImageIOError(f"truncated PNM data: expected {size} bytes, got {len(data)}")
    return data, width, height, depth


def write_pnm_stream(stream: BinaryIO, data: bytes, width: int, height: int,
                     depth: int) -> None:
    """Write a binary PGM (depth 1) or PPM (depth 3) stream."""
    magic = {1: b"P5\n", 3: b"P6\n"}.get(depth)
    if magic is None:
        raise ImageIOError(f"PNM cannot hold {depth}-channel images")
    data = bytes(data)
    _check_size(data, width, height, depth)
    stream.write(magic)
    stream.write(f"{width} {height} 255\n".encode("ascii"))
    stream.write(data)


def _read_pnm(path: str) -> RawImage:
    try:
        with open(path, "rb") as stream:
            return read_pnm_stream(stream)
    except ImageIOError:
        raise
    except OSError as exc:
        raise ImageIOError(f"couldn't open {path}: {exc}") from exc


def _write_pnm(path: str, data: bytes, width: int, height: int, depth: int) -> None:
    if depth not in (1, 3):
        raise ImageIOError(f"PNM cannot hold {depth}-channel images")
    try:
        with open(path, "wb") as stream:
            write_pnm_stream(stream, data, width, height, depth)
    except ImageIOError:
        raise
    except OSError as exc:
        raise ImageIOError(f"couldn't open {path}: {exc}") from exc


# ---------------------------------------------------------------- PNG / JPEG

_SIXTEEN_BIT_MODES = ("I;16", "I;16B", "I;16L", "I")
_DEPTHS = {"L": 1, "LA": 2, "RGB": 3, "RGBA": 4}
_MODES = {1: "L", 3: "RGB", 4: "RGBA"}


def _pillow_raw(img: "PILImage.Image") -> Tuple[bytes, int]:
    mode = img.mode
    if mode in _SIXTEEN_BIT_MODES:
        levels = np.asarray(img).astype(np.int64) >> 8
        return np.clip(levels, 0, 255).astype(np.uint8).tobytes(), 1
    if mode == "1":
        img = img.convert("L")
    elif mode in ("P", "PA"):
        has_alpha = mode == "PA" or "transparency" in img.info
        img = img.convert("RGBA" if has_alpha else "RGB")
    elif mode == "RGB" and "transparency" in img.info:
        img = img.convert("RGBA")
    elif mode not in _DEPTHS:
        img = img.convert("RGB")
    return img.tobytes(), _DEPTHS[img.mode]


def _read_pillow(path: str, expected: str) -> RawImage:
    try:
        with PILImage.open(path) as img:
            if img.format != expected:
                raise ImageIOError(f"{path} is not a {expected} file")
            img.load()
            data, depth = _pillow_raw(img)
            return data, img.width, img.height, depth
    except ImageIOError:
        raise
    except (OSError, ValueError) as exc:
        raise ImageIOError(f"couldn't read {path}: {exc}") from exc


def _write_pillow(path: str, data: bytes, width: int, height: int, depth: int,
                  fmt: str, **options: Any) -> None:
    data = bytes(data)
    _check_size(data, width, height, depth)
    try:
        img = PILImage.frombytes(_MODES[depth], (width, height), data)
        img.save(path, format=fmt, **options)
    except (OSError, ValueError, SystemError) as exc:
        raise ImageIOError(f"couldn't write {path}: {exc}") from exc


def _write_png(path: str, data: bytes, width: int, height: int, depth: int) -> None:
    if depth not in (1, 3, 4):
        raise ImageIOError(f"PNG writing does not support {depth}-channel images")
    _write_pillow(path, data, width, height, depth, "PNG")


def _write_jpg_raw(path: str, data: bytes, width: int, height: int, depth: int,
                   quality: int) -> None:
    if not 0 <= quality <= 100:
        raise ValueError(f"JPEG quality {quality} should be between 0 and 100")
    if depth not in (1, 3):
        raise ImageIOError(f"JPEG writing does not support {depth}-channel images")
    _write_pillow(path, data, width, height, depth, "JPEG", quality=quality)


# ---------------------------------------------------------------- dispatch


def read_raw(filename: "str | os.PathLike[str]") -> RawImage:
    """Read an image file as ``(data, width, height, depth)`` interleaved bytes."""
    path = os.fspath(filename)
    fmt = get_format(path)
    if fmt is ImageFormat.PNM:
        return _read_pnm(path)
    if fmt is ImageFormat.PNG:
        return _read_pillow(path, "PNG")
    if fmt is ImageFormat.JPG:
        return _read_pillow(path, "JPEG")
    raise ImageIOError(f"couldn't open {path}: unknown file format")


def write_raw(filename: "str | os.PathLike[str]", data: bytes, width: int, height: int,
              depth: int) -> None:
    """Write interleaved bytes in the format given by the file extension."""
    path = os.fspath(filename)
    fmt = get_format(path)
    if fmt is ImageFormat.PNM:
        _write_pnm(path, data, width, height, depth)
    elif fmt is ImageFormat.PNG:
        _write_png(path, data, width, height, depth)
    elif fmt is ImageFormat.JPG:
        _write_jpg_raw(path, data, width, height, depth, _DEFAULT_JPG_QUALITY)
    else:
        raise ImageIOError(f"couldn't open {path}: unknown file format")


def _chunks(data: bytes, size: int) -> Iterator[Tuple[int, ...]]:
    return zip(*[iter(data)] * size)


def read_image(filename: "str | os.PathLike[str]", target: type = RGBColor) -> Image:
    """Read an image file, converting pixels to ``target`` (int, RGBColor or RGBA)."""
    if target not in (int, RGBColor, RGBA):
        raise TypeError(f"unsupported pixel type {target!r}")
    data, width, height, depth = read_raw(filename)
    if depth == 1:
        pixels: Iterable[Any] = list(data)
        kind: type = int
    elif depth == 3:
        pixels = [RGBColor(*c) for c in _chunks(data, 3)]
        kind = RGBColor
    elif depth == 4:
        pixels = [RGBA(*c) for c in _chunks(data, 4)]
        kind = RGBA
    else:
        raise ImageIOError(f"cannot convert a {depth}-channel image")
    image = Image.from_pixels(width, height, pixels)
    return image if kind is target else convert_image(image, target)


def _image_bytes(image: Image) -> Tuple[bytes, int]:
    depth = image.depth
    if depth == 1:
        return bytes(image), 1
    return bytes(channel for pixel in image for channel in pixel), depth


def write_image(filename: "str | os.PathLike[str]", image: Image) -> None:
    """Write an image in the format given by the file extension."""
    data, depth = _image_bytes(image)
    write_raw(filename, data, image.width, image.height, depth)


def write_jpg(filename: "str | os.PathLike[str]", image: Image,
              quality: int = _DEFAULT_JPG_QUALITY) -> None:
    """Write an image as JPEG, whatever the file extension."""
    data, depth = _image_bytes(image)
    _write_jpg_raw(os.fspath(filename), data, image.width, image.height, depth, quality)