"""Two-dimensional row-major image container."""

from __future__ import annotations

import operator
from typing import Any, Iterable, Iterator, Tuple

from orsaview.pixels import RGBA, RGBColor, convert_pixel


class Image:
    """A width x height grid of pixels, accessed as ``image[y, x]``."""

    __slots__ = ("_width", "_height", "_data")

    def __init__(self, width: int = 0, height: int = 0, value: Any = 0) -> None:
        width = operator.index(width)
        height = operator.index(height)
        if width < 0 or height < 0:
            raise ValueError(f"invalid image size {width}x{height}")
        self._width = width
        self._height = height
        self._data = [value] * (width * height)

    @classmethod
    def from_pixels(cls, width: int, height: int, pixels: Iterable[Any]) -> "Image":
        """Build an image from pixels given in row-major order."""
        image = cls(width, height)
        data = list(pixels)
        if len(data) != width * height:
            raise ValueError(
                f"expected {width * height} pixels for {width}x{height}, got {len(data)}"
            )
        image._data = data
        return image

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def depth(self) -> int:
        """Number of byte channels of the pixel kind."""
        if not self._data:
            return 1
        first = self._data[0]
        if isinstance(first, RGBA):
            return 4
        if isinstance(first, RGBColor):
            return 3
        return 1

    def contains(self, y: float, x: float) -> bool:
        """True if point (x, y) lies inside the image."""
        return 0 <= x < self._width and 0 <= y < self._height

    def fill(self, value: Any) -> None:
        """Set every pixel to ``value``."""
        self._data = [value] * (self._width * self._height)

    def copy(self) -> "Image":
        return Image.from_pixels(self._width, self._height, self._data)

    def _offset(self, key: Tuple[int, int]) -> int:
        try:
            y, x = key
        except (TypeError, ValueError):
            raise TypeError("image index must be a (y, x) pair") from None
        y = operator.index(y)
        x = operator.index(x)
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"pixel ({y}, {x}) outside {self._width}x{self._height} image")
        return y * self._width + x

    def __getitem__(self, key: Tuple[int, int]) -> Any:
        return self._data[self._offset(key)]

    def __setitem__(self, key: Tuple[int, int], value: Any) -> None:
        self._data[self._offset(key)] = value

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Image):
            return NotImplemented
        return (
            self._width == other._width
            and self._height == other._height
            and self._data == other._data
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Image(width={self._width}, height={self._height})"

    def __str__(self) -> str:
        parts = [f"{self._width} {self._height}"]
        for row in range(self._height):
            start = row * self._width
            pixels = self._data[start:start + self._width]
            parts.append("".join(f"{pixel} " for pixel in pixels) + "\n")
        return "".join(parts)


def convert_image(image: Image, target: type) -> Image:
    """Return a copy of ``image`` with every pixel converted to ``target``."""
    return Image.from_pixels(
        image.width, image.height, (convert_pixel(pixel, target) for pixel in image)
    )


def crop(image: Image, x0: int, y0: int, width: int, height: int) -> Image:
    """Extract the width x height block whose top-left corner is (x0, y0)."""
    return Image.from_pixels(
        width,
        height,
        (image[y0 + i, x0 + j] for i in range(height) for j in range(width)),
    )