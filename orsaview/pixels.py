"""Pixel types (RGB, RGBA) and conversions between pixel kinds.

A gray pixel is a plain ``int`` in 0..255. A floating-point pixel is a ``float``.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Iterator, Union

Number = Union[int, float]


def _to_byte(value: Number) -> int:
    """Truncate a number and wrap it into 0..255, like an unsigned char cast."""
    return int(value) % 256


def _checked_byte(name: str, value) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} component must be an integer, got {value!r}")
    try:
        number = operator.index(value)
    except TypeError:
        raise ValueError(f"{name} component must be an integer, got {value!r}") from None
    if not 0 <= number <= 255:
        raise ValueError(f"{name} component {number} is outside 0..255")
    return number


@dataclass(frozen=True)
class RGBColor:
    """An 8-bit RGB color."""

    r: int = 0
    g: int = 0
    b: int = 0

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            object.__setattr__(self, name, _checked_byte(name, getattr(self, name)))

    def __iter__(self) -> Iterator[int]:
        yield self.r
        yield self.g
        yield self.b

    def __str__(self) -> str:
        return f"{self.r} {self.g} {self.b}"

    def gray(self) -> int:
        """Gray level of the color."""
        return int(0.3 * self.r + 0.59 * self.g + 0.11 * self.b)

    def scaled(self, factor: Number) -> "RGBColor":
        """Multiply each component by ``factor``, truncating to a byte."""
        return RGBColor(*(_to_byte(c * factor) for c in self))

    def __mul__(self, factor: Number) -> "RGBColor":
        if not isinstance(factor, (int, float)):
            return NotImplemented
        return self.scaled(factor)

    def __truediv__(self, divisor: Number) -> "RGBColor":
        if not isinstance(divisor, (int, float)):
            return NotImplemented
        return RGBColor(*(_to_byte(c / divisor) for c in self))

    def __add__(self, other) -> "RGBColor":
        if isinstance(other, RGBColor):
            return RGBColor(*(_to_byte(a + b) for a, b in zip(self, other)))
        if isinstance(other, (int, float)) and not isinstance(other, bool):
            return RGBColor(*(_to_byte(c + other) for c in self))
        return NotImplemented


@dataclass(frozen=True)
class RGBA:
    """An 8-bit RGB color with alpha channel (opaque by default)."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            object.__setattr__(self, name, _checked_byte(name, getattr(self, name)))

    def __iter__(self) -> Iterator[int]:
        yield self.r
        yield self.g
        yield self.b
        yield self.a

    def __str__(self) -> str:
        return f"{self.r} {self.g} {self.b} {self.a}"

    @classmethod
    def from_rgb(cls, color: RGBColor, alpha: int = 255) -> "RGBA":
        """Build from an RGB color and an alpha value."""
        return cls(color.r, color.g, color.b, alpha)


WHITE = RGBColor(255, 255, 255)
BLACK = RGBColor(0, 0, 0)
BLUE = RGBColor(0, 0, 255)
RED = RGBColor(255, 0, 0)
GREEN = RGBColor(0, 255, 0)
YELLOW = RGBColor(255, 255, 0)
CYAN = RGBColor(0, 255, 255)
MAGENTA = RGBColor(255, 0, 255)


def _luminance(color: RGBColor) -> int:
    return int(0.2127 * color.r + 0.7152 * color.g + 0.0722 * color.b)


def convert_pixel(value, target: type):
    """Convert a pixel to the pixel kind ``target`` (int, float, RGBColor or RGBA)."""
    if target is RGBColor:
        if isinstance(value, RGBColor):
            return value
        if isinstance(value, RGBA):
            return RGBColor(value.r, value.g, value.b)
        level = _to_byte(value)
        return RGBColor(level, level, level)
    if target is RGBA:
        if isinstance(value, RGBA):
            return value
        if isinstance(value, RGBColor):
            return RGBA.from_rgb(value)
        level = _to_byte(value)
        return RGBA(level, level, level, 255)
    if target is int:
        if isinstance(value, RGBColor):
            return _luminance(value)
        if isinstance(value, RGBA):
            return _luminance(RGBColor(value.r, value.g, value.b))
        return int(value)
    if target is float:
        if isinstance(value, RGBColor):
            return float(value.gray())
        if isinstance(value, RGBA):
            return float(RGBColor(value.r, value.g, value.b).gray())
        return float(value)
    raise TypeError(f"unsupported pixel type {target!r}")