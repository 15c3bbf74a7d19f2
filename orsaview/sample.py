"""Nearest-neighbour and bilinear sampling of images."""

from __future__ import annotations

import math
from typing import Any, Tuple

from orsaview.image import Image
from orsaview.pixels import RGBA, RGBColor


def _round_half_away(value: float) -> int:
    magnitude = int(math.floor(abs(value) + 0.5))
    return magnitude if value >= 0 else -magnitude


def sample_nearest(image: Image, y: float, x: float) -> Any:
    """Pixel nearest to (x, y)."""
    return image[_round_half_away(y), _round_half_away(x)]


def _init_axis(position: float, size: int) -> Tuple[int, int, float, float]:
    index = int(position)
    if index < 0:
        return 0, 0, 1.0, 0.0
    if index > size - 2:
        return size - 1, size - 1, 1.0, 0.0
    weight1 = index + 1 - position
    return index, index + 1, weight1, 1.0 - weight1


def sample_linear(image: Image, y: float, x: float) -> Any:
    """Bilinear interpolation at (x, y), clamped at the image borders."""
    y1, y2, dy1, dy2 = _init_axis(y, image.height)
    x1, x2, dx1, dx2 = _init_axis(x, image.width)
    corners = (image[y1, x1], image[y1, x2], image[y2, x1], image[y2, x2])

    def blend(a, b, c, d):
        return (a * dx1 + b * dx2) * dy1 + (c * dx1 + d * dx2) * dy2

    first = corners[0]
    if isinstance(first, RGBColor):
        return RGBColor(*(int(blend(*channel)) for channel in zip(*corners)))
    if isinstance(first, RGBA):
        return RGBA(*(int(blend(*channel)) for channel in zip(*corners)))
    if isinstance(first, float):
        return float(blend(*corners))
    if isinstance(first, int):
        return int(blend(*corners))
    raise TypeError(f"cannot interpolate pixels of type {type(first).__name__}")