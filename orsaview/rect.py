"""Integer image rectangle."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional


@dataclass
class Rect:
    """Rectangle with integer bounds ``left``, ``top``, ``right``, ``bottom``."""

    left: int = 0
    top: int = 0
    right: int = 0
    bottom: int = 0

    def grow_to(self, x: float, y: float) -> None:
        """Grow the rectangle so that it includes (x, y)."""
        if x < self.left:
            self.left = math.floor(x)
        if x > self.right:
            self.right = math.ceil(x)
        if y < self.top:
            self.top = math.floor(y)
        if y > self.bottom:
            self.bottom = math.ceil(y)

    def intersects(self, other: "Rect") -> bool:
        """True if ``other`` overlaps this rectangle."""
        return not (self.left > other.right or self.right < other.left
                    or self.top > other.bottom or self.bottom < other.top)

    def intersection(self, other: "Rect") -> Optional["Rect"]:
        """Common part of both rectangles, or None if they do not meet."""
        if not self.intersects(other):
            return None
        return Rect(max(self.left, other.left), max(self.top, other.top),
                    min(self.right, other.right), min(self.bottom, other.bottom))

    def clip_line(self, a: float, b: float, c: float) -> bool:
        """Clip line aX+bY+c=0 to the rectangle.

        On success the rectangle becomes the segment with endpoints
        (left, top) and (right, bottom), no longer sorted, and True is returned.
        """
        left, top, right, bottom = self.left, self.top, self.right, self.bottom
        top_left = a * left + b * top + c >= 0
        top_right = a * right + b * top + c >= 0
        bottom_left = a * left + b * bottom + c >= 0
        bottom_right = a * right + b * bottom + c >= 0

        points = []
        if top_left != bottom_left:
            points.append((left, -(a * left + c) / b))
        if top_right != bottom_right:
            points.append((right, -(a * right + c) / b))
        if top_left != top_right and len(points) < 2:
            points.append((-(b * top + c) / a, top))
        if bottom_left != bottom_right and len(points) < 2:
            points.append((-(b * bottom + c) / a, bottom))
        if len(points) != 2:
            return False
        (x0, y0), (x1, y1) = points
        self.top = int(y0)
        self.bottom = int(y1)
        self.left = int(x0)
        self.right = int(x1)
        return True

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top