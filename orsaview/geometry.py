"""Rectangular region of an image, written ``wxh+x+y``."""

from __future__ import annotations

import re
from dataclasses import dataclass

_GEOMETRY_RE = re.compile(
    r"\s*([+-]?\d+)\s*x\s*([+-]?\d+)\s*\+\s*([+-]?\d+)\s*\+\s*([+-]?\d+)\s*"
)


@dataclass
class Geometry:
    """Region [x0, x1) x [y0, y1) of an image."""

    x0: int = 0
    x1: int = 0
    y0: int = 0
    y1: int = 0

    @classmethod
    def parse(cls, text: str) -> "Geometry":
        """Read ``wxh+x0+y0``, for example ``100x100+0+0``."""
        found = _GEOMETRY_RE.fullmatch(text)
        if found is None:
            raise ValueError(f"invalid geometry {text!r}, expected WxH+X+Y")
        width, height, x0, y0 = (int(group) for group in found.groups())
        return cls(x0=x0, x1=x0 + width, y0=y0, y1=y0 + height)

    def inside(self, x: float, y: float) -> bool:
        """True if (x, y), truncated to integers, lies in the region."""
        ix, iy = int(x), int(y)
        return self.x0 <= ix < self.x1 and self.y0 <= iy < self.y1

    def __str__(self) -> str:
        return f"{self.x1 - self.x0}x{self.y1 - self.y0}+{self.x0}+{self.y0}"