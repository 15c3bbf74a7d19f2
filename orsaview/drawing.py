"""Raster drawing of lines, circles and ellipses into images."""

from __future__ import annotations

import math
from typing import Any

from orsaview.image import Image


def put_pixel(image: Image, y: int, x: int, color: Any) -> None:
    """Set pixel (x, y) to ``color`` if it lies inside the image."""
    if image.contains(float(y), float(x)):
        image[y, x] = color


def _put_rotated(image: Image, xc: int, yc: int, x: int, y: int,
                 rot: tuple, color: Any) -> None:
    c0, c1, c2, c3 = rot
    for sx, sy in ((1, 1), (1, -1), (-1, -1), (-1, 1)):
        rot_x = int(sx * c0 * x + sy * c1 * y)
        rot_y = int(sx * c2 * x + sy * c3 * y)
        put_pixel(image, yc + rot_y, xc + rot_x, color)


def draw_ellipse(xc: int, yc: int, radius_a: int, radius_b: int, color: Any,
                 image: Image, angle: float = 0.0) -> None:
    """Draw an ellipse of center (xc, yc) rotated by ``angle`` (Bresenham)."""
    a = radius_a
    b = radius_b
    rot = (math.cos(angle), math.sin(angle), -math.sin(angle), math.cos(angle))
    c0, c1, c2, c3 = rot

    x = 0
    y = b
    d1 = float(b * b - a * a * b + (a * a) // 4)

    put_pixel(image, yc + math.ceil(c2 * x + c3 * y), xc + math.ceil(c0 * x + c1 * y), color)
    for sx, sy in ((1, -1), (-1, -1), (-1, 1)):
        rot_x = int(sx * c0 * x + sy * c1 * y)
        rot_y = int(sx * c2 * x + sy * c3 * y)
        put_pixel(image, yc + rot_y, xc + rot_x, color)

    while a * a * (y - 0.5) > b * b * (x + 1):
        if d1 < 0:
            d1 += b * b * (2 * x + 3)
            x += 1
        else:
            d1 += b * b * (2 * x + 3) + a * a * (-2 * y + 2)
            x += 1
            y -= 1
        _put_rotated(image, xc, yc, x, y, rot, color)

    d2 = b * b * (x + 0.5) * (x + 0.5) + a * a * (y - 1) * (y - 1) - a * a * b * b
    while y > 0:
        if d2 < 0:
            d2 += b * b * (2 * x + 2) + a * a * (-2 * y + 3)
            y -= 1
            x += 1
        else:
            d2 += a * a * (-2 * y + 3)
            y -= 1
        _put_rotated(image, xc, yc, x, y, rot, color)


def draw_circle(x: int, y: int, radius: int, color: Any, image: Image) -> None:
    """Draw a circle of center (x, y) with the Andres algorithm."""
    if not (image.contains(float(y + radius), float(x + radius))
            or image.contains(float(y + radius), float(x - radius))
            or image.contains(float(y - radius), float(x + radius))
            or image.contains(float(y - radius), float(x - radius))):
        return
    x1 = 0
    y1 = radius
    d = radius - 1
    while y1 >= x1:
        for py, px in ((y1, x1), (x1, y1), (y1, -x1), (x1, -y1),
                       (-y1, x1), (-x1, y1), (-y1, -x1), (-x1, -y1)):
            put_pixel(image, py + y, px + x, color)
        if d >= 2 * x1:
            d = d - 2 * x1 - 1
            x1 += 1
        elif d <= 2 * (radius - y1):
            d = d + 2 * y1 - 1
            y1 -= 1
        else:
            d = d + 2 * (y1 - x1 - 1)
            y1 -= 1
            x1 += 1


def draw_line(xa: int, ya: int, xb: int, yb: int, color: Any, image: Image) -> None:
    """Draw segment (xa, ya)-(xb, yb), clipped to the image (Bresenham)."""
    if not image.contains(float(ya), float(xa)) or not image.contains(float(yb), float(xb)):
        width = image.width
        height = image.height
        points = [[float(xa), float(ya)], [float(xb), float(yb)]]
        left, right = (points[0], points[1]) if xa < xb else (points[1], points[0])
        up, down = (points[0], points[1]) if ya < yb else (points[1], points[0])

        if right[0] < 0 or left[0] >= width:
            return
        if left[0] < 0:
            left[1] -= left[0] * (right[1] - left[1]) / (right[0] - left[0])
            left[0] = 0.0
        if right[0] >= width:
            right[1] -= (right[0] - width) * (right[1] - left[1]) / (right[0] - left[0])
            right[0] = float(width) - 1
        if down[1] < 0 or up[1] >= height:
            return
        if up[1] < 0:
            up[0] -= up[1] * (down[0] - up[0]) / (down[1] - up[1])
            up[1] = 0.0
        if down[1] >= height:
            down[0] -= (down[1] - height) * (down[0] - up[0]) / (down[1] - up[1])
            down[1] = float(height) - 1

        xa = int(left[0])
        xb = int(right[0])
        ya = int(left[1])
        yb = int(right[1])

    if ya <= yb:
        xbas, ybas, xhaut, yhaut = xa, ya, xb, yb
    else:
        xbas, ybas, xhaut, yhaut = xb, yb, xa, ya

    dx = xhaut - xbas
    dy = yhaut - ybas
    if dx > 0:
        incr_x = 1
    else:
        incr_x = -1
        dx = -dx
    incr_y = 1 if dy > 0 else -1

    x, y = xbas, ybas
    if dx >= dy:
        dp = 2 * dy - dx
        south = 2 * dy
        north = 2 * (dy - dx)
        while x != xhaut:
            put_pixel(image, y, x, color)
            x += incr_x
            if dp <= 0:
                dp += south
            else:
                dp += north
                y += incr_y
    else:
        dp = 2 * dx - dy
        south = 2 * dx
        north = 2 * (dx - dy)
        while y < yhaut:
            put_pixel(image, y, x, color)
            y += incr_y
            if dp <= 0:
                dp += south
            else:
                dp += north
                x += incr_x
    put_pixel(image, y, x, color)