"""Homographic transforms and image warping by backward mapping."""

from __future__ import annotations

from typing import Any, Optional, Tuple

import numpy as np

from orsaview.image import Image
from orsaview.pixels import RGBA, RGBColor
from orsaview.rect import Rect
from orsaview.sample import sample_linear

_INT_MAX = 2**31 - 1
_INT_MIN = -(2**31)


def transform_h(matrix: Any, x: float, y: float) -> Optional[Tuple[float, float]]:
    """Apply the 3x3 homography ``matrix`` to (x, y).

    Returns the transformed point, or None if it goes to infinity.
    """
    h = np.asarray(matrix, dtype=float)
    if h.shape != (3, 3):
        raise ValueError(f"expected a 3x3 matrix, got shape {h.shape}")
    vx, vy, vw = h @ np.array([x, y, 1.0])
    if vw == 0:
        return None
    return float(vx / vw), float(vy / vw)


def intersection_box(w1: int, h1: int, w2: int, h2: int, homography: Any) -> Optional[Rect]:
    """Common area of image 1 warped by ``homography`` and image 2.

    Returns the intersection rectangle in image 2 coordinates, or None if empty.
    """
    corners = ((0, 0), (w1 - 1, 0), (w1 - 1, h1 - 1), (0, h1 - 1))
    warped = Rect(_INT_MAX, _INT_MAX, _INT_MIN, _INT_MIN)
    for x, y in corners:
        point = transform_h(homography, x, y)
        if point is not None:
            warped.grow_to(*point)
    return Rect(0, 0, w2 - 1, h2 - 1).intersection(warped)


def _source_coords(homography: Any, source: Image, out: Image):
    """Source coordinates of every output pixel, and where they are inside ``source``."""
    inverse = np.linalg.inv(np.asarray(homography, dtype=float))
    rows, cols = np.mgrid[0:out.height, 0:out.width]
    points = np.stack([cols.ravel(), rows.ravel(), np.ones(rows.size)]).astype(float)
    mapped = inverse @ points
    w = mapped[2]
    valid = w != 0
    with np.errstate(divide="ignore", invalid="ignore"):
        xs = np.where(valid, mapped[0] / np.where(valid, w, 1.0), -1.0)
        ys = np.where(valid, mapped[1] / np.where(valid, w, 1.0), -1.0)
    inside = valid & (xs >= 0) & (xs < source.width) & (ys >= 0) & (ys < source.height)
    return xs.astype(np.float32), ys.astype(np.float32), inside


def _sample(image: Image, ys, xs, index: int) -> Any:
    return sample_linear(image, float(ys[index]), float(xs[index]))


def warp(image: Image, homography: Any, out: Image) -> None:
    """Warp ``image`` by ``homography`` into ``out`` with bilinear sampling.

    Output pixels whose antecedent falls outside ``image`` are left unchanged.
    """
    xs, ys, inside = _source_coords(homography, image, out)
    for index in np.flatnonzero(inside):
        j, i = divmod(int(index), out.width)
        out[j, i] = _sample(image, ys, xs, index)


def _blend(a: Any, b: Any) -> Any:
    if isinstance(a, RGBColor):
        return a.scaled(0.5) + b.scaled(0.5)
    if isinstance(a, RGBA):
        return RGBA(*(int(p * 0.5 + q * 0.5) for p, q in zip(a, b)))
    if isinstance(a, float):
        return a * 0.5 + b * 0.5
    return int(a * 0.5 + b * 0.5)


def warp_pair(image_a: Image, homography_a: Any, image_b: Image, homography_b: Any,
              out: Image) -> None:
    """Warp two images into ``out``, averaging them where both contribute."""
    xa, ya, in_a = _source_coords(homography_a, image_a, out)
    xb, yb, in_b = _source_coords(homography_b, image_b, out)
    for index in np.flatnonzero(in_a | in_b):
        j, i = divmod(int(index), out.width)
        if in_a[index] and in_b[index]:
            out[j, i] = _blend(_sample(image_a, ya, xa, index),
                               _sample(image_b, yb, xb, index))
        elif in_a[index]:
            out[j, i] = _sample(image_a, ya, xa, index)
        else:
            out[j, i] = _sample(image_b, yb, xb, index)