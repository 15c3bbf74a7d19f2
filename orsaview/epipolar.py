"""Drawing of epipolar lines to show a fundamental matrix estimation."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from orsaview.drawing import draw_line
from orsaview.graphical_output import (
    COL_IN,
    COL_IN_LINK,
    COL_OUT,
    COL_OUT_LINK,
    complement,
    concat_images,
    draw_match,
)
from orsaview.image import Image
from orsaview.image_io import write_image
from orsaview.pixels import YELLOW
from orsaview.rect import Rect
from orsaview.warping import transform_h

COL_EPI = YELLOW
COL_EPI_DIST = YELLOW  # Segment from a point to its epipolar line

_DIST_MIN_EPIPOLE = 2.0


@dataclass(frozen=True)
class _Correspondence:
    x1: float
    y1: float
    x2: float
    y2: float


def _inverse(match: Any) -> _Correspondence:
    """The same correspondence with both images swapped."""
    return _Correspondence(match.x2, match.y2, match.x1, match.y1)


def _as_matrix(matrix: Any) -> np.ndarray:
    array = np.asarray(matrix, dtype=float)
    if array.shape != (3, 3):
        raise ValueError(f"expected a 3x3 matrix, got shape {array.shape}")
    return array


def epipolar_line(fundamental: Any, match: Any) -> np.ndarray:
    """Epipolar line (a, b, c) of (match.x1, match.y1), with a*a + b*b = 1.

    A zero vector is returned when the point is too close to an epipole
    for the line to be meaningful.
    """
    f = _as_matrix(fundamental)
    x, y = float(match.x1), float(match.y1)
    for row, next_row in zip(f, np.roll(f, -1, axis=0)):
        p = np.cross(row, next_row)
        if (p[2] * x - p[0]) ** 2 + (p[2] * y - p[1]) ** 2 < (_DIST_MIN_EPIPOLE * p[2]) ** 2:
            print(
                "Warning: not drawing line close to epipole "
                f"{match.x1} {match.y1} {match.x2} {match.y2}",
                file=sys.stderr,
            )
            return np.zeros(3)
    line = f @ np.array([x, y, 1.0])
    norm = math.hypot(line[0], line[1])
    if norm == 0:
        return np.zeros(3)
    return line / norm


def project_on_line(x: float, y: float, line: Sequence[float]) -> Tuple[float, float]:
    """Orthogonal projection of (x, y) on a normalized line (a, b, c)."""
    a, b, c = (float(v) for v in line)
    distance = a * x + b * y + c
    return x - distance * a, y - distance * b


def _int_point(transform: Any, x: float, y: float) -> Optional[Tuple[int, int]]:
    point = transform_h(transform, x, y)
    if point is None:
        return None
    return int(point[0]), int(point[1])


def _draw_segment(transform: Any, start: Tuple[float, float], end: Tuple[float, float],
                  color: Any, image: Image) -> None:
    p = _int_point(transform, *start)
    q = _int_point(transform, *end)
    if p is not None and q is not None:
        draw_line(p[0], p[1], q[0], q[1], color, image)


def _projection(fundamental: Any, match: Any, transform: Any, image: Image,
                color_dist: Any) -> Optional[Tuple[np.ndarray, Tuple[float, float]]]:
    line = epipolar_line(fundamental, match)
    if not line.any():
        return None
    projected = project_on_line(float(match.x2), float(match.y2), line)
    if color_dist is not None:
        _draw_segment(transform, (float(match.x2), float(match.y2)), projected,
                      color_dist, image)
    return line, projected


def draw_epi_segment(fundamental: Any, match: Any, transform: Any, half_length: float,
                     image: Image, color: Any, color_dist: Any = None) -> bool:
    """Draw a piece of the epipolar line of (match.x1, match.y1).

    The piece is centred on the projection of (match.x2, match.y2) on the
    line. Coordinates are mapped by ``transform`` before drawing. If
    ``color_dist`` is given, the segment from the point to its projection is
    drawn too. Returns False when no line could be drawn.
    """
    found = _projection(fundamental, match, transform, image, color_dist)
    if found is None:
        return False
    line, (xp, yp) = found
    a, b = float(line[0]), float(line[1])
    start = (xp - b * half_length, yp + a * half_length)
    end = (xp + b * half_length, yp - a * half_length)
    _draw_segment(transform, start, end, color, image)
    return True


def draw_epi_clipped(fundamental: Any, match: Any, transform: Any, rect: Rect,
                     image: Image, color: Any, color_dist: Any = None) -> bool:
    """Draw the epipolar line of (match.x1, match.y1) clipped inside ``rect``.

    Coordinates are mapped by ``transform`` before drawing; ``rect`` itself
    is left unchanged. Returns False when no line could be computed.
    """
    found = _projection(fundamental, match, transform, image, color_dist)
    if found is None:
        return False
    line, _ = found
    clip = Rect(rect.left, rect.top, rect.right, rect.bottom)
    if clip.clip_line(float(line[0]), float(line[1]), float(line[2])):
        _draw_segment(transform, (clip.left, clip.top), (clip.right, clip.bottom),
                      color, image)
    return True


def _diagonal(image: Image) -> float:
    return math.hypot(image.width, image.height)


def _checked_indices(matches: Sequence[Any], indices: Iterable[int]) -> List[int]:
    checked = list(indices)
    for index in checked:
        if not 0 <= index < len(matches):
            raise IndexError(f"match index {index} out of range 0..{len(matches) - 1}")
    return checked


def fundamental_graphical_output(image1: Image, image2: Image, matches: Sequence[Any],
                                 inliers: Iterable[int], fundamental: Optional[Any],
                                 file_in: Optional[str], file_out: Optional[str],
                                 file_epi: Optional[str]) -> None:
    """Write images showing a fundamental matrix estimation.

    ``file_in`` shows inlier links, ``file_out`` outlier links with their
    epipolar lines, and ``file_epi`` all matches with small epipolar lines
    for inliers. Any of the file names may be None. ``fundamental`` is None
    when the estimation failed.
    """
    inliers = _checked_indices(matches, inliers)
    outliers = complement(len(matches), inliers)
    f = None if fundamental is None else _as_matrix(fundamental)
    image, t1, t2 = concat_images(image1, image2)

    if file_in:
        in_image = image.copy()
        for index in inliers:
            draw_match(matches[index], COL_IN_LINK, in_image, t1, t2, True)
        write_image(file_in, in_image)

    if file_out:
        out_image = image.copy()
        if f is not None:
            rect1 = Rect(0, 0, image1.width, image1.height)
            rect2 = Rect(0, 0, image2.width, image2.height)
            for index in outliers:
                match = matches[index]
                draw_epi_clipped(f, _inverse(match), t1, rect1, out_image,
                                 COL_EPI, COL_EPI_DIST)
                draw_epi_clipped(f.T, match, t2, rect2, out_image,
                                 COL_EPI, COL_EPI_DIST)
        for index in outliers:
            draw_match(matches[index], COL_OUT_LINK, out_image, t1, t2, True)
        write_image(file_out, out_image)

    if file_epi:
        margin1 = _diagonal(image1) * 0.02
        margin2 = _diagonal(image2) * 0.02
        for index in inliers:
            draw_match(matches[index], COL_IN, image, t1, t2, False)
        for index in outliers:
            draw_match(matches[index], COL_OUT, image, t1, t2, False)
        if f is not None:
            for index in inliers:
                match = matches[index]
                draw_epi_segment(f, _inverse(match), t1, margin1, image, COL_EPI)
                draw_epi_segment(f.T, match, t2, margin2, image, COL_EPI)
        write_image(file_epi, image)