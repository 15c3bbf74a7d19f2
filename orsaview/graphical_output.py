"""Side-by-side display of matches and homographic registration output."""

from __future__ import annotations

import math
from typing import Any, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from orsaview.drawing import draw_circle, draw_line
from orsaview.image import Image, convert_image
from orsaview.image_io import write_image
from orsaview.pixels import BLUE, GREEN, RED, WHITE, YELLOW, RGBColor
from orsaview.rect import Rect
from orsaview.warping import transform_h, warp, warp_pair

COL_IN = GREEN
COL_IN_LINK = COL_IN
COL_OUT = RED
COL_OUT_LINK = COL_OUT
COL_ERRH = YELLOW


def complement(size: int, indices: Iterable[int]) -> List[int]:
    """Sorted values of 0..size-1 that are not in ``indices``."""
    excluded = set(indices)
    return [value for value in range(size) if value not in excluded]


def zoom_translation(zoom: float, dx: float, dy: float) -> np.ndarray:
    """3x3 matrix of a zoom followed by a translation."""
    matrix = np.eye(3)
    matrix[0, 0] = matrix[1, 1] = zoom
    matrix[0, 2] = dx
    matrix[1, 2] = dy
    return matrix


def translation(dx: float, dy: float) -> np.ndarray:
    """3x3 translation matrix."""
    return zoom_translation(1.0, dx, dy)


def concat_images(image1: Image, image2: Image, horizontal_layout: bool = True,
                  dim: int = 0) -> Tuple[Image, np.ndarray, np.ndarray]:
    """Place two gray images side by side (or one above the other).

    ``dim`` is the output size along the layout direction; 0 or less keeps
    the larger image size. Returns the RGB concatenation and the transforms
    from each image to it.
    """
    w1, h1 = image1.width, image1.height
    w2, h2 = image2.width, image2.height
    w, h = max(w1, w2), max(h1, h2)
    if dim > 0:
        if horizontal_layout:
            w = dim
        else:
            h = dim
    total = w1 + w2 if horizontal_layout else h1 + h2
    if total == 0:
        raise ValueError("cannot concatenate empty images")
    zoom = float(np.float32(w if horizontal_layout else h) / np.float32(total))
    wc, hc = w, h
    if horizontal_layout:
        hc = int(zoom * h)
        t1 = zoom_translation(zoom, 0, (hc - h1 * zoom) / 2)
        t2 = zoom_translation(zoom, w1 * zoom, (hc - h2 * zoom) / 2)
    else:
        wc = int(zoom * w)
        t1 = zoom_translation(zoom, (wc - w1 * zoom) / 2, 0)
        t2 = zoom_translation(zoom, (wc - w2 * zoom) / 2, h1 * zoom)

    concat = Image(wc, hc, 255)
    warp_pair(image1, t1, image2, t2, concat)

    start = transform_h(t2, 0.0, 0.0)
    end = transform_h(t2, 0.0, float(image2.height))
    result = convert_image(concat, RGBColor)
    if start is not None and end is not None:
        draw_line(int(start[0]), int(start[1]), int(end[0]), int(end[1]), BLUE, result)
    return result, t1, t2


def draw_match(match: Any, color: Any, image: Image, t1: Any, t2: Any,
               link: bool = True) -> None:
    """Draw a match as a segment (``link``) or as two small circles.

    ``match`` has attributes x1, y1 (first image) and x2, y2 (second image).
    """
    p1 = transform_h(t1, match.x1, match.y1)
    p2 = transform_h(t2, match.x2, match.y2)
    if p1 is None or p2 is None:
        return
    x1, y1 = int(p1[0]), int(p1[1])
    x2, y2 = int(p2[0]), int(p2[1])
    if link:
        draw_line(x1, y1, x2, y2, color, image)
    else:
        draw_circle(x1, y1, 2, color, image)
        draw_circle(x2, y2, 2, color, image)


def _checked(matches: Sequence[Any], indices: Iterable[int]) -> List[int]:
    checked = list(indices)
    for index in checked:
        if not 0 <= index < len(matches):
            raise IndexError(f"match index {index} out of range 0..{len(matches) - 1}")
    return checked


def homography_matches_output(image1: Image, image2: Image, matches: Sequence[Any],
                              inliers: Iterable[int], homography: Optional[Any],
                              file_in: str, file_out: str) -> None:
    """Write images of inlier and outlier matches to ``file_in`` and ``file_out``.

    For outliers, the error from the homography prediction to the observed
    point is drawn too, unless ``homography`` is None.
    """
    inliers = _checked(matches, inliers)
    in_image, t1, t2 = concat_images(image1, image2)
    out_image = in_image.copy()
    outliers = complement(len(matches), inliers)

    if homography is not None:
        predicted = t2 @ np.asarray(homography, dtype=float)
        for index in outliers:
            draw_match(matches[index], COL_ERRH, out_image, predicted, t2)
    for index in outliers:
        draw_match(matches[index], COL_OUT_LINK, out_image, t1, t2)
    for index in inliers:
        draw_match(matches[index], COL_IN_LINK, in_image, t1, t2)

    write_image(file_in, in_image)
    write_image(file_out, out_image)


def homography_registration_output(image1: Image, image2: Image, homography: Any,
                                   rect: Rect, file_mosaic: Optional[str],
                                   file_reg1: Optional[str] = None,
                                   file_reg2: Optional[str] = None) -> None:
    """Write the mosaic and the registered images, centred on ``rect``."""
    xc = math.trunc((rect.left + rect.right) / 2)
    yc = math.trunc((rect.top + rect.bottom) / 2)
    width = max(image1.width, image2.width)
    height = max(image1.height, image2.height)
    shift = translation(width // 2 - xc, height // 2 - yc)
    warped = shift @ np.asarray(homography, dtype=float)

    if file_mosaic:
        print("-- Render Mosaic -- ")
        mosaic = Image(width, height, WHITE)
        warp_pair(image1, warped, image2, shift, mosaic)
        write_image(file_mosaic, mosaic)
    if file_reg1:
        print("-- Render Mosaic - Image 1 -- ")
        reg1 = Image(width, height, WHITE)
        warp(image1, warped, reg1)
        write_image(file_reg1, reg1)
    if file_reg2:
        print("-- Render Mosaic - Image 2 -- ")
        reg2 = Image(width, height, WHITE)
        warp(image2, shift, reg2)
        write_image(file_reg2, reg2)