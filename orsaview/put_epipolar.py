"""Draw a point, or its epipolar line, in an image with transparency."""

from __future__ import annotations

import re
import sys
from typing import Optional, Sequence

import numpy as np

from orsaview.cmdline import CmdLine, CmdLineError, make_option, make_switch
from orsaview.drawing import draw_circle, draw_line
from orsaview.image_io import ImageIOError, read_image, write_image
from orsaview.pixels import RED, RGBA
from orsaview.rect import Rect

REDA = RGBA.from_rgb(RED)

_INTEGER_RE = re.compile(r"\s*[+-]?\d+")


def read_matrix(path: str) -> np.ndarray:
    """Read a 3x3 matrix as nine whitespace-separated numbers, row by row."""
    with open(path, encoding="utf-8") as stream:
        tokens = stream.read().split()
    if len(tokens) < 9:
        raise ValueError(f"{path}: expected 9 numbers, found {len(tokens)}")
    try:
        values = [float(token) for token in tokens[:9]]
    except ValueError as exc:
        raise ValueError(f"{path}: {exc}") from None
    return np.array(values).reshape(3, 3)


def _read_int(text: str) -> Optional[int]:
    if _INTEGER_RE.fullmatch(text) is None:
        return None
    return int(text)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command entry point; returns the exit status."""
    if argv is None:
        argv = sys.argv[1:]
    cmd = CmdLine()
    cmd.add(make_switch("t", "transpose"))
    cmd.add(make_option("f", "", "fmatrix"))
    try:
        args = cmd.process(argv)
    except CmdLineError as exc:
        print(exc, file=sys.stderr)
        return 1
    if len(args) not in (3, 4):
        print("Usage: put_epipolar [-f|--fmatrix fileF.txt [-t|--transpose]]"
              " x y img [imgOut]", file=sys.stderr)
        return 1

    coords = []
    for text in args[:2]:
        value = _read_int(text)
        if value is None:
            print(f"Unable to read {text} as integer", file=sys.stderr)
            return 1
        coords.append(value)
    x, y = coords

    try:
        image = read_image(args[2], RGBA)
    except (ImageIOError, OSError):
        print(f"Error reading image file {args[2]}", file=sys.stderr)
        return 1

    file_f = cmd.value("f")
    if file_f:
        try:
            fundamental = read_matrix(file_f)
        except (OSError, ValueError):
            print(f"Error reading file {file_f}", file=sys.stderr)
            return 1
        if cmd.used("t"):
            fundamental = fundamental.T
        line = fundamental @ np.array([float(x), float(y), 1.0])
        rect = Rect(0, 0, image.width, image.height)
        if rect.clip_line(float(line[0]), float(line[1]), float(line[2])):
            draw_line(rect.left, rect.top, rect.right, rect.bottom, REDA, image)
    else:
        if cmd.used("t"):
            print("Error: option -t must be used with -f", file=sys.stderr)
            return 1
        draw_circle(x, y, 2, REDA, image)

    try:
        write_image(args[-1], image)
    except (ImageIOError, OSError, ValueError):
        print(f"Error writing file {args[-1]}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())