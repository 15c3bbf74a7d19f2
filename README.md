# orsaview

Image utilities for looking at the results of two-view geometry estimation.
The package reads and writes images, draws on them, warps them with
homographies, and renders match and epipolar diagnostics from matches and
matrices that you supply.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `orsaview.pixels`: the `RGBColor` and `RGBA` pixel types, the colour
  constants (`WHITE`, `BLACK`, `BLUE`, `RED`, `GREEN`, `YELLOW`, `CYAN`,
  `MAGENTA`) and `convert_pixel`. Gray pixels are plain `int` values.
- `orsaview.image`: the `Image` container, indexed as `image[y, x]`, with
  `convert_image` and `crop`.
- `orsaview.sample`: `sample_nearest` and bilinear `sample_linear`.
- `orsaview.drawing`: `draw_line`, `draw_circle`, `draw_ellipse` and
  `put_pixel`; everything drawn is clipped to the image.
- `orsaview.rect`: `Rect`, with `grow_to`, `intersects`, `intersection` and
  `clip_line` (clipping a line `aX+bY+c=0` to the rectangle).
- `orsaview.image_io`: `read_image`, `write_image` and `write_jpg` for PNG,
  JPEG and binary PGM/PPM files, chosen by file extension with `get_format`;
  the lower-level `read_raw`, `write_raw`, `read_pnm_stream` and
  `write_pnm_stream` work on interleaved bytes. Failures raise `ImageIOError`.
- `orsaview.cmdline`: a small command-line parser (`CmdLine`, `make_option`,
  `make_switch`, `CmdLineError`).
- `orsaview.geometry`: `Geometry`, a rectangle parsed from `WxH+X+Y` text.
- `orsaview.warping`: `transform_h`, `warp`, `warp_pair` and
  `intersection_box`.
- `orsaview.graphical_output`: `concat_images`, `draw_match`, `complement`,
  `homography_matches_output` and `homography_registration_output`.
- `orsaview.epipolar`: `epipolar_line`, `project_on_line`,
  `draw_epi_segment`, `draw_epi_clipped` and `fundamental_graphical_output`.

Matches passed to the drawing and output functions can be any objects with
`x1`, `y1`, `x2`, `y2` attributes; inliers are given as indices into the
match list. Matrices are 3x3 arrays or nested sequences.

## Example

```python
from orsaview.image import Image
from orsaview.drawing import draw_line, draw_circle
from orsaview.image_io import write_image

image = Image(10, 10, 0)
draw_line(0, 5, 9, 5, 255, image)
draw_circle(5, 5, 3, 255, image)
write_image("out.pgm", image)
```

## Command

`put-epipolar` marks a point, or its epipolar line, in an image:

```
put-epipolar [-f|--fmatrix F.txt [-t|--transpose]] x y img [imgOut]
```

Without `-f` a small red circle is drawn at `(x, y)`. With `-f`, the file
holds a 3x3 fundamental matrix as nine numbers, row by row; the line
`F (x, y, 1)` is clipped to the image and drawn in red. `-t` uses the
transposed matrix and is an error without `-f`. The result is written to
`imgOut`, or over `img` when no output is given. The exit status is 0 on
success and 1 on any error.

## What it does not do

The package does not detect or match keypoints, and it does not estimate
homographies or fundamental matrices. It only displays and warps with the
matches and matrices it is given; there is no command that runs a full
registration from two images.