"""Image I/O, drawing, warping and epipolar plotting for viewing two-view geometry estimates."""

__version__ = "0.1.0"