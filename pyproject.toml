[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "orsaview"
version = "0.1.0"
description = "Image tools for visualising homography and fundamental matrix estimates: drawing, warping, image I/O and epipolar plots"
requires-python = ">=3.10"
dependencies = [
    "numpy",
    "pillow",
]
keywords = ["homography", "fundamental matrix", "epipolar", "image warping", "mosaic", "drawing"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
put-epipolar = "orsaview.put_epipolar:main"

[tool.hatch.build.targets.wheel]
packages = ["orsaview"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
