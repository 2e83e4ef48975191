[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "osmplot"
version = "0.1.0"
description = "Plot buildings, roads and estimated lane widths from OpenStreetMap XML files"
requires-python = ">=3.10"
keywords = ["openstreetmap", "osm", "utm", "map", "plot", "gis"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: GIS",
]
dependencies = [
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
osmplot = "osmplot.render:main"

[tool.hatch.build.targets.wheel]
packages = ["osmplot"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
