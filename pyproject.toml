[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kalreader"
version = "0.1.0"
description = "Export GPS training sessions to GPX, TCX, KML, Fitlog, CSV and map pages, and replay or log device traffic"
requires-python = ">=3.10"
dependencies = []
keywords = ["gps", "gpx", "tcx", "kml", "fitlog", "csv", "sports watch", "running", "cycling"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: GIS",
    "Topic :: File Formats",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["kalreader"]

[tool.hatch.build.targets.sdist]
include = ["kalreader", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
