[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "igcflight"
version = "1.0.0"
description = "Paragliding flight log (IGC) analysis: thermals, XC distances, waypoints and reports"
requires-python = ">=3.10"
dependencies = []
keywords = ["igc", "paragliding", "gliding", "thermal", "xc", "olc", "waypoints", "gps"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: GIS",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
igcflight = "igcflight.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["igcflight"]

[tool.pytest.ini_options]
addopts = "-ra"
