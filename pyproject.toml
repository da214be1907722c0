[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dieroute"
version = "0.1.0"
description = "Allocate source-to-load routes across a multi-die network with per-link capacity limits"
requires-python = ">=3.10"
dependencies = []
keywords = ["eda", "multi-die", "routing", "path allocation", "chiplet"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Electronic Design Automation (EDA)",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
dieroute = "dieroute.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["dieroute"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
