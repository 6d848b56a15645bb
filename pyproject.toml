[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spicekit"
version = "0.1.0"
description = "SPICE source waveforms, .MEAS and source-line parsing, and simulation result lookup and plotting"
requires-python = ">=3.10"
dependencies = [
    "matplotlib",
]
keywords = ["spice", "netlist", "eda", "circuit", "waveform", "parser"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Electronic Design Automation (EDA)",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["spicekit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
