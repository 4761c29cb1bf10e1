[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "awaspi"
version = "0.1.0"
description = "Receiver for the AWA LED frame protocol: checksummed frames, RGBW calibration and segmented LED output"
requires-python = ">=3.10"
dependencies = []
keywords = ["led", "ambient-lighting", "awa", "protocol", "rgbw", "fletcher", "ring-buffer"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video :: Display",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["awaspi"]

[tool.pytest.ini_options]
addopts = "-ra"
