[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sixelterm"
version = "0.8.5"
description = "Terminal emulator building blocks: a sixel graphics decoder, key tables, resource settings and scrollback"
requires-python = ">=3.10"
dependencies = []
keywords = ["terminal", "sixel", "vt340", "scrollback", "xresources", "keyboard"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals :: Terminal Emulators/X Terminals",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sixelterm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
