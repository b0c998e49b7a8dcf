[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nexterm_client"
version = "0.9.0"
description = "Client-side state for a multiplexing terminal: scrollback search, fuzzy pickers, host manager, selection, quick select, settings and output plugins"
requires-python = ">=3.10"
dependencies = [
    "tomlkit",
]
keywords = ["terminal", "multiplexer", "scrollback", "fuzzy", "ssh", "palette"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals :: Terminal Emulators/X Terminals",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["nexterm_client"]

[tool.pytest.ini_options]
addopts = "-ra"
