[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "brewterm"
version = "0.1.0"
description = "A small framework for terminal user interfaces built on a model, update and view loop"
requires-python = ">=3.10"
keywords = ["terminal", "tui", "ansi", "console", "keyboard", "mouse"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: User Interfaces",
    "Topic :: Terminals",
]
dependencies = [
    "wcwidth",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
brewterm-shopping = "brewterm.shopping:main"

[tool.hatch.build.targets.wheel]
packages = ["brewterm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
