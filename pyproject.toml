[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gtlengine"
version = "0.1.0"
description = "A multi-line text-editing state machine: fixed-width text layout, cursor and selection handling, keyboard editing and bounded undo/redo."
requires-python = ">=3.10"
dependencies = []
keywords = ["text editing", "text field", "cursor", "selection", "undo", "redo", "widget"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: User Interfaces",
    "Topic :: Text Editors",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gtlengine"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
