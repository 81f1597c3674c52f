[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stbkit"
version = "0.1.0"
description = "Skyline rectangle packing and a headless multi-line text-editing engine with undo/redo"
requires-python = ">=3.10"
dependencies = []
keywords = ["rectangle packing", "texture atlas", "skyline", "text editing", "undo", "redo"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["stbkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
