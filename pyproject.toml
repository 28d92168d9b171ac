[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "liman"
version = "0.1.0"
description = "Game engine core without graphics: actors built from XML, resources, settings, input state, physics and rectangle collisions"
requires-python = ">=3.10"
keywords = ["game", "engine", "actors", "components", "collision", "physics", "obj"]
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
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
liman = "liman.game:main"

[tool.hatch.build.targets.wheel]
packages = ["liman"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
