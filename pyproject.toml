[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "blastgrid"
version = "0.1.0"
description = "A grid-based bomb-laying arcade game with a small entity-component simulation core"
requires-python = ">=3.10"
keywords = ["game", "arcade", "bombs", "grid", "pygame", "entity-component-system"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Arcade",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
blastgrid = "blastgrid.app:main"

[tool.hatch.build.targets.wheel]
packages = ["blastgrid"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
