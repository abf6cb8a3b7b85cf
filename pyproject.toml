[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "epsflip"
version = "0.1.0"
description = "Random flip walks over approximate (border-rank) tensor decomposition schemes over GF(2)"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "tensor",
    "matrix multiplication",
    "border rank",
    "flip graph",
    "GF(2)",
    "random walk",
]
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
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
epsflip = "epsflip.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["epsflip"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
