[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gnme"
version = "0.0.1"
description = "Building blocks for matrix elements between non-orthogonal Slater determinants: bitsets, Lowdin pairing, integral transforms and NOCI densities"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = [
    "quantum chemistry",
    "noci",
    "lowdin pairing",
    "slater determinants",
    "electron integrals",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Chemistry",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gnme"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
