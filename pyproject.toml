[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "splatkit"
version = "0.2.0"
description = "Building blocks for Gaussian splat tooling: a scaled Adam optimizer, weighted index sampling, a small virtual filesystem, data-source loading and shader-name utilities."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["gaussian-splatting", "adam", "optimizer", "sampling", "vfs", "zip", "ply", "wgsl"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["splatkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
