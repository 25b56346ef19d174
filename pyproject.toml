[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hcc"
version = "0.1.0"
description = "A small C compiler that lowers a syntax tree through a stack IR to qproc or HyperCPU assembly"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "c", "assembly", "codegen", "ir", "qproc", "hypercpu"]
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
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hcc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
