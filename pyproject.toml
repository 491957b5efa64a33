[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dataparser"
version = "0.1.0"
description = "Configurable binary parsing and serialization over buffers, streams and async writers, with optional AES-256-CBC"
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = [
    "binary",
    "parser",
    "serialization",
    "encoding",
    "decoding",
    "endianness",
    "protocol",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["dataparser"]

[tool.hatch.build.targets.sdist]
include = ["dataparser", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
