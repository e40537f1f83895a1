[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bomboni"
version = "0.1.0"
description = "Building blocks for API services: sortable ids, UTC date times, protobuf well-known value types, RPC status messages and structured request errors."
requires-python = ">=3.10"
dependencies = []
keywords = ["protobuf", "rpc", "ulid", "field-mask", "duration", "timestamp", "status", "errors"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["bomboni"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
