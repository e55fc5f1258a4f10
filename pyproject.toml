[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "shoalkit"
version = "0.1.0"
description = "Typed table rows, queries, responses and a benchmarking helper for a partitioned database."
requires-python = ">=3.10"
dependencies = []
keywords = ["database", "partition", "query", "benchmark"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["shoalkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
