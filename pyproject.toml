[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "shardkit"
version = "0.1.0"
description = "Sharding rules, shard key routing and SQL fingerprinting for MySQL-style table partitioning"
requires-python = ">=3.10"
dependencies = []
keywords = ["mysql", "sharding", "router", "fingerprint", "sql", "partitioning"]
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
    "Topic :: Database",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["shardkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
