[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cosmscan"
version = "0.1.0"
description = "Cosmos blockchain indexer that stores blocks, transactions and events in a SQL database and serves them over a JSON HTTP API"
requires-python = ">=3.11"
keywords = ["cosmos", "tendermint", "blockchain", "indexer", "explorer", "api"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Front-Ends",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "sqlalchemy>=2.0",
    "requests>=2.28",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "responses>=0.23",
]

[project.scripts]
cosmscan-indexer = "cosmscan.cli:indexer_main"
cosmscan-server = "cosmscan.cli:server_main"

[tool.hatch.build.targets.wheel]
packages = ["cosmscan"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
ignore_missing_imports = true
