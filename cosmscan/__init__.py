"""Indexer and JSON HTTP API for Cosmos-based blockchains, storing data in a SQL database."""

__version__ = "0.1.0"