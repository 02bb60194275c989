"""Configuration files for the indexer and the API server."""

import tomllib
import types
import typing
from dataclasses import dataclass, fields
from urllib.parse import quote


@dataclass(frozen=True)
class DBConfig:
    """Connection settings for the PostgreSQL database."""

    host: str
    port: int
    user: str
    password: str
    database: str

    def __post_init__(self):
        if not 0 <= self.port <= 0xFFFFFFFF:
            raise ValueError(f"database port out of range: {self.port}")

    def url(self):
        """Return the database URL for these settings."""
        return (
            f"postgresql://{quote(self.user, safe='')}:{quote(self.password, safe='')}"
            f"@{self.host}:{self.port}/{self.database}"
        )


@dataclass(frozen=True)
class ChainConfig:
    chain_id: str
    chain_name: str
    icon_url: str | None = None
    website: str | None = None


@dataclass(frozen=True)
class FetcherConfig:
    tendermint_rpc_endpoint: str
    grpc_endpoint: str
    rest_api_endpoint: str
    start_block: int
    try_resume_from_db: bool


@dataclass(frozen=True)
class IndexerConfig:
    fetcher_account_enabled: bool


@dataclass(frozen=True)
class IndexerSettings:
    """Everything the indexer reads from its configuration file."""

    indexer: IndexerConfig
    fetcher: FetcherConfig
    chain: ChainConfig
    db: DBConfig


@dataclass(frozen=True)
class ServerConfig:
    host: str
    port: int
    allowed_host: str

    def __post_init__(self):
        if not 0 <= self.port <= 0xFFFF:
            raise ValueError(f"server port out of range: {self.port}")


@dataclass(frozen=True)
class ServerSettings:
    """Everything the API server reads from its configuration file."""

    db: DBConfig
    server: ServerConfig


def _matches(value, expected):
    if expected is int:
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, expected)


def _build(cls, data, section):
    if not isinstance(data, dict):
        raise ValueError(f"missing table [{section}]")
    kwargs = {}
    for field in fields(cls):
        expected = field.type
        args = typing.get_args(expected)
        optional = isinstance(expected, types.UnionType) and type(None) in args
        if field.name not in data:
            if optional:
                kwargs[field.name] = None
                continue
            raise ValueError(f"missing field `{field.name}` in [{section}]")
        value = data[field.name]
        base = next(t for t in args if t is not type(None)) if optional else expected
        if not _matches(value, base):
            raise ValueError(
                f"invalid type for `{field.name}` in [{section}]: "
                f"expected {base.__name__}, got {type(value).__name__}"
            )
        kwargs[field.name] = value
    return cls(**kwargs)


def parse_indexer_config(text):
    """Parse the TOML text of an indexer configuration."""
    data = tomllib.loads(text)
    return IndexerSettings(
        indexer=_build(IndexerConfig, data.get("indexer"), "indexer"),
        fetcher=_build(FetcherConfig, data.get("fetcher"), "fetcher"),
        chain=_build(ChainConfig, data.get("chain"), "chain"),
        db=_build(DBConfig, data.get("db"), "db"),
    )


def parse_server_config(text):
    """Parse the TOML text of an API server configuration."""
    data = tomllib.loads(text)
    return ServerSettings(
        db=_build(DBConfig, data.get("db"), "db"),
        server=_build(ServerConfig, data.get("server"), "server"),
    )


def _read(path):
    with open(path, encoding="utf-8") as handle:
        return handle.read()


def load_indexer_config(path):
    """Read and parse an indexer configuration file."""
    return parse_indexer_config(_read(path))


def load_server_config(path):
    """Read and parse an API server configuration file."""
    return parse_server_config(_read(path))