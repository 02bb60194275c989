"""Database tables."""

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    SmallInteger,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB

metadata = MetaData()

_jsonb = JSON().with_variant(JSONB(), "postgresql")


def _timestamps():
    return (
        Column("inserted_at", DateTime(), nullable=False),
        Column("updated_at", DateTime(), nullable=True),
    )


accounts = Table(
    "accounts",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("chain_id", Integer, nullable=False),
    Column("address", String(), nullable=False),
    *_timestamps(),
)

account_balance = Table(
    "account_balance",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("account_id", Integer, ForeignKey("accounts.id"), nullable=False),
    Column("amount", BigInteger, nullable=False),
    Column("denom", String(), nullable=False),
    *_timestamps(),
)

blocks = Table(
    "blocks",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("chain_id", Integer, nullable=False),
    Column("height", BigInteger, nullable=False),
    Column("block_hash", String(), nullable=False),
    Column("prev_hash", String(), nullable=False),
    Column("proposer_address", String(), nullable=False),
    Column("last_commit_hash", String(), nullable=False),
    Column("data_hash", String(), nullable=False),
    Column("validators_hash", String(), nullable=False),
    Column("next_validators_hash", String(), nullable=False),
    Column("consensus_hash", String(), nullable=False),
    Column("app_hash", String(), nullable=False),
    Column("last_result_hash", String(), nullable=False),
    Column("evidence_hash", String(), nullable=False),
    Column("block_time", DateTime(), nullable=False),
    *_timestamps(),
)

chains = Table(
    "chains",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("chain_id", String(), nullable=False),
    Column("chain_name", String(), nullable=False),
    Column("icon_url", String(), nullable=True),
    Column("website", String(), nullable=True),
    *_timestamps(),
)

events = Table(
    "events",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("chain_id", Integer, nullable=False),
    Column("tx_type", SmallInteger, nullable=False),
    Column("tx_hash", String(), nullable=True),
    Column("block_height", BigInteger, nullable=False),
    Column("event_seq", Integer, nullable=False),
    Column("event_type", String(), nullable=False),
    Column("event_key", String(), nullable=False),
    Column("event_value", String(), nullable=False),
    Column("indexed", Boolean, nullable=False),
    *_timestamps(),
)

transactions = Table(
    "transactions",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("chain_id", Integer, nullable=False),
    Column("transaction_hash", String(), nullable=False),
    Column("height", BigInteger, nullable=False),
    Column("code", Integer, nullable=False),
    Column("code_space", String(), nullable=False),
    Column("tx_data", Text, nullable=False),
    Column("raw_log", Text, nullable=False),
    Column("info", Text, nullable=False),
    Column("memo", String(), nullable=True),
    Column("gas_wanted", BigInteger, nullable=False),
    Column("gas_used", BigInteger, nullable=False),
    Column("tx_timestamp", String(), nullable=False),
    *_timestamps(),
)

messages = Table(
    "messages",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("transaction_id", Integer, ForeignKey("transactions.id"), nullable=False),
    Column("seq", Integer, nullable=False),
    Column("rawdata", _jsonb, nullable=False),
    *_timestamps(),
)


def create_schema(engine):
    """Create every table that does not exist yet on an engine or connection."""
    metadata.create_all(engine)