"""Records stored in and read back from the database."""

import enum
from dataclasses import dataclass, fields, is_dataclass
from datetime import datetime, timezone
from typing import Any


class TxType(enum.IntEnum):
    """Where an event was emitted."""

    TRANSACTION = 1
    BEGIN_BLOCK = 2
    END_BLOCK = 3


def current_time():
    """Current UTC time as a naive datetime truncated to whole seconds."""
    return datetime.now(timezone.utc).replace(microsecond=0, tzinfo=None)


def to_jsonable(value):
    """Convert records and their contents into plain JSON-ready values."""
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


@dataclass
class Account:
    id: int
    chain_id: int
    address: str
    inserted_at: datetime
    updated_at: datetime | None = None


@dataclass
class NewAccount:
    chain_id: int
    address: str
    inserted_at: datetime


@dataclass
class AccountBalance:
    id: int
    account_id: int
    amount: int
    denom: str
    inserted_at: datetime
    updated_at: datetime | None = None


@dataclass
class NewAccountBalance:
    account_id: int
    amount: int
    denom: str
    inserted_at: datetime


@dataclass
class Block:
    id: int
    chain_id: int
    height: int
    block_hash: str
    prev_hash: str
    proposer_address: str
    last_commit_hash: str
    data_hash: str
    validators_hash: str
    next_validators_hash: str
    consensus_hash: str
    app_hash: str
    last_result_hash: str
    evidence_hash: str
    block_time: datetime
    inserted_at: datetime
    updated_at: datetime | None = None


@dataclass
class NewBlock:
    chain_id: int
    height: int
    block_hash: str
    prev_hash: str
    proposer_address: str
    last_commit_hash: str
    data_hash: str
    validators_hash: str
    next_validators_hash: str
    consensus_hash: str
    app_hash: str
    last_result_hash: str
    evidence_hash: str
    block_time: datetime
    inserted_at: datetime


@dataclass
class Chain:
    id: int
    chain_id: str
    chain_name: str
    icon_url: str | None
    website: str | None
    inserted_at: datetime
    updated_at: datetime | None = None


@dataclass
class NewChain:
    chain_id: str
    chain_name: str
    inserted_at: datetime


@dataclass
class Event:
    id: int
    chain_id: int
    tx_type: TxType
    tx_hash: str | None
    block_height: int
    event_seq: int
    event_type: str
    event_key: str
    event_value: str
    indexed: bool
    inserted_at: datetime
    updated_at: datetime | None = None


@dataclass
class NewEvent:
    chain_id: int
    tx_type: TxType
    tx_hash: str | None
    block_height: int
    event_seq: int
    event_type: str
    event_key: str
    event_value: str
    indexed: bool
    inserted_at: datetime


@dataclass
class Message:
    id: int
    transaction_id: int
    seq: int
    rawdata: Any
    inserted_at: datetime
    updated_at: datetime | None = None


@dataclass
class NewMessage:
    transaction_id: int
    seq: int
    rawdata: Any
    inserted_at: datetime


@dataclass
class Transaction:
    id: int
    chain_id: int
    transaction_hash: str
    height: int
    code: int
    code_space: str
    tx_data: str
    raw_log: str
    info: str
    memo: str | None
    gas_wanted: int
    gas_used: int
    tx_timestamp: str
    inserted_at: datetime
    updated_at: datetime | None = None


@dataclass
class NewTransaction:
    chain_id: int
    transaction_hash: str
    height: int
    code: int
    code_space: str
    tx_data: str
    raw_log: str
    info: str
    memo: str | None
    gas_wanted: int
    gas_used: int
    tx_timestamp: str
    inserted_at: datetime