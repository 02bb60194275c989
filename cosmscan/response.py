"""Chain data as read from a node, in an inlined form ready for storage."""

import enum
import hashlib
from dataclasses import dataclass, field
from datetime import datetime

from cosmscan.errors import InvalidJSONError

_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"
_DATE_LENGTH = len("YYYY-MM-DDTHH:mm:ss")


class EventType(enum.Enum):
    TRANSACTION = "Transaction"
    BEGIN_BLOCK = "BeginBlock"
    END_BLOCK = "EndBlock"


@dataclass
class ChainEvent:
    """An event emitted by a transaction or by a block's begin/end phase."""

    tx_type: EventType
    tx_hash: str | None
    block_height: int
    event_seq: int
    event_type: str
    event_key: str
    event_value: str
    indexed: bool = False


@dataclass
class BlockResult:
    height: int
    begin_block_events: list = field(default_factory=list)
    end_block_events: list = field(default_factory=list)


@dataclass
class ChainTransaction:
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
    messages: list = field(default_factory=list)


@dataclass
class ChainBlock:
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


@dataclass
class CommittedBlock:
    """A committed block together with its transactions and events."""

    block: ChainBlock
    txs: list = field(default_factory=list)
    events: list = field(default_factory=list)


def bytes_to_tx_hash(data):
    """Upper-case hex SHA-256 of raw transaction bytes."""
    return hashlib.sha256(bytes(data)).hexdigest().upper()


def _text(value):
    return "" if value is None else str(value)


def block_from_rpc(data):
    """Build a ChainBlock from the result of a tendermint ``block`` RPC call."""
    try:
        block = data["block"]
        header = block["header"]
        raw_time = header["time"]
        last_commit = block.get("last_commit")
        prev_hash = ""
        if last_commit:
            prev_hash = _text((last_commit.get("block_id") or {}).get("hash"))
        try:
            block_time = datetime.strptime(raw_time[:_DATE_LENGTH], _DATE_FORMAT)
        except (TypeError, ValueError) as exc:
            raise InvalidJSONError(f"failed to convert block time: {raw_time!r}") from exc
        return ChainBlock(
            height=int(header["height"]),
            block_hash=_text(data["block_id"]["hash"]),
            prev_hash=prev_hash,
            proposer_address=_text(header.get("proposer_address")),
            last_commit_hash=_text(header.get("last_commit_hash")),
            data_hash=_text(header.get("data_hash")),
            validators_hash=_text(header.get("validators_hash")),
            next_validators_hash=_text(header.get("next_validators_hash")),
            consensus_hash=_text(header.get("consensus_hash")),
            app_hash=_text(header.get("app_hash")),
            last_result_hash=_text(header.get("last_results_hash")),
            evidence_hash=_text(header.get("evidence_hash")),
            block_time=block_time,
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        if isinstance(exc, InvalidJSONError):
            raise
        raise InvalidJSONError(f"malformed block response: {exc}") from exc


def transaction_from_tx_response(data):
    """Build a ChainTransaction from a GetTxResponse document."""
    try:
        body = data["tx"]["body"]
        resp = data["tx_response"]
        return ChainTransaction(
            transaction_hash=resp["txhash"],
            height=int(resp["height"]),
            code=int(resp.get("code", 0)),
            code_space=_text(resp.get("codespace")),
            tx_data=_text(resp.get("data")),
            raw_log=_text(resp.get("raw_log")),
            info=_text(resp.get("info")),
            memo=_text(body.get("memo")),
            gas_wanted=int(resp.get("gas_wanted", 0)),
            gas_used=int(resp.get("gas_used", 0)),
            tx_timestamp=_text(resp.get("timestamp")),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise InvalidJSONError(f"malformed transaction response: {exc}") from exc


def transaction_events(data):
    """Flatten the logged events of a GetTxResponse into ChainEvents."""
    resp = data.get("tx_response") if isinstance(data, dict) else None
    if not resp:
        return []
    try:
        tx_hash = resp["txhash"]
        height = int(resp["height"])
        return [
            ChainEvent(
                tx_type=EventType.TRANSACTION,
                tx_hash=tx_hash,
                block_height=height,
                event_seq=seq,
                event_type=event["type"],
                event_key=_text(attr.get("key")),
                event_value=_text(attr.get("value")),
            )
            for log in resp.get("logs") or []
            for seq, event in enumerate(log.get("events") or [])
            for attr in event.get("attributes") or []
        ]
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise InvalidJSONError(f"malformed transaction logs: {exc}") from exc


def convert_block_events(abci_events, height, event_type):
    """Flatten ABCI block events into one ChainEvent per attribute."""
    try:
        return [
            ChainEvent(
                tx_type=event_type,
                tx_hash=None,
                block_height=height,
                event_seq=seq,
                event_type=event["type"],
                event_key=_text(attr.get("key")),
                event_value=_text(attr.get("value")),
            )
            for seq, event in enumerate(abci_events or [])
            for attr in event.get("attributes") or []
        ]
    except (KeyError, TypeError, AttributeError) as exc:
        raise InvalidJSONError(f"malformed block events: {exc}") from exc