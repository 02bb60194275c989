from datetime import datetime

import pytest

from cosmscan.errors import InvalidJSONError
from cosmscan.response import (
    ChainEvent,
    CommittedBlock,
    EventType,
    block_from_rpc,
    bytes_to_tx_hash,
    convert_block_events,
    transaction_events,
    transaction_from_tx_response,
)


def rpc_block(time="2022-10-01T12:34:56.123456789Z", last_commit=True):
    return {
        "block_id": {"hash": "BLOCKHASH"},
        "block": {
            "header": {
                "height": "42",
                "time": time,
                "last_commit_hash": "LCH",
                "data_hash": "DH",
                "validators_hash": "VH",
                "next_validators_hash": "NVH",
                "consensus_hash": "CH",
                "app_hash": "AH",
                "last_results_hash": "LRH",
                "evidence_hash": "EH",
                "proposer_address": "PROP",
            },
            "data": {"txs": []},
            "last_commit": {"block_id": {"hash": "PREVHASH"}} if last_commit else None,
        },
    }


def tx_response():
    return {
        "tx": {"body": {"memo": "hello", "messages": []}},
        "tx_response": {
            "txhash": "TXHASH",
            "height": "42",
            "code": 0,
            "codespace": "",
            "data": "0A06",
            "raw_log": "[]",
            "info": "",
            "gas_wanted": "200000",
            "gas_used": "150000",
            "timestamp": "2022-10-01T12:34:56Z",
            "logs": [
                {
                    "events": [
                        {"type": "message", "attributes": [{"key": "action", "value": "send"}]},
                        {
                            "type": "transfer",
                            "attributes": [
                                {"key": "recipient", "value": "cosmos1abc"},
                                {"key": "amount", "value": "10uatom"},
                            ],
                        },
                    ]
                }
            ],
        },
    }


def test_bytes_to_tx_hash_of_empty_input():
    assert bytes_to_tx_hash(b"") == (
        "E3B0C44298FC1C149AFBF4C8996FB92427AE41E4649B934CA495991B7852B855"
    )


def test_bytes_to_tx_hash_is_upper_hex():
    digest = bytes_to_tx_hash(b"some transaction")
    assert len(digest) == 64
    assert digest == digest.upper()
    assert bytes_to_tx_hash(bytearray(b"some transaction")) == digest


def test_block_from_rpc_fields():
    block = block_from_rpc(rpc_block())
    assert block.height == 42
    assert block.block_hash == "BLOCKHASH"
    assert block.prev_hash == "PREVHASH"
    assert block.last_result_hash == "LRH"
    assert block.proposer_address == "PROP"
    assert block.block_time == datetime(2022, 10, 1, 12, 34, 56)


def test_block_without_last_commit_has_empty_prev_hash():
    assert block_from_rpc(rpc_block(last_commit=False)).prev_hash == ""


def test_block_bad_time_raises():
    with pytest.raises(InvalidJSONError):
        block_from_rpc(rpc_block(time="yesterday"))


def test_block_missing_header_raises():
    with pytest.raises(InvalidJSONError):
        block_from_rpc({"block_id": {"hash": "X"}, "block": {}})


def test_transaction_from_tx_response():
    tx = transaction_from_tx_response(tx_response())
    assert tx.transaction_hash == "TXHASH"
    assert tx.height == 42
    assert tx.memo == "hello"
    assert tx.gas_wanted == 200000
    assert tx.gas_used == 150000
    assert tx.tx_timestamp == "2022-10-01T12:34:56Z"
    assert tx.messages == []


def test_transaction_missing_body_raises():
    data = tx_response()
    del data["tx"]
    with pytest.raises(InvalidJSONError):
        transaction_from_tx_response(data)


def test_transaction_events_flatten_with_sequence():
    events = transaction_events(tx_response())
    assert [(e.event_seq, e.event_type, e.event_key) for e in events] == [
        (0, "message", "action"),
        (1, "transfer", "recipient"),
        (1, "transfer", "amount"),
    ]
    assert all(e.tx_type is EventType.TRANSACTION for e in events)
    assert all(e.tx_hash == "TXHASH" and e.block_height == 42 for e in events)
    assert not any(e.indexed for e in events)


def test_transaction_events_without_response_is_empty():
    assert transaction_events({"tx": {}}) == []


def test_convert_block_events():
    abci = [
        {"type": "coin_spent", "attributes": [{"key": "spender", "value": "a"}]},
        {
            "type": "mint",
            "attributes": [{"key": "inflation", "value": "0.1"}, {"key": "amount", "value": None}],
        },
    ]
    events = convert_block_events(abci, 7, EventType.BEGIN_BLOCK)
    assert events == [
        ChainEvent(EventType.BEGIN_BLOCK, None, 7, 0, "coin_spent", "spender", "a"),
        ChainEvent(EventType.BEGIN_BLOCK, None, 7, 1, "mint", "inflation", "0.1"),
        ChainEvent(EventType.BEGIN_BLOCK, None, 7, 1, "mint", "amount", ""),
    ]


def test_convert_block_events_empty():
    assert convert_block_events(None, 1, EventType.END_BLOCK) == []


def test_committed_block_defaults():
    block = block_from_rpc(rpc_block())
    committed = CommittedBlock(block)
    assert committed.txs == [] and committed.events == []
    assert committed.block.height == 42