import json
from datetime import datetime
from http import HTTPStatus

from cosmscan.api_responses import ResponseBuilder, TransactionResponse
from cosmscan.records import Event, Message, Transaction, TxType

WHEN = datetime(2023, 1, 2, 3, 4, 5)


def _tx():
    return Transaction(
        id=7,
        chain_id=1,
        transaction_hash="ABCDEF",
        height=42,
        code=0,
        code_space="sdk",
        tx_data="data",
        raw_log="[]",
        info="",
        memo="hello",
        gas_wanted=200000,
        gas_used=150000,
        tx_timestamp="2023-01-02T03:04:05Z",
        inserted_at=WHEN,
    )


def _event(seq):
    return Event(
        id=seq,
        chain_id=1,
        tx_type=TxType.TRANSACTION,
        tx_hash="ABCDEF",
        block_height=42,
        event_seq=seq,
        event_type="transfer",
        event_key="amount",
        event_value=f"{seq}uatom",
        indexed=False,
        inserted_at=WHEN,
    )


def test_invalid_form_embeds_error():
    resp = ResponseBuilder("*").invalid_form("chain_id is required")
    assert resp.status == HTTPStatus.BAD_REQUEST
    assert resp.body == '{ "error": "chain_id is required" }'
    assert json.loads(resp.body) == {"error": "chain_id is required"}


def test_headers_carry_allowed_host():
    builder = ResponseBuilder("http://localhost:3000")
    for resp in (builder.ok_json("[]"), builder.not_found(), builder.internal_error()):
        assert resp.headers["Access-Control-Allow-Origin"] == "http://localhost:3000"
        assert resp.headers["Content-Type"] == "application/json"


def test_ok_json_passes_body_through():
    resp = ResponseBuilder("*").ok_json('{"a":1}')
    assert resp.status == HTTPStatus.OK
    assert resp.body == '{"a":1}'


def test_not_found_and_internal_error_bodies():
    builder = ResponseBuilder("*")
    assert builder.not_found().status == HTTPStatus.NOT_FOUND
    assert builder.not_found().body == '{ "error": "content not found"}'
    assert builder.internal_error().status == HTTPStatus.INTERNAL_SERVER_ERROR
    assert builder.internal_error().body == '{ "error": "Internal Server Error" }'


def test_transaction_response_from_records():
    tx = _tx()
    messages = [
        Message(id=1, transaction_id=7, seq=0, rawdata={"@type": "send"}, inserted_at=WHEN),
        Message(id=2, transaction_id=7, seq=1, rawdata={"@type": "vote"}, inserted_at=WHEN),
    ]
    resp = TransactionResponse.from_records(tx, [_event(0), _event(1)], messages)
    assert resp.transaction_hash == tx.transaction_hash
    assert resp.memo == tx.memo
    assert resp.messages == [{"@type": "send"}, {"@type": "vote"}]
    assert [e.event_value for e in resp.events] == ["0uatom", "1uatom"]
    assert all(e.tx_type == TxType.TRANSACTION for e in resp.events)


def test_transaction_response_to_dict_round_trips_through_json():
    resp = TransactionResponse.from_records(_tx(), [_event(3)], [])
    data = resp.to_dict()
    assert json.loads(json.dumps(data)) == data
    assert data["events"][0]["event_seq"] == 3
    assert data["events"][0]["tx_type"] == int(TxType.TRANSACTION)
    assert data["messages"] == []