"""Handlers of the API endpoints."""

import json
import re
from urllib.parse import parse_qsl

from cosmscan.api_responses import TransactionResponse
from cosmscan.records import to_jsonable

_INTEGER = re.compile(r"[+-]?[0-9]+")


def _parse_int(text, bits):
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"invalid digit found in string: {text!r}")
    value = int(text)
    bound = 1 << (bits - 1)
    if not -bound <= value < bound:
        raise ValueError(f"number out of range for a {bits}-bit integer: {text!r}")
    return value


def _dumps(value):
    return json.dumps(to_jsonable(value), separators=(",", ":"))


def _int_param(state, name, bits):
    raw = state.params.get(name)
    return None if raw is None else _parse_int(raw, bits)


def all_chains(request, state):
    """Every stored chain."""
    return state.resp_builder.ok_json(_dumps(state.storage.all_chains()))


def get_block(request, state):
    """A block of a chain by height."""
    chain_id = _int_param(state, "chain_id", 32)
    if chain_id is None:
        return state.resp_builder.invalid_form("chain_id is required")
    height = _int_param(state, "block_height", 64)
    if height is None:
        return state.resp_builder.invalid_form("block_height is missing")
    block = state.storage.find_block_by_height(chain_id, height)
    return state.resp_builder.ok_json(_dumps(block))


def latest_block(request, state):
    """The highest stored block of a chain."""
    chain_id = _int_param(state, "chain_id", 32)
    if chain_id is None:
        return state.resp_builder.invalid_form("chain_id is required")
    return state.resp_builder.ok_json(_dumps(state.storage.find_latest_block(chain_id)))


def block_list(request, state):
    """Blocks of a chain, highest first, paged by ``limit`` and ``offset``."""
    query = dict(parse_qsl(request.query or "", keep_blank_values=True))
    limit = _parse_int(query["limit"], 64) if "limit" in query else 10
    offset = _parse_int(query["offset"], 64) if "offset" in query else 0
    chain_id = _int_param(state, "chain_id", 32)
    if chain_id is None:
        return state.resp_builder.invalid_form("chain_id is missing")
    blocks = state.storage.list_blocks(chain_id, limit, offset)
    return state.resp_builder.ok_json(_dumps(blocks))


def transaction_by_hash(request, state):
    """A transaction with its messages and events."""
    tx_hash = state.params.get("tx_hash")
    if tx_hash is None:
        return state.resp_builder.invalid_form("tx_hash is missing")
    storage = state.storage
    tx = storage.find_transaction_by_hash(tx_hash)
    messages = storage.list_messages_by_tx(tx.id)
    events = storage.list_events_by_tx(tx.transaction_hash)
    result = TransactionResponse.from_records(tx, events, messages)
    return state.resp_builder.ok_json(_dumps(result.to_dict()))


def transaction_list_in_block(request, state):
    """Transactions of a chain at one block height."""
    chain_id = _int_param(state, "chain_id", 32)
    if chain_id is None:
        return state.resp_builder.invalid_form("chain_id is missing")
    height = _int_param(state, "block_height", 64)
    if height is None:
        return state.resp_builder.invalid_form("block_height is missing")
    txs = state.storage.list_transactions(chain_id, height)
    return state.resp_builder.ok_json(_dumps(txs))