"""Client for a chain node's tendermint RPC and REST endpoints."""

import base64
import binascii
import json
from dataclasses import dataclass

import requests

from cosmscan.errors import (
    InvalidJSONError,
    RestAPIError,
    RPCError,
    UnknownServerError,
)
from cosmscan.response import (
    BlockResult,
    EventType,
    block_from_rpc,
    bytes_to_tx_hash,
    convert_block_events,
    transaction_events,
    transaction_from_tx_response,
)

_TIMEOUT = 30


@dataclass(frozen=True)
class ClientConfig:
    tendermint_rpc_endpoint: str
    grpc_endpoint: str
    rest_api_endpoint: str


class Client:
    """Fetches blocks, block results and transactions from one node."""

    def __init__(self, config, session=None):
        self.config = config
        self._session = session if session is not None else requests.Session()

    def _rpc(self, method, **params):
        url = f"{self.config.tendermint_rpc_endpoint.rstrip('/')}/{method}"
        try:
            resp = self._session.get(url, params=params, timeout=_TIMEOUT)
        except requests.RequestException as exc:
            raise UnknownServerError(str(exc)) from exc
        try:
            payload = resp.json()
        except ValueError as exc:
            raise UnknownServerError(
                f"unreadable response from {method} (HTTP {resp.status_code})"
            ) from exc
        if not isinstance(payload, dict):
            raise UnknownServerError(f"unexpected response from {method}")
        error = payload.get("error")
        if error:
            if not isinstance(error, dict):
                raise UnknownServerError(str(error))
            message = error.get("message", "")
            if error.get("data"):
                message = f"{message}: {error['data']}"
            raise RPCError(error.get("code"), message)
        if "result" not in payload:
            raise UnknownServerError(f"no result in response from {method}")
        return payload["result"]

    def _rest_tx(self, tx_hash):
        url = f"{self.config.rest_api_endpoint.rstrip('/')}/cosmos/tx/v1beta1/txs/{tx_hash}"
        try:
            resp = self._session.get(url, timeout=_TIMEOUT)
        except requests.RequestException as exc:
            raise RestAPIError(str(exc)) from exc
        if resp.status_code >= 400:
            raise RestAPIError(
                f"failed to call the rest api: HTTP {resp.status_code}: {resp.text}"
            )
        try:
            return json.loads(resp.text)
        except ValueError as exc:
            raise InvalidJSONError(str(exc)) from exc

    def get_block(self, height):
        """Return the block at a height and the hashes of its transactions."""
        result = self._rpc("block", height=height)
        block = block_from_rpc(result)
        try:
            txs = result["block"].get("data", {}).get("txs") or []
            tx_hashes = [bytes_to_tx_hash(base64.b64decode(tx, validate=True)) for tx in txs]
        except (AttributeError, TypeError, binascii.Error) as exc:
            raise InvalidJSONError(f"malformed transactions in block: {exc}") from exc
        return block, tx_hashes

    def get_block_result(self, height):
        """Return the begin- and end-block events at a height."""
        result = self._rpc("block_results", height=height)
        if not isinstance(result, dict):
            raise InvalidJSONError("malformed block_results response")
        return BlockResult(
            height=height,
            begin_block_events=convert_block_events(
                result.get("begin_block_events"), height, EventType.BEGIN_BLOCK
            ),
            end_block_events=convert_block_events(
                result.get("end_block_events"), height, EventType.END_BLOCK
            ),
        )

    def get_transaction(self, tx_hash):
        """Return a transaction and the events it logged."""
        data = self._rest_tx(tx_hash)
        return transaction_from_tx_response(data), transaction_events(data)

    def get_tx_messages(self, tx_hash):
        """Return the messages of a transaction, each as a compact JSON string."""
        data = self._rest_tx(tx_hash)
        try:
            messages = data["tx"]["body"]["messages"]
        except (KeyError, TypeError) as exc:
            raise InvalidJSONError(f"transaction has no messages: {exc}") from exc
        if not isinstance(messages, list):
            raise InvalidJSONError("transaction messages are not a list")
        return [json.dumps(m, separators=(",", ":"), sort_keys=True) for m in messages]