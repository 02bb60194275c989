"""HTTP responses and response bodies of the API server."""

from dataclasses import dataclass, field
from http import HTTPStatus

from cosmscan.records import to_jsonable

_JSON = "application/json"


@dataclass
class HttpResponse:
    """A complete HTTP response: status code, headers and a text body."""

    status: int
    headers: dict = field(default_factory=dict)
    body: str = ""


@dataclass
class EventResponse:
    tx_type: int
    tx_hash: str | None
    block_height: int
    event_seq: int
    event_type: str
    event_key: str
    event_value: str
    indexed: bool


@dataclass
class TransactionResponse:
    """A stored transaction with its decoded messages and its events."""

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
    messages: list = field(default_factory=list)
    events: list = field(default_factory=list)

    @classmethod
    def from_records(cls, tx, events, messages):
        """Build the response from a Transaction, its Events and its Messages."""
        return cls(
            chain_id=tx.chain_id,
            transaction_hash=tx.transaction_hash,
            height=tx.height,
            code=tx.code,
            code_space=tx.code_space,
            tx_data=tx.tx_data,
            raw_log=tx.raw_log,
            info=tx.info,
            memo=tx.memo,
            gas_wanted=tx.gas_wanted,
            gas_used=tx.gas_used,
            tx_timestamp=tx.tx_timestamp,
            messages=[message.rawdata for message in messages],
            events=[
                EventResponse(
                    tx_type=int(event.tx_type),
                    tx_hash=event.tx_hash,
                    block_height=event.block_height,
                    event_seq=event.event_seq,
                    event_type=event.event_type,
                    event_key=event.event_key,
                    event_value=event.event_value,
                    indexed=event.indexed,
                )
                for event in events
            ],
        )

    def to_dict(self):
        """Return the response as plain JSON-ready values."""
        return to_jsonable(self)


class ResponseBuilder:
    """Builds JSON responses that carry the allowed CORS origin."""

    def __init__(self, allowed_host):
        self.allowed_host = allowed_host

    def _response(self, status, body):
        return HttpResponse(
            status=int(status),
            headers={
                "Content-Type": _JSON,
                "Access-Control-Allow-Origin": self.allowed_host,
            },
            body=body,
        )

    def invalid_form(self, error):
        """A 400 response naming what is wrong with the request."""
        return self._response(HTTPStatus.BAD_REQUEST, f'{{ "error": "{error}" }}')

    def ok_json(self, body):
        """A 200 response carrying an already serialised JSON body."""
        return self._response(HTTPStatus.OK, body)

    def not_found(self):
        return self._response(HTTPStatus.NOT_FOUND, '{ "error": "content not found"}')

    def internal_error(self):
        return self._response(
            HTTPStatus.INTERNAL_SERVER_ERROR, '{ "error": "Internal Server Error" }'
        )