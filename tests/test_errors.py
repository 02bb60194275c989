import pytest

from cosmscan.errors import (
    ClientError,
    ClientNotConnectedError,
    CosmscanError,
    DatabaseConnectionError,
    FetchingTransactionFailed,
    IndexerError,
    InvalidJSONError,
    MethodNotAllowed,
    NotFoundError,
    QueryError,
    RestAPIError,
    RPCError,
    StartBlockError,
    StorageError,
    UnknownServerError,
)


@pytest.mark.parametrize(
    "cls, message",
    [
        (NotFoundError, "not found record"),
        (ClientNotConnectedError, "you forgot to connect to the database"),
        (DatabaseConnectionError, "failed to establish connection pool"),
        (QueryError, "query error"),
        (StartBlockError, "start block must be greater than 0"),
        (FetchingTransactionFailed, "one of action for fetching transaction failed"),
        (UnknownServerError, "unknown server error"),
    ],
)
def test_default_messages(cls, message):
    assert str(cls()) == message


def test_custom_message_overrides_default():
    assert str(QueryError("boom")) == "boom"


@pytest.mark.parametrize(
    "cls, parent",
    [
        (NotFoundError, StorageError),
        (QueryError, StorageError),
        (ClientNotConnectedError, StorageError),
        (DatabaseConnectionError, StorageError),
        (UnknownServerError, ClientError),
        (InvalidJSONError, ClientError),
        (RestAPIError, ClientError),
        (StartBlockError, IndexerError),
        (FetchingTransactionFailed, IndexerError),
    ],
)
def test_hierarchy(cls, parent):
    with pytest.raises(parent) as info:
        raise cls("detail")
    assert str(info.value) == "detail"
    with pytest.raises(CosmscanError) as base_info:
        raise cls("other detail")
    assert str(base_info.value) == "other detail"


def test_rpc_error_internal():
    err = RPCError(-32603, "height 129 must be less than or equal to the current blockchain height 128")
    assert err.is_internal_error() is True
    assert err.code == -32603
    assert "height 129" in str(err)


def test_rpc_error_other_code():
    err = RPCError(-32600, "invalid request")
    assert err.is_internal_error() is False
    assert isinstance(err, ClientError)


def test_rpc_error_is_catchable_as_client_error():
    err = RPCError(-1, "bad")
    assert issubclass(RPCError, ClientError)
    assert err.message == "bad"
    assert err.code == -1
    assert err.is_internal_error() is False
    assert "bad" in str(err)


def test_method_not_allowed():
    err = MethodNotAllowed("PATCH")
    assert str(err) == "method is not allowed PATCH"
    assert err.method == "PATCH"