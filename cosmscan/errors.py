"""Exception hierarchy shared by the storage, chain client, indexer and API server."""

INTERNAL_ERROR_CODE = -32603


class CosmscanError(Exception):
    """Base class of every error raised by the package."""

    default_message = "cosmscan error"

    def __init__(self, message=None):
        super().__init__(self.default_message if message is None else message)


class StorageError(CosmscanError):
    """An error raised by the persistence layer."""

    default_message = "database model error"


class DatabaseConnectionError(StorageError):
    """The connection pool could not be established."""

    default_message = "failed to establish connection pool"


class ClientNotConnectedError(StorageError):
    """A query was attempted before connecting to the database."""

    default_message = "you forgot to connect to the database"


class NotFoundError(StorageError):
    """The requested record does not exist."""

    default_message = "not found record"


class QueryError(StorageError):
    """A query failed for a reason other than a missing record."""

    default_message = "query error"


class ClientError(CosmscanError):
    """An error raised while talking to a chain node."""

    default_message = "cosmos client error occurred"


class RPCError(ClientError):
    """The tendermint RPC server answered with an error response."""

    def __init__(self, code, message):
        self.code = code
        self.message = message
        super().__init__(
            f"Received failed message from tendermint rpc server: {message} (code: {code})"
        )

    def is_internal_error(self):
        """True when the server reported a JSON-RPC internal error."""
        return self.code == INTERNAL_ERROR_CODE


class UnknownServerError(ClientError):
    """The node failed in a way that is not a regular RPC error response."""

    default_message = "unknown server error"


class InvalidJSONError(ClientError):
    """A response body was not the JSON that was expected."""

    default_message = "serde json error"


class RestAPIError(ClientError):
    """A call to the REST API failed."""

    default_message = "failed to call the rest api"


class IndexerError(CosmscanError):
    """An error raised by the indexer."""

    default_message = "Unexpected error"


class FetchingTransactionFailed(IndexerError):
    """One of the actions needed to fetch a transaction failed."""

    default_message = "one of action for fetching transaction failed"


class StartBlockError(IndexerError):
    """The configured start block is not positive."""

    default_message = "start block must be greater than 0"


class MethodNotAllowed(CosmscanError):
    """No route is registered for the request's HTTP method."""

    def __init__(self, method):
        self.method = method
        super().__init__(f"method is not allowed {method}")