"""Connection handling for the backend database."""

from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError

from cosmscan.errors import ClientNotConnectedError, DatabaseConnectionError


class Database:
    """A pooled database connection, built from a DBConfig or an explicit URL."""

    def __init__(self, config=None, url=None):
        if config is None and url is None:
            raise ValueError("either a database config or a URL is required")
        self.config = config
        self.url = url if url is not None else config.url()
        self._engine = None

    def connect(self):
        """Create the connection pool and check that the database is reachable."""
        try:
            engine = create_engine(self.url)
            with engine.connect():
                pass
        except SQLAlchemyError as exc:
            raise DatabaseConnectionError(
                f"failed to connect to the database: {self.url}"
            ) from exc
        if self._engine is not None:
            self._engine.dispose()
        self._engine = engine
        return True

    @contextmanager
    def connection(self):
        """Yield a connection inside a transaction that commits on success."""
        if self._engine is None:
            raise ClientNotConnectedError()
        with self._engine.begin() as conn:
            yield conn