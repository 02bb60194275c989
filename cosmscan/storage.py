"""Reading and writing indexed chain data in the backend database."""

import threading
from contextlib import contextmanager
from dataclasses import fields

from sqlalchemy import and_, insert, select
from sqlalchemy.exc import SQLAlchemyError

from cosmscan import schema
from cosmscan.errors import NotFoundError, QueryError
from cosmscan.records import Block, Chain, Event, Message, Transaction, TxType


def _values(record):
    return {f.name: getattr(record, f.name) for f in fields(record)}


def _event_from_row(row):
    data = dict(row._mapping)
    data["tx_type"] = TxType(data["tx_type"])
    return Event(**data)


def _record(cls, row):
    return cls(**dict(row._mapping))


class PersistenceStorage:
    """Queries and inserts over a connected Database."""

    def __init__(self, db):
        db.connect()
        self._db = db
        self._local = threading.local()

    @contextmanager
    def transaction(self):
        """Run every storage call inside the block in one database transaction.

        The transaction commits when the block ends normally and rolls back
        when it raises. Nested use joins the outer transaction.
        """
        if getattr(self._local, "conn", None) is not None:
            yield self
            return
        try:
            with self._db.connection() as conn:
                self._local.conn = conn
                try:
                    yield self
                finally:
                    self._local.conn = None
        except SQLAlchemyError as exc:
            raise QueryError(str(exc)) from exc

    @contextmanager
    def _session(self):
        try:
            active = getattr(self._local, "conn", None)
            if active is not None:
                yield active
            else:
                with self._db.connection() as conn:
                    yield conn
        except SQLAlchemyError as exc:
            raise QueryError(str(exc)) from exc

    def _first(self, statement):
        with self._session() as conn:
            row = conn.execute(statement.limit(1)).first()
        if row is None:
            raise NotFoundError()
        return row

    def _all(self, statement):
        with self._session() as conn:
            return conn.execute(statement).all()

    def _insert(self, table, record):
        with self._session() as conn:
            result = conn.execute(insert(table).values(**_values(record)))
            return result

    # writing

    def insert_block(self, block):
        """Insert a block; return the number of rows written."""
        return self._insert(schema.blocks, block).rowcount

    def latest_block_height(self, chain_id):
        """Height of the highest stored block of a chain."""
        blocks = schema.blocks
        row = self._first(
            select(blocks.c.height)
            .where(blocks.c.chain_id == chain_id)
            .order_by(blocks.c.height.desc())
        )
        return row.height

    def insert_chain(self, chain):
        """Insert a chain; return the id the database assigned to it."""
        return self._insert(schema.chains, chain).inserted_primary_key[0]

    def insert_event(self, event):
        """Insert an event; return the number of rows written."""
        values = _values(event)
        values["tx_type"] = int(values["tx_type"])
        with self._session() as conn:
            return conn.execute(insert(schema.events).values(**values)).rowcount

    def insert_transaction(self, transaction):
        """Insert a transaction and return the stored record."""
        table = schema.transactions
        with self._session() as conn:
            result = conn.execute(insert(table).values(**_values(transaction)))
            new_id = result.inserted_primary_key[0]
            row = conn.execute(select(table).where(table.c.id == new_id)).first()
        return _record(Transaction, row)

    def insert_message(self, message):
        """Insert a message; return the number of rows written."""
        return self._insert(schema.messages, message).rowcount

    # reading

    def find_block_by_height(self, chain_id, height):
        blocks = schema.blocks
        row = self._first(
            select(blocks).where(
                and_(blocks.c.chain_id == chain_id, blocks.c.height == height)
            )
        )
        return _record(Block, row)

    def list_blocks(self, chain_id, limit, offset):
        """Blocks of a chain, highest first."""
        blocks = schema.blocks
        rows = self._all(
            select(blocks)
            .where(blocks.c.chain_id == chain_id)
            .order_by(blocks.c.height.desc())
            .limit(limit)
            .offset(offset)
        )
        return [_record(Block, row) for row in rows]

    def find_latest_block(self, chain_id):
        blocks = schema.blocks
        row = self._first(
            select(blocks)
            .where(blocks.c.chain_id == chain_id)
            .order_by(blocks.c.height.desc())
        )
        return _record(Block, row)

    def find_by_chain_id(self, chain_id):
        chains = schema.chains
        row = self._first(select(chains).where(chains.c.chain_id == chain_id))
        return _record(Chain, row)

    def all_chains(self):
        chains = schema.chains
        return [_record(Chain, row) for row in self._all(select(chains).order_by(chains.c.id))]

    def list_transactions(self, chain_id, block_height):
        table = schema.transactions
        rows = self._all(
            select(table)
            .where(and_(table.c.height == block_height, table.c.chain_id == chain_id))
            .order_by(table.c.id)
        )
        return [_record(Transaction, row) for row in rows]

    def find_transaction_by_hash(self, tx_hash):
        table = schema.transactions
        row = self._first(select(table).where(table.c.transaction_hash == tx_hash))
        return _record(Transaction, row)

    def list_messages_by_tx(self, tx_id):
        table = schema.messages
        rows = self._all(
            select(table).where(table.c.transaction_id == tx_id).order_by(table.c.id)
        )
        return [_record(Message, row) for row in rows]

    def list_events_by_tx(self, tx_hash):
        table = schema.events
        rows = self._all(select(table).where(table.c.tx_hash == tx_hash).order_by(table.c.id))
        return [_event_from_row(row) for row in rows]