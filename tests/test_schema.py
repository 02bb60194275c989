from datetime import datetime

import pytest
from sqlalchemy import create_engine, inspect, insert, select

from cosmscan import schema
from cosmscan.schema import create_schema


@pytest.fixture
def engine(tmp_path):
    eng = create_engine(f"sqlite:///{tmp_path / 'schema.db'}")
    create_schema(eng)
    yield eng
    eng.dispose()


def test_all_tables_created(engine):
    names = set(inspect(engine).get_table_names())
    assert names == {
        "account_balance",
        "accounts",
        "blocks",
        "chains",
        "events",
        "messages",
        "transactions",
    }


def test_create_schema_is_idempotent(engine):
    create_schema(engine)
    assert len(inspect(engine).get_table_names()) == len(schema.metadata.tables)


def test_block_columns(engine):
    columns = {c["name"] for c in inspect(engine).get_columns("blocks")}
    assert columns == {
        "id", "chain_id", "height", "block_hash", "prev_hash", "proposer_address",
        "last_commit_hash", "data_hash", "validators_hash", "next_validators_hash",
        "consensus_hash", "app_hash", "last_result_hash", "evidence_hash",
        "block_time", "inserted_at", "updated_at",
    }


def test_foreign_keys(engine):
    inspector = inspect(engine)
    message_fks = {
        (fk["referred_table"], tuple(fk["referred_columns"]))
        for fk in inspector.get_foreign_keys("messages")
    }
    balance_fks = {
        (fk["referred_table"], tuple(fk["referred_columns"]))
        for fk in inspector.get_foreign_keys("account_balance")
    }
    assert message_fks == {("transactions", ("id",))}
    assert balance_fks == {("accounts", ("id",))}


def test_chain_insert_and_select(engine):
    when = datetime(2023, 5, 6, 7, 8, 9)
    with engine.begin() as conn:
        result = conn.execute(
            insert(schema.chains).values(chain_id="testchain-1", chain_name="testchain", inserted_at=when)
        )
        new_id = result.inserted_primary_key[0]
        row = conn.execute(select(schema.chains).where(schema.chains.c.id == new_id)).one()
    assert row.chain_id == "testchain-1"
    assert row.icon_url is None
    assert row.inserted_at == when


def test_message_rawdata_round_trip(engine):
    raw = {"@type": "/cosmos.bank.v1beta1.MsgSend", "amount": [{"denom": "stake", "amount": "10"}]}
    when = datetime(2023, 1, 1)
    with engine.begin() as conn:
        tx = conn.execute(
            insert(schema.transactions).values(
                chain_id=1, transaction_hash="AA", height=2, code=0, code_space="",
                tx_data="", raw_log="[]", info="", memo=None, gas_wanted=1, gas_used=1,
                tx_timestamp="2023-01-01T00:00:00Z", inserted_at=when,
            )
        )
        tx_id = tx.inserted_primary_key[0]
        conn.execute(insert(schema.messages).values(transaction_id=tx_id, seq=0, rawdata=raw, inserted_at=when))
        stored = conn.execute(select(schema.messages.c.rawdata)).scalar_one()
    assert stored == raw