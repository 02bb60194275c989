# cosmscan

An indexer and JSON HTTP API for Cosmos-based blockchains.

The indexer follows a chain one block at a time. For each block it reads the block
itself, its begin-block and end-block events, every transaction in it, and each
transaction's messages and logged events. It writes all of them to a SQL database
inside a single database transaction, so a block is either stored completely or not
at all. The API server reads that database and serves the data as JSON.

## Installation

```
pip install .
```

The database URL built from the configuration is a `postgresql://` URL, which
SQLAlchemy opens through a PostgreSQL driver. No driver is installed with this
package; install one that SQLAlchemy supports (for example `psycopg2`) yourself.

To run the tests:

```
pip install ".[test]"
pytest
```

## Preparing the database

The commands do not create tables. Create them once with `cosmscan.schema.create_schema`,
which creates every table that does not exist yet:

```python
from sqlalchemy import create_engine

from cosmscan.config import load_indexer_config
from cosmscan.schema import create_schema

config = load_indexer_config("config.toml")
create_schema(create_engine(config.db.url()))
```

The tables are `chains`, `blocks`, `transactions`, `messages`, `events`, `accounts`
and `account_balance`.

## Configuration

Both commands read one TOML file.

```toml
[indexer]
fetcher_account_enabled = false

[fetcher]
tendermint_rpc_endpoint = "http://localhost:26657"
grpc_endpoint = "http://localhost:9090"
rest_api_endpoint = "http://localhost:1317"
start_block = 1
try_resume_from_db = true

[chain]
chain_id = "testchain-1"
chain_name = "Test Chain"

[db]
host = "localhost"
port = 5432
user = "user"
password = "password"
database = "cosmscan"

[server]
host = "127.0.0.1"
port = 8080
allowed_host = "*"
```

The indexer reads the `indexer`, `fetcher`, `chain` and `db` tables; the server reads
the `db` and `server` tables. Every key shown is required and checked for its type,
except `icon_url` and `website` in `[chain]`, which are optional.
`grpc_endpoint`, `try_resume_from_db` and `fetcher_account_enabled` must be present
but do not change what the indexer does.

## Running the indexer

```
cosmscan-indexer --filename config.toml
```

On its first run the indexer stores the configured chain in the database. It starts at
`start_block`; if blocks of the chain are already stored, it starts at the block after
the highest stored one. Blocks come from the Tendermint RPC endpoint (`block` and
`block_results`); transactions and their messages come from the REST endpoint
(`/cosmos/tx/v1beta1/txs/<hash>`). When it asks for a height the chain has not reached
yet, it waits two seconds and asks again. Any other failure stops the indexer with a
non-zero exit. A configuration file that cannot be read or parsed also ends the
command with the message `wrong config file location: <file>`.

## Running the API server

```
cosmscan-server --filename config.toml
```

The server listens on `host` and `port` from `[server]`. Every endpoint uses `GET` and
returns JSON, with an `Access-Control-Allow-Origin` header set to `allowed_host`.

| Path | Returns |
| --- | --- |
| `/api/chains/all` | every stored chain |
| `/api/block/latest_block/:chain_id` | the highest block of a chain |
| `/api/block/list/:chain_id?limit=10&offset=0` | blocks, highest first (`limit` defaults to 10, `offset` to 0) |
| `/api/block/:chain_id/:block_height` | one block |
| `/api/tx/:tx_hash` | a transaction with its messages and events |
| `/api/tx/list/:chain_id/at/:block_height` | the transactions at one block height |

`:chain_id` is the numeric id the database gave the chain, as returned by
`/api/chains/all`. Timestamps are ISO 8601 strings, and an event's `tx_type` is
`1` for a transaction, `2` for begin-block and `3` for end-block.

- A path that matches no route gets `404` with `{ "error": "content not found"}`.
- Any other failure gets `500` with `{ "error": "Internal Server Error" }`. This
  includes a record that does not exist, a number that does not parse, and a method
  other than `GET`.

## Using it as a library

- `cosmscan.client.Client` fetches blocks, block results, transactions and transaction
  messages from one node. It takes a `ClientConfig` and, optionally, a
  `requests.Session`.
- `cosmscan.db.Database` holds the connection pool. Build it from a `DBConfig` or from
  any SQLAlchemy URL (`Database(url="sqlite:///cosmscan.db")`).
- `cosmscan.storage.PersistenceStorage` reads and writes the indexed data. Its
  `transaction()` context manager runs every call inside the block in one database
  transaction. A missing record raises `cosmscan.errors.NotFoundError`; other database
  failures raise `cosmscan.errors.QueryError`.
- `cosmscan.fetcher.CommittedBlockFetcher.blocks(start_block)` yields committed blocks
  one height after another, and `cosmscan.committer.Committer.commit_block` stores one.
- `cosmscan.indexer.Indexer` and `cosmscan.server.ApiServer` are the two commands above.
  Both accept a ready-made storage object, and `ApiServer.dispatch(method, target)`
  answers a single request without opening a socket.

Every error the package raises derives from `cosmscan.errors.CosmscanError`.

## What it does not do

- It does not index accounts or balances. The `accounts` and `account_balance` tables
  exist but nothing writes to them, and the API has no endpoints for them.
- It does not use the gRPC endpoint. Transactions are read over the REST endpoint.
- It has no migrations. `create_schema` only creates tables that are missing.