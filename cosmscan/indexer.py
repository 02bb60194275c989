"""Indexes a chain: fetches committed blocks and stores them."""

import logging
import queue

from cosmscan.client import Client, ClientConfig
from cosmscan.committer import Committer
from cosmscan.db import Database
from cosmscan.errors import NotFoundError, StorageError
from cosmscan.fetcher import CommittedBlockFetcher
from cosmscan.records import Chain, NewChain, current_time
from cosmscan.storage import PersistenceStorage

log = logging.getLogger(__name__)

_QUEUE_SIZE = 100


class Indexer:
    """Fetches blocks, transactions and events of one chain into storage."""

    def __init__(self, config, storage=None, client=None):
        self.config = config
        self.storage = storage if storage is not None else PersistenceStorage(Database(config.db))
        if client is None:
            fetcher = config.fetcher
            client = Client(
                ClientConfig(
                    tendermint_rpc_endpoint=fetcher.tendermint_rpc_endpoint,
                    grpc_endpoint=fetcher.grpc_endpoint,
                    rest_api_endpoint=fetcher.rest_api_endpoint,
                )
            )
        self.client = client

    def start(self):
        """Index blocks until fetching or committing fails; the failure is raised."""
        chain = self.load_chain_or_store()
        start_block = self.start_height(chain)

        blocks = queue.Queue(maxsize=_QUEUE_SIZE)
        CommittedBlockFetcher(self.client).run_loop(blocks, start_block)
        committer = Committer(self.storage, chain)

        while True:
            item = blocks.get()
            if isinstance(item, BaseException):
                raise item
            committer.commit_block(item)

    def load_chain_or_store(self):
        """Return the configured chain from storage, storing it first if missing."""
        chain_config = self.config.chain
        try:
            return self.storage.find_by_chain_id(chain_config.chain_id)
        except NotFoundError:
            pass
        except StorageError as exc:
            log.error("unexpected error: %r", exc)
            raise

        new_id = self.storage.insert_chain(
            NewChain(
                chain_id=chain_config.chain_id,
                chain_name=chain_config.chain_name,
                inserted_at=current_time(),
            )
        )
        return Chain(
            id=int(new_id),
            chain_id=chain_config.chain_id,
            chain_name=chain_config.chain_name,
            icon_url=None,
            website=None,
            inserted_at=current_time(),
            updated_at=None,
        )

    def load_latest_block_height(self, chain):
        """Height of the latest stored block of a chain, or None."""
        try:
            return self.storage.latest_block_height(chain.id)
        except StorageError:
            return None

    def start_height(self, chain):
        """The height indexing resumes from."""
        latest = self.load_latest_block_height(chain)
        if latest is None:
            return self.config.fetcher.start_block
        return latest + 1