"""Fetches committed blocks, their transactions and events from a node."""

import logging
import threading
import time

from cosmscan.errors import CosmscanError, IndexerError, RPCError
from cosmscan.response import CommittedBlock

log = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 2.0


class CommittedBlockFetcher:
    """Reads committed blocks one height after another."""

    def __init__(self, client, poll_interval=DEFAULT_POLL_INTERVAL):
        self.client = client
        self.poll_interval = poll_interval

    def committed_block_at(self, height):
        """Fetch the block at a height with its transactions, messages and events."""
        block, tx_hashes = self.client.get_block(height)
        log.info("found new block | block_number:%s, hash: %s", block.height, block.block_hash)

        block_result = self.client.get_block_result(height)
        events = [*block_result.begin_block_events, *block_result.end_block_events]

        transactions = []
        for tx_hash in tx_hashes:
            try:
                tx, tx_events = self.client.get_transaction(tx_hash)
            except CosmscanError as exc:
                raise IndexerError(f"unknown error {exc}") from exc
            transactions.append(tx)
            events.extend(tx_events)

        for tx in transactions:
            try:
                messages = self.client.get_tx_messages(tx.transaction_hash)
            except CosmscanError as exc:
                raise IndexerError(f"unknown error {exc}") from exc
            tx.messages.extend(messages)

        return CommittedBlock(block=block, txs=transactions, events=events)

    def blocks(self, start_block):
        """Yield committed blocks from a height onwards, waiting for new ones.

        A height that the chain has not reached yet is retried after the poll
        interval; any other failure is raised.
        """
        height = start_block
        while True:
            try:
                committed = self.committed_block_at(height)
            except RPCError as exc:
                if exc.is_internal_error():
                    log.debug("block %s not available yet: %s", height, exc)
                    time.sleep(self.poll_interval)
                    continue
                log.error("error: %s", exc)
                raise
            log.info(
                "commit block | block_number: %s, hash: %s",
                height,
                committed.block.block_hash,
            )
            yield committed
            height += 1

    def run_loop(self, out_queue, start_block):
        """Feed committed blocks into a queue from a background thread.

        When fetching fails, the exception is put on the queue and the thread
        ends. Returns the started thread.
        """

        def work():
            try:
                for committed in self.blocks(start_block):
                    out_queue.put(committed)
            except Exception as exc:  # handed to the consumer
                log.error("committed block worker has failed unexpectedly: %s", exc)
                out_queue.put(exc)

        thread = threading.Thread(target=work, name="committed-block-fetcher", daemon=True)
        thread.start()
        return thread