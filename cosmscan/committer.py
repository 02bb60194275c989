"""Writes committed blocks, with their transactions and events, to storage."""

import json
import logging

from cosmscan.errors import InvalidJSONError
from cosmscan.records import (
    NewBlock,
    NewEvent,
    NewMessage,
    NewTransaction,
    TxType,
    current_time,
)
from cosmscan.response import EventType

log = logging.getLogger(__name__)

_TX_TYPES = {
    EventType.BEGIN_BLOCK: TxType.BEGIN_BLOCK,
    EventType.END_BLOCK: TxType.END_BLOCK,
    EventType.TRANSACTION: TxType.TRANSACTION,
}


def _parse_message(raw):
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidJSONError("cannot unmarshal cosmos message to json") from exc


class Committer:
    """Stores committed blocks of one chain."""

    def __init__(self, storage, chain):
        self.storage = storage
        self.chain = chain

    def commit_block(self, msg):
        """Store a CommittedBlock in a single database transaction.

        Nothing is stored when any part of the block fails to be written.
        """
        chain_id = self.chain.id
        with self.storage.transaction() as storage:
            block = msg.block
            storage.insert_block(
                NewBlock(
                    chain_id=chain_id,
                    height=block.height,
                    block_hash=block.block_hash,
                    prev_hash=block.prev_hash,
                    proposer_address=block.proposer_address,
                    last_commit_hash=block.last_commit_hash,
                    data_hash=block.data_hash,
                    validators_hash=block.validators_hash,
                    next_validators_hash=block.next_validators_hash,
                    consensus_hash=block.consensus_hash,
                    app_hash=block.app_hash,
                    last_result_hash=block.last_result_hash,
                    evidence_hash=block.evidence_hash,
                    block_time=block.block_time,
                    inserted_at=current_time(),
                )
            )

            for tx in msg.txs:
                stored = storage.insert_transaction(
                    NewTransaction(
                        chain_id=chain_id,
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
                        inserted_at=current_time(),
                    )
                )
                for seq, raw in enumerate(tx.messages):
                    storage.insert_message(
                        NewMessage(
                            transaction_id=stored.id,
                            seq=seq,
                            rawdata=_parse_message(raw),
                            inserted_at=current_time(),
                        )
                    )

            for event in msg.events:
                storage.insert_event(
                    NewEvent(
                        chain_id=chain_id,
                        tx_type=_TX_TYPES[event.tx_type],
                        tx_hash=event.tx_hash,
                        block_height=event.block_height,
                        event_seq=event.event_seq,
                        event_type=event.event_type,
                        event_key=event.event_key,
                        event_value=event.event_value,
                        indexed=event.indexed,
                        inserted_at=current_time(),
                    )
                )
        log.debug("committed block %s of chain %s", msg.block.height, chain_id)
        return True