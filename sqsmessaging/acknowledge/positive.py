from collections import deque

from sqsmessaging.acknowledge.dispatcher import BatchDispatcher
from sqsmessaging.acknowledge.ids import DEFAULT_BATCH_ID_GENERATOR, BatchIdGenerator
from sqsmessaging.clients.base import QueueClient
from sqsmessaging.datastructures import BatchEntry, BatchResult, PendingItem
from sqsmessaging.logger import logger


class Acknowledger:
    """Acknowledges (deletes) groups of messages of one destination."""

    def __init__(
        self,
        client: QueueClient,
        batch_id_generator: BatchIdGenerator = DEFAULT_BATCH_ID_GENERATOR,
    ) -> None:
        self.client = client
        self.batch_id_generator = batch_id_generator
        self.dispatcher = BatchDispatcher(self.action)

    def bulk_action(self, items: deque[PendingItem], destination: str) -> list[BatchResult]:
        with logger.contextualize(destination=destination, operation="ack"):
            return self.dispatcher.dispatch(items, destination)

    def action(self, destination: str, receipt_handles: list[str]) -> BatchResult | None:
        if not receipt_handles:
            return None

        entries = [
            BatchEntry(id=self.batch_id_generator.next_id(), receipt_handle=receipt_handle)
            for receipt_handle in receipt_handles
        ]

        result = self.client.delete_message_batch(destination, entries)
        for failure in result.failed:
            logger.warning(f"Could not delete entry {failure.id}: {failure.code} {failure.message}")

        return result
