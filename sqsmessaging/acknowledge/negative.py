from collections import deque

from sqsmessaging.acknowledge.dispatcher import BatchDispatcher
from sqsmessaging.acknowledge.ids import DEFAULT_BATCH_ID_GENERATOR, BatchIdGenerator
from sqsmessaging.acknowledge.retry import RetryPolicy, resolve_delay
from sqsmessaging.clients.base import QueueClient
from sqsmessaging.datastructures import BatchEntry, BatchResult, PendingItem
from sqsmessaging.logger import logger


class NegativeAcknowledger:
    """Negatively acknowledges groups of messages of one destination.

    A negative acknowledgement changes the visibility timeout of the messages
    so they are delivered again, right away or after the delay given by the
    retry policy. It is used on recover and close and may cause duplicate
    deliveries.
    """

    def __init__(
        self,
        client: QueueClient,
        retry_policy: RetryPolicy | None = None,
        batch_id_generator: BatchIdGenerator = DEFAULT_BATCH_ID_GENERATOR,
    ) -> None:
        self.client = client
        self.retry_policy = retry_policy
        self.batch_id_generator = batch_id_generator
        self.dispatcher = BatchDispatcher(self.action)

    def bulk_action(self, items: deque[PendingItem], destination: str) -> list[BatchResult]:
        """Negatively acknowledges every pending item, draining the collection.

        Args:
            items: The pending items, all received from the destination.
            destination: The queue the items were received from.

        Returns:
            The backend result of every batch call that was issued.
        """
        with logger.contextualize(destination=destination, operation="nack"):
            return self.dispatcher.dispatch(items, destination)

    def action(self, destination: str, receipt_handles: list[str]) -> BatchResult | None:
        if not receipt_handles:
            return None

        if self.retry_policy is None:
            logger.warning(f"No retry policy set for {destination}, the messages are retried now.")
        else:
            logger.debug(
                f"Retry mode: {self.retry_policy.mode.name}, "
                f"retry delay: {self.retry_policy.delay}, destination: {destination}"
            )

        visibility_timeout = resolve_delay(self.retry_policy)
        if visibility_timeout is None:
            logger.debug(
                f"Keeping the queue visibility timeout for {len(receipt_handles)} messages."
            )
            return None

        entries = [
            BatchEntry(
                id=self.batch_id_generator.next_id(),
                receipt_handle=receipt_handle,
                visibility_timeout=visibility_timeout,
            )
            for receipt_handle in receipt_handles
        ]

        result = self.client.change_message_visibility_batch(destination, entries)
        for failure in result.failed:
            logger.warning(
                f"Could not change the visibility of entry {failure.id}: "
                f"{failure.code} {failure.message}"
            )

        return result
