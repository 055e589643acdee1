from collections import deque

from sqsmessaging.constants import MAX_BATCH
from sqsmessaging.datastructures import BatchResult, PendingItem
from sqsmessaging.exceptions import ConfigurationError, SQSMessagingException
from sqsmessaging.logger import logger
from sqsmessaging.types import BatchAction


class BatchDispatcher:
    """Splits the pending items of one destination into backend-sized batches.

    The items are drained from the front of the collection and every full
    batch is handed to the action right away. Errors raised by the action
    stop the dispatch: batches already sent are not rolled back and the items
    that were not drained yet stay in the collection.
    """

    def __init__(self, action: BatchAction, max_batch: int = MAX_BATCH) -> None:
        if not (0 < max_batch <= MAX_BATCH):
            raise ConfigurationError(
                f"The batch size ({max_batch}) must be between 1 and {MAX_BATCH}."
            )

        self.action = action
        self.max_batch = max_batch

    def dispatch(self, items: deque[PendingItem], destination: str) -> list[BatchResult]:
        for item in items:
            if item.destination != destination:
                raise SQSMessagingException(
                    f"The item {item.receipt_handle} belongs to {item.destination}, "
                    f"it cannot be dispatched to {destination}."
                )

        results: list[BatchResult] = []
        receipt_handles: list[str] = []
        while items:
            receipt_handles.append(items.popleft().receipt_handle)

            if len(receipt_handles) == self.max_batch:
                self._flush(destination, receipt_handles, results)
                receipt_handles = []

        if receipt_handles:
            self._flush(destination, receipt_handles, results)

        return results

    def _flush(
        self, destination: str, receipt_handles: list[str], results: list[BatchResult]
    ) -> None:
        logger.debug(f"Dispatching a batch of {len(receipt_handles)} receipt handles.")
        result = self.action(destination, receipt_handles)
        if result is not None:
            results.append(result)
