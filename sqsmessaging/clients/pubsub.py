from collections.abc import Generator, Sequence
from contextlib import contextmanager

from google.api_core.exceptions import GoogleAPIError
from google.cloud.pubsub_v1 import SubscriberClient

from sqsmessaging.clients.base import QueueClient
from sqsmessaging.constants import PUBSUB_MAX_ACK_DEADLINE
from sqsmessaging.datastructures import BatchEntry, BatchResult
from sqsmessaging.exceptions import BackendCallError, SQSMessagingException
from sqsmessaging.logger import logger


class PubSubClient(QueueClient):
    """Runs the acknowledgement batch calls against a Pub/Sub subscription.

    The destination is the full subscription path and the receipt handles are
    the ack ids of the received messages. Pub/Sub applies a single deadline to
    every ack id of a request and does not report per-entry results, so a
    call either succeeds for every entry or raises.
    """

    def change_message_visibility_batch(
        self, destination: str, entries: Sequence[BatchEntry]
    ) -> BatchResult:
        deadlines = {entry.visibility_timeout or 0 for entry in entries}
        if len(deadlines) > 1:
            raise SQSMessagingException(
                f"Pub/Sub applies a single deadline per request but got {sorted(deadlines)}."
            )

        ack_deadline_seconds = deadlines.pop() if deadlines else 0
        if ack_deadline_seconds > PUBSUB_MAX_ACK_DEADLINE:
            logger.warning(
                f"The deadline of {ack_deadline_seconds}s is above the Pub/Sub limit, "
                f"using {PUBSUB_MAX_ACK_DEADLINE}s instead."
            )
            ack_deadline_seconds = PUBSUB_MAX_ACK_DEADLINE

        ack_ids = [entry.receipt_handle for entry in entries]
        with self._handle_errors("modify_ack_deadline", destination):
            with SubscriberClient() as client:
                client.modify_ack_deadline(
                    subscription=destination,
                    ack_ids=ack_ids,
                    ack_deadline_seconds=ack_deadline_seconds,
                )

        return BatchResult(destination=destination, successful=tuple(e.id for e in entries))

    def delete_message_batch(self, destination: str, entries: Sequence[BatchEntry]) -> BatchResult:
        ack_ids = [entry.receipt_handle for entry in entries]
        with self._handle_errors("acknowledge", destination):
            with SubscriberClient() as client:
                client.acknowledge(subscription=destination, ack_ids=ack_ids)

        return BatchResult(destination=destination, successful=tuple(e.id for e in entries))

    @staticmethod
    @contextmanager
    def _handle_errors(operation: str, destination: str) -> Generator[None]:
        try:
            yield
        except GoogleAPIError as e:
            logger.exception(f"The {operation} call failed for {destination}", stacklevel=3)
            raise BackendCallError(
                f"The {operation} call failed for {destination}: {e}",
                operation=operation,
                destination=destination,
            ) from e
