from collections.abc import Sequence
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from sqsmessaging.clients.base import QueueClient
from sqsmessaging.constants import MAX_BATCH
from sqsmessaging.datastructures import BatchEntry, BatchEntryFailure, BatchResult
from sqsmessaging.exceptions import BackendCallError, SQSMessagingException
from sqsmessaging.logger import logger


class SQSClient(QueueClient):
    """Runs the acknowledgement batch calls against an SQS queue URL.

    Args:
        sqs: A boto3 SQS client.
    """

    def __init__(self, sqs: Any) -> None:
        self.sqs = sqs

    def change_message_visibility_batch(
        self, destination: str, entries: Sequence[BatchEntry]
    ) -> BatchResult:
        request_entries = []
        for entry in entries:
            request_entry: dict[str, Any] = {"Id": entry.id, "ReceiptHandle": entry.receipt_handle}
            if entry.visibility_timeout is not None:
                request_entry["VisibilityTimeout"] = entry.visibility_timeout
            request_entries.append(request_entry)

        return self._call(
            "change_message_visibility_batch", destination=destination, entries=request_entries
        )

    def delete_message_batch(self, destination: str, entries: Sequence[BatchEntry]) -> BatchResult:
        request_entries = [
            {"Id": entry.id, "ReceiptHandle": entry.receipt_handle} for entry in entries
        ]
        return self._call("delete_message_batch", destination=destination, entries=request_entries)

    def _call(self, operation: str, destination: str, entries: list[dict[str, Any]]) -> BatchResult:
        if len(entries) > MAX_BATCH:
            raise SQSMessagingException(
                f"A batch holds at most {MAX_BATCH} entries but {len(entries)} were given."
            )

        try:
            response = getattr(self.sqs, operation)(QueueUrl=destination, Entries=entries)
        except (ClientError, BotoCoreError) as e:
            logger.exception(f"The {operation} call failed for {destination}", stacklevel=2)
            raise BackendCallError(
                f"The {operation} call failed for {destination}: {e}",
                operation=operation,
                destination=destination,
            ) from e

        return self._parse_response(destination, response)

    def _parse_response(self, destination: str, response: dict[str, Any]) -> BatchResult:
        successful = tuple(entry["Id"] for entry in response.get("Successful", []))
        failed = tuple(
            BatchEntryFailure(
                id=entry["Id"],
                code=entry.get("Code", ""),
                message=entry.get("Message", ""),
                sender_fault=entry.get("SenderFault", False),
            )
            for entry in response.get("Failed", [])
        )
        return BatchResult(destination=destination, successful=successful, failed=failed)
