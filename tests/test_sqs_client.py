from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from sqsmessaging.clients.sqs import SQSClient
from sqsmessaging.datastructures import BatchEntry, BatchEntryFailure
from sqsmessaging.exceptions import BackendCallError, SQSMessagingException
from tests.conftest import QUEUE_URL


@pytest.fixture
def boto_client() -> MagicMock:
    return MagicMock()


class TestSQSClient:
    def test_change_message_visibility_batch(self, boto_client: MagicMock):
        boto_client.change_message_visibility_batch.return_value = {
            "Successful": [{"Id": "0"}, {"Id": "1"}],
        }
        entries = [
            BatchEntry(id="0", receipt_handle="a", visibility_timeout=30),
            BatchEntry(id="1", receipt_handle="b", visibility_timeout=30),
        ]

        result = SQSClient(boto_client).change_message_visibility_batch(QUEUE_URL, entries)

        boto_client.change_message_visibility_batch.assert_called_once_with(
            QueueUrl=QUEUE_URL,
            Entries=[
                {"Id": "0", "ReceiptHandle": "a", "VisibilityTimeout": 30},
                {"Id": "1", "ReceiptHandle": "b", "VisibilityTimeout": 30},
            ],
        )
        assert result.destination == QUEUE_URL
        assert result.successful == ("0", "1")
        assert not result.has_failures

    def test_delete_message_batch(self, boto_client: MagicMock):
        boto_client.delete_message_batch.return_value = {"Successful": [{"Id": "4"}]}

        result = SQSClient(boto_client).delete_message_batch(
            QUEUE_URL, [BatchEntry(id="4", receipt_handle="a")]
        )

        boto_client.delete_message_batch.assert_called_once_with(
            QueueUrl=QUEUE_URL, Entries=[{"Id": "4", "ReceiptHandle": "a"}]
        )
        assert result.successful == ("4",)

    def test_partial_failure(self, boto_client: MagicMock):
        boto_client.delete_message_batch.return_value = {
            "Successful": [{"Id": "0"}],
            "Failed": [
                {
                    "Id": "1",
                    "Code": "ReceiptHandleIsInvalid",
                    "Message": "The receipt handle has expired.",
                    "SenderFault": True,
                }
            ],
        }
        entries = [BatchEntry(id="0", receipt_handle="a"), BatchEntry(id="1", receipt_handle="b")]

        result = SQSClient(boto_client).delete_message_batch(QUEUE_URL, entries)

        assert result.successful == ("0",)
        assert result.failed == (
            BatchEntryFailure(
                id="1",
                code="ReceiptHandleIsInvalid",
                message="The receipt handle has expired.",
                sender_fault=True,
            ),
        )

    def test_client_error_is_wrapped(self, boto_client: MagicMock):
        error = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "Access to the queue is denied."}},
            "ChangeMessageVisibilityBatch",
        )
        boto_client.change_message_visibility_batch.side_effect = error

        with pytest.raises(BackendCallError) as exc_info:
            SQSClient(boto_client).change_message_visibility_batch(
                QUEUE_URL, [BatchEntry(id="0", receipt_handle="a", visibility_timeout=0)]
            )

        assert exc_info.value.__cause__ is error
        assert exc_info.value.destination == QUEUE_URL
        assert exc_info.value.operation == "change_message_visibility_batch"

    def test_transport_error_is_wrapped(self, boto_client: MagicMock):
        error = EndpointConnectionError(endpoint_url=QUEUE_URL)
        boto_client.delete_message_batch.side_effect = error

        with pytest.raises(BackendCallError) as exc_info:
            SQSClient(boto_client).delete_message_batch(
                QUEUE_URL, [BatchEntry(id="0", receipt_handle="a")]
            )

        assert exc_info.value.__cause__ is error

    def test_oversized_batch_is_refused(self, boto_client: MagicMock):
        entries = [BatchEntry(id=str(i), receipt_handle=f"h{i}") for i in range(11)]

        with pytest.raises(SQSMessagingException):
            SQSClient(boto_client).delete_message_batch(QUEUE_URL, entries)

        boto_client.delete_message_batch.assert_not_called()
