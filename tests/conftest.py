from collections import deque
from collections.abc import Callable, Sequence
from unittest.mock import MagicMock

import pytest

from sqsmessaging.clients.base import QueueClient
from sqsmessaging.datastructures import BatchEntry, BatchResult, PendingItem

QUEUE_URL = "https://sqs.us-east-1.amazonaws.com/123456789012/orders"


def successful_result(destination: str, entries: Sequence[BatchEntry]) -> BatchResult:
    return BatchResult(destination=destination, successful=tuple(entry.id for entry in entries))


@pytest.fixture
def queue_client() -> MagicMock:
    client = MagicMock(spec=QueueClient)
    client.change_message_visibility_batch.side_effect = successful_result
    client.delete_message_batch.side_effect = successful_result
    return client


@pytest.fixture
def make_items() -> Callable[..., deque[PendingItem]]:
    def _make_items(count: int, destination: str = QUEUE_URL) -> deque[PendingItem]:
        return deque(
            PendingItem(receipt_handle=f"handle-{i}", destination=destination, message_id=str(i))
            for i in range(count)
        )

    return _make_items


def sent_entries(mock_call: MagicMock) -> list[list[BatchEntry]]:
    return [call.args[1] for call in mock_call.call_args_list]
