import pytest

from sqsmessaging.datastructures import BatchEntryFailure, BatchResult
from sqsmessaging.exceptions import PartialBatchFailure
from tests.conftest import QUEUE_URL


class TestBatchResult:
    def test_without_failures(self):
        result = BatchResult(destination=QUEUE_URL, successful=("0", "1"))

        assert not result.has_failures
        result.raise_for_failures()

    def test_raise_for_failures(self):
        failure = BatchEntryFailure(id="3", code="ReceiptHandleIsInvalid", message="expired")
        result = BatchResult(destination=QUEUE_URL, successful=("2",), failed=(failure,))

        with pytest.raises(PartialBatchFailure) as exc_info:
            result.raise_for_failures()

        assert exc_info.value.result is result
        assert "3" in str(exc_info.value)
