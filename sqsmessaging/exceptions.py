from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sqsmessaging.datastructures import BatchResult


class SQSMessagingException(Exception):
    pass


class ConfigurationError(SQSMessagingException):
    pass


class BackendCallError(SQSMessagingException):
    """A batch call failed as a whole (connectivity, auth, throttling...)."""

    def __init__(self, message: str, *, operation: str, destination: str) -> None:
        super().__init__(message)
        self.operation = operation
        self.destination = destination


class PartialBatchFailure(SQSMessagingException):
    """Some entries of an otherwise successful batch call were rejected."""

    def __init__(self, result: "BatchResult") -> None:
        failed_ids = ", ".join(failure.id for failure in result.failed)
        super().__init__(
            f"{len(result.failed)} entries failed on {result.destination}: {failed_ids}"
        )
        self.result = result
