from dataclasses import dataclass, field

from sqsmessaging.exceptions import PartialBatchFailure


@dataclass(frozen=True)
class PendingItem:
    receipt_handle: str
    destination: str
    message_id: str = ""


@dataclass(frozen=True)
class BatchEntry:
    id: str
    receipt_handle: str
    visibility_timeout: int | None = None


@dataclass(frozen=True)
class BatchEntryFailure:
    id: str
    code: str
    message: str = ""
    sender_fault: bool = False


@dataclass(frozen=True)
class BatchResult:
    destination: str
    successful: tuple[str, ...] = field(default_factory=tuple)
    failed: tuple[BatchEntryFailure, ...] = field(default_factory=tuple)

    @property
    def has_failures(self) -> bool:
        return len(self.failed) > 0

    def raise_for_failures(self) -> None:
        if self.has_failures:
            raise PartialBatchFailure(self)
