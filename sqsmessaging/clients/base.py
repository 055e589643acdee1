from abc import ABC, abstractmethod
from collections.abc import Sequence

from sqsmessaging.datastructures import BatchEntry, BatchResult


class QueueClient(ABC):
    """Contract of the batch calls used by the acknowledgers."""

    @abstractmethod
    def change_message_visibility_batch(
        self, destination: str, entries: Sequence[BatchEntry]
    ) -> BatchResult:
        """Changes the visibility timeout of every entry in one backend call."""
        pass

    @abstractmethod
    def delete_message_batch(self, destination: str, entries: Sequence[BatchEntry]) -> BatchResult:
        """Deletes (acknowledges) every entry in one backend call."""
        pass
