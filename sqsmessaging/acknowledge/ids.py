import itertools
import threading


class BatchIdGenerator:
    """Thread-safe, strictly increasing source of batch entry ids."""

    def __init__(self, start: int = 0) -> None:
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            return str(next(self._counter))


DEFAULT_BATCH_ID_GENERATOR = BatchIdGenerator()
