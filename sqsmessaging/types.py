from collections.abc import Callable

from sqsmessaging.datastructures import BatchResult

# Receives a destination and up to MAX_BATCH receipt handles and performs one backend call.
BatchAction = Callable[[str, list[str]], BatchResult | None]
