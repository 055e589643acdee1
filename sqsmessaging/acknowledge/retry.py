"""Retry modes applied when a message is negatively acknowledged."""

from dataclasses import dataclass
from enum import Enum

NACK_TIMEOUT = 0


class RetryMode(str, Enum):
    """How a negative acknowledgement affects the redelivery delay.

    - DEFAULT_DELAY: reset the visibility timeout to 0, the message is
      redelivered right away.
    - EXPLICIT_DELAY: set the visibility timeout to an explicit delay.
    - QUEUE_DELAY: leave the visibility timeout configured on the queue.
    """

    DEFAULT_DELAY = "default_delay"
    EXPLICIT_DELAY = "explicit_delay"
    QUEUE_DELAY = "queue_delay"


@dataclass(frozen=True)
class RetryPolicy:
    mode: RetryMode = RetryMode.DEFAULT_DELAY
    delay: int = 0


def resolve_delay(policy: RetryPolicy | None) -> int | None:
    """Computes the visibility timeout for a negatively acknowledged message.

    Args:
        policy: The configured retry policy. A missing policy behaves as
            DEFAULT_DELAY.

    Returns:
        The delay in seconds, or None when the queue's own visibility timeout
        must be left in place and no call should be made at all.
    """
    if policy is None:
        return NACK_TIMEOUT

    match policy.mode:
        case RetryMode.EXPLICIT_DELAY:
            return policy.delay if policy.delay >= 0 else NACK_TIMEOUT
        case RetryMode.QUEUE_DELAY:
            return None
        case _:
            return NACK_TIMEOUT
