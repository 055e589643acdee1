"""Protocol constants shared by the acknowledgement engine."""

from sqsmessaging.__about__ import __version__

# Maximum number of entries SQS accepts in one batch request.
MAX_BATCH = 10
MIN_BATCH = 1

# Longest ack deadline Pub/Sub allows.
PUBSUB_MAX_ACK_DEADLINE = 600

APPENDED_USER_AGENT = f"SQSPythonMessagingClient/{__version__}"
