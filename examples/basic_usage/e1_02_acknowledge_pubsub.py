from collections import deque

from sqsmessaging import PendingItem, PubSubClient, RetryPolicy, SQSConnection
from sqsmessaging.logger import logger

SUBSCRIPTION_PATH = "projects/sqsmessaging-local/subscriptions/orders"

connection = SQSConnection(client=PubSubClient(), retry_policy=RetryPolicy())

pending = deque(
    PendingItem(receipt_handle=ack_id, destination=SUBSCRIPTION_PATH)
    for ack_id in ["ack-id-1", "ack-id-2"]
)

for result in connection.ack(pending, SUBSCRIPTION_PATH):
    result.raise_for_failures()
    logger.info(f"Acknowledged {len(result.successful)} messages.")
