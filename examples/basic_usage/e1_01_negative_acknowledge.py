from collections import deque

from sqsmessaging import PendingItem, RetryMode, SQSConnectionFactory
from sqsmessaging.logger import logger

QUEUE_URL = "http://localhost:4566/000000000000/orders"

factory = SQSConnectionFactory(
    region_name="us-east-1",
    endpoint_url="http://localhost:4566",
    retry_mode=RetryMode.EXPLICIT_DELAY,
    retry_delay=30,
)
connection = factory.create_connection("test", "test")

sqs = factory.sqs_client
response = sqs.receive_message(QueueUrl=QUEUE_URL, MaxNumberOfMessages=10)
pending = deque(
    PendingItem(
        receipt_handle=message["ReceiptHandle"],
        destination=QUEUE_URL,
        message_id=message["MessageId"],
    )
    for message in response.get("Messages", [])
)

for result in connection.nack(pending, QUEUE_URL):
    logger.info(f"{len(result.successful)} messages will be redelivered in 30 seconds.")
