"""Batched acknowledgement and negative acknowledgement for SQS consumers"""

from sqsmessaging.__about__ import __version__
from sqsmessaging.acknowledge.dispatcher import BatchDispatcher
from sqsmessaging.acknowledge.ids import BatchIdGenerator
from sqsmessaging.acknowledge.negative import NegativeAcknowledger
from sqsmessaging.acknowledge.positive import Acknowledger
from sqsmessaging.acknowledge.retry import RetryMode, RetryPolicy, resolve_delay
from sqsmessaging.clients.pubsub import PubSubClient
from sqsmessaging.clients.sqs import SQSClient
from sqsmessaging.connection import SQSConnection, SQSConnectionFactory
from sqsmessaging.datastructures import BatchEntry, BatchResult, PendingItem

__all__ = [
    "__version__",
    "SQSConnectionFactory",
    "SQSConnection",
    "SQSClient",
    "PubSubClient",
    "BatchDispatcher",
    "BatchIdGenerator",
    "NegativeAcknowledger",
    "Acknowledger",
    "RetryMode",
    "RetryPolicy",
    "resolve_delay",
    "PendingItem",
    "BatchEntry",
    "BatchResult",
]
