"""Queue transport contracts and the SQS implementation."""

from hotelguide.messaging.base import QueueMessage, QueueStats, QueueTransport
from hotelguide.messaging.sqs import SQSQueueTransport, create_sqs_client

__all__ = [
    "QueueMessage",
    "QueueStats",
    "QueueTransport",
    "SQSQueueTransport",
    "create_sqs_client",
]
