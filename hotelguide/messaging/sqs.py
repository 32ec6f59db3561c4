"""SQS-backed queue transport.

boto3 is synchronous, so every call runs in a worker thread to keep the event
loop free while the consumer long-polls.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from hotelguide.messaging.base import QueueMessage, QueueStats
from hotelguide.utils.retry import retry_in_thread

logger = logging.getLogger(__name__)

REPORT_QUEUE_NAME = "reportQueue"
SQS_MAX_MESSAGES = 10
SQS_MAX_WAIT_SECONDS = 20


def create_sqs_client(region_name: str, endpoint_url: str | None = None) -> Any:
    """Return a boto3 SQS client; `endpoint_url` targets LocalStack/ElasticMQ in development."""
    return boto3.client("sqs", region_name=region_name, endpoint_url=endpoint_url)


class SQSQueueTransport:
    """Publish to and receive from a single named SQS queue."""

    def __init__(
        self,
        client: Any,
        queue_name: str = REPORT_QUEUE_NAME,
        *,
        queue_url: str | None = None,
        visibility_timeout: int = 300,
        declare_attempts: int = 3,
        publish_attempts: int = 2,
        retry_base_delay_seconds: float = 0.2,
    ):
        self.client = client
        self.queue_name = queue_name
        self.visibility_timeout = visibility_timeout
        self.declare_attempts = declare_attempts
        self.publish_attempts = publish_attempts
        self.retry_base_delay_seconds = retry_base_delay_seconds
        self._queue_url = queue_url

    @property
    def queue_url(self) -> str:
        if not self._queue_url:
            raise RuntimeError(f"Queue '{self.queue_name}' has not been declared")
        return self._queue_url

    async def declare(self) -> str:
        """Ensure the queue exists and resolve its URL. Safe to call repeatedly."""
        if self._queue_url:
            return self._queue_url
        try:
            response = await retry_in_thread(
                lambda: self.client.create_queue(QueueName=self.queue_name),
                attempts=self.declare_attempts,
                base_delay_seconds=self.retry_base_delay_seconds,
            )
        except (BotoCoreError, ClientError) as exc:
            raise RuntimeError(f"Failed to declare queue '{self.queue_name}': {exc}") from exc

        self._queue_url = str(response["QueueUrl"])
        logger.info("Queue %s initialized (url=%s)", self.queue_name, self._queue_url)
        return self._queue_url

    async def publish(self, body: bytes) -> str:
        """Send one message body; returns the SQS message id."""
        queue_url = self.queue_url
        try:
            response = await retry_in_thread(
                lambda: self.client.send_message(QueueUrl=queue_url, MessageBody=body.decode("utf-8")),
                attempts=self.publish_attempts,
                base_delay_seconds=self.retry_base_delay_seconds,
            )
        except (BotoCoreError, ClientError) as exc:
            raise RuntimeError(f"Failed to publish message to queue '{self.queue_name}': {exc}") from exc

        message_id = str(response["MessageId"])
        logger.debug("Message %s published to queue %s", message_id, self.queue_name)
        return message_id

    async def receive(self, max_messages: int = 1, wait_seconds: int = SQS_MAX_WAIT_SECONDS) -> list[QueueMessage]:
        """Long-poll for up to `max_messages` deliveries."""
        response = await asyncio.to_thread(
            self.client.receive_message,
            QueueUrl=self.queue_url,
            MaxNumberOfMessages=max(1, min(max_messages, SQS_MAX_MESSAGES)),
            WaitTimeSeconds=max(0, min(wait_seconds, SQS_MAX_WAIT_SECONDS)),
            VisibilityTimeout=self.visibility_timeout,
        )
        return [
            QueueMessage(
                body=str(raw.get("Body", "")).encode("utf-8"),
                receipt_handle=str(raw["ReceiptHandle"]),
                message_id=str(raw.get("MessageId", "")),
            )
            for raw in response.get("Messages", [])
        ]

    async def ack(self, message: QueueMessage) -> None:
        """Delete a delivered message so it is not redelivered."""
        await asyncio.to_thread(
            self.client.delete_message,
            QueueUrl=self.queue_url,
            ReceiptHandle=message.receipt_handle,
        )

    async def stats(self) -> QueueStats:
        response = await asyncio.to_thread(
            self.client.get_queue_attributes,
            QueueUrl=self.queue_url,
            AttributeNames=["ApproximateNumberOfMessages", "ApproximateNumberOfMessagesNotVisible"],
        )
        attributes = response.get("Attributes", {})
        return QueueStats(
            pending=int(attributes.get("ApproximateNumberOfMessages", 0)),
            in_flight=int(attributes.get("ApproximateNumberOfMessagesNotVisible", 0)),
        )

    async def close(self) -> None:
        self.client.close()
