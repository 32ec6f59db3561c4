"""Report consumer: long-running task completing pending reports from the queue."""

from __future__ import annotations

import asyncio
from collections import Counter
from enum import Enum

import structlog

from hotelguide.messaging.base import QueueMessage, QueueTransport
from hotelguide.models.report import ReportStatus
from hotelguide.pipeline.envelope import EnvelopeError, decode_envelope
from hotelguide.pipeline.stats_resolver import StatsResolver
from hotelguide.repositories.base import ReportRepository

logger = structlog.get_logger(__name__)

_BODY_PREVIEW_CHARS = 200


class ReportOutcome(str, Enum):
    COMPLETED = "completed"
    MALFORMED = "malformed"
    STATS_FAILED = "stats_failed"
    UPDATE_FAILED = "update_failed"
    REPORT_NOT_FOUND = "report_not_found"


class ReportConsumer:
    """Receive report request envelopes and complete the matching reports.

    Each message goes parse -> resolve stats -> update, strictly in that order.
    Messages are acknowledged on receipt, so any failure drops the message and
    leaves its report pending. No failure of a single message ends the loop.
    """

    def __init__(
        self,
        queue: QueueTransport,
        report_repo: ReportRepository,
        stats_resolver: StatsResolver,
        *,
        max_messages: int = 1,
        wait_seconds: int = 20,
        receive_error_backoff_seconds: float = 5.0,
    ):
        self.queue = queue
        self.report_repo = report_repo
        self.stats_resolver = stats_resolver
        self.max_messages = max_messages
        self.wait_seconds = wait_seconds
        self.receive_error_backoff_seconds = receive_error_backoff_seconds
        self.outcomes: Counter[str] = Counter()
        self._task: asyncio.Task[None] | None = None
        self._pending_receive: asyncio.Future[list[QueueMessage]] | None = None
        self._stopping = False

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task[None]:
        """Spawn the consumer loop on the running event loop (idempotent)."""
        if self._task is not None and not self._task.done():
            return self._task
        self._stopping = False
        self._task = asyncio.create_task(self.run(), name=f"report-consumer:{self.queue.queue_name}")
        return self._task

    async def stop(self) -> None:
        """Stop the loop; a message in flight at this point is dropped.

        A long-poll already running in a worker thread cannot be cancelled, so
        it is awaited before returning. The transport can be closed afterwards.
        """
        self._stopping = True
        task = self._task
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        finally:
            self._task = None
        await self._drain_pending_receive()

    async def run(self) -> None:
        logger.info("report_consumer_started", queue=self.queue.queue_name)
        try:
            while not self._stopping:
                await self.poll_once()
        finally:
            logger.info("report_consumer_stopped", queue=self.queue.queue_name, outcomes=dict(self.outcomes))

    async def poll_once(self) -> int:
        """Receive one batch and process it; returns the number of messages received."""
        self._pending_receive = asyncio.ensure_future(
            self.queue.receive(max_messages=self.max_messages, wait_seconds=self.wait_seconds)
        )
        try:
            # Shielded so cancelling the loop leaves the receive for stop() to await.
            messages = await asyncio.shield(self._pending_receive)
        except Exception as exc:  # noqa: BLE001
            self._pending_receive = None
            logger.error("report_queue_receive_failed", queue=self.queue.queue_name, error=str(exc))
            await asyncio.sleep(self.receive_error_backoff_seconds)
            return 0
        self._pending_receive = None

        for message in messages:
            try:
                await self.process_message(message)
            except Exception as exc:  # noqa: BLE001
                logger.exception("report_message_unhandled_error", message_id=message.message_id, error=str(exc))
        return len(messages)

    async def process_message(self, message: QueueMessage) -> ReportOutcome:
        """Acknowledge a delivery, then handle its body."""
        try:
            await self.queue.ack(message)
        except Exception as exc:  # noqa: BLE001
            logger.warning("report_message_ack_failed", message_id=message.message_id, error=str(exc))
        return await self.handle_body(message.body)

    async def handle_body(self, body: bytes) -> ReportOutcome:
        try:
            envelope = decode_envelope(body)
        except EnvelopeError as exc:
            logger.warning(
                "report_message_malformed",
                error=str(exc),
                body_preview=body[:_BODY_PREVIEW_CHARS].decode("utf-8", errors="replace"),
            )
            return self._record(ReportOutcome.MALFORMED)

        with structlog.contextvars.bound_contextvars(report_id=envelope.report_id, location=envelope.location):
            try:
                stats = await self.stats_resolver.fetch_stats(envelope.location)
            except Exception as exc:  # noqa: BLE001
                logger.error("report_stats_failed", error=str(exc))
                return self._record(ReportOutcome.STATS_FAILED)

            try:
                matched = await self.report_repo.update_stats(
                    envelope.report_id,
                    stats.hotel_count,
                    stats.phone_count,
                    ReportStatus.COMPLETED,
                )
            except Exception as exc:  # noqa: BLE001
                logger.error("report_update_failed", error=str(exc))
                return self._record(ReportOutcome.UPDATE_FAILED)

            if not matched:
                logger.error("report_not_found")
                return self._record(ReportOutcome.REPORT_NOT_FOUND)

            logger.info("report_completed", hotel_count=stats.hotel_count, phone_count=stats.phone_count)
            return self._record(ReportOutcome.COMPLETED)

    async def _drain_pending_receive(self) -> None:
        pending = self._pending_receive
        self._pending_receive = None
        if pending is None:
            return
        try:
            messages = await pending
        except Exception as exc:  # noqa: BLE001
            logger.warning("report_queue_receive_abandoned", queue=self.queue.queue_name, error=str(exc))
            return
        if messages:
            # Not acknowledged; the queue redelivers them after the visibility timeout.
            logger.info("report_messages_left_for_redelivery", queue=self.queue.queue_name, count=len(messages))

    def _record(self, outcome: ReportOutcome) -> ReportOutcome:
        self.outcomes[outcome.value] += 1
        return outcome
