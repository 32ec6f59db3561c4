"""Report producer: persist a pending report, then enqueue its request envelope."""

from __future__ import annotations

import structlog

from hotelguide.messaging.base import QueueTransport
from hotelguide.models.report import Report, ReportStatus
from hotelguide.pipeline.envelope import ReportRequestEnvelope, encode_envelope
from hotelguide.repositories.base import ReportRepository

logger = structlog.get_logger(__name__)


class ReportGenerationError(RuntimeError):
    """Base error for a report request that could not be fully accepted."""


class ReportPersistenceError(ReportGenerationError):
    """The pending report could not be stored; nothing was published."""


class ReportPublishError(ReportGenerationError):
    """The pending report was stored but its envelope was not accepted by the queue."""

    def __init__(self, message: str, report: Report):
        super().__init__(message)
        self.report = report


class ReportProducer:
    """Create pending reports and hand them to the report consumer through the queue.

    The store write always happens before the publish. A publish failure leaves the
    pending report in place; retrying the request creates a new report rather than
    resuming the old one.
    """

    def __init__(self, report_repo: ReportRepository, queue: QueueTransport):
        self.report_repo = report_repo
        self.queue = queue

    async def request_report_generation(self, location: str) -> Report:
        """Store a pending report for `location` and publish its envelope."""
        if not location:
            raise ValueError("location must not be empty")

        report = Report(location=location, status=ReportStatus.PENDING)
        log = logger.bind(report_id=report.id, location=location)

        try:
            await self.report_repo.save(report)
        except Exception as exc:  # noqa: BLE001
            log.error("report_persist_failed", error=str(exc))
            raise ReportPersistenceError(f"Failed to save report: {exc}") from exc

        body = encode_envelope(ReportRequestEnvelope.for_report(report))
        try:
            message_id = await self.queue.publish(body)
        except Exception as exc:  # noqa: BLE001
            log.error("report_publish_failed", queue=self.queue.queue_name, error=str(exc))
            raise ReportPublishError(f"Failed to publish report generation request: {exc}", report) from exc

        log.info("report_requested", queue=self.queue.queue_name, message_id=message_id)
        return report
