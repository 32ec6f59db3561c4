"""structlog configuration rendering JSON events through stdlib logging handlers."""

from __future__ import annotations

import logging

import structlog


def configure_structured_logging() -> None:
    """Route structlog events through stdlib logging as one JSON object per record.

    Context variables bound with ``structlog.contextvars`` (for example the
    ``report_id`` of the message being processed) are merged into every event.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        cache_logger_on_first_use=False,
    )
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
