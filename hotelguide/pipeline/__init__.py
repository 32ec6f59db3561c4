"""Asynchronous report generation pipeline."""

from hotelguide.pipeline.consumer import ReportConsumer, ReportOutcome
from hotelguide.pipeline.envelope import EnvelopeError, ReportRequestEnvelope, decode_envelope, encode_envelope
from hotelguide.pipeline.producer import (
    ReportGenerationError,
    ReportPersistenceError,
    ReportProducer,
    ReportPublishError,
)
from hotelguide.pipeline.stats_resolver import (
    LocalStatsResolver,
    RemoteStatsResolver,
    StatsResolutionError,
    StatsResolver,
)

__all__ = [
    "EnvelopeError",
    "LocalStatsResolver",
    "RemoteStatsResolver",
    "ReportConsumer",
    "ReportGenerationError",
    "ReportOutcome",
    "ReportPersistenceError",
    "ReportProducer",
    "ReportPublishError",
    "ReportRequestEnvelope",
    "StatsResolutionError",
    "StatsResolver",
    "decode_envelope",
    "encode_envelope",
]
