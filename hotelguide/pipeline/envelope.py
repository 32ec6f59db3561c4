"""Report request envelope: the JSON body carried through the report queue.

Wire format is exactly ``{"id": "<uuid-string>", "location": "<string>"}``.
No headers, correlation ids or priorities travel with it.
"""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from hotelguide.models.report import Report


class EnvelopeError(ValueError):
    """Raised when a queue payload is not a valid report request envelope."""


class ReportRequestEnvelope(BaseModel):
    """Correlates an asynchronous report request with its stored report."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: UUID
    location: str = Field(min_length=1)

    @classmethod
    def for_report(cls, report: Report) -> "ReportRequestEnvelope":
        return cls(id=UUID(report.id), location=report.location)

    @property
    def report_id(self) -> str:
        return str(self.id)


def encode_envelope(envelope: ReportRequestEnvelope) -> bytes:
    """Serialize an envelope to its compact UTF-8 JSON body."""
    return envelope.model_dump_json().encode("utf-8")


def decode_envelope(body: bytes | str) -> ReportRequestEnvelope:
    """Parse a queue body into an envelope, raising EnvelopeError on malformed input."""
    try:
        return ReportRequestEnvelope.model_validate_json(body)
    except ValidationError as exc:
        raise EnvelopeError(f"Malformed report request envelope: {exc.error_count()} validation error(s)") from exc
