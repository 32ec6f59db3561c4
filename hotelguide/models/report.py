"""Report models for asynchronous location report generation."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Return timezone-aware current UTC timestamp."""
    return datetime.now(timezone.utc)


class ReportStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class Report(BaseModel):
    """Location report; created pending, completed once by the report consumer."""

    model_config = ConfigDict(use_enum_values=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    location: str
    hotel_count: int = 0
    phone_count: int = 0
    requested_at: datetime = Field(default_factory=utc_now)
    status: ReportStatus = ReportStatus.PENDING

    collection_name: ClassVar[str] = "reports"
