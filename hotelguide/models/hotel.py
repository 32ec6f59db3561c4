"""Hotel directory models."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Return timezone-aware current UTC timestamp."""
    return datetime.now(timezone.utc)


class ContactType(str, Enum):
    PHONE = "phone"
    EMAIL = "email"
    FAX = "fax"
    LOCATION = "location"


class ContactInfo(BaseModel):
    """A single piece of contact information attached to a hotel."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    hotel_id: str | None = None
    info_type: str
    info_content: str


class Hotel(BaseModel):
    """Hotel record with embedded contacts."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    owner_name: str
    owner_surname: str
    company_title: str
    contacts: list[ContactInfo] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)

    collection_name: ClassVar[str] = "hotels"

    def attach_contacts(self) -> "Hotel":
        """Stamp this hotel's id onto every embedded contact."""
        for contact in self.contacts:
            contact.hotel_id = self.id
        return self

    def located_in(self, location: str) -> bool:
        return any(
            contact.info_type == ContactType.LOCATION.value and contact.info_content == location
            for contact in self.contacts
        )

    def phone_count(self) -> int:
        return sum(1 for contact in self.contacts if contact.info_type == ContactType.PHONE.value)


class HotelOfficial(BaseModel):
    """Owner/company projection of a hotel record."""

    owner_name: str
    owner_surname: str
    company_title: str


class LocationStats(BaseModel):
    """Hotel and phone contact counts for one location."""

    hotel_count: int = Field(default=0, ge=0)
    phone_count: int = Field(default=0, ge=0)
