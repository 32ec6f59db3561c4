"""Repository protocol definitions for the data access layer."""

from __future__ import annotations

from typing import Protocol

from hotelguide.models.hotel import ContactInfo, Hotel, HotelOfficial, LocationStats
from hotelguide.models.report import Report, ReportStatus


class ReportRepository(Protocol):
    """Data access contract for location reports."""

    async def save(self, report: Report) -> str: ...

    async def get(self, report_id: str) -> Report | None: ...

    async def list_reports(self, limit: int = 100, status: ReportStatus | None = None) -> list[Report]: ...

    async def update_stats(
        self,
        report_id: str,
        hotel_count: int,
        phone_count: int,
        status: ReportStatus = ReportStatus.COMPLETED,
    ) -> bool: ...


class HotelRepository(Protocol):
    """Data access contract for the hotel directory."""

    async def save(self, hotel: Hotel) -> str: ...

    async def get(self, hotel_id: str) -> Hotel | None: ...

    async def delete(self, hotel_id: str) -> bool: ...

    async def list_hotels(self, limit: int = 500) -> list[Hotel]: ...

    async def list_officials(self) -> list[HotelOfficial]: ...

    async def add_contact(self, hotel_id: str, contact: ContactInfo) -> bool: ...

    async def remove_contact(self, hotel_id: str, contact_id: str) -> bool: ...

    async def location_stats(self, location: str) -> LocationStats: ...
