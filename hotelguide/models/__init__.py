"""Shared data models for hotelguide."""

from hotelguide.models.hotel import ContactInfo, ContactType, Hotel, HotelOfficial, LocationStats
from hotelguide.models.report import Report, ReportStatus

__all__ = [
    "ContactInfo",
    "ContactType",
    "Hotel",
    "HotelOfficial",
    "LocationStats",
    "Report",
    "ReportStatus",
]
