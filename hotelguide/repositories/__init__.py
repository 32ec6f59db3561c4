"""Repository interfaces and concrete data access helpers."""

from hotelguide.repositories.base import HotelRepository, ReportRepository
from hotelguide.repositories.mongo import (
    MongoHotelRepository,
    MongoReportRepository,
    create_mongo_client,
    ensure_indexes,
    get_database,
)

__all__ = [
    "HotelRepository",
    "MongoHotelRepository",
    "MongoReportRepository",
    "ReportRepository",
    "create_mongo_client",
    "ensure_indexes",
    "get_database",
]
