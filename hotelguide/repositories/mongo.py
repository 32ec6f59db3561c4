"""MongoDB connection and initialization helpers."""

from __future__ import annotations

from typing import Any

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError

from hotelguide.models.hotel import ContactInfo, ContactType, Hotel, HotelOfficial, LocationStats
from hotelguide.models.report import Report, ReportStatus

HOTELS_COLLECTION = Hotel.collection_name
REPORTS_COLLECTION = Report.collection_name


async def create_mongo_client(mongodb_uri: str) -> AsyncIOMotorClient:
    """Create and validate an async MongoDB client connection."""
    try:
        client = AsyncIOMotorClient(mongodb_uri)
        await client.admin.command("ping")
        return client
    except PyMongoError as exc:
        raise RuntimeError(f"Failed to connect to MongoDB at {mongodb_uri}: {exc}") from exc


def get_database(client: AsyncIOMotorClient, database_name: str) -> AsyncIOMotorDatabase:
    """Return configured MongoDB database handle."""
    return client[database_name]


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create required MongoDB indexes for hotel and report collections."""
    try:
        await db[HOTELS_COLLECTION].create_index([("id", ASCENDING)], unique=True, name="uq_hotel_id")
        await db[HOTELS_COLLECTION].create_index(
            [("contacts.info_type", ASCENDING), ("contacts.info_content", ASCENDING)],
            name="idx_hotel_contacts",
        )

        await db[REPORTS_COLLECTION].create_index([("id", ASCENDING)], unique=True, name="uq_report_id")
        await db[REPORTS_COLLECTION].create_index([("requested_at", ASCENDING)], name="idx_report_requested_at")
        await db[REPORTS_COLLECTION].create_index([("status", ASCENDING)], name="idx_report_status")
    except PyMongoError as exc:
        raise RuntimeError(f"Failed to ensure MongoDB indexes: {exc}") from exc


def _strip_mongo_id(document: dict[str, Any] | None) -> dict[str, Any] | None:
    if document is None:
        return None
    cleaned = dict(document)
    cleaned.pop("_id", None)
    return cleaned


class MongoReportRepository:
    """MongoDB-backed report repository."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db[REPORTS_COLLECTION]

    async def save(self, report: Report) -> str:
        payload = report.model_dump()
        try:
            await self.collection.insert_one(payload)
        except DuplicateKeyError as exc:
            raise ValueError(f"Report with id '{report.id}' already exists") from exc
        return report.id

    async def get(self, report_id: str) -> Report | None:
        document = await self.collection.find_one({"id": report_id})
        cleaned = _strip_mongo_id(document)
        return Report.model_validate(cleaned) if cleaned else None

    async def list_reports(self, limit: int = 100, status: ReportStatus | None = None) -> list[Report]:
        query: dict[str, Any] = {}
        if status is not None:
            query["status"] = status.value if isinstance(status, ReportStatus) else str(status)
        cursor = self.collection.find(query).sort("requested_at", DESCENDING).limit(limit)
        items: list[Report] = []
        async for document in cursor:
            cleaned = _strip_mongo_id(document)
            if cleaned:
                items.append(Report.model_validate(cleaned))
        return items

    async def update_stats(
        self,
        report_id: str,
        hotel_count: int,
        phone_count: int,
        status: ReportStatus = ReportStatus.COMPLETED,
    ) -> bool:
        """Overwrite counts and status in one update; return False when no report matched."""
        status_value = status.value if isinstance(status, ReportStatus) else str(status)
        result = await self.collection.update_one(
            {"id": report_id},
            {
                "$set": {
                    "hotel_count": hotel_count,
                    "phone_count": phone_count,
                    "status": status_value,
                }
            },
        )
        return result.matched_count > 0


class MongoHotelRepository:
    """MongoDB-backed hotel directory repository; contacts are embedded per hotel."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db[HOTELS_COLLECTION]

    async def save(self, hotel: Hotel) -> str:
        payload = hotel.attach_contacts().model_dump()
        try:
            await self.collection.insert_one(payload)
        except DuplicateKeyError as exc:
            raise ValueError(f"Hotel with id '{hotel.id}' already exists") from exc
        return hotel.id

    async def get(self, hotel_id: str) -> Hotel | None:
        document = await self.collection.find_one({"id": hotel_id})
        cleaned = _strip_mongo_id(document)
        return Hotel.model_validate(cleaned) if cleaned else None

    async def delete(self, hotel_id: str) -> bool:
        result = await self.collection.delete_one({"id": hotel_id})
        return result.deleted_count > 0

    async def list_hotels(self, limit: int = 500) -> list[Hotel]:
        cursor = self.collection.find({}).sort("created_at", ASCENDING).limit(limit)
        items: list[Hotel] = []
        async for document in cursor:
            cleaned = _strip_mongo_id(document)
            if cleaned:
                items.append(Hotel.model_validate(cleaned))
        return items

    async def list_officials(self) -> list[HotelOfficial]:
        cursor = self.collection.find(
            {},
            {"owner_name": 1, "owner_surname": 1, "company_title": 1, "_id": 0},
        ).sort("created_at", ASCENDING)
        return [HotelOfficial.model_validate(row) async for row in cursor]

    async def add_contact(self, hotel_id: str, contact: ContactInfo) -> bool:
        contact.hotel_id = hotel_id
        result = await self.collection.update_one(
            {"id": hotel_id},
            {"$push": {"contacts": contact.model_dump()}},
        )
        return result.matched_count > 0

    async def remove_contact(self, hotel_id: str, contact_id: str) -> bool:
        result = await self.collection.update_one(
            {"id": hotel_id, "contacts.id": contact_id},
            {"$pull": {"contacts": {"id": contact_id}}},
        )
        return result.modified_count > 0

    async def location_stats(self, location: str) -> LocationStats:
        """Count hotels in `location` and the phone contacts among them.

        The query narrows candidates by index; `Hotel.located_in` and
        `Hotel.phone_count` decide what counts.
        """
        cursor = self.collection.find(
            {
                "contacts": {
                    "$elemMatch": {
                        "info_type": ContactType.LOCATION.value,
                        "info_content": location,
                    }
                }
            }
        )
        hotel_count = 0
        phone_count = 0
        async for document in cursor:
            cleaned = _strip_mongo_id(document)
            if not cleaned:
                continue
            hotel = Hotel.model_validate(cleaned)
            if not hotel.located_in(location):
                continue
            hotel_count += 1
            phone_count += hotel.phone_count()
        return LocationStats(hotel_count=hotel_count, phone_count=phone_count)
