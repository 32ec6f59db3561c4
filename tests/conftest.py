"""Shared test fixtures for hotelguide."""

from __future__ import annotations

import pytest
import pytest_asyncio
from mongomock_motor import AsyncMongoMockClient

from hotelguide.messaging.base import QueueMessage, QueueStats
from hotelguide.models.hotel import ContactInfo, ContactType, Hotel
from hotelguide.repositories.mongo import MongoHotelRepository, MongoReportRepository, ensure_indexes


class InMemoryQueue:
    """Queue transport double holding published bodies in a list."""

    def __init__(self, queue_name: str = "reportQueue"):
        self.queue_name = queue_name
        self.pending: list[QueueMessage] = []
        self.acked: list[QueueMessage] = []
        self.closed = False
        self._counter = 0

    async def declare(self) -> str:
        return f"memory://{self.queue_name}"

    async def publish(self, body: bytes) -> str:
        self._counter += 1
        message_id = f"msg-{self._counter}"
        self.pending.append(QueueMessage(body=body, receipt_handle=f"rh-{self._counter}", message_id=message_id))
        return message_id

    async def receive(self, max_messages: int = 1, wait_seconds: int = 20) -> list[QueueMessage]:
        del wait_seconds
        batch = self.pending[:max_messages]
        self.pending = self.pending[max_messages:]
        return batch

    async def ack(self, message: QueueMessage) -> None:
        self.acked.append(message)

    async def stats(self) -> QueueStats:
        return QueueStats(pending=len(self.pending), in_flight=0)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def mongo_client() -> AsyncMongoMockClient:
    """Return an isolated async Mongo mock client per test."""
    return AsyncMongoMockClient()


@pytest_asyncio.fixture
async def mongo_db(mongo_client: AsyncMongoMockClient):
    """Return indexed test database instance."""
    db = mongo_client["hotelguide_test"]
    await ensure_indexes(db)
    return db


@pytest.fixture
def report_repo(mongo_db):
    """Mongo report repository fixture."""
    return MongoReportRepository(mongo_db)


@pytest.fixture
def hotel_repo(mongo_db):
    """Mongo hotel repository fixture."""
    return MongoHotelRepository(mongo_db)


@pytest.fixture
def memory_queue() -> InMemoryQueue:
    return InMemoryQueue()


@pytest.fixture
def create_test_hotel():
    """Factory for hotels with a location contact and a number of phone contacts."""

    def _create(
        *,
        location: str | None = "Paris",
        phones: int = 1,
        owner_name: str = "Ada",
        owner_surname: str = "Lovelace",
        company_title: str = "Grand Hotel",
    ) -> Hotel:
        contacts: list[ContactInfo] = []
        if location is not None:
            contacts.append(ContactInfo(info_type=ContactType.LOCATION.value, info_content=location))
        for index in range(phones):
            contacts.append(ContactInfo(info_type=ContactType.PHONE.value, info_content=f"+33 1 00 00 00 {index:02d}"))
        return Hotel(
            owner_name=owner_name,
            owner_surname=owner_surname,
            company_title=company_title,
            contacts=contacts,
        ).attach_contacts()

    return _create
