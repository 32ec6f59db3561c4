"""Queue transport contract shared by the report producer and consumer."""

from __future__ import annotations

from typing import Protocol

from pydantic import BaseModel


class QueueMessage(BaseModel):
    """One delivery received from the queue."""

    body: bytes
    receipt_handle: str
    message_id: str = ""


class QueueStats(BaseModel):
    """Approximate queue depth."""

    pending: int = 0
    in_flight: int = 0


class QueueTransport(Protocol):
    """Durable, named, at-least-once channel carrying opaque byte payloads."""

    queue_name: str

    async def declare(self) -> str: ...

    async def publish(self, body: bytes) -> str: ...

    async def receive(self, max_messages: int = 1, wait_seconds: int = 20) -> list[QueueMessage]: ...

    async def ack(self, message: QueueMessage) -> None: ...

    async def stats(self) -> QueueStats: ...

    async def close(self) -> None: ...
