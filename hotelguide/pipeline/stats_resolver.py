"""Location statistics resolvers used by the report consumer.

Two interchangeable implementations answer "how many hotels / phone contacts
exist for location X": a local aggregation over the hotel collection and an
HTTP client for a separately deployed hotel directory service.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Protocol

import httpx
from pydantic import ValidationError

from hotelguide.models.hotel import LocationStats
from hotelguide.repositories.base import HotelRepository
from hotelguide.utils.circuit_breaker import CircuitBreaker
from hotelguide.utils.retry import retry_async

logger = logging.getLogger(__name__)


class StatsResolutionError(RuntimeError):
    """Raised when hotel/phone counts for a location cannot be obtained."""


class StatsResolver(Protocol):
    """Contract for resolving hotel and phone contact counts per location."""

    async def fetch_stats(self, location: str) -> LocationStats: ...

    async def close(self) -> None: ...


class LocalStatsResolver:
    """Resolve counts directly against the hotel repository."""

    def __init__(self, hotel_repo: HotelRepository):
        self.hotel_repo = hotel_repo

    async def fetch_stats(self, location: str) -> LocationStats:
        try:
            return await self.hotel_repo.location_stats(location)
        except Exception as exc:  # noqa: BLE001
            raise StatsResolutionError(f"Failed to aggregate hotel stats for location {location!r}: {exc}") from exc

    async def close(self) -> None:
        return None


class RemoteStatsResolver:
    """Resolve counts via `GET {base}/hotels/stats?location=...` on the hotel service."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: int = 10,
        retry_attempts: int = 2,
        retry_base_delay_seconds: float = 0.2,
        circuit_breaker_failure_threshold: int = 3,
        circuit_breaker_recovery_seconds: int = 60,
        circuit_time_fn: Callable[[], float] | None = None,
        session: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.retry_attempts = retry_attempts
        self.retry_base_delay_seconds = retry_base_delay_seconds
        self.circuit_breaker = CircuitBreaker(
            "hotel_service",
            failure_threshold=circuit_breaker_failure_threshold,
            recovery_seconds=float(circuit_breaker_recovery_seconds),
            time_fn=circuit_time_fn or time.monotonic,
        )
        self.session = session or httpx.AsyncClient(timeout=float(timeout_seconds))

    async def fetch_stats(self, location: str) -> LocationStats:
        if self.circuit_breaker.is_open():
            raise StatsResolutionError(
                f"{self.circuit_breaker.name} circuit breaker open; retry in {self.circuit_breaker.seconds_until_close():.1f}s"
            )

        try:
            stats = await retry_async(
                lambda: self._request_stats(location),
                attempts=self.retry_attempts,
                base_delay_seconds=self.retry_base_delay_seconds,
            )
        except httpx.HTTPStatusError as exc:
            self.circuit_breaker.record_failure()
            raise StatsResolutionError(
                f"Hotel service returned status {exc.response.status_code} for location {location!r}"
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            self.circuit_breaker.record_failure()
            raise StatsResolutionError(f"Failed to fetch hotel stats for location {location!r}: {exc}") from exc

        self.circuit_breaker.record_success()
        return stats

    async def close(self) -> None:
        """Close underlying HTTP client."""
        await self.session.aclose()

    async def _request_stats(self, location: str) -> LocationStats:
        response = await self.session.get(f"{self.base_url}/hotels/stats", params={"location": location})
        response.raise_for_status()
        try:
            return LocationStats.model_validate(response.json())
        except ValidationError as exc:
            logger.warning("Hotel service stats payload rejected: location=%s error=%s", location, exc)
            raise ValueError(f"Invalid hotel stats payload: {exc.error_count()} validation error(s)") from exc
