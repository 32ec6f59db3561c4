"""API tests for the health endpoint."""

from __future__ import annotations

from collections import Counter

from fastapi import FastAPI
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from hotelguide.api.health import router
from hotelguide.messaging.base import QueueStats
from hotelguide.utils.circuit_breaker import CircuitBreaker


class _FakeQueue:
    queue_name = "reportQueue"

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail

    async def stats(self) -> QueueStats:
        if self.fail:
            raise RuntimeError("queue unreachable")
        return QueueStats(pending=3, in_flight=1)


class _FakeConsumer:
    def __init__(self, running: bool) -> None:
        self.running = running
        self.outcomes = Counter({"completed": 4, "malformed": 1})


class _FakeRemoteResolver:
    def __init__(self) -> None:
        self.circuit_breaker = CircuitBreaker("hotel_service")
        self.circuit_breaker.record_failure()


def _build_app(*, with_db: bool = True, queue: _FakeQueue | None = None) -> FastAPI:
    app = FastAPI()
    app.include_router(router)
    if with_db:
        app.state.mongo_db = AsyncMongoMockClient()["test_db"]
    if queue is not None:
        app.state.report_queue = queue
    return app


def test_health_healthy_with_db_and_queue() -> None:
    app = _build_app(queue=_FakeQueue())
    app.state.report_consumer = _FakeConsumer(running=True)
    app.state.stats_resolver = _FakeRemoteResolver()

    response = TestClient(app).get("/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "healthy"
    assert payload["mongodb"] == "connected"
    assert payload["queue"] == {"status": "connected", "name": "reportQueue", "pending": 3, "in_flight": 1}
    assert payload["consumer"] == "running"
    assert payload["consumer_outcomes"] == {"completed": 4, "malformed": 1}
    assert payload["stats_resolver_circuit"] == "closed"
    assert payload["stats_resolver_failures"] == 1


def test_health_unhealthy_without_db() -> None:
    response = TestClient(_build_app(with_db=False, queue=_FakeQueue())).get("/health")

    payload = response.json()
    assert payload["status"] == "unhealthy"
    assert payload["mongodb"] == "disconnected"
    assert payload["consumer"] == "not_initialized"
    assert payload["stats_resolver_circuit"] == "n/a"
    assert payload["stats_resolver_failures"] == 0


def test_health_unhealthy_when_queue_unreachable() -> None:
    response = TestClient(_build_app(queue=_FakeQueue(fail=True))).get("/health")

    payload = response.json()
    assert payload["status"] == "unhealthy"
    assert payload["queue"]["status"] == "unreachable"
    assert "queue unreachable" in payload["queue"]["error"]


def test_health_reports_missing_queue() -> None:
    payload = TestClient(_build_app()).get("/health").json()

    assert payload["queue"] == {"status": "not_initialized"}
    assert payload["status"] == "unhealthy"
