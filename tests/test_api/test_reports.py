"""API tests for report request and read endpoints."""

from __future__ import annotations

import asyncio
import json

from fastapi import FastAPI
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from hotelguide.api.reports import router
from hotelguide.models.report import Report, ReportStatus
from hotelguide.pipeline.producer import ReportProducer
from hotelguide.repositories.mongo import MongoReportRepository


class _RecordingQueue:
    queue_name = "reportQueue"

    def __init__(self, fail: bool = False) -> None:
        self.published: list[bytes] = []
        self.fail = fail

    async def publish(self, body: bytes) -> str:
        if self.fail:
            raise RuntimeError("broker unreachable")
        self.published.append(body)
        return "msg-1"


def _build_app(queue: _RecordingQueue | None = None) -> tuple[FastAPI, MongoReportRepository, _RecordingQueue]:
    db = AsyncMongoMockClient()["test_db"]
    repo = MongoReportRepository(db)
    queue = queue or _RecordingQueue()
    app = FastAPI()
    app.include_router(router)
    app.state.report_repo = repo
    app.state.report_producer = ReportProducer(report_repo=repo, queue=queue)
    return app, repo, queue


def test_request_report_returns_pending_report_and_publishes() -> None:
    app, repo, queue = _build_app()
    client = TestClient(app)

    response = client.post("/reports", json={"location": "Paris"})

    assert response.status_code == 201
    payload = response.json()
    assert payload["location"] == "Paris"
    assert payload["status"] == "pending"
    assert payload["hotel_count"] == 0
    assert payload["phone_count"] == 0
    assert [json.loads(body) for body in queue.published] == [{"id": payload["id"], "location": "Paris"}]

    stored = asyncio.run(repo.get(payload["id"]))
    assert stored is not None
    assert stored.status == ReportStatus.PENDING.value


def test_request_report_rejects_empty_location() -> None:
    app, repo, queue = _build_app()
    client = TestClient(app)

    for body in ({"location": ""}, {"location": "   "}, {}):
        response = client.post("/reports", json=body)
        assert response.status_code == 400

    assert queue.published == []
    assert asyncio.run(repo.list_reports()) == []


def test_request_report_publish_failure_returns_500_and_keeps_pending_report() -> None:
    app, repo, _ = _build_app(_RecordingQueue(fail=True))
    client = TestClient(app)

    response = client.post("/reports", json={"location": "Paris"})

    assert response.status_code == 500
    assert "broker unreachable" in response.json()["detail"]
    reports = asyncio.run(repo.list_reports())
    assert len(reports) == 1
    assert reports[0].status == ReportStatus.PENDING.value


def test_request_report_rejects_undecodable_bodies_with_400() -> None:
    app, repo, queue = _build_app()
    client = TestClient(app)
    headers = {"content-type": "application/json"}

    for body in (b"{not json", b"", b"[]", b'{"location": null}', b'{"location": 42}', b'{"location": ["Paris"]}'):
        response = client.post("/reports", content=body, headers=headers)
        assert response.status_code == 400, body

    assert queue.published == []
    assert asyncio.run(repo.list_reports()) == []


def test_list_and_get_reports() -> None:
    app, repo, _ = _build_app()
    pending = Report(location="Paris")
    done = Report(location="Rome", hotel_count=2, phone_count=1, status=ReportStatus.COMPLETED)
    asyncio.run(repo.save(pending))
    asyncio.run(repo.save(done))
    client = TestClient(app)

    all_reports = client.get("/reports")
    completed = client.get("/reports", params={"status": "completed"})
    single = client.get(f"/reports/{done.id}")

    assert all_reports.status_code == 200
    assert {item["id"] for item in all_reports.json()} == {pending.id, done.id}
    assert [item["id"] for item in completed.json()] == [done.id]
    assert single.status_code == 200
    assert single.json()["hotel_count"] == 2


def test_list_reports_empty_returns_empty_list() -> None:
    app, _, _ = _build_app()

    response = TestClient(app).get("/reports")

    assert response.status_code == 200
    assert response.json() == []


def test_get_report_errors() -> None:
    app, _, _ = _build_app()
    client = TestClient(app)

    assert client.get("/reports/not-a-uuid").status_code == 400
    assert client.get("/reports/00000000-0000-0000-0000-000000000000").status_code == 404


def test_report_endpoints_unavailable_without_dependencies() -> None:
    app = FastAPI()
    app.include_router(router)
    client = TestClient(app)

    assert client.post("/reports", json={"location": "Paris"}).status_code == 503
    assert client.get("/reports").status_code == 503
