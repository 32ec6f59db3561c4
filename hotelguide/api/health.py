"""Health endpoint covering the record store, report consumer and queue."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request

router = APIRouter(prefix="/health", tags=["health"])


def _get_consumer_status(request: Request) -> tuple[str, dict[str, int]]:
    consumer = getattr(request.app.state, "report_consumer", None)
    if consumer is None:
        return "not_initialized", {}
    status = "running" if consumer.running else "stopped"
    return status, dict(consumer.outcomes)


async def _get_queue_status(request: Request) -> dict[str, Any]:
    queue = getattr(request.app.state, "report_queue", None)
    if queue is None:
        return {"status": "not_initialized"}
    try:
        stats = await queue.stats()
    except Exception as exc:  # noqa: BLE001
        return {"status": "unreachable", "name": queue.queue_name, "error": str(exc)}
    return {"status": "connected", "name": queue.queue_name, **stats.model_dump()}


@router.get("")
async def health_check(request: Request) -> dict[str, Any]:
    """Report core dependency health."""
    mongodb_status = "disconnected"
    db = getattr(request.app.state, "mongo_db", None)
    if db is not None:
        try:
            await db.command("ping")
            mongodb_status = "connected"
        except Exception:  # noqa: BLE001
            mongodb_status = "disconnected"

    consumer_status, consumer_outcomes = _get_consumer_status(request)
    queue_status = await _get_queue_status(request)

    stats_resolver = getattr(request.app.state, "stats_resolver", None)
    breaker = getattr(stats_resolver, "circuit_breaker", None)

    healthy = mongodb_status == "connected" and queue_status["status"] == "connected"
    return {
        "status": "healthy" if healthy else "unhealthy",
        "mongodb": mongodb_status,
        "queue": queue_status,
        "consumer": consumer_status,
        "consumer_outcomes": consumer_outcomes,
        "stats_resolver_circuit": breaker.state if breaker is not None else "n/a",
        "stats_resolver_failures": breaker.consecutive_failures if breaker is not None else 0,
    }
