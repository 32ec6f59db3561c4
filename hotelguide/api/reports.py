"""API endpoints for requesting and reading location reports."""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from pydantic import BaseModel, ValidationError

from hotelguide.models.report import Report, ReportStatus
from hotelguide.pipeline.producer import ReportGenerationError, ReportProducer
from hotelguide.repositories.base import ReportRepository

router = APIRouter(prefix="/reports", tags=["reports"])


class ReportRequest(BaseModel):
    """Request payload for a new location report."""

    location: str | None = None


def get_report_repo(request: Request) -> ReportRepository:
    """Get report repository from app state."""
    repository = getattr(request.app.state, "report_repo", None)
    if repository is None:
        raise HTTPException(status_code=503, detail="Report repository is not configured")
    return repository


def get_report_producer(request: Request) -> ReportProducer:
    """Get report producer from app state."""
    producer = getattr(request.app.state, "report_producer", None)
    if producer is None:
        raise HTTPException(status_code=503, detail="Report producer is not configured")
    return producer


def _parse_report_id(report_id: str) -> str:
    try:
        return str(UUID(report_id))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="Invalid report ID") from exc


@router.post("", response_model=Report, status_code=status.HTTP_201_CREATED)
async def request_report(
    request: Request,
    producer: Annotated[ReportProducer, Depends(get_report_producer)],
) -> Report:
    """Create a pending report and enqueue it for asynchronous generation.

    Any body that does not decode to `{"location": <string>}` is a 400.
    """
    try:
        payload = ReportRequest.model_validate_json(await request.body())
    except ValidationError as exc:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid request body: {exc.error_count()} validation error(s)",
        ) from exc

    location = (payload.location or "").strip()
    if not location:
        raise HTTPException(status_code=400, detail="Location must not be empty")

    try:
        return await producer.request_report_generation(location)
    except ReportGenerationError as exc:
        raise HTTPException(status_code=500, detail=f"Error creating report: {exc}") from exc


@router.get("", response_model=list[Report])
async def list_reports(
    report_repo: Annotated[ReportRepository, Depends(get_report_repo)],
    status_filter: Annotated[ReportStatus | None, Query(alias="status")] = None,
    limit: int = Query(default=100, ge=1, le=1000),
) -> list[Report]:
    """Return reports, newest request first."""
    return await report_repo.list_reports(limit=limit, status=status_filter)


@router.get("/{report_id}", response_model=Report)
async def get_report(
    report_id: str,
    report_repo: Annotated[ReportRepository, Depends(get_report_repo)],
) -> Report:
    """Return one report by ID."""
    report = await report_repo.get(_parse_report_id(report_id))
    if report is None:
        raise HTTPException(status_code=404, detail="Report not found")
    return report
