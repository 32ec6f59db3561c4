"""API endpoints for the hotel directory and its per-location stats."""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from pydantic import AliasChoices, BaseModel, Field

from hotelguide.models.hotel import ContactInfo, Hotel, HotelOfficial, LocationStats
from hotelguide.repositories.base import HotelRepository

router = APIRouter(prefix="/hotels", tags=["hotels"])


class ContactRequest(BaseModel):
    """Contact entry submitted with a hotel or on its own."""

    info_type: str = Field(min_length=1)
    info_content: str = Field(min_length=1)


class HotelCreateRequest(BaseModel):
    """Request payload for hotel creation; accepts camelCase or snake_case keys."""

    owner_name: str = Field(min_length=1, validation_alias=AliasChoices("ownerName", "owner_name"))
    owner_surname: str = Field(min_length=1, validation_alias=AliasChoices("ownerSurname", "owner_surname"))
    company_title: str = Field(min_length=1, validation_alias=AliasChoices("companyTitle", "company_title"))
    contacts: list[ContactRequest] = Field(default_factory=list)


def get_hotel_repo(request: Request) -> HotelRepository:
    """Get hotel repository from app state."""
    repository = getattr(request.app.state, "hotel_repo", None)
    if repository is None:
        raise HTTPException(status_code=503, detail="Hotel repository is not configured")
    return repository


def _parse_uuid(value: str, label: str) -> str:
    try:
        return str(UUID(value))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid {label} ID") from exc


@router.post("", response_model=Hotel, status_code=status.HTTP_201_CREATED)
async def create_hotel(
    payload: HotelCreateRequest,
    hotel_repo: Annotated[HotelRepository, Depends(get_hotel_repo)],
) -> Hotel:
    """Create a hotel with its initial contacts."""
    hotel = Hotel(
        owner_name=payload.owner_name,
        owner_surname=payload.owner_surname,
        company_title=payload.company_title,
        contacts=[ContactInfo(info_type=item.info_type, info_content=item.info_content) for item in payload.contacts],
    ).attach_contacts()
    await hotel_repo.save(hotel)
    return hotel


@router.get("", response_model=list[Hotel])
async def list_hotels(
    hotel_repo: Annotated[HotelRepository, Depends(get_hotel_repo)],
    limit: int = Query(default=500, ge=1, le=5000),
) -> list[Hotel]:
    return await hotel_repo.list_hotels(limit=limit)


@router.get("/officials", response_model=list[HotelOfficial])
async def list_hotel_officials(
    hotel_repo: Annotated[HotelRepository, Depends(get_hotel_repo)],
) -> list[HotelOfficial]:
    """Return owner and company details for every hotel."""
    return await hotel_repo.list_officials()


@router.get("/stats", response_model=LocationStats)
async def get_location_stats(
    hotel_repo: Annotated[HotelRepository, Depends(get_hotel_repo)],
    location: str = "",
) -> LocationStats:
    """Count hotels in a location and the phone contacts among them."""
    if not location:
        raise HTTPException(status_code=400, detail="location parameter is required")
    return await hotel_repo.location_stats(location)


@router.get("/{hotel_id}", response_model=Hotel)
async def get_hotel(
    hotel_id: str,
    hotel_repo: Annotated[HotelRepository, Depends(get_hotel_repo)],
) -> Hotel:
    hotel = await hotel_repo.get(_parse_uuid(hotel_id, "hotel"))
    if hotel is None:
        raise HTTPException(status_code=404, detail="Hotel not found")
    return hotel


@router.delete("/{hotel_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_hotel(
    hotel_id: str,
    hotel_repo: Annotated[HotelRepository, Depends(get_hotel_repo)],
) -> Response:
    deleted = await hotel_repo.delete(_parse_uuid(hotel_id, "hotel"))
    if not deleted:
        raise HTTPException(status_code=404, detail="Hotel not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{hotel_id}/contacts", response_model=ContactInfo)
async def add_contact(
    hotel_id: str,
    payload: ContactRequest,
    hotel_repo: Annotated[HotelRepository, Depends(get_hotel_repo)],
) -> ContactInfo:
    """Attach a new contact entry to an existing hotel."""
    parsed_hotel_id = _parse_uuid(hotel_id, "hotel")
    contact = ContactInfo(hotel_id=parsed_hotel_id, info_type=payload.info_type, info_content=payload.info_content)
    if not await hotel_repo.add_contact(parsed_hotel_id, contact):
        raise HTTPException(status_code=404, detail="Hotel not found")
    return contact


@router.delete("/{hotel_id}/contacts/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_contact(
    hotel_id: str,
    contact_id: str,
    hotel_repo: Annotated[HotelRepository, Depends(get_hotel_repo)],
) -> Response:
    removed = await hotel_repo.remove_contact(_parse_uuid(hotel_id, "hotel"), _parse_uuid(contact_id, "contact"))
    if not removed:
        raise HTTPException(status_code=404, detail="Contact not found for hotel")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
