"""Tests for report and hotel models."""

from __future__ import annotations

from uuid import UUID

import pytest
from pydantic import ValidationError

from hotelguide.models import ContactInfo, ContactType, Hotel, LocationStats, Report, ReportStatus


def test_report_defaults_to_pending_with_zero_counts() -> None:
    report = Report(location="Paris")

    assert UUID(report.id)
    assert report.status == ReportStatus.PENDING.value
    assert report.hotel_count == 0
    assert report.phone_count == 0
    assert report.requested_at.tzinfo is not None


def test_report_ids_are_unique() -> None:
    assert Report(location="Paris").id != Report(location="Paris").id


def test_report_roundtrips_through_dump() -> None:
    report = Report(location="Berlin", hotel_count=3, phone_count=2, status=ReportStatus.COMPLETED)

    restored = Report.model_validate(report.model_dump())

    assert restored == report
    assert restored.status == ReportStatus.COMPLETED.value


def test_hotel_attach_contacts_stamps_hotel_id() -> None:
    hotel = Hotel(
        owner_name="Ada",
        owner_surname="Lovelace",
        company_title="Grand",
        contacts=[
            ContactInfo(info_type=ContactType.LOCATION.value, info_content="Paris"),
            ContactInfo(info_type=ContactType.PHONE.value, info_content="+33 1"),
            ContactInfo(info_type=ContactType.PHONE.value, info_content="+33 2"),
            ContactInfo(info_type=ContactType.EMAIL.value, info_content="desk@grand.test"),
        ],
    ).attach_contacts()

    assert {contact.hotel_id for contact in hotel.contacts} == {hotel.id}
    assert hotel.located_in("Paris") is True
    assert hotel.located_in("Rome") is False
    assert hotel.phone_count() == 2


def test_location_match_is_exact() -> None:
    hotel = Hotel(
        owner_name="Ada",
        owner_surname="Lovelace",
        company_title="Grand",
        contacts=[ContactInfo(info_type="location", info_content="Paris")],
    )

    assert hotel.located_in("paris") is False


def test_location_stats_rejects_negative_counts() -> None:
    with pytest.raises(ValidationError):
        LocationStats(hotel_count=-1, phone_count=0)
