"""
Shared builders for validator tests: events, shipments, and a fixed evaluation instant.
"""
from datetime import datetime, timedelta, timezone

from shipment_validator.models import ShipmentRecord, TrackingEvent
from shipment_validator.status_codes import status_name

NOW = datetime(2025, 1, 1, tzinfo=timezone.utc)
_BASE = datetime(2024, 6, 1, 8, 0, tzinfo=timezone.utc)

HAPPY_PATH = [1000, 1010, 1200, 1220, 1700, 1900]


def event(status_code: int, timestamp: str | None = None, offset_hours: int = 0) -> TrackingEvent:
    """Event with the registry name; timestamp defaults to a past instant offset from a base."""
    if timestamp is None:
        timestamp = (_BASE + timedelta(hours=offset_hours)).isoformat()
    return TrackingEvent(
        status_code=status_code,
        status_name=status_name(status_code),
        timestamp=timestamp,
    )


def events(*codes: int) -> list[TrackingEvent]:
    """One event per code, one hour apart in reporting order."""
    return [event(code, offset_hours=i) for i, code in enumerate(codes)]


def shipment(
    tracking_events: list[TrackingEvent] | None,
    shipment_no: str = "SHP-001",
    tracking_id: str = "TRK-001",
) -> ShipmentRecord:
    return ShipmentRecord(
        shipment_no=shipment_no,
        tracking_id=tracking_id,
        tracking_events=tracking_events,
    )
