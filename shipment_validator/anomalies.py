"""
Anomaly detectors over one shipment's event list: timestamps, repeated statuses,
and deliveries that skipped mandatory states. Each detector is independent and
returns anomalies in event order.
"""
import re
from datetime import datetime, timezone, tzinfo
from email.utils import parsedate_to_datetime
from typing import Sequence

from shipment_validator.models import Anomaly, AnomalyKind, TrackingEvent
from shipment_validator.status_codes import (
    DELIVERED,
    IN_TRANSIT,
    OUT_FOR_DELIVERY,
    PICKED_UP,
    status_name,
)

# Non-ISO layouts carriers commonly send; tried after datetime.fromisoformat
FALLBACK_TIMESTAMP_FORMATS: tuple[str, ...] = (
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %I:%M:%S %p",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y",
    "%b %d, %Y %H:%M:%S",
    "%b %d, %Y %H:%M",
    "%b %d, %Y",
    "%B %d, %Y %H:%M:%S",
    "%B %d, %Y",
    "%d %b %Y %H:%M:%S",
    "%d %b %Y",
)

# "Tue, 05 Mar 2024 10:15:00 GMT" and other email-style dates carry their own zone
_RFC2822_PREFIX = re.compile(r"^[A-Za-z]{3},\s")

# Delivered requires each of these somewhere in the history, checked in this order
DELIVERY_PREREQUISITES: tuple[int, ...] = (OUT_FOR_DELIVERY, IN_TRANSIT, PICKED_UP)


def parse_timestamp(value: str | None, default_tz: tzinfo = timezone.utc) -> datetime | None:
    """
    Parse an event timestamp into an aware datetime.
    Naive values are taken to be in default_tz. Returns None when unparseable.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed: datetime | None = None
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        pass
    if parsed is None and _RFC2822_PREFIX.match(text):
        try:
            parsed = parsedate_to_datetime(text)
        except (TypeError, ValueError):
            return None
    if parsed is None:
        for fmt in FALLBACK_TIMESTAMP_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=default_tz)
    return parsed


def detect_time_anomalies(
    events: Sequence[TrackingEvent],
    now: datetime,
    default_tz: tzinfo = timezone.utc,
) -> list[Anomaly]:
    anomalies: list[Anomaly] = []
    parsed = [parse_timestamp(event.timestamp, default_tz) for event in events]

    for i, event in enumerate(events):
        event_time = parsed[i]
        if event_time is None:
            anomalies.append(Anomaly(
                type=AnomalyKind.INVALID_TIMESTAMP.value,
                message=f"Invalid timestamp format: {event.timestamp}",
                event_index=i,
                timestamp=event.timestamp,
            ))
            continue

        if event_time > now:
            anomalies.append(Anomaly(
                type=AnomalyKind.TIME_ANOMALY.value,
                message=f"Event timestamp is in the future: {event.timestamp}",
                event_index=i,
                timestamp=event.timestamp,
            ))

        if i > 0:
            previous_time = parsed[i - 1]
            if previous_time is not None and previous_time > event_time:
                previous = events[i - 1]
                anomalies.append(Anomaly(
                    type=AnomalyKind.TIME_ANOMALY.value,
                    message=(
                        f"Event timestamp ({event.timestamp}) is before "
                        f"previous event ({previous.timestamp})"
                    ),
                    event_index=i,
                    timestamp=event.timestamp,
                    previous_timestamp=previous.timestamp,
                ))

    return anomalies


def detect_duplicate_events(events: Sequence[TrackingEvent]) -> list[Anomaly]:
    """Every repeat of a status code, each pointing back at its first occurrence."""
    anomalies: list[Anomaly] = []
    first_seen: dict[int, int] = {}

    for i, event in enumerate(events):
        code = event.status_code
        if code not in first_seen:
            first_seen[code] = i
            continue
        first_index = first_seen[code]
        name = event.status_name or status_name(code)
        anomalies.append(Anomaly(
            type=AnomalyKind.DUPLICATE_EVENT.value,
            message=(
                f"Duplicate status code {code} ({name}). "
                f"First seen at index {first_index}, repeated at index {i}"
            ),
            event_index=i,
            status_code=code,
            status_name=name,
            first_occurrence_index=first_index,
        ))

    return anomalies


def detect_skipped_states(events: Sequence[TrackingEvent]) -> list[Anomaly]:
    """Inert unless the shipment was delivered."""
    codes = [event.status_code for event in events]
    if DELIVERED not in codes:
        return []

    delivered_index = codes.index(DELIVERED)
    present = set(codes)
    anomalies: list[Anomaly] = []
    for missing in DELIVERY_PREREQUISITES:
        if missing in present:
            continue
        missing_name = status_name(missing)
        anomalies.append(Anomaly(
            type=AnomalyKind.SKIPPED_STATE.value,
            message=f'Shipment delivered without "{missing_name}" ({missing}) status',
            event_index=delivered_index,
            missing_status=missing,
            missing_status_name=missing_name,
        ))
    return anomalies


def detect_all_anomalies(
    events: Sequence[TrackingEvent],
    now: datetime,
    default_tz: tzinfo = timezone.utc,
) -> list[Anomaly]:
    """Temporal, then duplicate, then skipped-state findings."""
    return [
        *detect_time_anomalies(events, now, default_tz),
        *detect_duplicate_events(events),
        *detect_skipped_states(events),
    ]
