"""
Checks a shipment's event order against the lifecycle state machine:
valid starting status, then every consecutive pair of statuses.
"""
from typing import Sequence

from shipment_validator.models import Anomaly, AnomalyKind, TrackingEvent
from shipment_validator.status_codes import is_terminal, is_valid_start, status_name
from shipment_validator.transitions import is_valid_transition


def _display_name(event: TrackingEvent) -> str:
    return event.status_name or status_name(event.status_code)


def validate_event_sequence(events: Sequence[TrackingEvent]) -> list[Anomaly]:
    """
    Start-state and transition anomalies in event order. An empty list yields
    nothing; reporting a shipment with no events is the evaluator's job.
    """
    anomalies: list[Anomaly] = []
    if not events:
        return anomalies

    first = events[0]
    if not is_valid_start(first.status_code):
        anomalies.append(Anomaly(
            type=AnomalyKind.INVALID_START_STATE.value,
            message=(
                f"Invalid starting status: {_display_name(first)} ({first.status_code}). "
                f"Must start with Booking Pending (1000) or Shipment Booked (1010)."
            ),
            event_index=0,
            status_code=first.status_code,
            status_name=_display_name(first),
        ))

    for i in range(1, len(events)):
        prev, curr = events[i - 1], events[i]
        if is_valid_transition(prev.status_code, curr.status_code):
            continue
        from_name, to_name = _display_name(prev), _display_name(curr)
        if is_terminal(prev.status_code):
            message = (
                f'Cannot transition from terminal state "{from_name}" ({prev.status_code}) '
                f'to "{to_name}" ({curr.status_code})'
            )
        else:
            message = (
                f'Invalid transition from "{from_name}" ({prev.status_code}) '
                f'to "{to_name}" ({curr.status_code})'
            )
        anomalies.append(Anomaly(
            type=AnomalyKind.INVALID_TRANSITION.value,
            message=message,
            event_index=i,
            from_status=prev.status_code,
            from_status_name=from_name,
            to_status=curr.status_code,
            to_status_name=to_name,
        ))

    return anomalies
