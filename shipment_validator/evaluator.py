"""
Per-shipment verdict: runs the sequence validator and the anomaly detectors
and assembles the shipment's result record.
"""
import logging
from datetime import datetime, timezone, tzinfo

from shipment_validator.anomalies import detect_all_anomalies
from shipment_validator.models import Anomaly, AnomalyKind, ShipmentRecord, ShipmentResult
from shipment_validator.sequence import validate_event_sequence
from shipment_validator.status_codes import status_name

logger = logging.getLogger(__name__)


def evaluate_shipment(
    shipment: ShipmentRecord,
    now: datetime,
    default_tz: tzinfo = timezone.utc,
) -> ShipmentResult:
    events = shipment.tracking_events or []

    if not events:
        logger.debug("shipment_no=%s has no tracking events", shipment.shipment_no)
        return ShipmentResult(
            shipment_no=shipment.shipment_no,
            tracking_id=shipment.tracking_id,
            status="invalid",
            current_status=None,
            current_status_name=None,
            event_count=0,
            anomalies=[
                Anomaly(type=AnomalyKind.NO_EVENTS.value, message="Shipment has no tracking events"),
            ],
        )

    # Order is part of the report contract: transitions, temporal, duplicate, skipped
    anomalies = [
        *validate_event_sequence(events),
        *detect_all_anomalies(events, now, default_tz),
    ]
    last = events[-1]
    result = ShipmentResult(
        shipment_no=shipment.shipment_no,
        tracking_id=shipment.tracking_id,
        status="invalid" if anomalies else "valid",
        current_status=last.status_code,
        current_status_name=last.status_name or status_name(last.status_code),
        event_count=len(events),
        anomalies=anomalies,
    )
    logger.debug(
        "shipment_no=%s status=%s events=%d anomalies=%d",
        shipment.shipment_no,
        result.status,
        result.event_count,
        len(anomalies),
    )
    return result
