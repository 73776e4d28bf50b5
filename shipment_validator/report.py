"""
Batch validation: evaluate every shipment, tally anomalies by category,
build the report. This is the single entry point the service and CLI call.
"""
import logging
from datetime import datetime, timezone, tzinfo
from typing import Iterable, Literal

from shipment_validator.evaluator import evaluate_shipment
from shipment_validator.models import (
    AnomalyKind,
    ShipmentRecord,
    ValidationReport,
    ValidationSummary,
)

logger = logging.getLogger(__name__)

OTHER_CATEGORY = "other"

# Anomaly type -> report bucket. Anything not listed lands in "other".
ANOMALY_CATEGORIES: dict[str, str] = {
    AnomalyKind.INVALID_TRANSITION.value: "invalid_transitions",
    AnomalyKind.TIME_ANOMALY.value: "time_anomalies",
    AnomalyKind.INVALID_TIMESTAMP.value: "time_anomalies",
    AnomalyKind.DUPLICATE_EVENT.value: "duplicate_events",
    AnomalyKind.SKIPPED_STATE.value: "skipped_states",
    AnomalyKind.NO_EVENTS.value: "no_events",
    AnomalyKind.INVALID_START_STATE.value: "invalid_start_state",
}

# Bucket order as rendered in the report
CATEGORY_ORDER: tuple[str, ...] = (
    "invalid_transitions",
    "time_anomalies",
    "duplicate_events",
    "skipped_states",
    "no_events",
    "invalid_start_state",
    OTHER_CATEGORY,
)

StatusFilter = Literal["all", "valid", "invalid"]


def categorize(anomaly_type: str) -> str:
    return ANOMALY_CATEGORIES.get(anomaly_type, OTHER_CATEGORY)


def aggregate(
    shipments: Iterable[ShipmentRecord],
    now: datetime | None = None,
    default_tz: tzinfo = timezone.utc,
) -> ValidationReport:
    """
    Validate a batch. `now` is read once so every shipment in the run is judged
    against the same instant; a naive `now` is taken to be in default_tz.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=default_tz)

    results = [evaluate_shipment(shipment, now, default_tz) for shipment in shipments]

    counts = dict.fromkeys(CATEGORY_ORDER, 0)
    for result in results:
        for anomaly in result.anomalies:
            counts[categorize(anomaly.type)] += 1

    valid = sum(1 for r in results if r.status == "valid")
    summary = ValidationSummary(
        total_shipments=len(results),
        valid_shipments=valid,
        invalid_shipments=len(results) - valid,
        anomalies_detected=sum(counts.values()),
    )
    logger.info(
        "Validated %d shipment(s): valid=%d invalid=%d anomalies=%d",
        summary.total_shipments,
        summary.valid_shipments,
        summary.invalid_shipments,
        summary.anomalies_detected,
    )
    return ValidationReport(summary=summary, shipments=results, anomaly_summary=counts)


def filter_shipments(report: ValidationReport, status: StatusFilter = "all") -> ValidationReport:
    """Copy of the report listing only shipments with the given verdict. Counts are untouched."""
    if status == "all":
        return report
    if status not in ("valid", "invalid"):
        raise ValueError(f"Unknown status filter: {status!r}")
    kept = [s for s in report.shipments if s.status == status]
    return report.model_copy(update={"shipments": kept})
