"""
Prometheus metrics: batches validated, shipment verdicts, anomalies by report category.
"""
from prometheus_client import Counter, Histogram, generate_latest

from shipment_validator.models import ValidationReport

validation_batches_total = Counter(
    "validation_batches_total",
    "Total shipment batches validated",
)
shipments_validated_total = Counter(
    "shipments_validated_total",
    "Total shipments validated, by verdict",
    ["status"],
)
anomalies_detected_total = Counter(
    "anomalies_detected_total",
    "Total anomalies detected, by report category",
    ["category"],
)
validation_batch_seconds = Histogram(
    "validation_batch_seconds",
    "Time spent validating one batch",
)


def record_report(report: ValidationReport, seconds: float) -> None:
    validation_batches_total.inc()
    validation_batch_seconds.observe(seconds)
    if report.summary.valid_shipments:
        shipments_validated_total.labels(status="valid").inc(report.summary.valid_shipments)
    if report.summary.invalid_shipments:
        shipments_validated_total.labels(status="invalid").inc(report.summary.invalid_shipments)
    for category, count in report.anomaly_summary.items():
        if count:
            anomalies_detected_total.labels(category=category).inc(count)


def get_metrics_content_type():
    return "text/plain; charset=utf-8; version=0.0.4"


def get_metrics_bytes():
    return generate_latest()
