"""
Shipment records in, validation report out. Field layout is what exports serialize.
"""
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_serializer


class AnomalyKind(str, Enum):
    INVALID_START_STATE = "invalid_start_state"
    INVALID_TRANSITION = "invalid_transition"
    TIME_ANOMALY = "time_anomaly"
    INVALID_TIMESTAMP = "invalid_timestamp"
    DUPLICATE_EVENT = "duplicate_event"
    SKIPPED_STATE = "skipped_state"
    NO_EVENTS = "no_events"


class TrackingEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    status_code: int = Field(..., description="Lifecycle status code")
    status_name: str | None = Field(default="", description="Display name as reported by the carrier")
    timestamp: str | None = Field(default=None, description="ISO-8601, RFC 2822 or common date-time string")


class ShipmentRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    shipment_no: str = Field(..., description="Shipment number")
    tracking_id: str = Field(default="", description="Carrier tracking id")
    tracking_events: list[TrackingEvent] | None = Field(
        default=None, description="Events in reporting order, not necessarily chronological"
    )


class Anomaly(BaseModel):
    """
    One defect found in a shipment's history. `type` is a plain string so that
    kinds this version does not know about still load and get counted as "other".
    """
    model_config = ConfigDict(frozen=True, extra="allow")

    type: str
    message: str
    event_index: int | None = None
    status_code: int | None = None
    status_name: str | None = None
    from_status: int | None = None
    from_status_name: str | None = None
    to_status: int | None = None
    to_status_name: str | None = None
    timestamp: str | None = None
    previous_timestamp: str | None = None
    first_occurrence_index: int | None = None
    missing_status: int | None = None
    missing_status_name: str | None = None

    @model_serializer(mode="wrap")
    def _drop_empty_fields(self, handler):
        data = handler(self)
        return {key: value for key, value in data.items() if value is not None}


ShipmentStatus = Literal["valid", "invalid"]


class ShipmentResult(BaseModel):
    shipment_no: str
    tracking_id: str
    status: ShipmentStatus
    current_status: int | None = None
    current_status_name: str | None = None
    event_count: int = 0
    anomalies: list[Anomaly] = Field(default_factory=list)


class ValidationSummary(BaseModel):
    total_shipments: int = 0
    valid_shipments: int = 0
    invalid_shipments: int = 0
    anomalies_detected: int = 0


class ValidationReport(BaseModel):
    summary: ValidationSummary
    shipments: list[ShipmentResult] = Field(default_factory=list)
    anomaly_summary: dict[str, int] = Field(default_factory=dict)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")
