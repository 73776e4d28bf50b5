import asyncio
import logging
import time

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from shipment_validator.config import settings
from shipment_validator.metrics import record_report
from shipment_validator.models import ShipmentRecord
from shipment_validator.report import StatusFilter, aggregate, filter_shipments

logger = logging.getLogger(__name__)

router = APIRouter(tags=["validation"])


@router.post("/validate")
async def validate_shipments(
    shipments: list[ShipmentRecord],
    status: StatusFilter = Query(default="all", description="Only list shipments with this verdict"),
) -> JSONResponse:
    """
    Validate a batch of shipment histories and return the report.
    Summary and anomaly counts always cover the whole batch; `status` only
    narrows the listed shipments.
    """
    if len(shipments) > settings.max_batch_size:
        logger.warning("Rejected batch of %d shipments (max %d)", len(shipments), settings.max_batch_size)
        return JSONResponse(
            status_code=413,
            content={
                "status": "rejected",
                "detail": f"Batch of {len(shipments)} shipments exceeds limit of {settings.max_batch_size}",
            },
        )

    started = time.perf_counter()
    tz = settings.default_tzinfo()
    if len(shipments) >= settings.offload_threshold:
        report = await asyncio.to_thread(aggregate, shipments, None, tz)
    else:
        report = aggregate(shipments, default_tz=tz)
    record_report(report, time.perf_counter() - started)

    return JSONResponse(status_code=200, content=filter_shipments(report, status).to_dict())
