import logging
import sys

from fastapi import FastAPI
from fastapi.responses import Response

from shipment_validator.config import settings
from shipment_validator.metrics import get_metrics_bytes, get_metrics_content_type
from shipment_validator.routes import status_codes, validation

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(message)s",
    stream=sys.stdout,
)

app = FastAPI(title="Shipment Status Validator")
app.include_router(validation.router)
app.include_router(status_codes.router)


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@app.get("/metrics")
async def metrics() -> Response:
    """Prometheus scrape endpoint: batches, shipment verdicts, anomalies by category."""
    return Response(
        content=get_metrics_bytes(),
        media_type=get_metrics_content_type(),
    )
