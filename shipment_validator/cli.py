"""
Validate a JSON file of shipment histories and write the report as JSON.
Run: python -m shipment_validator.cli shipments.json [--output report.json] [--status invalid]
"""
import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from shipment_validator.config import settings
from shipment_validator.models import ShipmentRecord
from shipment_validator.report import aggregate, filter_shipments

logger = logging.getLogger(__name__)

_shipments_adapter = TypeAdapter(list[ShipmentRecord])


class InputFormatError(Exception):
    """Raised when the input document is not a JSON array of shipment records."""


def load_shipments(path: Path) -> list[ShipmentRecord]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise InputFormatError(f"Error parsing JSON file: {e}") from e
    if not isinstance(data, list):
        raise InputFormatError("JSON file must contain an array of shipments")
    try:
        return _shipments_adapter.validate_python(data)
    except ValidationError as e:
        raise InputFormatError(f"Malformed shipment record: {e}") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shipment-validator",
        description="Validate shipment status histories against the lifecycle state machine.",
    )
    parser.add_argument("input", type=Path, help="JSON file containing an array of shipments")
    parser.add_argument("-o", "--output", type=Path, help="Write the report here instead of stdout")
    parser.add_argument(
        "--status",
        choices=("all", "valid", "invalid"),
        default="all",
        help="Only list shipments with this verdict (summary always covers the whole batch)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(message)s",
        stream=sys.stderr,
    )

    try:
        shipments = load_shipments(args.input)
    except OSError as e:
        logger.error("Cannot read %s: %s", args.input, e)
        return 1
    except InputFormatError as e:
        logger.error("%s: %s", args.input, e)
        return 1

    report = aggregate(shipments, default_tz=settings.default_tzinfo())
    text = json.dumps(filter_shipments(report, args.status).to_dict(), indent=2)
    if args.output:
        args.output.write_text(text + "\n", encoding="utf-8")
        logger.info("Report written to %s", args.output)
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
