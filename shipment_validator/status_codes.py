"""
Shipment status registry: code -> display name, terminal and start states.
"""
from types import MappingProxyType

BOOKING_PENDING = 1000
SHIPMENT_BOOKED = 1010
PICKUP_CANCELLED = 1050
PICKED_UP = 1200
IN_TRANSIT = 1220
SHIPMENT_CANCELLED = 1250
OUT_FOR_DELIVERY = 1700
DELIVERED = 1900
RTO_DELIVERED = 2030
TRACKING_CLOSED = 8000

STATUS_NAMES: MappingProxyType[int, str] = MappingProxyType({
    # Booking
    1000: "Booking Pending",
    1010: "Shipment Booked",
    1011: "Dead Status",
    1020: "Shipment Manifested",
    1025: "Cancel Requested",
    1039: "Missed Pickup",
    1050: "Pickup Cancelled",
    1070: "Pickup Scheduled",
    1083: "Pickup Re-scheduled",
    1100: "Out for Pickup",
    # Pickup & transit
    1200: "Picked Up from Origin",
    1220: "Shipment In-Transit",
    1250: "Shipment Cancelled",
    1280: "Received at Origin Hub",
    1300: "Shipment On-Hold",
    1400: "Received at Destination Hub",
    # Exceptions
    1440: "Shipment Misrouted",
    1500: "Shipment Lost",
    1550: "Shipment Damaged",
    1560: "Unexpected Challenge",
    1570: "Address Incorrect",
    1616: "Delay in Delivery expected",
    # Delivery
    1700: "Shipment Out for Delivery",
    1770: "Delivery Attempt Failed",
    1800: "Partial Delivery",
    1850: "Pending",
    1880: "Contact Customer Support",
    1900: "Delivered",
    # Return to origin
    2000: "RTO Initiated",
    2020: "RTP In Transit",
    2025: "RTO Exception",
    2030: "RTO Delivered",
    # Closed
    8000: "Tracking Closed",
})

TERMINAL_STATES: frozenset[int] = frozenset([
    DELIVERED,
    RTO_DELIVERED,
    TRACKING_CLOSED,
    SHIPMENT_CANCELLED,
    PICKUP_CANCELLED,
])

VALID_START_STATES: frozenset[int] = frozenset([BOOKING_PENDING, SHIPMENT_BOOKED])

STATUS_GROUPS: MappingProxyType[str, frozenset[int]] = MappingProxyType({
    "booking": frozenset([1000, 1010, 1011, 1020, 1025, 1039, 1050, 1070, 1083, 1100]),
    "pickup_transit": frozenset([1200, 1220, 1250, 1280, 1300, 1400]),
    "exceptions": frozenset([1440, 1500, 1550, 1560, 1570, 1616]),
    "delivery": frozenset([1700, 1770, 1800, 1850, 1880, 1900]),
    "rto": frozenset([2000, 2020, 2025, 2030]),
    "terminal": frozenset([8000]),
})


def status_name(code: int) -> str:
    """Registered display name, or a synthesized label for unknown codes."""
    return STATUS_NAMES.get(code, f"Unknown Status ({code})")


def is_terminal(code: int) -> bool:
    return code in TERMINAL_STATES


def is_valid_start(code: int) -> bool:
    return code in VALID_START_STATES
