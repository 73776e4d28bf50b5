"""
Shipment lifecycle state machine. Current status -> statuses it may move to.
"""
from types import MappingProxyType

from shipment_validator.status_codes import SHIPMENT_CANCELLED, is_terminal

_EMPTY: frozenset[int] = frozenset()

VALID_TRANSITIONS: MappingProxyType[int, frozenset[int]] = MappingProxyType({
    # Booking
    1000: frozenset([1010, 1011, 1020, 1050, 1250]),
    1010: frozenset([1020, 1025, 1039, 1050, 1070, 1083, 1100, 1200, 1250, 1280]),
    1011: frozenset([1050, 1250]),
    1020: frozenset([1025, 1039, 1050, 1070, 1083, 1100, 1200, 1250, 1280]),
    1025: frozenset([1050, 1250]),
    1039: frozenset([1050, 1070, 1083, 1100, 1200, 1250]),
    1050: _EMPTY,  # terminal
    1070: frozenset([1039, 1050, 1083, 1100, 1200, 1250]),
    1083: frozenset([1039, 1050, 1100, 1200, 1250]),
    1100: frozenset([1039, 1050, 1200, 1250]),
    # Pickup & transit
    1200: frozenset([1220, 1250, 1280, 1300, 1400]),
    1220: frozenset([1250, 1300, 1400, 1440, 1500, 1550, 1560, 1570, 1616, 1700]),
    1250: _EMPTY,  # terminal
    1280: frozenset([1220, 1250, 1300, 1400]),
    1300: frozenset([1220, 1250, 1400, 1440, 1500, 1550, 1560, 1570]),
    1400: frozenset([1250, 1300, 1440, 1500, 1550, 1560, 1570, 1616, 1700]),
    # Exceptions
    1440: frozenset([1220, 1250, 1300, 1400, 1500, 1550, 1700]),
    1500: frozenset([1250]),
    1550: frozenset([1250, 1700, 1900]),
    1560: frozenset([1220, 1250, 1300, 1400, 1700, 1770]),
    1570: frozenset([1250, 1300, 1700, 1770]),
    1616: frozenset([1250, 1700]),
    # Delivery
    1700: frozenset([1250, 1770, 1800, 1850, 1880, 1900]),
    1770: frozenset([1700, 1850, 1880, 1900, 2000]),
    1800: frozenset([1900, 2000]),
    1850: frozenset([1700, 1770, 1880, 1900]),
    1880: frozenset([1700, 1770, 1900, 2000]),
    1900: frozenset([2000]),  # terminal; listed successor is never reachable
    # Return to origin
    2000: frozenset([2020, 2025, 2030]),
    2020: frozenset([2025, 2030]),
    2025: frozenset([2020, 2030]),
    2030: _EMPTY,  # terminal
    8000: _EMPTY,  # terminal
})


def allowed_next_states(code: int) -> frozenset[int]:
    """Explicit successors of code; empty for codes the table does not know."""
    return VALID_TRANSITIONS.get(code, _EMPTY)


def is_valid_transition(from_status: int, to_status: int) -> bool:
    """
    True if a shipment in from_status may move to to_status.
    Terminal states allow nothing, not even cancellation. Any other state,
    registered or not, may always move to Shipment Cancelled.
    """
    if is_terminal(from_status):
        return False
    if to_status == SHIPMENT_CANCELLED:
        return True
    return to_status in allowed_next_states(from_status)
