from fastapi import APIRouter

from shipment_validator.status_codes import (
    STATUS_GROUPS,
    STATUS_NAMES,
    is_terminal,
    is_valid_start,
)
from shipment_validator.transitions import allowed_next_states

router = APIRouter(prefix="/status-codes", tags=["status-codes"])


@router.get("")
async def list_status_codes() -> dict:
    """Registered status codes with their phase and explicit successors."""
    phase_of = {code: group for group, codes in STATUS_GROUPS.items() for code in codes}
    return {
        "status_codes": [
            {
                "code": code,
                "name": name,
                "phase": phase_of.get(code),
                "terminal": is_terminal(code),
                "valid_start": is_valid_start(code),
                "next_states": sorted(allowed_next_states(code)),
            }
            for code, name in sorted(STATUS_NAMES.items())
        ]
    }
