"""
Transition table: terminal lock-out, universal cancellation escape, explicit successors.
"""
import pytest

from shipment_validator.status_codes import SHIPMENT_CANCELLED, STATUS_NAMES, TERMINAL_STATES
from shipment_validator.transitions import (
    VALID_TRANSITIONS,
    allowed_next_states,
    is_valid_transition,
)


def test_explicit_successor_is_valid():
    assert is_valid_transition(1000, 1010)
    assert is_valid_transition(1700, 1900)


def test_unlisted_successor_is_invalid():
    assert not is_valid_transition(1000, 1900)
    assert not is_valid_transition(1220, 1200)


@pytest.mark.parametrize("terminal", sorted(TERMINAL_STATES))
def test_terminal_blocks_everything_including_cancel(terminal):
    assert not is_valid_transition(terminal, SHIPMENT_CANCELLED)
    assert not is_valid_transition(terminal, 1000)


def test_delivered_cannot_start_rto_even_though_listed():
    assert 2000 in allowed_next_states(1900)
    assert not is_valid_transition(1900, 2000)


@pytest.mark.parametrize(
    "code",
    sorted(code for code in STATUS_NAMES if code not in TERMINAL_STATES),
)
def test_cancellation_reachable_from_every_non_terminal(code):
    assert is_valid_transition(code, SHIPMENT_CANCELLED)


def test_cancellation_escape_applies_to_unregistered_code():
    assert is_valid_transition(4242, SHIPMENT_CANCELLED)
    assert not is_valid_transition(4242, 1010)


def test_unknown_code_has_no_successors():
    assert allowed_next_states(4242) == frozenset()


def test_table_covers_registry_and_terminals_are_empty_except_delivered():
    assert set(VALID_TRANSITIONS) == set(STATUS_NAMES)
    for code in TERMINAL_STATES - {1900}:
        assert allowed_next_states(code) == frozenset()
