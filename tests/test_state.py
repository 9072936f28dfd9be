"""
Tests for the ThresholdState enum
"""
from iopchain.versionbits import ThresholdState

DEFINED, STARTED, LOCKED_IN, ACTIVE, FAILED = ThresholdState


def test_state_values():
    # Numbering used by getblockchaininfo
    assert [s.value for s in ThresholdState] == [0, 1, 2, 3, 4]
    assert ThresholdState(2) is LOCKED_IN


def test_signaling_and_terminal_states():
    assert {s for s in ThresholdState if s.is_signaling} == {STARTED, LOCKED_IN}
    assert {s for s in ThresholdState if s.is_terminal} == {ACTIVE, FAILED}


def test_allowed_transitions():
    assert STARTED.can_follow(DEFINED)
    # The starting window's signals are counted, so lock-in can come straight from DEFINED
    assert LOCKED_IN.can_follow(DEFINED)
    assert LOCKED_IN.can_follow(STARTED)
    assert FAILED.can_follow(STARTED)
    assert ACTIVE.can_follow(LOCKED_IN)

    # Every state repeats within a window
    for state in ThresholdState:
        assert state.can_follow(state), f"{state.name} cannot repeat"


def test_forbidden_transitions():
    # FAILED only after STARTED
    assert not FAILED.can_follow(DEFINED), "FAILED must pass through STARTED"
    assert not FAILED.can_follow(LOCKED_IN)
    assert not FAILED.can_follow(ACTIVE)

    # ACTIVE only after a LOCKED_IN window
    assert not ACTIVE.can_follow(DEFINED), "ACTIVE must pass through LOCKED_IN"
    assert not ACTIVE.can_follow(STARTED), "ACTIVE must pass through LOCKED_IN"
    assert not ACTIVE.can_follow(FAILED)

    # No way back
    assert not DEFINED.can_follow(STARTED)
    assert not STARTED.can_follow(LOCKED_IN)
    assert not STARTED.can_follow(FAILED)
    assert not LOCKED_IN.can_follow(ACTIVE)
    assert not DEFINED.can_follow(FAILED)
