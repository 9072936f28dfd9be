"""
Threshold states for a versionbits deployment
"""
from enum import IntEnum

__all__ = ["ThresholdState"]


class ThresholdState(IntEnum):
    """
    DEFINED -> STARTED -> LOCKED_IN -> ACTIVE, with FAILED reachable only from STARTED.
    Values match the numbering used by getblocktemplate/getblockchaininfo.
    """
    DEFINED = 0
    STARTED = 1
    LOCKED_IN = 2
    ACTIVE = 3
    FAILED = 4

    @property
    def is_terminal(self) -> bool:
        return self in (ThresholdState.ACTIVE, ThresholdState.FAILED)

    @property
    def is_signaling(self) -> bool:
        """Miners set the deployment bit in these states"""
        return self in (ThresholdState.STARTED, ThresholdState.LOCKED_IN)

    def can_follow(self, previous: "ThresholdState") -> bool:
        """
        True if self may follow previous on the same chain, either within one window or across a boundary.

        DEFINED may jump to LOCKED_IN because the window in which a deployment starts already counts its signals.
        """
        return self == previous or self in _SUCCESSORS[previous]


_SUCCESSORS = {
    ThresholdState.DEFINED: (ThresholdState.STARTED, ThresholdState.LOCKED_IN),
    ThresholdState.STARTED: (ThresholdState.LOCKED_IN, ThresholdState.FAILED),
    ThresholdState.LOCKED_IN: (ThresholdState.ACTIVE,),
    ThresholdState.ACTIVE: (),
    ThresholdState.FAILED: (),
}
