"""Round phase enumeration."""

from enum import Enum, auto


class RoundPhase(Enum):
    """
    Round state machine phases.

    Flow: AWAITING_BET → IN_PLAY → EVALUATED → AWAITING_BET → ...
    """

    # No round in flight, waiting for a stake
    AWAITING_BET = auto()

    # Cards dealt, replacements allowed
    IN_PLAY = auto()

    # Round scored and settled
    EVALUATED = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()

