"""Game errors - all recoverable, raised before any state is mutated."""


class GameError(Exception):
    """Base class for rule and precondition violations."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidBetError(GameError, ValueError):
    """Bet is non-numeric, non-positive, or exceeds the player's balance."""


class IndexOutOfRangeError(GameError, IndexError):
    """Card slot index is outside the hand."""


class ReplacementError(GameError):
    """A card replacement was refused by the replacement rules."""


class ReplacementLimitReached(ReplacementError):
    """The player has already exchanged the maximum number of cards."""


class CardAlreadyReplaced(ReplacementError):
    """The requested slot has already been exchanged this round."""


class WrongPhaseError(GameError):
    """Operation invoked outside the round phase it belongs to."""

    def __init__(self, operation: str, phase: object) -> None:
        super().__init__(f"Cannot {operation} while round is {phase}")
        self.operation = operation
        self.phase = phase


class EmptyDeckError(GameError, IndexError):
    """Draw attempted on an exhausted deck."""

    def __init__(self, message: str = "Cannot draw from empty deck") -> None:
        super().__init__(message)
