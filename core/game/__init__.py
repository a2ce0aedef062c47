"""Round engine and state management."""

from core.game.events import GameEvent, EventType
from core.game.state import RoundPhase
from core.game.engine import RoundEngine, RoundResult, RoundSnapshot

__all__ = [
    "GameEvent",
    "EventType",
    "RoundPhase",
    "RoundEngine",
    "RoundResult",
    "RoundSnapshot",
]
