"""Adapter connecting the core round engine to a front end.

The adapter owns no widgets. It turns engine state into plain view data
(labels, image names, which controls are enabled) and engine errors into
the messages a table front end shows the player.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from config import GameConfig
from core.cards import Card, Rank, Suit
from core.errors import GameError
from core.game.engine import RoundEngine, RoundResult
from core.game.events import EventType, GameEvent
from core.game.state import RoundPhase
from core.hand import HAND_SIZE, Outcome

logger = logging.getLogger(__name__)

CARD_BACK_IMAGE = "back.gif"

# Image file digits, following the card_<suit><rank>.gif naming of the card set
SUIT_IMAGE_CODES = {
    Suit.CLUBS: "1",
    Suit.SPADES: "2",
    Suit.DIAMONDS: "3",
    Suit.HEARTS: "4",
}

RANK_IMAGE_CODES = {
    Rank.ACE: "1",
    Rank.JACK: "11",
    Rank.QUEEN: "12",
    Rank.KING: "13",
}

MSG_PLACE_BET = "Please place your bet!"
MSG_CURRENT_BET = "Your current bet is: ${bet}"
MSG_BALANCE = "Money you have: ${balance}"
MSG_PLAYER_WINS = "Player wins the round!"
MSG_DEALER_WINS = "Dealer wins the round!"
MSG_OUT_OF_MONEY = "You have no more money! Please start a new game."
MSG_GAME_OVER = "Game over! You have no more money. Please start a new game."


def card_image_filename(card: Card) -> str:
    """Return the image file name for a card, e.g. ``card_213.gif`` for K♠."""
    rank_code = RANK_IMAGE_CODES.get(card.rank, card.rank.value)
    return f"card_{SUIT_IMAGE_CODES[card.suit]}{rank_code}.gif"


@dataclass
class UICardInfo:
    """Card information for the UI layer."""

    label: str  # "K♠", "10♥", or "" when face down
    image: str
    face_up: bool = True

    @classmethod
    def from_core_card(cls, card: Card, face_up: bool = True) -> "UICardInfo":
        """Create UICardInfo from a core Card."""
        if not face_up:
            return cls.face_down()
        return cls(label=str(card), image=card_image_filename(card), face_up=True)

    @classmethod
    def face_down(cls) -> "UICardInfo":
        return cls(label="", image=CARD_BACK_IMAGE, face_up=False)


@dataclass
class TableView:
    """Everything a front end needs to draw the table."""

    phase: RoundPhase
    status_message: str
    balance_label: str
    balance: int
    bet: int
    player_cards: list[UICardInfo]
    dealer_cards: list[UICardInfo]
    can_start: bool
    can_evaluate: bool
    can_replace: list[bool] = field(default_factory=list)
    game_over: bool = False


class EngineAdapter:
    """Adapter between the core RoundEngine and a table front end.

    Subscribes to engine events and translates them to UI callbacks.
    Engine rule violations are caught here and reported as messages, so
    front-end code never has to handle GameError itself.
    """

    def __init__(
        self,
        engine: RoundEngine | None = None,
        config: GameConfig | None = None,
    ):
        """Initialize the adapter.

        Args:
            engine: Engine to drive (a new one is created if not provided)
            config: Table configuration for a newly created engine
        """
        self.engine = engine or RoundEngine(config=config)
        self.last_message: Optional[str] = None
        self.last_result: Optional[RoundResult] = None

        # UI callbacks
        self._on_message: Optional[Callable[[str], None]] = None
        self._on_state_change: Optional[Callable[[RoundPhase], None]] = None
        self._on_card_replaced: Optional[Callable[[int, UICardInfo], None]] = None

        self.engine.subscribe(self._handle_event)

    def set_callbacks(
        self,
        on_message: Callable[[str], None] = None,
        on_state_change: Callable[[RoundPhase], None] = None,
        on_card_replaced: Callable[[int, UICardInfo], None] = None,
    ) -> None:
        """Set UI callback functions.

        Args:
            on_message: Called with a message for a dialog box
            on_state_change: Called with the new phase after each action
            on_card_replaced: Called when a player card is exchanged (slot, card_info)
        """
        self._on_message = on_message
        self._on_state_change = on_state_change
        self._on_card_replaced = on_card_replaced

    def _handle_event(self, event: GameEvent) -> None:
        """Handle events from the core engine."""
        if event.event_type == EventType.CARD_REPLACED and self._on_card_replaced:
            card = self.engine.player.hand.cards[event.data["index"]]
            self._on_card_replaced(event.data["index"], UICardInfo.from_core_card(card))

    def _notify(self, message: str) -> None:
        logger.debug("Table message: %s", message)
        self.last_message = message
        if self._on_message:
            self._on_message(message)

    def _state_changed(self) -> None:
        if self._on_state_change:
            self._on_state_change(self.engine.phase)

    # Game actions

    def submit_bet(self, text: str | int) -> bool:
        """Place a bet from the bet field and deal a new round."""
        try:
            self.engine.place_bet(text)
        except GameError as exc:
            self._notify(exc.message)
            return False
        self.last_result = None
        self._state_changed()
        return True

    def replace(self, index: int) -> bool:
        """Exchange one of the player's cards."""
        try:
            self.engine.replace_card(index)
        except GameError as exc:
            self._notify(exc.message)
            return False
        return True

    def evaluate(self) -> bool:
        """Score the round and announce the winner."""
        try:
            result = self.engine.evaluate()
        except GameError as exc:
            self._notify(exc.message)
            return False
        self.last_result = result
        self._notify(MSG_PLAYER_WINS if result.outcome == Outcome.PLAYER_WIN else MSG_DEALER_WINS)
        if self.engine.is_game_over:
            self._notify(MSG_GAME_OVER)
        self._state_changed()
        return True

    def new_game(self) -> None:
        """Start a completely new game."""
        self.engine.new_game()
        self.last_result = None
        self.last_message = None
        self._state_changed()

    # View

    def _status_message(self) -> str:
        if self.engine.is_game_over:
            return MSG_OUT_OF_MONEY
        if self.engine.phase == RoundPhase.IN_PLAY:
            return MSG_CURRENT_BET.format(bet=self.engine.bet)
        return MSG_PLACE_BET

    def view(self) -> TableView:
        """Build the view of the table as it should currently be drawn."""
        engine = self.engine
        backs = [UICardInfo.face_down() for _ in range(HAND_SIZE)]

        if engine.phase == RoundPhase.IN_PLAY:
            snapshot = engine.snapshot
            player_cards = [UICardInfo.from_core_card(c) for c in snapshot.player_hand]
            # Dealer cards stay hidden until evaluation
            dealer_cards = list(backs)
        elif engine.phase == RoundPhase.EVALUATED and self.last_result is not None:
            player_cards = [UICardInfo.from_core_card(c) for c in self.last_result.player_cards]
            dealer_cards = [UICardInfo.from_core_card(c) for c in self.last_result.dealer_cards]
        else:
            player_cards = list(backs)
            dealer_cards = list(backs)

        game_over = engine.is_game_over
        return TableView(
            phase=engine.phase,
            status_message=self._status_message(),
            balance_label=MSG_BALANCE.format(balance=engine.balance),
            balance=engine.balance,
            bet=engine.bet,
            player_cards=player_cards,
            dealer_cards=dealer_cards,
            can_start=engine.can_place_bet and not game_over,
            can_evaluate=engine.can_evaluate,
            can_replace=[engine.can_replace(i) for i in range(HAND_SIZE)],
            game_over=game_over,
        )
