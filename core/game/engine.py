"""Round engine with state machine."""

import logging
from dataclasses import dataclass
from random import Random
from typing import Callable

from transitions import Machine

from config import GameConfig
from core.cards import Card, Deck
from core.errors import (
    CardAlreadyReplaced,
    GameError,
    IndexOutOfRangeError,
    InvalidBetError,
    ReplacementLimitReached,
    WrongPhaseError,
)
from core.game.events import EventEmitter, EventType, GameEvent
from core.game.state import RoundPhase
from core.hand import HAND_SIZE, Hand, Outcome, evaluate_hands
from core.participants import Dealer, Player

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoundSnapshot:
    """Read-only view of the round for the presentation layer."""

    phase: RoundPhase
    bet: int
    balance: int
    player_hand: tuple[Card, ...]
    dealer_hand: tuple[Card, ...]
    dealer_hand_visible: bool
    replacement_used: tuple[bool, ...]


@dataclass(frozen=True)
class RoundResult:
    """Settlement of an evaluated round, including the hands as scored."""

    outcome: Outcome
    bet: int
    payout: int
    player_cards: tuple[Card, ...]
    dealer_cards: tuple[Card, ...]
    player_special_count: int
    dealer_special_count: int
    player_remainder: int
    dealer_remainder: int
    snapshot: RoundSnapshot

    @property
    def player_won(self) -> bool:
        return self.outcome == Outcome.PLAYER_WIN


class RoundEngine:
    """
    Three-card exchange round engine using a state machine.

    This is the core game logic, completely UI-agnostic. Every operation
    either applies fully or raises a GameError with the engine untouched.
    Communication happens through return values, exceptions and events.
    """

    # State machine states
    STATES = [p.name.lower() for p in RoundPhase]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "deal", "source": ["awaiting_bet", "evaluated"], "dest": "in_play"},
        {"trigger": "finish", "source": "in_play", "dest": "evaluated"},
        {"trigger": "new_round", "source": "evaluated", "dest": "awaiting_bet"},
        {"trigger": "reset_game", "source": "*", "dest": "awaiting_bet"},
    ]

    def __init__(
        self,
        config: GameConfig | None = None,
        rng: Random | None = None,
    ) -> None:
        """
        Initialize a new table.

        Args:
            config: Table configuration (uses defaults if not provided)
            rng: Random number generator for reproducible games
        """
        self.config = config or GameConfig()
        if rng is None and self.config.rng_seed is not None:
            rng = Random(self.config.rng_seed)

        self.deck = Deck(rng=rng)
        self.player = Player(balance=self.config.starting_balance)
        self.dealer = Dealer()
        self.events = EventEmitter()

        self._bet = 0
        self._replacement_used = [False] * HAND_SIZE

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="awaiting_bet",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def phase(self) -> RoundPhase:
        """Get current round phase as enum."""
        return RoundPhase[self._machine_state.upper()]  # type: ignore

    @property
    def bet(self) -> int:
        return self._bet

    @property
    def balance(self) -> int:
        return self.player.balance

    @property
    def replacement_used(self) -> tuple[bool, ...]:
        """Which of the player's slots have been exchanged this round."""
        return tuple(self._replacement_used)

    @property
    def replacements_remaining(self) -> int:
        """Number of exchanges still allowed this round."""
        if self.phase != RoundPhase.IN_PLAY:
            return 0
        return self.config.max_replacements - sum(self._replacement_used)

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    def _reject(self, error: GameError) -> GameError:
        """Report a refused operation before it is raised."""
        logger.warning("Rejected: %s", error.message)
        self.events.emit_new(
            EventType.INVALID_ACTION,
            message=error.message,
            error=type(error).__name__,
            phase=self.phase.name,
        )
        return error

    def _validate_bet(self, amount: int | str) -> int:
        if isinstance(amount, str):
            try:
                amount = int(amount.strip())
            except ValueError:
                raise self._reject(InvalidBetError("Please enter a valid bet.")) from None
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise self._reject(InvalidBetError("Please enter a valid bet."))
        if amount <= 0:
            raise self._reject(InvalidBetError("Bet must be a positive amount."))
        if amount > self.player.balance:
            raise self._reject(InvalidBetError("You can't bet more than your balance!"))
        return amount

    def place_bet(self, amount: int | str) -> RoundSnapshot:
        """
        Place a bet and deal a new round.

        Args:
            amount: Stake in whole currency units; numeric text is accepted

        Returns:
            Snapshot of the freshly dealt round

        Raises:
            WrongPhaseError: If a round is already in play
            InvalidBetError: If the amount is not a positive integer within the balance
        """
        if self.phase not in (RoundPhase.AWAITING_BET, RoundPhase.EVALUATED):
            raise self._reject(WrongPhaseError("place a bet", self.phase))

        amount = self._validate_bet(amount)

        self.player.debit(amount)
        self._bet = amount
        self.events.emit_new(EventType.BET_PLACED, amount=amount, balance=self.player.balance)
        logger.info("Bet %d placed, balance now %d", amount, self.player.balance)

        self._deal_initial_cards()
        self.deal()  # Trigger state transition

        self.events.emit_new(EventType.ROUND_STARTED, bet=amount)
        return self.snapshot

    def _deal_initial_cards(self) -> None:
        """Shuffle a full deck and deal alternately to player and dealer."""
        self.player.hand.clear()
        self.dealer.hand.clear()
        self._replacement_used = [False] * HAND_SIZE

        self.deck.reset()
        self.deck.shuffle()
        self.events.emit_new(EventType.DECK_SHUFFLED, cards_remaining=len(self.deck))

        for _ in range(HAND_SIZE):
            self._deal_card_to_hand(self.player.hand)
            self._deal_card_to_hand(self.dealer.hand, face_up=False)

    def _deal_card_to_hand(self, hand: Hand, face_up: bool = True) -> Card:
        """Deal a card to a hand."""
        card = self.deck.draw()
        hand.add_card(card)
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=str(card) if face_up else "??",
            hand="dealer" if hand is self.dealer.hand else "player",
        )
        return card

    def replace_card(self, index: int) -> RoundSnapshot:
        """
        Exchange one of the player's cards for the top card of the deck.

        At most ``max_replacements`` slots may be exchanged per round; once
        only the locked slots remain, further requests are refused.

        Raises:
            WrongPhaseError: If no round is in play
            IndexOutOfRangeError: If index is not a valid slot
            ReplacementLimitReached: If the exchange allowance is used up
            CardAlreadyReplaced: If this slot was already exchanged
        """
        if self.phase != RoundPhase.IN_PLAY:
            raise self._reject(WrongPhaseError("replace a card", self.phase))

        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < HAND_SIZE:
            raise self._reject(
                IndexOutOfRangeError(f"Card index must be between 0 and {HAND_SIZE - 1}")
            )

        remaining = HAND_SIZE - sum(self._replacement_used)
        if remaining <= HAND_SIZE - self.config.max_replacements:
            raise self._reject(
                ReplacementLimitReached(
                    f"Only {self.config.max_replacements} cards can be replaced per round"
                )
            )
        if self._replacement_used[index]:
            raise self._reject(CardAlreadyReplaced(f"Card {index + 1} has already been replaced"))

        card = self.deck.draw()
        discarded = self.player.hand.replace_card(index, card)
        self._replacement_used[index] = True

        self.events.emit_new(
            EventType.CARD_REPLACED,
            index=index,
            card=str(card),
            discarded=str(discarded),
            replacements_remaining=self.replacements_remaining,
        )
        logger.debug("Replaced slot %d: %s -> %s", index, discarded, card)
        return self.snapshot

    def evaluate(self) -> RoundResult:
        """
        Score both hands, settle the bet and close the round.

        Raises:
            WrongPhaseError: If no round is in play
        """
        if self.phase != RoundPhase.IN_PLAY:
            raise self._reject(WrongPhaseError("evaluate", self.phase))

        player_hand = self.player.hand
        dealer_hand = self.dealer.hand
        self.events.emit_new(
            EventType.DEALER_REVEALS,
            cards=[str(card) for card in dealer_hand],
        )

        outcome = evaluate_hands(player_hand, dealer_hand)
        bet = self._bet
        payout = 0
        if outcome == Outcome.PLAYER_WIN:
            payout = bet * 2
            self.player.credit(payout)
            self.events.emit_new(EventType.PLAYER_WINS, amount=bet, payout=payout)
        else:
            self.events.emit_new(EventType.DEALER_WINS, amount=bet)

        player_cards = player_hand.cards
        dealer_cards = dealer_hand.cards
        player_specials, dealer_specials = player_hand.special_count, dealer_hand.special_count
        player_remainder, dealer_remainder = player_hand.remainder, dealer_hand.remainder

        # Clear hands for the next round
        player_hand.clear()
        dealer_hand.clear()
        self._bet = 0
        self.finish()

        logger.info(
            "Round settled: %s (bet %d, payout %d, balance %d)",
            outcome, bet, payout, self.player.balance,
        )
        self.events.emit_new(
            EventType.ROUND_ENDED,
            outcome=outcome.name,
            result=payout - bet,
            balance=self.player.balance,
        )
        if self.is_game_over:
            self.events.emit_new(EventType.GAME_OVER, reason="bankrupt")

        return RoundResult(
            outcome=outcome,
            bet=bet,
            payout=payout,
            player_cards=player_cards,
            dealer_cards=dealer_cards,
            player_special_count=player_specials,
            dealer_special_count=dealer_specials,
            player_remainder=player_remainder,
            dealer_remainder=dealer_remainder,
            snapshot=self.snapshot,
        )

    def start_new_round(self) -> RoundSnapshot:
        """Return to the betting phase after an evaluated round."""
        if self.phase != RoundPhase.EVALUATED:
            raise self._reject(WrongPhaseError("start a new round", self.phase))
        self._replacement_used = [False] * HAND_SIZE
        self.new_round()
        return self.snapshot

    def new_game(self) -> RoundSnapshot:
        """Restore the starting balance and abandon any round in flight."""
        self.player.hand.clear()
        self.dealer.hand.clear()
        self.player.reset_balance(self.config.starting_balance)
        self._bet = 0
        self._replacement_used = [False] * HAND_SIZE
        self.reset_game()
        self.events.emit_new(EventType.GAME_STARTED, balance=self.player.balance)
        logger.info("New game, balance %d", self.player.balance)
        return self.snapshot

    @property
    def snapshot(self) -> RoundSnapshot:
        """Current state for rendering."""
        return RoundSnapshot(
            phase=self.phase,
            bet=self._bet,
            balance=self.player.balance,
            player_hand=self.player.hand.cards,
            dealer_hand=self.dealer.hand.cards,
            dealer_hand_visible=self.phase == RoundPhase.EVALUATED,
            replacement_used=self.replacement_used,
        )

    @property
    def can_place_bet(self) -> bool:
        """Check if a bet would be accepted in the current phase."""
        return (
            self.phase in (RoundPhase.AWAITING_BET, RoundPhase.EVALUATED)
            and self.player.balance > 0
        )

    @property
    def can_evaluate(self) -> bool:
        return self.phase == RoundPhase.IN_PLAY

    def can_replace(self, index: int) -> bool:
        """Check if a replacement of the given slot would be accepted."""
        if self.phase != RoundPhase.IN_PLAY:
            return False
        if isinstance(index, bool) or not isinstance(index, int):
            return False
        if not 0 <= index < HAND_SIZE:
            return False
        return self.replacements_remaining > 0 and not self._replacement_used[index]

    @property
    def is_game_over(self) -> bool:
        """Check if the player is out of money between rounds."""
        return self.player.balance <= 0 and self.phase != RoundPhase.IN_PLAY
