"""Tests for the event emitter, round phases and participants."""

import pytest

from core.errors import InvalidBetError
from core.game.events import EventEmitter, EventType, GameEvent
from core.game.state import RoundPhase
from core.participants import Dealer, Player


class TestEventEmitter:
    """Tests for EventEmitter."""

    def test_typed_and_catch_all_handlers(self):
        emitter = EventEmitter()
        typed, everything = [], []
        emitter.subscribe(typed.append, EventType.BET_PLACED)
        emitter.subscribe(everything.append)

        emitter.emit_new(EventType.BET_PLACED, amount=5)
        emitter.emit_new(EventType.ROUND_ENDED)

        assert [e.event_type for e in typed] == [EventType.BET_PLACED]
        assert [e.event_type for e in everything] == [EventType.BET_PLACED, EventType.ROUND_ENDED]
        assert typed[0].data == {"amount": 5}

    def test_unsubscribe(self):
        emitter = EventEmitter()
        seen = []
        emitter.subscribe(seen.append)
        emitter.unsubscribe(seen.append)
        emitter.unsubscribe(seen.append)  # unknown handlers are ignored
        emitter.emit_new(EventType.GAME_STARTED)
        assert seen == []

    def test_history(self):
        emitter = EventEmitter()
        emitter.emit(GameEvent(EventType.DECK_SHUFFLED))
        assert len(emitter.history) == 1
        emitter.clear_history()
        assert emitter.history == []

    def test_history_keeps_most_recent_events(self):
        emitter = EventEmitter(history_limit=3)
        for amount in range(5):
            emitter.emit_new(EventType.BET_PLACED, amount=amount)

        assert [e.data["amount"] for e in emitter.history] == [2, 3, 4]
        assert isinstance(emitter.history, list)

    def test_event_str(self):
        event = GameEvent(EventType.BET_PLACED, {"amount": 3})
        assert str(event) == "BET_PLACED: {'amount': 3}"


class TestRoundPhase:
    """Tests for RoundPhase."""

    def test_str(self):
        assert str(RoundPhase.AWAITING_BET) == "Awaiting Bet"


class TestParticipants:
    """Tests for Player and Dealer."""

    def test_player_debit_and_credit(self):
        player = Player(balance=50)
        player.debit(20)
        assert player.balance == 30
        player.credit(40)
        assert player.balance == 70

    def test_player_never_goes_negative(self):
        player = Player(balance=10)
        with pytest.raises(InvalidBetError):
            player.debit(11)
        assert player.balance == 10

    def test_negative_starting_balance(self):
        with pytest.raises(ValueError):
            Player(balance=-1)

    def test_dealer_has_only_a_hand(self):
        dealer = Dealer()
        assert len(dealer.hand) == 0
        assert not hasattr(dealer, "balance")
