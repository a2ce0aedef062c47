"""Shared test helpers: hand builders, stacked decks, hypothesis strategies."""

from random import Random

from hypothesis import strategies as st

from core.cards import Card, Deck, Rank, Suit
from core.game import RoundEngine
from core.hand import Hand


def make_hand(*cards: str) -> Hand:
    """Build a hand from card strings like 'K♠', '7D'."""
    return Hand([Card.from_string(c) for c in cards])


class StackedDeck(Deck):
    """A deck whose shuffle puts chosen cards on top, in draw order."""

    def __init__(self, draw_order: list[Card], rng: Random | None = None) -> None:
        self._draw_order = list(draw_order)
        super().__init__(rng=rng or Random(0))

    def shuffle(self) -> None:
        super().shuffle()
        rest = [c for c in self._cards if c not in self._draw_order]
        self._cards = rest + list(reversed(self._draw_order))


def rig_engine(
    engine: RoundEngine,
    player: list[str],
    dealer: list[str],
    replacements: list[str] | None = None,
) -> RoundEngine:
    """Make the next round deal exactly the given cards."""
    player_cards = [Card.from_string(c) for c in player]
    dealer_cards = [Card.from_string(c) for c in dealer]
    order: list[Card] = []
    for p, d in zip(player_cards, dealer_cards):
        order.extend([p, d])
    order.extend(Card.from_string(c) for c in replacements or [])
    engine.deck = StackedDeck(order)
    return engine


# Hypothesis strategies for property-based testing
@st.composite
def card_strategy(draw):
    """Generate a random card."""
    rank = draw(st.sampled_from(list(Rank)))
    suit = draw(st.sampled_from(list(Suit)))
    return Card(rank, suit)


@st.composite
def hand_strategy(draw):
    """Generate a three-card hand of distinct cards."""
    cards = draw(st.lists(card_strategy(), min_size=3, max_size=3, unique=True))
    return Hand(cards)
