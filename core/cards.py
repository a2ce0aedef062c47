"""Card and Deck classes - immutable card representations."""

from dataclasses import dataclass
from enum import Enum
from random import Random
from typing import Iterator

from core.errors import EmptyDeckError


class Suit(Enum):
    """Card suits."""

    CLUBS = "Clubs"
    SPADES = "Spades"
    DIAMONDS = "Diamonds"
    HEARTS = "Hearts"

    def __str__(self) -> str:
        symbols = {
            Suit.CLUBS: "♣",
            Suit.SPADES: "♠",
            Suit.DIAMONDS: "♦",
            Suit.HEARTS: "♥",
        }
        return symbols[self]


class Rank(Enum):
    """Card ranks, labelled as they are printed on the card."""

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"

    def __str__(self) -> str:
        return self.value

    @property
    def is_special(self) -> bool:
        """Jacks, Queens and Kings are special cards."""
        return self in (Rank.JACK, Rank.QUEEN, Rank.KING)

    @property
    def numeric_value(self) -> int:
        """
        Return the face value used in remainder sums.

        Ace counts 1, numeric ranks count their number. Special ranks
        contribute nothing.
        """
        if self.is_special:
            return 0
        if self == Rank.ACE:
            return 1
        return int(self.value)


_RANK_ALIASES = {"T": Rank.TEN}

_SUIT_ALIASES = {
    "C": Suit.CLUBS,
    "♣": Suit.CLUBS,
    "S": Suit.SPADES,
    "♠": Suit.SPADES,
    "D": Suit.DIAMONDS,
    "♦": Suit.DIAMONDS,
    "H": Suit.HEARTS,
    "♥": Suit.HEARTS,
}


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def special(self) -> bool:
        """Check if this card is a Jack, Queen or King."""
        return self.rank.is_special

    @property
    def numeric_value(self) -> int:
        """Return the value this card adds to a remainder sum."""
        return self.rank.numeric_value

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like 'K♠', 'AS', '10d'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        rank = _RANK_ALIASES.get(rank_str)
        if rank is None:
            try:
                rank = Rank(rank_str)
            except ValueError:
                raise ValueError(f"Invalid rank: {rank_str}") from None
        if suit_str not in _SUIT_ALIASES:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(rank, _SUIT_ALIASES[suit_str])


class Deck:
    """A standard 52-card deck, shuffled on construction."""

    def __init__(self, rng: Random | None = None) -> None:
        """
        Initialize a new shuffled deck.

        Args:
            rng: Random number generator for shuffling
        """
        self._rng = rng or Random()
        self._cards: list[Card] = []
        self.reset()
        self.shuffle()

    def reset(self) -> None:
        """Reset deck to all 52 cards in order."""
        self._cards = [Card(rank, suit) for suit in Suit for rank in Rank]

    def shuffle(self) -> None:
        """Shuffle the remaining cards in place."""
        self._rng.shuffle(self._cards)

    def draw(self) -> Card:
        """Draw a card from the top of the deck."""
        if not self._cards:
            raise EmptyDeckError()
        return self._cards.pop()

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)
