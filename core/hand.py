"""Three-card hands and round scoring."""

from enum import Enum, auto
from typing import Iterator

from core.cards import Card
from core.errors import IndexOutOfRangeError

HAND_SIZE = 3


class HandFullError(ValueError):
    """Raised when dealing into a hand that already holds three cards."""


class Hand:
    """
    A fixed-size hand of three card slots.

    Cards are appended during the deal; afterwards each slot can be
    overwritten independently. The hand is empty between rounds.
    """

    def __init__(self, cards: list[Card] | None = None) -> None:
        self._cards: list[Card] = []
        for card in cards or []:
            self.add_card(card)

    @property
    def cards(self) -> tuple[Card, ...]:
        """Return the cards in slot order."""
        return tuple(self._cards)

    def add_card(self, card: Card) -> None:
        """Deal a card into the next empty slot."""
        if len(self._cards) >= HAND_SIZE:
            raise HandFullError(f"Hand already holds {HAND_SIZE} cards")
        self._cards.append(card)

    def replace_card(self, index: int, card: Card) -> Card:
        """
        Overwrite the card in a slot.

        Args:
            index: Slot to overwrite (0-based)
            card: The incoming card

        Returns:
            The discarded card

        Raises:
            IndexOutOfRangeError: If the slot does not hold a card
        """
        if isinstance(index, bool) or not isinstance(index, int):
            raise IndexOutOfRangeError(f"Card index must be an integer, got {index!r}")
        if not 0 <= index < len(self._cards):
            raise IndexOutOfRangeError(
                f"Card index {index} out of range 0..{HAND_SIZE - 1}"
            )
        discarded = self._cards[index]
        self._cards[index] = card
        return discarded

    def clear(self) -> None:
        """Remove all cards from the hand."""
        self._cards.clear()

    @property
    def is_complete(self) -> bool:
        """Check if every slot has been dealt."""
        return len(self._cards) == HAND_SIZE

    @property
    def special_count(self) -> int:
        """Return the number of Jacks, Queens and Kings in the hand."""
        return sum(1 for card in self._cards if card.special)

    @property
    def remainder(self) -> int:
        """Return the sum of non-special card values, modulo 10."""
        return sum(card.numeric_value for card in self._cards if not card.special) % 10

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self._cards)
        return f"{cards_str} (specials {self.special_count}, remainder {self.remainder})"

    def __repr__(self) -> str:
        return f"Hand({list(self._cards)!r})"


class Outcome(Enum):
    """Result of a scored round."""

    PLAYER_WIN = auto()
    DEALER_WIN = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


def evaluate_hands(player_hand: Hand, dealer_hand: Hand) -> Outcome:
    """
    Compare player and dealer hands.

    More special cards wins. With equal special counts the higher
    remainder wins, and an equal remainder goes to the dealer.
    """
    player_specials = player_hand.special_count
    dealer_specials = dealer_hand.special_count

    if player_specials != dealer_specials:
        if player_specials > dealer_specials:
            return Outcome.PLAYER_WIN
        return Outcome.DEALER_WIN

    if player_hand.remainder > dealer_hand.remainder:
        return Outcome.PLAYER_WIN
    return Outcome.DEALER_WIN
