"""Table participants."""

from core.errors import InvalidBetError
from core.hand import Hand


class Dealer:
    """The house. Holds a hand and nothing else."""

    def __init__(self) -> None:
        self.hand = Hand()

    def __repr__(self) -> str:
        return f"Dealer(hand={self.hand!r})"


class Player:
    """The wagering player: a hand plus a balance in whole currency units."""

    def __init__(self, balance: int = 100) -> None:
        if balance < 0:
            raise ValueError("Starting balance cannot be negative")
        self.hand = Hand()
        self._balance = balance

    @property
    def balance(self) -> int:
        """Return the current balance."""
        return self._balance

    def debit(self, amount: int) -> None:
        """Take a stake from the balance."""
        if amount > self._balance:
            raise InvalidBetError("You can't bet more than your balance!")
        self._balance -= amount

    def credit(self, amount: int) -> None:
        """Pay winnings into the balance."""
        self._balance += amount

    def reset_balance(self, balance: int) -> None:
        """Restore the balance for a new game."""
        self._balance = balance

    def __repr__(self) -> str:
        return f"Player(balance={self._balance}, hand={self.hand!r})"
