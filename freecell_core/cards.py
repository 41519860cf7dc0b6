from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

SUITS: Tuple[str, ...] = ('hearts', 'diamonds', 'clubs', 'spades')
RANKS: Tuple[str, ...] = ('A', '2', '3', '4', '5', '6', '7', '8', '9', '10', 'J', 'Q', 'K')
RED_SUITS = frozenset({'hearts', 'diamonds'})

SUIT_SYMBOLS: Dict[str, str] = {
    'hearts': '\N{BLACK HEART SUIT}',
    'diamonds': '\N{BLACK DIAMOND SUIT}',
    'clubs': '\N{BLACK CLUB SUIT}',
    'spades': '\N{BLACK SPADE SUIT}',
}
SUIT_LETTERS: Dict[str, str] = {'h': 'hearts', 'd': 'diamonds', 'c': 'clubs', 's': 'spades'}


@dataclass(frozen=True)
class Card:
    """A playing card. Immutable; equality is by (suit, rank)."""
    suit: str
    rank: str

    def __post_init__(self) -> None:
        if self.suit not in SUITS:
            raise ValueError(f'unknown suit: {self.suit!r}')
        if self.rank not in RANKS:
            raise ValueError(f'unknown rank: {self.rank!r}')

    @property
    def value(self) -> int:
        """Rank as a number: A=1 .. K=13."""
        return RANKS.index(self.rank) + 1

    @property
    def color(self) -> str:
        return 'red' if self.suit in RED_SUITS else 'black'

    def is_opposite_color(self, other: 'Card') -> bool:
        return self.color != other.color

    def is_ace(self) -> bool:
        return self.rank == 'A'

    def is_king(self) -> bool:
        return self.rank == 'K'

    def label(self) -> str:
        return f'{self.rank}{SUIT_SYMBOLS[self.suit]}'

    def code(self) -> str:
        """Short ASCII form accepted by parse(), e.g. '10h' or 'Qs'."""
        return f'{self.rank}{self.suit[0]}'

    def __str__(self) -> str:
        return self.label()

    @classmethod
    def parse(cls, text: str) -> 'Card':
        """Parses 'Ah', '10d', 'qs' (rank then suit letter)."""
        t = text.strip()
        if len(t) < 2:
            raise ValueError(f'bad card: {text!r}')
        rank, suit = t[:-1].upper(), t[-1].lower()
        if suit not in SUIT_LETTERS:
            raise ValueError(f'bad card suit: {text!r}')
        return cls(SUIT_LETTERS[suit], rank)


def full_deck() -> List[Card]:
    """The 52-card deck in suit-major order (unshuffled)."""
    return [Card(suit, rank) for suit in SUITS for rank in RANKS]


def follows_in_run(lower: Card, upper: Card) -> bool:
    """True if `upper` may sit on `lower` in a tableau run (opposite color, one rank down)."""
    return lower.is_opposite_color(upper) and upper.value == lower.value - 1


def follows_on_foundation(top: Card, card: Card) -> bool:
    """True if `card` is the next card of `top`'s suit on a foundation."""
    return top.suit == card.suit and card.value == top.value + 1
