from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .cards import Card


class MoveError(str, Enum):
    """Why a requested move was rejected. Rejections are normal outcomes, not exceptions."""
    EMPTY_SOURCE = 'EmptySource'
    BROKEN_SEQUENCE = 'BrokenSequence'
    INSUFFICIENT_CAPACITY = 'InsufficientCapacity'
    DESTINATION_MISMATCH = 'DestinationMismatch'
    # Foundation cards never leave their foundation.
    LOCKED_SOURCE = 'LockedSource'


class GameStatus(str, Enum):
    IN_PROGRESS = 'in_progress'
    WON = 'won'


@dataclass(frozen=True)
class MoveResult:
    """Outcome of a move attempt.

    On success `cards` holds the relocated sequence (bottom first) and
    `promoted` the cards the completion sweep sent to foundations afterwards.
    On failure `error` names the violated rule and the state is untouched.
    """
    ok: bool
    error: Optional[MoveError] = None
    cards: Tuple[Card, ...] = ()
    promoted: Tuple[Card, ...] = ()
    won: bool = False

    @classmethod
    def rejected(cls, error: MoveError) -> 'MoveResult':
        return cls(ok=False, error=error)

    @classmethod
    def accepted(cls, cards: Tuple[Card, ...]) -> 'MoveResult':
        return cls(ok=True, cards=cards)
