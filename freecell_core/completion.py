from __future__ import annotations

import logging
from collections import Counter
from typing import List, Tuple

from .cards import Card, full_deck
from .errors import GameStatus
from .moves import find_foundation
from .state import FoundationLoc, GameState, NUM_PILES, TableauLoc

logger = logging.getLogger(__name__)


def promote_once(state: GameState) -> Tuple[GameState, List[Card]]:
    """One pass over the 8 piles, sending each promotable top card to a foundation.

    A pile may promote several cards in one pass when each new top card is
    also promotable.
    """
    promoted: List[Card] = []
    for p in range(NUM_PILES):
        while True:
            top = state.top(p)
            if top is None:
                break
            slot = find_foundation(state, top)
            if slot is None:
                break
            state = state.with_pile(p, state.tableau[p][:-1]).with_foundation(slot, top)
            promoted.append(top)
            logger.debug('auto-promoted %s from %s to %s', top.code(), TableauLoc(p), FoundationLoc(slot))
    return state, promoted


def auto_promote(state: GameState) -> Tuple[GameState, List[Card]]:
    """Repeats promote_once until a full pass moves nothing (fixed point)."""
    promoted: List[Card] = []
    while True:
        state, moved = promote_once(state)
        if not moved:
            return state, promoted
        promoted.extend(moved)


def is_won(state: GameState) -> bool:
    """All four foundations show a King and every pile is empty."""
    return (all(top is not None and top.is_king() for top in state.foundations)
            and all(not pile for pile in state.tableau))


def game_status(state: GameState) -> GameStatus:
    return GameStatus.WON if is_won(state) else GameStatus.IN_PROGRESS


def duplicate_cards(state: GameState) -> List[Card]:
    """Cards that sit in more than one place. Partial boards are fine; repeats are not."""
    counts = Counter(state.all_cards())
    return sorted((c for c, n in counts.items() if n > 1), key=lambda c: (c.suit, c.value))


def check_conservation(state: GameState) -> None:
    """Raises AssertionError unless the board holds each of the 52 cards exactly once."""
    counts = Counter(state.all_cards())
    expected = Counter(full_deck())
    if counts != expected:
        missing = sorted(c.code() for c in (expected - counts))
        extra = sorted(c.code() for c in (counts - expected))
        raise AssertionError(f'card conservation broken: missing={missing} extra={extra}')
