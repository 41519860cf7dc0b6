from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .cards import Card, follows_in_run, follows_on_foundation
from .errors import MoveError, MoveResult
from .state import (
    FoundationLoc,
    FreeCellLoc,
    GameState,
    Location,
    NUM_FOUNDATIONS,
    NUM_PILES,
    TableauLoc,
    check_location,
)

logger = logging.getLogger(__name__)

Move = Tuple[Location, Location]


def is_run(cards: Tuple[Card, ...]) -> bool:
    """True if every adjacent pair alternates color and descends by one rank."""
    return all(follows_in_run(lo, hi) for lo, hi in zip(cards, cards[1:]))


def normalize_source(state: GameState, source: Location) -> Location:
    """Resolves a `TableauLoc` with no card index to the pile's top card."""
    if isinstance(source, TableauLoc) and source.card is None:
        pile = state.tableau[source.pile]
        return TableauLoc(source.pile, len(pile) - 1) if pile else source
    return source


def movable_sequence(state: GameState, source: Location) -> Tuple[Tuple[Card, ...], Optional[MoveError]]:
    """Returns the cards that would move from `source`, or the rule that forbids it.

    From a free cell the sequence is the single resident card. From the
    tableau it is everything from the chosen card to the top of the pile,
    which must form a single descending alternating-color run.
    """
    check_location(source)
    if isinstance(source, FoundationLoc):
        if state.card_at(source) is None:
            return (), MoveError.EMPTY_SOURCE
        return (), MoveError.LOCKED_SOURCE
    if isinstance(source, FreeCellLoc):
        card = state.card_at(source)
        if card is None:
            return (), MoveError.EMPTY_SOURCE
        return (card,), None
    src = normalize_source(state, source)
    pile = state.tableau[src.pile]
    if src.card is None or src.card >= len(pile):
        return (), MoveError.EMPTY_SOURCE
    seq = pile[src.card:]
    if not is_run(seq):
        return (), MoveError.BROKEN_SEQUENCE
    return seq, None


def max_sequence_length(state: GameState, source_pile: Optional[int] = None) -> int:
    """Largest run movable between piles: (empty free cells + 1) * 2 ** (empty piles other than the source)."""
    return (state.empty_free_cells() + 1) * 2 ** state.empty_piles(exclude=source_pile)


def can_move_to_foundation(state: GameState, card: Card, slot: int) -> bool:
    top = state.foundations[slot]
    if top is None:
        return card.is_ace()
    return follows_on_foundation(top, card)


def find_foundation(state: GameState, card: Card) -> Optional[int]:
    """First foundation slot that accepts `card`, or None."""
    for slot in range(NUM_FOUNDATIONS):
        if can_move_to_foundation(state, card, slot):
            return slot
    return None


def _check_destination(state: GameState, source: Location, dest: Location, seq: Tuple[Card, ...]) -> Optional[MoveError]:
    if isinstance(dest, TableauLoc):
        if isinstance(source, TableauLoc) and source.pile == dest.pile:
            return MoveError.DESTINATION_MISMATCH
        if len(seq) > 1 and len(seq) > max_sequence_length(state, source_pile=source.pile if isinstance(source, TableauLoc) else None):
            return MoveError.INSUFFICIENT_CAPACITY
        top = state.top(dest.pile)
        if top is not None and not follows_in_run(top, seq[0]):
            return MoveError.DESTINATION_MISMATCH
        return None
    if isinstance(dest, FreeCellLoc):
        if len(seq) != 1 or state.free_cells[dest.cell] is not None:
            return MoveError.DESTINATION_MISMATCH
        return None
    if len(seq) != 1 or not can_move_to_foundation(state, seq[0], dest.slot):
        return MoveError.DESTINATION_MISMATCH
    return None


def _validate(state: GameState, source: Location, dest: Location) -> MoveResult:
    check_location(source)
    check_location(dest)
    source = normalize_source(state, source)
    seq, err = movable_sequence(state, source)
    if err is None:
        err = _check_destination(state, source, dest, seq)
    if err is not None:
        return MoveResult.rejected(err)
    return MoveResult.accepted(seq)


def validate_move(state: GameState, source: Location, dest: Location) -> MoveResult:
    """Checks a move without changing anything.

    Raises ValueError only for locations outside the board geometry; every
    rule violation comes back as a rejected MoveResult.
    """
    result = _validate(state, source, dest)
    if not result.ok:
        logger.debug('rejected %s -> %s: %s', source, dest, result.error.value)
    return result


def apply_move(state: GameState, source: Location, dest: Location, cards: Tuple[Card, ...]) -> GameState:
    """Relocates an already validated sequence and clears the selection."""
    source = normalize_source(state, source)
    if isinstance(source, TableauLoc):
        state = state.with_pile(source.pile, state.tableau[source.pile][:source.card])
    elif isinstance(source, FreeCellLoc):
        state = state.with_free_cell(source.cell, None)

    if isinstance(dest, TableauLoc):
        state = state.with_pile(dest.pile, state.tableau[dest.pile] + tuple(cards))
    elif isinstance(dest, FreeCellLoc):
        state = state.with_free_cell(dest.cell, cards[0])
    else:
        state = state.with_foundation(dest.slot, cards[0])
    return state.with_selection(None)


def _sources(state: GameState) -> List[Location]:
    out: List[Location] = []
    for p, pile in enumerate(state.tableau):
        # Walk down from the top while the suffix is still a run.
        i = len(pile) - 1
        while i >= 0 and (i == len(pile) - 1 or follows_in_run(pile[i], pile[i + 1])):
            out.append(TableauLoc(p, i))
            i -= 1
    out.extend(FreeCellLoc(c) for c, card in enumerate(state.free_cells) if card is not None)
    return out


def _destinations(state: GameState) -> List[Location]:
    out: List[Location] = []
    first_empty_pile = True
    for p in range(NUM_PILES):
        if not state.tableau[p]:
            if not first_empty_pile:
                continue
            first_empty_pile = False
        out.append(TableauLoc(p))
    empty_cells = [c for c, card in enumerate(state.free_cells) if card is None]
    if empty_cells:
        out.append(FreeCellLoc(empty_cells[0]))
    out.extend(FoundationLoc(f) for f in range(NUM_FOUNDATIONS))
    return out


def legal_moves(state: GameState) -> List[Move]:
    """Lists every legal (source, destination) pair.

    Equivalent empty targets are collapsed: only the first empty pile and the
    first empty free cell are offered, and an Ace is offered to the first
    empty foundation only.
    """
    moves: List[Move] = []
    dests = _destinations(state)
    for src in _sources(state):
        ace_offered = False
        for dst in dests:
            if isinstance(dst, FoundationLoc) and ace_offered:
                continue
            if _validate(state, src, dst).ok:
                moves.append((src, dst))
                if isinstance(dst, FoundationLoc) and state.foundations[dst.slot] is None:
                    ace_offered = True
    return moves
