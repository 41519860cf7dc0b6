from __future__ import annotations

import logging
import random
from typing import List, Optional, Tuple

from .completion import auto_promote, check_conservation, duplicate_cards, game_status, is_won
from .config import EngineConfig
from .deal import deal_new_game
from .errors import GameStatus, MoveResult
from .moves import Move, apply_move, find_foundation, legal_moves, movable_sequence, normalize_source, validate_move
from .state import FoundationLoc, GameState, Location, check_location

logger = logging.getLogger(__name__)


def play_move(state: GameState, source: Location, dest: Location) -> Tuple[GameState, MoveResult]:
    """Validates and applies one move, then runs the completion sweep.

    Returns the new state and the result. A rejected move returns `state`
    itself, unchanged.
    """
    check = validate_move(state, source, dest)
    if not check.ok:
        return state, check
    next_state = apply_move(state, source, dest, check.cards)
    next_state, promoted = auto_promote(next_state)
    if logger.isEnabledFor(logging.DEBUG):
        dups = duplicate_cards(next_state)
        if dups:
            raise AssertionError(f'card duplicated after move: {[c.code() for c in dups]}')
    won = is_won(next_state)
    if won:
        logger.info('game won')
    return next_state, MoveResult(ok=True, cards=check.cards, promoted=tuple(promoted), won=won)


def click(state: GameState, loc: Location, auto_route: bool = True) -> Tuple[GameState, Optional[MoveResult]]:
    """Single-click protocol as a pure transition.

    With no selection, clicking a movable card or run selects it (or, with
    `auto_route`, sends a lone card straight to a foundation that accepts
    it); empty spots and broken runs are ignored. With a
    selection, clicking the same spot clears it and clicking anywhere else
    attempts a move there; the selection is cleared either way. Returns the
    new state and the move result when a move was attempted.
    """
    check_location(loc)
    selected = state.selection
    if selected is None:
        if isinstance(loc, FoundationLoc):
            return state, None
        src = normalize_source(state, loc)
        seq, err = movable_sequence(state, src)
        if err is not None:
            return state, None
        if auto_route and len(seq) == 1:
            slot = find_foundation(state, seq[0])
            if slot is not None:
                return play_move(state, src, FoundationLoc(slot))
        return state.with_selection(src), None

    target = normalize_source(state, loc)
    if target == selected:
        return state.with_selection(None), None
    next_state, result = play_move(state, selected, loc)
    return next_state.with_selection(None), result


class FreeCellGame:
    """One game session. Owns the current GameState and replaces it on every change."""

    def __init__(
        self,
        state: Optional[GameState] = None,
        config: Optional[EngineConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or EngineConfig()
        self._rng = rng
        if state is None:
            self.new_game()
        else:
            self._state = state

    @property
    def state(self) -> GameState:
        return self._state

    def get_state(self) -> GameState:
        return self._state

    def new_game(self, seed: Optional[int] = None) -> GameState:
        """Shuffles, deals and runs the completion sweep. Discards the previous game."""
        if seed is None:
            seed = self.config.seed
        state = deal_new_game(seed=seed, rng=self._rng if seed is None else None)
        state, promoted = auto_promote(state)
        if logger.isEnabledFor(logging.DEBUG):
            check_conservation(state)
        self._state = state
        logger.info('new game (seed=%r), %d card(s) auto-promoted', seed, len(promoted))
        return state

    def select(self, loc: Location) -> Optional[MoveResult]:
        self._state, result = click(self._state, loc, auto_route=self.config.auto_route)
        return result

    def clear_selection(self) -> None:
        self._state = self._state.with_selection(None)

    def attempt_move(self, source: Location, dest: Location) -> MoveResult:
        self._state, result = play_move(self._state, source, dest)
        return result

    def legal_moves(self) -> List[Move]:
        return legal_moves(self._state)

    def is_won(self) -> bool:
        return is_won(self._state)

    @property
    def status(self) -> GameStatus:
        return game_status(self._state)
