from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .cards import Card, RANKS

NUM_PILES = 8
NUM_FREE_CELLS = 4
NUM_FOUNDATIONS = 4

Pile = Tuple[Card, ...]


@dataclass(frozen=True)
class TableauLoc:
    """A tableau position. `card=None` means the pile's top card."""
    pile: int
    card: Optional[int] = None


@dataclass(frozen=True)
class FreeCellLoc:
    cell: int


@dataclass(frozen=True)
class FoundationLoc:
    slot: int


Location = Union[TableauLoc, FreeCellLoc, FoundationLoc]


def _check_range(name: str, idx: int, size: int) -> None:
    if not isinstance(idx, int) or not 0 <= idx < size:
        raise ValueError(f'{name} index out of range: {idx!r} (expected 0..{size - 1})')


def check_location(loc: Location) -> None:
    """Raises ValueError if `loc` lies outside the fixed board geometry."""
    if isinstance(loc, TableauLoc):
        _check_range('pile', loc.pile, NUM_PILES)
        if loc.card is not None and (not isinstance(loc.card, int) or loc.card < 0):
            raise ValueError(f'card index must be a non-negative int: {loc.card!r}')
    elif isinstance(loc, FreeCellLoc):
        _check_range('free cell', loc.cell, NUM_FREE_CELLS)
    elif isinstance(loc, FoundationLoc):
        _check_range('foundation', loc.slot, NUM_FOUNDATIONS)
    else:
        raise ValueError(f'not a location: {loc!r}')


@dataclass(frozen=True)
class GameState:
    """Board snapshot: 8 piles (bottom to top), 4 free cells, 4 foundation tops, and the pending selection."""
    tableau: Tuple[Pile, ...]
    free_cells: Tuple[Optional[Card], ...]
    foundations: Tuple[Optional[Card], ...]
    selection: Optional[Location] = None

    def __post_init__(self) -> None:
        if len(self.tableau) != NUM_PILES:
            raise ValueError(f'expected {NUM_PILES} piles, got {len(self.tableau)}')
        if len(self.free_cells) != NUM_FREE_CELLS:
            raise ValueError(f'expected {NUM_FREE_CELLS} free cells, got {len(self.free_cells)}')
        if len(self.foundations) != NUM_FOUNDATIONS:
            raise ValueError(f'expected {NUM_FOUNDATIONS} foundations, got {len(self.foundations)}')

    @classmethod
    def empty(cls) -> 'GameState':
        return cls(
            tableau=tuple(() for _ in range(NUM_PILES)),
            free_cells=(None,) * NUM_FREE_CELLS,
            foundations=(None,) * NUM_FOUNDATIONS,
        )

    @classmethod
    def build(
        cls,
        tableau: Sequence[Iterable[Card]] = (),
        free_cells: Sequence[Optional[Card]] = (),
        foundations: Sequence[Optional[Card]] = (),
    ) -> 'GameState':
        """Builds a state from partial lists, padding missing piles/slots with empties."""
        piles = [tuple(p) for p in tableau]
        piles += [()] * (NUM_PILES - len(piles))
        cells = list(free_cells) + [None] * (NUM_FREE_CELLS - len(free_cells))
        founds = list(foundations) + [None] * (NUM_FOUNDATIONS - len(foundations))
        return cls(tableau=tuple(piles), free_cells=tuple(cells), foundations=tuple(founds))

    # ---- queries ----

    def pile(self, idx: int) -> Pile:
        _check_range('pile', idx, NUM_PILES)
        return self.tableau[idx]

    def top(self, idx: int) -> Optional[Card]:
        p = self.pile(idx)
        return p[-1] if p else None

    def card_at(self, loc: Location) -> Optional[Card]:
        """The card sitting at `loc`, or None if that position is empty."""
        check_location(loc)
        if isinstance(loc, TableauLoc):
            p = self.tableau[loc.pile]
            if loc.card is None:
                return p[-1] if p else None
            return p[loc.card] if loc.card < len(p) else None
        if isinstance(loc, FreeCellLoc):
            return self.free_cells[loc.cell]
        return self.foundations[loc.slot]

    def empty_free_cells(self) -> int:
        return sum(1 for c in self.free_cells if c is None)

    def empty_piles(self, exclude: Optional[int] = None) -> int:
        return sum(1 for i, p in enumerate(self.tableau) if not p and i != exclude)

    def tableau_count(self) -> int:
        return sum(len(p) for p in self.tableau)

    def foundation_cards(self) -> Iterator[Card]:
        """Every card implied by the foundations (each holds A..top of its suit)."""
        for top in self.foundations:
            if top is None:
                continue
            for rank in RANKS[:top.value]:
                yield Card(top.suit, rank)

    def all_cards(self) -> List[Card]:
        out: List[Card] = [c for p in self.tableau for c in p]
        out.extend(c for c in self.free_cells if c is not None)
        out.extend(self.foundation_cards())
        return out

    # ---- copy-on-write helpers ----

    def with_pile(self, idx: int, cards: Iterable[Card]) -> 'GameState':
        piles = list(self.tableau)
        piles[idx] = tuple(cards)
        return replace(self, tableau=tuple(piles))

    def with_free_cell(self, idx: int, card: Optional[Card]) -> 'GameState':
        cells = list(self.free_cells)
        cells[idx] = card
        return replace(self, free_cells=tuple(cells))

    def with_foundation(self, idx: int, card: Optional[Card]) -> 'GameState':
        founds = list(self.foundations)
        founds[idx] = card
        return replace(self, foundations=tuple(founds))

    def with_selection(self, selection: Optional[Location]) -> 'GameState':
        return replace(self, selection=selection)

    # ---- rendering ----

    def pretty(self) -> str:
        """Plain-text board: free cells and foundations on top, piles as columns below."""

        def slot(c: Optional[Card]) -> str:
            return f'{c.label():>4}' if c is not None else '  --'

        def sel_mark(loc: Location) -> str:
            return '*' if self.selection == loc else ' '

        lines: List[str] = []
        cells = ''.join(slot(c) + sel_mark(FreeCellLoc(i)) for i, c in enumerate(self.free_cells))
        founds = ''.join(slot(c) + ' ' for c in self.foundations)
        lines.append(f'cells: {cells}  foundations: {founds.rstrip()}')
        lines.append('       ' + ''.join(f'{i:>4} ' for i in range(NUM_PILES)))
        height = max((len(p) for p in self.tableau), default=0)
        selected = self.selection if isinstance(self.selection, TableauLoc) else None
        for row in range(height):
            cols: List[str] = []
            for i, p in enumerate(self.tableau):
                if row < len(p):
                    mark = '*' if selected is not None and selected.pile == i and selected.card is not None and row >= selected.card else ' '
                    cols.append(p[row].label().rjust(4) + mark)
                else:
                    cols.append('     ')
            lines.append(f'{row:>5}  ' + ''.join(cols).rstrip())
        return '\n'.join(lines)
