from __future__ import annotations

import argparse
from typing import Callable, Iterable, Iterator, List, Optional

from .config import EngineConfig, setup_logging
from .engine import FreeCellGame
from .errors import MoveResult
from .state import FoundationLoc, FreeCellLoc, Location, TableauLoc


HELP = """Commands (indices are 0-based):
  <src> <dst>   move, e.g. "t3 c0", "t2.4 t6", "c1 f0"
  sel <loc>     click a location (select, or move the current selection there)
  moves         list legal moves
  new [seed]    start a new game
  help          show this text
  quit          leave
Locations: tN = top of pile N, tN.K = card K of pile N, cN = free cell N, fN = foundation N"""


def parse_location(text: str) -> Location:
    """Parses 't3', 't3.4', 'c1' or 'f2' into a Location."""
    t = text.strip().lower()
    if len(t) < 2 or t[0] not in 'tcf':
        raise ValueError(f'bad location: {text!r}')
    kind, rest = t[0], t[1:]
    try:
        if kind == 't':
            if '.' in rest:
                pile_s, card_s = rest.split('.', 1)
                return TableauLoc(int(pile_s), int(card_s))
            return TableauLoc(int(rest))
        if kind == 'c':
            return FreeCellLoc(int(rest))
        return FoundationLoc(int(rest))
    except ValueError:
        raise ValueError(f'bad location: {text!r}') from None


def format_location(loc: Location) -> str:
    if isinstance(loc, TableauLoc):
        return f't{loc.pile}' if loc.card is None else f't{loc.pile}.{loc.card}'
    if isinstance(loc, FreeCellLoc):
        return f'c{loc.cell}'
    return f'f{loc.slot}'


def describe_result(result: MoveResult) -> str:
    if not result.ok:
        return f'rejected: {result.error.value}'
    moved = ' '.join(c.label() for c in result.cards)
    text = f'moved {moved}'
    if result.promoted:
        text += '; auto-promoted ' + ' '.join(c.label() for c in result.promoted)
    return text


def run_session(game: FreeCellGame, lines: Iterable[str], write: Callable[[str], None] = print) -> None:
    """Drives `game` from text commands until `quit` or the input runs out."""
    write(game.state.pretty())
    for raw in lines:
        parts = raw.split()
        if not parts:
            continue
        cmd = parts[0].lower()
        if cmd in ('quit', 'q', 'exit'):
            return
        if cmd == 'help':
            write(HELP)
            continue
        if cmd == 'moves':
            moves = game.legal_moves()
            write(', '.join(f'{format_location(s)} {format_location(d)}' for s, d in moves) or 'no legal moves')
            continue
        if cmd == 'new':
            try:
                seed = int(parts[1]) if len(parts) > 1 else None
            except ValueError:
                write(f'bad seed: {parts[1]!r}')
                continue
            game.new_game(seed=seed)
            write(game.state.pretty())
            continue

        try:
            if cmd == 'sel' and len(parts) == 2:
                result = game.select(parse_location(parts[1]))
            elif len(parts) == 2:
                result = game.attempt_move(parse_location(parts[0]), parse_location(parts[1]))
            else:
                write('unknown command; type "help"')
                continue
        except ValueError as e:
            write(f'error: {e}')
            continue

        if result is not None:
            write(describe_result(result))
        write(game.state.pretty())
        if game.is_won():
            write('Congratulations! Puzzle completed. Type "new" to play again.')


def _stdin_lines() -> Iterator[str]:
    while True:
        try:
            yield input('> ')
        except EOFError:
            return


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='Free Cell solitaire in the terminal')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for the deal')
    parser.add_argument('--no-auto-route', action='store_true',
                        help='Do not send selected cards straight to a foundation')
    parser.add_argument('--show', action='store_true', help='Print the dealt board and exit')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    env = EngineConfig.from_env()
    config = EngineConfig(
        auto_route=env.auto_route and not args.no_auto_route,
        seed=args.seed if args.seed is not None else env.seed,
    )
    game = FreeCellGame(config=config)
    if args.show:
        print(game.state.pretty())
        return
    print(HELP)
    run_session(game, _stdin_lines())


if __name__ == '__main__':
    main()
