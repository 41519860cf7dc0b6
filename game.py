from __future__ import annotations

# Facade module that re-exports the Free Cell core.
# The Flask app and the tests import from here; single-responsibility
# modules live under freecell_core/*.

from freecell_core.cards import (  # noqa: F401
    Card,
    RANKS,
    SUITS,
    follows_in_run,
    follows_on_foundation,
    full_deck,
)
from freecell_core.state import (  # noqa: F401
    FoundationLoc,
    FreeCellLoc,
    GameState,
    Location,
    NUM_FOUNDATIONS,
    NUM_FREE_CELLS,
    NUM_PILES,
    TableauLoc,
    check_location,
)
from freecell_core.errors import GameStatus, MoveError, MoveResult  # noqa: F401
from freecell_core.deal import deal, deal_new_game, shuffle_deck  # noqa: F401
from freecell_core.moves import (  # noqa: F401
    apply_move,
    can_move_to_foundation,
    find_foundation,
    is_run,
    legal_moves,
    max_sequence_length,
    movable_sequence,
    validate_move,
)
from freecell_core.completion import (  # noqa: F401
    auto_promote,
    check_conservation,
    duplicate_cards,
    game_status,
    is_won,
    promote_once,
)
from freecell_core.config import EngineConfig  # noqa: F401
from freecell_core.engine import FreeCellGame, click, play_move  # noqa: F401


def main() -> None:
    # CLI driver delegated to freecell_core.cli
    from freecell_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
