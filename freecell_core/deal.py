from __future__ import annotations

import logging
import random
from typing import List, Optional

from .cards import Card, full_deck
from .state import GameState, NUM_PILES

logger = logging.getLogger(__name__)


def shuffle_deck(rng: Optional[random.Random] = None, seed: Optional[int] = None) -> List[Card]:
    """Returns a uniformly shuffled 52-card deck (Fisher-Yates via random.shuffle)."""
    if rng is None:
        rng = random.Random(seed)
    deck = full_deck()
    rng.shuffle(deck)
    return deck


def deal(deck: List[Card]) -> GameState:
    """Deals `deck` round-robin into the tableau: card i goes to pile i % 8.

    Free cells, foundations and selection start empty. With a 52-card deck the
    piles hold 7,7,7,7,6,6,6,6 cards.
    """
    piles: List[List[Card]] = [[] for _ in range(NUM_PILES)]
    for i, card in enumerate(deck):
        piles[i % NUM_PILES].append(card)
    return GameState.build(tableau=piles)


def deal_new_game(seed: Optional[int] = None, rng: Optional[random.Random] = None) -> GameState:
    """Creates a freshly shuffled and dealt game."""
    state = deal(shuffle_deck(rng=rng, seed=seed))
    logger.debug('dealt new game (seed=%r): tops=%s', seed,
                 [p[-1].code() for p in state.tableau])
    return state
