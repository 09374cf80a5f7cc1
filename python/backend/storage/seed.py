"""Fills a store with generated puzzles for every supported grid size."""

from __future__ import annotations

import random

from backend.engine.gamegenerator import GameGenerator
from backend.storage.store import PuzzleStore
from backend.utils.logger import get_logger

logger = get_logger(__name__)

# grid size -> inclusive range of difficulty ratings handed to its puzzles
DIFFICULTY_RANGES: dict[int, tuple[int, int]] = {
    3: (1, 2),
    4: (2, 4),
    6: (4, 6),
    8: (6, 8),
    10: (8, 10),
}


def seed_puzzles(
    store: PuzzleStore,
    per_size: int = 20,
    sizes: dict[int, tuple[int, int]] | None = None,
    rng: random.Random | None = None,
) -> int:
    """Generate *per_size* puzzles for each size and store them.

    Each puzzle gets a random difficulty from its size's range.  Returns the
    number of puzzles added.
    """
    rand = rng or random.Random()
    ranges = sizes or DIFFICULTY_RANGES
    added = 0
    with store.transaction():
        for size, (low, high) in ranges.items():
            for _ in range(per_size):
                board = GameGenerator.generate(size, rand)
                store.add_puzzle(size, rand.randint(low, high), board.cells)
                added += 1
    logger.info("seeded %d puzzles across %d sizes", added, len(ranges))
    return added
