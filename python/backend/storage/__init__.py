from backend.storage.seed import DIFFICULTY_RANGES, seed_puzzles
from backend.storage.store import JsonStore, PuzzleStore

__all__ = ["DIFFICULTY_RANGES", "JsonStore", "PuzzleStore", "seed_puzzles"]
