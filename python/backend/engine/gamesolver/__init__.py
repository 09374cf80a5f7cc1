from backend.engine.gamesolver.hint import HintAdvisor, HintCandidate
from backend.engine.gamesolver.solver import Solver

__all__ = ["HintAdvisor", "HintCandidate", "Solver"]
