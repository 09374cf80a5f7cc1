"""Vanilla terminal frontend — plain print and ANSI codes.

Renders with the standard library only and shares the input handler and
game service with the Rich CLI.
"""

from __future__ import annotations

import sys

from backend.engine.gameplay import GamePlay
from backend.errors import PuzzleError
from backend.models.board import EMPTY, Board, Direction
from backend.services import GameService, PuzzleAssignment, SessionOutcome
from frontend.cli.input_handler import get_key, get_key_timeout


# -- ANSI helpers -------------------------------------------------------------

_G = "\033[32;1m"    # bold green
_Y = "\033[33;1m"    # bold yellow
_C = "\033[36;1m"    # bold cyan
_M = "\033[45;30m"   # magenta bg, black fg (hinted tile)
_RED = "\033[31;1m"  # bold red
_DIM = "\033[2m"     # dim
_BOLD = "\033[1m"    # bold
_R = "\033[0m"       # reset

_DIRECTIONS = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


def _clear() -> None:
    sys.stdout.write("\033[2J\033[H")
    sys.stdout.flush()


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m}:{s:02d}" if m else f"{s}s"


def _stats_line(game: GamePlay) -> str:
    """Return the formatted Moves + Time + Hints string (no newline)."""
    return (
        f"  Moves: {_Y}{game.state.moves}{_R}  |  "
        f"Time: {_Y}{_format_time(game.state.elapsed_time)}{_R}  |  "
        f"Hints: {_Y}{game.state.hints_used}{_R}"
    )


def _title(assignment: PuzzleAssignment) -> str:
    size = assignment.size
    title = f"{size}×{size}, difficulty {assignment.difficulty}"
    if assignment.fallback:
        title += " (fallback)"
    return title


# -- board rendering ----------------------------------------------------------


def _render_board(board: Board, highlight: int | None = None) -> str:
    """Return an ANSI-coloured text representation of the board."""
    width = len(str(board.size * board.size - 1))
    cell_w = width + 2
    sep = "+" + (("-" * cell_w + "+") * board.size)

    lines: list[str] = [sep]
    for r, row in enumerate(board.rows):
        cells: list[str] = []
        for c, val in enumerate(row):
            if val is EMPTY:
                cells.append(f"{_DIM} {'·':>{width}} {_R}")
            elif val == highlight:
                cells.append(f"{_M} {val:>{width}} {_R}")
            elif board.is_tile_correct(r, c):
                cells.append(f"{_G} {val:>{width}} {_R}")
            else:
                cells.append(f" {val:>{width}} ")
        lines.append("|" + "|".join(cells) + "|")
        lines.append(sep)
    return "\n".join(lines)


# -- menu screen --------------------------------------------------------------


def _show_menu(service: GameService, player: str) -> None:
    _clear()
    profile = service.profile(player)
    print()
    print(f"  {_BOLD}======================================{_R}")
    print(f"  {_BOLD}     S L I D I N G   P U Z Z L E     {_R}")
    print(f"  {_BOLD}======================================{_R}")
    print()
    print(
        f"    Player {_C}{player}{_R}   "
        f"Skill {_Y}{profile.skill:.2f}{_R}   "
        f"Next {_G}{profile.tier.size}×{profile.tier.size}{_R}"
    )
    print()
    print(f"    {_C}1{_R}  Play")
    print(f"    {_Y}2{_R}  Profile")
    print(f"    {_DIM}Q{_R}  Quit")
    print()


# -- game screens -------------------------------------------------------------


def _show_game(
    game: GamePlay,
    assignment: PuzzleAssignment,
    status: str = "",
    highlight: int | None = None,
) -> None:
    """Draw the full game screen.

    The stats line is printed last, with no trailing newline, so
    ``_update_time`` can overwrite it in-place using ``\\r\\033[K``.
    """
    _clear()
    print(f"  {_C}=== Sliding Puzzle ({_title(assignment)}) ==={_R}")
    print()
    print(_render_board(game.board, highlight))
    print()
    print(
        f"  {_C}WASD{_R}/{_C}Arrows{_R}: move  |  "
        f"{_C}N{_R}: hint  |  "
        f"{_C}R{_R}: new puzzle  |  "
        f"{_C}Q{_R}: give up"
    )
    if status:
        print(f"  {status}")
    sys.stdout.write(f"\n{_stats_line(game)}")
    sys.stdout.flush()


def _update_time(game: GamePlay) -> None:
    """Overwrite just the stats (last) line in-place."""
    sys.stdout.write(f"\r\033[K{_stats_line(game)}")
    sys.stdout.flush()


def _show_result(game: GamePlay, assignment: PuzzleAssignment, outcome: SessionOutcome) -> None:
    _clear()
    won = game.is_won
    colour = _G if won else _RED
    print(f"  {colour}=== Sliding Puzzle ({_title(assignment)}) ==={_R}")
    print()
    print(_render_board(game.board))
    print()
    if won:
        print(f"  {_G}★ SOLVED! ★{_R}")
    else:
        print(f"  {_RED}Puzzle abandoned.{_R}")
    print()
    print(
        f"  Moves: {_Y}{game.state.moves}{_R}  |  "
        f"Time: {_Y}{_format_time(game.state.elapsed_time)}{_R}"
    )
    print(
        f"  Skill: {outcome.skill.old_skill:.3f} → "
        f"{colour}{outcome.skill.new_skill:.3f}{_R}"
    )


def _show_profile(service: GameService, player: str) -> None:
    _clear()
    profile = service.profile(player)
    print()
    print(f"  {_BOLD}=== PROFILE: {player} ==={_R}")
    print(
        f"\n  Skill {_Y}{profile.skill:.3f}{_R}   "
        f"Tier {_G}{profile.tier.size}×{profile.tier.size} / "
        f"{profile.tier.difficulty}{_R}"
    )
    stats = profile.stats
    print(
        f"  Played {_Y}{stats.total_puzzles}{_R}   "
        f"Completed {_Y}{stats.completion_rate:.0f}%{_R}   "
        f"Avg {_Y}{stats.average_moves:.0f}{_R} moves / "
        f"{_Y}{stats.average_time:.1f}s{_R}   "
        f"Hints {_Y}{stats.hint_usage_count}{_R}"
    )
    if not profile.sessions:
        print(f"\n  {_DIM}No games played yet.{_R}")
    else:
        print()
        for s in profile.sessions[-10:]:
            print(
                f"  {s.size:>2}×{s.size:<2} d{s.difficulty:<2} "
                f"{s.status.value:<9} "
                f"{_Y}{s.moves:>5}{_R} moves  "
                f"{_Y}{s.time_seconds:>7.1f}s{_R}  "
                f"{_DIM}{s.hints_used} hints{_R}"
            )
    print(f"\n  {_DIM}Press any key to go back.{_R}")
    get_key()


# -- game loop ----------------------------------------------------------------


def _play_game(service: GameService, player: str) -> None:
    """Adaptive play: each puzzle is sized to the player's current skill."""
    while True:
        assignment = service.start_session(player)
        game = GamePlay(assignment.board())
        status = ""
        highlight: int | None = None

        while not game.is_won:
            _show_game(game, assignment, status, highlight)
            status = ""

            # Wait for input; update the time display every 0.5 s.
            while True:
                key = get_key_timeout(0.5)
                if key is not None:
                    break
                _update_time(game)

            if key in _DIRECTIONS:
                if game.move(_DIRECTIONS[key]):
                    highlight = None
            elif key == "hint":
                try:
                    highlight = service.hint(
                        game.board.cells, game.size, assignment.session_id
                    )
                except PuzzleError as exc:
                    status = f"{_RED}{exc}{_R}"
                    continue
                game.state.record_hint()
                status = f"{_M} Hint {_R} slide tile {_BOLD}{highlight}{_R}"
            elif key in ("new", "quit"):
                game.abandon()
                break

        game.state.pause()
        outcome = service.finish_session(
            assignment.session_id,
            game.state.moves,
            round(game.state.elapsed_time, 2),
            game.state.status,
        )
        _show_result(game, assignment, outcome)

        if key == "new" and not game.is_won:
            continue

        print(f"\n  Press {_C}R{_R} for the next puzzle, {_C}Q{_R} to go back.")
        while True:
            key = get_key()
            if key == "new":
                break
            if key == "quit":
                return


# -- menu loop ----------------------------------------------------------------


def _menu_loop(service: GameService, player: str) -> None:
    while True:
        _show_menu(service, player)
        key = get_key()

        if key == "quit":
            _clear()
            print("  Goodbye!\n")
            return
        elif key in ("1", "enter"):
            _play_game(service, player)
        elif key in ("2", "profile"):
            _show_profile(service, player)


# -- public entry point -------------------------------------------------------


def run(service: GameService, player: str) -> None:
    """Launch the vanilla CLI with interactive menu."""
    service.store.ensure_player(player, service.default_skill)
    _menu_loop(service, player)
