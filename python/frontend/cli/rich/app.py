"""Rich terminal frontend — tables, colours, and panels.

Uses the ``rich`` library for styled output while sharing the same input
handler and game service as the vanilla CLI.  The menu offers adaptive play
and the player's profile.
"""

from __future__ import annotations

import sys

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.engine.gameplay import GamePlay
from backend.errors import PuzzleError
from backend.models.board import EMPTY, Board, Direction
from backend.services import GameService, PuzzleAssignment, SessionOutcome
from frontend.cli.input_handler import get_key, get_key_timeout

console = Console()

_DIRECTIONS = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


# -- helpers ------------------------------------------------------------------


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


def _tier_label(assignment: PuzzleAssignment) -> str:
    label = f"{assignment.size}×{assignment.size}  difficulty {assignment.difficulty}"
    if assignment.fallback:
        label += "  [dim](fallback)[/dim]"
    return label


# -- board rendering ----------------------------------------------------------


def _render_board(board: Board, highlight: int | None = None) -> Table:
    """Return a Rich Table representing the puzzle grid."""
    width = len(str(board.size * board.size - 1))
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(board.size):
        table.add_column(width=width + 1, justify="center")

    for r, row in enumerate(board.rows):
        cells: list[str] = []
        for c, val in enumerate(row):
            if val is EMPTY:
                cells.append("[dim]·[/dim]")
            elif val == highlight:
                cells.append(f"[bold black on magenta]{val:>{width}}[/bold black on magenta]")
            elif board.is_tile_correct(r, c):
                cells.append(f"[bold green]{val:>{width}}[/bold green]")
            else:
                cells.append(f"[bold white]{val:>{width}}[/bold white]")
        table.add_row(*cells)

    return table


# -- menu screen --------------------------------------------------------------


def _draw_menu(service: GameService, player: str) -> None:
    console.clear()
    profile = service.profile(player)

    who = Text()
    who.append("  Player ", style="dim")
    who.append(player, style="bold cyan")
    who.append("    Skill ", style="dim")
    who.append(f"{profile.skill:.2f}", style="bold yellow")
    who.append("    Next ", style="dim")
    who.append(f"{profile.tier.size}×{profile.tier.size}", style="bold green")

    opts = Text()
    opts.append("  1", style="bold cyan")
    opts.append("  Play    ")
    opts.append("2", style="bold yellow")
    opts.append("  Profile    ")
    opts.append("Q", style="dim bold")
    opts.append("  Quit", style="dim")

    body = Group(
        Text(""),
        Align.center(who),
        Text(""),
        Align.center(opts),
        Text(""),
    )

    panel = Panel(
        body,
        title="[bold]S L I D I N G   P U Z Z L E[/bold]",
        border_style="bright_blue",
        padding=(1, 4),
    )

    console.print()
    console.print(Align.center(panel))


# -- game screens -------------------------------------------------------------


def _draw_game(
    game: GamePlay,
    assignment: PuzzleAssignment,
    status: str = "",
    highlight: int | None = None,
) -> None:
    """Draw the game screen."""
    console.clear()

    board_table = _render_board(game.board, highlight)

    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(game.state.moves), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(game.state.elapsed_time), style="bold yellow")
    stats.append("    Hints: ", style="dim")
    stats.append(str(game.state.hints_used), style="bold yellow")

    controls = Text()
    controls.append("  ↑↓←→", style="bold cyan")
    controls.append(" / ", style="dim")
    controls.append("WASD", style="bold cyan")
    controls.append("  move   ", style="dim")
    controls.append("N", style="bold cyan")
    controls.append("  hint   ", style="dim")
    controls.append("R", style="bold cyan")
    controls.append("  new puzzle   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  give up", style="dim")

    panel = Panel(
        Align.center(board_table),
        title=f"[bold cyan]{_tier_label(assignment)}[/bold cyan]",
        border_style="bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    # Save the cursor right before the stats line so _update_time() can
    # overwrite only this line.
    sys.stdout.write("\033[s")
    sys.stdout.flush()
    console.print(Align.center(stats))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(controls))


def _update_time(game: GamePlay) -> None:
    """Repaint the stats line in place with raw ANSI codes."""
    _DIM = "\033[2m"
    _YB = "\033[33;1m"
    _RS = "\033[0m"

    m, s = divmod(int(game.state.elapsed_time), 60)
    moves, hints = game.state.moves, game.state.hints_used
    stats_raw = (
        f"{_DIM}Moves: {_RS}{_YB}{moves}{_RS}"
        f"    {_DIM}Time: {_RS}{_YB}{m:02d}:{s:02d}{_RS}"
        f"    {_DIM}Hints: {_RS}{_YB}{hints}{_RS}"
    )

    visible_len = len(f"Moves: {moves}    Time: {m:02d}:{s:02d}    Hints: {hints}")
    pad = max(0, (console.width - visible_len) // 2)

    sys.stdout.write(f"\033[u\033[K{' ' * pad}{stats_raw}")
    sys.stdout.flush()


def _draw_result(game: GamePlay, assignment: PuzzleAssignment, outcome: SessionOutcome) -> None:
    console.clear()

    won = game.is_won
    headline = Text()
    if won:
        headline.append("\n  ★ ", style="bold yellow")
        headline.append("SOLVED!", style="bold green")
        headline.append("  ★\n", style="bold yellow")
    else:
        headline.append("\n  Puzzle abandoned.\n", style="bold red")

    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(game.state.moves), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(game.state.elapsed_time), style="bold yellow")

    skill = Text()
    skill.append("  Skill: ", style="dim")
    skill.append(f"{outcome.skill.old_skill:.3f}", style="yellow")
    skill.append(" → ", style="dim")
    skill.append(f"{outcome.skill.new_skill:.3f}", style="bold green" if won else "yellow")

    group = Group(
        Align.center(_render_board(game.board)),
        Align.center(headline),
        Align.center(stats),
        Align.center(skill),
    )

    border = "bold green" if won else "red"
    panel = Panel(
        group,
        title=f"[{border}]{_tier_label(assignment)}[/{border}]",
        border_style=border,
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))


def _draw_profile(service: GameService, player: str) -> None:
    """Full-screen profile view (used from the menu)."""
    console.clear()
    profile = service.profile(player)

    header = Text()
    header.append("  Skill ", style="dim")
    header.append(f"{profile.skill:.3f}", style="bold yellow")
    header.append("    Tier ", style="dim")
    header.append(
        f"{profile.tier.size}×{profile.tier.size} / {profile.tier.difficulty}",
        style="bold green",
    )

    stats = profile.stats
    summary = Text()
    summary.append("  Played ", style="dim")
    summary.append(str(stats.total_puzzles), style="bold yellow")
    summary.append("    Completed ", style="dim")
    summary.append(f"{stats.completion_rate:.0f}%", style="bold yellow")
    summary.append("    Avg ", style="dim")
    summary.append(f"{stats.average_moves:.0f} moves / {stats.average_time:.1f}s", style="yellow")
    summary.append("    Hints ", style="dim")
    summary.append(str(stats.hint_usage_count), style="yellow")

    parts: list = [Align.center(header), Align.center(summary), Text("")]
    if not profile.sessions:
        parts.append(Align.center(Text("  No games played yet.", style="dim")))
    else:
        table = Table(
            box=rich.box.ROUNDED,
            border_style="dim",
            show_lines=False,
        )
        table.add_column("#", justify="right", style="dim", width=3)
        table.add_column("Grid", justify="center")
        table.add_column("Diff", justify="right")
        table.add_column("Status")
        table.add_column("Moves", justify="right", style="yellow")
        table.add_column("Time", justify="right", style="yellow")
        table.add_column("Hints", justify="right")

        recent = profile.sessions[-10:]
        start = len(profile.sessions) - len(recent) + 1
        for i, s in enumerate(recent, start):
            table.add_row(
                str(i),
                f"{s.size}×{s.size}",
                str(s.difficulty),
                s.status.value,
                str(s.moves),
                f"{s.time_seconds:.1f}s",
                str(s.hints_used),
            )
        parts.append(Align.center(table))

    panel = Panel(
        Group(*parts),
        title=f"[bold]PROFILE  {player}[/bold]",
        border_style="bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(Text("\n  Press any key to go back.\n", style="dim")))
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
            _draw_game(game, assignment, status, highlight)
            status = ""

            # Short timeout keeps the clock ticking between keypresses.
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
                    status = f"[red]{exc}[/red]"
                    continue
                game.state.record_hint()
                status = f"[magenta]Hint:[/magenta] slide tile [bold]{highlight}[/bold]"
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
        _draw_result(game, assignment, outcome)

        if key == "new" and not game.is_won:
            continue

        console.print(
            Align.center(
                Text("\n  Press R for the next puzzle, Q to go back.\n", style="dim")
            )
        )
        while True:
            key = get_key()
            if key == "new":
                break
            if key == "quit":
                return


# -- menu loop ----------------------------------------------------------------


def _menu_loop(service: GameService, player: str) -> None:
    while True:
        _draw_menu(service, player)
        key = get_key()

        if key == "quit":
            console.clear()
            console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
            return
        elif key in ("1", "enter"):
            _play_game(service, player)
        elif key in ("2", "profile"):
            _draw_profile(service, player)


# -- public entry point -------------------------------------------------------


def run(service: GameService, player: str) -> None:
    """Launch the Rich CLI with interactive menu."""
    service.store.ensure_player(player, service.default_skill)
    _menu_loop(service, player)
