#!/usr/bin/env python3
"""Adaptive Sliding Puzzle.

Usage::

    python main.py                       # interactive menu
    python main.py play -f rich -p alice # Rich terminal as player "alice"
    python main.py serve --port 8000     # REST API
    python main.py seed --per-size 20    # fill the puzzle store
    python main.py profile -p alice      # skill and recent games
"""

import importlib
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.api import build_service  # noqa: E402
from backend.config import Settings, get_settings  # noqa: E402
from backend.errors import PuzzleError  # noqa: E402
from backend.storage import JsonStore, seed_puzzles  # noqa: E402
from backend.utils.logger import configure_logging  # noqa: E402


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    vanilla = "vanilla"
    rich = "rich"


_RUNNERS = {
    Frontend.vanilla: "frontend.cli.vanilla.app",
    Frontend.rich: "frontend.cli.rich.app",
}


# -- helpers ------------------------------------------------------------------


def _settings(data_dir: Optional[Path]) -> Settings:
    settings = get_settings()
    if data_dir is not None:
        settings = settings.model_copy(update={"data_dir": data_dir})
    return settings


def _print_profile(settings: Settings, player: str) -> None:
    service = build_service(settings)
    try:
        profile = service.profile(player)
    except PuzzleError as exc:
        print(f"\n  {exc}\n")
        return

    print(f"\n  === {player} ===")
    print(f"  Skill {profile.skill:.3f}   next puzzle "
          f"{profile.tier.size}x{profile.tier.size} (difficulty {profile.tier.difficulty})")
    stats = profile.stats
    print(f"  {stats.completion_rate:.0f}% of {stats.total_puzzles} puzzles completed, "
          f"{stats.hint_usage_count} hints used")
    if not profile.sessions:
        print("  No games played yet.\n")
        return
    for i, s in enumerate(profile.sessions[-10:], 1):
        print(f"  {i:>2}. {s.size:>2}x{s.size:<2} {s.status.value:<9} "
              f"{s.moves:>5} moves  {s.time_seconds:>7.1f}s  ({s.started_at})")
    print()


def _launch(frontend: Frontend, settings: Settings, player: str) -> None:
    mod = importlib.import_module(_RUNNERS[frontend])
    mod.run(service=build_service(settings), player=player)


def _menu_loop(settings: Settings, player: str) -> None:
    while True:
        print()
        print("  ====================================")
        print("       S L I D I N G   P U Z Z L E    ")
        print("  ====================================")
        print()
        print("  1.  Play  (Vanilla Terminal)")
        print("  2.  Play  (Rich Terminal)")
        print("  3.  View Profile")
        print("  0.  Quit")
        print()

        choice = input("  Select: ").strip()

        if choice == "0":
            print("\n  Goodbye!\n")
            return
        if choice == "1":
            _launch(Frontend.vanilla, settings, player)
        elif choice == "2":
            _launch(Frontend.rich, settings, player)
        elif choice == "3":
            _print_profile(settings, player)
        else:
            print("  Unknown option.")


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False, help="Adaptive Sliding Puzzle.")

PlayerOption = typer.Option("guest", "-p", "--player", help="Player id.")
DataDirOption = typer.Option(None, "--data-dir", help="Directory holding the puzzle store.")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    player: str = PlayerOption,
    data_dir: Optional[Path] = DataDirOption,
) -> None:
    """Without a command, open the interactive menu."""
    if ctx.invoked_subcommand is None:
        configure_logging("WARNING")
        _menu_loop(_settings(data_dir), player)


@app.command()
def play(
    frontend: Frontend = typer.Option(
        Frontend.rich, "-f", "--frontend", help="Terminal frontend to launch."
    ),
    player: str = PlayerOption,
    data_dir: Optional[Path] = DataDirOption,
) -> None:
    """Play adaptive puzzles in the terminal."""
    configure_logging("WARNING")
    _launch(frontend, _settings(data_dir), player)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address."),
    port: Optional[int] = typer.Option(None, help="Bind port."),
    data_dir: Optional[Path] = DataDirOption,
) -> None:
    """Run the REST API with uvicorn."""
    import uvicorn

    from backend.api import create_app

    settings = _settings(data_dir)
    configure_logging(settings.log_level)
    uvicorn.run(
        create_app(settings),
        host=host or settings.host,
        port=port or settings.port,
        log_config=None,
    )


@app.command()
def seed(
    per_size: int = typer.Option(20, "--per-size", min=1, help="Puzzles per grid size."),
    data_dir: Optional[Path] = DataDirOption,
) -> None:
    """Add generated puzzles to the store."""
    settings = _settings(data_dir)
    configure_logging(settings.log_level)
    added = seed_puzzles(JsonStore(settings.store_path), per_size=per_size)
    typer.echo(f"Added {added} puzzles to {settings.store_path}")


@app.command()
def profile(
    player: str = PlayerOption,
    data_dir: Optional[Path] = DataDirOption,
) -> None:
    """Show a player's skill and recent games."""
    configure_logging("WARNING")
    _print_profile(_settings(data_dir), player)


if __name__ == "__main__":
    app()
