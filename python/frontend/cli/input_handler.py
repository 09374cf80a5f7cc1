"""Single-keypress reader for the terminal clients.

Arrow keys, WASD and the action letters are read without waiting for
Enter, on POSIX terminals (tty + termios) and on Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys
import time

ACTIONS: dict[str, str] = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    "n": "hint",
    "r": "new",
    "p": "profile",
    "q": "quit",
    "\x03": "quit",  # Ctrl-C
    "\r": "enter",
    "\n": "enter",
}

_ARROWS: dict[str, str] = {"A": "up", "B": "down", "C": "right", "D": "left"}


def _resolve(ch: str) -> str:
    """Map a raw character to its action, or to itself if printable."""
    action = ACTIONS.get(ch.lower() if ch.isalpha() else ch)
    if action is not None:
        return action
    return ch if ch.isprintable() else ""


# -- windows ------------------------------------------------------------------


def _read_windows(timeout: float | None) -> str | None:
    import msvcrt  # type: ignore[import-not-found]

    if timeout is not None:
        end = time.monotonic() + timeout
        while not msvcrt.kbhit():
            if time.monotonic() >= end:
                return None
            time.sleep(0.02)

    ch = msvcrt.getwch()
    if ch in ("\x00", "\xe0"):
        # Windows sends a prefix byte, then H/P/M/K for the arrow keys.
        return {"H": "up", "P": "down", "M": "right", "K": "left"}.get(msvcrt.getwch(), "")
    if ch == "\x1b":
        return "quit"
    return _resolve(ch)


# -- posix --------------------------------------------------------------------


def _read_posix(timeout: float | None) -> str | None:
    import select
    import termios
    import tty

    fd = sys.stdin.fileno()

    def pending(wait: float | None) -> bool:
        ready, _, _ = select.select([fd], [], [], wait)
        return bool(ready)

    def read1() -> str:
        # os.read is unbuffered, so select() keeps seeing the rest of an
        # escape sequence.
        return os.read(fd, 1).decode("utf-8", errors="ignore")

    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        if timeout is not None and not pending(timeout):
            return None

        ch = read1()
        if ch != "\x1b":
            return _resolve(ch)

        # ESC [ A/B/C/D is an arrow key; a bare ESC quits.
        if not pending(0.1) or read1() != "[":
            return "quit"
        if not pending(0.1):
            return ""
        return _ARROWS.get(read1(), "")
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


_read = _read_windows if os.name == "nt" else _read_posix


# -- public API ---------------------------------------------------------------


def get_key() -> str:
    """Block until a key is pressed and return its action string.

    Actions: ``up``, ``down``, ``left``, ``right``, ``hint``, ``new``,
    ``profile``, ``quit``, ``enter``; any other printable key is returned
    as itself and unprintable ones as ``""``.
    """
    key = _read(None)
    return key or ""


def get_key_timeout(timeout: float) -> str | None:
    """Like :func:`get_key`, but return ``None`` after *timeout* seconds."""
    return _read(timeout)
