"""Single-keypress reader for the terminal frontend.

Maps raw keys to action names without requiring Enter. Works on
macOS / Linux (tty+termios+select) and Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys
import time

# -- key mapping --------------------------------------------------------------

_KEY_MAP: dict[str, str] = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    "q": "quit",
    "\x03": "quit",  # Ctrl-C
    "r": "restart",
    "n": "hint",
    " ": "skip",
    "\r": "select",
    "\n": "select",
}

_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}


def _resolve(ch: str) -> str:
    """Map a raw character to its action string.

    Digits come back unchanged so the caller can pick a choice by number.
    """
    return _KEY_MAP.get(ch.lower(), ch if ch.isprintable() else "")


# -- readers ------------------------------------------------------------------


def _read_windows(timeout: float | None) -> str | None:
    import msvcrt  # type: ignore[import-not-found]

    if timeout is not None:
        end = time.monotonic() + timeout
        while not msvcrt.kbhit():
            if time.monotonic() >= end:
                return None
            time.sleep(0.02)
    ch = msvcrt.getwch()
    if ch in ("\x00", "\xe0"):  # arrow prefix
        return {"H": "up", "P": "down", "K": "left", "M": "right"}.get(msvcrt.getwch(), "")
    return _resolve(ch)


def _read_unix(timeout: float | None) -> str | None:
    import select
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)

    def read_byte(wait: float | None) -> str | None:
        ready, _, _ = select.select([fd], [], [], wait)
        if not ready:
            return None
        # os.read is unbuffered, so select() keeps seeing the rest of a
        # multi-byte escape sequence.
        return os.read(fd, 1).decode("utf-8", errors="ignore")

    try:
        tty.setraw(fd)
        ch = read_byte(timeout)
        if ch is None:
            return None
        if ch != "\x1b":
            return _resolve(ch)
        # ESC [ A/B/C/D are arrows; a bare Escape quits.
        if read_byte(0.1) != "[":
            return "quit"
        return _ARROW_MAP.get(read_byte(0.1) or "", "")
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


_read = _read_windows if os.name == "nt" else _read_unix


# -- public API ---------------------------------------------------------------


def get_key() -> str:
    """Block for one keypress and return its action string.

    Possible return values:
        "up", "down", "left", "right"  — move the slot cursor
        "select"                       — Enter: open the slot under the cursor
        "skip"                         — Space: end the preview
        "hint"                         — n
        "restart"                      — r
        "quit"                         — q / Ctrl-C / Escape
        "<char>"                       — any other printable key (digits)
        ""                             — unrecognised key
    """
    return _read(None) or ""


def get_key_timeout(timeout: float) -> str | None:
    """Like ``get_key`` but returns ``None`` after *timeout* seconds."""
    return _read(timeout)
