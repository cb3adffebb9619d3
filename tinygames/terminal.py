"""Keyboard input and screen output for the console games."""

from __future__ import annotations

import os
import select
import sys
import time
from enum import Enum
from typing import Optional, TextIO

try:
    import termios
except ImportError:  # not available on Windows
    termios = None

try:
    import msvcrt
except ImportError:  # only available on Windows
    msvcrt = None

ESCAPE = "\x1b"
CLEAR_SCREEN = "\x1b[2J\x1b[H"


class Direction(Enum):
    """A move on the board, valued as (dx, dy) with y growing downwards."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


_KEY_DIRECTIONS = {
    "W": Direction.UP,
    "A": Direction.LEFT,
    "S": Direction.DOWN,
    "D": Direction.RIGHT,
}


def normalize_key(char: str) -> str:
    """Return the key in the case-insensitive form the games compare against."""
    if not char:
        raise ValueError("empty key")
    return char.upper()


def key_to_direction(key: str) -> Optional[Direction]:
    """Map one of the WASD keys, in either case, to a direction."""
    return _KEY_DIRECTIONS.get(normalize_key(key))


class Terminal:
    """Unbuffered, non-echoing keyboard input plus plain text output.

    Used as a context manager: on entry a terminal input is switched out of
    line mode, and on exit its previous settings are restored.
    """

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self._in = stdin if stdin is not None else sys.stdin
        self._out = stdout if stdout is not None else sys.stdout
        self._saved = None

    def _fileno(self) -> Optional[int]:
        try:
            if not self._in.isatty():
                return None
            return self._in.fileno()
        except (AttributeError, OSError, ValueError):
            return None

    def __enter__(self) -> "Terminal":
        fd = self._fileno()
        if fd is not None and termios is not None:
            self._saved = termios.tcgetattr(fd)
            settings = termios.tcgetattr(fd)
            settings[3] &= ~(termios.ICANON | termios.ECHO)
            termios.tcsetattr(fd, termios.TCSANOW, settings)
        return self

    def __exit__(self, *args) -> None:
        fd = self._fileno()
        if self._saved is not None and fd is not None and termios is not None:
            termios.tcsetattr(fd, termios.TCSANOW, self._saved)
        self._saved = None

    def read_key(self, timeout: Optional[float] = None) -> Optional[str]:
        """Return one key, or None when nothing arrives within the timeout or input ends."""
        fd = self._fileno()
        if fd is None:
            return self._in.read(1) or None
        if msvcrt is not None:
            deadline = None if timeout is None else time.monotonic() + timeout
            while not msvcrt.kbhit():
                if deadline is not None and time.monotonic() >= deadline:
                    return None
                time.sleep(0.01)
            return msvcrt.getwch()
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return None
        data = os.read(fd, 1)
        return data.decode("utf-8", errors="replace") or None

    def clear(self) -> None:
        """Clear the screen and put the cursor top left."""
        self._out.write(CLEAR_SCREEN)
        self._out.flush()

    def write(self, text: str) -> None:
        self._out.write(text)
        self._out.flush()