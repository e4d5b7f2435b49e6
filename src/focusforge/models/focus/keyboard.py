"""Keyboard input for the interactive loop.

``get_key`` waits at most ``timeout`` seconds. A timeout is how the control
loop measures one second of timer time.
"""

import os
import select
import sys
import termios
import tty
from typing import Optional

from focusforge.models.exceptions import DisplayError
from focusforge.utils import exit_codes

ENTER = "\n"
ESCAPE = "\x1b"
BACKSPACE_KEYS = ("\x7f", "\b")

# Longest escape or multi-byte sequence read as a single key
MAX_SEQUENCE_BYTES = 32


class KeyboardHandler:
    """Cbreak-mode stdin reader with a bounded wait."""

    def __init__(self):
        try:
            self.fd = sys.stdin.fileno()
        except (AttributeError, ValueError, OSError) as e:
            raise DisplayError(
                "Standard input is not a terminal", exit_codes.ERROR_DISPLAY_INIT
            ) from e
        self.old_settings = None
        self._setup()

    def _setup(self):
        """Put the terminal in cbreak mode, remembering the old settings."""
        try:
            self.old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except termios.error as e:
            raise DisplayError(
                f"Error initializing terminal input: {e}",
                exit_codes.ERROR_DISPLAY_INIT,
            ) from e

    def get_key(self, timeout: float = 1.0) -> Optional[str]:
        """
        Wait up to *timeout* seconds for a keypress.

        Returns the key, or None if the wait timed out. Carriage return is
        reported as newline. Escape sequences (arrow and function keys) and
        multi-byte characters come back whole as one string longer than a
        single character; a lone Escape press is just ``"\\x1b"``.
        """
        ready = select.select([self.fd], [], [], timeout)[0]
        if not ready:
            return None

        data = os.read(self.fd, 1)
        if not data:
            return None
        if data == ESCAPE.encode():
            data += self._read_escape_tail()
        elif data[0] >= 0x80:
            data += self._read_utf8_tail(data[0])

        key = data.decode("utf-8", errors="replace")
        if key == "\r":
            return ENTER
        return key

    def _read_ready(self) -> Optional[bytes]:
        """Read one byte if one is already waiting, without blocking."""
        if not select.select([self.fd], [], [], 0)[0]:
            return None
        return os.read(self.fd, 1) or None

    def _read_escape_tail(self) -> bytes:
        """Rest of an ``ESC [ ... final`` or ``ESC O final`` sequence."""
        introducer = self._read_ready()
        if introducer is None:
            return b""

        tail = introducer
        if introducer not in (b"[", b"O"):
            return tail
        while len(tail) < MAX_SEQUENCE_BYTES:
            byte = self._read_ready()
            if byte is None:
                break
            tail += byte
            if 0x40 <= byte[0] <= 0x7E:
                break
        return tail

    def _read_utf8_tail(self, lead: int) -> bytes:
        """Continuation bytes of a multi-byte UTF-8 character."""
        if lead >= 0xF0:
            needed = 3
        elif lead >= 0xE0:
            needed = 2
        else:
            needed = 1

        tail = b""
        for _ in range(needed):
            byte = self._read_ready()
            if byte is None:
                break
            tail += byte
        return tail

    def stop(self):
        """Restore terminal settings."""
        if self.old_settings:
            try:
                termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
            except termios.error:
                pass
