"""Terminal access: raw mode, size queries and opening the controlling TTY."""

from __future__ import annotations

import os
import signal
from typing import Any

try:
    import termios
    import tty as _tty
except ImportError:  # pragma: no cover - platforms without termios
    termios = None  # type: ignore[assignment]
    _tty = None  # type: ignore[assignment]

__all__ = [
    "RawConsole",
    "is_terminal",
    "terminal_size",
    "open_input_tty",
    "resize_signal_supported",
]

_TTY_PATH = "CONIN$" if os.name == "nt" else "/dev/tty"


def _fileno(file: Any) -> int | None:
    """The file descriptor behind ``file``, or None if it has none."""
    if isinstance(file, int):
        return file
    try:
        return file.fileno()
    except (AttributeError, OSError, ValueError):
        return None


def is_terminal(file: Any) -> bool:
    """Whether ``file`` (a stream or a descriptor) is connected to a terminal."""
    fd = _fileno(file)
    if fd is None:
        return False
    try:
        return os.isatty(fd)
    except OSError:
        return False


def terminal_size(file: Any) -> tuple[int, int]:
    """Return ``(width, height)`` of the terminal behind ``file``.

    Raises OSError if ``file`` is not a terminal.
    """
    fd = _fileno(file)
    if fd is None:
        raise OSError("stream has no file descriptor")
    size = os.get_terminal_size(fd)
    return size.columns, size.lines


def open_input_tty() -> Any:
    """Open the controlling terminal for unbuffered binary input.

    Raises OSError if there is no terminal to open.
    """
    if os.name == "nt":
        return open(_TTY_PATH, "r+b", buffering=0)
    return open(_TTY_PATH, "rb", buffering=0)


def resize_signal_supported() -> bool:
    """Whether the platform reports terminal resizes with a signal."""
    return hasattr(signal, "SIGWINCH")


class RawConsole:
    """A terminal whose mode can be switched to raw and back.

    The terminal's attributes are captured when the console is created and
    restored by :meth:`reset`. Can be used as a context manager.
    """

    def __init__(self, fd: int) -> None:
        if termios is None:
            raise OSError("raw console mode is not supported on this platform")
        self._fd = fd
        try:
            self._saved = termios.tcgetattr(fd)
        except termios.error as exc:
            raise OSError(str(exc)) from exc

    @property
    def fd(self) -> int:
        return self._fd

    @classmethod
    def from_file(cls, file: Any) -> RawConsole:
        """Create a console for ``file``; raises OSError if it is not a terminal."""
        if termios is None:
            raise OSError("raw console mode is not supported on this platform")
        fd = _fileno(file)
        if fd is None or not is_terminal(fd):
            raise OSError("not a terminal")
        return cls(fd)

    def set_raw(self) -> None:
        """Put the terminal into raw mode."""
        try:
            _tty.setraw(self._fd, termios.TCSADRAIN)
        except termios.error as exc:
            raise OSError(str(exc)) from exc

    def reset(self) -> None:
        """Restore the terminal to the mode it had when the console was created."""
        try:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved)
        except termios.error as exc:
            raise OSError(str(exc)) from exc

    def __enter__(self) -> RawConsole:
        self.set_raw()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.reset()