"""Built-in messages and the commands that produce them."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "WindowSizeMsg",
    "ClearScreenMsg",
    "EnterAltScreenMsg",
    "ExitAltScreenMsg",
    "EnableMouseCellMotionMsg",
    "EnableMouseAllMotionMsg",
    "DisableMouseMsg",
    "HideCursorMsg",
    "ShowCursorMsg",
    "RepaintMsg",
    "QuitMsg",
    "BatchMsg",
    "SequenceMsg",
    "clear_screen",
    "enter_alt_screen",
    "exit_alt_screen",
    "enable_mouse_cell_motion",
    "enable_mouse_all_motion",
    "disable_mouse",
    "hide_cursor",
    "show_cursor",
    "quit",
]


@dataclass(frozen=True)
class WindowSizeMsg:
    """Reports the terminal size: once at start-up and on every resize."""

    width: int
    height: int


@dataclass(frozen=True)
class ClearScreenMsg:
    """Asks the program to clear the screen before the next update."""


@dataclass(frozen=True)
class EnterAltScreenMsg:
    """Asks the program to enter the alternate screen buffer."""


@dataclass(frozen=True)
class ExitAltScreenMsg:
    """Asks the program to leave the alternate screen buffer."""


@dataclass(frozen=True)
class EnableMouseCellMotionMsg:
    """Starts listening for "cell motion" mouse events."""


@dataclass(frozen=True)
class EnableMouseAllMotionMsg:
    """Starts listening for "all motion" mouse events."""


@dataclass(frozen=True)
class DisableMouseMsg:
    """Stops listening for mouse events."""


@dataclass(frozen=True)
class HideCursorMsg:
    """Asks the program to hide the cursor."""


@dataclass(frozen=True)
class ShowCursorMsg:
    """Asks the program to show the cursor."""


@dataclass(frozen=True)
class RepaintMsg:
    """Forces a full repaint."""


@dataclass(frozen=True)
class QuitMsg:
    """Tells the program to exit."""


class BatchMsg(tuple):
    """Commands to run concurrently, with no ordering guarantees."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"BatchMsg({tuple.__repr__(self)})"


class SequenceMsg(tuple):
    """Commands to run one at a time, in order."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"SequenceMsg({tuple.__repr__(self)})"


def clear_screen() -> ClearScreenMsg:
    """Command: clear the screen before the next update."""
    return ClearScreenMsg()


def enter_alt_screen() -> EnterAltScreenMsg:
    """Command: enter the alternate screen buffer."""
    return EnterAltScreenMsg()


def exit_alt_screen() -> ExitAltScreenMsg:
    """Command: exit the alternate screen buffer."""
    return ExitAltScreenMsg()


def enable_mouse_cell_motion() -> EnableMouseCellMotionMsg:
    """Command: enable click, release, wheel and drag mouse events."""
    return EnableMouseCellMotionMsg()


def enable_mouse_all_motion() -> EnableMouseAllMotionMsg:
    """Command: enable all mouse events, including hover motion."""
    return EnableMouseAllMotionMsg()


def disable_mouse() -> DisableMouseMsg:
    """Command: stop listening for mouse events."""
    return DisableMouseMsg()


def hide_cursor() -> HideCursorMsg:
    """Command: hide the cursor."""
    return HideCursorMsg()


def show_cursor() -> ShowCursorMsg:
    """Command: show the cursor."""
    return ShowCursorMsg()


def quit() -> QuitMsg:  # noqa: A001 - the command is called quit
    """Command: exit the program."""
    return QuitMsg()