"""Options that configure a program when it is created."""

from __future__ import annotations

import enum
from typing import Any, Callable

from brewterm.renderer import NilRenderer
from brewterm.standard_renderer import AnsiOutput

__all__ = [
    "StartupOptions",
    "ProgramOption",
    "with_output",
    "with_input",
    "with_input_tty",
    "without_signal_handler",
    "without_catch_panics",
    "with_alt_screen",
    "with_mouse_cell_motion",
    "with_mouse_all_motion",
    "without_renderer",
    "with_ansi_compressor",
]


class StartupOptions(enum.IntFlag):
    """Settings applied while a program starts."""

    ALT_SCREEN = enum.auto()
    MOUSE_CELL_MOTION = enum.auto()
    MOUSE_ALL_MOTION = enum.auto()
    INPUT_TTY = enum.auto()
    CUSTOM_INPUT = enum.auto()
    ANSI_COMPRESSOR = enum.auto()
    WITHOUT_SIGNAL_HANDLER = enum.auto()
    # Panics are caught by default so the terminal can be restored.
    WITHOUT_CATCH_PANICS = enum.auto()


ProgramOption = Callable[[Any], None]


def _set_flag(flag: StartupOptions, clear: StartupOptions | None = None) -> ProgramOption:
    def apply(program: Any) -> None:
        options = program.startup_options | flag
        if clear is not None:
            options &= ~clear
        program.startup_options = options

    return apply


def with_output(output: Any) -> ProgramOption:
    """Send output to ``output`` instead of standard output."""

    def apply(program: Any) -> None:
        program.output = output if isinstance(output, AnsiOutput) else AnsiOutput(output)

    return apply


def with_input(input_stream: Any) -> ProgramOption:
    """Read input from ``input_stream`` instead of standard input."""

    def apply(program: Any) -> None:
        program.input = input_stream
        program.startup_options |= StartupOptions.CUSTOM_INPUT

    return apply


def with_input_tty() -> ProgramOption:
    """Open a new TTY (or the console input device) for input."""
    return _set_flag(StartupOptions.INPUT_TTY)


def without_signal_handler() -> ProgramOption:
    """Leave interrupt and termination signals to the caller."""
    return _set_flag(StartupOptions.WITHOUT_SIGNAL_HANDLER)


def without_catch_panics() -> ProgramOption:
    """Let exceptions escape without restoring the terminal first."""
    return _set_flag(StartupOptions.WITHOUT_CATCH_PANICS)


def with_alt_screen() -> ProgramOption:
    """Start in the alternate screen buffer; it is left on exit."""
    return _set_flag(StartupOptions.ALT_SCREEN)


def with_mouse_cell_motion() -> ProgramOption:
    """Start with click, release, wheel and drag mouse events enabled."""
    return _set_flag(StartupOptions.MOUSE_CELL_MOTION, StartupOptions.MOUSE_ALL_MOTION)


def with_mouse_all_motion() -> ProgramOption:
    """Start with all mouse events, including hover motion, enabled."""
    return _set_flag(StartupOptions.MOUSE_ALL_MOTION, StartupOptions.MOUSE_CELL_MOTION)


def without_renderer() -> ProgramOption:
    """Disable rendering; output is written plainly, as by a command-line tool."""

    def apply(program: Any) -> None:
        program.renderer = NilRenderer()

    return apply


def with_ansi_compressor() -> ProgramOption:
    """Remove redundant ANSI sequences from the output."""
    return _set_flag(StartupOptions.ANSI_COMPRESSOR)