import io
from types import SimpleNamespace

import pytest

from brewterm.renderer import NilRenderer
from brewterm.standard_renderer import AnsiOutput
from brewterm.options import (
    StartupOptions,
    with_alt_screen,
    with_ansi_compressor,
    with_input,
    with_input_tty,
    with_mouse_all_motion,
    with_mouse_cell_motion,
    with_output,
    without_catch_panics,
    without_renderer,
    without_signal_handler,
)


def _apply(*options):
    program = SimpleNamespace(
        input=None, output=None, renderer=None, startup_options=StartupOptions(0)
    )
    for option in options:
        option(program)
    return program


def test_output_is_custom_and_not_a_tty():
    buf = io.BytesIO()
    program = _apply(with_output(buf))
    assert isinstance(program.output, AnsiOutput)
    assert program.output.stream is buf
    assert program.output.tty() is None


def test_input_sets_stream_and_custom_flag():
    buf = io.BytesIO()
    program = _apply(with_input(buf))
    assert program.input is buf
    assert StartupOptions.CUSTOM_INPUT in program.startup_options


def test_without_renderer_installs_nil_renderer():
    program = _apply(without_renderer())
    assert type(program.renderer) is NilRenderer
    program.renderer.enter_alt_screen()
    assert program.renderer.alt_screen() is False
    assert program.startup_options == StartupOptions(0)


@pytest.mark.parametrize(
    "option, flag",
    [
        (with_input_tty(), StartupOptions.INPUT_TTY),
        (with_alt_screen(), StartupOptions.ALT_SCREEN),
        (with_ansi_compressor(), StartupOptions.ANSI_COMPRESSOR),
        (without_catch_panics(), StartupOptions.WITHOUT_CATCH_PANICS),
        (without_signal_handler(), StartupOptions.WITHOUT_SIGNAL_HANDLER),
    ],
)
def test_startup_flags(option, flag):
    assert flag in _apply(option).startup_options


def test_mouse_cell_motion_clears_all_motion():
    options = _apply(with_mouse_all_motion(), with_mouse_cell_motion()).startup_options
    assert StartupOptions.MOUSE_CELL_MOTION in options
    assert StartupOptions.MOUSE_ALL_MOTION not in options


def test_mouse_all_motion_clears_cell_motion():
    options = _apply(with_mouse_cell_motion(), with_mouse_all_motion()).startup_options
    assert StartupOptions.MOUSE_ALL_MOTION in options
    assert StartupOptions.MOUSE_CELL_MOTION not in options


def test_multiple_options_accumulate():
    options = _apply(
        with_mouse_all_motion(), with_alt_screen(), with_input_tty()
    ).startup_options
    for flag in (
        StartupOptions.MOUSE_ALL_MOTION,
        StartupOptions.ALT_SCREEN,
        StartupOptions.INPUT_TTY,
    ):
        assert flag in options
    assert StartupOptions.CUSTOM_INPUT not in options


def test_flags_are_distinct_bits():
    flags = list(StartupOptions)
    combined = StartupOptions(0)
    for flag in flags:
        assert flag not in combined
        combined |= flag
    assert len(flags) == 8