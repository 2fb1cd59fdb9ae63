import dataclasses

import pytest

from brewterm import messages
from brewterm.messages import (
    BatchMsg,
    ClearScreenMsg,
    DisableMouseMsg,
    EnableMouseAllMotionMsg,
    EnableMouseCellMotionMsg,
    EnterAltScreenMsg,
    ExitAltScreenMsg,
    HideCursorMsg,
    QuitMsg,
    RepaintMsg,
    SequenceMsg,
    ShowCursorMsg,
    WindowSizeMsg,
)


def test_commands_return_their_messages():
    assert messages.clear_screen() == ClearScreenMsg()
    assert messages.enter_alt_screen() == EnterAltScreenMsg()
    assert messages.exit_alt_screen() == ExitAltScreenMsg()
    assert messages.enable_mouse_cell_motion() == EnableMouseCellMotionMsg()
    assert messages.enable_mouse_all_motion() == EnableMouseAllMotionMsg()
    assert messages.disable_mouse() == DisableMouseMsg()
    assert messages.hide_cursor() == HideCursorMsg()
    assert messages.show_cursor() == ShowCursorMsg()
    assert messages.quit() == QuitMsg()


def test_command_messages_are_distinct():
    produced = {
        messages.clear_screen(),
        messages.enter_alt_screen(),
        messages.exit_alt_screen(),
        messages.enable_mouse_cell_motion(),
        messages.enable_mouse_all_motion(),
        messages.disable_mouse(),
        messages.hide_cursor(),
        messages.show_cursor(),
        messages.quit(),
        RepaintMsg(),
    }
    assert len(produced) == 10


def test_messages_are_hashable_and_equal_by_type():
    assert len({messages.quit(), messages.quit(), QuitMsg()}) == 1


def test_window_size_fields_round_trip():
    msg = WindowSizeMsg(width=80, height=24)
    assert (msg.width, msg.height) == (80, 24)
    assert msg == WindowSizeMsg(80, 24)
    assert msg != WindowSizeMsg(24, 80)


def test_window_size_is_frozen():
    msg = WindowSizeMsg(10, 5)
    with pytest.raises(dataclasses.FrozenInstanceError):
        msg.width = 20
    assert (msg.width, msg.height) == (10, 5)


def test_batch_keeps_commands_in_order():
    batch = BatchMsg((messages.quit, messages.hide_cursor))
    assert [cmd() for cmd in batch] == [QuitMsg(), HideCursorMsg()]
    assert len(batch) == 2


def test_sequence_keeps_commands_in_order():
    seq = SequenceMsg([messages.show_cursor, messages.clear_screen, messages.quit])
    assert [cmd() for cmd in seq] == [ShowCursorMsg(), ClearScreenMsg(), QuitMsg()]


def test_batch_repr_names_the_class():
    assert repr(BatchMsg(())).startswith("BatchMsg(")
    assert repr(SequenceMsg(())).startswith("SequenceMsg(")