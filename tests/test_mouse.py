import pytest

from brewterm.mouse import (
    MouseEvent,
    MouseEventType,
    MouseMsg,
    parse_x10_mouse_events,
)


@pytest.mark.parametrize(
    "event, expected",
    [
        (MouseEvent(type=MouseEventType.UNKNOWN), "unknown"),
        (MouseEvent(type=MouseEventType.LEFT), "left"),
        (MouseEvent(type=MouseEventType.RIGHT), "right"),
        (MouseEvent(type=MouseEventType.MIDDLE), "middle"),
        (MouseEvent(type=MouseEventType.RELEASE), "release"),
        (MouseEvent(type=MouseEventType.WHEEL_UP), "wheel up"),
        (MouseEvent(type=MouseEventType.WHEEL_DOWN), "wheel down"),
        (MouseEvent(type=MouseEventType.MOTION), "motion"),
        (MouseEvent(type=MouseEventType.LEFT, alt=True), "alt+left"),
        (MouseEvent(type=MouseEventType.LEFT, ctrl=True), "ctrl+left"),
        (MouseEvent(type=MouseEventType.LEFT, alt=True, ctrl=True), "ctrl+alt+left"),
        (MouseEvent(x=100, y=200, type=MouseEventType.LEFT), "left"),
        (MouseEvent(type=-1000), ""),
    ],
)
def test_mouse_event_string(event, expected):
    assert str(event) == expected


def test_mouse_msg_string_matches_event():
    assert str(MouseMsg(type=MouseEventType.WHEEL_UP, ctrl=True)) == "ctrl+wheel up"


def _encode(b, x, y):
    return bytes(
        [0x1B, ord("["), ord("M"), (32 + b) & 0xFF, (x + 32 + 1) & 0xFF, (y + 32 + 1) & 0xFF]
    )


M = MouseEventType


@pytest.mark.parametrize(
    "buf, expected",
    [
        (_encode(0b0010_0000, 0, 0), [MouseEvent(0, 0, M.LEFT)]),
        (_encode(0b0010_0000, 222, 222), [MouseEvent(222, 222, M.LEFT)]),
        (_encode(0b0000_0000, 32, 16), [MouseEvent(32, 16, M.LEFT)]),
        (_encode(0b0010_0000, 32, 16), [MouseEvent(32, 16, M.LEFT)]),
        (_encode(0b0000_0001, 32, 16), [MouseEvent(32, 16, M.MIDDLE)]),
        (_encode(0b0010_0001, 32, 16), [MouseEvent(32, 16, M.MIDDLE)]),
        (_encode(0b0000_0010, 32, 16), [MouseEvent(32, 16, M.RIGHT)]),
        (_encode(0b0010_0010, 32, 16), [MouseEvent(32, 16, M.RIGHT)]),
        (_encode(0b0010_0011, 32, 16), [MouseEvent(32, 16, M.MOTION)]),
        (_encode(0b0100_0000, 32, 16), [MouseEvent(32, 16, M.WHEEL_UP)]),
        (_encode(0b0100_0001, 32, 16), [MouseEvent(32, 16, M.WHEEL_DOWN)]),
        (_encode(0b0000_0011, 32, 16), [MouseEvent(32, 16, M.RELEASE)]),
        (_encode(0b0010_1010, 32, 16), [MouseEvent(32, 16, M.RIGHT, alt=True)]),
        (_encode(0b0011_0010, 32, 16), [MouseEvent(32, 16, M.RIGHT, ctrl=True)]),
        (
            _encode(0b0011_1010, 32, 16),
            [MouseEvent(32, 16, M.RIGHT, alt=True, ctrl=True)],
        ),
        (_encode(0b0100_1001, 32, 16), [MouseEvent(32, 16, M.WHEEL_DOWN, alt=True)]),
        (_encode(0b0101_0001, 32, 16), [MouseEvent(32, 16, M.WHEEL_DOWN, ctrl=True)]),
        (
            _encode(0b0101_1001, 32, 16),
            [MouseEvent(32, 16, M.WHEEL_DOWN, alt=True, ctrl=True)],
        ),
        (_encode(0b0100_0010, 32, 16), [MouseEvent(32, 16, M.UNKNOWN)]),
        (_encode(0b0100_1010, 32, 16), [MouseEvent(32, 16, M.UNKNOWN, alt=True)]),
        (_encode(0b0010_0000, 250, 223), [MouseEvent(-6, -33, M.LEFT)]),
        (
            _encode(0b0010_0000, 32, 16) + _encode(0b0000_0011, 64, 32),
            [MouseEvent(32, 16, M.LEFT), MouseEvent(64, 32, M.RELEASE)],
        ),
    ],
    ids=[
        "zero position",
        "max position",
        "left",
        "left in motion",
        "middle",
        "middle in motion",
        "right",
        "right in motion",
        "motion",
        "wheel up",
        "wheel down",
        "release",
        "alt+right",
        "ctrl+right",
        "ctrl+alt+right",
        "alt+wheel down",
        "ctrl+wheel down",
        "ctrl+alt+wheel down",
        "wheel with unknown bit",
        "unknown with modifier",
        "overflow position",
        "batched events",
    ],
)
def test_parse_x10_mouse_events(buf, expected):
    assert parse_x10_mouse_events(buf) == expected


@pytest.mark.parametrize(
    "buf",
    [None, b"", b"\x1a[M@A1", b"\x1b[M@A", b"\x1b[M@A11"],
    ids=["none", "empty buf", "wrong high bit", "short buf", "long buf"],
)
def test_parse_x10_mouse_events_errors(buf):
    with pytest.raises(ValueError, match="not an X10 mouse event"):
        parse_x10_mouse_events(buf)