"""Mouse events and the X10 mouse protocol parser."""

from __future__ import annotations

import enum
from dataclasses import dataclass

__all__ = ["MouseEventType", "MouseEvent", "MouseMsg", "parse_x10_mouse_events"]


class MouseEventType(enum.IntEnum):
    """The kind of mouse activity that occurred."""

    UNKNOWN = 0
    LEFT = 1
    RIGHT = 2
    MIDDLE = 3
    RELEASE = 4
    WHEEL_UP = 5
    WHEEL_DOWN = 6
    MOTION = 7


_MOUSE_EVENT_NAMES = {
    MouseEventType.UNKNOWN: "unknown",
    MouseEventType.LEFT: "left",
    MouseEventType.RIGHT: "right",
    MouseEventType.MIDDLE: "middle",
    MouseEventType.RELEASE: "release",
    MouseEventType.WHEEL_UP: "wheel up",
    MouseEventType.WHEEL_DOWN: "wheel down",
    MouseEventType.MOTION: "motion",
}


@dataclass(frozen=True)
class MouseEvent:
    """A click, wheel movement, cursor movement or a combination of these."""

    x: int = 0
    y: int = 0
    type: int = MouseEventType.UNKNOWN
    alt: bool = False
    ctrl: bool = False

    def __str__(self) -> str:
        prefix = ("ctrl+" if self.ctrl else "") + ("alt+" if self.alt else "")
        return prefix + _MOUSE_EVENT_NAMES.get(self.type, "")


@dataclass(frozen=True)
class MouseMsg(MouseEvent):
    """A mouse event delivered to a program's update function."""


_X10_PREFIX = b"\x1b[M"
_BYTE_OFFSET = 32

_BIT_ALT = 0b0000_1000
_BIT_CTRL = 0b0001_0000
_BIT_MOTION = 0b0010_0000
_BIT_WHEEL = 0b0100_0000
_BITS_MASK = 0b0000_0011

_BITS_LEFT = 0b00
_BITS_MIDDLE = 0b01
_BITS_RIGHT = 0b10
_BITS_RELEASE = 0b11

_BITS_WHEEL_UP = 0b00
_BITS_WHEEL_DOWN = 0b01


def _decode_type(code: int) -> MouseEventType:
    low = code & _BITS_MASK
    if code & _BIT_WHEEL:
        return {
            _BITS_WHEEL_UP: MouseEventType.WHEEL_UP,
            _BITS_WHEEL_DOWN: MouseEventType.WHEEL_DOWN,
        }.get(low, MouseEventType.UNKNOWN)
    # Clicking and dragging are not told apart.
    if low == _BITS_LEFT:
        return MouseEventType.LEFT
    if low == _BITS_MIDDLE:
        return MouseEventType.MIDDLE
    if low == _BITS_RIGHT:
        return MouseEventType.RIGHT
    if code & _BIT_MOTION:
        return MouseEventType.MOTION
    return MouseEventType.RELEASE


def parse_x10_mouse_events(buf: bytes) -> list[MouseEvent]:
    """Parse X10-encoded mouse events (``ESC [M Cb Cx Cy``).

    Raises ValueError if the buffer is not made of X10 mouse events.
    """
    data = bytes(buf or b"")
    if _X10_PREFIX not in data:
        raise ValueError("not an X10 mouse event")

    events: list[MouseEvent] = []
    for chunk in data.split(_X10_PREFIX):
        if not chunk:
            continue
        if len(chunk) != 3:
            raise ValueError("not an X10 mouse event")

        code = (chunk[0] - _BYTE_OFFSET) & 0xFF
        events.append(
            MouseEvent(
                # (1,1) is the upper left; normalise it to (0,0).
                x=chunk[1] - _BYTE_OFFSET - 1,
                y=chunk[2] - _BYTE_OFFSET - 1,
                type=_decode_type(code),
                alt=bool(code & _BIT_ALT),
                ctrl=bool(code & _BIT_CTRL),
            )
        )
    return events