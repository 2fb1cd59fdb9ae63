"""Keypresses: key types, the key message and the terminal input decoder."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Protocol

from brewterm.mouse import MouseMsg, parse_x10_mouse_events

__all__ = ["KeyType", "Key", "KeyMsg", "read_inputs"]

_READ_SIZE = 256
_ESC = "\x1b"


class KeyType(int):
    """The key that was pressed.

    Control keys carry their C0 code point (and 127 for backspace); other
    special keys are negative. Every other key has the type ``RUNES``.
    Values outside the known set are allowed and have an empty name.
    """

    __slots__ = ()

    # Control keys and their aliases.
    NULL: ClassVar[KeyType] = 0
    BREAK: ClassVar[KeyType] = 3
    ENTER: ClassVar[KeyType] = 13
    BACKSPACE: ClassVar[KeyType] = 127
    TAB: ClassVar[KeyType] = 9
    ESC: ClassVar[KeyType] = 27
    ESCAPE: ClassVar[KeyType] = 27

    CTRL_AT: ClassVar[KeyType] = 0
    CTRL_A: ClassVar[KeyType] = 1
    CTRL_B: ClassVar[KeyType] = 2
    CTRL_C: ClassVar[KeyType] = 3
    CTRL_D: ClassVar[KeyType] = 4
    CTRL_E: ClassVar[KeyType] = 5
    CTRL_F: ClassVar[KeyType] = 6
    CTRL_G: ClassVar[KeyType] = 7
    CTRL_H: ClassVar[KeyType] = 8
    CTRL_I: ClassVar[KeyType] = 9
    CTRL_J: ClassVar[KeyType] = 10
    CTRL_K: ClassVar[KeyType] = 11
    CTRL_L: ClassVar[KeyType] = 12
    CTRL_M: ClassVar[KeyType] = 13
    CTRL_N: ClassVar[KeyType] = 14
    CTRL_O: ClassVar[KeyType] = 15
    CTRL_P: ClassVar[KeyType] = 16
    CTRL_Q: ClassVar[KeyType] = 17
    CTRL_R: ClassVar[KeyType] = 18
    CTRL_S: ClassVar[KeyType] = 19
    CTRL_T: ClassVar[KeyType] = 20
    CTRL_U: ClassVar[KeyType] = 21
    CTRL_V: ClassVar[KeyType] = 22
    CTRL_W: ClassVar[KeyType] = 23
    CTRL_X: ClassVar[KeyType] = 24
    CTRL_Y: ClassVar[KeyType] = 25
    CTRL_Z: ClassVar[KeyType] = 26
    CTRL_OPEN_BRACKET: ClassVar[KeyType] = 27
    CTRL_BACKSLASH: ClassVar[KeyType] = 28
    CTRL_CLOSE_BRACKET: ClassVar[KeyType] = 29
    CTRL_CARET: ClassVar[KeyType] = 30
    CTRL_UNDERSCORE: ClassVar[KeyType] = 31
    CTRL_QUESTION_MARK: ClassVar[KeyType] = 127

    # Other keys.
    RUNES: ClassVar[KeyType] = -1
    UP: ClassVar[KeyType] = -2
    DOWN: ClassVar[KeyType] = -3
    RIGHT: ClassVar[KeyType] = -4
    LEFT: ClassVar[KeyType] = -5
    SHIFT_TAB: ClassVar[KeyType] = -6
    HOME: ClassVar[KeyType] = -7
    END: ClassVar[KeyType] = -8
    PGUP: ClassVar[KeyType] = -9
    PGDOWN: ClassVar[KeyType] = -10
    CTRL_PGUP: ClassVar[KeyType] = -11
    CTRL_PGDOWN: ClassVar[KeyType] = -12
    DELETE: ClassVar[KeyType] = -13
    INSERT: ClassVar[KeyType] = -14
    SPACE: ClassVar[KeyType] = -15
    CTRL_UP: ClassVar[KeyType] = -16
    CTRL_DOWN: ClassVar[KeyType] = -17
    CTRL_RIGHT: ClassVar[KeyType] = -18
    CTRL_LEFT: ClassVar[KeyType] = -19
    CTRL_HOME: ClassVar[KeyType] = -20
    CTRL_END: ClassVar[KeyType] = -21
    SHIFT_UP: ClassVar[KeyType] = -22
    SHIFT_DOWN: ClassVar[KeyType] = -23
    SHIFT_RIGHT: ClassVar[KeyType] = -24
    SHIFT_LEFT: ClassVar[KeyType] = -25
    SHIFT_HOME: ClassVar[KeyType] = -26
    SHIFT_END: ClassVar[KeyType] = -27
    CTRL_SHIFT_UP: ClassVar[KeyType] = -28
    CTRL_SHIFT_DOWN: ClassVar[KeyType] = -29
    CTRL_SHIFT_LEFT: ClassVar[KeyType] = -30
    CTRL_SHIFT_RIGHT: ClassVar[KeyType] = -31
    CTRL_SHIFT_HOME: ClassVar[KeyType] = -32
    CTRL_SHIFT_END: ClassVar[KeyType] = -33
    F1: ClassVar[KeyType] = -34
    F2: ClassVar[KeyType] = -35
    F3: ClassVar[KeyType] = -36
    F4: ClassVar[KeyType] = -37
    F5: ClassVar[KeyType] = -38
    F6: ClassVar[KeyType] = -39
    F7: ClassVar[KeyType] = -40
    F8: ClassVar[KeyType] = -41
    F9: ClassVar[KeyType] = -42
    F10: ClassVar[KeyType] = -43
    F11: ClassVar[KeyType] = -44
    F12: ClassVar[KeyType] = -45
    F13: ClassVar[KeyType] = -46
    F14: ClassVar[KeyType] = -47
    F15: ClassVar[KeyType] = -48
    F16: ClassVar[KeyType] = -49
    F17: ClassVar[KeyType] = -50
    F18: ClassVar[KeyType] = -51
    F19: ClassVar[KeyType] = -52
    F20: ClassVar[KeyType] = -53

    def __str__(self) -> str:
        return _KEY_NAMES.get(int(self), "")

    def __repr__(self) -> str:
        name = _CONSTANT_NAMES.get(int(self))
        return f"KeyType.{name}" if name else f"KeyType({int(self)})"


_CONSTANT_NAMES: dict[int, str] = {}
for _name, _value in list(vars(KeyType).items()):
    if _name.isupper() and type(_value) is int:
        setattr(KeyType, _name, KeyType(_value))
        _CONSTANT_NAMES.setdefault(_value, _name)
del _name, _value


_KEY_NAMES: dict[int, str] = {
    # Control keys.
    0: "ctrl+@",
    1: "ctrl+a",
    2: "ctrl+b",
    3: "ctrl+c",
    4: "ctrl+d",
    5: "ctrl+e",
    6: "ctrl+f",
    7: "ctrl+g",
    8: "ctrl+h",
    9: "tab",
    10: "ctrl+j",
    11: "ctrl+k",
    12: "ctrl+l",
    13: "enter",
    14: "ctrl+n",
    15: "ctrl+o",
    16: "ctrl+p",
    17: "ctrl+q",
    18: "ctrl+r",
    19: "ctrl+s",
    20: "ctrl+t",
    21: "ctrl+u",
    22: "ctrl+v",
    23: "ctrl+w",
    24: "ctrl+x",
    25: "ctrl+y",
    26: "ctrl+z",
    27: "esc",
    28: "ctrl+\\",
    29: "ctrl+]",
    30: "ctrl+^",
    31: "ctrl+_",
    127: "backspace",
    # Other keys.
    KeyType.RUNES: "runes",
    KeyType.UP: "up",
    KeyType.DOWN: "down",
    KeyType.RIGHT: "right",
    KeyType.SPACE: " ",
    KeyType.LEFT: "left",
    KeyType.SHIFT_TAB: "shift+tab",
    KeyType.HOME: "home",
    KeyType.END: "end",
    KeyType.CTRL_HOME: "ctrl+home",
    KeyType.CTRL_END: "ctrl+end",
    KeyType.SHIFT_HOME: "shift+home",
    KeyType.SHIFT_END: "shift+end",
    KeyType.CTRL_SHIFT_HOME: "ctrl+shift+home",
    KeyType.CTRL_SHIFT_END: "ctrl+shift+end",
    KeyType.PGUP: "pgup",
    KeyType.PGDOWN: "pgdown",
    KeyType.CTRL_PGUP: "ctrl+pgup",
    KeyType.CTRL_PGDOWN: "ctrl+pgdown",
    KeyType.DELETE: "delete",
    KeyType.INSERT: "insert",
    KeyType.CTRL_UP: "ctrl+up",
    KeyType.CTRL_DOWN: "ctrl+down",
    KeyType.CTRL_RIGHT: "ctrl+right",
    KeyType.CTRL_LEFT: "ctrl+left",
    KeyType.SHIFT_UP: "shift+up",
    KeyType.SHIFT_DOWN: "shift+down",
    KeyType.SHIFT_RIGHT: "shift+right",
    KeyType.SHIFT_LEFT: "shift+left",
    KeyType.CTRL_SHIFT_UP: "ctrl+shift+up",
    KeyType.CTRL_SHIFT_DOWN: "ctrl+shift+down",
    KeyType.CTRL_SHIFT_LEFT: "ctrl+shift+left",
    KeyType.CTRL_SHIFT_RIGHT: "ctrl+shift+right",
    **{getattr(KeyType, f"F{n}"): f"f{n}" for n in range(1, 21)},
}


@dataclass(frozen=True)
class Key:
    """A keypress: its type, the characters typed, and whether alt was held."""

    type: KeyType
    runes: str = ""
    alt: bool = False

    def __post_init__(self) -> None:
        if type(self.type) is not KeyType:
            object.__setattr__(self, "type", KeyType(self.type))

    def __str__(self) -> str:
        prefix = "alt+" if self.alt else ""
        if self.type == KeyType.RUNES:
            return prefix + self.runes
        name = _KEY_NAMES.get(int(self.type))
        if name is not None:
            return prefix + name
        return ""


@dataclass(frozen=True)
class KeyMsg(Key):
    """A keypress delivered to a program's update function."""


def _build_sequences() -> dict[str, Key]:
    seq: dict[str, Key] = {}
    k = KeyType

    def add(code: str, key_type: KeyType, alt: bool = False) -> None:
        seq[code] = Key(key_type, alt=alt)

    plain = (k.UP, k.DOWN, k.RIGHT, k.LEFT)
    shift = (k.SHIFT_UP, k.SHIFT_DOWN, k.SHIFT_RIGHT, k.SHIFT_LEFT)
    ctrl = (k.CTRL_UP, k.CTRL_DOWN, k.CTRL_RIGHT, k.CTRL_LEFT)
    ctrl_shift = (
        k.CTRL_SHIFT_UP,
        k.CTRL_SHIFT_DOWN,
        k.CTRL_SHIFT_RIGHT,
        k.CTRL_SHIFT_LEFT,
    )
    arrows = [
        ("\x1b[", "ABCD", plain, False),
        ("\x1b[1;2", "ABCD", shift, False),
        ("\x1b[O", "ABCD", shift, False),  # DECCKM
        ("\x1b[", "abcd", shift, False),  # urxvt
        ("\x1b[1;3", "ABCD", plain, True),
        ("\x1b\x1b[", "ABCD", plain, True),  # urxvt
        ("\x1b[1;4", "ABCD", shift, True),
        ("\x1b\x1b[", "abcd", shift, True),  # urxvt
        ("\x1b[1;5", "ABCD", ctrl, False),
        ("\x1b[O", "abcd", ctrl, True),  # urxvt
        ("\x1b[1;6", "ABCD", ctrl_shift, False),
        ("\x1b[1;7", "ABCD", ctrl, True),
        ("\x1b[1;8", "ABCD", ctrl_shift, True),
        ("\x1bO", "ABCD", plain, False),  # PowerShell
    ]
    for prefix, letters, types, alt in arrows:
        for letter, key_type in zip(letters, types):
            add(prefix + letter, key_type, alt)

    add("\x1b[Z", k.SHIFT_TAB)

    add("\x1b[2~", k.INSERT)
    add("\x1b[3;2~", k.INSERT, True)
    add("\x1b\x1b[2~", k.INSERT, True)

    add("\x1b[3~", k.DELETE)
    add("\x1b[3;3~", k.DELETE, True)
    add("\x1b\x1b[3~", k.DELETE, True)

    for num, page, ctrl_page in (("5", k.PGUP, k.CTRL_PGUP), ("6", k.PGDOWN, k.CTRL_PGDOWN)):
        add(f"\x1b[{num}~", page)
        add(f"\x1b[{num};3~", page, True)
        add(f"\x1b\x1b[{num}~", page, True)
        add(f"\x1b[{num};5~", ctrl_page)
        add(f"\x1b[{num}^", ctrl_page)
        add(f"\x1b[{num};7~", ctrl_page, True)
        add(f"\x1b\x1b[{num}^", ctrl_page, True)

    edges = (
        ("1", "H", "7", k.HOME, k.CTRL_HOME, k.SHIFT_HOME, k.CTRL_SHIFT_HOME),
        ("4", "F", "8", k.END, k.CTRL_END, k.SHIFT_END, k.CTRL_SHIFT_END),
    )
    for vt_num, xterm, urxvt, base, ctrl_t, shift_t, ctrl_shift_t in edges:
        add(f"\x1b[{vt_num}~", base)
        # xterm, lxterm
        add(f"\x1b[{xterm}", base)
        add(f"\x1b[1;3{xterm}", base, True)
        add(f"\x1b[1;5{xterm}", ctrl_t)
        add(f"\x1b[1;7{xterm}", ctrl_t, True)
        add(f"\x1b[1;2{xterm}", shift_t)
        add(f"\x1b[1;4{xterm}", shift_t, True)
        add(f"\x1b[1;6{xterm}", ctrl_shift_t)
        add(f"\x1b[1;8{xterm}", ctrl_shift_t, True)
        # urxvt
        add(f"\x1b[{urxvt}~", base)
        add(f"\x1b\x1b[{urxvt}~", base, True)
        add(f"\x1b[{urxvt}^", ctrl_t)
        add(f"\x1b\x1b[{urxvt}^", ctrl_t, True)
        add(f"\x1b[{urxvt}$", shift_t)
        add(f"\x1b\x1b[{urxvt}$", shift_t, True)
        add(f"\x1b[{urxvt}@", ctrl_shift_t)
        add(f"\x1b\x1b[{urxvt}@", ctrl_shift_t, True)

    # Linux console.
    for letter, key_type in zip("ABCDE", (k.F1, k.F2, k.F3, k.F4, k.F5)):
        add(f"\x1b[[{letter}", key_type)

    # vt100, xterm.
    for letter, key_type in zip("PQRS", (k.F1, k.F2, k.F3, k.F4)):
        add(f"\x1bO{letter}", key_type)
        add(f"\x1b[1;3{letter}", key_type, True)

    add("\x1b[1;2P", k.F13)
    add("\x1b[1;2Q", k.F14)
    add("\x1b[1;2R", k.F15)
    add("\x1b[1;2S", k.F16)

    add("\x1b[15;2~", k.F17)
    add("\x1b[17;2~", k.F18)
    add("\x1b[18;2~", k.F19)
    add("\x1b[19;2~", k.F20)

    # Tilde-terminated function keys: (code, key, has an xterm alt form).
    tilde_keys = [
        (11, k.F1, False),
        (12, k.F2, False),
        (13, k.F3, False),
        (14, k.F4, False),
        (15, k.F5, True),
        (17, k.F6, True),
        (18, k.F7, True),
        (19, k.F8, True),
        (20, k.F9, True),
        (21, k.F10, True),
        (23, k.F11, True),
        (24, k.F12, True),
        (25, k.F13, True),
        (26, k.F14, True),
        (28, k.F15, True),
        (29, k.F16, True),
        (31, k.F17, False),
        (32, k.F18, False),
        (33, k.F19, False),
        (34, k.F20, False),
    ]
    for code, key_type, xterm_alt in tilde_keys:
        add(f"\x1b[{code}~", key_type)
        add(f"\x1b\x1b[{code}~", key_type, True)
        if xterm_alt:
            add(f"\x1b[{code};3~", key_type, True)

    return seq


_SEQUENCES = _build_sequences()


class _Reader(Protocol):
    def read(self, size: int = ..., /) -> bytes: ...


def _split_key_sequences(text: str) -> list[str]:
    """Split decoded input where a new escape sequence starts."""
    groups: list[str] = []
    current = ""
    for char in text:
        if char == _ESC and len(current) > 1:
            groups.append(current)
            current = ""
        current += char
    groups.append(current)
    return groups


def _is_unknown_csi(group: str) -> bool:
    return (
        len(group) > 2
        and group[0] == _ESC
        and (group[1] == "[" or (len(group) > 3 and group[1] == _ESC and group[2] == "["))
    )


def _keys_for(group: str) -> list[KeyMsg]:
    known = _SEQUENCES.get(group)
    if known is not None:
        return [KeyMsg(known.type, known.runes, known.alt)]

    if _is_unknown_csi(group):
        return []

    alt = False
    if len(group) > 1 and group[0] == _ESC:
        alt = True
        group = group[1:]

    msgs: list[KeyMsg] = []
    for char in group:
        code = ord(char)
        if code <= 31 or code == 127:
            msgs.append(KeyMsg(KeyType(code), alt=alt))
        elif char == " ":
            msgs.append(KeyMsg(KeyType.SPACE, char, alt))
        else:
            msgs.append(KeyMsg(KeyType.RUNES, char, alt))
    return msgs


def read_inputs(reader: _Reader) -> list[KeyMsg | MouseMsg]:
    """Read one chunk of terminal input and decode it into messages.

    Blocks until ``reader.read`` returns. Raises EOFError when the reader is
    exhausted and ValueError when the input is not valid UTF-8.
    """
    data = reader.read(_READ_SIZE)
    if not data:
        raise EOFError("end of input")
    data = bytes(data)

    try:
        events = parse_x10_mouse_events(data)
    except ValueError:
        pass
    else:
        return [MouseMsg(e.x, e.y, e.type, e.alt, e.ctrl) for e in events]

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ValueError("could not decode rune") from exc
    if "\ufffd" in text:
        raise ValueError("could not decode rune")

    msgs: list[KeyMsg | MouseMsg] = []
    for group in _split_key_sequences(text):
        msgs.extend(_keys_for(group))
    return msgs