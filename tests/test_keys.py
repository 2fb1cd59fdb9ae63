import io

import pytest

from brewterm.keys import Key, KeyMsg, KeyType, read_inputs
from brewterm.mouse import MouseEventType, MouseMsg


def _read_one(data):
    msgs = read_inputs(io.BytesIO(data))
    assert len(msgs) == 1
    return msgs[0]


def test_key_string_alt_space():
    assert str(KeyMsg(KeyType.SPACE, alt=True)) == "alt+ "


def test_key_string_runes():
    assert str(KeyMsg(KeyType.RUNES, "a")) == "a"


def test_key_string_invalid():
    assert str(KeyMsg(KeyType(99999))) == ""


def test_key_string_invalid_with_alt_is_empty():
    assert str(Key(KeyType(99999), alt=True)) == ""


def test_key_type_string_space():
    msg = _read_one(b" ")
    assert msg.type == KeyType.SPACE
    assert str(msg.type) == " "


def test_key_type_string_invalid():
    assert str(KeyType(99999)) == ""


def test_key_type_aliases_share_values():
    assert KeyType(3) == KeyType.CTRL_C == KeyType.BREAK
    assert KeyType(27) == KeyType.ESC == KeyType.ESCAPE == KeyType.CTRL_OPEN_BRACKET
    assert KeyType(127) == KeyType.BACKSPACE == KeyType.CTRL_QUESTION_MARK
    assert str(KeyType(13)) == "enter"
    assert str(KeyType(9)) == "tab"


def test_key_coerces_plain_int_type():
    key = Key(13)
    assert type(key.type) is KeyType
    assert str(key) == "enter"


def test_key_string_alt_runes():
    assert str(Key(KeyType.RUNES, "a", alt=True)) == "alt+a"


def test_function_key_names():
    assert str(_read_one(b"\x1bOP").type) == "f1"
    assert str(_read_one(b"\x1b[34~").type) == "f20"


READ_CASES = [
    ("a", b"a", [KeyMsg(KeyType.RUNES, "a")]),
    (" ", b" ", [KeyMsg(KeyType.SPACE, " ")]),
    ("ctrl+a", bytes([1]), [KeyMsg(KeyType.CTRL_A)]),
    ("alt+a", b"\x1ba", [KeyMsg(KeyType.RUNES, "a", alt=True)]),
    (
        "abcd",
        b"abcd",
        [
            KeyMsg(KeyType.RUNES, "a"),
            KeyMsg(KeyType.RUNES, "b"),
            KeyMsg(KeyType.RUNES, "c"),
            KeyMsg(KeyType.RUNES, "d"),
        ],
    ),
    ("up", b"\x1b[A", [KeyMsg(KeyType.UP)]),
    ("shift+tab", b"\x1b[Z", [KeyMsg(KeyType.SHIFT_TAB)]),
    ("alt+enter", b"\x1b\r", [KeyMsg(KeyType.ENTER, alt=True)]),
    ("insert", b"\x1b[2~", [KeyMsg(KeyType.INSERT)]),
    ("alt+ctrl+a", b"\x1b\x01", [KeyMsg(KeyType.CTRL_A, alt=True)]),
    ("unrecognized CSI", b"\x1b[----X", []),
    ("up", b"\x1bOA", [KeyMsg(KeyType.UP)]),
    ("down", b"\x1bOB", [KeyMsg(KeyType.DOWN)]),
    ("right", b"\x1bOC", [KeyMsg(KeyType.RIGHT)]),
    ("left", b"\x1bOD", [KeyMsg(KeyType.LEFT)]),
    ("alt+enter", b"\x1b\x0d", [KeyMsg(KeyType.ENTER, alt=True)]),
    ("alt+backspace", b"\x1b\x7f", [KeyMsg(KeyType.BACKSPACE, alt=True)]),
]


@pytest.mark.parametrize(
    "keyname, data, expected",
    READ_CASES,
    ids=[f"{i}: {case[0]}" for i, case in enumerate(READ_CASES)],
)
def test_read_input(keyname, data, expected):
    msgs = read_inputs(io.BytesIO(data))
    assert msgs == expected
    assert [str(m) for m in msgs] == [str(m) for m in expected]
    if len(msgs) == 1:
        assert str(msgs[0]) == keyname


def test_read_input_wheel_up():
    data = bytes([0x1B, ord("["), ord("M"), 32 + 0b0100_0000, 65, 49])
    msgs = read_inputs(io.BytesIO(data))
    assert len(msgs) == 1
    msg = msgs[0]
    assert isinstance(msg, MouseMsg)
    assert msg.type == MouseEventType.WHEEL_UP
    assert str(msg) == "wheel up"
    assert (msg.x, msg.y) == (32, 16)


def test_read_input_multiple_sequences():
    msgs = read_inputs(io.BytesIO(b"\x1b[A\x1b[B"))
    assert msgs == [KeyMsg(KeyType.UP), KeyMsg(KeyType.DOWN)]


def test_read_input_multibyte_runes():
    msgs = read_inputs(io.BytesIO("你好".encode("utf-8")))
    assert msgs == [KeyMsg(KeyType.RUNES, "你"), KeyMsg(KeyType.RUNES, "好")]


def test_read_input_alt_arrow_urxvt():
    assert read_inputs(io.BytesIO(b"\x1b\x1b[A")) == [KeyMsg(KeyType.UP, alt=True)]


def test_read_input_function_keys():
    assert read_inputs(io.BytesIO(b"\x1bOP")) == [KeyMsg(KeyType.F1)]
    assert read_inputs(io.BytesIO(b"\x1b[21;3~")) == [KeyMsg(KeyType.F10, alt=True)]
    assert read_inputs(io.BytesIO(b"\x1b[34~")) == [KeyMsg(KeyType.F20)]


def test_read_input_ctrl_shift_arrows():
    assert read_inputs(io.BytesIO(b"\x1b[1;6C")) == [KeyMsg(KeyType.CTRL_SHIFT_RIGHT)]
    assert read_inputs(io.BytesIO(b"\x1b[1;8D")) == [
        KeyMsg(KeyType.CTRL_SHIFT_LEFT, alt=True)
    ]


def test_read_input_unknown_alt_csi_ignored():
    assert read_inputs(io.BytesIO(b"\x1b\x1b[99Z")) == []


def test_read_input_eof():
    with pytest.raises(EOFError):
        read_inputs(io.BytesIO(b""))


def test_read_input_invalid_utf8():
    with pytest.raises(ValueError):
        read_inputs(io.BytesIO(b"\xff\xfe"))


def test_read_input_reads_at_most_256_bytes():
    stream = io.BytesIO(b"a" * 300)
    msgs = read_inputs(stream)
    assert len(msgs) == 256
    assert len(read_inputs(stream)) == 44