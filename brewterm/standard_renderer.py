"""A framerate-based terminal renderer and its scroll and print commands."""

from __future__ import annotations

import io
import threading
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from wcwidth import wcwidth

from brewterm.messages import RepaintMsg, WindowSizeMsg
from brewterm.renderer import Renderer

__all__ = [
    "AnsiOutput",
    "StandardRenderer",
    "SyncScrollAreaMsg",
    "ClearScrollAreaMsg",
    "ScrollUpMsg",
    "ScrollDownMsg",
    "PrintLineMsg",
    "sync_scroll_area",
    "clear_scroll_area",
    "scroll_up",
    "scroll_down",
    "println",
    "printf",
]

DEFAULT_FRAMERATE = 1 / 60

_ESC = "\x1b"
_CSI = "\x1b["
_SGR_RESET = "\x1b[0m"


def _is_terminator(char: str) -> bool:
    code = ord(char)
    return 0x40 <= code <= 0x5A or 0x61 <= code <= 0x7A


class AnsiOutput:
    """Writes text and ANSI control sequences to a text or binary stream."""

    def __init__(self, stream: Any) -> None:
        self.stream = stream

    def write(self, text: str) -> None:
        """Write ``text`` to the stream and flush it."""
        try:
            self.stream.write(text)
        except TypeError:
            self.stream.write(text.encode("utf-8"))
        flush = getattr(self.stream, "flush", None)
        if flush is not None:
            flush()

    def tty(self) -> Any:
        """The stream if it is backed by a file descriptor, otherwise None."""
        try:
            self.stream.fileno()
        except (AttributeError, OSError, ValueError):
            return None
        return self.stream

    def clear_line(self) -> None:
        self.write(_CSI + "2K")

    def clear_screen(self) -> None:
        self.write(_CSI + "2J")
        self.move_cursor(1, 1)

    def move_cursor(self, row: int, column: int) -> None:
        self.write(f"{_CSI}{row};{column}H")

    def cursor_up(self, n: int) -> None:
        self.write(f"{_CSI}{n}A")

    def cursor_down(self, n: int) -> None:
        self.write(f"{_CSI}{n}B")

    def cursor_back(self, n: int) -> None:
        self.write(f"{_CSI}{n}D")

    def alt_screen(self) -> None:
        self.write(_CSI + "?1049h")

    def exit_alt_screen(self) -> None:
        self.write(_CSI + "?1049l")

    def show_cursor(self) -> None:
        self.write(_CSI + "?25h")

    def hide_cursor(self) -> None:
        self.write(_CSI + "?25l")

    def enable_mouse_cell_motion(self) -> None:
        self.write(_CSI + "?1002h")

    def disable_mouse_cell_motion(self) -> None:
        self.write(_CSI + "?1002l")

    def enable_mouse_all_motion(self) -> None:
        self.write(_CSI + "?1003h")

    def disable_mouse_all_motion(self) -> None:
        self.write(_CSI + "?1003l")

    def change_scrolling_region(self, top: int, bottom: int) -> None:
        self.write(f"{_CSI}{top};{bottom}r")

    def insert_lines(self, n: int) -> None:
        self.write(f"{_CSI}{n}L")


def _tokenize(text: str) -> list[tuple[bool, str]]:
    """Split text into (is_escape_sequence, chunk) pieces."""
    tokens: list[tuple[bool, str]] = []
    plain = ""
    seq = ""
    in_seq = False
    for char in text:
        if char == _ESC:
            if in_seq:
                tokens.append((True, seq))
            elif plain:
                tokens.append((False, plain))
                plain = ""
            seq = char
            in_seq = True
        elif in_seq:
            seq += char
            if char != "[" and _is_terminator(char):
                tokens.append((True, seq))
                seq = ""
                in_seq = False
        else:
            plain += char
    if in_seq:
        tokens.append((True, seq))
    if plain:
        tokens.append((False, plain))
    return tokens


def _is_sgr(seq: str) -> bool:
    return seq.startswith(_CSI) and seq.endswith("m")


def _is_sgr_reset(seq: str) -> bool:
    return seq in (_SGR_RESET, _CSI + "m")


class _AnsiCompressor:
    """Drops redundant SGR sequences from runs of consecutive sequences."""

    def __init__(self, forward: Any) -> None:
        self._forward = AnsiOutput(forward)

    def fileno(self) -> int:
        return self._forward.stream.fileno()

    def flush(self) -> None:
        pass

    def write(self, text: str) -> int:
        out: list[str] = []
        run: list[str] = []

        def close_run() -> None:
            out.extend(run)
            run.clear()

        for is_seq, chunk in _tokenize(text):
            if not is_seq:
                close_run()
                out.append(chunk)
                continue
            if _is_sgr(chunk):
                if _is_sgr_reset(chunk):
                    run[:] = [s for s in run if not _is_sgr(s)]
                elif chunk in run:
                    continue
            run.append(chunk)
        close_run()
        self._forward.write("".join(out))
        return len(text)


def _truncate(line: str, width: int) -> str:
    """Cut ``line`` to ``width`` printable cells, leaving ANSI sequences intact."""
    out: list[str] = []
    in_ansi = False
    seq = ""
    styled = False
    used = 0
    for char in line:
        if char == _ESC:
            in_ansi = True
            seq = char
        elif in_ansi:
            seq += char
            if _is_terminator(char):
                in_ansi = False
                if seq.endswith("[0m"):
                    styled = False
                elif char == "m":
                    styled = True
        else:
            used += max(wcwidth(char), 0)
        if used > width:
            if styled:
                out.append(_SGR_RESET)
            return "".join(out)
        out.append(char)
    return "".join(out)


@dataclass(frozen=True)
class SyncScrollAreaMsg:
    """Repaints the whole scrollable region."""

    lines: tuple[str, ...]
    top_boundary: int
    bottom_boundary: int


@dataclass(frozen=True)
class ClearScrollAreaMsg:
    """Returns the scrollable region's lines to the main renderer."""


@dataclass(frozen=True)
class ScrollUpMsg:
    """Inserts lines at the top of the scrollable region."""

    lines: tuple[str, ...]
    top_boundary: int
    bottom_boundary: int


@dataclass(frozen=True)
class ScrollDownMsg:
    """Inserts lines at the bottom of the scrollable region."""

    lines: tuple[str, ...]
    top_boundary: int
    bottom_boundary: int


@dataclass(frozen=True)
class PrintLineMsg:
    """Text to print above the program's view."""

    message_body: str


class StandardRenderer(Renderer):
    """Redraws the view at a fixed framerate, repainting only changed lines.

    Ranges of lines can be excluded from rendering so that they can be
    written to directly, for high-performance scrolling regions.
    """

    def __init__(
        self,
        output: Any,
        use_ansi_compressor: bool = False,
        framerate: float = DEFAULT_FRAMERATE,
    ) -> None:
        if not isinstance(output, AnsiOutput):
            output = AnsiOutput(output)
        self._use_ansi_compressor = use_ansi_compressor
        if use_ansi_compressor:
            output = AnsiOutput(_AnsiCompressor(output.stream))
        self._out = output
        self._lock = threading.RLock()
        self._framerate = framerate
        self._buf = ""
        self._queued_message_lines: list[str] = []
        self._last_render = ""
        self._lines_rendered = 0
        self._alt_screen_active = False
        self._width = 0
        self._height = 0
        self._ignore_lines: set[int] = set()
        self._done = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def start(self) -> None:
        self._done = threading.Event()
        self._thread = threading.Thread(target=self._listen, daemon=True)
        self._thread.start()

    def _listen(self) -> None:
        done = self._done
        while not done.wait(self._framerate):
            self.flush()

    def _halt(self) -> None:
        self._done.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=1)
        self._thread = None

    def stop(self) -> None:
        self.flush()
        with self._lock:
            self._out.clear_line()
        self._halt()

    def kill(self) -> None:
        with self._lock:
            self._out.clear_line()
        self._halt()

    def flush(self) -> None:
        """Draw the buffered frame if it differs from the last one drawn."""
        with self._lock:
            if not self._buf or self._buf == self._last_render:
                return

            out = AnsiOutput(io.StringIO())
            new_lines = self._buf.split("\n")

            # The cursor cannot reach the scrollback, so drop lines from the top.
            if self._height > 0 and len(new_lines) > self._height:
                new_lines = new_lines[len(new_lines) - self._height :]

            num_lines_this_flush = len(new_lines)
            old_lines = self._last_render.split("\n")
            skip_lines: set[int] = set()

            if self._queued_message_lines and not self._alt_screen_active:
                new_lines = self._queued_message_lines + new_lines
                self._queued_message_lines = []

            if self._lines_rendered > 0:
                for i in range(self._lines_rendered - 1, 0, -1):
                    unchanged = (
                        len(new_lines) <= len(old_lines)
                        and len(new_lines) > i
                        and len(old_lines) > i
                        and new_lines[i] == old_lines[i]
                    )
                    if unchanged:
                        skip_lines.add(i)
                    elif i not in self._ignore_lines:
                        out.clear_line()
                    out.cursor_up(1)

                if 0 not in self._ignore_lines:
                    out.cursor_back(self._width)
                    out.clear_line()

            skip_lines |= self._ignore_lines

            last = len(new_lines) - 1
            for i, line in enumerate(new_lines):
                if i in skip_lines:
                    if i < last:
                        out.cursor_down(1)
                    continue
                if self._width > 0:
                    line = _truncate(line, self._width)
                out.write(line)
                if i < last:
                    out.write("\r\n")

            self._lines_rendered = num_lines_this_flush

            if self._alt_screen_active:
                out.move_cursor(self._lines_rendered, 0)
            else:
                out.cursor_back(self._width)

            self._out.write(out.stream.getvalue())
            self._last_render = self._buf
            self._buf = ""

    def write(self, view: str) -> None:
        with self._lock:
            # An empty view is drawn as a single space so old output is cleared.
            self._buf = view or " "

    def repaint(self) -> None:
        with self._lock:
            self._last_render = ""

    def clear_screen(self) -> None:
        with self._lock:
            self._out.clear_screen()
            self._out.move_cursor(1, 1)
            self.repaint()

    def alt_screen(self) -> bool:
        with self._lock:
            return self._alt_screen_active

    def enter_alt_screen(self) -> None:
        with self._lock:
            if self._alt_screen_active:
                return
            self._alt_screen_active = True
            self._out.alt_screen()
            # Clear even where the alternate screen is unsupported.
            self._out.clear_screen()
            self._out.move_cursor(1, 1)
            self.repaint()

    def exit_alt_screen(self) -> None:
        with self._lock:
            if not self._alt_screen_active:
                return
            self._alt_screen_active = False
            self._out.exit_alt_screen()
            self.repaint()

    def show_cursor(self) -> None:
        with self._lock:
            self._out.show_cursor()

    def hide_cursor(self) -> None:
        with self._lock:
            self._out.hide_cursor()

    def enable_mouse_cell_motion(self) -> None:
        with self._lock:
            self._out.enable_mouse_cell_motion()

    def disable_mouse_cell_motion(self) -> None:
        with self._lock:
            self._out.disable_mouse_cell_motion()

    def enable_mouse_all_motion(self) -> None:
        with self._lock:
            self._out.enable_mouse_all_motion()

    def disable_mouse_all_motion(self) -> None:
        with self._lock:
            self._out.disable_mouse_all_motion()

    def set_ignored_lines(self, start: int, end: int) -> None:
        """Exclude lines ``start`` to ``end - 1`` from rendering and erase them."""
        with self._lock:
            self._ignore_lines.update(range(start, end))
            if self._lines_rendered <= 0:
                return
            out = AnsiOutput(io.StringIO())
            for i in range(self._lines_rendered - 1, -1, -1):
                if i in self._ignore_lines:
                    out.clear_line()
                out.cursor_up(1)
            out.move_cursor(self._lines_rendered, 0)
            self._out.write(out.stream.getvalue())

    def clear_ignored_lines(self) -> None:
        """Return all ignored lines to the renderer."""
        with self._lock:
            self._ignore_lines = set()

    def insert_top(
        self, lines: Iterable[str], top_boundary: int, bottom_boundary: int
    ) -> None:
        """Insert lines at the top of a scrolling region, pushing the rest down."""
        lines = list(lines)
        with self._lock:
            out = AnsiOutput(io.StringIO())
            out.change_scrolling_region(top_boundary, bottom_boundary)
            out.move_cursor(top_boundary, 0)
            out.insert_lines(len(lines))
            out.write("\r\n".join(lines))
            out.change_scrolling_region(0, self._height)
            out.move_cursor(self._lines_rendered, 0)
            self._out.write(out.stream.getvalue())

    def insert_bottom(
        self, lines: Iterable[str], top_boundary: int, bottom_boundary: int
    ) -> None:
        """Insert lines at the bottom of a scrolling region, pushing the rest up."""
        lines = list(lines)
        with self._lock:
            out = AnsiOutput(io.StringIO())
            out.change_scrolling_region(top_boundary, bottom_boundary)
            out.move_cursor(bottom_boundary, 0)
            out.write("\r\n" + "\r\n".join(lines))
            out.change_scrolling_region(0, self._height)
            out.move_cursor(self._lines_rendered, 0)
            self._out.write(out.stream.getvalue())

    def handle_message(self, msg: Any) -> None:
        """React to the messages that concern the renderer."""
        if isinstance(msg, RepaintMsg):
            self.repaint()
        elif isinstance(msg, WindowSizeMsg):
            with self._lock:
                self._width = msg.width
                self._height = msg.height
                self.repaint()
        elif isinstance(msg, ClearScrollAreaMsg):
            self.clear_ignored_lines()
            self.repaint()
        elif isinstance(msg, SyncScrollAreaMsg):
            self.clear_ignored_lines()
            self.set_ignored_lines(msg.top_boundary, msg.bottom_boundary)
            self.insert_top(msg.lines, msg.top_boundary, msg.bottom_boundary)
            self.repaint()
        elif isinstance(msg, ScrollUpMsg):
            self.insert_top(msg.lines, msg.top_boundary, msg.bottom_boundary)
        elif isinstance(msg, ScrollDownMsg):
            self.insert_bottom(msg.lines, msg.top_boundary, msg.bottom_boundary)
        elif isinstance(msg, PrintLineMsg):
            with self._lock:
                if not self._alt_screen_active:
                    self._queued_message_lines.extend(msg.message_body.split("\n"))
                    self.repaint()


Cmd = Callable[[], Any]


def sync_scroll_area(
    lines: Iterable[str], top_boundary: int, bottom_boundary: int
) -> Cmd:
    """Command: paint the whole scrollable region."""
    msg = SyncScrollAreaMsg(tuple(lines), top_boundary, bottom_boundary)
    return lambda: msg


def clear_scroll_area() -> ClearScrollAreaMsg:
    """Command: release the scrollable region to the main renderer."""
    return ClearScrollAreaMsg()


def scroll_up(new_lines: Iterable[str], top_boundary: int, bottom_boundary: int) -> Cmd:
    """Command: add lines to the top of the scrollable region."""
    msg = ScrollUpMsg(tuple(new_lines), top_boundary, bottom_boundary)
    return lambda: msg


def scroll_down(
    new_lines: Iterable[str], top_boundary: int, bottom_boundary: int
) -> Cmd:
    """Command: add lines to the bottom of the scrollable region."""
    msg = ScrollDownMsg(tuple(new_lines), top_boundary, bottom_boundary)
    return lambda: msg


def _sprint(args: tuple[Any, ...]) -> str:
    """Join values, with a space only between two adjacent non-strings."""
    parts: list[str] = []
    previous_is_str = True
    for index, arg in enumerate(args):
        is_str = isinstance(arg, str)
        if index > 0 and not is_str and not previous_is_str:
            parts.append(" ")
        parts.append(str(arg))
        previous_is_str = is_str
    return "".join(parts)


def println(*args: Any) -> Cmd:
    """Command: print the values above the program on their own line."""
    body = _sprint(args)
    return lambda: PrintLineMsg(body)


def printf(template: str, *args: Any) -> Cmd:
    """Command: print a %-formatted line above the program."""
    body = template % args if args else template
    return lambda: PrintLineMsg(body)