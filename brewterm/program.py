"""The program: runs a model's update loop against a terminal."""

from __future__ import annotations

import abc
import os
import select
import signal
import sys
import threading
import time
from dataclasses import dataclass
from queue import SimpleQueue
from typing import Any, Callable, Optional

from brewterm.execution import ExecCallback, ExecCommand, ExecMsg
from brewterm.keys import read_inputs
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
from brewterm.options import ProgramOption, StartupOptions
from brewterm.renderer import Renderer
from brewterm.standard_renderer import AnsiOutput, StandardRenderer
from brewterm.standard_renderer import printf as _printf_cmd
from brewterm.standard_renderer import println as _println_cmd
from brewterm.terminal import (
    RawConsole,
    is_terminal,
    open_input_tty,
    resize_signal_supported,
    terminal_size,
)

__all__ = ["Model", "ProgramKilled", "Program", "Cmd"]

Cmd = Optional[Callable[[], Any]]

_READ_LOOP_GRACE = 0.5
_ALT_SCREEN_SETTLE = 0.01


class ProgramKilled(Exception):
    """Raised by :meth:`Program.run` when the program was killed."""

    def __init__(self, model: Any = None) -> None:
        super().__init__("program was killed")
        self.model = model


class Model(abc.ABC):
    """A program's state together with its init, update and view functions."""

    def init(self) -> Cmd:
        """Return an optional command to run when the program starts."""
        return None

    @abc.abstractmethod
    def update(self, msg: Any) -> tuple[Any, Cmd]:
        """Handle a message; return the new model and an optional command."""

    @abc.abstractmethod
    def view(self) -> str:
        """Render the user interface as a string."""


@dataclass(frozen=True)
class _Failure:
    error: BaseException


_WAKE = object()


class _Canceled(Exception):
    pass


def _fileno(stream: Any) -> int | None:
    try:
        return stream.fileno()
    except (AttributeError, OSError, ValueError):
        return None


class _CancelReader:
    """Wraps an input stream so that a blocking read can be interrupted."""

    def __init__(self, stream: Any) -> None:
        self._stream = stream
        self._canceled = threading.Event()
        self._fd = _fileno(stream) if os.name != "nt" else None
        self._wake_r: int | None = None
        self._wake_w: int | None = None
        if self._fd is not None:
            self._wake_r, self._wake_w = os.pipe()

    def read(self, size: int) -> bytes:
        if self._canceled.is_set():
            raise _Canceled()
        if self._fd is None:
            data = self._stream.read(size)
            if self._canceled.is_set():
                raise _Canceled()
            return data.encode("utf-8") if isinstance(data, str) else data
        try:
            ready, _, _ = select.select([self._fd, self._wake_r], [], [])
            if self._canceled.is_set() or self._wake_r in ready:
                raise _Canceled()
            return os.read(self._fd, size)
        except (OSError, ValueError):
            if self._canceled.is_set():
                raise _Canceled() from None
            raise

    def cancel(self) -> bool:
        """Interrupt pending reads; True if a blocked read can be woken."""
        self._canceled.set()
        if self._wake_w is None:
            return False
        try:
            os.write(self._wake_w, b"x")
        except OSError:
            return False
        return True

    def close(self) -> None:
        for fd in (self._wake_r, self._wake_w):
            if fd is not None:
                try:
                    os.close(fd)
                except OSError:
                    pass
        self._wake_r = self._wake_w = None


def _restore_signals(saved: list[tuple[int, Any]]) -> None:
    for signum, previous in reversed(saved):
        try:
            signal.signal(signum, previous)
        except (ValueError, OSError, TypeError):
            pass
    saved.clear()


def _install_handler(signum: int, handler: Callable[..., None]) -> list[tuple[int, Any]]:
    if threading.current_thread() is not threading.main_thread():
        return []
    try:
        return [(signum, signal.signal(signum, handler))]
    except (ValueError, OSError):
        return []


class Program:
    """A terminal user interface driven by a model."""

    def __init__(self, model: Any, *options: ProgramOption) -> None:
        self._initial_model = model
        self.startup_options = StartupOptions(0)
        self.input: Any = sys.stdin
        self.output: Any = None
        self.renderer: Renderer | None = None

        self._msgs: SimpleQueue[Any] = SimpleQueue()
        self._done = threading.Event()
        self._cancel_reader: _CancelReader | None = None
        self._read_loop_done = threading.Event()
        self._read_loop_done.set()
        self._console: RawConsole | None = None
        self._alt_screen_was_active = False
        self._ignore_signals = False

        for option in options:
            option(self)

        if self.output is None:
            self.output = AnsiOutput(sys.stdout)

    # Running

    def run(self) -> Any:
        """Run until quit, returning the final model.

        Raises ProgramKilled if the program was killed, and any error raised
        while reading input or by the model.
        """
        flags = self.startup_options
        saved_signals: list[tuple[int, Any]] = []
        opened_tty = None
        try:
            opened_tty = self._prepare_input()
            if not flags & StartupOptions.WITHOUT_SIGNAL_HANDLER:
                saved_signals.extend(self._install_interrupt_handlers())
            try:
                model, error = self._execute(saved_signals)
            except Exception:
                if not flags & StartupOptions.WITHOUT_CATCH_PANICS:
                    self._done.set()
                    self._stop_reader()
                    self._shutdown(kill=True)
                raise
        finally:
            self._done.set()
            self._stop_reader()
            _restore_signals(saved_signals)
            if opened_tty is not None:
                opened_tty.close()

        if error is not None:
            raise error
        return model

    def start(self) -> None:
        """Run the program, discarding the final model."""
        self.run()

    def send(self, msg: Any) -> None:
        """Inject a message into the program; a no-op once it has exited."""
        if self._done.is_set():
            return
        self._msgs.put(msg)

    def quit(self) -> None:
        """Ask the program to exit, from outside it."""
        self.send(QuitMsg())

    def kill(self) -> None:
        """Stop immediately, skipping the final render."""
        self._done.set()
        self._msgs.put(_WAKE)

    def _prepare_input(self) -> Any:
        flags = self.startup_options
        if flags & StartupOptions.INPUT_TTY:
            self.input = open_input_tty()
            return self.input
        if not flags & StartupOptions.CUSTOM_INPUT:
            # Piped or redirected input: read keys from the terminal instead.
            if _fileno(self.input) is not None and not is_terminal(self.input):
                self.input = open_input_tty()
                return self.input
        return None

    def _execute(self, saved_signals: list[tuple[int, Any]]) -> tuple[Any, BaseException | None]:
        flags = self.startup_options
        if self.renderer is None:
            self.renderer = StandardRenderer(
                self.output, bool(flags & StartupOptions.ANSI_COMPRESSOR)
            )

        self._init_terminal()

        if flags & StartupOptions.ALT_SCREEN:
            self.renderer.enter_alt_screen()
        if flags & StartupOptions.MOUSE_CELL_MOTION:
            self.renderer.enable_mouse_cell_motion()
        elif flags & StartupOptions.MOUSE_ALL_MOTION:
            self.renderer.enable_mouse_all_motion()

        model = self._initial_model
        self._dispatch(model.init())

        self.renderer.start()
        self.renderer.write(model.view())

        if self.input is not None:
            self._init_cancel_reader()

        saved_signals.extend(self._watch_resize())

        model, error = self._event_loop(model)
        killed = self._done.is_set()
        if killed:
            error = ProgramKilled(model)
        else:
            self.renderer.write(model.view())

        self._done.set()
        self._stop_reader()
        self._shutdown(kill=killed)
        return model, error

    def _event_loop(self, model: Any) -> tuple[Any, BaseException | None]:
        while True:
            if self._done.is_set():
                return model, None
            msg = self._msgs.get()
            if self._done.is_set():
                return model, None
            if msg is _WAKE:
                continue
            if isinstance(msg, _Failure):
                return model, msg.error
            if isinstance(msg, QuitMsg):
                return model, None
            if isinstance(msg, BatchMsg):
                for cmd in msg:
                    self._dispatch(cmd)
                continue

            self._handle_builtin(msg)
            if isinstance(self.renderer, StandardRenderer):
                self.renderer.handle_message(msg)

            model, cmd = model.update(msg)
            self._dispatch(cmd)
            self.renderer.write(model.view())

    def _handle_builtin(self, msg: Any) -> None:
        r = self.renderer
        match msg:
            case ClearScreenMsg():
                r.clear_screen()
            case EnterAltScreenMsg():
                r.enter_alt_screen()
            case ExitAltScreenMsg():
                r.exit_alt_screen()
            case EnableMouseCellMotionMsg():
                r.enable_mouse_cell_motion()
            case EnableMouseAllMotionMsg():
                r.enable_mouse_all_motion()
            case DisableMouseMsg():
                r.disable_mouse_cell_motion()
                r.disable_mouse_all_motion()
            case ShowCursorMsg():
                r.show_cursor()
            case HideCursorMsg():
                r.hide_cursor()
            case ExecMsg():
                # Blocks the event loop until the command finishes.
                self._exec(msg.cmd, msg.callback)
            case SequenceMsg():
                self._run_sequence(tuple(msg))

    # Commands

    def _post_error(self, error: BaseException) -> None:
        if not self._done.is_set():
            self._msgs.put(_Failure(error))

    def _spawn(self, target: Callable[[], None]) -> None:
        def guarded() -> None:
            try:
                target()
            except Exception as exc:
                self._post_error(exc)

        threading.Thread(target=guarded, daemon=True).start()

    def _dispatch(self, cmd: Cmd) -> None:
        if cmd is None:
            return
        self._spawn(lambda: self.send(cmd()))

    def _run_sequence(self, cmds: tuple[Cmd, ...]) -> None:
        def run_in_order() -> None:
            for cmd in cmds:
                if cmd is not None:
                    self.send(cmd())

        self._spawn(run_in_order)

    def _exec(self, command: ExecCommand, callback: ExecCallback | None) -> None:
        def report(error: BaseException | None) -> None:
            if callback is not None:
                self._spawn(lambda: self.send(callback(error)))

        try:
            self.release_terminal()
        except OSError as exc:
            report(exc)
            return

        command.set_stdin(self.input)
        command.set_stdout(self.output)
        command.set_stderr(sys.stderr)

        try:
            command.run()
        except Exception as exc:
            try:
                self.restore_terminal()
            except OSError:
                pass
            report(exc)
            return

        error: BaseException | None = None
        try:
            self.restore_terminal()
        except OSError as exc:
            error = exc
        report(error)

    # Terminal handling

    def _init_input(self) -> None:
        if _fileno(self.input) is None:
            return
        try:
            self._console = RawConsole.from_file(self.input)
        except OSError:
            pass

    def _init_terminal(self) -> None:
        self._init_input()
        if self._console is not None:
            self._console.set_raw()
        self.renderer.hide_cursor()

    def _restore_terminal_state(self) -> None:
        if self.renderer is not None:
            self.renderer.show_cursor()
            self.renderer.disable_mouse_cell_motion()
            self.renderer.disable_mouse_all_motion()
            if self.renderer.alt_screen():
                self.renderer.exit_alt_screen()
                # Give the terminal a moment to catch up.
                time.sleep(_ALT_SCREEN_SETTLE)
        if self._console is not None:
            self._console.reset()

    def _shutdown(self, kill: bool) -> None:
        if self.renderer is not None:
            if kill:
                self.renderer.kill()
            else:
                self.renderer.stop()
        try:
            self._restore_terminal_state()
        except OSError:
            pass

    def release_terminal(self) -> None:
        """Restore the original terminal state and stop reading input."""
        self._ignore_signals = True
        reader = self._cancel_reader
        if reader is not None:
            reader.cancel()
            self._wait_for_read_loop()
            reader.close()
            self._cancel_reader = None
        self._alt_screen_was_active = self.renderer.alt_screen()
        self._restore_terminal_state()

    def restore_terminal(self) -> None:
        """Take the terminal back after :meth:`release_terminal` and repaint."""
        self._ignore_signals = False
        self._init_terminal()
        if self.input is not None:
            self._init_cancel_reader()
        if self._alt_screen_was_active:
            self.renderer.enter_alt_screen()
        else:
            # Entering the alternate screen already repaints.
            self.send(RepaintMsg())
        # The terminal may have been resized while another process had it.
        self._check_resize()

    def _init_cancel_reader(self) -> None:
        reader = _CancelReader(self.input)
        finished = threading.Event()
        self._cancel_reader = reader
        self._read_loop_done = finished
        threading.Thread(
            target=self._read_loop, args=(reader, finished), daemon=True
        ).start()

    def _read_loop(self, reader: _CancelReader, finished: threading.Event) -> None:
        try:
            while not self._done.is_set():
                try:
                    msgs = read_inputs(reader)
                except (EOFError, _Canceled):
                    return
                except Exception as exc:
                    self._post_error(exc)
                    return
                for msg in msgs:
                    self._msgs.put(msg)
        finally:
            finished.set()

    def _wait_for_read_loop(self) -> None:
        # A hung read loop means cancelling reported success but could not
        # actually interrupt the read; give up after a short wait.
        self._read_loop_done.wait(_READ_LOOP_GRACE)

    def _stop_reader(self) -> None:
        reader = self._cancel_reader
        if reader is None:
            return
        self._cancel_reader = None
        if reader.cancel():
            self._wait_for_read_loop()
        reader.close()

    def _check_resize(self) -> None:
        tty = self.output.tty()
        if tty is None or not is_terminal(tty):
            return
        try:
            width, height = terminal_size(tty)
        except OSError as exc:
            self._post_error(exc)
            return
        self.send(WindowSizeMsg(width, height))

    def _watch_resize(self) -> list[tuple[int, Any]]:
        tty = self.output.tty()
        if tty is None or not is_terminal(tty):
            return []
        threading.Thread(target=self._check_resize, daemon=True).start()
        if not resize_signal_supported():
            return []
        return _install_handler(signal.SIGWINCH, lambda signum, frame: self._check_resize())

    def _install_interrupt_handlers(self) -> list[tuple[int, Any]]:
        # In raw mode ^C arrives as a keypress; these catch it otherwise.
        def on_signal(signum: int, frame: Any) -> None:
            if not self._ignore_signals:
                self.send(QuitMsg())

        saved: list[tuple[int, Any]] = []
        for name in ("SIGINT", "SIGTERM"):
            signum = getattr(signal, name, None)
            if signum is not None:
                saved.extend(_install_handler(signum, on_signal))
        return saved

    # Printing

    def println(self, *args: Any) -> None:
        """Print the values above the program on their own line."""
        self._msgs.put(_println_cmd(*args)())

    def printf(self, template: str, *args: Any) -> None:
        """Print a %-formatted line above the program."""
        self._msgs.put(_printf_cmd(template, *args)())

    # Direct terminal mode control

    def enter_alt_screen(self) -> None:
        """Enter the alternate screen buffer."""
        if self.renderer is not None:
            self.renderer.enter_alt_screen()

    def exit_alt_screen(self) -> None:
        """Exit the alternate screen buffer."""
        if self.renderer is not None:
            self.renderer.exit_alt_screen()

    def enable_mouse_cell_motion(self) -> None:
        """Enable click, release, wheel and drag mouse events."""
        self.renderer.enable_mouse_cell_motion()

    def disable_mouse_cell_motion(self) -> None:
        """Disable cell motion mouse tracking."""
        self.renderer.disable_mouse_cell_motion()

    def enable_mouse_all_motion(self) -> None:
        """Enable all mouse events, whether or not a button is pressed."""
        self.renderer.enable_mouse_all_motion()

    def disable_mouse_all_motion(self) -> None:
        """Disable all motion mouse tracking."""
        self.renderer.disable_mouse_all_motion()