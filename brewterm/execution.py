"""Running blocking commands, such as editors, in the program's terminal."""

from __future__ import annotations

import abc
import codecs
import subprocess
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Union

from brewterm.standard_renderer import AnsiOutput

__all__ = [
    "ExecCommand",
    "ProcessCommand",
    "ExecMsg",
    "ExecCallback",
    "exec_command",
    "exec_process",
]

ExecCallback = Callable[[Optional[BaseException]], Any]

_CHUNK = 4096


class ExecCommand(abc.ABC):
    """Something that runs in the foreground of the terminal, blocking."""

    @abc.abstractmethod
    def run(self) -> None:
        """Run to completion; raise on failure."""

    @abc.abstractmethod
    def set_stdin(self, reader: Any) -> None:
        """Offer the terminal's input stream."""

    @abc.abstractmethod
    def set_stdout(self, writer: Any) -> None:
        """Offer the terminal's output stream."""

    @abc.abstractmethod
    def set_stderr(self, writer: Any) -> None:
        """Offer the error stream."""


def _fileno(stream: Any) -> int | None:
    if isinstance(stream, AnsiOutput):
        stream = stream.stream
    try:
        return stream.fileno()
    except (AttributeError, OSError, ValueError):
        return None


def _feed(reader: Any, pipe: Any) -> None:
    try:
        while True:
            chunk = reader.read(_CHUNK)
            if not chunk:
                break
            if isinstance(chunk, str):
                chunk = chunk.encode("utf-8")
            pipe.write(chunk)
            pipe.flush()
    except (BrokenPipeError, OSError, ValueError):
        pass
    finally:
        try:
            pipe.close()
        except OSError:
            pass


def _drain(pipe: Any, writer: Any) -> None:
    if isinstance(writer, AnsiOutput):
        writer = writer.stream
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    text_mode = False
    while True:
        chunk = pipe.read1(_CHUNK) if hasattr(pipe, "read1") else pipe.read(_CHUNK)
        if not chunk:
            break
        if not text_mode:
            try:
                writer.write(chunk)
                continue
            except TypeError:
                text_mode = True
        writer.write(decoder.decode(chunk))
    if text_mode:
        tail = decoder.decode(b"", final=True)
        if tail:
            writer.write(tail)
    flush = getattr(writer, "flush", None)
    if flush is not None:
        flush()
    pipe.close()


class ProcessCommand(ExecCommand):
    """An operating-system process run as an :class:`ExecCommand`.

    Streams that are left unset take the ones the program offers. Streams
    without a file descriptor are copied through pipes.
    """

    def __init__(
        self,
        args: Union[str, Sequence[str]],
        *,
        stdin: Any = None,
        stdout: Any = None,
        stderr: Any = None,
        cwd: Any = None,
        env: Any = None,
    ) -> None:
        self.args = [args] if isinstance(args, str) else list(args)
        self.stdin = stdin
        self.stdout = stdout
        self.stderr = stderr
        self.cwd = cwd
        self.env = env

    def set_stdin(self, reader: Any) -> None:
        if self.stdin is None:
            self.stdin = reader

    def set_stdout(self, writer: Any) -> None:
        if self.stdout is None:
            self.stdout = writer

    def set_stderr(self, writer: Any) -> None:
        if self.stderr is None:
            self.stderr = writer

    def run(self) -> None:
        """Run the process; raise CalledProcessError on a non-zero exit."""
        stdin_arg = self._target(self.stdin)
        stdout_arg = self._target(self.stdout)
        stderr_arg = self._target(self.stderr)

        proc = subprocess.Popen(
            self.args,
            stdin=stdin_arg,
            stdout=stdout_arg,
            stderr=stderr_arg,
            cwd=self.cwd,
            env=self.env,
        )

        if stdin_arg is subprocess.PIPE:
            threading.Thread(
                target=_feed, args=(self.stdin, proc.stdin), daemon=True
            ).start()

        drains = [
            threading.Thread(target=_drain, args=(pipe, writer), daemon=True)
            for arg, pipe, writer in (
                (stdout_arg, proc.stdout, self.stdout),
                (stderr_arg, proc.stderr, self.stderr),
            )
            if arg is subprocess.PIPE
        ]
        for thread in drains:
            thread.start()

        returncode = proc.wait()
        for thread in drains:
            thread.join()

        if returncode != 0:
            raise subprocess.CalledProcessError(returncode, self.args)

    @staticmethod
    def _target(stream: Any) -> Any:
        if stream is None:
            return subprocess.DEVNULL
        fd = _fileno(stream)
        return fd if fd is not None else subprocess.PIPE


@dataclass(frozen=True)
class ExecMsg:
    """Asks the program to pause and run ``cmd`` in the foreground."""

    cmd: ExecCommand
    callback: Optional[ExecCallback] = None


def exec_command(
    command: ExecCommand, callback: Optional[ExecCallback]
) -> Callable[[], ExecMsg]:
    """Command: pause the program, run ``command``, then resume.

    ``callback`` receives the error raised (or None) and returns a message.
    """
    msg = ExecMsg(command, callback)
    return lambda: msg


def exec_process(
    command: Union[ProcessCommand, str, Sequence[str]],
    callback: Optional[ExecCallback],
) -> Callable[[], ExecMsg]:
    """Command: pause the program to run a process such as an editor or shell."""
    if not isinstance(command, ExecCommand):
        command = ProcessCommand(command)
    return exec_command(command, callback)