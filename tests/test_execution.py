import io
import subprocess

import pytest

from brewterm.execution import (
    ExecMsg,
    ProcessCommand,
    exec_command,
    exec_process,
)


def test_true_runs_cleanly():
    out = io.BytesIO()
    cmd = ProcessCommand(["true"], stdout=out)
    cmd.run()
    assert out.getvalue() == b""


def test_false_raises_called_process_error():
    with pytest.raises(subprocess.CalledProcessError) as info:
        ProcessCommand(["false"]).run()
    assert info.value.returncode != 0


def test_invalid_command_raises_os_error():
    with pytest.raises(OSError):
        ProcessCommand(["invalid-command-that-does-not-exist"]).run()


def test_stdout_is_copied_to_bytes_writer():
    out = io.BytesIO()
    cmd = ProcessCommand(["echo", "hello"])
    cmd.set_stdout(out)
    cmd.run()
    assert out.getvalue() == b"hello\n"


def test_stdout_is_copied_to_text_writer():
    out = io.StringIO()
    cmd = ProcessCommand(["echo", "hello"])
    cmd.set_stdout(out)
    cmd.run()
    assert out.getvalue() == "hello\n"


def test_stdin_is_fed_from_reader():
    out = io.BytesIO()
    cmd = ProcessCommand(["cat"])
    cmd.set_stdin(io.BytesIO(b"abc"))
    cmd.set_stdout(out)
    cmd.run()
    assert out.getvalue() == b"abc"


def test_setters_keep_explicit_streams():
    first_in, first_out, first_err = io.BytesIO(), io.BytesIO(), io.BytesIO()
    cmd = ProcessCommand(["true"], stdin=first_in, stdout=first_out, stderr=first_err)
    cmd.set_stdin(io.BytesIO())
    cmd.set_stdout(io.BytesIO())
    cmd.set_stderr(io.BytesIO())
    assert cmd.stdin is first_in
    assert cmd.stdout is first_out
    assert cmd.stderr is first_err


def test_setters_fill_unset_streams():
    reader, writer, errors = io.BytesIO(), io.BytesIO(), io.BytesIO()
    cmd = ProcessCommand(["true"])
    cmd.set_stdin(reader)
    cmd.set_stdout(writer)
    cmd.set_stderr(errors)
    assert (cmd.stdin, cmd.stdout, cmd.stderr) == (reader, writer, errors)


def test_exec_command_produces_exec_msg():
    cmd = ProcessCommand(["true"])

    def callback(err):
        return err

    msg = exec_command(cmd, callback)()
    assert msg == ExecMsg(cmd, callback)


def test_exec_process_wraps_argument_list():
    msg = exec_process(["echo", "hi"], None)()
    assert isinstance(msg.cmd, ProcessCommand)
    assert msg.cmd.args == ["echo", "hi"]
    assert msg.callback is None


def test_exec_process_keeps_process_command():
    cmd = ProcessCommand(["true"])
    assert exec_process(cmd, None)().cmd is cmd


def test_string_argument_becomes_single_program():
    assert ProcessCommand("true").args == ["true"]