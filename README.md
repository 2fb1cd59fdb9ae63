# brewterm

brewterm is a small framework for terminal user interfaces built around a
model, an update function and a view. A program holds one model. Every
keypress, mouse event, window resize or command result arrives as a message;
the model's `update` returns the next model and an optional command, and the
model's `view` returns the text to draw. A renderer redraws at up to 60 frames
a second and rewrites only the lines that changed.

## Installing

```
pip install brewterm
```

## Writing a program

Subclass `brewterm.program.Model`:

- `init()` returns an optional first command (the default returns `None`).
- `update(msg)` returns a `(model, command)` pair; the command may be `None`.
- `view()` returns the screen contents as a string.

A command is any callable taking no arguments and returning a message. It runs
on a background thread and its result is passed back to `update`.

```python
from brewterm.keys import KeyMsg
from brewterm.messages import quit
from brewterm.program import Model, Program


class Counter(Model):
    def __init__(self):
        self.count = 0

    def update(self, msg):
        if isinstance(msg, KeyMsg):
            key = str(msg)
            if key in ("q", "ctrl+c"):
                return self, quit
            if key in ("up", "k"):
                self.count += 1
            elif key in ("down", "j"):
                self.count -= 1
        return self, None

    def view(self):
        return f"Count: {self.count}\n\nup/down to change, q to quit.\n"


Program(Counter()).run()
```

`Program.run()` blocks until the program quits and returns the final model.
`Program.quit()` asks a running program to exit from outside; `Program.send(msg)`
injects a message (and does nothing once the program has exited).
`Program.kill()` stops at once, skipping the final render, and `run()` then
raises `ProgramKilled`. Errors from reading input, or raised by the model, are
raised from `run()` after the terminal has been restored.

## Messages

- `brewterm.keys.KeyMsg` – a keypress. `str(msg)` gives names such as `"a"`,
  `"enter"`, `"ctrl+c"`, `"up"`, `"f5"` or `"alt+a"`; `msg.type` is a
  `KeyType` (for example `KeyType.ENTER`, `KeyType.RUNES`) and `msg.runes`
  holds the typed characters.
- `brewterm.mouse.MouseMsg` – a mouse event with `x`, `y`, `type`
  (`MouseEventType`), `alt` and `ctrl`. Only X10-encoded mouse reports are
  decoded.
- `brewterm.messages.WindowSizeMsg` – the terminal's `width` and `height`,
  sent at start-up and on resize when the output is a terminal.

## Options

Pass options to `Program` after the model; they live in `brewterm.options`:

- `with_alt_screen()` – start in the alternate screen buffer (full window).
- `with_mouse_cell_motion()` / `with_mouse_all_motion()` – enable mouse
  reporting; the later of the two wins.
- `with_input(stream)` / `with_output(stream)` – read from or write to
  something other than the terminal.
- `with_input_tty()` – open the terminal directly for input.
- `without_renderer()` – use `NilRenderer`, which draws nothing.
- `without_signal_handler()` – do not turn SIGINT/SIGTERM into a quit.
- `without_catch_panics()` – let exceptions escape without restoring the
  terminal first.
- `with_ansi_compressor()` – drop repeated SGR styling sequences from output.

## Built-in commands

From `brewterm.messages`: `quit`, `clear_screen`, `enter_alt_screen`,
`exit_alt_screen`, `enable_mouse_cell_motion`, `enable_mouse_all_motion`,
`disable_mouse`, `hide_cursor`, `show_cursor`. Sending a `BatchMsg` of
commands runs them all concurrently; a `SequenceMsg` runs them one after
another, in order.

From `brewterm.standard_renderer`: `println(*args)` and `printf(template,
*args)` (`%`-formatting) return commands that print lines above the program;
nothing is printed while the alternate screen is active. `sync_scroll_area`,
`scroll_up`, `scroll_down` and `clear_scroll_area` drive a scrolling region
that bypasses normal rendering, for full-window programs.

## Running other programs

`brewterm.execution.exec_process(args, callback)` returns a command that
pauses the program, restores the terminal, runs the process (a string or a
list of arguments) in the foreground and then takes the terminal back.
`callback` receives the raised error, or `None`, and returns a message; a
non-zero exit status is reported as `subprocess.CalledProcessError`. Any other
`ExecCommand` subclass can be run with `exec_command`.

## Logging

The interface owns the terminal, so log to a file instead. `log_to_file`
points the root logger at the file and returns the open file:

```python
import logging
from brewterm.logsetup import log_to_file

with log_to_file("debug.log", "debug"):
    logging.info("started")   # written as "debug started"
```

## Example

A shopping-list picker is included:

```
brewterm-shopping
```

Move with up/down or k/j, toggle an item with enter or space, and quit with q
or ctrl+c.

## Limits

- Raw terminal mode relies on `termios`; where it is missing (such as on
  Windows) input is read without switching the terminal to raw mode.
- Resizes are only reported while running where SIGWINCH exists; elsewhere the
  size is sent once at start-up.
- Signal handlers are only installed when `run()` is called from the main
  thread.