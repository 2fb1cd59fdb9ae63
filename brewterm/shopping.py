"""A small shopping-list program: move with the arrows, pick with enter."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

from brewterm.keys import KeyMsg
from brewterm.messages import quit as quit_cmd
from brewterm.program import Cmd, Model, Program

__all__ = ["ShoppingList", "main"]

DEFAULT_CHOICES = ("Buy carrots", "Buy celery", "Buy kohlrabi")


@dataclass(frozen=True)
class ShoppingList(Model):
    """A list of choices with a cursor and a set of selected indexes."""

    choices: tuple[str, ...] = DEFAULT_CHOICES
    cursor: int = 0
    selected: frozenset[int] = field(default_factory=frozenset)

    def init(self) -> Cmd:
        return None

    def update(self, msg: Any) -> tuple[ShoppingList, Cmd]:
        if not isinstance(msg, KeyMsg):
            return self, None

        key = str(msg)
        if key in ("ctrl+c", "q"):
            return self, quit_cmd
        if key in ("up", "k"):
            if self.cursor > 0:
                return replace(self, cursor=self.cursor - 1), None
        elif key in ("down", "j"):
            if self.cursor < len(self.choices) - 1:
                return replace(self, cursor=self.cursor + 1), None
        elif key in ("enter", " "):
            return replace(self, selected=self.selected ^ {self.cursor}), None
        return self, None

    def view(self) -> str:
        lines = ["What should we buy at the market?\n\n"]
        for index, choice in enumerate(self.choices):
            pointer = ">" if index == self.cursor else " "
            checked = "x" if index in self.selected else " "
            lines.append(f"{pointer} [{checked}] {choice}\n")
        lines.append("\nPress q to quit.\n")
        return "".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Run the shopping list; return the process exit status."""
    program = Program(ShoppingList())
    try:
        program.run()
    except Exception as err:
        sys.stdout.write(f"Alas, there's been an error: {err}")
        sys.stdout.flush()
        return 1
    return 0