"""Send log output to a file while the terminal is occupied."""

from __future__ import annotations

import logging
import os
from typing import TextIO

__all__ = ["log_to_file"]


def log_to_file(path: str | os.PathLike[str], prefix: str) -> TextIO:
    """Direct the root logger to append to ``path``, creating it if needed.

    Each record is written as its message preceded by ``prefix``; a space is
    added after a non-empty prefix that does not already end in whitespace.
    The caller owns the returned file and should close it when done.
    """
    stream = open(path, "a", encoding="utf-8")

    if prefix and not prefix[-1].isspace():
        prefix += " "

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(prefix.replace("%", "%%") + "%(message)s"))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)
    return stream