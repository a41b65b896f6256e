"""Source acquisition and line-level reading for MineLib files."""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO, Union

from .utils import is_comment_or_blank

# A path to open, or an already-open text stream owned by the caller.
LineSource = Union[str, os.PathLike[str], TextIO]


def is_path_like(source: object) -> bool:
    """Return True when the source names a file rather than an open stream."""
    return isinstance(source, (str, os.PathLike))


@contextmanager
def open_source(source: LineSource, encoding: str = "utf-8") -> Iterator[TextIO]:
    """Yield a readable text stream for a path or an open stream.

    Paths are opened here and closed on every exit path, including errors.
    Streams passed in are yielded unchanged and left open for their owner.
    """
    if is_path_like(source):
        with Path(source).open("r", encoding=encoding) as fh:
            yield fh
    else:
        yield source


class LineCursor:
    """Sequential line reader with comment skipping and one-line push-back.

    Attributes:
        line_number: 1-based number of the most recently returned line
            (0 before the first read).
    """

    def __init__(self, stream: TextIO):
        self._stream = stream
        self._pushed: tuple[str, int] | None = None
        self.line_number = 0

    def next_line(self) -> str | None:
        """Return the next raw line without its newline, or None at end of input."""
        if self._pushed is not None:
            line, self.line_number = self._pushed
            self._pushed = None
            return line
        raw = self._stream.readline()
        if not raw:
            return None
        self.line_number += 1
        return raw.rstrip("\r\n")

    def next_data_line(self) -> str | None:
        """Return the next trimmed line that is neither blank nor a comment.

        Returns None once the input is exhausted.
        """
        while True:
            line = self.next_line()
            if line is None:
                return None
            if not is_comment_or_blank(line):
                return line.strip()

    def push_back(self, line: str) -> None:
        """Return a line to the cursor so the next read yields it again."""
        if self._pushed is not None:
            raise RuntimeError("LineCursor holds at most one pushed-back line")
        self._pushed = (line, self.line_number)

    def __iter__(self) -> Iterator[str]:
        while True:
            line = self.next_line()
            if line is None:
                return
            yield line
