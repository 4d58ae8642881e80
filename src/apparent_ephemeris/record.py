"""Row builder for fixed-width text tables."""

from __future__ import annotations

from typing import TextIO


class Record:
    """One table row: fields joined by a single blank, trailing blanks dropped."""

    def __init__(self) -> None:
        self._fields: list[str] = []

    def append(self, text: str, width: int = 0) -> None:
        """Add a field, right-justified to width when width > 0."""
        self._fields.append(text.rjust(width) if width > 0 else text)

    def line(self) -> str:
        return ' '.join(self._fields).rstrip()

    def write(self, stream: TextIO) -> None:
        """Write the row (if not empty) and start a new one."""
        line = self.line()
        if line:
            stream.write(line + '\n')
        self._fields = []
