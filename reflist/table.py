"""
Aligned text table output.

Rows are built one column at a time. The last column of a row may be
extended with append_with_comma(), which is how tag lists are produced.
Columns are aligned by terminal display width.
"""

from __future__ import annotations

import sys
from typing import TextIO

from wcwidth import wcswidth


def display_width(text: str) -> int:
    """Terminal column width of text (len() for non-printable input)."""
    width = wcswidth(text)
    if width < 0:
        return len(text)
    return width


class TablePrinter:
    """
    Accumulates rows of columns and renders them aligned.

    Cells are left aligned and separated by a single space. Lines carry no
    trailing whitespace.
    """

    def __init__(self):
        self.rows: list[list[str]] = []
        self._current: list[str] = []

    def add_column(self, text: str | None) -> None:
        """Add a column to the current row."""
        self._current.append(text or "")

    def append_with_comma(self, text: str) -> None:
        """
        Append text to the last column of the current row, comma-separated.

        An empty last column is replaced by text; a row without columns gets
        a new one.
        """
        if not self._current:
            self._current.append(text)
        elif self._current[-1]:
            self._current[-1] = f"{self._current[-1]},{text}"
        else:
            self._current[-1] = text

    def finish_row(self) -> None:
        """Finish the current row; a row without columns is dropped."""
        if self._current:
            self.rows.append(self._current)
        self._current = []

    def column_widths(self) -> list[int]:
        if not self.rows:
            return []
        ncol = max(len(r) for r in self.rows)
        widths = [0] * ncol
        for row in self.rows:
            for i, cell in enumerate(row):
                widths[i] = max(widths[i], display_width(cell))
        return widths

    def render(self) -> str:
        """Render all finished rows; zero rows render as ''."""
        widths = self.column_widths()
        lines = []
        for row in self.rows:
            cells = []
            for i, cell in enumerate(row):
                if i < len(row) - 1:
                    cell = cell + " " * (widths[i] - display_width(cell))
                cells.append(cell)
            lines.append(" ".join(cells).rstrip(" ") + "\n")
        return "".join(lines)

    def print(self, file: TextIO | None = None) -> None:
        (file or sys.stdout).write(self.render())
