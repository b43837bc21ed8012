"""Tab-aligned text tables with padded, left-aligned columns."""

from __future__ import annotations

import sys
from typing import IO, Any


class TabTable:
    """Collects rows and prints them as aligned columns.

    Every cell but the last of a row is padded to its column's widest
    cell plus two spaces; the last cell is written as is.
    """

    padding = 2

    def __init__(self, stream: IO[str] | None = None) -> None:
        self._stream = stream
        self._chunks: list[str] = []

    def add_line(self, *args: Any) -> None:
        """Add a row made of the text of each argument."""
        self._chunks.append("\t".join(str(arg) for arg in args) + "\n")

    def add_header(self, *args: Any) -> None:
        """Add a row followed by a row of dashes under each cell."""
        self.add_line(*args)
        self._chunks.append("\t".join("-" * len(str(arg)) for arg in args) + "\n")

    def render(self) -> str:
        """Return the table as aligned text."""
        text = "".join(self._chunks)
        lines = [line.split("\t") for line in text.split("\n")]
        return "\n".join(_layout(lines, self.padding))

    def flush(self) -> None:
        """Write the table to the stream and start a new one."""
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(self.render())
        self._chunks.clear()


def _layout(lines: list[list[str]], padding: int) -> list[str]:
    """Align cells column by column over blocks of consecutive lines."""
    out: list[str] = []
    widths: list[int] = []

    def emit(start: int, stop: int) -> None:
        for cells in lines[start:stop]:
            out.append(
                "".join(
                    cell.ljust(widths[j]) if j < len(widths) else cell
                    for j, cell in enumerate(cells)
                )
            )

    def block(line0: int, line1: int) -> None:
        column = len(widths)
        this = line0
        while this < line1:
            if column >= len(lines[this]) - 1:
                this += 1
                continue
            emit(line0, this)
            line0 = this
            width = 0
            while this < line1 and column < len(lines[this]) - 1:
                width = max(width, len(lines[this][column]) + padding)
                this += 1
            widths.append(width)
            block(line0, this)
            widths.pop()
            line0 = this
            this += 1
        emit(line0, line1)

    block(0, len(lines))
    return out