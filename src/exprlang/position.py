"""
Source positions for tokens, AST nodes and errors.

A Position is a pair of half-open ranges: the lines and the columns a span
of source covers. Lines and columns are 1-indexed.
"""

from dataclasses import dataclass, field
from typing import Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass
class Position:
    """A line/column span in source text."""
    lines: range = range(0, 0)
    columns: range = range(0, 0)

    @classmethod
    def new(cls, lines: range, columns: range) -> "Position":
        return cls(lines, columns)

    @classmethod
    def at(cls, line: int, column: int) -> "Position":
        """A single-character position."""
        return cls(range(line, line + 1), range(column, column + 1))

    @classmethod
    def between(cls, start: "Position", end: "Position") -> "Position":
        """Span from the start of `start` to the end of `end`."""
        return cls(
            range(start.lines.start, end.lines.stop),
            range(start.columns.start, end.columns.stop),
        )

    def extend(self, other: "Position") -> None:
        """Grow this position so it ends where `other` ends."""
        self.lines = range(self.lines.start, other.lines.stop)
        self.columns = range(self.columns.start, other.columns.stop)

    def copy(self) -> "Position":
        return Position(self.lines, self.columns)

    @property
    def is_empty(self) -> bool:
        return len(self.lines) == 0 and len(self.columns) == 0

    def __str__(self) -> str:
        if self.is_empty:
            return "end of input"
        start = f"{self.lines.start}:{self.columns.start}"
        end_line = max(self.lines.start, self.lines.stop - 1)
        end_col = max(self.columns.start, self.columns.stop - 1)
        if (end_line, end_col) == (self.lines.start, self.columns.start):
            return start
        return f"{start}-{end_line}:{end_col}"


@dataclass
class Located(Generic[T]):
    """
    A value paired with the source position it came from.

    Equality, str() and repr() look only at the wrapped value; the
    position is carried along as metadata.
    """
    value: T
    position: Position = field(default_factory=Position, compare=False)

    def map(self, f: Callable[[T], U]) -> "Located[U]":
        """Transform the value, keeping a copy of the position."""
        return Located(f(self.value), self.position.copy())

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return repr(self.value)
