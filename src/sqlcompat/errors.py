"""
Error hierarchy for sqlcompat.

Lexing and parsing errors are recovered per statement and surfaced in the
report. Matrix and report errors abort the whole run.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Tuple

if TYPE_CHECKING:
    from .dialects.base import Dialect
    from .dialects.features import FeatureTag


def locate(source: str, position: int) -> Tuple[int, int]:
    """
    Resolve a character offset into a 1-based ``(line, column)`` pair.
    """

    position = max(0, min(position, len(source)))
    line = source.count("\n", 0, position) + 1
    line_start = source.rfind("\n", 0, position) + 1
    return line, position - line_start + 1


def context_block(source: str, line: int, *, radius: int = 2) -> str:
    """
    Return the numbered source lines surrounding ``line``.
    """

    lines = source.split("\n")
    first = max(1, line - radius)
    last = min(len(lines), line + radius)
    return "\n".join(f"{number}\t{lines[number - 1]}" for number in range(first, last + 1))


class SQLCompatError(Exception):
    """Base error for sqlcompat failures."""


class SourceError(SQLCompatError):
    """
    Error anchored at a character offset in SQL source text.
    """

    def __init__(self, message: str, position: int) -> None:
        self.message = message
        self.position = position
        super().__init__(f"{message} (offset {position})")

    def location(self, source: str) -> Tuple[int, int]:
        return locate(source, self.position)

    def describe(self, source: str) -> str:
        line, column = self.location(source)
        return f"{self.message} at line {line}, column {column}\n{context_block(source, line)}"


class LexError(SourceError):
    """Raised for malformed tokens such as unterminated strings or comments."""


class ParseError(SourceError):
    """
    Raised when a token sequence matches no grammar production.
    """

    def __init__(self, position: int, expected: str, found: str | None) -> None:
        self.expected = expected
        self.found = found
        shown = repr(found) if found is not None else "end of statement"
        super().__init__(f"Expected {expected}, found {shown}", position)


class UnknownFeatureTag(SQLCompatError):
    """
    Raised when the capability matrix has no verdict for a tag and target.
    """

    def __init__(self, tag: "FeatureTag", target: "Dialect") -> None:
        self.tag = tag
        self.target = target
        super().__init__(f"No capability entry for feature {tag.value!r} on target {target.value!r}")


class MatrixIncompleteError(SQLCompatError):
    """Raised when a capability matrix misses (tag, target) pairs at build time."""

    def __init__(self, missing: Iterable[tuple["FeatureTag", "Dialect"]]) -> None:
        self.missing = tuple(missing)
        sample = ", ".join(f"{tag.value}/{target.value}" for tag, target in self.missing[:5])
        more = "" if len(self.missing) <= 5 else f" (+{len(self.missing) - 5} more)"
        super().__init__(f"Capability matrix is missing {len(self.missing)} entries: {sample}{more}")


class ReportBuildError(SQLCompatError):
    """Raised when report entries violate ordering invariants."""


class UnsupportedDialectError(SQLCompatError):
    """Raised for dialect names that have no registered grammar."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"unsupported dialect: {name}")


class ConfigurationError(SQLCompatError):
    """Raised when analyzer configuration is invalid."""
