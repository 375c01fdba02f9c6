# asc_parser/errors.py
"""Error taxonomy for ASC parsing.

All errors derive from ``AscError`` (a ``ValueError``) and optionally carry the
0-based index and raw content of the line that caused them.
"""
from __future__ import annotations

from typing import Optional


class AscError(ValueError):
    """Base class for every failure raised while parsing an ASC export."""

    def __init__(
        self,
        message: str,
        line_number: Optional[int] = None,
        line: Optional[str] = None,
    ) -> None:
        self.message = message
        self.line_number = line_number
        self.line = line
        super().__init__(self._render())

    def _render(self) -> str:
        if self.line_number is None:
            return self.message
        if self.line is None:
            return f"{self.message} (at line {self.line_number})"
        return f"{self.message} (at line {self.line_number}, content: {self.line!r})"

    def with_context(self, line_number: int, line: Optional[str] = None) -> "AscError":
        """Return a copy of this error located at ``line_number``."""
        return type(self)(self.message, line_number=line_number, line=line)

    def __reduce__(self):
        # joblib workers pickle errors back to the parent process
        return (type(self), (self.message, self.line_number, self.line))


class NumericParseError(AscError):
    """A token expected to be a number failed plain and scientific parsing."""


class GrammarError(AscError):
    """A known keyword has too few tokens or an unknown enum literal."""


class StructuralError(AscError):
    """Record outside an open trial, or inconsistent event timing."""
