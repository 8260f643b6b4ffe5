"""Error taxonomy with stable, searchable codes.

Ranges:
- Q0001      - Syntax (the parser rejected the text)
- Q03xx      - Classification (valid SQL we do not analyse)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ErrorCode:
    value: int

    def __str__(self) -> str:
        return f"Q{self.value:04d}"


SYNTAX_ERROR = ErrorCode(1)

UNSUPPORTED_STATEMENT = ErrorCode(301)
MULTIPLE_STATEMENTS = ErrorCode(302)


class InspectorError(Exception):
    """Base class for every failure an extraction call can end in."""

    code: ErrorCode
    kind: str

    def __init__(self, message: str, *, notes: list[str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.notes: list[str] = list(notes or [])


class SqlSyntaxError(InspectorError):
    """The text does not parse as SQL. Wraps the parser's own error."""

    code = SYNTAX_ERROR
    kind = "syntax"


class UnsupportedStatementError(InspectorError):
    """The statement parsed but is not a SELECT, INSERT, UPDATE or DELETE."""

    code = UNSUPPORTED_STATEMENT
    kind = "unsupported_statement"

    def __init__(
        self,
        message: str,
        *,
        statement_kind: str | None = None,
        notes: list[str] | None = None,
        code: ErrorCode | None = None,
    ) -> None:
        super().__init__(message, notes=notes)
        self.statement_kind = statement_kind
        if code is not None:
            self.code = code
