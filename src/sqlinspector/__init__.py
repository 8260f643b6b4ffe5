"""sqlinspector: extract the tables and columns a SQL statement references."""

from __future__ import annotations

import logging

import sqlglot
from sqlglot import exp

from sqlinspector import errors
from sqlinspector._types import QueryType
from sqlinspector.classify import Classification, classify
from sqlinspector.errors import InspectorError, SqlSyntaxError, UnsupportedStatementError
from sqlinspector.result import ExtractResult, assemble
from sqlinspector.visitor import ExtractionVisitor

__all__ = [
    "Classification",
    "ExtractResult",
    "InspectorError",
    "QueryType",
    "SqlSyntaxError",
    "UnsupportedStatementError",
    "extract",
    "inspect",
    "parse_statement",
]

logger = logging.getLogger(__name__)

# sqlglot accepts a lone expression (`hello`, `1 + 1`, `foo bar`) as a parse
# result. Columns, literals, operators, functions and parentheses are all
# Conditions; aliases, identifiers, stars and tuples are not.
_EXPRESSION_TYPES = (exp.Condition, exp.Alias, exp.Identifier, exp.Star, exp.Tuple, exp.Var)


def parse_statement(sql: str, *, dialect: str | None = None) -> exp.Expression:
    """Parse exactly one SQL statement.

    Raises:
        SqlSyntaxError: the text is empty or does not parse.
        UnsupportedStatementError: the text holds more than one statement.
        ValueError: the dialect name is unknown.
    """
    if not sql.strip():
        raise SqlSyntaxError("SQL syntax error: empty statement")

    try:
        parsed = sqlglot.parse(sql, dialect=dialect)
    except sqlglot.errors.SqlglotError as e:
        raise SqlSyntaxError(f"SQL syntax error: {e}") from e

    # Filter out empty expressions (stray semicolons)
    statements = [s for s in parsed if s is not None]
    if not statements:
        raise SqlSyntaxError("SQL syntax error: no statement found")
    if len(statements) > 1:
        raise UnsupportedStatementError(
            f"multiple statements detected ({len(statements)})",
            code=errors.MULTIPLE_STATEMENTS,
            notes=["inspect one statement at a time"],
        )
    statement = statements[0]
    if isinstance(statement, _EXPRESSION_TYPES):
        raise SqlSyntaxError(
            "SQL syntax error: expected a statement, "
            f"found a bare {statement.key.upper()} expression",
            notes=["start the statement with a keyword such as SELECT, INSERT, UPDATE or DELETE"],
        )
    return statement


def extract(statement: exp.Expression) -> ExtractResult:
    """Run classification, the extraction walk and assembly on a parsed statement.

    Raises UnsupportedStatementError before any traversal when the statement is
    not a SELECT, INSERT, UPDATE or DELETE.
    """
    classification = classify(statement)
    acc = ExtractionVisitor(classification).visit(statement)
    return assemble(acc)


def inspect(sql: str, *, dialect: str | None = None) -> ExtractResult:
    """Extract tables, columns, query type and target table from SQL text.

    Args:
        sql: A single SQL statement.
        dialect: sqlglot dialect name (None = generic SQL).

    Returns:
        ExtractResult with sorted, deduplicated tables and columns.

    Raises:
        SqlSyntaxError: the text does not parse.
        UnsupportedStatementError: the statement kind is not analysed.
    """
    logger.debug("inspecting SQL (dialect=%s): %s", dialect, sql)
    return extract(parse_statement(sql, dialect=dialect))
