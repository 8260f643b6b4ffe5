"""Classify a parsed statement and find the table a mutation targets."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from sqlglot import exp

from sqlinspector._types import QueryType
from sqlinspector.errors import UnsupportedStatementError

logger = logging.getLogger(__name__)

_SELECT_TYPES = (exp.Select, exp.Union, exp.Intersect, exp.Except, exp.Subquery)
_DDL_TYPES = (exp.Create, exp.Drop, exp.Alter, exp.TruncateTable)


@dataclass(frozen=True)
class Classification:
    query_type: QueryType
    target_table: str = ""


def qualified_name(table: exp.Table) -> str:
    """Build catalog.db.table, keeping only the parts that are present."""
    return ".".join(part for part in (table.catalog, table.db, table.name) if part)


def insert_table(statement: exp.Insert) -> exp.Table | None:
    """Return the table an INSERT writes to.

    With a column list the table sits inside a Schema node:
    INSERT INTO t (a, b) -> Insert(this=Schema(this=Table, expressions=[a, b])).
    """
    target = statement.this
    if isinstance(target, exp.Schema):
        target = target.this
    return target if isinstance(target, exp.Table) else None


def update_table(statement: exp.Update) -> exp.Table | None:
    target = statement.this
    return target if isinstance(target, exp.Table) else None


def classify(statement: exp.Expression) -> Classification:
    """Classify a parsed SQL statement.

    Only the top-level kind counts: a DML statement hidden in a CTE does not
    change a SELECT into anything else. Anything that is not a SELECT (or set
    operation), INSERT, UPDATE or DELETE raises UnsupportedStatementError.
    """
    if isinstance(statement, _SELECT_TYPES):
        classification = Classification(QueryType.SELECT)
    elif isinstance(statement, exp.Insert):
        classification = Classification(QueryType.INSERT, _target_name(statement, insert_table))
    elif isinstance(statement, exp.Update):
        classification = Classification(QueryType.UPDATE, _target_name(statement, update_table))
    elif isinstance(statement, exp.Delete):
        classification = Classification(QueryType.DELETE)
    else:
        raise _unsupported(statement)

    logger.debug("classified %s statement as %s", statement.key, classification.query_type.value)
    return classification


def _target_name(
    statement: exp.Expression,
    find_table: Callable[[exp.Expression], exp.Table | None],
) -> str:
    table = find_table(statement)
    if table is None or not table.name:
        raise UnsupportedStatementError(
            f"{statement.key.upper()} without a table target",
            statement_kind=statement.key,
            notes=["the target must be a plain table reference"],
        )
    return qualified_name(table)


def _unsupported(statement: exp.Expression) -> UnsupportedStatementError:
    kind = statement.key
    if isinstance(statement, exp.Command) and statement.name:
        # SHOW, DESCRIBE and friends all land in Command; report the keyword.
        kind = statement.name.lower()
    notes = ["only SELECT, INSERT, UPDATE and DELETE statements are analysed"]
    if isinstance(statement, _DDL_TYPES):
        notes.append("schema-definition statements are not supported")
    return UnsupportedStatementError(
        f"unsupported statement: {kind.upper()}",
        statement_kind=kind,
        notes=notes,
    )
