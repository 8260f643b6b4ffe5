"""Single-pass extraction of tables, aliases and columns from a statement tree.

Note that in some cases it is not possible to resolve which table a column
belongs to. For example:

    SELECT address, name FROM table1 JOIN table2 ON table1.id = table2.id

`address` and `name` could come from either table, and without the actual
database schema there is no way to tell. Such columns are kept bare.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlglot import exp

from sqlinspector._types import QueryType
from sqlinspector.classify import Classification, insert_table, qualified_name, update_table

logger = logging.getLogger(__name__)

WILDCARD = "*"

# Nodes a `*` can hang from and still be a projection (COUNT(*) is not one).
_PROJECTION_PARENTS = (exp.Select, exp.Returning)


@dataclass
class Accumulator:
    """Mutable state for one extraction call. Never shared or reused."""

    query_type: QueryType
    target_table: str = ""
    tables: set[str] = field(default_factory=set)
    aliases: dict[str, str] = field(default_factory=dict)
    columns: set[str] = field(default_factory=set)


class ExtractionVisitor:
    """Walk a statement tree once and fill an Accumulator.

    Qualified column references are held back until the walk completes and
    resolved against the alias map then: projections come before FROM in the
    tree, so an alias is usually seen after the columns that use it. Aliases
    are flat and unscoped; when one is bound twice the last binding wins.
    """

    def __init__(self, classification: Classification) -> None:
        self._acc = Accumulator(
            query_type=classification.query_type,
            target_table=classification.target_table,
        )
        self._references: list[tuple[str, str]] = []
        self._visited = False

    def visit(self, statement: exp.Expression) -> Accumulator:
        if self._visited:
            raise RuntimeError("ExtractionVisitor instances are single-use")
        self._visited = True

        for node in statement.walk(bfs=False):
            if isinstance(node, exp.Table):
                self._visit_table(node)
            elif isinstance(node, exp.Column):
                self._visit_column(node)
            elif isinstance(node, exp.Star):
                self._visit_star(node)
            elif isinstance(node, exp.Insert):
                self._visit_insert(node)

        self._resolve_references()
        logger.debug(
            "extracted %d tables, %d aliases, %d columns",
            len(self._acc.tables),
            len(self._acc.aliases),
            len(self._acc.columns),
        )
        return self._acc

    # -- Node handlers ----------------------------------------------------------

    def _visit_table(self, table: exp.Table) -> None:
        if not table.name:
            # Table-valued functions, e.g. FROM generate_series(1, 10)
            return
        name = qualified_name(table)
        self._acc.tables.add(name)

        alias = table.alias
        if alias:
            previous = self._acc.aliases.get(alias)
            if previous is not None and previous != name:
                logger.debug("alias %r rebound from %s to %s", alias, previous, name)
            self._acc.aliases[alias] = name

    def _visit_star(self, star: exp.Star) -> None:
        if isinstance(star.parent, _PROJECTION_PARENTS):
            self._acc.columns.add(WILDCARD)

    def _visit_insert(self, insert: exp.Insert) -> None:
        table = insert_table(insert)
        if table is None or not table.name:
            return
        target = qualified_name(table)
        for column in _insert_columns(insert, table):
            self._acc.columns.add(f"{target}.{column.name}")

    def _visit_column(self, column: exp.Column) -> None:
        name = WILDCARD if isinstance(column.this, exp.Star) else column.name
        qualifier = _qualifier(column)

        if not qualifier:
            update = _assignment_update(column)
            table = update_table(update) if update is not None else None
            if table is not None and table.name:
                self._acc.columns.add(f"{qualified_name(table)}.{name}")
            else:
                self._acc.columns.add(name)
            return

        self._references.append((qualifier, name))

    # -- Alias resolution -------------------------------------------------------

    def _resolve_references(self) -> None:
        for qualifier, name in self._references:
            table = self._acc.aliases.get(qualifier, qualifier)
            self._acc.columns.add(f"{table}.{name}")
        self._references.clear()


def _qualifier(column: exp.Column) -> str:
    return ".".join(part for part in (column.catalog, column.db, column.table) if part)


def _insert_columns(insert: exp.Insert, table: exp.Table) -> list[exp.Expression]:
    """Return the identifiers of an INSERT column list.

    INSERT INTO t (a, b) keeps the list in Schema(this=t, expressions=[a, b]).
    With a target alias (Postgres INSERT INTO t AS x (a, b)) the list ends up
    on the alias instead: Table(alias=TableAlias(this=x, columns=[a, b])).
    """
    if isinstance(insert.this, exp.Schema):
        return list(insert.this.expressions)
    alias = table.args.get("alias")
    if isinstance(alias, exp.TableAlias):
        return list(alias.columns)
    return []


def _assignment_update(column: exp.Column) -> exp.Update | None:
    """Return the UPDATE when `column` sits directly on either side of a SET item.

    UPDATE t SET a = b parses as Update(expressions=[EQ(this=a, expression=b)]).
    The multi-column form SET (a, b) = (c, d) wraps each side in a Tuple.
    Columns nested deeper (SET a = b + 1) or outside SET (WHERE) return None.
    """
    side: exp.Expression = column
    if isinstance(side.parent, exp.Tuple):
        side = side.parent
    eq = side.parent
    if not isinstance(eq, exp.EQ) or side.arg_key not in ("this", "expression"):
        return None
    update = eq.parent
    if isinstance(update, exp.Update) and eq.arg_key == "expressions":
        return update
    return None
