"""The immutable extraction result and its assembly from an Accumulator."""

from __future__ import annotations

from dataclasses import dataclass

from sqlinspector._types import QueryType
from sqlinspector.visitor import Accumulator


@dataclass(frozen=True)
class ExtractResult:
    columns: tuple[str, ...]
    tables: tuple[str, ...]
    query_type: QueryType
    target_table: str = ""  # Only set for INSERT and UPDATE

    def to_dict(self) -> dict:
        """Return the JSON-serializable shape handed to embedders."""
        return {
            "columns": list(self.columns),
            "tables": list(self.tables),
            "query_type": self.query_type.value,
            "target_table": self.target_table,
        }

    def __str__(self) -> str:
        return f"{list(self.tables)!r} {list(self.columns)!r}"


def assemble(acc: Accumulator) -> ExtractResult:
    """Freeze an Accumulator into a sorted, deduplicated ExtractResult."""
    return ExtractResult(
        columns=tuple(sorted(acc.columns)),
        tables=tuple(sorted(acc.tables)),
        query_type=acc.query_type,
        target_table=acc.target_table,
    )
