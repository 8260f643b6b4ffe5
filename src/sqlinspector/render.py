"""Render results and errors for terminal (text) and machine (JSON) output."""

from __future__ import annotations

from sqlinspector.errors import InspectorError, UnsupportedStatementError
from sqlinspector.result import ExtractResult


def render_json(result: ExtractResult) -> dict:
    """Render an ExtractResult as a JSON-serializable dict."""
    return result.to_dict()


def render_text(result: ExtractResult) -> str:
    """Render an ExtractResult as human-readable text."""
    lines = [
        f"query_type: {result.query_type.value}",
        f"target_table: {result.target_table or '-'}",
        f"tables: {', '.join(result.tables) or '-'}",
        f"columns: {', '.join(result.columns) or '-'}",
    ]
    return "\n".join(lines)


def render_error_json(error: InspectorError) -> dict:
    d: dict = {
        "code": str(error.code),
        "kind": error.kind,
        "message": error.message,
        "notes": error.notes,
    }
    if isinstance(error, UnsupportedStatementError) and error.statement_kind:
        d["statement_kind"] = error.statement_kind
    return {"error": d}


def render_error_text(error: InspectorError) -> str:
    lines = [f"error[{error.code}]: {error.message}"]
    for note in error.notes:
        lines.append(f"  = note: {note}")
    return "\n".join(lines)
