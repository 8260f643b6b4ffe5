"""The `inspect` command: report the tables and columns a statement references."""

from __future__ import annotations

import json

import click
from sqlglot.dialects.dialect import Dialect

from sqlinspector import inspect as inspect_sql
from sqlinspector.config import OUTPUT_FORMATS, ConfigError, load_config
from sqlinspector.errors import InspectorError
from sqlinspector.render import render_error_json, render_error_text, render_json, render_text


def _read_sql(sql: str | None, from_stdin: bool) -> str:
    """Take the statement from the SQL argument or from piped stdin, never both."""
    if from_stdin:
        if sql:
            raise click.UsageError(
                "SQL argument and --from-stdin given; pass the statement once, not both."
            )
        stdin = click.get_text_stream("stdin")
        if stdin.isatty():
            raise click.UsageError("--from-stdin expects a statement piped in, not a terminal.")
        text = stdin.read().strip()
        if not text:
            raise click.UsageError("--from-stdin: no statement on stdin.")
        return text
    if not sql:
        raise click.UsageError("Missing argument 'SQL'. Pass a statement or use --from-stdin.")
    return sql


@click.command("inspect")
@click.argument("sql", required=False)
@click.option("--from-stdin", is_flag=True, help="Read SQL from stdin.")
@click.option("--dialect", default=None, help="SQL dialect (postgres, mysql, bigquery, etc.)")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(list(OUTPUT_FORMATS)),
    default=None,
    help="Output format (default from config, else text).",
)
def inspect_cmd(
    sql: str | None,
    from_stdin: bool,
    dialect: str | None,
    output_format: str | None,
) -> None:
    """Extract tables, columns, query type and target table from SQL."""
    text = _read_sql(sql, from_stdin)

    try:
        defaults = load_config()
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
    dialect = dialect or defaults["dialect"]
    output_format = output_format or defaults["format"] or "text"

    if dialect:
        try:
            Dialect.get_or_raise(dialect)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="'--dialect'") from e

    try:
        result = inspect_sql(text, dialect=dialect)
    except InspectorError as e:
        if output_format == "json":
            click.echo(json.dumps(render_error_json(e), indent=2))
        else:
            click.echo(render_error_text(e))
        raise SystemExit(1) from e

    if output_format == "json":
        click.echo(json.dumps(render_json(result), indent=2))
    else:
        click.echo(render_text(result))
