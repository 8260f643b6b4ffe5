"""CLI entry point. Both `sqlinspector` and `sqli` resolve here."""

from __future__ import annotations

import logging

import click

from sqlinspector.cli.config import config
from sqlinspector.cli.inspect import inspect_cmd


@click.group()
@click.version_option(package_name="sqlinspector")
@click.option("-v", "--verbose", is_flag=True, help="Log extraction steps to stderr.")
def main(verbose: bool) -> None:
    """sqlinspector: list the tables and columns a SQL statement touches."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


main.add_command(inspect_cmd)
main.add_command(config)
