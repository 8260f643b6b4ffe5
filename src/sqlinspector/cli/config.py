"""The `config` command group: manage persistent defaults."""

from __future__ import annotations

import click

from sqlinspector.config import (
    DEFAULTS,
    ConfigError,
    config_path,
    get_setting,
    load_config,
    set_setting,
    unset_setting,
)


@click.group()
def config() -> None:
    """Manage defaults (~/.sqlinspector/config.toml)."""


@config.command("show")
def config_show() -> None:
    """Show the effective defaults."""
    try:
        values = load_config()
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
    for key, value in values.items():
        click.echo(f"  {key} = {value if value is not None else '(unset)'}")


@config.command("get")
@click.argument("key", type=click.Choice(list(DEFAULTS)))
def config_get(key: str) -> None:
    """Print one effective default (empty when unset)."""
    try:
        value = get_setting(key)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
    click.echo(value if value is not None else "")


@config.command("set")
@click.argument("key", type=click.Choice(list(DEFAULTS)))
@click.argument("value")
def config_set(key: str, value: str) -> None:
    """Set a default.

    \b
    Examples:
      sqlinspector config set dialect postgres
      sqlinspector config set format json
    """
    try:
        path = set_setting(key, value)
    except ConfigError as e:
        raise click.BadParameter(str(e), param_hint="'VALUE'") from e
    click.echo(f"Saved {key} = {value} to {path}")


@config.command("unset")
@click.argument("key", type=click.Choice(list(DEFAULTS)))
def config_unset(key: str) -> None:
    """Remove a default."""
    if not unset_setting(key):
        click.echo(f"'{key}' is not set in {config_path()}.", err=True)
        raise SystemExit(1)
    click.echo(f"Removed {key}.")
