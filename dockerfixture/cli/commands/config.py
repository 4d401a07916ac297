"""Configuration management commands for dockerfixture."""

import json

import click

from ...models.config import FixtureSettings
from ...services.exceptions import ConfigError
from ..helpers import get_config_manager


@click.group()
def config():
    """Manage fixture settings"""
    pass


@config.command()
@click.pass_context
def show(ctx):
    """Display effective settings"""
    try:
        settings = get_config_manager().load_settings()
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    click.echo("Fixture Settings:")
    click.echo(json.dumps(settings.model_dump(mode='json'), indent=2))


@config.command(name='set')
@click.argument('key', type=click.Choice(list(FixtureSettings.model_fields)))
@click.argument('value')
@click.pass_context
def set_value(ctx, key, value):
    """Set a single setting"""
    try:
        get_config_manager().update_setting(key, value)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    click.echo(f"Set {key} to {value}")


@config.command()
def reset():
    """Reset settings to defaults"""
    get_config_manager().save_settings(FixtureSettings())
    click.echo("Fixture settings reset to defaults")
