"""Main CLI entry point for dockerfixture."""

import click

from .commands.probe import probe
from .commands.clean import clean
from .commands.config import config


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, verbose):
    """dockerfixture - Disposable Docker containers for integration tests"""
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose


# Register commands
cli.add_command(probe)
cli.add_command(clean)
cli.add_command(config)


if __name__ == '__main__':
    cli()
