"""Clean command for dockerfixture."""

import asyncio

import click

from ...models.container import CleanupContainer
from ...services.docker_service import DockerService
from ...services.exceptions import DaemonError, FixtureError


async def remove_fixture_containers(service: DockerService, force: bool, echo=click.echo) -> int:
    """Remove every container carrying the fixture label.

    Returns:
        Number of containers removed
    """
    removed = 0
    for summary in await service.list_containers():
        name = (summary.get('Names') or [summary['Id']])[0].lstrip('/')
        if summary.get('State') == 'running' and not force:
            echo(f"Skipping running container: {name}")
            continue
        try:
            await service.remove_container(CleanupContainer(id=summary['Id']), force=force)
            echo(f"Removed container: {name}")
            removed += 1
        except DaemonError as e:
            echo(f"Failed to remove container {name}: {e}")
    return removed


@click.command()
@click.option('--force', '-f', is_flag=True, help='Force remove running containers')
@click.pass_context
def clean(ctx, force):
    """Remove leftover fixture containers"""
    try:
        service = DockerService()
        removed = asyncio.run(remove_fixture_containers(service, force))
    except FixtureError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    if removed > 0:
        click.echo(f"Removed {removed} fixture container(s)")
    else:
        click.echo("No fixture containers removed")
