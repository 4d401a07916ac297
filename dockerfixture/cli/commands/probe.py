"""Probe command: start one container and report when it is ready."""

import asyncio
import logging
import uuid

import click
from rich.console import Console
from rich.table import Table

from ...core.constants import CONTAINER_PREFIX
from ...core.waitfor import WaitFor
from ...models.container import PendingContainer, RunningContainer, StartPolicy
from ...services.docker_service import DockerService
from ...services.exceptions import ContainerNotFoundError, DaemonError, FixtureError
from ..helpers import WAIT_CHOICES, build_wait, configure_logging, get_config_manager

logger = logging.getLogger(__name__)


async def run_probe(service: DockerService, image: str, name: str, wait: WaitFor,
                    start_policy: StartPolicy, keep: bool = False) -> RunningContainer:
    """Create, start and (unless ``keep``) remove a single container.

    The cleanup record is taken before starting, so the container is removed
    even if start or the readiness wait fails.
    """
    container_id = await service.create_container(image, name=name)
    pending = PendingContainer(name, container_id, image, start_policy, wait, service)
    cleanup = pending.to_cleanup()
    try:
        running = await pending.start()
    except Exception:
        if not keep:
            try:
                await service.remove_container(cleanup)
            except DaemonError as e:
                logger.warning(f"Failed to remove container {cleanup.id} after failed start: {e}")
        raise

    if not keep:
        try:
            await service.remove_container(cleanup)
        except ContainerNotFoundError:
            pass  # Container was already gone
    return running


@click.command()
@click.argument('image')
@click.option('--wait', 'wait_kind', type=click.Choice(WAIT_CHOICES), default='running',
              show_default=True, help='Readiness strategy')
@click.option('--pattern', '-p', help='Log pattern for --wait message')
@click.option('--name', '-n', help='Container name (generated if omitted)')
@click.option('--keep', is_flag=True, help='Leave the container on the daemon')
@click.pass_context
def probe(ctx, image, wait_kind, pattern, name, keep):
    """Start a container from IMAGE and wait until it is ready"""
    console = Console()
    verbose = (ctx.obj or {}).get('verbose', False)

    try:
        settings = get_config_manager().load_settings()
        configure_logging(verbose, settings.log_level)
        wait = build_wait(wait_kind, settings, pattern)
        name = name or f"{CONTAINER_PREFIX}-{uuid.uuid4().hex[:8]}"

        service = DockerService()
        running = asyncio.run(
            run_probe(service, image, name, wait, settings.start_policy, keep)
        )
    except FixtureError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    table = Table(title="Container ready")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("ID", style="green")
    table.add_column("IP", style="white")
    table.add_row(running.name, running.id[:12], str(running.ip))
    console.print(table)
    if not keep:
        console.print("[yellow]Container removed.[/yellow]")
