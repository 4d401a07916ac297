"""Docker service for abstracting daemon operations.

One ``DockerService`` is shared by every container of a test run. Calls go
through the blocking docker-py low-level API and are pushed onto worker
threads with ``asyncio.to_thread``, so several containers can be started
and awaited concurrently from one event loop.
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Optional

import docker
import docker.errors
import requests.exceptions

from ..core.constants import FIXTURE_LABEL
from .exceptions import ContainerNotFoundError, DaemonError

if TYPE_CHECKING:
    from ..models.container import CleanupContainer

logger = logging.getLogger(__name__)


class DockerService:
    """Async facade over a shared Docker client."""

    def __init__(self, client: Optional[docker.DockerClient] = None):
        """Initialize Docker service and test connection."""
        try:
            self.client = client or docker.from_env()
            self.client.ping()
        except docker.errors.DockerException as e:
            if "connection refused" in str(e).lower() or "cannot connect" in str(e).lower():
                raise DaemonError(
                    "Docker daemon is not running. Please start Docker Desktop or the Docker service."
                ) from e
            else:
                raise DaemonError(f"Failed to connect to Docker: {e}") from e

    @property
    def api(self):
        """Low-level API client of the shared connection."""
        return self.client.api

    async def start_container(self, name: str) -> None:
        """Issue the start command for a container.

        Daemon errors are deliberately left untranslated so callers can tell
        a missing container apart from other failures.

        Args:
            name: Container name

        Raises:
            docker.errors.NotFound: If the daemon does not know the container
            docker.errors.APIError: For any other daemon failure
            requests.exceptions.RequestException: If the daemon cannot be reached
        """
        await asyncio.to_thread(self.api.start, name)
        logger.debug(f"Start acknowledged for container {name}")

    async def inspect_container(self, container_id: str) -> dict[str, Any]:
        """Inspect a container.

        Args:
            container_id: Container ID or name

        Returns:
            The daemon's inspect payload

        Raises:
            ContainerNotFoundError: If container not found
            DaemonError: If inspection fails
        """
        try:
            return await asyncio.to_thread(self.api.inspect_container, container_id)
        except docker.errors.NotFound as e:
            raise ContainerNotFoundError(f"Container '{container_id}' not found") from e
        except docker.errors.APIError as e:
            raise DaemonError(f"Failed to inspect container: {e}") from e
        except requests.exceptions.RequestException as e:
            raise DaemonError(f"Failed to inspect container: {e}") from e

    async def container_logs(
        self, container_id: str, stdout: bool = True, stderr: bool = False
    ) -> str:
        """Fetch everything a container has logged so far.

        Args:
            container_id: Container ID or name
            stdout: Include standard output
            stderr: Include standard error

        Returns:
            Decoded log output

        Raises:
            ContainerNotFoundError: If container not found
            DaemonError: If fetching logs fails
        """
        try:
            output = await asyncio.to_thread(
                self.api.logs,
                container_id,
                stdout=stdout,
                stderr=stderr,
                stream=False,
            )
        except docker.errors.NotFound as e:
            raise ContainerNotFoundError(f"Container '{container_id}' not found") from e
        except docker.errors.APIError as e:
            raise DaemonError(f"Failed to read container logs: {e}") from e
        except requests.exceptions.RequestException as e:
            raise DaemonError(f"Failed to read container logs: {e}") from e

        if isinstance(output, bytes):
            return output.decode('utf-8', errors='replace')
        return output

    async def create_container(
        self,
        image: str,
        name: Optional[str] = None,
        command: Optional[str] = None,
        environment: Optional[dict[str, str]] = None,
        labels: Optional[dict[str, str]] = None,
    ) -> str:
        """Create a container without starting it.

        Args:
            image: Image name
            name: Container name
            command: Command to run
            environment: Environment variables
            labels: Extra container labels

        Returns:
            The daemon-issued container identifier

        Raises:
            DaemonError: If creation fails
        """
        all_labels = {FIXTURE_LABEL: "true"}
        all_labels.update(labels or {})
        try:
            response = await asyncio.to_thread(
                self.api.create_container,
                image=image,
                name=name,
                command=command,
                environment=environment,
                labels=all_labels,
            )
        except docker.errors.ImageNotFound as e:
            raise DaemonError(f"Image '{image}' not found") from e
        except docker.errors.APIError as e:
            raise DaemonError(f"Failed to create container: {e}") from e
        except requests.exceptions.RequestException as e:
            raise DaemonError(f"Failed to create container: {e}") from e

        container_id = response['Id']
        logger.info(f"Created container {name or container_id} from {image}")
        return container_id

    async def remove_container(self, container: 'CleanupContainer', force: bool = True) -> None:
        """Remove a container and its anonymous volumes.

        Args:
            container: Cleanup record of the container to remove
            force: Kill the container first if it is running

        Raises:
            ContainerNotFoundError: If container not found
            DaemonError: If removal fails
        """
        try:
            await asyncio.to_thread(
                self.api.remove_container, container.id, v=True, force=force
            )
        except docker.errors.NotFound as e:
            raise ContainerNotFoundError(f"Container '{container.id}' not found") from e
        except docker.errors.APIError as e:
            raise DaemonError(f"Failed to remove container: {e}") from e
        except requests.exceptions.RequestException as e:
            raise DaemonError(f"Failed to remove container: {e}") from e
        logger.info(f"Removed container {container.id}")

    async def list_containers(self, labels: Optional[dict[str, str]] = None) -> list[dict[str, Any]]:
        """List fixture containers, including stopped ones.

        Args:
            labels: Additional label filters

        Returns:
            Container summaries as reported by the daemon

        Raises:
            DaemonError: If listing fails
        """
        label_filters = [f"{FIXTURE_LABEL}=true"]
        label_filters.extend(f"{k}={v}" for k, v in (labels or {}).items())
        try:
            return await asyncio.to_thread(
                self.api.containers, all=True, filters={'label': label_filters}
            )
        except docker.errors.APIError as e:
            raise DaemonError(f"Failed to list containers: {e}") from e
        except requests.exceptions.RequestException as e:
            raise DaemonError(f"Failed to list containers: {e}") from e
