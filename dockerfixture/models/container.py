"""Container lifecycle models.

A container moves through three representations:

* ``PendingContainer``: created on the daemon, not yet confirmed ready.
* ``RunningContainer``: confirmed ready by its readiness strategy.
* ``CleanupContainer``: identifier-only record used to remove the container
  during teardown, derivable from either of the above at any time.
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from ipaddress import IPv4Address
from typing import TYPE_CHECKING, Optional, Union

import docker.errors
import requests.exceptions

from ..core.constants import UNSPECIFIED_IP
from ..services.exceptions import (
    ContainerAlreadyStartedError,
    DaemonError,
    StartupError,
)

if TYPE_CHECKING:
    from ..core.waitfor import WaitFor
    from ..services.docker_service import DockerService

logger = logging.getLogger(__name__)


class StartPolicy(Enum):
    """How external orchestration treats a start failure of this container."""
    RELAXED = "relaxed"
    STRICT = "strict"

    def aborts_run(self) -> bool:
        """Whether a start failure should abort the whole test run."""
        return self is StartPolicy.STRICT


@dataclass(frozen=True)
class CleanupContainer:
    """A container that must be removed during teardown."""
    id: str

    @classmethod
    def of(cls, container: Union['PendingContainer', 'RunningContainer']) -> 'CleanupContainer':
        """Create from a pending or running container."""
        return cls(id=str(container.id))


@dataclass(frozen=True)
class RunningContainer:
    """A container confirmed ready and available to the test body.

    The address is captured once, when the readiness strategy confirms the
    container, and never refreshed. A container that later exits keeps
    reporting its original address. Containers confirmed by an exit-based
    strategy report ``0.0.0.0``.
    """
    client: 'DockerService' = field(repr=False, compare=False)
    handle: str
    id: str
    name: str
    ip: IPv4Address = UNSPECIFIED_IP

    def to_cleanup(self) -> CleanupContainer:
        """Convert to a cleanup record."""
        return CleanupContainer(id=self.id)


def _not_found_error(error: docker.errors.NotFound) -> Exception:
    """Translate a daemon 404 on start into a fixture error."""
    payload = None
    if error.response is not None:
        payload = error.response.text
    if payload is None:
        payload = error.explanation
    if isinstance(payload, bytes):
        payload = payload.decode('utf-8', errors='replace')

    try:
        body = json.loads(payload)
    except (TypeError, ValueError) as e:
        return DaemonError(f"daemon json response decode failure: {e}")

    message = body.get('message') if isinstance(body, dict) else None
    if message is None:
        return StartupError(f"failed to start container due to `{payload}`")
    return StartupError(f"failed to start container due to `{message}`")


class PendingContainer:
    """A container created on the daemon but not yet confirmed ready.

    Instances are produced by whatever composes containers for a test run
    and are consumed by ``start``. Readiness strategies convert them into
    ``RunningContainer`` via ``into_running``.
    """

    def __init__(self, name, id, handle, start_policy: StartPolicy,
                 wait: 'WaitFor', client: 'DockerService'):
        """Initialize pending container."""
        self.client = client
        self.name = str(name)
        self.id = str(id)
        self.handle = str(handle)
        self.start_policy = start_policy
        self._wait: Optional['WaitFor'] = wait
        self._started = False

    def __repr__(self) -> str:
        return (f"PendingContainer(name={self.name!r}, id={self.id!r}, "
                f"handle={self.handle!r}, start_policy={self.start_policy})")

    @property
    def started(self) -> bool:
        """Whether start has been invoked on this container."""
        return self._started

    async def start(self) -> RunningContainer:
        """Start the container and wait for it to become ready.

        Returns:
            The running container produced by the readiness strategy

        Raises:
            ContainerAlreadyStartedError: If start was already invoked
            StartupError: If the daemon no longer knows the container
            DaemonError: For any other daemon failure
            ReadinessError: If the readiness strategy fails
        """
        if self._started:
            raise ContainerAlreadyStartedError(
                f"Container '{self.name}' has already been started"
            )
        self._started = True

        logger.info(f"Starting container {self.name} ({self.id})")
        try:
            await self.client.start_container(self.name)
        except docker.errors.NotFound as e:
            raise _not_found_error(e) from e
        except docker.errors.DockerException as e:
            raise DaemonError(f"failed to start container: {e}") from e
        except requests.exceptions.RequestException as e:
            raise DaemonError(f"failed to start container: {e}") from e

        wait, self._wait = self._wait, None
        logger.debug(f"Waiting for container {self.name} with {type(wait).__name__}")
        return await wait.wait_for_ready(self)

    def into_running(self, ip: IPv4Address = UNSPECIFIED_IP) -> RunningContainer:
        """Convert to a running container without contacting the daemon.

        Only readiness strategies should call this; they pass the queried
        address when the container is expected to be running.
        """
        return RunningContainer(
            client=self.client,
            handle=self.handle,
            id=self.id,
            name=self.name,
            ip=ip,
        )

    def to_cleanup(self) -> CleanupContainer:
        """Convert to a cleanup record."""
        return CleanupContainer(id=self.id)
