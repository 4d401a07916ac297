"""Readiness strategies deciding when a started container is usable.

A strategy receives a ``PendingContainer`` right after the daemon
acknowledged the start command and owns it until it returns a
``RunningContainer`` or raises. Strategies never remove the container on
failure; teardown does that from a ``CleanupContainer`` taken beforehand.

The base contract carries no timeout. Each strategy documents its own.
"""

import asyncio
import logging
import re
from abc import ABC, abstractmethod
from enum import Enum
from ipaddress import IPv4Address
from typing import TYPE_CHECKING, Any, Optional, Union

from .constants import (
    DEFAULT_CHECK_INTERVAL,
    DEFAULT_MAX_CHECKS,
    DEFAULT_MESSAGE_CHECK_INTERVAL,
    DEFAULT_MESSAGE_TIMEOUT,
    TERMINAL_STATES,
    UNSPECIFIED_IP,
)
from ..services.exceptions import (
    ReadinessError,
    ReadinessTimeoutError,
    UnexpectedExitError,
)

if TYPE_CHECKING:
    from ..models.container import PendingContainer, RunningContainer

logger = logging.getLogger(__name__)


def container_ip(inspect: dict[str, Any]) -> IPv4Address:
    """Extract the container's IPv4 address from an inspect payload.

    Prefers the default bridge address and falls back to the first network
    that reports one. Containers without any address get ``0.0.0.0``.
    """
    settings = inspect.get('NetworkSettings') or {}
    address = settings.get('IPAddress')
    if not address:
        for network in (settings.get('Networks') or {}).values():
            if network and network.get('IPAddress'):
                address = network['IPAddress']
                break

    if not address:
        logger.warning(f"No IPv4 address reported for container {inspect.get('Id', '?')}")
        return UNSPECIFIED_IP
    return IPv4Address(address)


class WaitFor(ABC):
    """Policy deciding when a started container is ready."""

    @abstractmethod
    async def wait_for_ready(self, container: 'PendingContainer') -> 'RunningContainer':
        """Wait until the container is ready.

        Args:
            container: The started container, owned by the strategy until it returns

        Returns:
            The running container

        Raises:
            FixtureError: If the container never became ready
        """


class NoWait(WaitFor):
    """Ready as soon as the start command is acknowledged.

    Never contacts the daemon, so the address is ``0.0.0.0``.
    """

    async def wait_for_ready(self, container):
        return container.into_running()


class _PollingWait(WaitFor):
    """Polls ``inspect`` until a state predicate holds.

    Checks up to ``max_checks`` times, sleeping ``check_interval`` seconds
    between checks. No retries beyond that.
    """

    def __init__(self, check_interval: float = DEFAULT_CHECK_INTERVAL,
                 max_checks: int = DEFAULT_MAX_CHECKS):
        if check_interval < 0:
            raise ValueError("check_interval must not be negative")
        if max_checks < 1:
            raise ValueError("max_checks must be at least 1")
        self.check_interval = check_interval
        self.max_checks = max_checks

    async def _poll(self, container, condition: str) -> dict[str, Any]:
        for attempt in range(1, self.max_checks + 1):
            inspect = await container.client.inspect_container(container.id)
            state = inspect.get('State') or {}
            logger.debug(
                f"Container {container.name} check {attempt}/{self.max_checks}: "
                f"status={state.get('Status')}"
            )
            if self._satisfied(container, state):
                return inspect
            if attempt < self.max_checks:
                await asyncio.sleep(self.check_interval)

        raise ReadinessTimeoutError(
            f"Container '{container.name}' was not {condition} after "
            f"{self.max_checks} checks"
        )

    @abstractmethod
    def _satisfied(self, container, state: dict[str, Any]) -> bool:
        """Whether the container reached the awaited state."""


class RunningWait(_PollingWait):
    """Ready once the daemon reports the container as running.

    Raises ``ReadinessError`` if the container exits first and
    ``ReadinessTimeoutError`` once ``max_checks`` checks are exhausted.
    """

    def _satisfied(self, container, state):
        if state.get('Running'):
            return True
        if state.get('Status') in TERMINAL_STATES:
            raise ReadinessError(
                f"Container '{container.name}' stopped before becoming ready "
                f"(exit code {state.get('ExitCode')})"
            )
        return False

    async def wait_for_ready(self, container):
        inspect = await self._poll(container, "running")
        running = container.into_running(container_ip(inspect))
        logger.info(f"Container {running.name} is running at {running.ip}")
        return running


class ExitedWait(_PollingWait):
    """Ready once the container has exited.

    Useful for one-shot containers (migrations, seeders) the test depends on.
    With ``expected_exit_code`` set, any other exit code raises
    ``UnexpectedExitError``. The address is always ``0.0.0.0``.
    A container the daemon reports as ``dead`` raises ``ReadinessError``
    right away.
    """

    def __init__(self, check_interval: float = DEFAULT_CHECK_INTERVAL,
                 max_checks: int = DEFAULT_MAX_CHECKS,
                 expected_exit_code: Optional[int] = None):
        super().__init__(check_interval, max_checks)
        self.expected_exit_code = expected_exit_code

    def _satisfied(self, container, state):
        status = state.get('Status')
        if status == 'dead':
            raise ReadinessError(
                f"Container '{container.name}' is dead and will never exit cleanly"
            )
        return status == 'exited'

    async def wait_for_ready(self, container):
        inspect = await self._poll(container, "exited")
        exit_code = (inspect.get('State') or {}).get('ExitCode')
        if self.expected_exit_code is not None and exit_code != self.expected_exit_code:
            raise UnexpectedExitError(
                f"Container '{container.name}' exited with code {exit_code}, "
                f"expected {self.expected_exit_code}",
                exit_code=exit_code,
            )
        logger.info(f"Container {container.name} exited with code {exit_code}")
        return container.into_running()


class LogSource(Enum):
    """Log streams a MessageWait can watch."""
    STDOUT = "stdout"
    STDERR = "stderr"
    BOTH = "both"


class MessageWait(WaitFor):
    """Ready once a log line matches ``pattern``.

    Logs are re-read every ``check_interval`` seconds. Raises
    ``ReadinessTimeoutError`` when ``timeout`` seconds pass without a match,
    and ``ReadinessError`` as soon as the container is seen exited without
    having logged a match.
    """

    def __init__(self, pattern: Union[str, re.Pattern],
                 source: LogSource = LogSource.STDOUT,
                 timeout: float = DEFAULT_MESSAGE_TIMEOUT,
                 check_interval: float = DEFAULT_MESSAGE_CHECK_INTERVAL):
        if timeout < 0:
            raise ValueError("timeout must not be negative")
        if check_interval < 0:
            raise ValueError("check_interval must not be negative")
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        self.source = source
        self.timeout = timeout
        self.check_interval = check_interval

    def _matches(self, logs: str) -> bool:
        return any(self.pattern.search(line) for line in logs.splitlines())

    async def wait_for_ready(self, container):
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.timeout
        stdout = self.source in (LogSource.STDOUT, LogSource.BOTH)
        stderr = self.source in (LogSource.STDERR, LogSource.BOTH)

        while True:
            logs = await container.client.container_logs(
                container.id, stdout=stdout, stderr=stderr
            )
            if self._matches(logs):
                break

            inspect = await container.client.inspect_container(container.id)
            state = inspect.get('State') or {}
            if state.get('Status') in TERMINAL_STATES:
                raise ReadinessError(
                    f"Container '{container.name}' exited without logging a line "
                    f"matching '{self.pattern.pattern}'"
                )

            remaining = deadline - loop.time()
            if remaining <= 0:
                raise ReadinessTimeoutError(
                    f"No log line of container '{container.name}' matched "
                    f"'{self.pattern.pattern}' within {self.timeout}s"
                )
            await asyncio.sleep(min(self.check_interval, remaining))

        inspect = await container.client.inspect_container(container.id)
        running = container.into_running(container_ip(inspect))
        logger.info(f"Container {running.name} logged '{self.pattern.pattern}', ready at {running.ip}")
        return running
