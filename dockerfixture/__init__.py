"""dockerfixture - Disposable Docker containers for integration tests."""

__version__ = "0.1.0"

from .core.waitfor import (
    ExitedWait,
    LogSource,
    MessageWait,
    NoWait,
    RunningWait,
    WaitFor,
)
from .models.container import (
    CleanupContainer,
    PendingContainer,
    RunningContainer,
    StartPolicy,
)
from .services.docker_service import DockerService
from .services.exceptions import (
    ConfigError,
    ContainerAlreadyStartedError,
    ContainerNotFoundError,
    DaemonError,
    FixtureError,
    ReadinessError,
    ReadinessTimeoutError,
    StartupError,
    UnexpectedExitError,
)

__all__ = [
    'CleanupContainer',
    'ConfigError',
    'ContainerAlreadyStartedError',
    'ContainerNotFoundError',
    'DaemonError',
    'DockerService',
    'ExitedWait',
    'FixtureError',
    'LogSource',
    'MessageWait',
    'NoWait',
    'PendingContainer',
    'ReadinessError',
    'ReadinessTimeoutError',
    'RunningContainer',
    'RunningWait',
    'StartPolicy',
    'StartupError',
    'UnexpectedExitError',
    'WaitFor',
]
