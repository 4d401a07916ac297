"""Service layer for abstracting Docker daemon operations."""

from .docker_service import DockerService
from .exceptions import (
    FixtureError,
    DaemonError,
    ContainerNotFoundError,
    StartupError,
    ReadinessError,
    ReadinessTimeoutError,
    UnexpectedExitError,
    ContainerAlreadyStartedError,
    ConfigError,
)

__all__ = [
    "DockerService",
    "FixtureError",
    "DaemonError",
    "ContainerNotFoundError",
    "StartupError",
    "ReadinessError",
    "ReadinessTimeoutError",
    "UnexpectedExitError",
    "ContainerAlreadyStartedError",
    "ConfigError",
]
