"""Custom exceptions for container fixtures."""


class FixtureError(Exception):
    """Base exception for all fixture-related errors."""

    pass


class DaemonError(FixtureError):
    """Exception raised for failures at the Docker daemon protocol level."""

    pass


class ContainerNotFoundError(DaemonError):
    """Exception raised when a Docker container is not found."""

    pass


class StartupError(FixtureError):
    """Exception raised when the daemon could not start a container it no longer knows about."""

    pass


class ReadinessError(FixtureError):
    """Exception raised when a readiness strategy gives up on a container."""

    pass


class ReadinessTimeoutError(ReadinessError):
    """Exception raised when a readiness strategy runs out of checks or time."""

    pass


class UnexpectedExitError(ReadinessError):
    """Exception raised when a container exits with an unexpected exit code."""

    def __init__(self, message: str, exit_code: int):
        super().__init__(message)
        self.exit_code = exit_code


class ContainerAlreadyStartedError(FixtureError):
    """Exception raised when start is invoked twice on the same pending container."""

    pass


class ConfigError(FixtureError):
    """Exception raised for invalid fixture configuration."""

    pass
