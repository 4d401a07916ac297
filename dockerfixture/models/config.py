"""Configuration models for dockerfixture."""

from pydantic import BaseModel, Field

from ..core.constants import (
    DEFAULT_CHECK_INTERVAL,
    DEFAULT_MAX_CHECKS,
    DEFAULT_MESSAGE_TIMEOUT,
)
from .container import StartPolicy


class FixtureSettings(BaseModel):
    """Defaults applied to fixture containers and readiness strategies."""
    check_interval: float = Field(default=DEFAULT_CHECK_INTERVAL, gt=0)
    max_checks: int = Field(default=DEFAULT_MAX_CHECKS, ge=1)
    message_timeout: float = Field(default=DEFAULT_MESSAGE_TIMEOUT, gt=0)
    start_policy: StartPolicy = StartPolicy.RELAXED
    log_level: str = "WARNING"
