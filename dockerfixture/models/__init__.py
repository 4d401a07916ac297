"""Models for dockerfixture."""

from .config import FixtureSettings
from .container import (
    CleanupContainer,
    PendingContainer,
    RunningContainer,
    StartPolicy,
)

__all__ = [
    'CleanupContainer',
    'FixtureSettings',
    'PendingContainer',
    'RunningContainer',
    'StartPolicy',
]
