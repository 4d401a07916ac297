"""Core functionality for dockerfixture."""

from .waitfor import (
    ExitedWait,
    LogSource,
    MessageWait,
    NoWait,
    RunningWait,
    WaitFor,
)

__all__ = [
    'ExitedWait',
    'LogSource',
    'MessageWait',
    'NoWait',
    'RunningWait',
    'WaitFor',
]
