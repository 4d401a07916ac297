"""Shared helpers for CLI commands."""

import logging
from pathlib import Path
from typing import Optional

import click

from ..core.constants import DATA_DIR_NAME
from ..core.waitfor import ExitedWait, MessageWait, NoWait, RunningWait, WaitFor
from ..models.config import FixtureSettings
from ..utils.config_manager import ConfigManager

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

WAIT_CHOICES = ['none', 'running', 'exited', 'message']


def get_config_manager() -> ConfigManager:
    """Config manager for the current working directory."""
    return ConfigManager(Path.cwd() / DATA_DIR_NAME)


def configure_logging(verbose: bool, log_level: str = "WARNING"):
    """Configure root logging for a CLI invocation."""
    if verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, log_level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT)


def build_wait(kind: str, settings: FixtureSettings, pattern: Optional[str] = None) -> WaitFor:
    """Build the readiness strategy selected on the command line."""
    if kind == 'none':
        return NoWait()
    if kind == 'running':
        return RunningWait(settings.check_interval, settings.max_checks)
    if kind == 'exited':
        return ExitedWait(settings.check_interval, settings.max_checks)
    if kind == 'message':
        if not pattern:
            raise click.UsageError("--pattern is required with --wait message")
        return MessageWait(pattern, timeout=settings.message_timeout)
    raise click.UsageError(f"Unknown wait strategy: {kind}")
