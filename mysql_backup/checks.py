"""Precondition checks performed before any backup action."""
from __future__ import annotations

import os
from typing import Optional

from .config import AppConfig
from .errors import ConfigError, PrivilegeError, UsageError
from .modes import BackupMode


def check_credentials(config: AppConfig) -> None:
    credentials = config.credentials_path
    if not credentials.is_file():
        raise ConfigError(f"Cannot find required credentials file {credentials}")


def check_preconditions(config: AppConfig, mode: Optional[BackupMode]) -> BackupMode:
    """Validate the environment and the requested mode.

    The credentials file is checked first, whatever the mode, followed by the
    effective uid and finally the mode itself. ``help`` and a missing mode are
    reported as :class:`UsageError` so the caller prints the usage text.
    """

    check_credentials(config)
    if config.require_root and os.geteuid() != 0:
        raise PrivilegeError("This tool must be run as root.")
    if mode is None:
        raise UsageError("Expecting an argument, do not know what to do...")
    if mode is BackupMode.HELP:
        raise UsageError("")
    return mode


__all__ = ["check_credentials", "check_preconditions"]
