"""Error taxonomy of the MySQL backup tool.

Every failure the tool can report maps to one exception class, and every class
carries the process exit code the command line interface returns for it.
"""
from __future__ import annotations


class MySQLBackupError(Exception):
    """Base class for all expected backup failures."""

    exit_code = 1


class UsageError(MySQLBackupError):
    """Raised when the mode argument is missing, unknown or ``--help``."""

    exit_code = 1


class PrivilegeError(MySQLBackupError):
    """Raised when the tool is not executed with root privileges."""

    exit_code = 2


class ConfigError(MySQLBackupError):
    """Raised when the credentials file is missing or the configuration is invalid."""

    exit_code = 3


class EnumerationError(MySQLBackupError):
    """Raised when databases or tables cannot be listed."""

    exit_code = 4


class TableEnumerationError(EnumerationError):
    exit_code = 5


class BackupDirectoryError(MySQLBackupError):
    """Raised when a backup directory cannot be created."""

    exit_code = 6


class DumpError(MySQLBackupError):
    """Raised when mysqldump exits with a non-zero status."""

    exit_code = 7


class CompressionError(DumpError):
    """Raised when a dump file cannot be compressed."""


class ServiceStopError(MySQLBackupError):
    """Raised when the database service cannot be stopped."""

    exit_code = 8


class SnapshotCopyError(ServiceStopError):
    """Raised when the data directory cannot be copied after stopping the service."""


class ServiceStartError(MySQLBackupError):
    """Raised when the database service cannot be started again."""

    exit_code = 9


class PointerError(MySQLBackupError):
    """Raised when the CURRENT pointer cannot be updated."""

    exit_code = 10


class PointerRemovalError(PointerError):
    exit_code = 10


class PointerCreateError(PointerError):
    exit_code = 11


class PurgeError(MySQLBackupError):
    """Raised when purging old backups fails."""

    exit_code = 13


class PurgeRootError(PurgeError):
    exit_code = 12


class PurgeDeletionError(PurgeError):
    exit_code = 13


__all__ = [
    "BackupDirectoryError",
    "CompressionError",
    "ConfigError",
    "DumpError",
    "EnumerationError",
    "MySQLBackupError",
    "PointerCreateError",
    "PointerError",
    "PointerRemovalError",
    "PrivilegeError",
    "PurgeDeletionError",
    "PurgeError",
    "PurgeRootError",
    "ServiceStartError",
    "ServiceStopError",
    "SnapshotCopyError",
    "TableEnumerationError",
    "UsageError",
]
