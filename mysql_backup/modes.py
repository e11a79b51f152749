"""Backup modes selectable from the command line."""
from __future__ import annotations

from enum import Enum


class BackupMode(str, Enum):
    DATABASES = "databases"
    TABLES = "tables"
    BOTH = "both"
    BIN = "bin"
    ALL = "all"
    PURGE = "purge"
    HELP = "help"

    @property
    def dumps_databases(self) -> bool:
        return self in (BackupMode.DATABASES, BackupMode.BOTH, BackupMode.ALL)

    @property
    def dumps_tables(self) -> bool:
        return self in (BackupMode.TABLES, BackupMode.BOTH, BackupMode.ALL)

    @property
    def snapshots_binaries(self) -> bool:
        return self in (BackupMode.BIN, BackupMode.ALL)

    @property
    def produces_backup(self) -> bool:
        """Whether the mode writes a new backup run and moves the CURRENT pointer."""
        return self.dumps_databases or self.dumps_tables or self.snapshots_binaries


__all__ = ["BackupMode"]
