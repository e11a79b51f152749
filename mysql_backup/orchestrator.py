"""Sequencing of enumeration, dumps, snapshots, pointer update and purge."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .commands import CommandRunner
from .config import AppConfig
from .dump import DumpExecutor
from .enumerator import Enumerator
from .modes import BackupMode
from .pointer import CurrentPointer
from .purge import RetentionPurger
from .snapshot import SnapshotExecutor
from .utils import ensure_directory, restricted_umask, timestamp_label

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class BackupRun:
    root: Path
    label: str

    @property
    def path(self) -> Path:
        return self.root / self.label

    @property
    def databases_dir(self) -> Path:
        return self.path / "databases"

    @property
    def tables_dir(self) -> Path:
        return self.path / "tables"

    @property
    def bin_dir(self) -> Path:
        return self.path / "bin"


@dataclass
class BackupResult:
    mode: BackupMode
    run: Optional[BackupRun] = None
    files: List[Path] = field(default_factory=list)
    purged: List[str] = field(default_factory=list)


@dataclass
class BackupOrchestrator:
    config: AppConfig
    runner: CommandRunner = field(default_factory=CommandRunner)
    logger: logging.Logger = LOGGER

    def __post_init__(self) -> None:
        self.enumerator = Enumerator(self.config, self.runner)
        self.dumper = DumpExecutor(self.config, self.runner)
        self.snapshotter = SnapshotExecutor(self.config, self.runner)
        self.pointer = CurrentPointer(self.config)
        self.purger = RetentionPurger(self.config, self.pointer)

    def run(self, mode: BackupMode, now: Optional[datetime] = None) -> BackupResult:
        """Execute *mode*, stopping at the first failure.

        Dump-producing modes end by moving the CURRENT pointer to the new run;
        ``purge`` only removes old runs.
        """

        with restricted_umask(self.config.umask):
            if mode is BackupMode.PURGE:
                return BackupResult(mode=mode, purged=self.purger.purge(self.config.retention))
            if not mode.produces_backup:
                raise ValueError(f"Mode '{mode.value}' does not run a backup.")
            return self._backup(mode, now)

    # ------------------------------------------------------------------
    def _backup(self, mode: BackupMode, now: Optional[datetime]) -> BackupResult:
        run = BackupRun(
            root=Path(self.config.backup_root),
            label=timestamp_label(now, self.config.timestamp_format),
        )
        result = BackupResult(mode=mode, run=run)
        self.logger.info("Starting '%s' backup into '%s'.", mode.value, run.path)
        ensure_directory(run.path)

        if mode.dumps_databases or mode.dumps_tables:
            for database in self.enumerator.list_databases():
                if mode.dumps_databases:
                    result.files.append(self.dumper.dump_database(database, run.databases_dir))
                if mode.dumps_tables:
                    result.files.extend(self._dump_tables(database, run.tables_dir))

        if mode.snapshots_binaries:
            result.files.append(self.snapshotter.snapshot_binaries(run.bin_dir))

        self.pointer.set_current(run.label)
        return result

    def _dump_tables(self, database: str, dest_dir: Path) -> List[Path]:
        files = []
        for table in self.enumerator.list_tables(database):
            dumped = self.dumper.dump_table(database, table, dest_dir)
            if dumped is not None:
                files.append(dumped)
        return files


__all__ = ["BackupOrchestrator", "BackupResult", "BackupRun"]
