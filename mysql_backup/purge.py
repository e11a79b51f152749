"""Retention based removal of old backup runs."""
from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .config import AppConfig
from .errors import PurgeDeletionError, PurgeRootError
from .pointer import CurrentPointer

LOGGER = logging.getLogger(__name__)


@dataclass
class RetentionPurger:
    config: AppConfig
    pointer: Optional[CurrentPointer] = None
    logger: logging.Logger = LOGGER

    def __post_init__(self) -> None:
        if self.pointer is None:
            self.pointer = CurrentPointer(self.config)

    def purge(self, retention: Optional[int] = None) -> List[str]:
        """Delete the oldest runs beyond *retention* and return their names.

        The run the pointer designates is kept on top of *retention* older
        runs and is never deleted. Runs are ordered by name, which is
        chronological for the timestamp labels this tool writes.
        """

        if retention is None:
            retention = self.config.retention
        root = Path(self.config.backup_root)
        try:
            entries = sorted(entry.name for entry in root.iterdir() if entry.name != self.config.pointer_name)
        except OSError as exc:
            raise PurgeRootError(f"Cannot access backup root '{root}': {exc}") from exc

        total = len(entries)
        if total <= retention + 1:
            self.logger.info("Nothing to purge: %d runs, retention %d.", total, retention)
            return []

        excess = (total - 1) - retention
        current = self.pointer.current_target()
        candidates = [name for name in entries if name != current]
        purged: List[str] = []
        for name in candidates[:excess]:
            self._remove(root / name)
            purged.append(name)
        self.logger.info("Purged %d entries from '%s'.", len(purged), root)
        return purged

    # ------------------------------------------------------------------
    def _remove(self, path: Path) -> None:
        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            else:
                path.unlink()
        except OSError as exc:
            raise PurgeDeletionError(f"Cannot delete '{path}': {exc}") from exc


__all__ = ["RetentionPurger"]
