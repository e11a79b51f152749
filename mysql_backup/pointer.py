"""The CURRENT symlink pointing at the latest backup run."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config import AppConfig
from .errors import PointerCreateError, PointerRemovalError

LOGGER = logging.getLogger(__name__)


@dataclass
class CurrentPointer:
    config: AppConfig
    logger: logging.Logger = LOGGER

    @property
    def path(self) -> Path:
        return Path(self.config.backup_root) / self.config.pointer_name

    def current_target(self) -> Optional[str]:
        """Name of the run the pointer designates, or ``None`` when unset."""
        if not self.path.is_symlink():
            return None
        return Path(os.readlink(self.path)).name

    def set_current(self, label: str) -> Path:
        # Remove-then-create: a crash in between leaves no pointer.
        path = self.path
        if path.is_symlink():
            try:
                path.unlink()
            except OSError as exc:
                raise PointerRemovalError(f"Cannot remove '{path}': {exc}") from exc
        try:
            path.symlink_to(label)
        except OSError as exc:
            raise PointerCreateError(f"Cannot create '{path}' -> '{label}': {exc}") from exc
        self.logger.info("%s now points to %s", path, label)
        return path


__all__ = ["CurrentPointer"]
