"""Binary snapshot of the MySQL data directory with the service stopped."""
from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from .commands import CommandError, CommandRunner
from .config import AppConfig
from .errors import ServiceStartError, ServiceStopError, SnapshotCopyError
from .utils import ensure_directory

LOGGER = logging.getLogger(__name__)


@dataclass
class SnapshotExecutor:
    config: AppConfig
    runner: CommandRunner = field(default_factory=CommandRunner)
    logger: logging.Logger = LOGGER

    def snapshot_binaries(self, dest_dir: Path) -> Path:
        """Copy the data directory into *dest_dir* while the service is down.

        Nothing is copied or started when the service refuses to stop. Once it
        has stopped, the service is started again whatever the outcome of the
        copy, and a failed start wins over a failed copy.
        """

        directory = ensure_directory(Path(dest_dir))
        service = self.config.service
        try:
            self.runner.run(
                service.stop_command,
                timeout=service.stop_timeout,
                description="stop service before snapshot",
            )
        except CommandError as exc:
            raise ServiceStopError(f"Cannot stop the database service: {exc}") from exc

        copy_error = None
        try:
            self._copy(directory)
        except SnapshotCopyError as exc:
            self.logger.debug("Copy failed, starting the service anyway: %s", exc)
            copy_error = exc

        try:
            self.runner.run(
                service.start_command,
                timeout=service.start_timeout,
                description="start service after snapshot",
            )
        except CommandError as exc:
            raise ServiceStartError(f"Cannot start the database service: {exc}") from (copy_error or exc)

        if copy_error is not None:
            raise copy_error
        return directory

    # ------------------------------------------------------------------
    def _copy(self, directory: Path) -> None:
        source = Path(self.config.data_directory)
        self.logger.info("Copying '%s' into '%s'.", source, directory)
        try:
            shutil.copytree(source, directory, symlinks=True, dirs_exist_ok=True)
        except (shutil.Error, OSError) as exc:
            raise SnapshotCopyError(f"Cannot copy '{source}' to '{directory}': {exc}") from exc


__all__ = ["SnapshotExecutor"]
