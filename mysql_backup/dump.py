"""mysqldump invocation and bzip2 compression of the resulting files."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .commands import CommandError, CommandRunner
from .config import AppConfig
from .enumerator import table_header
from .errors import CompressionError, DumpError
from .utils import ensure_directory

LOGGER = logging.getLogger(__name__)

COMPRESSED_SUFFIX = ".bz2"


@dataclass
class DumpExecutor:
    config: AppConfig
    runner: CommandRunner = field(default_factory=CommandRunner)
    logger: logging.Logger = LOGGER

    def dump_database(self, database: str, dest_dir: Path) -> Path:
        """Dump *database* to ``dest_dir/{database}.sql.bz2`` and return that path."""

        directory = ensure_directory(Path(dest_dir))
        dump_file = directory / f"{database}.sql"
        self._dump(self._dump_args(database), dump_file, database)
        return self._compress(dump_file)

    def dump_table(self, database: str, table: str, dest_dir: Path) -> Optional[Path]:
        """Dump one table to ``dest_dir/{database}/{database}.{table}.sql.bz2``.

        Returns ``None`` without touching the filesystem for the
        ``Tables_in_{database}`` header artifact.
        """

        if table == table_header(database):
            return None
        directory = ensure_directory(Path(dest_dir) / database)
        dump_file = directory / f"{database}.{table}.sql"
        self._dump(self._dump_args(database, table), dump_file, f"{database}.{table}")
        return self._compress(dump_file)

    # ------------------------------------------------------------------
    def _dump_args(self, database: str, table: Optional[str] = None) -> List[str]:
        args = [self.config.tools.mysqldump, self.config.defaults_file_option]
        # information_schema refuses LOCK TABLES even for root.
        if database in self.config.skip_lock_databases:
            args.append("--skip-lock-tables")
        args.append(database)
        if table is not None:
            args.append(table)
        return args

    def _dump(self, args: List[str], dump_file: Path, name: str) -> None:
        try:
            with dump_file.open("w", encoding="utf-8") as fh:
                self.runner.run(
                    args,
                    stdout=fh,
                    timeout=self.config.command_timeout,
                    description=f"dump {name}",
                )
        except CommandError as exc:
            raise DumpError(f"Dump of '{name}' failed: {exc}") from exc
        except OSError as exc:
            raise DumpError(f"Cannot write dump file '{dump_file}': {exc}") from exc

    def _compress(self, dump_file: Path) -> Path:
        compressed = dump_file.with_name(dump_file.name + COMPRESSED_SUFFIX)
        try:
            if compressed.exists():
                compressed.unlink()
            self.runner.run(
                [self.config.tools.bzip2, str(dump_file)],
                timeout=self.config.command_timeout,
                description="compress",
            )
        except (CommandError, OSError) as exc:
            raise CompressionError(f"Cannot compress '{dump_file}': {exc}") from exc
        self.logger.info("Wrote %s", compressed)
        return compressed


__all__ = ["COMPRESSED_SUFFIX", "DumpExecutor"]
