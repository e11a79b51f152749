"""Listing of databases and tables through the ``mysql`` client."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from .commands import CommandError, CommandRunner
from .config import AppConfig
from .errors import EnumerationError, TableEnumerationError

LOGGER = logging.getLogger(__name__)


def table_header(database: str) -> str:
    """Column header ``show tables`` prints for *database*."""
    return f"Tables_in_{database}"


@dataclass
class Enumerator:
    config: AppConfig
    runner: CommandRunner = field(default_factory=CommandRunner)
    logger: logging.Logger = LOGGER

    def list_databases(self) -> List[str]:
        try:
            output = self._query("show databases;")
        except CommandError as exc:
            raise EnumerationError(f"Cannot list databases: {exc}") from exc
        databases = _split_names(output)
        self.logger.info("Found %d databases.", len(databases))
        return databases

    def list_tables(self, database: str) -> List[str]:
        try:
            output = self._query(f"use `{database}`; show tables;")
        except CommandError as exc:
            raise TableEnumerationError(f"Cannot list tables of '{database}': {exc}") from exc
        header = table_header(database)
        return [name for name in _split_names(output) if name != header]

    # ------------------------------------------------------------------
    def _query(self, statement: str) -> str:
        return self.runner.run(
            [self.config.tools.mysql, self.config.defaults_file_option, "--skip-column-names"],
            input=statement,
            timeout=self.config.command_timeout,
        )


def _split_names(output: str) -> List[str]:
    return [line.strip() for line in output.splitlines() if line.strip()]


__all__ = ["Enumerator", "table_header"]
