"""Helper utilities for the MySQL backup tool."""
from __future__ import annotations

import os
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

from .config import DEFAULT_TIMESTAMP_FORMAT
from .errors import BackupDirectoryError


def ensure_directory(path: Path) -> Path:
    """Create *path* (owner-only) if it does not exist and return it."""

    path = Path(path)
    try:
        path.mkdir(mode=0o700, parents=True, exist_ok=True)
    except OSError as exc:
        raise BackupDirectoryError(f"Cannot create directory '{path}': {exc}") from exc
    return path


def timestamp_label(dt: Optional[datetime] = None, fmt: str = DEFAULT_TIMESTAMP_FORMAT) -> str:
    dt = dt or datetime.now()
    return dt.strftime(fmt)


@contextmanager
def restricted_umask(mask: int) -> Iterator[None]:
    """Apply *mask* as the process umask for the duration of the block."""

    previous = os.umask(mask)
    try:
        yield
    finally:
        os.umask(previous)


__all__ = ["ensure_directory", "restricted_umask", "timestamp_label"]
