"""Configuration models and helpers for the MySQL backup tool."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from .errors import ConfigError

CONFIG_FILENAME = "/etc/mysql-backups.yaml"

DEFAULT_BACKUP_ROOT = "/var/mysql_backups"
DEFAULT_DATA_DIRECTORY = "/var/lib/mysql"
DEFAULT_RETENTION = 30
DEFAULT_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M"
DEFAULT_UMASK = 0o077


@dataclass
class ToolPaths:
    mysql: str = "/usr/bin/mysql"
    mysqldump: str = "/usr/bin/mysqldump"
    bzip2: str = "/bin/bzip2"

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> "ToolPaths":
        data = data or {}
        defaults = cls()
        return cls(
            mysql=str(data.get("mysql") or defaults.mysql),
            mysqldump=str(data.get("mysqldump") or defaults.mysqldump),
            bzip2=str(data.get("bzip2") or defaults.bzip2),
        )


@dataclass
class ServiceControl:
    stop_command: str = "/etc/init.d/mysql stop"
    start_command: str = "/etc/init.d/mysql start"
    stop_timeout: Optional[int] = None
    start_timeout: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> "ServiceControl":
        data = data or {}
        defaults = cls()
        return cls(
            stop_command=data.get("stop_command") or defaults.stop_command,
            start_command=data.get("start_command") or defaults.start_command,
            stop_timeout=_safe_int(data.get("stop_timeout")),
            start_timeout=_safe_int(data.get("start_timeout")),
        )


@dataclass
class AppConfig:
    backup_root: Path = Path(DEFAULT_BACKUP_ROOT)
    retention: int = DEFAULT_RETENTION
    data_directory: Path = Path(DEFAULT_DATA_DIRECTORY)
    credentials_file: Path = Path("~/.my.cnf")
    require_root: bool = True
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT
    umask: int = DEFAULT_UMASK
    pointer_name: str = "CURRENT"
    skip_lock_databases: List[str] = field(default_factory=lambda: ["information_schema"])
    command_timeout: Optional[int] = None
    tools: ToolPaths = field(default_factory=ToolPaths)
    service: ServiceControl = field(default_factory=ServiceControl)

    def validate(self) -> None:
        if self.retention < 0:
            raise ConfigError(f"retention must be non-negative, got {self.retention}.")
        if not self.pointer_name or "/" in self.pointer_name:
            raise ConfigError(f"Invalid pointer name '{self.pointer_name}'.")
        if not 0 <= self.umask <= 0o777:
            raise ConfigError(f"Invalid umask {oct(self.umask)}.")

    @property
    def credentials_path(self) -> Path:
        return Path(self.credentials_file).expanduser()

    @property
    def defaults_file_option(self) -> str:
        """Option pointing the MySQL client tools at the credentials file; must come first."""
        return f"--defaults-extra-file={self.credentials_path}"

    @classmethod
    def from_dict(cls, data: Dict) -> "AppConfig":
        defaults = cls()
        skip_lock = data.get("skip_lock_databases", defaults.skip_lock_databases)
        if not isinstance(skip_lock, list):
            raise ConfigError("skip_lock_databases must be a list of database names.")
        config = cls(
            backup_root=Path(data.get("backup_root") or defaults.backup_root),
            retention=_safe_int(data.get("retention"), default=defaults.retention),
            data_directory=Path(data.get("data_directory") or defaults.data_directory),
            credentials_file=Path(data.get("credentials_file") or defaults.credentials_file),
            require_root=_safe_bool(data.get("require_root"), default=defaults.require_root),
            timestamp_format=data.get("timestamp_format") or defaults.timestamp_format,
            umask=_parse_mode(data.get("umask"), default=defaults.umask),
            pointer_name=data.get("pointer_name") or defaults.pointer_name,
            skip_lock_databases=[str(name) for name in skip_lock],
            command_timeout=_safe_int(data.get("command_timeout")),
            tools=ToolPaths.from_dict(data.get("tools")),
            service=ServiceControl.from_dict(data.get("service")),
        )
        config.validate()
        return config


def _safe_int(value, default: Optional[int] = None) -> Optional[int]:
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Value '{value}' cannot be converted to an integer.")


def _safe_bool(value, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigError(f"Value '{value}' is not a boolean (use true or false without quotes).")
    return value


def _parse_mode(value, default: int) -> int:
    # PyYAML already turns 0077 into an int; quoted values such as "0o077" arrive as strings.
    if value is None:
        return default
    if isinstance(value, int):
        return value
    try:
        return int(str(value), 8)
    except ValueError:
        raise ConfigError(f"Value '{value}' is not an octal file mode.")


# ---------------------------------------------------------------------------
def load_config(path: Path = Path(CONFIG_FILENAME)) -> AppConfig:
    path = Path(path)
    if not path.exists():
        return AppConfig()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot read configuration '{path}': {exc}") from exc
    if not data:
        return AppConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration '{path}' must be a mapping.")
    return AppConfig.from_dict(data)


__all__ = [
    "AppConfig",
    "CONFIG_FILENAME",
    "ServiceControl",
    "ToolPaths",
    "load_config",
]
