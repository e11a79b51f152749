"""Shared fixtures: a configuration rooted in ``tmp_path`` and a scripted command runner."""

import bz2
from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest

from mysql_backup.commands import CommandError, CommandRunner, format_command
from mysql_backup.config import AppConfig, ServiceControl, ToolPaths


class FakeRunner(CommandRunner):
    """Stand-in for the mysql, mysqldump, bzip2 and service commands.

    ``databases`` maps database names to their tables. Commands are kept
    verbatim in ``commands``; ``calls`` holds their command lines without the
    credentials-file option. Individual commands can be made to fail through
    ``failures``, keyed by a substring of the command line.
    """

    def __init__(self, databases: Optional[Dict[str, List[str]]] = None):
        super().__init__()
        self.databases = databases if databases is not None else {}
        self.calls: List[str] = []
        self.commands: List = []
        self.failures: Dict[str, str] = {}
        self.on_call: Optional[Callable[[str], None]] = None

    def run(self, command, *, input=None, stdout=None, timeout=None, description=None):
        self.commands.append(command)
        if not isinstance(command, str):
            command = [arg for arg in command if not arg.startswith("--defaults-extra-file=")]
        line = format_command(command)
        if input:
            line = f"{line} <<< {input}"
        self.calls.append(line)
        if self.on_call is not None:
            self.on_call(line)
        for needle, message in self.failures.items():
            if needle in line:
                raise CommandError(message, returncode=1, stderr=message)

        program = Path(command[0]).name if not isinstance(command, str) else command
        if program == "mysql":
            return self._query(input)
        if program == "mysqldump":
            stdout.write(f"-- dump of {' '.join(command[1:])}\n")
            return ""
        if program == "bzip2":
            self._compress(Path(command[1]))
            return ""
        return ""

    def calls_matching(self, needle: str) -> List[str]:
        return [call for call in self.calls if needle in call]

    # ------------------------------------------------------------------
    def _query(self, statement: str) -> str:
        if statement.startswith("show databases"):
            return "".join(f"{name}\n" for name in self.databases)
        database = statement.split("`")[1]
        return "".join(f"{name}\n" for name in self.databases.get(database, []))

    @staticmethod
    def _compress(path: Path) -> None:
        target = path.with_name(path.name + ".bz2")
        if target.exists():
            raise CommandError(f"bzip2: Output file {target} already exists.", returncode=1)
        target.write_bytes(bz2.compress(path.read_bytes()))
        path.unlink()


@pytest.fixture
def credentials(tmp_path):
    path = tmp_path / "my.cnf"
    path.write_text("[client]\nuser=root\npassword=secret\n")
    return path


@pytest.fixture
def data_directory(tmp_path):
    datadir = tmp_path / "datadir"
    (datadir / "mysql").mkdir(parents=True)
    (datadir / "ibdata1").write_bytes(b"\x00" * 16)
    (datadir / "mysql" / "user.MYD").write_bytes(b"users")
    return datadir


@pytest.fixture
def config(tmp_path, credentials, data_directory):
    root = tmp_path / "backups"
    root.mkdir()
    return AppConfig(
        backup_root=root,
        data_directory=data_directory,
        credentials_file=credentials,
        require_root=False,
        tools=ToolPaths(mysql="/usr/bin/mysql", mysqldump="/usr/bin/mysqldump", bzip2="/bin/bzip2"),
        service=ServiceControl(stop_command="service mysql stop", start_command="service mysql start"),
    )


@pytest.fixture
def runner():
    return FakeRunner({"a": ["t1", "t2"], "b": []})
