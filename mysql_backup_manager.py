"""Command line interface for the MySQL backup tool."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional

from mysql_backup.checks import check_credentials, check_preconditions
from mysql_backup.config import CONFIG_FILENAME, AppConfig, load_config
from mysql_backup.errors import MySQLBackupError, UsageError
from mysql_backup.modes import BackupMode
from mysql_backup.orchestrator import BackupOrchestrator

PROG = "mysql-backups"

MODE_SUMMARIES = {
    BackupMode.DATABASES: "dump every database to {root}/{timestamp}/databases/{database}.sql.bz2",
    BackupMode.TABLES: "dump every table to {root}/{timestamp}/tables/{database}/{database}.{table}.sql.bz2",
    BackupMode.BOTH: "combine --databases with --tables",
    BackupMode.BIN: "stop mysql, copy its data directory to {root}/{timestamp}/bin, start mysql",
    BackupMode.ALL: "combine --both with --bin",
    BackupMode.PURGE: "delete the oldest backups beyond the retention count (default 30)",
    BackupMode.HELP: "show this help and exit",
}

EPILOG = """\
After every backup a symbolic link named CURRENT in {root} points to the
newest {timestamp} directory. The CURRENT link is not counted by --purge.
"""


class ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):
        raise UsageError(message)


def add_global_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", default=CONFIG_FILENAME, help="Path to the YAML configuration file.")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase logging verbosity.")


def parse_global_options(argv: List[str]) -> argparse.Namespace:
    """Recover --config and -v from a command line the full parser rejected."""
    parser = ArgumentParser(add_help=False)
    add_global_options(parser)
    try:
        return parser.parse_known_args(argv)[0]
    except UsageError:
        return argparse.Namespace(config=CONFIG_FILENAME, verbose=0)


def build_parser() -> argparse.ArgumentParser:
    parser = ArgumentParser(
        prog=PROG,
        description="Create bzip2 compressed mysqldumps and/or copies of the MySQL binaries.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    add_global_options(parser)

    group = parser.add_mutually_exclusive_group()
    for mode in BackupMode:
        group.add_argument(
            f"--{mode.value}",
            dest="mode",
            action="store_const",
            const=mode,
            help=MODE_SUMMARIES[mode],
        )
    return parser


def configure_logging(level: int) -> None:
    if level >= 2:
        log_level = logging.DEBUG
    elif level == 1:
        log_level = logging.INFO
    else:
        log_level = logging.WARNING
    logging.basicConfig(level=log_level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")


def handle_usage(parser: argparse.ArgumentParser, exc: UsageError) -> int:
    if str(exc):
        print(f"{PROG}: {exc}", file=sys.stderr)
    parser.print_help(sys.stderr)
    return exc.exit_code


def handle_run(config: AppConfig, mode: BackupMode) -> int:
    orchestrator = BackupOrchestrator(config)
    result = orchestrator.run(mode)
    if result.purged:
        print(f"Purged {' '.join(result.purged)}")
    return 0


def main(argv: Optional[Iterable[str]] = None) -> int:
    argv = list(argv) if argv is not None else sys.argv[1:]
    parser = build_parser()
    usage_error = None
    try:
        args = parser.parse_args(argv)
    except UsageError as exc:
        # The credentials file is checked before the arguments are judged.
        usage_error = exc
        args = parse_global_options(argv)

    configure_logging(args.verbose)
    try:
        config = load_config(Path(args.config))
        if usage_error is not None:
            check_credentials(config)
            raise usage_error
        mode = check_preconditions(config, args.mode)
        return handle_run(config, mode)
    except UsageError as exc:
        return handle_usage(parser, exc)
    except MySQLBackupError as exc:
        print(f"{PROG}: {exc}", file=sys.stderr)
        return exc.exit_code


if __name__ == "__main__":
    sys.exit(main())
