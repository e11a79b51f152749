"""Thin wrapper around :mod:`subprocess` for the external tools the backup drives."""
from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import IO, Optional, Sequence, Union

LOGGER = logging.getLogger(__name__)

Command = Union[str, Sequence[str]]


class CommandError(Exception):
    """Raised when an external command cannot run or exits with a non-zero status."""

    def __init__(self, message: str, returncode: Optional[int] = None, stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


def format_command(command: Command) -> str:
    if isinstance(command, str):
        return command
    return " ".join(command)


@dataclass
class CommandRunner:
    """Run external commands synchronously and report failures as :class:`CommandError`."""

    logger: logging.Logger = LOGGER

    def run(
        self,
        command: Command,
        *,
        input: Optional[str] = None,
        stdout: Optional[IO] = None,
        timeout: Optional[int] = None,
        description: Optional[str] = None,
    ) -> str:
        """Execute *command* and return its standard output.

        A string command is handed to the shell, a sequence is executed
        directly. When *stdout* is given the output is written there instead of
        being captured, and an empty string is returned.
        """

        desc = f" ({description})" if description else ""
        printable = format_command(command)
        self.logger.info("Running command%s: %s", desc, printable)
        try:
            result = subprocess.run(
                command,
                shell=isinstance(command, str),
                input=input,
                stdout=stdout if stdout is not None else subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as exc:
            raise CommandError(f"Command '{printable}' exceeded the timeout of {timeout} seconds.") from exc
        except OSError as exc:
            raise CommandError(f"Command '{printable}' could not be started: {exc}") from exc

        output = result.stdout if stdout is None else ""
        stderr = (result.stderr or "").strip()
        if output:
            self.logger.debug("STDOUT: %s", output.strip())
        if stderr:
            self.logger.warning("STDERR: %s", stderr)
        if result.returncode != 0:
            raise CommandError(
                f"Command '{printable}' exited with status {result.returncode}: {stderr}",
                returncode=result.returncode,
                stderr=stderr,
            )
        return output or ""


__all__ = ["Command", "CommandError", "CommandRunner", "format_command"]
