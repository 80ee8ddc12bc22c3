"""Shell command execution with explicit working directories."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
import subprocess

from branchpreview.errors import CommandFailure, IOFailure

logger = logging.getLogger(__name__)

# Exit code reported when the command could not be launched at all.
DEFAULT_FAILED_CODE = 1


@dataclass(frozen=True)
class CommandResult:
    command: str
    cwd: Path
    stdout: str
    stderr: str
    returncode: int


class CommandRunner:
    """Runs shell commands through ``bash -c``, one at a time, to completion.

    Any non-zero exit raises CommandFailure. There is no timeout and no retry.
    """

    def __init__(self, shell: str = "bash", dry_run: bool = False) -> None:
        """Initialize runner.

        Args:
            shell: Shell used to interpret each command string
            dry_run: If True, log commands without launching them
        """
        self.shell = shell
        self.dry_run = dry_run
        self.history: list[CommandResult] = []

    def run(self, command: str, cwd: Path) -> CommandResult:
        """Run ``command`` inside ``cwd``.

        Raises:
            IOFailure: if ``cwd`` is not an existing directory
            CommandFailure: if the command exits non-zero or cannot start
        """
        logger.info("run command: %s (cwd=%s)", command, cwd)
        if self.dry_run:
            result = CommandResult(command=command, cwd=cwd, stdout="", stderr="", returncode=0)
            self.history.append(result)
            return result

        if not cwd.is_dir():
            raise IOFailure(f"Working directory does not exist: {cwd}")

        try:
            proc = subprocess.run(
                [self.shell, "-c", command],
                cwd=cwd,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            logger.error("Could not launch command: %s: %s", command, exc)
            raise CommandFailure(command, DEFAULT_FAILED_CODE, stderr=str(exc)) from exc

        result = CommandResult(
            command=command,
            cwd=cwd,
            stdout=proc.stdout,
            stderr=proc.stderr,
            returncode=proc.returncode,
        )
        self.history.append(result)
        logger.info(
            "command result, stdout: %s, stderr: %s, exitCode: %d",
            result.stdout,
            result.stderr,
            result.returncode,
        )
        if result.returncode != 0:
            raise CommandFailure(command, result.returncode, result.stdout, result.stderr)
        return result
