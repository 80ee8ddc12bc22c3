"""Error taxonomy and exit code mapping for CLI."""

from __future__ import annotations


class BranchPreviewError(Exception):
    """Base error for deterministic CLI exit codes."""

    exit_code: int = 1


class ValidationError(BranchPreviewError):
    """Invalid user input or command usage."""

    exit_code = 2


class ConfigError(ValidationError):
    """Missing or malformed settings file."""


class RuntimeFailure(BranchPreviewError):
    """Unexpected runtime failure."""

    exit_code = 1


class IOFailure(BranchPreviewError):
    """Filesystem or I/O failure."""

    exit_code = 3


class CommandFailure(RuntimeFailure):
    """External command exited non-zero or could not be launched."""

    def __init__(
        self,
        command: str,
        returncode: int,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        super().__init__(
            f"command failed (exit {returncode}): {command}: {stderr.strip() or stdout.strip()}"
        )
        self.command = command
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


def exit_code_for_exception(exc: BaseException) -> int:
    """Resolve a deterministic exit code for an exception."""
    if isinstance(exc, BranchPreviewError):
        return exc.exit_code
    if isinstance(exc, OSError):
        return IOFailure.exit_code
    return RuntimeFailure.exit_code
