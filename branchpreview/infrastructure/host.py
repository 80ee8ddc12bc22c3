"""Host directory listing and creation."""

from __future__ import annotations

import logging
from pathlib import Path

from branchpreview.errors import IOFailure

logger = logging.getLogger(__name__)

DIRECTORY_MODE = 0o750


class HostFilesystem:
    """Reads and creates branch directories under the shared host root.

    Symlink policy: symlinked entries are not treated as branch directories.
    """

    def __init__(self, hostdir: Path, dry_run: bool = False) -> None:
        """Initialize host filesystem access.

        Args:
            hostdir: Root directory holding every branch directory
            dry_run: If True, report directory creation without doing it
        """
        self.hostdir = hostdir
        self.dry_run = dry_run

    def list_directories(self) -> list[str]:
        """Return branch directory names sorted by name.

        Raises:
            IOFailure: if the host root cannot be listed
        """
        try:
            entries = sorted(self.hostdir.iterdir(), key=lambda path: path.name)
        except OSError as exc:
            raise IOFailure(f"Cannot list host directory {self.hostdir}: {exc}") from exc
        names = [entry.name for entry in entries if entry.is_dir() and not entry.is_symlink()]
        for name in names:
            logger.debug("[%s]", name)
        return names

    def branch_path(self, name: str) -> Path:
        return self.hostdir / name

    def ensure_directory(self, path: Path) -> bool:
        """Create ``path`` unless it already exists.

        Returns:
            True if the directory was created (or would be, in dry-run mode)

        Raises:
            IOFailure: if creation fails
        """
        if path.is_dir():
            return False
        if self.dry_run:
            logger.info("[DRY RUN] Would create directory: %s", path)
            return True
        try:
            path.mkdir(mode=DIRECTORY_MODE)
        except FileExistsError as exc:
            if path.is_dir():
                return False
            raise IOFailure(f"Cannot create directory {path}: {exc}") from exc
        except OSError as exc:
            raise IOFailure(f"Cannot create directory {path}: {exc}") from exc
        logger.info("Create directory: %s", path)
        return True
