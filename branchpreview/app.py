"""Application bootstrap with dependency injection."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .core.matching import match_directory, select_path
from .core.models import DeployOutcome, DeployRequest, ProvisionPath, describe_path
from .core.provisioner import Provisioner
from .errors import ValidationError
from .infrastructure.host import HostFilesystem
from .infrastructure.runner import CommandRunner
from .settings import Settings, load_settings

logger = logging.getLogger(__name__)


class PreviewApp:
    """Main application with dependency injection."""

    def __init__(
        self,
        settings: Settings,
        runner: Optional[CommandRunner] = None,
        host: Optional[HostFilesystem] = None,
        dry_run: bool = False,
    ):
        """Initialize the preview application.

        Args:
            settings: Resolved settings
            runner: Command runner (default: bash runner honouring dry_run)
            host: Host filesystem access (default: rooted at settings.hostdir)
            dry_run: If True, don't create directories or launch commands
        """
        self.settings = settings
        self.dry_run = dry_run
        self.runner = runner or CommandRunner(dry_run=dry_run)
        self.host = host or HostFilesystem(settings.hostdir, dry_run=dry_run)
        self.provisioner = Provisioner(settings, self.host, self.runner)

    @classmethod
    def from_config(cls, config_path: Path, **kwargs) -> PreviewApp:
        """Create app from a settings file.

        Args:
            config_path: Path to JSON settings
            **kwargs: Additional arguments to pass to __init__

        Returns:
            PreviewApp instance
        """
        return cls(settings=load_settings(config_path), **kwargs)

    def deploy(self, request: DeployRequest) -> DeployOutcome:
        """Match the branch against the host and provision accordingly.

        Raises:
            ValidationError: for a missing or path-like refslug, or an unknown
                project name
            IOFailure: for filesystem failures
            CommandFailure: for failing external commands
        """
        if not request.ref_slug:
            raise ValidationError("refslug is required")
        if Path(request.ref_slug).name != request.ref_slug or request.ref_slug in {".", ".."}:
            raise ValidationError(f"refslug must be a single directory name: {request.ref_slug!r}")
        if not self.settings.is_known_project(request.project_name):
            known = ", ".join(self.settings.projects) or "<none>"
            raise ValidationError(
                f"Unknown project name: {request.project_name!r} (expected one of: {known})"
            )

        directories = self.host.list_directories()
        match = match_directory(request.ref_slug, directories, self.settings.marker)
        path = select_path(match)
        logger.info("%s: %s", request.ref_slug, describe_path(path, match))

        history_start = len(self.runner.history)
        if path is ProvisionPath.FRESH:
            created = self.provisioner.provision_fresh(request)
            target = self.host.branch_path(request.ref_slug)
        else:
            created = self.provisioner.provision_reuse(request, match)
            target = self.host.branch_path(match.matched_directory or request.ref_slug)

        return DeployOutcome(
            path=path,
            match=match,
            target=target,
            commands=tuple(result.command for result in self.runner.history[history_start:]),
            created=tuple(created),
        )
