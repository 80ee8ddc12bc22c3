"""Provisioning of branch directory trees.

Two flows exist:

- fresh: create ``<hostdir>/<refslug>``, initialize the primary project from
  the CI remote and clone every sidecar from its configured repository, then
  run each subdirectory's build action;
- reuse: when a previous build already produced a tree for the same commit
  fingerprint, rebuild only the primary project inside that tree.

Every command is given its working directory explicitly; the process working
directory is never changed.
"""

from __future__ import annotations

import logging
from pathlib import Path

from branchpreview.core.models import DeployRequest, MatchResult
from branchpreview.errors import ConfigError, IOFailure
from branchpreview.infrastructure.host import HostFilesystem
from branchpreview.infrastructure.runner import CommandRunner
from branchpreview.services.git import GitWorkspace
from branchpreview.settings import ProjectConfig, Settings

logger = logging.getLogger(__name__)


class Provisioner:
    """Builds branch trees on the host filesystem."""

    def __init__(self, settings: Settings, host: HostFilesystem, runner: CommandRunner) -> None:
        self.settings = settings
        self.host = host
        self.runner = runner

    def provision_fresh(self, request: DeployRequest) -> list[Path]:
        """Create the branch tree and provision every configured subdirectory.

        Safe to call again for the same branch: existing directories are kept.

        Returns:
            Directories created by this call
        """
        branch_path = self.host.branch_path(request.ref_slug)
        project_path = branch_path / request.project_name
        created = [
            path for path in (branch_path, project_path) if self.host.ensure_directory(path)
        ]

        for name, config in self.settings.subdirs.items():
            if name == request.project_name:
                workspace = GitWorkspace(project_path, self.runner)
                workspace.init_tracking(request.ref_slug, request.repo_url, request.commit_sha)
                self._build_project(workspace, config, request.commit_sha)
            else:
                self._provision_sidecar(branch_path, config)
        return created

    def provision_reuse(self, request: DeployRequest, match: MatchResult) -> list[Path]:
        """Rebuild the primary project inside the matched tree.

        Falls back to :meth:`provision_fresh` when nothing matched.
        """
        if not match.matched:
            return self.provision_fresh(request)

        project_path = self.host.branch_path(match.matched_directory) / request.project_name
        if not self.host.dry_run and not project_path.is_dir():
            raise IOFailure(f"Matched project directory does not exist: {project_path}")
        config = self.settings.project(request.project_name)
        logger.info("Rebuilding %s in %s", request.project_name, project_path)
        self._build_project(GitWorkspace(project_path, self.runner), config, request.commit_sha)
        return []

    def _build_project(self, workspace: GitWorkspace, config: ProjectConfig, commit: str) -> None:
        workspace.refresh(commit)
        self._run_action(workspace.path, config)

    def _provision_sidecar(self, branch_path: Path, config: ProjectConfig) -> None:
        if not config.repo:
            raise ConfigError(f"subdirs.{config.name}.repo is required to clone {config.name}")
        if GitWorkspace(branch_path / config.name, self.runner).is_repository():
            logger.info("Sidecar %s already cloned in %s", config.name, branch_path)
        else:
            GitWorkspace(branch_path, self.runner).clone(config.repo, config.name)
        self._run_action(branch_path / config.name, config)

    def _run_action(self, cwd: Path, config: ProjectConfig) -> None:
        for command in config.action:
            self.runner.run(command, cwd)
