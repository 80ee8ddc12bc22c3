"""Core data models for branch preview deployments."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional


class ProvisionPath(str, Enum):
    """Which provisioning flow a deployment takes."""

    FRESH = "FRESH"
    REUSE_MATCHED = "REUSE_MATCHED"
    REUSE_UNMATCHED = "REUSE_UNMATCHED"


@dataclass(frozen=True)
class MatchResult:
    """Outcome of matching a branch against existing host directories."""

    matched: bool
    matched_directory: str = ""
    host_fingerprint: str = ""
    branch_fingerprint: str = ""


@dataclass(frozen=True)
class DeployRequest:
    """CI-supplied parameters for one deployment."""

    ref_slug: str
    repo_url: str
    commit_sha: str
    project_name: str


@dataclass(frozen=True)
class DeployOutcome:
    """Result of a deployment run."""

    path: ProvisionPath
    match: MatchResult
    target: Path
    commands: tuple[str, ...] = ()
    created: tuple[Path, ...] = ()

    def to_payload(self) -> dict[str, Any]:
        return {
            "path": self.path.value,
            "matched": self.match.matched,
            "matched_directory": self.match.matched_directory or None,
            "host_fingerprint": self.match.host_fingerprint or None,
            "branch_fingerprint": self.match.branch_fingerprint or None,
            "target": str(self.target),
            "created": [str(path) for path in self.created],
            "commands": list(self.commands),
        }


def describe_path(path: ProvisionPath, match: Optional[MatchResult] = None) -> str:
    if path is ProvisionPath.FRESH:
        return "branch has no fingerprint, provisioning a fresh tree"
    if path is ProvisionPath.REUSE_MATCHED and match is not None:
        return f"reusing {match.matched_directory} for fingerprint {match.branch_fingerprint}"
    return "no directory matches the branch fingerprint, provisioning a fresh tree"
