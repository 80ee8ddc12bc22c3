"""Application settings and project configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
import os
from pathlib import Path
from typing import Any, Mapping, Optional

from branchpreview.errors import ConfigError


DEFAULT_MARKER = "ontest-"
_DEFAULT_CONFIG_NAME = "env.json"


@dataclass(frozen=True)
class ProjectConfig:
    """Build configuration for one subdirectory of a branch tree."""

    name: str
    action: tuple[str, ...] = ()
    repo: Optional[str] = None


@dataclass(frozen=True)
class Settings:
    hostdir: Path
    marker: str = DEFAULT_MARKER
    subdirs: Mapping[str, ProjectConfig] = field(default_factory=dict)
    projects: tuple[str, ...] = ()

    def project(self, name: str) -> ProjectConfig:
        try:
            return self.subdirs[name]
        except KeyError:
            raise ConfigError(f"No subdir configured for project: {name}") from None

    def is_known_project(self, name: str) -> bool:
        return name in self.projects and name in self.subdirs


def parse_action(raw: Any, *, name: str) -> tuple[str, ...]:
    """Normalize an action into an ordered tuple of shell commands.

    The comma-separated string form ("make deps,make build") and a JSON list
    of strings are both accepted. Blank entries are dropped.
    """
    if raw is None:
        return ()
    if isinstance(raw, str):
        parts = raw.split(",")
    elif isinstance(raw, list) and all(isinstance(item, str) for item in raw):
        parts = raw
    else:
        raise ConfigError(f"subdirs.{name}.action must be a string or a list of strings")
    return tuple(part.strip() for part in parts if part.strip())


def _parse_subdirs(raw: Any) -> dict[str, ProjectConfig]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError("subdirs must be a mapping of name to settings")
    subdirs: dict[str, ProjectConfig] = {}
    for name, entry in raw.items():
        if entry is None:
            entry = {}
        if not isinstance(entry, dict):
            raise ConfigError(f"subdirs.{name} must be a mapping")
        repo = entry.get("repo")
        if repo is not None and not isinstance(repo, str):
            raise ConfigError(f"subdirs.{name}.repo must be a string")
        subdirs[name] = ProjectConfig(
            name=name,
            action=parse_action(entry.get("action"), name=name),
            repo=repo or None,
        )
    return subdirs


def load_settings(path: Optional[Path]) -> Settings:
    """Load settings from JSON config file, with environment variable overrides.

    Priority order:
    1. Environment variables (BRANCHPREVIEW_HOSTDIR, BRANCHPREVIEW_MARKER)
    2. JSON config file

    Args:
        path: Path to JSON config file

    Returns:
        Settings object with resolved values

    Raises:
        ConfigError: if the file is missing, unreadable or invalid
    """
    if path is None or not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    try:
        json_settings = json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Malformed config file {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    if not isinstance(json_settings, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")

    hostdir = os.getenv("BRANCHPREVIEW_HOSTDIR") or json_settings.get("hostdir")
    if not hostdir or not isinstance(hostdir, str):
        raise ConfigError("hostdir is required")

    marker = os.getenv("BRANCHPREVIEW_MARKER") or json_settings.get("marker", DEFAULT_MARKER)
    if not marker or not isinstance(marker, str):
        raise ConfigError("marker must be a non-empty string")

    subdirs = _parse_subdirs(json_settings.get("subdirs"))

    projects = json_settings.get("projects")
    if projects is None:
        projects = list(subdirs)
    if not isinstance(projects, list) or not all(isinstance(p, str) for p in projects):
        raise ConfigError("projects must be a list of subdir names")
    unknown = [name for name in projects if name not in subdirs]
    if unknown:
        raise ConfigError(f"projects not configured under subdirs: {', '.join(unknown)}")

    return Settings(
        hostdir=Path(hostdir),
        marker=marker,
        subdirs=subdirs,
        projects=tuple(projects),
    )


def default_config_path() -> Path:
    env_path = os.getenv("BRANCHPREVIEW_CONFIG")
    if env_path:
        return Path(env_path)
    return Path.cwd() / _DEFAULT_CONFIG_NAME
