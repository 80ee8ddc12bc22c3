"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from branchpreview.app import PreviewApp
from branchpreview.settings import load_settings
from tests.helpers.fs import DEFAULT_SUBDIRS, HostFixture, SubdirSpec, build_host
from tests.helpers.runner import RecordingRunner


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment overrides out of the tests."""
    for name in ("BRANCHPREVIEW_HOSTDIR", "BRANCHPREVIEW_MARKER", "BRANCHPREVIEW_CONFIG"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def host_factory(tmp_path: Path) -> Callable[..., HostFixture]:
    """Factory for host roots with pre-existing branch trees."""
    def _build(
        branch_names: list[str] | None = None,
        subdirs: tuple[SubdirSpec, ...] = DEFAULT_SUBDIRS,
        **config_extra,
    ) -> HostFixture:
        return build_host(tmp_path, branch_names or [], subdirs, **config_extra)

    return _build


@pytest.fixture
def recording_runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def make_app(recording_runner: RecordingRunner) -> Callable[[HostFixture], PreviewApp]:
    """Build a PreviewApp wired to the recording runner."""
    def _make(fixture: HostFixture, runner: RecordingRunner | None = None) -> PreviewApp:
        return PreviewApp(
            settings=load_settings(fixture.config_path),
            runner=runner or recording_runner,
        )

    return _make
