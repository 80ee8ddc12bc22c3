"""Test helper utilities."""

from .fs import DEFAULT_SUBDIRS, HostFixture, SubdirSpec, build_branch_tree, build_host, write_config
from .runner import RecordingRunner

__all__ = [
    "DEFAULT_SUBDIRS",
    "HostFixture",
    "SubdirSpec",
    "build_branch_tree",
    "build_host",
    "write_config",
    "RecordingRunner",
]
