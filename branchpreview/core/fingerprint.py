"""Commit fingerprint extraction from branch and directory names."""

from __future__ import annotations

from branchpreview.settings import DEFAULT_MARKER


def extract_fingerprint(value: str, marker: str = DEFAULT_MARKER) -> str:
    """Return the text after the last occurrence of ``marker`` in ``value``.

    Returns an empty string when the marker is absent or ends the value.
    Never raises.

    >>> extract_fingerprint("1-branch-ontest-de1234de")
    'de1234de'
    >>> extract_fingerprint("feature-no-marker")
    ''
    """
    if not marker:
        return ""
    _, found, tail = value.rpartition(marker)
    if not found:
        return ""
    return tail
