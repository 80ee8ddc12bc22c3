"""Match a branch against existing host directories by commit fingerprint."""

from __future__ import annotations

import logging
from typing import Iterable

from branchpreview.core.fingerprint import extract_fingerprint
from branchpreview.core.models import MatchResult, ProvisionPath
from branchpreview.settings import DEFAULT_MARKER

logger = logging.getLogger(__name__)


def match_directory(
    ref_slug: str,
    host_directories: Iterable[str],
    marker: str = DEFAULT_MARKER,
) -> MatchResult:
    """Find the first host directory whose fingerprint equals the branch's.

    Directories are scanned in the order given; the first hit wins. A branch
    or directory without a fingerprint never matches, so an unfingerprinted
    branch cannot pick up an unrelated unfingerprinted directory.

    Args:
        ref_slug: CI branch identifier
        host_directories: Directory names under the host root
        marker: Token preceding the fingerprint

    Returns:
        MatchResult; ``matched_directory`` and ``host_fingerprint`` are empty
        when nothing matched
    """
    branch_fingerprint = extract_fingerprint(ref_slug, marker)
    logger.debug("Branch [%s] fingerprint: %r", ref_slug, branch_fingerprint)
    if not branch_fingerprint:
        return MatchResult(matched=False)

    for name in host_directories:
        host_fingerprint = extract_fingerprint(name, marker)
        logger.debug("Host directory [%s] fingerprint: %r", name, host_fingerprint)
        if host_fingerprint and host_fingerprint == branch_fingerprint:
            logger.info(
                "Matched host directory [%s] for branch [%s] (%s)",
                name,
                ref_slug,
                branch_fingerprint,
            )
            return MatchResult(
                matched=True,
                matched_directory=name,
                host_fingerprint=host_fingerprint,
                branch_fingerprint=branch_fingerprint,
            )

    return MatchResult(matched=False, branch_fingerprint=branch_fingerprint)


def select_path(match: MatchResult) -> ProvisionPath:
    """Pick the provisioning flow for a match outcome."""
    if not match.branch_fingerprint:
        return ProvisionPath.FRESH
    if match.matched:
        return ProvisionPath.REUSE_MATCHED
    return ProvisionPath.REUSE_UNMATCHED
