from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Set


@dataclass(frozen=True)
class PullRequestStatus:
    OPEN: str = "open"
    CLOSED: str = "closed"
    MERGED: str = "merged"


# Statuses that auto-resolve a message instead of listing it as open.
TERMINAL_STATUSES: Set[str] = {PullRequestStatus.CLOSED, PullRequestStatus.MERGED}

# GitHub review states (PullRequestReview.state values) that map to reactions.
REVIEW_CHANGES_REQUESTED: str = "CHANGES_REQUESTED"
REVIEW_APPROVED: str = "APPROVED"


def status_from_detail(state: str, merged: bool) -> str:
    """Normalize a GitHub pull request ``state``/``merged`` pair."""
    if state == "closed":
        return PullRequestStatus.MERGED if merged else PullRequestStatus.CLOSED
    return PullRequestStatus.OPEN


def combine_statuses(statuses: Iterable[str]) -> str:
    """Reduce the statuses of every PR in one message to a single decision.

    Precedence is open > merged > closed regardless of counts: one open PR
    keeps the whole message open.
    """
    distinct = set(statuses)
    if not distinct:
        raise ValueError("combine_statuses() requires at least one status")

    if PullRequestStatus.OPEN in distinct:
        return PullRequestStatus.OPEN
    if PullRequestStatus.MERGED in distinct:
        return PullRequestStatus.MERGED
    return PullRequestStatus.CLOSED
