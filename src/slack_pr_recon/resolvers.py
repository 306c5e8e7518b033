"""Per-run, memoized lookups of pull request status and review reactions.

Each resolver owns its cache, so a new run (or a new test) starts empty.
A status is frozen at its first successful lookup for the rest of the run.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .config import ReactionConfig
from .ports import CodeHost
from .references import PullRequestRef
from .status_rules import (
    REVIEW_APPROVED,
    REVIEW_CHANGES_REQUESTED,
    PullRequestStatus,
    status_from_detail,
)

logger = logging.getLogger(__name__)


class StatusResolver:
    """Resolve a PR to open/closed/merged; failures fall back to open."""

    def __init__(self, github: CodeHost, cache: Optional[Dict[str, str]] = None) -> None:
        self.github = github
        self.cache: Dict[str, str] = {} if cache is None else cache

    def resolve(self, ref: PullRequestRef) -> str:
        if ref.key in self.cache:
            return self.cache[ref.key]

        try:
            detail = self.github.get_pull_request_detail(ref.owner, ref.repo, ref.number)
        except Exception as e:
            # Not cached: the next lookup in this run tries again.
            logger.error("Failed to get status for %s: %s", ref.key, e)
            return PullRequestStatus.OPEN

        status = status_from_detail(detail.state, detail.merged)
        self.cache[ref.key] = status
        return status


class ReactionResolver:
    """Resolve a PR's reviews to the reactions configured for them."""

    def __init__(self, github: CodeHost, cache: Optional[Dict[str, List[str]]] = None) -> None:
        self.github = github
        self.cache: Dict[str, List[str]] = {} if cache is None else cache

    def resolve(self, ref: PullRequestRef, reactions: ReactionConfig) -> List[str]:
        if ref.key in self.cache:
            return list(self.cache[ref.key])

        try:
            states = set(self.github.list_review_states(ref.owner, ref.repo, ref.number))
        except Exception as e:
            logger.warning("Failed to get reviews for %s: %s", ref.key, e)
            states = set()

        review_reactions: List[str] = []
        if REVIEW_CHANGES_REQUESTED in states:
            review_reactions.append(reactions.canonical("changes_requested"))
        if REVIEW_APPROVED in states:
            review_reactions.append(reactions.canonical("approved"))

        # Failures are cached as [] too; reviews are decoration only.
        self.cache[ref.key] = review_reactions
        return list(review_reactions)
