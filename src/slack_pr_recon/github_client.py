from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from github import (
    Auth,
    BadCredentialsException,
    Github,
    GithubException,
    RateLimitExceededException,
    UnknownObjectException,
)

from .errors import AuthError, NotFoundError, RateLimitError, ResolutionFailure


@dataclass(frozen=True)
class PullRequestDetail:
    state: str  # "open" | "closed"
    merged: bool


def _translate(e: GithubException, what: str) -> ResolutionFailure:
    if isinstance(e, UnknownObjectException):
        return NotFoundError(f"{what} not found")
    if isinstance(e, RateLimitExceededException):
        return RateLimitError(f"GitHub rate limit exceeded while fetching {what}")
    if isinstance(e, BadCredentialsException):
        return AuthError(f"GitHub rejected the token while fetching {what}")
    return ResolutionFailure(f"GitHub error {e.status} while fetching {what}")


class GitHubAPI:
    """Read-only pull request lookups on top of PyGithub."""

    def __init__(self, token: str, base_url: Optional[str] = None, client: Optional[Github] = None) -> None:
        if client is None:
            kwargs = {"auth": Auth.Token(token)}
            if base_url:
                kwargs["base_url"] = base_url
            client = Github(**kwargs)
        self.client = client

    def _get_pull(self, owner: str, repo: str, number: str):
        # lazy repo: only the pull request itself costs a request
        return self.client.get_repo(f"{owner}/{repo}", lazy=True).get_pull(int(number))

    def get_pull_request_detail(self, owner: str, repo: str, number: str) -> PullRequestDetail:
        try:
            pr = self._get_pull(owner, repo, number)
            return PullRequestDetail(state=pr.state, merged=bool(pr.merged))
        except GithubException as e:
            raise _translate(e, f"{owner}/{repo}#{number}") from e

    def list_review_states(self, owner: str, repo: str, number: str) -> List[str]:
        """Return the state of every review on the pull request (e.g. "APPROVED")."""
        try:
            pr = self._get_pull(owner, repo, number)
            return [review.state for review in pr.get_reviews()]
        except GithubException as e:
            raise _translate(e, f"reviews for {owner}/{repo}#{number}") from e
