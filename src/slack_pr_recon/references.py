from __future__ import annotations

from dataclasses import dataclass
import re
from typing import List, Optional


# Slack wraps links as <https://...|label>; the pattern stops at the number so
# the surrounding markup never leaks into the match.
PULL_REQUEST_REGEX = re.compile(
    r"https://[^/\s<>|]+/(?P<owner>[\w.-]+)/(?P<repo>[\w.-]+)/pull/(?P<number>\d+)"
)


@dataclass(frozen=True)
class PullRequestRef:
    owner: str
    repo: str
    number: str

    @property
    def key(self) -> str:
        """Identity used for every per-run cache."""
        return f"{self.owner}/{self.repo}/{self.number}"

    def __str__(self) -> str:
        return self.key


def extract_pull_requests(text: Optional[str]) -> List[PullRequestRef]:
    """Return every pull request URL in ``text``, in order, duplicates included."""
    if not text:
        return []

    return [
        PullRequestRef(owner=m.group("owner"), repo=m.group("repo"), number=m.group("number"))
        for m in PULL_REQUEST_REGEX.finditer(text)
    ]
