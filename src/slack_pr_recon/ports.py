"""Ports (interfaces) consumed by the reconciliation logic.

``SlackAPI`` and ``GitHubAPI`` are the production bindings; tests pass
in-memory fakes with the same shape.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Protocol

from .github_client import PullRequestDetail
from .slack_client import SlackMessage


class ChatPlatform(Protocol):
    def fetch_recent_messages(self, channel_id: str, limit: int) -> List[SlackMessage]:
        ...

    def add_reaction(self, channel_id: str, ts: str, name: str) -> None:
        ...

    def get_permalink(self, channel_id: str, ts: str) -> str:
        ...

    def post_message(
        self,
        channel_id: str,
        text: str,
        thread_ts: Optional[str] = None,
        blocks: Optional[List[Dict]] = None,
    ) -> str:
        ...


class CodeHost(Protocol):
    def get_pull_request_detail(self, owner: str, repo: str, number: str) -> PullRequestDetail:
        ...

    def list_review_states(self, owner: str, repo: str, number: str) -> List[str]:
        ...
