from __future__ import annotations

from typing import Dict, List, Optional, Tuple

import pytest

from slack_pr_recon.config import ReactionConfig
from slack_pr_recon.errors import NotFoundError, ReactionApplyError
from slack_pr_recon.github_client import PullRequestDetail
from slack_pr_recon.slack_client import SlackMessage


class FakeSlack:
    def __init__(self, messages: Optional[Dict[str, List[SlackMessage]]] = None) -> None:
        self.messages = messages or {}
        self.reactions: List[Tuple[str, str, str]] = []
        self.posts: List[Tuple[str, Optional[str], str, Optional[list]]] = []
        self._next_ts = 9000

    def fetch_recent_messages(self, channel_id: str, limit: int) -> List[SlackMessage]:
        return list(self.messages.get(channel_id, []))[:limit]

    def add_reaction(self, channel_id: str, ts: str, name: str) -> None:
        if (channel_id, ts, name) in self.reactions:
            raise ReactionApplyError("duplicate", "already_reacted")
        self.reactions.append((channel_id, ts, name))
        # Reflect the reaction on the stored message, like Slack would.
        for m in self.messages.get(channel_id, []):
            if m.ts == ts:
                m.reactions.append({"name": name, "count": 1})

    def get_permalink(self, channel_id: str, ts: str) -> str:
        return f"https://example.slack.com/archives/{channel_id}/p{ts.replace('.', '')}"

    def post_message(self, channel_id, text, thread_ts=None, blocks=None) -> str:
        self._next_ts += 1
        self.posts.append((channel_id, thread_ts, text, blocks))
        return f"{self._next_ts}.000100"


class FakeGitHub:
    def __init__(
        self,
        details: Optional[Dict[str, PullRequestDetail]] = None,
        reviews: Optional[Dict[str, List[str]]] = None,
    ) -> None:
        self.details = details or {}
        self.reviews = reviews or {}
        self.detail_calls: List[str] = []
        self.review_calls: List[str] = []

    def get_pull_request_detail(self, owner: str, repo: str, number: str) -> PullRequestDetail:
        key = f"{owner}/{repo}/{number}"
        self.detail_calls.append(key)
        if key not in self.details:
            raise NotFoundError(f"{key} not found")
        return self.details[key]

    def list_review_states(self, owner: str, repo: str, number: str) -> List[str]:
        key = f"{owner}/{repo}/{number}"
        self.review_calls.append(key)
        if key not in self.reviews:
            raise NotFoundError(f"{key} not found")
        return self.reviews[key]


def _make_message(ts: str, text: Optional[str], reactions=None, bot_id=None, channel="C1") -> SlackMessage:
    return SlackMessage(
        channel=channel,
        ts=ts,
        text=text,
        user=None if bot_id else "U1",
        bot_id=bot_id,
        reactions=[{"name": n, "count": 1} for n in (reactions or [])],
    )


@pytest.fixture
def fake_slack():
    """Factory for an in-memory Slack keyed by channel id."""
    return FakeSlack


@pytest.fixture
def fake_github():
    return FakeGitHub


@pytest.fixture
def make_message():
    return _make_message


@pytest.fixture
def reactions() -> ReactionConfig:
    return ReactionConfig(
        approved=["white_check_mark"],
        merged=["merged", "git-merged"],
        closed=["x"],
        changes_requested=["warning"],
    )
