"""The per-channel summary thread: one header plus one reply per open message."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .ports import ChatPlatform
from .slack_client import add_reaction_once

ALL_RESOLVED_HEADER = "All PRs are resolved! :tada:"
OPEN_ITEMS_HEADER = "The following PRs are still open :thread:"


@dataclass
class SummaryItem:
    permalink: str
    reactions: List[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return f"<{self.permalink}|Original message>"


def header_text(open_count: int) -> str:
    return ALL_RESOLVED_HEADER if open_count == 0 else OPEN_ITEMS_HEADER


def header_blocks(text: str) -> List[Dict]:
    return [
        {
            "type": "header",
            "text": {"type": "plain_text", "text": text, "emoji": True},
        }
    ]


def post_summary_thread(slack: ChatPlatform, channel_id: str, items: List[SummaryItem]) -> str:
    """Post the header, then each item as a threaded reply carrying its reactions.

    Returns the header ts. Any Slack failure propagates; replies already
    posted stay in place.
    """
    header = header_text(len(items))
    header_ts = slack.post_message(channel_id, header, blocks=header_blocks(header))
    if not items:
        return header_ts

    for item in items:
        reply_ts = slack.post_message(channel_id, item.text, thread_ts=header_ts)
        for name in item.reactions:
            add_reaction_once(slack, channel_id, reply_ts, name)

    return header_ts
