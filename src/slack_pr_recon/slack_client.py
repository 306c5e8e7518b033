from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import TYPE_CHECKING, Dict, List, Optional

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

from .errors import PlatformMutationError, ReactionApplyError

if TYPE_CHECKING:
    from .ports import ChatPlatform

logger = logging.getLogger(__name__)


@dataclass
class SlackMessage:
    channel: str
    ts: str
    text: Optional[str]
    user: Optional[str] = None
    bot_id: Optional[str] = None
    subtype: Optional[str] = None
    reactions: List[Dict] = field(default_factory=list)

    @property
    def reaction_names(self) -> List[str]:
        return [r["name"] for r in self.reactions or [] if r.get("name")]

    @property
    def is_automated(self) -> bool:
        return bool(self.bot_id) or self.subtype == "bot_message"

    @property
    def sort_key(self) -> float:
        # Slack timestamps are like "1701985150.000200" (seconds.micros)
        return float(self.ts)


def _error_code(e: SlackApiError) -> str:
    return e.response.get("error", "") if e.response is not None else ""


class SlackAPI:
    """Thin wrapper over Slack WebClient for the calls a reconciliation run makes."""

    def __init__(self, token: str, client: Optional[WebClient] = None) -> None:
        self.client = client or WebClient(token=token)

    def fetch_recent_messages(self, channel_id: str, limit: int) -> List[SlackMessage]:
        """Return up to ``limit`` of the most recent messages, in Slack's order (newest first)."""
        try:
            resp = self.client.conversations_history(channel=channel_id, limit=limit)
        except SlackApiError as e:
            code = _error_code(e)
            raise PlatformMutationError(f"Failed to fetch history for channel {channel_id}: {code}", code) from e

        return [
            SlackMessage(
                channel=channel_id,
                ts=m["ts"],
                text=m.get("text"),
                user=m.get("user"),
                bot_id=m.get("bot_id"),
                subtype=m.get("subtype"),
                reactions=m.get("reactions", []),
            )
            for m in resp.get("messages", [])
        ]

    def add_reaction(self, channel_id: str, ts: str, name: str) -> None:
        try:
            self.client.reactions_add(channel=channel_id, timestamp=ts, name=name)
        except SlackApiError as e:
            code = _error_code(e)
            raise ReactionApplyError(f"Failed to add :{name}: to {channel_id}/{ts}: {code}", code) from e

    def get_permalink(self, channel_id: str, ts: str) -> str:
        try:
            resp = self.client.chat_getPermalink(channel=channel_id, message_ts=ts)
        except SlackApiError as e:
            code = _error_code(e)
            raise PlatformMutationError(f"Failed to get permalink for {channel_id}/{ts}: {code}", code) from e
        return resp["permalink"]

    def post_message(
        self,
        channel_id: str,
        text: str,
        thread_ts: Optional[str] = None,
        blocks: Optional[List[Dict]] = None,
    ) -> str:
        """Post a message (optionally as a thread reply) and return its ts."""
        try:
            resp = self.client.chat_postMessage(
                channel=channel_id,
                text=text,
                thread_ts=thread_ts,
                blocks=blocks,
            )
        except SlackApiError as e:
            code = _error_code(e)
            raise PlatformMutationError(f"Failed to post message to {channel_id}: {code}", code) from e
        return resp["ts"]


def add_reaction_once(slack: ChatPlatform, channel_id: str, ts: str, name: str) -> bool:
    """Add a reaction, treating "already_reacted" as success.

    Returns False when the reaction was already present.
    """
    try:
        slack.add_reaction(channel_id, ts, name)
    except ReactionApplyError as e:
        if not e.is_duplicate:
            raise
        logger.debug("Reaction :%s: already present on %s/%s", name, channel_id, ts)
        return False
    return True
