"""Tests for the Slack WebClient wrapper."""

from unittest.mock import MagicMock

import pytest
from slack_sdk.errors import SlackApiError

from slack_pr_recon.errors import PlatformMutationError, ReactionApplyError
from slack_pr_recon.slack_client import SlackAPI, SlackMessage, add_reaction_once


def _api():
    client = MagicMock()
    return SlackAPI(token="xoxb-test", client=client), client


def _error(code):
    return SlackApiError("failed", {"ok": False, "error": code})


class TestFetchRecentMessages:
    def test_maps_messages(self):
        api, client = _api()
        client.conversations_history.return_value = {
            "messages": [
                {"ts": "2.0", "text": "hi", "user": "U1", "reactions": [{"name": "eyes", "count": 1}]},
                {"ts": "1.0", "bot_id": "B1", "subtype": "bot_message"},
            ]
        }
        messages = api.fetch_recent_messages("C1", 20)

        client.conversations_history.assert_called_once_with(channel="C1", limit=20)
        assert messages[0].reaction_names == ["eyes"]
        assert messages[0].is_automated is False
        assert messages[1].text is None
        assert messages[1].is_automated is True

    def test_error_raises(self):
        api, client = _api()
        client.conversations_history.side_effect = _error("channel_not_found")
        with pytest.raises(PlatformMutationError) as exc:
            api.fetch_recent_messages("C1", 20)
        assert exc.value.error_code == "channel_not_found"


class TestMutations:
    def test_add_reaction(self):
        api, client = _api()
        api.add_reaction("C1", "1.0", "merged")
        client.reactions_add.assert_called_once_with(channel="C1", timestamp="1.0", name="merged")

    def test_add_reaction_error(self):
        api, client = _api()
        client.reactions_add.side_effect = _error("invalid_name")
        with pytest.raises(ReactionApplyError) as exc:
            api.add_reaction("C1", "1.0", "nope")
        assert exc.value.is_duplicate is False

    def test_add_reaction_once_tolerates_duplicates(self):
        api, client = _api()
        client.reactions_add.side_effect = _error("already_reacted")
        assert add_reaction_once(api, "C1", "1.0", "merged") is False

    def test_add_reaction_once_reraises_other_errors(self):
        api, client = _api()
        client.reactions_add.side_effect = _error("not_in_channel")
        with pytest.raises(ReactionApplyError):
            add_reaction_once(api, "C1", "1.0", "merged")

    def test_get_permalink(self):
        api, client = _api()
        client.chat_getPermalink.return_value = {"permalink": "https://x.slack.com/p1"}
        assert api.get_permalink("C1", "1.0") == "https://x.slack.com/p1"
        client.chat_getPermalink.assert_called_once_with(channel="C1", message_ts="1.0")

    def test_post_message_returns_ts(self):
        api, client = _api()
        client.chat_postMessage.return_value = {"ts": "5.0"}
        assert api.post_message("C1", "hello", thread_ts="4.0") == "5.0"
        client.chat_postMessage.assert_called_once_with(channel="C1", text="hello", thread_ts="4.0", blocks=None)

    def test_post_message_error(self):
        api, client = _api()
        client.chat_postMessage.side_effect = _error("not_in_channel")
        with pytest.raises(PlatformMutationError):
            api.post_message("C1", "hello")


def test_sort_key_is_numeric():
    msgs = [SlackMessage("C1", "10.5", None), SlackMessage("C1", "9.75", None)]
    assert [m.ts for m in sorted(msgs, key=lambda m: m.sort_key)] == ["9.75", "10.5"]
