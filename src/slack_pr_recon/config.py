from __future__ import annotations

from dataclasses import dataclass, field
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

from dotenv import load_dotenv

from .errors import ConfigurationError


DEFAULT_CONFIG_FILE = "slack-pr-recon.json"
DEFAULT_CHANNEL_LIMIT = 50

# JSON key -> ReactionConfig attribute
_REACTION_KEYS: Dict[str, str] = {
    "approved": "approved",
    "merged": "merged",
    "closed": "closed",
    "changesRequested": "changes_requested",
}


@dataclass(frozen=True)
class ReactionConfig:
    """Slack reaction names (without colons) used for each PR state.

    The first configured alias is authoritative when applying a reaction;
    all aliases are used when detecting that a message is already resolved.
    """

    approved: List[str] = field(default_factory=lambda: ["approved"])
    merged: List[str] = field(default_factory=lambda: ["merged"])
    closed: List[str] = field(default_factory=lambda: ["closed"])
    changes_requested: List[str] = field(default_factory=lambda: ["changesRequested"])

    def canonical(self, kind: str) -> str:
        """Return the reaction to apply for ``kind`` (e.g. "merged")."""
        aliases = getattr(self, kind)
        return aliases[0]

    @property
    def resolved_tokens(self) -> Set[str]:
        return set(self.merged) | set(self.closed)


@dataclass(frozen=True)
class ChannelTarget:
    channel_id: str
    limit: int = DEFAULT_CHANNEL_LIMIT
    disabled: bool = False


@dataclass
class Config:
    slack_bot_token: str
    github_token: str
    config_file: str = DEFAULT_CONFIG_FILE
    reactions: ReactionConfig = field(default_factory=ReactionConfig)
    channels: List[ChannelTarget] = field(default_factory=list)
    github_api_url: Optional[str] = None
    dry_run: bool = False
    log_level: str = "INFO"


def _truthy(val: Optional[str]) -> bool:
    return (val or "").lower() in {"1", "true", "yes", "y"}


def parse_reaction_config(raw: Any) -> ReactionConfig:
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigurationError("'reactions' must be an object")

    values: Dict[str, List[str]] = {}
    for json_key, attr in _REACTION_KEYS.items():
        aliases = raw.get(json_key)
        if aliases is None:
            values[attr] = [json_key]
            continue

        if isinstance(aliases, str):
            aliases = [aliases]
        if not isinstance(aliases, list) or not all(isinstance(a, str) and a for a in aliases):
            raise ConfigurationError(f"'reactions.{json_key}' must be a string or a list of strings")
        if not aliases:
            raise ConfigurationError(f"'reactions.{json_key}' must not be empty")
        values[attr] = list(aliases)

    return ReactionConfig(**values)


def _parse_limit(name: str, limit: Any) -> int:
    if limit is None:
        return DEFAULT_CHANNEL_LIMIT
    if isinstance(limit, float) and limit.is_integer():
        limit = int(limit)
    # bool is an int subclass; reject it explicitly
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise ConfigurationError(f"'channels.{name}.limit' must be a positive integer")
    return limit


def parse_channel_targets(raw: Any) -> List[ChannelTarget]:
    """Return enabled channel targets in document order."""
    if raw is None:
        return []
    if not isinstance(raw, dict):
        raise ConfigurationError("'channels' must be an object keyed by any name")

    targets: List[ChannelTarget] = []
    for name, entry in raw.items():
        if not isinstance(entry, dict):
            raise ConfigurationError(f"'channels.{name}' must be an object")

        channel_id = entry.get("channelId")
        if not channel_id or entry.get("disabled", False):
            continue

        limit = _parse_limit(name, entry.get("limit"))

        targets.append(ChannelTarget(channel_id=str(channel_id), limit=limit))

    return targets


def read_config_file(path: str) -> Dict[str, Any]:
    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigurationError(f"Config file not found: {path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Could not read config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a JSON object")
    return data


def load_config(config_file: Optional[str] = None, dry_run: Optional[bool] = None) -> Config:
    """Load configuration from environment variables / .env file and the JSON config file.

    Explicit arguments (from the CLI) win over environment variables.
    """

    load_dotenv()

    slack_bot_token = os.getenv("SLACK_BOT_TOKEN")
    if not slack_bot_token:
        raise ConfigurationError("SLACK_BOT_TOKEN must be set in environment or .env file.")

    github_token = os.getenv("GITHUB_TOKEN")
    if not github_token:
        raise ConfigurationError("GITHUB_TOKEN must be set in environment or .env file.")

    config_file = config_file or os.getenv("RECON_CONFIG_FILE", DEFAULT_CONFIG_FILE)
    data = read_config_file(config_file)

    return Config(
        slack_bot_token=slack_bot_token,
        github_token=github_token,
        config_file=config_file,
        reactions=parse_reaction_config(data.get("reactions")),
        channels=parse_channel_targets(data.get("channels")),
        github_api_url=os.getenv("GITHUB_API_URL") or None,
        dry_run=dry_run if dry_run is not None else _truthy(os.getenv("RECON_DRY_RUN")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
