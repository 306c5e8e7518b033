from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import List, Sequence, Tuple

from .config import ChannelTarget, ReactionConfig
from .ports import ChatPlatform, CodeHost
from .references import PullRequestRef, extract_pull_requests
from .resolvers import ReactionResolver, StatusResolver
from .slack_client import SlackMessage, add_reaction_once
from .status_rules import TERMINAL_STATUSES, combine_statuses
from .summary import SummaryItem, post_summary_thread

logger = logging.getLogger(__name__)


@dataclass
class ChannelResult:
    channel_id: str
    scanned: int = 0
    skipped: int = 0
    auto_resolved: List[Tuple[str, str]] = field(default_factory=list)  # (ts, status)
    open_items: List[SummaryItem] = field(default_factory=list)
    summary_posted: bool = False


def is_resolved(message: SlackMessage, reactions: ReactionConfig) -> bool:
    """True if the message already carries any merged/closed alias."""
    return any(name in reactions.resolved_tokens for name in message.reaction_names)


def should_process(
    message: SlackMessage,
    pull_requests: Sequence[PullRequestRef],
    reactions: ReactionConfig,
) -> bool:
    if not pull_requests:
        logger.debug("SKIPPING: %s has no pull requests", message.ts)
        return False
    elif len(pull_requests) > 1:
        logger.warning("WARNING: %s has multiple pull requests", message.ts)

    if message.is_automated:
        logger.debug("SKIPPING: %s is a bot message", message.ts)
        return False

    if is_resolved(message, reactions):
        logger.debug("SKIPPING: %s is already resolved", message.ts)
        return False

    return True


def dedupe(names: Sequence[str]) -> List[str]:
    return list(dict.fromkeys(names))


def build_summary_item(
    slack: ChatPlatform,
    channel_id: str,
    message: SlackMessage,
    pull_request: PullRequestRef,
    reactions: ReactionConfig,
    reaction_resolver: ReactionResolver,
) -> SummaryItem:
    review_reactions = reaction_resolver.resolve(pull_request, reactions)
    return SummaryItem(
        permalink=slack.get_permalink(channel_id, message.ts),
        reactions=dedupe(message.reaction_names + review_reactions),
    )


class Reconciler:
    """Runs one reconciliation pass. Caches live as long as the instance."""

    def __init__(
        self,
        slack: ChatPlatform,
        github: CodeHost,
        reactions: ReactionConfig,
        dry_run: bool = False,
    ) -> None:
        self.slack = slack
        self.reactions = reactions
        self.dry_run = dry_run
        self.status_resolver = StatusResolver(github)
        self.reaction_resolver = ReactionResolver(github)

    def reconcile_channel(self, target: ChannelTarget) -> ChannelResult:
        result = ChannelResult(channel_id=target.channel_id)

        messages = self.slack.fetch_recent_messages(target.channel_id, target.limit)
        messages = sorted(messages, key=lambda m: m.sort_key)

        for message in messages:
            result.scanned += 1
            pull_requests = extract_pull_requests(message.text)

            if not should_process(message, pull_requests, self.reactions):
                result.skipped += 1
                continue

            status = combine_statuses(self.status_resolver.resolve(pr) for pr in pull_requests)
            if status in TERMINAL_STATUSES:
                logger.info("RESOLVING: %s is %s", message.ts, status)
                if not self.dry_run:
                    add_reaction_once(
                        self.slack, target.channel_id, message.ts, self.reactions.canonical(status)
                    )
                result.auto_resolved.append((message.ts, status))
                continue

            # Only the first PR decorates the summary; status used all of them.
            result.open_items.append(
                build_summary_item(
                    self.slack,
                    target.channel_id,
                    message,
                    pull_requests[0],
                    self.reactions,
                    self.reaction_resolver,
                )
            )

        if self.dry_run:
            logger.info(
                "DRY RUN: would post summary with %d open item(s) to %s",
                len(result.open_items),
                target.channel_id,
            )
        else:
            post_summary_thread(self.slack, target.channel_id, result.open_items)
            result.summary_posted = True

        return result


def run_reconciliation(
    slack: ChatPlatform,
    github: CodeHost,
    reactions: ReactionConfig,
    channels: Sequence[ChannelTarget],
    dry_run: bool = False,
) -> List[ChannelResult]:
    """Reconcile every enabled channel, one after another, in config order.

    A Slack failure propagates and stops the run; side effects already
    applied stay in place.
    """
    reconciler = Reconciler(slack, github, reactions, dry_run=dry_run)

    results: List[ChannelResult] = []
    for target in channels:
        if target.disabled:
            continue
        logger.info("Reconciling channel %s (limit %d)", target.channel_id, target.limit)
        results.append(reconciler.reconcile_channel(target))
    return results
