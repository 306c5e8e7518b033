"""Reconcile Slack PR threads with GitHub merge status."""

from .config import ChannelTarget, Config, ReactionConfig, load_config
from .errors import (
    ConfigurationError,
    PlatformMutationError,
    ReactionApplyError,
    ReconError,
    ResolutionFailure,
)
from .github_client import GitHubAPI, PullRequestDetail
from .logic import ChannelResult, Reconciler, run_reconciliation, should_process
from .references import PullRequestRef, extract_pull_requests
from .resolvers import ReactionResolver, StatusResolver
from .slack_client import SlackAPI, SlackMessage
from .status_rules import PullRequestStatus, combine_statuses
from .summary import SummaryItem

__all__ = [
    "ChannelTarget",
    "Config",
    "ReactionConfig",
    "load_config",
    "ConfigurationError",
    "PlatformMutationError",
    "ReactionApplyError",
    "ReconError",
    "ResolutionFailure",
    "GitHubAPI",
    "PullRequestDetail",
    "ChannelResult",
    "Reconciler",
    "run_reconciliation",
    "should_process",
    "PullRequestRef",
    "extract_pull_requests",
    "ReactionResolver",
    "StatusResolver",
    "SlackAPI",
    "SlackMessage",
    "PullRequestStatus",
    "combine_statuses",
    "SummaryItem",
]
