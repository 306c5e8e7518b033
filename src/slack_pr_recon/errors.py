"""Error taxonomy for a reconciliation run.

Resolution failures are recovered where they happen (the resolvers log
them and fall back). Configuration and platform mutation errors
propagate and abort the run.
"""

from __future__ import annotations

from typing import Optional


class ReconError(Exception):
    """Base class for all errors raised by slack_pr_recon."""


class ConfigurationError(ReconError):
    """Missing or malformed configuration. Always fatal."""


class ResolutionFailure(ReconError):
    """A pull request status or review lookup failed."""


class NotFoundError(ResolutionFailure):
    pass


class RateLimitError(ResolutionFailure):
    pass


class AuthError(ResolutionFailure):
    pass


class PlatformMutationError(ReconError):
    """A Slack call failed while scanning or posting for a channel."""

    def __init__(self, message: str, error_code: Optional[str] = None) -> None:
        super().__init__(message)
        self.error_code = error_code


class ReactionApplyError(PlatformMutationError):
    """Slack rejected a reactions.add call."""

    @property
    def is_duplicate(self) -> bool:
        return self.error_code == "already_reacted"
