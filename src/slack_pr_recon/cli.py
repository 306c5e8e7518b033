from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from .config import load_config
from .errors import ReconError
from .github_client import GitHubAPI
from .logic import run_reconciliation
from .reporting import print_report
from .slack_client import SlackAPI


def configure_logging(level: str, console: Optional[Console] = None) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Mark Slack messages whose GitHub PRs are merged/closed and post a thread of the ones still open",
    )
    parser.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="Path to the JSON config file (default: $RECON_CONFIG_FILE or slack-pr-recon.json)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Read everything but don't add reactions or post the summary thread",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: $LOG_LEVEL or INFO)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    console = Console(stderr=True)

    try:
        cfg = load_config(config_file=args.config_file, dry_run=args.dry_run)
        configure_logging(args.log_level or cfg.log_level, console=console)

        slack = SlackAPI(token=cfg.slack_bot_token)
        github = GitHubAPI(token=cfg.github_token, base_url=cfg.github_api_url)

        results = run_reconciliation(slack, github, cfg.reactions, cfg.channels, dry_run=cfg.dry_run)
    except ReconError as e:
        console.print(f"[bold red]{type(e).__name__}:[/bold red] {e}")
        return 1
    except Exception as e:
        console.print(f"[bold red]Reconciliation failed:[/bold red] {e}")
        logging.getLogger(__name__).debug("Unhandled error", exc_info=True)
        return 1

    print_report(results, dry_run=cfg.dry_run)
    return 0


if __name__ == "__main__":
    sys.exit(main())
