from __future__ import annotations

from typing import List, Optional

from rich.console import Console
from rich.table import Table

from .logic import ChannelResult
from .status_rules import PullRequestStatus


def build_report_table(results: List[ChannelResult], dry_run: bool = False) -> Table:
    title = "PR Thread Reconciliation" + (" (dry run)" if dry_run else "")
    table = Table(title=title)
    table.add_column("Channel", style="cyan")
    table.add_column("Scanned", justify="right")
    table.add_column("Skipped", justify="right")
    table.add_column("Merged", justify="right", style="green")
    table.add_column("Closed", justify="right", style="red")
    table.add_column("Still open", justify="right", style="yellow")
    table.add_column("Summary")

    for r in results:
        merged = sum(1 for _, status in r.auto_resolved if status == PullRequestStatus.MERGED)
        closed = len(r.auto_resolved) - merged
        table.add_row(
            r.channel_id,
            str(r.scanned),
            str(r.skipped),
            str(merged),
            str(closed),
            str(len(r.open_items)),
            "posted" if r.summary_posted else "not posted",
        )
    return table


def print_report(results: List[ChannelResult], dry_run: bool = False, console: Optional[Console] = None) -> None:
    console = console or Console()

    if not results:
        console.print("[bold yellow]No enabled channels configured.[/bold yellow]")
        return

    console.print(build_report_table(results, dry_run=dry_run))

    for r in results:
        if not r.open_items:
            continue
        console.print(f"\n[bold cyan][{r.channel_id}][/bold cyan] still open:")
        for item in r.open_items:
            suffix = " ".join(f":{name}:" for name in item.reactions)
            console.print(f"  - {item.permalink} {suffix}".rstrip(), emoji=False, highlight=False)
