"""CLI commands for the reconciliation issue queue."""

from __future__ import annotations

import click

from pharmoms.application.reconciliation import (
    ListReconciliationIssuesHandler,
    ResolveReconciliationIssueHandler,
)
from pharmoms.domain.exceptions import DomainException
from pharmoms.infrastructure.bootstrap import reconciliation_repository


@click.command("list")
@click.option("--all", "include_resolved", is_flag=True, default=False, help="Include resolved issues.")
def reconciliation_list(include_resolved: bool) -> None:
    """List post-checkout steps that still need manual attention."""
    handler = ListReconciliationIssuesHandler(issue_repo=reconciliation_repository())
    issues = handler.handle(include_resolved=include_resolved)

    if not issues:
        click.echo("Nothing to reconcile.")
        return

    for issue in issues:
        state = "resolved" if issue.resolved else "open"
        target = issue.reference_id or "-"
        qty = f" x{issue.quantity}" if issue.quantity is not None else ""
        click.echo(
            f"#{issue.id} [{state}] {issue.order_number} {issue.step} {target}{qty}: {issue.reason}"
        )


@click.command("resolve")
@click.option("--id", "issue_id", required=True, type=int, help="Issue ID.")
def reconciliation_resolve(issue_id: int) -> None:
    """Mark an issue as settled."""
    handler = ResolveReconciliationIssueHandler(issue_repo=reconciliation_repository())

    try:
        handler.handle(issue_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Issue #{issue_id} resolved.")
