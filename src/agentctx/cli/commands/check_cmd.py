"""Check command - report drift between a target and the shared root."""

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from agentctx.cli.ensure import exit_with_error
from agentctx.context import AgentCtxContext
from agentctx.errors import AgentCtxError
from agentctx.health import HealthReport, check_target
from agentctx.output import success_mark, user_output, warning_mark


def _render_issues(report: HealthReport) -> None:
    table = Table(show_header=True, header_style="bold", box=None)
    table.add_column("Path", style="cyan", no_wrap=True)
    table.add_column("Problem", style="yellow", no_wrap=True)
    table.add_column("Detail")
    for issue in report.issues:
        table.add_row(str(issue.path), issue.kind, issue.detail)

    console = Console(stderr=True)
    console.print(table)


@click.command("check")
@click.argument("path", type=click.Path(path_type=Path, file_okay=False), default=".")
@click.pass_obj
def check_cmd(ctx: AgentCtxContext, path: Path) -> None:
    """Check links, mirrored commands and leftover backups without changing anything.

    Exits with status 1 if anything needs attention.
    """
    target = ctx.resolve_target(path)
    try:
        report = check_target(target, ctx.shared_root())
    except AgentCtxError as e:
        exit_with_error(e)

    for name in report.missing_shared:
        user_output(warning_mark() + f"Shared root has no {name}/ directory")

    if report.is_healthy:
        user_output(f"{success_mark()} {target} is in sync with the shared root")
        return

    user_output(warning_mark() + f"Found {len(report.issues)} problem(s) in {target}")
    _render_issues(report)
    user_output("")
    user_output("   Run 'agentctx update' to repair links and commands.")
    if report.backups:
        user_output("   Remove backups manually once you have reviewed them.")
    raise SystemExit(1)
