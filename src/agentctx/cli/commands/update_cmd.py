"""Update command - reconcile an initialized repository with the shared root."""

from pathlib import Path

import click

from agentctx.cli.display import display_reconcile_report
from agentctx.cli.ensure import exit_with_error
from agentctx.context import AgentCtxContext
from agentctx.errors import AgentCtxError
from agentctx.output import user_output
from agentctx.reconcile import reconcile


@click.command("update")
@click.argument("path", type=click.Path(path_type=Path, file_okay=False), default=".")
@click.pass_obj
def update_cmd(ctx: AgentCtxContext, path: Path) -> None:
    """Refresh links and mirrored commands from the shared root.

    Existing non-link content in the way of a link is renamed to
    <name>.backup first. Local files are never overwritten.
    """
    target = ctx.resolve_target(path)
    try:
        shared_root = ctx.shared_root()
        user_output(click.style("🔄 agentctx update", fg="blue", bold=True))
        user_output(f"Updating: {click.style(str(target), fg='green')}")
        user_output("")
        report = reconcile(target, shared_root)
    except AgentCtxError as e:
        exit_with_error(e)

    display_reconcile_report(report)
