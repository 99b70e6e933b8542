"""Init command - provision a new target repository."""

from pathlib import Path

import click

from agentctx.cli.display import display_provision_report
from agentctx.cli.ensure import exit_with_error
from agentctx.context import AgentCtxContext
from agentctx.errors import AgentCtxError
from agentctx.output import user_output
from agentctx.provision import provision


@click.command("init")
@click.argument("path", type=click.Path(path_type=Path, file_okay=False), default=".")
@click.option(
    "--ignore-history",
    is_flag=True,
    help="Ignore .agent/history/ in .gitignore instead of leaving the entry commented out",
)
@click.pass_obj
def init_cmd(ctx: AgentCtxContext, path: Path, ignore_history: bool) -> None:
    """Initialize a repository with a linked .agent/ tree.

    Skills, workflows and shared rules are linked from the shared root so
    later changes propagate automatically. Fails if .agent/ already exists.

    Examples:

    \b
      # Initialize the current directory
      agentctx init

    \b
      # Initialize another repository
      agentctx init /path/to/repo
    """
    target = ctx.resolve_target(path)
    try:
        shared_root = ctx.shared_root()
        user_output(click.style("🚀 agentctx init", fg="blue", bold=True))
        user_output(f"Initializing: {click.style(str(target), fg='green')}")
        user_output(f"Source: {click.style(str(shared_root.path), fg='cyan')}")
        user_output("")
        report = provision(target, shared_root, ignore_history=ignore_history)
    except AgentCtxError as e:
        exit_with_error(e)

    display_provision_report(report)
