import logging
from pathlib import Path

import click

from agentctx.cli.commands.check_cmd import check_cmd
from agentctx.cli.commands.init_cmd import init_cmd
from agentctx.cli.commands.update_cmd import update_cmd
from agentctx.config import SHARED_ROOT_ENV_VAR
from agentctx.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="agentctx")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--shared-root",
    type=click.Path(path_type=Path, file_okay=False),
    envvar=SHARED_ROOT_ENV_VAR,
    default=None,
    help=f"Shared source-of-truth directory (env: {SHARED_ROOT_ENV_VAR})",
)
@click.pass_context
def cli(ctx: click.Context, debug: bool, shared_root: Path | None) -> None:
    """Link a shared skills/workflows/rules directory into repositories."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context(shared_root_option=shared_root)


cli.add_command(init_cmd)
cli.add_command(update_cmd)
cli.add_command(check_cmd)
