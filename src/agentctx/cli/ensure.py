"""Turn user-facing errors into a message and a non-zero exit status."""

from typing import NoReturn

import click

from agentctx.errors import AgentCtxError
from agentctx.output import error_prefix, user_output


def exit_with_error(error: AgentCtxError) -> NoReturn:
    """Print the error (and its hint) to stderr and exit with status 1.

    Raises:
        SystemExit: always, with exit code 1
    """
    user_output(error_prefix() + error.message)
    if error.hint is not None:
        user_output(click.style(f"   {error.hint}", fg="yellow"))
    raise SystemExit(1)
