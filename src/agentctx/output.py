"""User-facing output helpers.

All human-readable progress goes to stderr so stdout stays free for anything
scripts may want to parse.
"""

import click


def user_output(message: str = "", *, nl: bool = True) -> None:
    """Print a message for the user on stderr."""
    click.echo(message, err=True, nl=nl)


def success_mark() -> str:
    return click.style("✓", fg="green")


def warning_mark() -> str:
    return click.style("⚠️ ", fg="yellow")


def error_prefix() -> str:
    return click.style("Error: ", fg="red")
