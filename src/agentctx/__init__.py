"""agentctx CLI entry point.

This package provides a Click-based CLI that links a shared skills, workflows
and rules directory into many repositories and keeps them in sync. See
`agentctx --help` for details.
"""

from agentctx.cli.cli import cli


def main() -> None:
    """CLI entry point used by the `agentctx` console script."""
    cli()
