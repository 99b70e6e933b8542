"""Application context threaded through CLI commands."""

from dataclasses import dataclass
from pathlib import Path

from agentctx.config import SharedRoot, get_user_config_path, resolve_shared_root


@dataclass(frozen=True)
class AgentCtxContext:
    """Immutable per-invocation context.

    Created at the CLI entry point. The shared root itself is resolved by
    commands through `shared_root()` so that `--help` works without one.
    """

    cwd: Path  # Current working directory at CLI invocation
    shared_root_option: Path | None
    config_path: Path

    def shared_root(self) -> SharedRoot:
        return resolve_shared_root(self.shared_root_option, self.config_path)

    def resolve_target(self, path: Path) -> Path:
        if path.is_absolute():
            return path
        return self.cwd / path

    @staticmethod
    def for_test(shared_root: Path, cwd: Path) -> "AgentCtxContext":
        """Context pinned to an explicit shared root, ignoring any user config."""
        return AgentCtxContext(
            cwd=cwd,
            shared_root_option=shared_root,
            config_path=cwd / ".agentctx-test-config.toml",
        )


def create_context(shared_root_option: Path | None) -> AgentCtxContext:
    return AgentCtxContext(
        cwd=Path.cwd(),
        shared_root_option=shared_root_option,
        config_path=get_user_config_path(),
    )
