"""User-facing error types for provisioning and reconciliation.

Every error carries a message written for the person running the CLI and an
optional hint naming the command or fix that resolves it. The CLI prints both
and exits with status 1; nothing is retried or rolled back automatically.
"""

from pathlib import Path


class AgentCtxError(Exception):
    """Base class for all errors surfaced to the user."""

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class ConfigurationMissingError(AgentCtxError):
    """The shared root (or the target directory) does not exist."""


class AlreadyInitializedError(AgentCtxError):
    """`init` was invoked on a target that already has a .agent/ directory."""

    def __init__(self, agent_dir: Path) -> None:
        super().__init__(
            f".agent directory already exists at {agent_dir}",
            hint="This repo is already initialized. Use 'agentctx update' to refresh links.",
        )
        self.agent_dir = agent_dir


class NotInitializedError(AgentCtxError):
    """`update` was invoked on a target without a .agent/ directory."""

    def __init__(self, target: Path) -> None:
        super().__init__(
            f"No .agent directory found in {target}",
            hint="Run 'agentctx init' first.",
        )
        self.target = target


class BackupCollisionError(AgentCtxError):
    """The .backup name for a path is already taken by an earlier backup."""

    def __init__(self, path: Path, backup_path: Path) -> None:
        super().__init__(
            f"Cannot back up {path}: {backup_path} already exists",
            hint=f"Inspect {backup_path}, remove it once you are satisfied, then re-run.",
        )
        self.path = path
        self.backup_path = backup_path


class FilesystemError(AgentCtxError):
    """The OS refused to create, read, rename, remove or link a path."""

    def __init__(
        self,
        action: str,
        path: Path,
        reason: str,
        *,
        message: str | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(
            message or f"Could not {action} {path}: {reason}",
            hint=hint
            or (
                f"Check what is at {path} (a file where a directory is expected, or the "
                "reverse), fix it and re-run; every step is safe to repeat."
            ),
        )
        self.action = action
        self.path = path


class FilesystemPermissionError(FilesystemError):
    """The OS denied access to a path."""

    def __init__(self, action: str, path: Path, reason: str) -> None:
        super().__init__(
            action,
            path,
            reason,
            message=f"Permission denied while trying to {action} {path}: {reason}",
            hint="Fix the permissions and re-run; every step is safe to repeat.",
        )
