"""Backup guard: preserve non-link content before it is replaced.

Any path the tool is about to turn into a link (or a directory, for the rules
migration) passes through `protect` first. Real files and directories are
renamed to `<name>.backup`; symlinks and absent paths are left alone because
they hold no data of their own. Backups are never deleted by the tool.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from agentctx import fs
from agentctx.errors import BackupCollisionError

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".backup"


@dataclass(frozen=True)
class BackupRecord:
    """A pre-existing entry that was renamed out of the way."""

    original: Path
    backup: Path


@dataclass(frozen=True)
class NoBackupNeeded:
    """`protect` found nothing to preserve (path absent or already a link)."""

    path: Path


def backup_path_for(path: Path) -> Path:
    return path.with_name(path.name + BACKUP_SUFFIX)


def protect(path: Path) -> BackupRecord | NoBackupNeeded:
    """Move a non-link entry at `path` aside so the caller may replace it.

    Postcondition: `path` is absent or a symlink.

    Raises:
        BackupCollisionError: `<path>.backup` already exists. `path` is left
            untouched; an earlier backup is never overwritten.
        FilesystemPermissionError: the rename was refused by the OS.
    """
    if path.is_symlink() or not path.exists():
        return NoBackupNeeded(path=path)

    backup = backup_path_for(path)
    if fs.lexists(backup):
        raise BackupCollisionError(path, backup)

    fs.rename(path, backup)
    logger.info("backed up %s to %s", path, backup)
    return BackupRecord(original=path, backup=backup)


def find_backups(directory: Path) -> list[Path]:
    """List `*.backup` entries directly inside `directory`, sorted by name."""
    if not directory.is_dir():
        return []
    return [p for p in fs.list_dir(directory) if p.name.endswith(BACKUP_SUFFIX)]
