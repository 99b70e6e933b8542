"""Mirrored sets: copies of shared files for tools that cannot follow symlinks.

After a sync, the mirror's membership (files matching the suffix) equals the
upstream membership exactly: files missing upstream are deleted, every
upstream file is copied over its counterpart. The first sync into a
repository is the exception; see `sync_mirror`.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from agentctx import fs
from agentctx.backup import BackupRecord, protect

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MirrorSource:
    """Restartable view of the upstream files in a shared directory.

    Each iteration rescans the directory; nothing is cached between runs.
    """

    directory: Path
    suffix: str

    def __iter__(self) -> Iterator[Path]:
        for path in fs.list_dir(self.directory):
            if path.suffix == self.suffix and path.is_file():
                yield path

    def names(self) -> set[str]:
        return {path.name for path in self}


@dataclass(frozen=True)
class MirrorResult:
    """What a mirror sync changed, by file name."""

    added: tuple[str, ...]
    updated: tuple[str, ...]
    unchanged: tuple[str, ...]
    removed: tuple[str, ...]
    backups: tuple[BackupRecord, ...]

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.updated or self.removed or self.backups)


def _is_member(path: Path, suffix: str) -> bool:
    if path.suffix != suffix:
        return False
    return path.is_symlink() or path.is_file()


def _same_bytes(left: Path, right: Path) -> bool:
    return fs.read_bytes(left) == fs.read_bytes(right)


def find_stale(source: MirrorSource, destination_dir: Path) -> list[Path]:
    """Mirror members with no upstream counterpart, sorted by name."""
    if destination_dir.is_symlink() or not destination_dir.is_dir():
        return []
    upstream = source.names()
    return [
        path
        for path in fs.list_dir(destination_dir)
        if _is_member(path, source.suffix) and path.name not in upstream
    ]


def ensure_mirror_directory(destination_dir: Path) -> bool:
    """Make `destination_dir` a real directory. Returns True if it was created.

    A symlink in its place is removed first (it owns no data), so the mirror
    is never read, pruned or written through a link into another tree.
    """
    if destination_dir.is_symlink():
        logger.info("replacing symlinked mirror directory %s", destination_dir)
        fs.remove_link(destination_dir)
    return fs.make_dir(destination_dir)


def sync_mirror(
    source: MirrorSource, destination_dir: Path, *, initial: bool = False
) -> MirrorResult:
    """Converge `destination_dir` onto the upstream files in `source`.

    With `initial=True` (first population of a repository) nothing in
    `destination_dir` belongs to the mirror yet: files with no upstream
    counterpart are kept, and a same-named file with different content is
    backed up before the upstream copy replaces it.

    Args:
        source: Upstream files to mirror
        destination_dir: Local mirror directory (created if missing)
        initial: First population; keep and protect pre-existing files

    Returns:
        MirrorResult listing added, updated, unchanged and removed names

    Raises:
        BackupCollisionError: a file to back up already has a .backup
    """
    ensure_mirror_directory(destination_dir)

    removed: list[str] = []
    if not initial:
        for stale in find_stale(source, destination_dir):
            logger.info("removing stale mirrored file %s", stale)
            fs.remove_file(stale)
            removed.append(stale.name)

    added: list[str] = []
    updated: list[str] = []
    unchanged: list[str] = []
    backups: list[BackupRecord] = []
    for upstream in source:
        destination = destination_dir / upstream.name

        # Never write through a link at the destination
        if destination.is_symlink():
            fs.remove_link(destination)
        elif destination.is_dir() or (
            initial and destination.is_file() and not _same_bytes(upstream, destination)
        ):
            result = protect(destination)
            if isinstance(result, BackupRecord):
                backups.append(result)

        if not destination.exists():
            added.append(upstream.name)
        elif _same_bytes(upstream, destination):
            unchanged.append(upstream.name)
        else:
            updated.append(upstream.name)

        fs.copy_file(upstream, destination)

    return MirrorResult(
        added=tuple(added),
        updated=tuple(updated),
        unchanged=tuple(unchanged),
        removed=tuple(removed),
        backups=tuple(backups),
    )
