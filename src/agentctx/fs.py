"""Filesystem primitives shared by the provisioner, reconciler and backup guard.

Every mutation the tool performs goes through this module so that OS
failures are reported uniformly as FilesystemError (FilesystemPermissionError
when access was denied).
"""

import logging
import os
import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from agentctx.errors import FilesystemError, FilesystemPermissionError

logger = logging.getLogger(__name__)

_TMP_LINK_SUFFIX = ".agentctx-tmp"


@contextmanager
def os_error_guard(action: str, path: Path) -> Iterator[None]:
    """Translate OSError raised inside the block into a user-facing error.

    Covers shutil.Error (e.g. SameFileError), which subclasses OSError.
    """
    try:
        yield
    except PermissionError as e:
        raise FilesystemPermissionError(action, path, e.strerror or str(e)) from e
    except OSError as e:
        raise FilesystemError(action, path, e.strerror or str(e)) from e


def lexists(path: Path) -> bool:
    """True if anything occupies `path`, including a dangling symlink."""
    return path.is_symlink() or path.exists()


def read_link(path: Path) -> Path:
    return Path(os.readlink(path))


def points_to(link: Path, expected_target: Path) -> bool:
    """Check whether `link` is a symlink whose stored target equals `expected_target`.

    Compares the stored link text, not the resolved path, so a relative alias
    such as CLAUDE.md -> AGENT_INSTRUCTIONS.md only matches the relative form.
    """
    if not link.is_symlink():
        return False
    return read_link(link) == expected_target


def replace_link(link: Path, target: Path) -> None:
    """Create or overwrite `link` so it points at `target`.

    Same result as `ln -sfn`, but atomic: the new link is created beside the
    old one and renamed over it. The caller must already have made sure `link`
    is absent or a symlink (see agentctx.backup.protect).
    """
    tmp = link.with_name(link.name + _TMP_LINK_SUFFIX)
    with os_error_guard("link", link):
        if tmp.is_symlink():
            tmp.unlink()
        os.symlink(target, tmp)
        os.replace(tmp, link)
    logger.debug("linked %s -> %s", link, target)


def remove_link(link: Path) -> None:
    with os_error_guard("remove", link):
        link.unlink()
    logger.debug("removed link %s", link)


def remove_file(path: Path) -> None:
    with os_error_guard("remove", path):
        path.unlink()
    logger.debug("removed %s", path)


def rename(source: Path, destination: Path) -> None:
    with os_error_guard("rename", source):
        os.rename(source, destination)
    logger.debug("renamed %s -> %s", source, destination)


def make_dir(path: Path) -> bool:
    """Create `path` (and parents) if needed. Returns True if it was created."""
    if path.is_dir():
        return False
    with os_error_guard("create directory", path):
        path.mkdir(parents=True, exist_ok=True)
    logger.debug("created directory %s", path)
    return True


def write_text_if_missing(path: Path, content: str) -> bool:
    """Write `content` to `path` unless something already exists there.

    Returns True if the file was written.
    """
    if lexists(path):
        return False
    with os_error_guard("write", path):
        path.write_text(content, encoding="utf-8")
    logger.debug("wrote %s", path)
    return True


def copy_file(source: Path, destination: Path) -> None:
    with os_error_guard("copy to", destination):
        shutil.copy2(source, destination)
    logger.debug("copied %s -> %s", source, destination)


def append_text(path: Path, content: str) -> None:
    with os_error_guard("write", path):
        with open(path, "a", encoding="utf-8") as f:
            f.write(content)
    logger.debug("appended to %s", path)


def read_text(path: Path) -> str:
    with os_error_guard("read", path):
        return path.read_text(encoding="utf-8")


def read_bytes(path: Path) -> bytes:
    with os_error_guard("read", path):
        return path.read_bytes()


def list_dir(path: Path) -> list[Path]:
    """Entries directly inside `path`, sorted by name."""
    with os_error_guard("list", path):
        return sorted(path.iterdir())
