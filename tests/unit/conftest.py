"""Fixtures for provisioning and reconciliation tests.

These are integration-style tests that build real directory trees under
tmp_path: one shared root and one target repository per test.
"""

import os
from collections.abc import Callable
from pathlib import Path

import pytest

from agentctx.config import SharedRoot

TreeSnapshot = dict[str, tuple[str, str | bytes]]


@pytest.fixture
def shared_dir(tmp_path: Path) -> Path:
    """A complete shared root with two workflows, one skill and one rule."""
    root = tmp_path / "llms_shared_context"
    (root / "skills" / "tdd").mkdir(parents=True)
    (root / "skills" / "tdd" / "SKILL.md").write_text("# TDD skill\n", encoding="utf-8")
    (root / "workflows").mkdir()
    (root / "workflows" / "resume.md").write_text("# Resume\n", encoding="utf-8")
    (root / "workflows" / "wrapup.md").write_text("# Wrapup\n", encoding="utf-8")
    (root / "rules").mkdir()
    (root / "rules" / "style.md").write_text("# Style\n", encoding="utf-8")
    (root / "templates").mkdir()
    (root / "templates" / "AGENT_INSTRUCTIONS.template.md").write_text(
        "# Agent Instructions\n\nRead .agent/techdocs first.\n", encoding="utf-8"
    )
    (root / "scripts").mkdir()
    return root


@pytest.fixture
def shared_root(shared_dir: Path) -> SharedRoot:
    return SharedRoot(path=shared_dir)


@pytest.fixture
def tmp_project(tmp_path: Path) -> Path:
    """An empty target repository directory."""
    project = tmp_path / "project"
    project.mkdir()
    return project


def _snapshot(root: Path) -> TreeSnapshot:
    """Record every entry under `root` without following links."""
    snapshot: TreeSnapshot = {}
    for dirpath, dirnames, filenames in os.walk(root):
        for name in [*dirnames, *filenames]:
            path = Path(dirpath) / name
            relative = str(path.relative_to(root))
            if path.is_symlink():
                snapshot[relative] = ("link", os.readlink(path))
            elif path.is_dir():
                snapshot[relative] = ("dir", "")
            else:
                snapshot[relative] = ("file", path.read_bytes())
    return snapshot


@pytest.fixture
def snapshot_tree() -> Callable[[Path], TreeSnapshot]:
    """Callable taking a directory and returning a comparable picture of it."""
    return _snapshot
