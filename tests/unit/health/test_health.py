"""Tests for the read-only health check."""

import os
import shutil
from collections.abc import Callable
from pathlib import Path

import pytest

from agentctx.config import SharedRoot
from agentctx.errors import NotInitializedError
from agentctx.health import check_link, check_target
from agentctx.provision import provision


@pytest.fixture
def provisioned(tmp_project: Path, shared_root: SharedRoot) -> Path:
    provision(tmp_project, shared_root, ignore_history=False)
    return tmp_project


def _kinds(target: Path, shared_root: SharedRoot) -> dict[Path, str]:
    report = check_target(target, shared_root)
    return {issue.path: issue.kind for issue in report.issues}


def test_fresh_target_is_healthy(provisioned: Path, shared_root: SharedRoot) -> None:
    report = check_target(provisioned, shared_root)

    assert report.is_healthy
    assert report.backups == []


def test_check_does_not_modify_target(
    provisioned: Path, shared_root: SharedRoot, snapshot_tree: Callable
) -> None:
    (provisioned / ".agent" / "skills").unlink()
    (provisioned / ".claude" / "commands" / "resume.md").write_text("drift", encoding="utf-8")
    before = snapshot_tree(provisioned)

    check_target(provisioned, shared_root)

    assert snapshot_tree(provisioned) == before


def test_detects_missing_and_replaced_links(provisioned: Path, shared_root: SharedRoot) -> None:
    (provisioned / ".agent" / "skills").unlink()
    workflows = provisioned / ".agent" / "workflows"
    workflows.unlink()
    workflows.mkdir()

    kinds = _kinds(provisioned, shared_root)

    assert kinds[Path(".agent/skills")] == "missing"
    assert kinds[Path(".agent/workflows")] == "not-a-link"


def test_detects_link_to_another_location(
    provisioned: Path, shared_root: SharedRoot, tmp_path: Path
) -> None:
    elsewhere = tmp_path / "other_skills"
    elsewhere.mkdir()
    skills = provisioned / ".agent" / "skills"
    skills.unlink()
    skills.symlink_to(elsewhere)

    assert _kinds(provisioned, shared_root)[Path(".agent/skills")] == "wrong-target"


def test_detects_stale_link(provisioned: Path, shared_root: SharedRoot) -> None:
    shutil.rmtree(shared_root.path / "skills")

    assert _kinds(provisioned, shared_root)[Path(".agent/skills")] == "stale-link"


def test_detects_legacy_rules_link(provisioned: Path, shared_root: SharedRoot) -> None:
    rules = provisioned / ".agent" / "rules"
    shutil.rmtree(rules)
    rules.symlink_to(shared_root.path / "rules")

    assert _kinds(provisioned, shared_root)[Path(".agent/rules")] == "legacy-shape"


def test_detects_mirror_drift(provisioned: Path, shared_root: SharedRoot) -> None:
    commands = provisioned / ".claude" / "commands"
    (commands / "resume.md").write_text("edited", encoding="utf-8")
    (commands / "wrapup.md").unlink()
    (commands / "old.md").write_text("gone upstream", encoding="utf-8")

    kinds = _kinds(provisioned, shared_root)

    assert kinds[Path(".claude/commands/resume.md")] == "mirror-differs"
    assert kinds[Path(".claude/commands/wrapup.md")] == "mirror-missing"
    assert kinds[Path(".claude/commands/old.md")] == "mirror-extra"


def test_detects_dangling_alias(provisioned: Path, shared_root: SharedRoot) -> None:
    gemini = provisioned / "GEMINI.md"
    gemini.unlink()
    gemini.symlink_to("SOMETHING_ELSE.md")

    assert _kinds(provisioned, shared_root)[Path("GEMINI.md")] == "wrong-target"


def test_lists_leftover_backups(provisioned: Path, shared_root: SharedRoot) -> None:
    (provisioned / "CLAUDE.md.backup").write_text("old", encoding="utf-8")
    (provisioned / ".agent" / "skills.backup").mkdir()

    report = check_target(provisioned, shared_root)

    assert sorted(report.backups) == [Path(".agent/skills.backup"), Path("CLAUDE.md.backup")]
    assert not report.is_healthy


def test_check_link_accepts_matching_relative_link(tmp_path: Path) -> None:
    (tmp_path / "AGENT_INSTRUCTIONS.md").write_text("x", encoding="utf-8")
    os.symlink("AGENT_INSTRUCTIONS.md", tmp_path / "CLAUDE.md")

    assert check_link(tmp_path, Path("CLAUDE.md"), Path("AGENT_INSTRUCTIONS.md")) is None


def test_check_requires_initialized_target(tmp_project: Path, shared_root: SharedRoot) -> None:
    with pytest.raises(NotInitializedError):
        check_target(tmp_project, shared_root)


def test_detects_symlinked_commands_directory(
    provisioned: Path, shared_root: SharedRoot
) -> None:
    commands = provisioned / ".claude" / "commands"
    shutil.rmtree(commands)
    commands.symlink_to(shared_root.path / "workflows")

    kinds = _kinds(provisioned, shared_root)

    assert kinds == {Path(".claude/commands"): "mirror-linked"}


def test_lists_missing_shared_subtrees(provisioned: Path, shared_root: SharedRoot) -> None:
    (shared_root.path / "scripts").rmdir()

    report = check_target(provisioned, shared_root)

    assert report.missing_shared == ("scripts",)
    assert report.is_healthy
