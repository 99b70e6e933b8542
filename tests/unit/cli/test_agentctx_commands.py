"""Tests for the init, update and check commands."""

from pathlib import Path

from click.testing import CliRunner

from agentctx.cli.cli import cli
from agentctx.context import AgentCtxContext


def _invoke(args: list[str], shared_dir: Path, cwd: Path):
    runner = CliRunner()
    return runner.invoke(cli, args, obj=AgentCtxContext.for_test(shared_dir, cwd))


def test_init_succeeds_and_prints_summary(shared_dir: Path, tmp_project: Path) -> None:
    result = _invoke(["init"], shared_dir, tmp_project)

    assert result.exit_code == 0, result.output
    assert "Init complete!" in result.output
    assert "AGENT_INSTRUCTIONS.md" in result.output
    assert (tmp_project / ".agent" / "skills").is_symlink()


def test_init_accepts_path_argument(shared_dir: Path, tmp_path: Path, tmp_project: Path) -> None:
    result = _invoke(["init", str(tmp_project)], shared_dir, tmp_path)

    assert result.exit_code == 0, result.output
    assert (tmp_project / ".agent").is_dir()


def test_init_ignore_history_flag(shared_dir: Path, tmp_project: Path) -> None:
    result = _invoke(["init", "--ignore-history"], shared_dir, tmp_project)

    assert result.exit_code == 0, result.output
    lines = (tmp_project / ".gitignore").read_text(encoding="utf-8").splitlines()
    assert ".agent/history/" in lines


def test_init_twice_fails_with_hint(shared_dir: Path, tmp_project: Path) -> None:
    _invoke(["init"], shared_dir, tmp_project)

    result = _invoke(["init"], shared_dir, tmp_project)

    assert result.exit_code == 1
    assert "Error: " in result.output
    assert "agentctx update" in result.output


def test_init_with_missing_shared_root_fails(tmp_path: Path, tmp_project: Path) -> None:
    result = _invoke(["init"], tmp_path / "missing", tmp_project)

    assert result.exit_code == 1
    assert "does not exist" in result.output
    assert list(tmp_project.iterdir()) == []


def test_update_without_init_fails(shared_dir: Path, tmp_project: Path) -> None:
    result = _invoke(["update"], shared_dir, tmp_project)

    assert result.exit_code == 1
    assert "agentctx init" in result.output


def test_update_reports_already_up_to_date(shared_dir: Path, tmp_project: Path) -> None:
    _invoke(["init"], shared_dir, tmp_project)

    result = _invoke(["update"], shared_dir, tmp_project)

    assert result.exit_code == 0, result.output
    assert "Already up to date" in result.output


def test_update_reports_mirror_changes_and_backups(shared_dir: Path, tmp_project: Path) -> None:
    _invoke(["init"], shared_dir, tmp_project)
    (shared_dir / "workflows" / "wrapup.md").unlink()
    skills = tmp_project / ".agent" / "skills"
    skills.unlink()
    skills.mkdir()

    result = _invoke(["update"], shared_dir, tmp_project)

    assert result.exit_code == 0, result.output
    assert "Update complete!" in result.output
    assert "Removed stale command: wrapup.md" in result.output
    assert "skills.backup" in result.output


def test_update_reports_rules_conversion(shared_dir: Path, tmp_project: Path) -> None:
    _invoke(["init"], shared_dir, tmp_project)
    rules = tmp_project / ".agent" / "rules"
    for path in rules.iterdir():
        path.unlink()
    rules.rmdir()
    rules.symlink_to(shared_dir / "rules")

    result = _invoke(["update"], shared_dir, tmp_project)

    assert result.exit_code == 0, result.output
    assert "Converted .agent/rules symlink to directory" in result.output


def test_update_backup_collision_exits_nonzero(shared_dir: Path, tmp_project: Path) -> None:
    _invoke(["init"], shared_dir, tmp_project)
    (tmp_project / "GEMINI.md").unlink()
    (tmp_project / "GEMINI.md").write_text("new", encoding="utf-8")
    (tmp_project / "GEMINI.md.backup").write_text("older", encoding="utf-8")

    result = _invoke(["update"], shared_dir, tmp_project)

    assert result.exit_code == 1
    assert "already exists" in result.output
    assert (tmp_project / "GEMINI.md.backup").read_text(encoding="utf-8") == "older"


def test_check_healthy_target(shared_dir: Path, tmp_project: Path) -> None:
    _invoke(["init"], shared_dir, tmp_project)

    result = _invoke(["check"], shared_dir, tmp_project)

    assert result.exit_code == 0, result.output
    assert "in sync" in result.output


def test_check_reports_drift(shared_dir: Path, tmp_project: Path) -> None:
    _invoke(["init"], shared_dir, tmp_project)
    (tmp_project / ".agent" / "workflows").unlink()

    result = _invoke(["check"], shared_dir, tmp_project)

    assert result.exit_code == 1
    assert "agentctx update" in result.output


def test_help_does_not_require_shared_root() -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["init", "--help"])

    assert result.exit_code == 0
    assert "--ignore-history" in result.output


def test_init_reports_filesystem_conflict_without_traceback(
    shared_dir: Path, tmp_project: Path
) -> None:
    (tmp_project / ".claude").write_text("not a directory", encoding="utf-8")

    result = _invoke(["init"], shared_dir, tmp_project)

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Error: " in result.output
    assert ".claude" in result.output


def test_init_reports_adopted_instructions(shared_dir: Path, tmp_project: Path) -> None:
    (tmp_project / "CLAUDE.md").write_text("my project rules", encoding="utf-8")

    result = _invoke(["init"], shared_dir, tmp_project)

    assert result.exit_code == 0, result.output
    assert "Adopted CLAUDE.md as AGENT_INSTRUCTIONS.md" in result.output


def test_check_warns_about_missing_shared_subtree(shared_dir: Path, tmp_project: Path) -> None:
    _invoke(["init"], shared_dir, tmp_project)
    (shared_dir / "scripts").rmdir()

    result = _invoke(["check"], shared_dir, tmp_project)

    assert result.exit_code == 0, result.output
    assert "Shared root has no scripts/ directory" in result.output
