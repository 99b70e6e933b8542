"""Rendering of run reports for the terminal."""

import click

from agentctx.output import success_mark, user_output, warning_mark
from agentctx.report import ProvisionReport, ReconcileReport, TopologyReport


def _display_changes(report: TopologyReport) -> None:
    if report.adopted_instructions is not None:
        user_output(
            click.style("📦 ", fg="yellow")
            + f"Adopted {report.adopted_instructions} as AGENT_INSTRUCTIONS.md"
        )
    for record in report.backed_up:
        user_output(
            click.style("📦 ", fg="yellow") + f"Backed up {record.original} to {record.backup}"
        )
    for link in report.links_created:
        user_output(f"   {success_mark()} {link} (link)")
    for path in report.local_created:
        user_output(f"   {success_mark()} {path}")
    for name in report.mirror_added:
        user_output(f"   {success_mark()} command added: {name}")
    for name in report.mirror_updated:
        user_output(f"   {success_mark()} command updated: {name}")
    for name in report.mirror_removed:
        user_output(click.style(f"   🗑️  Removed stale command: {name}", fg="yellow"))


def _display_warnings(report: TopologyReport) -> None:
    for warning in report.warnings:
        user_output(warning_mark() + warning)


def _display_backup_reminder(report: TopologyReport) -> None:
    if not report.backed_up:
        return
    user_output("")
    user_output(click.style("Backups created:", fg="yellow"))
    for record in report.backed_up:
        user_output(f"  - {record.backup}")
    user_output(click.style("Delete these after verifying everything works.", fg="yellow"))


LAYOUT_SUMMARY = """\
  .agent/
  ├── skills -> <shared>/skills         (link - shared)
  ├── workflows -> <shared>/workflows   (link - shared)
  ├── rules/                            (local + shared/ link)
  ├── history/                          (local - project-specific)
  ├── techdocs/                         (local - project-specific)
  └── future_features/                  (local - project-specific)

  .claude/
  ├── commands/                         (copies of workflows)
  └── settings.local.json               (local - git-ignored)

  AGENT_INSTRUCTIONS.md                 (local - customize this!)
  CLAUDE.md -> AGENT_INSTRUCTIONS.md    (link)
  .cursorrules -> AGENT_INSTRUCTIONS.md (link for Cursor)
  GEMINI.md -> AGENT_INSTRUCTIONS.md    (link for Gemini)"""


def display_provision_report(report: ProvisionReport) -> None:
    _display_changes(report)
    _display_warnings(report)
    _display_backup_reminder(report)
    user_output("")
    user_output(click.style("✅ Init complete!", fg="green", bold=True))
    user_output("")
    user_output("Directory structure:")
    user_output("")
    user_output(LAYOUT_SUMMARY)
    user_output("")
    user_output(click.style("Next steps:", fg="yellow"))
    user_output(f"  1. Customize {click.style('AGENT_INSTRUCTIONS.md', fg='cyan')}")
    user_output(f"  2. Add your first techdoc in {click.style('.agent/techdocs/', fg='cyan')}")


def display_reconcile_report(report: ReconcileReport) -> None:
    if report.rules_migrated:
        user_output(click.style("📦 Converted .agent/rules symlink to directory", fg="yellow"))
    _display_changes(report)
    _display_warnings(report)
    user_output("")
    if report.has_changes:
        user_output(click.style("✅ Update complete!", fg="green", bold=True))
    else:
        user_output(click.style("✅ Already up to date", fg="green", bold=True))
    _display_backup_reminder(report)
