"""Individual convergence steps shared by `init` and `update`.

Each step is idempotent: running it against a target already in the desired
state changes nothing and records nothing in the report. Steps that depend on
a shared subtree skip with a warning when that subtree is missing, so a
partially bootstrapped shared root never blocks the artifacts that are present.
"""

import logging
from pathlib import Path

from agentctx import fs
from agentctx.backup import BackupRecord, protect
from agentctx.config import SharedRoot
from agentctx.gitignore import ensure_gitignore_block
from agentctx.mirror import MirrorSource, ensure_mirror_directory, sync_mirror
from agentctx.report import ReportBuilder
from agentctx.stubs import (
    FALLBACK_INSTRUCTIONS,
    LOCAL_DIRECTORY_READMES,
    RULES_README,
    render_tool_settings,
)
from agentctx.topology.models import ArtifactId, ArtifactSpec
from agentctx.topology.resolver import (
    AGENT_DIR,
    GITIGNORE_FILE,
    INSTRUCTION_ADOPTION_ORDER,
    INSTRUCTIONS_FILE,
    LOCAL_DIRECTORIES,
    TOOL_SETTINGS_FILE,
    resolve_artifact,
)
from agentctx.topology.rules import migrate_rules

logger = logging.getLogger(__name__)

RULES_README_NAME = "README.md"


def _warn_missing_shared(report: ReportBuilder, source: Path, skipped: Path) -> None:
    report.warn(f"Shared {source.name}/ not found at {source}; skipped {skipped}")


def _link(destination: Path, link_target: Path, report: ReportBuilder) -> None:
    """Point `destination` at `link_target`, backing up any non-link entry first."""
    if fs.points_to(destination, link_target):
        logger.debug("%s already points at %s", destination, link_target)
        return

    result = protect(destination)
    if isinstance(result, BackupRecord):
        report.backup(result)

    fs.replace_link(destination, link_target)
    report.link(destination)


def link_shared_artifact(
    target: Path, shared_root: SharedRoot, spec: ArtifactSpec, report: ReportBuilder
) -> None:
    """(Re)create a LINKED artifact that points into the shared root."""
    assert spec.shared_source is not None
    source = shared_root.subtree(spec.shared_source)
    if not shared_root.has_subtree(spec.shared_source):
        _warn_missing_shared(report, source, spec.destination)
        return

    _link(target / spec.destination, source, report)


def seed_local_directories(target: Path, report: ReportBuilder) -> None:
    """Create the local-only .agent/ directories and their README stubs."""
    for name in LOCAL_DIRECTORIES:
        directory = target / AGENT_DIR / name
        if fs.make_dir(directory):
            report.local(directory)
        readme = directory / "README.md"
        if fs.write_text_if_missing(readme, LOCAL_DIRECTORY_READMES[name]):
            report.local(readme)


def sync_rules(target: Path, shared_root: SharedRoot, report: ReportBuilder) -> None:
    """Bring .agent/rules to the hybrid shape: local dir + `shared` link + README."""
    spec = resolve_artifact(ArtifactId.RULES)
    assert spec.shared_source is not None and spec.shared_sublink is not None
    rules_dir = target / spec.destination

    migration = migrate_rules(rules_dir)
    if migration.legacy_link_removed:
        report.rules_migrated = True
    if migration.backup is not None:
        report.backup(migration.backup)
    if migration.directory_created:
        report.local(rules_dir)

    source = shared_root.subtree(spec.shared_source)
    if shared_root.has_subtree(spec.shared_source):
        _link(rules_dir / spec.shared_sublink, source, report)
    else:
        _warn_missing_shared(report, source, spec.destination / spec.shared_sublink)

    readme = rules_dir / RULES_README_NAME
    if fs.write_text_if_missing(readme, RULES_README):
        report.local(readme)


def adopt_instructions(target: Path, report: ReportBuilder) -> None:
    """Promote an existing alias file to the primary instructions file.

    Runs only while the primary is missing. Repositories set up with the older
    layout, or by hand, keep their instructions in GEMINI.md or CLAUDE.md;
    renaming that file keeps the content live instead of backing it up and
    seeding a template in its place. The alias is relinked afterwards.
    """
    primary = target / INSTRUCTIONS_FILE
    if fs.lexists(primary):
        return

    for candidate in INSTRUCTION_ADOPTION_ORDER:
        path = target / candidate
        if path.is_file() and not path.is_symlink():
            logger.info("adopting %s as %s", path, primary)
            fs.rename(path, primary)
            report.adopt(path)
            return


def seed_instructions(target: Path, shared_root: SharedRoot, report: ReportBuilder) -> None:
    """Copy the instructions template into place unless the target already has one."""
    spec = resolve_artifact(ArtifactId.AGENT_INSTRUCTIONS)
    assert spec.shared_source is not None
    destination = target / spec.destination

    if fs.lexists(destination):
        logger.info("%s already exists; leaving it untouched", destination)
        return

    template = shared_root.subtree(spec.shared_source)
    if template.is_file():
        fs.copy_file(template, destination)
    else:
        report.warn(f"Template not found at {template}; wrote a minimal {spec.destination}")
        fs.write_text_if_missing(destination, FALLBACK_INSTRUCTIONS)
    report.local(destination)


def link_instruction_aliases(target: Path, report: ReportBuilder) -> None:
    """Alias the instructions file under each tool-specific name.

    Skipped entirely when the primary file does not exist, since the aliases
    would dangle.
    """
    spec = resolve_artifact(ArtifactId.TOOL_MIRROR_FILE)
    assert spec.link_target is not None
    primary = target / spec.link_target
    if not primary.exists():
        report.warn(f"{spec.link_target} not found; skipped tool aliases")
        return

    for alias in spec.destinations:
        _link(target / alias, spec.link_target, report)


def sync_command_mirror(
    target: Path, shared_root: SharedRoot, report: ReportBuilder, *, initial: bool = False
) -> None:
    """Mirror shared workflows into the tool commands directory.

    `initial` is set by the provisioner: commands the repository already had
    are kept (or backed up when they clash with an upstream file).
    """
    spec = resolve_artifact(ArtifactId.TOOL_COMMAND_MIRROR)
    assert spec.shared_source is not None and spec.mirror_suffix is not None
    source_dir = shared_root.subtree(spec.shared_source)
    if not shared_root.has_subtree(spec.shared_source):
        _warn_missing_shared(report, source_dir, spec.destination)
        return

    destination_dir = target / spec.destination
    if ensure_mirror_directory(destination_dir):
        report.local(destination_dir)
    source = MirrorSource(directory=source_dir, suffix=spec.mirror_suffix)
    result = sync_mirror(source, destination_dir, initial=initial)
    logger.debug("%d mirrored file(s) already up to date", len(result.unchanged))
    report.mirror(result)


def write_tool_settings(target: Path, report: ReportBuilder) -> None:
    settings = target / TOOL_SETTINGS_FILE
    fs.make_dir(settings.parent)
    if fs.write_text_if_missing(settings, render_tool_settings()):
        report.local(settings)


def update_gitignore(target: Path, report: ReportBuilder, *, ignore_history: bool) -> None:
    gitignore = target / GITIGNORE_FILE
    if ensure_gitignore_block(gitignore, ignore_history=ignore_history):
        report.local(gitignore)
