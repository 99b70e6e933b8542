"""Provisioner: first-time setup of a target repository."""

import logging
from pathlib import Path

from agentctx import fs, steps
from agentctx.config import SharedRoot
from agentctx.errors import AlreadyInitializedError, ConfigurationMissingError
from agentctx.report import ProvisionReport, ReportBuilder
from agentctx.topology.resolver import AGENT_DIR, shared_link_artifacts

logger = logging.getLogger(__name__)


def check_provision_preconditions(target: Path, shared_root: SharedRoot) -> None:
    """Validate everything `provision` needs before anything is written.

    Raises:
        ConfigurationMissingError: shared root or target directory missing
        AlreadyInitializedError: target already has a .agent/ directory
    """
    shared_root.require()
    if not target.is_dir():
        raise ConfigurationMissingError(f"Target directory {target} does not exist")
    agent_dir = target / AGENT_DIR
    if fs.lexists(agent_dir):
        raise AlreadyInitializedError(agent_dir)


def provision(target: Path, shared_root: SharedRoot, *, ignore_history: bool) -> ProvisionReport:
    """Initialize a brand-new target repository.

    Creates the local .agent/ skeleton, links shared skills/workflows/rules,
    seeds the instructions file (adopting an existing CLAUDE.md or GEMINI.md)
    and its tool aliases, mirrors workflows into the tool commands directory
    without deleting commands the repository already had, writes tool
    settings and guards them in .gitignore.

    Not transactional: if a filesystem error interrupts the run, the partial
    state is safe to complete with `reconcile`.

    Args:
        target: Root of the repository to initialize
        shared_root: Resolved shared root
        ignore_history: Whether .agent/history/ is ignored in .gitignore

    Returns:
        ProvisionReport describing everything that was created
    """
    target = target.absolute()
    check_provision_preconditions(target, shared_root)
    logger.info("provisioning %s from %s", target, shared_root.path)

    report = ReportBuilder(target=target)

    steps.seed_local_directories(target, report)
    for spec in shared_link_artifacts():
        steps.link_shared_artifact(target, shared_root, spec, report)
    steps.sync_rules(target, shared_root, report)
    steps.adopt_instructions(target, report)
    steps.seed_instructions(target, shared_root, report)
    steps.link_instruction_aliases(target, report)
    steps.sync_command_mirror(target, shared_root, report, initial=True)
    steps.write_tool_settings(target, report)
    steps.update_gitignore(target, report, ignore_history=ignore_history)

    return report.build_provision()
