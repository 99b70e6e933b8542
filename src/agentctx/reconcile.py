"""Reconciler: converge an initialized target onto the current shared root.

Only LINKED and MIRRORED artifacts are touched. LOCAL content (history,
techdocs, future_features, rules/README.md, the instructions file, tool
settings) is created when missing and otherwise left byte-for-byte alone.
The one exception is an instructions file still living under an alias name
(GEMINI.md from the older layout), which is renamed to the primary name.
"""

import logging
from pathlib import Path

from agentctx import steps
from agentctx.config import SharedRoot
from agentctx.errors import NotInitializedError
from agentctx.report import ReconcileReport, ReportBuilder
from agentctx.topology.resolver import AGENT_DIR, shared_link_artifacts

logger = logging.getLogger(__name__)


def check_reconcile_preconditions(target: Path, shared_root: SharedRoot) -> None:
    """Validate the shared root and that the target was provisioned.

    Raises:
        ConfigurationMissingError: shared root missing
        NotInitializedError: target has no .agent/ directory
    """
    shared_root.require()
    if not (target / AGENT_DIR).is_dir():
        raise NotInitializedError(target)


def reconcile(target: Path, shared_root: SharedRoot) -> ReconcileReport:
    """Refresh links and mirrored copies of a provisioned target.

    Re-running with an unchanged shared root produces an empty report.

    Args:
        target: Root of a previously initialized repository
        shared_root: Resolved shared root

    Returns:
        ReconcileReport listing backups, links, mirror changes and warnings
    """
    target = target.absolute()
    check_reconcile_preconditions(target, shared_root)
    logger.info("reconciling %s against %s", target, shared_root.path)

    report = ReportBuilder(target=target)

    for spec in shared_link_artifacts():
        steps.link_shared_artifact(target, shared_root, spec, report)
    steps.sync_rules(target, shared_root, report)
    steps.sync_command_mirror(target, shared_root, report)
    steps.adopt_instructions(target, report)
    steps.link_instruction_aliases(target, report)

    return report.build_reconcile()
