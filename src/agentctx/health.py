"""Read-only health check of a provisioned target.

Detects the inconsistencies reconciliation repairs (missing or stale links,
links pointing somewhere unexpected, mirror drift, the legacy rules shape)
plus leftover backups the user still has to review. Never modifies anything.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from agentctx import fs
from agentctx.backup import find_backups
from agentctx.config import SharedRoot
from agentctx.errors import NotInitializedError
from agentctx.mirror import MirrorSource, find_stale
from agentctx.topology.models import ArtifactId
from agentctx.topology.resolver import AGENT_DIR, resolve_artifact, shared_link_artifacts
from agentctx.topology.rules import RulesShape, detect_rules_shape

IssueKind = Literal[
    "missing",
    "not-a-link",
    "wrong-target",
    "stale-link",
    "legacy-shape",
    "mirror-missing",
    "mirror-differs",
    "mirror-extra",
    "mirror-linked",
    "backup-present",
]


@dataclass(frozen=True)
class HealthIssue:
    """One detected inconsistency. `path` is relative to the target root."""

    path: Path
    kind: IssueKind
    detail: str


@dataclass(frozen=True)
class HealthReport:
    target: Path
    issues: tuple[HealthIssue, ...]
    missing_shared: tuple[str, ...] = ()  # shared subtrees absent upstream; not a failure

    @property
    def is_healthy(self) -> bool:
        return not self.issues

    @property
    def backups(self) -> list[Path]:
        return [issue.path for issue in self.issues if issue.kind == "backup-present"]


def check_link(target: Path, relative: Path, expected: Path) -> HealthIssue | None:
    """Check that `target / relative` is a link storing `expected` that resolves."""
    path = target / relative
    if not fs.lexists(path):
        return HealthIssue(path=relative, kind="missing", detail=f"expected link to {expected}")
    if not path.is_symlink():
        return HealthIssue(
            path=relative, kind="not-a-link", detail=f"expected link to {expected}"
        )
    stored = fs.read_link(path)
    if stored != expected:
        return HealthIssue(
            path=relative, kind="wrong-target", detail=f"points at {stored}, expected {expected}"
        )
    if not path.exists():
        return HealthIssue(path=relative, kind="stale-link", detail=f"{stored} does not exist")
    return None


def _check_shared_links(target: Path, shared_root: SharedRoot) -> list[HealthIssue]:
    issues: list[HealthIssue] = []
    for spec in shared_link_artifacts():
        assert spec.shared_source is not None
        issue = check_link(target, spec.destination, shared_root.subtree(spec.shared_source))
        if issue is not None:
            issues.append(issue)
    return issues


def _check_rules(target: Path, shared_root: SharedRoot) -> list[HealthIssue]:
    spec = resolve_artifact(ArtifactId.RULES)
    assert spec.shared_source is not None and spec.shared_sublink is not None
    shape = detect_rules_shape(target / spec.destination)
    if shape == RulesShape.LEGACY_LINK:
        return [
            HealthIssue(
                path=spec.destination,
                kind="legacy-shape",
                detail="single symlink; run 'agentctx update' to convert to a directory",
            )
        ]
    if shape != RulesShape.HYBRID_DIRECTORY:
        return [HealthIssue(path=spec.destination, kind="missing", detail="rules directory")]

    issue = check_link(
        target, spec.destination / spec.shared_sublink, shared_root.subtree(spec.shared_source)
    )
    return [issue] if issue is not None else []


def _check_aliases(target: Path) -> list[HealthIssue]:
    spec = resolve_artifact(ArtifactId.TOOL_MIRROR_FILE)
    assert spec.link_target is not None
    if not (target / spec.link_target).exists():
        return [HealthIssue(path=spec.link_target, kind="missing", detail="instructions file")]

    issues: list[HealthIssue] = []
    for alias in spec.destinations:
        issue = check_link(target, alias, spec.link_target)
        if issue is not None:
            issues.append(issue)
    return issues


def _check_mirror(target: Path, shared_root: SharedRoot) -> list[HealthIssue]:
    spec = resolve_artifact(ArtifactId.TOOL_COMMAND_MIRROR)
    assert spec.shared_source is not None and spec.mirror_suffix is not None
    if not shared_root.has_subtree(spec.shared_source):
        return []

    destination_dir = target / spec.destination
    if destination_dir.is_symlink():
        return [
            HealthIssue(
                path=spec.destination,
                kind="mirror-linked",
                detail=f"symlink to {fs.read_link(destination_dir)}; should be a directory",
            )
        ]

    source = MirrorSource(
        directory=shared_root.subtree(spec.shared_source), suffix=spec.mirror_suffix
    )
    issues: list[HealthIssue] = []
    for upstream in source:
        mirrored = destination_dir / upstream.name
        relative = spec.destination / upstream.name
        if not mirrored.is_file() or mirrored.is_symlink():
            issues.append(HealthIssue(path=relative, kind="mirror-missing", detail="not copied"))
        elif fs.read_bytes(mirrored) != fs.read_bytes(upstream):
            issues.append(
                HealthIssue(path=relative, kind="mirror-differs", detail="differs from upstream")
            )
    for stale in find_stale(source, destination_dir):
        issues.append(
            HealthIssue(
                path=spec.destination / stale.name,
                kind="mirror-extra",
                detail="no longer exists upstream",
            )
        )
    return issues


def _check_backups(target: Path) -> list[HealthIssue]:
    directories = [
        target,
        target / AGENT_DIR,
        target / resolve_artifact(ArtifactId.RULES).destination,
        target / resolve_artifact(ArtifactId.TOOL_COMMAND_MIRROR).destination,
    ]
    issues: list[HealthIssue] = []
    for directory in directories:
        for backup in find_backups(directory):
            issues.append(
                HealthIssue(
                    path=backup.relative_to(target),
                    kind="backup-present",
                    detail="delete after verifying everything works",
                )
            )
    return issues


def check_target(target: Path, shared_root: SharedRoot) -> HealthReport:
    """Inspect a provisioned target without changing it.

    Raises:
        ConfigurationMissingError: shared root missing
        NotInitializedError: target has no .agent/ directory
    """
    target = target.absolute()
    shared_root.require()
    if not (target / AGENT_DIR).is_dir():
        raise NotInitializedError(target)

    issues = [
        *_check_shared_links(target, shared_root),
        *_check_rules(target, shared_root),
        *_check_aliases(target),
        *_check_mirror(target, shared_root),
        *_check_backups(target),
    ]
    return HealthReport(
        target=target,
        issues=tuple(issues),
        missing_shared=tuple(shared_root.missing_subtrees()),
    )
