"""Reports returned by provisioning and reconciliation.

The report is the primary observable result of a run: which paths were backed
up, which links were (re)created, what local content was seeded, how the
mirror changed, and which artifact classes were skipped.
"""

from dataclasses import dataclass, field
from pathlib import Path

from agentctx.backup import BackupRecord
from agentctx.mirror import MirrorResult


@dataclass(frozen=True)
class TopologyReport:
    """Changes made to one target repository. Paths are relative to `target`."""

    target: Path
    backed_up: tuple[BackupRecord, ...]
    links_created: tuple[Path, ...]
    local_created: tuple[Path, ...]
    mirror_added: tuple[str, ...]
    mirror_updated: tuple[str, ...]
    mirror_removed: tuple[str, ...]
    warnings: tuple[str, ...]
    adopted_instructions: Path | None = None  # alias file renamed to the primary

    @property
    def has_changes(self) -> bool:
        return bool(
            self.adopted_instructions is not None
            or self.backed_up
            or self.links_created
            or self.local_created
            or self.mirror_added
            or self.mirror_updated
            or self.mirror_removed
        )


@dataclass(frozen=True)
class ProvisionReport(TopologyReport):
    """Result of `init`."""


@dataclass(frozen=True)
class ReconcileReport(TopologyReport):
    """Result of `update`."""

    rules_migrated: bool = False


@dataclass
class ReportBuilder:
    """Mutable accumulator used while a run is in progress."""

    target: Path
    backed_up: list[BackupRecord] = field(default_factory=list)
    links_created: list[Path] = field(default_factory=list)
    local_created: list[Path] = field(default_factory=list)
    mirror_added: list[str] = field(default_factory=list)
    mirror_updated: list[str] = field(default_factory=list)
    mirror_removed: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    adopted_instructions: Path | None = None
    rules_migrated: bool = False

    def _relative(self, path: Path) -> Path:
        if path.is_absolute():
            return path.relative_to(self.target)
        return path

    def backup(self, record: BackupRecord) -> None:
        self.backed_up.append(
            BackupRecord(
                original=self._relative(record.original),
                backup=self._relative(record.backup),
            )
        )

    def link(self, path: Path) -> None:
        self.links_created.append(self._relative(path))

    def local(self, path: Path) -> None:
        self.local_created.append(self._relative(path))

    def mirror(self, result: MirrorResult) -> None:
        self.mirror_added.extend(result.added)
        self.mirror_updated.extend(result.updated)
        self.mirror_removed.extend(result.removed)
        for record in result.backups:
            self.backup(record)

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def adopt(self, path: Path) -> None:
        self.adopted_instructions = self._relative(path)

    def _fields(self) -> dict:
        return {
            "target": self.target,
            "backed_up": tuple(self.backed_up),
            "links_created": tuple(self.links_created),
            "local_created": tuple(self.local_created),
            "mirror_added": tuple(self.mirror_added),
            "mirror_updated": tuple(self.mirror_updated),
            "mirror_removed": tuple(self.mirror_removed),
            "warnings": tuple(self.warnings),
            "adopted_instructions": self.adopted_instructions,
        }

    def build_provision(self) -> ProvisionReport:
        return ProvisionReport(**self._fields())

    def build_reconcile(self) -> ReconcileReport:
        return ReconcileReport(**self._fields(), rules_migrated=self.rules_migrated)
