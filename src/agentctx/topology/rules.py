"""Rules topology migration.

Older targets stored `.agent/rules` as a single symlink to the shared rules
directory. The current shape is a local directory holding a `shared` sublink
plus project-specific rule files. Migration is modelled as detect -> plan ->
apply: detection reads the filesystem, planning is a pure function of the
detected shape, and applying the plan performs the filesystem steps.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from agentctx import fs
from agentctx.backup import BackupRecord, protect

logger = logging.getLogger(__name__)


class RulesShape(Enum):
    """Shapes `.agent/rules` has been observed in."""

    ABSENT = "absent"
    LEGACY_LINK = "legacy-link"  # whole directory was one symlink (older layout)
    PLAIN_FILE = "plain-file"  # something that is neither a link nor a directory
    HYBRID_DIRECTORY = "hybrid-directory"  # current layout


@dataclass(frozen=True)
class RulesMigration:
    """Steps needed to turn a detected rules shape into the hybrid directory."""

    source_shape: RulesShape
    remove_legacy_link: bool
    backup_existing: bool
    create_directory: bool

    @property
    def is_noop(self) -> bool:
        return not (self.remove_legacy_link or self.backup_existing or self.create_directory)


@dataclass(frozen=True)
class RulesMigrationResult:
    shape: RulesShape
    legacy_link_removed: bool
    backup: BackupRecord | None
    directory_created: bool


def detect_rules_shape(rules_dir: Path) -> RulesShape:
    if rules_dir.is_symlink():
        return RulesShape.LEGACY_LINK
    if not rules_dir.exists():
        return RulesShape.ABSENT
    if rules_dir.is_dir():
        return RulesShape.HYBRID_DIRECTORY
    return RulesShape.PLAIN_FILE


def plan_rules_migration(shape: RulesShape) -> RulesMigration:
    """Map a detected shape to the migration steps. Pure function.

    A legacy link owns no data, so it is removed outright without a backup.
    A plain file does own data and goes through the backup guard.
    """
    if shape == RulesShape.LEGACY_LINK:
        return RulesMigration(
            source_shape=shape,
            remove_legacy_link=True,
            backup_existing=False,
            create_directory=True,
        )
    if shape == RulesShape.PLAIN_FILE:
        return RulesMigration(
            source_shape=shape,
            remove_legacy_link=False,
            backup_existing=True,
            create_directory=True,
        )
    if shape == RulesShape.ABSENT:
        return RulesMigration(
            source_shape=shape,
            remove_legacy_link=False,
            backup_existing=False,
            create_directory=True,
        )
    return RulesMigration(
        source_shape=shape,
        remove_legacy_link=False,
        backup_existing=False,
        create_directory=False,
    )


def apply_rules_migration(rules_dir: Path, migration: RulesMigration) -> RulesMigrationResult:
    """Carry out a migration plan on `rules_dir`.

    Raises:
        BackupCollisionError: a plain file needs backing up but the backup
            name is taken
    """
    if migration.is_noop:
        logger.debug("%s already has the current rules layout", rules_dir)
        return RulesMigrationResult(
            shape=migration.source_shape,
            legacy_link_removed=False,
            backup=None,
            directory_created=False,
        )

    legacy_link_removed = False
    backup: BackupRecord | None = None

    if migration.remove_legacy_link:
        logger.info("converting legacy rules symlink %s to a directory", rules_dir)
        fs.remove_link(rules_dir)
        legacy_link_removed = True

    if migration.backup_existing:
        result = protect(rules_dir)
        if isinstance(result, BackupRecord):
            backup = result

    directory_created = False
    if migration.create_directory:
        directory_created = fs.make_dir(rules_dir)

    return RulesMigrationResult(
        shape=migration.source_shape,
        legacy_link_removed=legacy_link_removed,
        backup=backup,
        directory_created=directory_created,
    )


def migrate_rules(rules_dir: Path) -> RulesMigrationResult:
    """Detect the current rules shape and bring it to the hybrid directory."""
    migration = plan_rules_migration(detect_rules_shape(rules_dir))
    return apply_rules_migration(rules_dir, migration)
