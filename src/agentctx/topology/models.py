"""Types describing how each managed artifact is represented in a target repo."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ArtifactKind(Enum):
    """How an artifact is materialized inside a target repository.

    LINKED: a symbolic link into the shared root, never copied.
    MIRRORED: a copy of shared content, re-synced on every update, never
        hand-edited at the destination.
    LOCAL: created once, owned by the target repository afterwards.
    """

    LINKED = "linked"
    MIRRORED = "mirrored"
    LOCAL = "local"


class ArtifactId(Enum):
    """Closed set of artifacts the tool manages."""

    SKILLS = "skills"
    WORKFLOWS = "workflows"
    RULES = "rules"
    AGENT_INSTRUCTIONS = "agent-instructions-file"
    TOOL_MIRROR_FILE = "tool-mirror-file"
    TOOL_COMMAND_MIRROR = "tool-command-mirror"


@dataclass(frozen=True)
class ArtifactSpec:
    """Fixed classification and placement of one artifact.

    Paths in `destinations` are relative to the target repository root;
    `shared_source` is relative to the shared root.

    Attributes:
        artifact_id: Which artifact this describes
        kind: LINKED, MIRRORED or LOCAL
        destinations: Canonical destination first; alias artifacts list every alias
        shared_source: Shared subtree the artifact links to or mirrors, if any
        link_target: Stored link text for aliases that point inside the target
        shared_sublink: For hybrid LOCAL directories, the name of the link
            inside the directory that points at `shared_source`
        mirror_suffix: For MIRRORED sets, the file suffix that selects members
    """

    artifact_id: ArtifactId
    kind: ArtifactKind
    destinations: tuple[Path, ...]
    shared_source: Path | None
    link_target: Path | None = None
    shared_sublink: str | None = None
    mirror_suffix: str | None = None

    @property
    def destination(self) -> Path:
        return self.destinations[0]

    @property
    def is_hybrid(self) -> bool:
        return self.kind == ArtifactKind.LOCAL and self.shared_sublink is not None
