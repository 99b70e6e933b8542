"""Topology resolver - the fixed artifact-to-kind mapping.

The mapping is a design invariant, not per-run state: every artifact has
exactly one kind and one canonical destination. Changing an entry here means
the provisioner and reconciler must migrate the old shape explicitly (see
agentctx.topology.rules), never assume a clean start.
"""

from functools import cache
from pathlib import Path

from agentctx.topology.models import ArtifactId, ArtifactKind, ArtifactSpec

AGENT_DIR = Path(".agent")
INSTRUCTIONS_FILE = Path("AGENT_INSTRUCTIONS.md")
COMMANDS_DIR = Path(".claude") / "commands"
TOOL_SETTINGS_FILE = Path(".claude") / "settings.local.json"
GITIGNORE_FILE = Path(".gitignore")

# Relative to the shared root
INSTRUCTIONS_TEMPLATE = Path("templates") / "AGENT_INSTRUCTIONS.template.md"

# Local-only directories under .agent/, each seeded with a README stub
LOCAL_DIRECTORIES: tuple[str, ...] = ("history", "techdocs", "future_features")

# Tool-specific names that alias the primary instructions file
INSTRUCTION_ALIASES: tuple[Path, ...] = (
    Path("CLAUDE.md"),
    Path(".cursorrules"),
    Path("GEMINI.md"),
)

# Older layouts kept the instructions in GEMINI.md with CLAUDE.md and
# .cursorrules linking to it. Alias names are searched in this order for a
# real file to adopt as the primary when the primary does not exist yet.
INSTRUCTION_ADOPTION_ORDER: tuple[Path, ...] = (
    Path("GEMINI.md"),
    Path("CLAUDE.md"),
    Path(".cursorrules"),
)


@cache
def _topology() -> dict[ArtifactId, ArtifactSpec]:
    return {
        ArtifactId.SKILLS: ArtifactSpec(
            artifact_id=ArtifactId.SKILLS,
            kind=ArtifactKind.LINKED,
            destinations=(AGENT_DIR / "skills",),
            shared_source=Path("skills"),
        ),
        ArtifactId.WORKFLOWS: ArtifactSpec(
            artifact_id=ArtifactId.WORKFLOWS,
            kind=ArtifactKind.LINKED,
            destinations=(AGENT_DIR / "workflows",),
            shared_source=Path("workflows"),
        ),
        ArtifactId.RULES: ArtifactSpec(
            artifact_id=ArtifactId.RULES,
            kind=ArtifactKind.LOCAL,
            destinations=(AGENT_DIR / "rules",),
            shared_source=Path("rules"),
            shared_sublink="shared",
        ),
        ArtifactId.AGENT_INSTRUCTIONS: ArtifactSpec(
            artifact_id=ArtifactId.AGENT_INSTRUCTIONS,
            kind=ArtifactKind.LOCAL,
            destinations=(INSTRUCTIONS_FILE,),
            shared_source=INSTRUCTIONS_TEMPLATE,
        ),
        ArtifactId.TOOL_MIRROR_FILE: ArtifactSpec(
            artifact_id=ArtifactId.TOOL_MIRROR_FILE,
            kind=ArtifactKind.LINKED,
            destinations=INSTRUCTION_ALIASES,
            shared_source=None,
            link_target=INSTRUCTIONS_FILE,
        ),
        ArtifactId.TOOL_COMMAND_MIRROR: ArtifactSpec(
            artifact_id=ArtifactId.TOOL_COMMAND_MIRROR,
            kind=ArtifactKind.MIRRORED,
            destinations=(COMMANDS_DIR,),
            shared_source=Path("workflows"),
            mirror_suffix=".md",
        ),
    }


def resolve_artifact(artifact_id: ArtifactId) -> ArtifactSpec:
    """Return the kind and destination(s) for an artifact.

    Pure lookup; no filesystem access.
    """
    return _topology()[artifact_id]


def all_artifacts() -> list[ArtifactSpec]:
    """All artifact specs in enumeration order."""
    return [resolve_artifact(artifact_id) for artifact_id in ArtifactId]


def shared_link_artifacts() -> list[ArtifactSpec]:
    """LINKED artifacts whose link points into the shared root (skills, workflows)."""
    return [
        spec
        for spec in all_artifacts()
        if spec.kind == ArtifactKind.LINKED and spec.shared_source is not None
    ]
