"""Ignore-list guard block for machine-specific generated files."""

from pathlib import Path

from agentctx import fs

GITIGNORE_MARKER = "# LLM Agent files"


def build_gitignore_block(*, ignore_history: bool) -> str:
    """Build the block appended to .gitignore.

    Session history is listed commented out unless the user opts in.

    Args:
        ignore_history: Whether .agent/history/ should be ignored

    Returns:
        Block text, starting with a blank separator line
    """
    history_line = ".agent/history/" if ignore_history else "# .agent/history/"
    return (
        "\n"
        f"{GITIGNORE_MARKER}\n"
        ".claude/settings.local.json\n"
        "\n"
        "# Optional - uncomment to ignore session history\n"
        f"{history_line}\n"
    )


def add_gitignore_block(content: str, *, ignore_history: bool) -> str:
    """Append the guard block to gitignore content unless it is already present.

    Pure function; idempotent.

    Example:
        >>> once = add_gitignore_block("*.pyc\\n", ignore_history=False)
        >>> add_gitignore_block(once, ignore_history=False) == once
        True
    """
    if GITIGNORE_MARKER in content:
        return content

    if content and not content.endswith("\n"):
        content += "\n"

    return content + build_gitignore_block(ignore_history=ignore_history)


def ensure_gitignore_block(gitignore_path: Path, *, ignore_history: bool) -> bool:
    """Add the guard block to a .gitignore file, creating the file if needed.

    Returns:
        True if the file was modified
    """
    content = ""
    if gitignore_path.exists():
        content = fs.read_text(gitignore_path)

    new_content = add_gitignore_block(content, ignore_history=ignore_history)
    if new_content == content:
        return False

    fs.append_text(gitignore_path, new_content[len(content) :])
    return True
