"""Generated content for LOCAL artifacts.

These are written once when missing and owned by the target repository
afterwards; reconciliation never rewrites them.
"""

import json

HISTORY_README = """\
# Session History

This directory contains a record of all development sessions.

## Directory Structure

Each session is a folder named `YYYYMMDD-HHMMSS_description/` containing:
- `session.md` - Full session details
- `BRIEF.md` - 1-2 sentence summary with keywords

## How to Create a Session

```bash
mkdir -p .agent/history/$(date +%Y%m%d-%H%M%S)_adhoc
```

Then create `session.md` inside using the wrapup workflow template.
"""

TECHDOCS_README = """\
# Technical Documentation

This directory contains must-read documentation for working on this project.

## Contents

| Doc | Purpose |
|-----|---------|
| `README.md` | This file - documentation overview |

## How to Add Docs

When you learn something important about the codebase:
1. Create a new `.md` file in this directory
2. Update the table above
3. If it's a must-read, add it to `AGENT_INSTRUCTIONS.md` Required Reading
"""

FUTURE_FEATURES_README = """\
# Future Features

This directory contains planned features and improvement ideas.

## How to Add

Create a `.md` file for each feature with:
- Description of the feature
- Motivation / use cases
- Rough implementation ideas
- Priority level (if known)

These serve as a roadmap and context for future development sessions.
"""

RULES_README = """\
# Project Rules

This directory contains project-specific rules.
Global rules are available in the `shared/` subdirectory.
"""

# Used only when the shared root has no instructions template
FALLBACK_INSTRUCTIONS = "# Project Rules\n"

LOCAL_DIRECTORY_READMES: dict[str, str] = {
    "history": HISTORY_README,
    "techdocs": TECHDOCS_README,
    "future_features": FUTURE_FEATURES_README,
}

TOOL_SETTINGS: dict = {
    "permissions": {
        "allow": [
            "Bash(cat:*)",
            "Bash(ls:*)",
            "Bash(mkdir:*)",
            "Bash(echo:*)",
        ]
    }
}


def render_tool_settings() -> str:
    return json.dumps(TOOL_SETTINGS, indent=2) + "\n"
