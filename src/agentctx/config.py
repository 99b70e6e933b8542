"""Shared root resolution.

The shared root is resolved once at CLI startup and passed explicitly to every
operation. Precedence: --shared-root / AGENTCTX_SHARED_ROOT, then
~/.agentctx/config.toml, then the source checkout this package runs from.
"""

import logging
import tomllib
from dataclasses import dataclass
from functools import cache
from pathlib import Path

from agentctx.errors import ConfigurationMissingError

logger = logging.getLogger(__name__)

SHARED_ROOT_ENV_VAR = "AGENTCTX_SHARED_ROOT"

# Subtrees a complete shared root carries
SHARED_SUBTREES: tuple[str, ...] = ("skills", "workflows", "rules", "templates", "scripts")


@dataclass(frozen=True)
class SharedRoot:
    """The single read-only source-of-truth directory."""

    path: Path

    def subtree(self, relative: Path) -> Path:
        return self.path / relative

    def has_subtree(self, relative: Path) -> bool:
        return self.subtree(relative).is_dir()

    def missing_subtrees(self) -> list[str]:
        return [name for name in SHARED_SUBTREES if not self.has_subtree(Path(name))]

    def require(self) -> None:
        """Fail unless the shared root directory exists.

        Raises:
            ConfigurationMissingError: the directory is absent
        """
        if not self.path.is_dir():
            raise ConfigurationMissingError(
                f"Shared root {self.path} does not exist!",
                hint=(
                    "Clone or create the shared directory, or point --shared-root / "
                    f"{SHARED_ROOT_ENV_VAR} at it."
                ),
            )


@dataclass(frozen=True)
class UserConfig:
    """In-memory representation of `~/.agentctx/config.toml`.

    Example config.toml:
      shared_root = "~/llms_shared_context"
    """

    shared_root: Path | None


def get_user_config_path() -> Path:
    return Path.home() / ".agentctx" / "config.toml"


def load_user_config(config_path: Path) -> UserConfig:
    """Load the user config if present; otherwise return defaults."""
    if not config_path.exists():
        return UserConfig(shared_root=None)

    try:
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationMissingError(
            f"Could not parse {config_path}: {e}",
            hint=(
                f"Fix the TOML syntax in {config_path}, "
                'e.g. shared_root = "~/llms_shared_context".'
            ),
        ) from e
    shared_root = data.get("shared_root")
    if shared_root is None:
        return UserConfig(shared_root=None)
    return UserConfig(shared_root=Path(str(shared_root)).expanduser())


@cache
def _get_package_dir() -> Path:
    """Get the agentctx package directory (where agentctx/__init__.py lives)."""
    # __file__ is .../agentctx/config.py, so parent is agentctx/
    return Path(__file__).parent


def _is_editable_install() -> bool:
    """Check if agentctx runs from a source checkout rather than site-packages."""
    return "site-packages" not in str(_get_package_dir().resolve())


def installation_shared_root() -> Path | None:
    """Shared root implied by where the tool itself is installed.

    The tool ships inside the shared root (like its scripts/ directory), so a
    source checkout's root is the shared root. Wheel installs have no such
    location.
    """
    if not _is_editable_install():
        return None
    # Editable: package is at src/agentctx/, checkout root is ../..
    return _get_package_dir().parent.parent


def resolve_shared_root(explicit: Path | None, config_path: Path) -> SharedRoot:
    """Resolve the shared root from the explicit value, user config or install location.

    Args:
        explicit: Value of --shared-root (click also fills it from the env var)
        config_path: Location of the user config file

    Returns:
        SharedRoot with an absolute path (existence is checked by the operations)

    Raises:
        ConfigurationMissingError: no source yields a shared root
    """
    if explicit is not None:
        logger.debug("shared root from option/environment: %s", explicit)
        return SharedRoot(path=explicit.expanduser().absolute())

    user_config = load_user_config(config_path)
    if user_config.shared_root is not None:
        logger.debug("shared root from %s: %s", config_path, user_config.shared_root)
        return SharedRoot(path=user_config.shared_root.absolute())

    installed = installation_shared_root()
    if installed is not None:
        logger.debug("shared root from installation location: %s", installed)
        return SharedRoot(path=installed)

    raise ConfigurationMissingError(
        "No shared root configured",
        hint=(
            f"Pass --shared-root, set {SHARED_ROOT_ENV_VAR}, or add "
            f'shared_root = "..." to {config_path}.'
        ),
    )
