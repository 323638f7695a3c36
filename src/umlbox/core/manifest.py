import logging
import tomllib
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from umlbox.layout.config import LayoutConfig

from .errors import make_config_error

logger = logging.getLogger(__name__)

MANIFEST_NAME = "umlbox.toml"

KNOWN_SECTIONS = {"layout", "render"}


class Theme(str, Enum):
    """Colour theme used by renderers."""

    LIGHT = "light"
    DARK = "dark"


@dataclass
class ProjectManifest:
    """
    Project manifest loaded from umlbox.toml.

    Example umlbox.toml:

        [layout]
        child_spacing = 40
        port_standoff = 400

        [render]
        theme = "dark"
    """

    layout: LayoutConfig = field(default_factory=LayoutConfig)
    theme: Theme = Theme.LIGHT
    path: Path | None = None  # None when defaults were used


def find_manifest(start: Path) -> Path | None:
    """
    Walk up from a directory (or a file's directory) looking for umlbox.toml.

    Returns:
        Path to the manifest, or None if no ancestor has one
    """
    current = start.resolve()
    if current.is_file():
        current = current.parent
    for directory in (current, *current.parents):
        candidate = directory / MANIFEST_NAME
        if candidate.is_file():
            return candidate
    return None


def load_manifest(path: Path) -> ProjectManifest:
    """
    Load a project manifest.

    A missing file yields the defaults.

    Raises:
        ConfigError: If the file is not valid TOML or holds an unknown
            layout key, a non-numeric layout value or an unknown theme
    """
    if not path.exists():
        logger.debug("No manifest at %s, using defaults", path)
        return ProjectManifest()

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise make_config_error(f"Invalid TOML: {e}", path) from e

    for section in data:
        if section not in KNOWN_SECTIONS:
            logger.warning("%s: ignoring unknown section [%s]", path, section)

    layout_config = parse_layout_section(data.get("layout", {}), path)

    # Parse render config
    render_data = data.get("render", {})
    theme_value = render_data.get("theme", Theme.LIGHT.value)
    try:
        theme = Theme(theme_value)
    except ValueError:
        choices = ", ".join(t.value for t in Theme)
        raise make_config_error(
            f"render.theme: unknown theme {theme_value!r} (expected one of: {choices})", path
        ) from None

    return ProjectManifest(layout=layout_config, theme=theme, path=path)


def parse_layout_section(layout_data: dict[str, Any], path: Path) -> LayoutConfig:
    known = LayoutConfig.field_names()
    values: dict[str, float] = {}

    for key, value in layout_data.items():
        if key not in known:
            raise make_config_error(f"layout.{key}: unknown layout setting", path)
        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool) or not isinstance(value, int | float):
            raise make_config_error(f"layout.{key}: expected a number, got {value!r}", path)
        if value < 0:
            raise make_config_error(f"layout.{key}: must not be negative, got {value}", path)
        values[key] = float(value)

    return LayoutConfig(**values)
