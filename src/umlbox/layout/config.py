"""
Layout engine configuration.

All distances are in diagram units (pixels at zoom 1).
"""

from dataclasses import dataclass, fields


@dataclass(frozen=True)
class LayoutConfig:
    """Spacing constants for the layout engine."""

    # Node sizes
    leaf_width: float = 150
    leaf_height: float = 80
    min_container_width: float = 200
    min_container_height: float = 120

    # Container padding around stacked children
    side_padding: float = 50
    label_band: float = 35  # Reserved for the container label, above the children
    vertical_padding: float = 50
    child_spacing: float = 40

    # Root grid
    grid_start_x: float = 50
    grid_start_y: float = 50
    grid_horizontal_spacing: float = 200
    grid_vertical_spacing: float = 150

    # Distance from a port to a node anchored on it
    port_standoff: float = 400

    @classmethod
    def field_names(cls) -> set[str]:
        return {f.name for f in fields(cls)}


DEFAULT_LAYOUT_CONFIG = LayoutConfig()
