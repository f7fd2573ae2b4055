"""Layout configuration for the diagram canvas

The defaults reproduce the cascading layout the React Flow frontend expects:
root pinned near the top-left, every other node stacked in one column.
"""

from dataclasses import dataclass


@dataclass
class LayoutConfig:
    """Constants used by the layout policy.

    Attributes:
        root_x: x of the pinned root node
        root_y: y of the pinned root node
        column_x: x of every non-root node
        base_offset: y of a node appended to an empty store
        row_height: vertical distance added per existing node
    """

    root_x: float = 250.0
    root_y: float = 0.0
    column_x: float = 300.0
    base_offset: float = 200.0
    row_height: float = 100.0


def configure_layout(
    root_x: float = 250.0,
    root_y: float = 0.0,
    column_x: float = 300.0,
    base_offset: float = 200.0,
    row_height: float = 100.0,
) -> LayoutConfig:
    """Build a layout configuration.

    All parameters default to the values the frontend was designed around.

    Examples:
        # Tighter rows
        import diagram.config as layout_config
        layout_config.LAYOUT_CONFIG = configure_layout(row_height=80.0)
    """
    if row_height <= 0:
        raise ValueError(f"row_height must be positive, got {row_height}")
    return LayoutConfig(
        root_x=root_x,
        root_y=root_y,
        column_x=column_x,
        base_offset=base_offset,
        row_height=row_height,
    )


# Global layout configuration - replace via configure_layout() to change spacing
LAYOUT_CONFIG: LayoutConfig = LayoutConfig()
