"""Layout policy: where a newly appended node is placed

Nodes are never repositioned after creation. Every non-root node goes in a
single column, one row further down per node already in the store.
"""

from . import config as layout_config
from .config import LayoutConfig
from .types import Position


def root_position(config: LayoutConfig | None = None) -> Position:
    """Fixed anchor of the root DrugReview node."""
    config = config or layout_config.LAYOUT_CONFIG
    return Position(x=config.root_x, y=config.root_y)


def position_for(existing_node_count: int, config: LayoutConfig | None = None) -> Position:
    """Position of a node appended to a store holding ``existing_node_count`` nodes.

    Examples (default config):
        position_for(1) -> Position(x=300, y=300)
        position_for(3) -> Position(x=300, y=500)
    """
    config = config or layout_config.LAYOUT_CONFIG
    return Position(
        x=config.column_x,
        y=config.base_offset + existing_node_count * config.row_height,
    )
