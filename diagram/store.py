"""Node/edge store operations on DiagramState

Pure functions: each takes a DiagramState and returns a new one. Appends
preserve insertion order and never reorder or remove existing entries.

Appending a node also records it as the most recently appended node
(last_added_kind / active_source_id), since that is what drives the
toolbox and the default source of the next branch.
"""

from collections.abc import Iterable

from .types import BaseNode, DiagramEdge, DiagramState


def append_node(state: DiagramState, node: BaseNode) -> DiagramState:
    """Append one node and mark it as the most recently appended."""
    return state.model_copy(
        update={
            "nodes": (*state.nodes, node),
            "last_added_kind": node.kind,
            "active_source_id": node.id,
        }
    )


def append_nodes(state: DiagramState, nodes: Iterable[BaseNode]) -> DiagramState:
    """Append nodes in order; the last one becomes the most recently appended."""
    for node in nodes:
        state = append_node(state, node)
    return state


def append_edge(state: DiagramState, edge: DiagramEdge) -> DiagramState:
    return state.model_copy(update={"edges": (*state.edges, edge)})


def append_edges(state: DiagramState, edges: Iterable[DiagramEdge]) -> DiagramState:
    return state.model_copy(update={"edges": (*state.edges, *edges)})


def update_node_value(state: DiagramState, node_id: str, value: str) -> DiagramState:
    """Replace the ``value`` of node ``node_id``, leaving everything else intact.

    Unknown ids are ignored: the same state object is returned.
    """
    index = state.node_index(node_id)
    if index is None:
        return state

    nodes = list(state.nodes)
    nodes[index] = nodes[index].model_copy(update={"value": value})
    return state.model_copy(update={"nodes": tuple(nodes)})


def all_items(state: DiagramState) -> tuple[list[BaseNode], list[DiagramEdge]]:
    """Return (nodes, edges) in insertion order."""
    return list(state.nodes), list(state.edges)
