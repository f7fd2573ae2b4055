"""Diagram package for the drug review flow builder

This package provides:
- Diagram types (tagged node union, DiagramEdge, DiagramState) and their
  React Flow projection
- Enums (NodeKind, Action, EventType)
- Identifier allocation, layout policy and the answer-pairing counter
- Pure branching transitions and the affordance selector

This package has no server dependencies and is shared by the authoring
session and the FastAPI server.
"""

from .affordances import TOOLBOX_ACTIONS, available_actions
from .config import LAYOUT_CONFIG, LayoutConfig, configure_layout
from .counter import next_sequence
from .enums import Action, EventType, NodeKind
from .errors import DiagramError, UnknownSourceError
from .ids import ROOT_ID, answer_id, edge_id, follow_up_id, generic_node_id
from .layout import position_for, root_position
from .store import all_items, append_edge, append_edges, append_node, append_nodes, update_node_value
from .transitions import (
    add_answers,
    add_more_answers,
    add_prompt,
    add_question,
    change_value,
    initialize,
    resolve_source,
    submit,
)
from .types import (
    AnswerNode,
    BaseNode,
    DiagramEdge,
    DiagramNode,
    DiagramState,
    DrugReviewNode,
    FlowEdge,
    FlowNode,
    FlowNodeData,
    FlowState,
    FollowUpNode,
    Position,
    PromptNode,
    QuestionNode,
    to_flow_state,
)

__all__ = [
    # Enums
    "NodeKind",
    "Action",
    "EventType",
    # Diagram types
    "BaseNode",
    "DrugReviewNode",
    "FollowUpNode",
    "QuestionNode",
    "AnswerNode",
    "PromptNode",
    "DiagramNode",
    "DiagramEdge",
    "DiagramState",
    "Position",
    # React Flow projection
    "FlowNode",
    "FlowNodeData",
    "FlowEdge",
    "FlowState",
    "to_flow_state",
    # Errors
    "DiagramError",
    "UnknownSourceError",
    # Identifiers
    "ROOT_ID",
    "answer_id",
    "edge_id",
    "follow_up_id",
    "generic_node_id",
    # Layout
    "LAYOUT_CONFIG",
    "LayoutConfig",
    "configure_layout",
    "position_for",
    "root_position",
    # Store
    "all_items",
    "append_edge",
    "append_edges",
    "append_node",
    "append_nodes",
    "update_node_value",
    # Counter
    "next_sequence",
    # Transitions
    "initialize",
    "change_value",
    "submit",
    "add_question",
    "add_prompt",
    "add_answers",
    "add_more_answers",
    "resolve_source",
    # Affordances
    "TOOLBOX_ACTIONS",
    "available_actions",
]
