"""Diagram types for the drug review flow builder

These types are the single source of truth for questionnaire nodes and edges,
used by the authoring session, the REST API and the AG-UI stream.

Nodes are a tagged union over the five node kinds, discriminated by ``kind``.
Each kind carries only the fields it needs; the label shown by the renderer
and the React Flow node type are class-level constants.

Key feature: everything that lives inside a DiagramState is immutable.
Models are ConfigDict(frozen=True), sequences are tuples and the answer
counters are a tuple of (source_id, next_sequence) pairs. Transitions build
new values with model_copy() instead of mutating in place.
"""

from collections.abc import Mapping
from typing import Annotated, Any, ClassVar, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer, WithJsonSchema

from .enums import NodeKind


class Position(BaseModel):
    """2-D position of a node on the canvas."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class BaseNode(BaseModel):
    """Fields shared by every node kind."""

    model_config = ConfigDict(frozen=True)

    label: ClassVar[str] = ""
    flow_type: ClassVar[str] = ""

    id: str
    value: str = ""
    position: Position

    def to_flow(self) -> "FlowNode":
        """Project this node into the shape the React Flow canvas renders."""
        return FlowNode(
            id=self.id,
            type=self.flow_type,
            data=FlowNodeData(label=self.label, value=self.value, kind=self.kind),
            position=self.position,
        )


class DrugReviewNode(BaseNode):
    """Root node: the drug under review."""

    label: ClassVar[str] = "What is the drug you are reviewing?"
    flow_type: ClassVar[str] = "drugReviewNode"

    kind: Literal["drug_review"] = "drug_review"


class FollowUpNode(BaseNode):
    """Follow-up question spawned by submitting the drug name."""

    label: ClassVar[str] = "Follow-up Questions:"
    flow_type: ClassVar[str] = "followUpNode"

    kind: Literal["follow_up"] = "follow_up"
    trigger_id: str


class QuestionNode(BaseNode):
    label: ClassVar[str] = "Question:"
    flow_type: ClassVar[str] = "questionNode"

    kind: Literal["question"] = "question"


class AnswerNode(BaseNode):
    """One answer option attached to a source node.

    ``sequence`` comes from the per-source answer counter, so answers added
    to the same source across several actions never share a number.
    """

    label: ClassVar[str] = "Answer:"
    flow_type: ClassVar[str] = "answerNode"

    kind: Literal["answer"] = "answer"
    source_id: str
    sequence: int


class PromptNode(BaseNode):
    label: ClassVar[str] = "Prompt:"
    flow_type: ClassVar[str] = "promptNode"

    kind: Literal["prompt"] = "prompt"


DiagramNode = Annotated[
    DrugReviewNode | FollowUpNode | QuestionNode | AnswerNode | PromptNode,
    Field(discriminator="kind"),
]

def _counter_pairs(value: Any) -> Any:
    if isinstance(value, Mapping):
        return tuple(value.items())
    return value


# Read-only counter table: pairs in memory, a {source_id: next} object on the wire
AnswerCounters = Annotated[
    tuple[tuple[str, int], ...],
    BeforeValidator(_counter_pairs),
    PlainSerializer(dict, return_type=dict[str, int]),
    WithJsonSchema({"type": "object", "additionalProperties": {"type": "integer"}}),
]


class DiagramEdge(BaseModel):
    """A directed edge from a source node to the node it spawned."""

    model_config = ConfigDict(frozen=True)

    id: str
    source: str
    target: str

    def to_flow(self) -> "FlowEdge":
        return FlowEdge(id=self.id, source=self.source, target=self.target)


class DiagramState(BaseModel):
    """Complete state of one authoring session's diagram.

    This state is:
    - Held in Burr state by the authoring session
    - Returned from every transition as a new value
    - Projected to React Flow nodes/edges for the frontend

    Fields:
    - nodes / edges: append-only, in insertion order
    - last_added_kind: kind of the most recently appended node (None when empty)
    - active_source_id: id of the most recently appended node
    - answer_counters: (source_id, next answer sequence number) pairs

    All fields are immutable, so a state handed out by the session cannot be
    changed behind the transitions' back.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    nodes: tuple[DiagramNode, ...] = ()
    edges: tuple[DiagramEdge, ...] = ()
    last_added_kind: NodeKind | None = None
    active_source_id: str | None = None
    answer_counters: AnswerCounters = ()

    def counter_table(self) -> dict[str, int]:
        """Copy of the answer counters as {source_id: next sequence}."""
        return dict(self.answer_counters)

    def get_node(self, node_id: str) -> BaseNode | None:
        """Return the node with ``node_id``, or None if absent."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def has_node(self, node_id: str) -> bool:
        return self.get_node(node_id) is not None

    def node_index(self, node_id: str) -> int | None:
        """Position of ``node_id`` in insertion order (JSON Patch index)."""
        for index, node in enumerate(self.nodes):
            if node.id == node_id:
                return index
        return None

    @property
    def root(self) -> DrugReviewNode | None:
        return self.nodes[0] if self.nodes else None


# --- React Flow projection ---


class FlowNodeData(BaseModel):
    """``data`` payload of a React Flow node: what the node renderer binds to."""

    label: str
    value: str
    kind: str


class FlowNode(BaseModel):
    """Node in the shape consumed by the React Flow canvas."""

    id: str
    type: str
    data: FlowNodeData
    position: Position


class FlowEdge(BaseModel):
    """Edge in the shape consumed by the React Flow canvas."""

    id: str
    source: str
    target: str


class FlowState(BaseModel):
    """Full canvas payload for STATE_SNAPSHOT events and REST responses."""

    nodes: list[FlowNode]
    edges: list[FlowEdge]


def to_flow_state(state: DiagramState) -> FlowState:
    """Project a diagram state into React Flow nodes and edges."""
    return FlowState(
        nodes=[node.to_flow() for node in state.nodes],
        edges=[edge.to_flow() for edge in state.edges],
    )
