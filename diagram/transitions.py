"""Branching state machine transitions

Each transition takes the current DiagramState and one authored event and
returns the next DiagramState. States are the ``last_added_kind`` values plus
the empty state before the root exists:

    Empty --initialize--> DrugReview --submit(non-blank)--> FollowUp
    any   --add_question--> Question
    any   --add_prompt--> Prompt
    any   --add_answers (x2) / add_more_answers (x1)--> Answer

Add actions attach to ``source_id``, defaulting to the most recently appended
node (``active_source_id``). A source that does not exist is rejected with
UnknownSourceError and the state is left unchanged, so every node always has
exactly one inbound edge.
"""

from .counter import next_sequence
from .enums import NodeKind
from .errors import UnknownSourceError
from .ids import ROOT_ID, answer_id, edge_id, follow_up_id, generic_node_id
from .layout import position_for, root_position
from .store import append_edge, append_node, update_node_value
from .types import (
    AnswerNode,
    BaseNode,
    DiagramEdge,
    DiagramState,
    DrugReviewNode,
    FollowUpNode,
    PromptNode,
    QuestionNode,
)

PAIR_SIZE = 2


# ============================================================================
# Helper Functions
# ============================================================================


def _connect(state: DiagramState, source_id: str, node: BaseNode) -> DiagramState:
    """Append ``node`` and its single inbound edge from ``source_id``."""
    state = append_node(state, node)
    return append_edge(
        state,
        DiagramEdge(id=edge_id(source_id, node.id), source=source_id, target=node.id),
    )


def resolve_source(state: DiagramState, source_id: str | None) -> str:
    """Return the source an add action attaches to.

    Falls back to the most recently appended node when ``source_id`` is None.

    Raises:
        UnknownSourceError: if the resolved id is not in the diagram
    """
    resolved = source_id if source_id is not None else state.active_source_id
    if resolved is None or not state.has_node(resolved):
        raise UnknownSourceError(resolved)
    return resolved


def _append_answers(state: DiagramState, source_id: str, how_many: int) -> DiagramState:
    first, last, counters = next_sequence(state.answer_counters, source_id, how_many)
    state = state.model_copy(update={"answer_counters": counters})

    # Appended one at a time so each answer gets its own row
    for sequence in range(first, last + 1):
        node = AnswerNode(
            id=answer_id(source_id, sequence),
            source_id=source_id,
            sequence=sequence,
            position=position_for(len(state.nodes)),
        )
        state = _connect(state, source_id, node)
    return state


# ============================================================================
# Transitions
# ============================================================================


def initialize(state: DiagramState | None = None) -> DiagramState:
    """Empty -> DrugReview: create the root node.

    A state that already has nodes is returned as is; there is only ever one
    root.
    """
    if state is not None and state.nodes:
        return state
    root = DrugReviewNode(id=ROOT_ID, position=root_position())
    return append_node(DiagramState(), root)


def change_value(state: DiagramState, node_id: str, value: str) -> DiagramState:
    """Text typed into a node's input. Unknown node ids are ignored."""
    return update_node_value(state, node_id, value)


def submit(state: DiagramState, node_id: str, value: str) -> DiagramState:
    """DrugReview -> FollowUp: Enter pressed in a node's input.

    Only a non-blank submission on the root, while the root is still the
    most recently appended node, spawns the follow-up. Anything else is
    ignored.
    """
    if not value.strip():
        return state
    if state.last_added_kind != NodeKind.DRUG_REVIEW:
        return state
    root = state.root
    if root is None or root.id != node_id:
        return state

    state = update_node_value(state, node_id, value)
    follow_up = FollowUpNode(
        id=follow_up_id(node_id),
        trigger_id=node_id,
        position=position_for(len(state.nodes)),
    )
    return _connect(state, node_id, follow_up)


def add_question(state: DiagramState, source_id: str | None = None) -> DiagramState:
    """any -> Question: append one Question under ``source_id``."""
    source_id = resolve_source(state, source_id)
    node = QuestionNode(id=generic_node_id(len(state.nodes)), position=position_for(len(state.nodes)))
    return _connect(state, source_id, node)


def add_prompt(state: DiagramState, source_id: str | None = None) -> DiagramState:
    """any -> Prompt: append one Prompt under ``source_id``."""
    source_id = resolve_source(state, source_id)
    node = PromptNode(id=generic_node_id(len(state.nodes)), position=position_for(len(state.nodes)))
    return _connect(state, source_id, node)


def add_answers(state: DiagramState, source_id: str | None = None) -> DiagramState:
    """any -> Answer: append an answer pair under ``source_id``."""
    source_id = resolve_source(state, source_id)
    return _append_answers(state, source_id, PAIR_SIZE)


def add_more_answers(state: DiagramState, source_id: str | None = None) -> DiagramState:
    """any -> Answer: append one more answer.

    When ``source_id`` is itself an answer, the new answer joins that
    answer's sibling group and continues its source's numbering.
    """
    source_id = resolve_source(state, source_id)
    source = state.get_node(source_id)
    if isinstance(source, AnswerNode):
        source_id = source.source_id
    return _append_answers(state, source_id, 1)
