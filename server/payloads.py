"""REST API request/response payload types

These types define the contract for the REST API endpoints:
- /api/sessions: Create an authoring session
- /api/sessions/{session_id}: Current canvas, toolbox actions and stats
- /api/sessions/{session_id}/events: Apply one authored event
- /api/sessions/{session_id}/events/stream: Same, streamed as AG-UI events (uses server.events)
"""

from pydantic import BaseModel, ConfigDict

from diagram import Action, DiagramState, EventType, FlowState, NodeKind, available_actions, to_flow_state


class CreateSessionRequest(BaseModel):
    """Request body for creating a session.

    When ``drug_name`` is given the root is filled in and submitted, so the
    session starts at the follow-up.
    """

    drug_name: str | None = None


class AuthoringEventRequest(BaseModel):
    """One authored event from the canvas.

    Field usage by event type:
    - value_change: node_id, value
    - submit: node_id, value
    - add_question / add_answers / add_prompt / add_more_answers: source_id
      (optional, defaults to the most recently appended node)
    """

    model_config = ConfigDict(use_enum_values=True)

    type: EventType
    node_id: str | None = None
    value: str | None = None
    source_id: str | None = None


class SessionStats(BaseModel):
    """Statistics about a session's diagram."""

    model_config = ConfigDict(use_enum_values=True)

    node_count: int
    edge_count: int
    last_added_kind: NodeKind | None
    active_source_id: str | None
    answer_counters: dict[str, int]


class SessionResponse(BaseModel):
    """Response for session endpoints.

    Uses diagram.FlowState so the frontend can hand nodes/edges straight
    to React Flow.
    """

    model_config = ConfigDict(use_enum_values=True)

    session_id: str
    state: FlowState
    actions: list[Action]
    stats: SessionStats


def ordered_actions(state: DiagramState) -> list[Action]:
    """Available actions in toolbox order (stable across requests)."""
    actions = available_actions(state)
    return [action for action in Action if action in actions]


def session_stats(state: DiagramState) -> SessionStats:
    return SessionStats(
        node_count=len(state.nodes),
        edge_count=len(state.edges),
        last_added_kind=state.last_added_kind,
        active_source_id=state.active_source_id,
        answer_counters=dict(state.answer_counters),
    )


def build_session_response(session_id: str, state: DiagramState) -> SessionResponse:
    return SessionResponse(
        session_id=session_id,
        state=to_flow_state(state),
        actions=ordered_actions(state),
        stats=session_stats(state),
    )
