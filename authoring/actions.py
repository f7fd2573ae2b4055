"""Burr actions for the drug review authoring session

Core actions:
- receive_event: Record the incoming authored event in state
- handle_*: Apply one diagram transition for the recorded event

State structure:
- diagram: current DiagramState
- event_type: EventType value of the event being handled (drives transitions)
- event: {"node_id", "value", "source_id"} of the event being handled
- rejection: {"source_id", "message"} when the last add action named a
  missing source, else None
"""

from burr.core import State, action

from diagram import (
    DiagramState,
    UnknownSourceError,
    add_answers,
    add_more_answers,
    add_prompt,
    add_question,
    change_value,
    initialize,
    submit,
)


# ============================================================================
# Helper Functions
# ============================================================================


def _result(diagram: DiagramState) -> dict:
    return {
        "node_count": len(diagram.nodes),
        "edge_count": len(diagram.edges),
        "last_added_kind": diagram.last_added_kind,
    }


def _apply_add(state: State, transition) -> tuple[dict, State]:
    """Run an add transition against the recorded event's source.

    A missing source leaves the diagram untouched and is recorded in
    ``rejection`` so the session can report it to the caller.
    """
    diagram: DiagramState = state["diagram"]
    source_id = state["event"].get("source_id")

    try:
        diagram = transition(diagram, source_id)
    except UnknownSourceError as e:
        print(f"[{state['event_type']}] rejected: {e}")
        rejection = {"source_id": e.source_id, "message": str(e)}
        return {**_result(diagram), "rejected": str(e)}, state.update(rejection=rejection)

    return _result(diagram), state.update(diagram=diagram, rejection=None)


# ============================================================================
# Actions
# ============================================================================


@action(reads=[], writes=["event_type", "event", "rejection"])
def receive_event(
    state: State,
    event_type: str,
    node_id: str | None,
    value: str | None,
    source_id: str | None,
) -> tuple[dict, State]:
    """Record one authored event; the transitions route on ``event_type``."""
    event = {"node_id": node_id, "value": value, "source_id": source_id}
    return {"event_type": event_type}, state.update(
        event_type=event_type,
        event=event,
        rejection=None,
    )


@action(reads=["diagram"], writes=["diagram"])
def handle_initialize(state: State) -> tuple[dict, State]:
    """Empty -> DrugReview. A no-op once the root exists."""
    diagram = initialize(state["diagram"])
    return _result(diagram), state.update(diagram=diagram)


@action(reads=["diagram", "event"], writes=["diagram"])
def handle_value_change(state: State) -> tuple[dict, State]:
    event = state["event"]
    diagram = change_value(state["diagram"], event["node_id"], event["value"] or "")
    return _result(diagram), state.update(diagram=diagram)


@action(reads=["diagram", "event"], writes=["diagram"])
def handle_submit(state: State) -> tuple[dict, State]:
    """DrugReview -> FollowUp on a non-blank submission of the root."""
    event = state["event"]
    diagram = submit(state["diagram"], event["node_id"], event["value"] or "")
    return _result(diagram), state.update(diagram=diagram)


@action(reads=["diagram", "event", "event_type"], writes=["diagram", "rejection"])
def handle_add_question(state: State) -> tuple[dict, State]:
    return _apply_add(state, add_question)


@action(reads=["diagram", "event", "event_type"], writes=["diagram", "rejection"])
def handle_add_prompt(state: State) -> tuple[dict, State]:
    return _apply_add(state, add_prompt)


@action(reads=["diagram", "event", "event_type"], writes=["diagram", "rejection"])
def handle_add_answers(state: State) -> tuple[dict, State]:
    return _apply_add(state, add_answers)


@action(reads=["diagram", "event", "event_type"], writes=["diagram", "rejection"])
def handle_add_more_answers(state: State) -> tuple[dict, State]:
    return _apply_add(state, add_more_answers)
