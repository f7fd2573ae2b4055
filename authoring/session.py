"""Burr application and session wrapper for authoring a drug review diagram

Example usage:

    from authoring import AuthoringSession

    session = AuthoringSession()
    session.initialize()
    session.on_value_change("node-1", "Ibuprofen")
    state = session.on_submit("node-1", "Ibuprofen")
    state = session.on_add_answers("followUp-node-1")
    print(session.available_actions())

Every authored event runs as two Burr steps: ``receive_event`` records the
event, then the transition on ``event_type`` picks the matching handler,
which applies one diagram transition and hands control back to
``receive_event``. One event is applied completely before the next is
accepted.
"""

from uuid import uuid4

from burr.core import Application, ApplicationBuilder, when

from diagram import Action, DiagramState, EventType, UnknownSourceError, available_actions

from .actions import (
    handle_add_answers,
    handle_add_more_answers,
    handle_add_prompt,
    handle_add_question,
    handle_initialize,
    handle_submit,
    handle_value_change,
    receive_event,
)

# Handler action name per event type
HANDLERS: dict[EventType, str] = {
    EventType.INITIALIZE: "handle_initialize",
    EventType.VALUE_CHANGE: "handle_value_change",
    EventType.SUBMIT: "handle_submit",
    EventType.ADD_QUESTION: "handle_add_question",
    EventType.ADD_ANSWERS: "handle_add_answers",
    EventType.ADD_PROMPT: "handle_add_prompt",
    EventType.ADD_MORE_ANSWERS: "handle_add_more_answers",
}


def build_authoring_app(app_id: str, diagram: DiagramState | None = None) -> Application:
    """Build the Burr application driving one authoring session.

    Args:
        app_id: Application identifier (the session id)
        diagram: Starting diagram (default: empty)

    Returns:
        Application positioned at ``receive_event``
    """
    return (
        ApplicationBuilder()
        .with_actions(
            receive_event=receive_event,
            handle_initialize=handle_initialize,
            handle_value_change=handle_value_change,
            handle_submit=handle_submit,
            handle_add_question=handle_add_question,
            handle_add_answers=handle_add_answers,
            handle_add_prompt=handle_add_prompt,
            handle_add_more_answers=handle_add_more_answers,
        )
        .with_transitions(
            # Route the recorded event to its handler
            *[
                ("receive_event", handler, when(event_type=event_type.value))
                for event_type, handler in HANDLERS.items()
            ],
            # Every handler waits for the next event
            *[(handler, "receive_event") for handler in HANDLERS.values()],
        )
        .with_entrypoint("receive_event")
        .with_state(
            diagram=diagram if diagram is not None else DiagramState(),
            event_type=None,
            event={},
            rejection=None,
        )
        .with_identifiers(app_id=app_id)
        .build()
    )


class AuthoringSession:
    """One author's interactive diagram.

    Owns the single mutable slot holding the current DiagramState (inside
    the Burr application). Every ``on_*`` method applies one authored event
    and returns the resulting state.
    """

    def __init__(self, session_id: str | None = None):
        self.session_id = session_id or uuid4().hex
        self._app = build_authoring_app(app_id=self.session_id)
        print(f"[SESSION {self.session_id}] created")

    @property
    def state(self) -> DiagramState:
        """Current diagram state."""
        return self._app.state["diagram"]

    def dispatch(
        self,
        event_type: EventType,
        node_id: str | None = None,
        value: str | None = None,
        source_id: str | None = None,
    ) -> DiagramState:
        """Apply one authored event and return the new diagram state.

        Raises:
            UnknownSourceError: if an add event names a missing source node
        """
        event_type = EventType(event_type)
        self._app.step(
            inputs={
                "event_type": event_type.value,
                "node_id": node_id,
                "value": value,
                "source_id": source_id,
            }
        )
        _, _, burr_state = self._app.step()

        diagram: DiagramState = burr_state["diagram"]
        print(
            f"[SESSION {self.session_id}] {event_type.value}: "
            f"nodes={len(diagram.nodes)}, edges={len(diagram.edges)}, "
            f"last_added_kind={diagram.last_added_kind}"
        )

        rejection = burr_state["rejection"]
        if rejection is not None:
            raise UnknownSourceError(rejection["source_id"])
        return diagram

    def initialize(self) -> DiagramState:
        return self.dispatch(EventType.INITIALIZE)

    def on_value_change(self, node_id: str, new_value: str) -> DiagramState:
        return self.dispatch(EventType.VALUE_CHANGE, node_id=node_id, value=new_value)

    def on_submit(self, node_id: str, current_value: str) -> DiagramState:
        return self.dispatch(EventType.SUBMIT, node_id=node_id, value=current_value)

    def on_add_question(self, source_id: str | None = None) -> DiagramState:
        return self.dispatch(EventType.ADD_QUESTION, source_id=source_id)

    def on_add_answers(self, source_id: str | None = None) -> DiagramState:
        return self.dispatch(EventType.ADD_ANSWERS, source_id=source_id)

    def on_add_prompt(self, source_id: str | None = None) -> DiagramState:
        return self.dispatch(EventType.ADD_PROMPT, source_id=source_id)

    def on_add_more_answers(self, source_id: str | None = None) -> DiagramState:
        return self.dispatch(EventType.ADD_MORE_ANSWERS, source_id=source_id)

    def available_actions(self) -> frozenset[Action]:
        return available_actions(self.state)
