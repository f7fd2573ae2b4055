"""Authoring session module for the drug review flow builder

Provides the Burr-based state machine that applies authored events
(typed text, Enter, toolbox buttons) to a diagram one at a time.

## Example usage

    from authoring import AuthoringSession

    session = AuthoringSession()
    state = session.initialize()
    state = session.on_submit(state.root.id, "Aspirin")
    state = session.on_add_question()          # attaches to the follow-up
    print([node.id for node in state.nodes])
    print(session.available_actions())
"""

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
from .session import HANDLERS, AuthoringSession, build_authoring_app

__all__ = [
    # Actions
    "receive_event",
    "handle_initialize",
    "handle_value_change",
    "handle_submit",
    "handle_add_question",
    "handle_add_answers",
    "handle_add_prompt",
    "handle_add_more_answers",
    # Session
    "HANDLERS",
    "AuthoringSession",
    "build_authoring_app",
]
