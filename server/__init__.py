"""Server-side components for the drug review flow builder

This package contains the FastAPI server, AG-UI streaming helpers and REST API payloads.
Uses the official ag-ui-protocol package for AG-UI event types and encoding.
"""

from .app import SESSIONS, app
from .events import JsonPatchOp, diff_flow_states, encode_event
from .payloads import (
    AuthoringEventRequest,
    CreateSessionRequest,
    SessionResponse,
    SessionStats,
)

# Re-export AG-UI types from official package for convenience
from ag_ui.core import (
    EventType as AGUIEventType,
    RunStartedEvent,
    RunFinishedEvent,
    RunErrorEvent,
    StepStartedEvent,
    StepFinishedEvent,
    StateSnapshotEvent,
    StateDeltaEvent,
    CustomEvent,
)
from ag_ui.encoder import EventEncoder

__all__ = [
    "app",
    "SESSIONS",
    "AGUIEventType",
    "RunStartedEvent",
    "RunFinishedEvent",
    "RunErrorEvent",
    "StepStartedEvent",
    "StepFinishedEvent",
    "StateSnapshotEvent",
    "StateDeltaEvent",
    "CustomEvent",
    "EventEncoder",
    "JsonPatchOp",
    "diff_flow_states",
    "encode_event",
    "AuthoringEventRequest",
    "CreateSessionRequest",
    "SessionResponse",
    "SessionStats",
]
