"""FastAPI server for the drug review flow builder

Includes:
- REST API for authoring sessions (create, inspect, apply events)
- AG-UI streaming endpoint that applies one event and streams the resulting
  canvas changes as JSON Patch deltas
- SSE (Server-Sent Events) snapshot stream for (re)loading a canvas
"""

import os
from typing import AsyncGenerator
from uuid import uuid4

from ag_ui.core import (
    CustomEvent,
    RunErrorEvent,
    RunFinishedEvent,
    RunStartedEvent,
    StateDeltaEvent,
    StateSnapshotEvent,
    StepFinishedEvent,
    StepStartedEvent,
)
from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse

from authoring import AuthoringSession
from diagram import DiagramState, EventType, FlowState, UnknownSourceError, to_flow_state

from .events import diff_flow_states, encode_event
from .payloads import (
    AuthoringEventRequest,
    CreateSessionRequest,
    SessionResponse,
    build_session_response,
    ordered_actions,
    session_stats,
)

# --- FastAPI App ---

app = FastAPI(
    title="Drug Review Flow Builder",
    description="Interactive authoring of branching drug review questionnaires",
    version="0.1.0",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Live authoring sessions, keyed by session id, least recently used first.
# Not persisted. Creating a session beyond MAX_SESSIONS evicts the oldest.
SESSIONS: dict[str, AuthoringSession] = {}
MAX_SESSIONS = int(os.environ.get("DRUG_FLOW_MAX_SESSIONS", "1000"))

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def get_session(session_id: str) -> AuthoringSession:
    """Look up a live session or fail with 404."""
    session = SESSIONS.pop(session_id, None)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found")
    # Re-insert to mark as most recently used
    SESSIONS[session_id] = session
    return session


def register_session(session: AuthoringSession) -> None:
    """Add a session, evicting the least recently used ones over MAX_SESSIONS."""
    while SESSIONS and len(SESSIONS) >= MAX_SESSIONS:
        evicted_id = next(iter(SESSIONS))
        del SESSIONS[evicted_id]
        print(f"[SERVER] Session {evicted_id} evicted (limit {MAX_SESSIONS})")
    SESSIONS[session.session_id] = session


def apply_event(session: AuthoringSession, request: AuthoringEventRequest) -> DiagramState:
    """Apply one authored event to ``session``.

    Raises:
        UnknownSourceError: if an add event names a missing source node
    """
    return session.dispatch(
        EventType(request.type),
        node_id=request.node_id,
        value=request.value,
        source_id=request.source_id,
    )


@app.get("/api/health")
async def health() -> dict:
    return {"status": "ok", "sessions": len(SESSIONS)}


@app.post("/api/sessions", response_model=SessionResponse, status_code=201)
async def create_session(request: CreateSessionRequest | None = None) -> SessionResponse:
    """Create and initialize a session.

    With a non-blank ``drug_name`` the root is filled in and submitted.
    """
    session = AuthoringSession()
    state = session.initialize()

    if request is not None and request.drug_name is not None:
        root_id = state.root.id
        session.on_value_change(root_id, request.drug_name)
        state = session.on_submit(root_id, request.drug_name)

    register_session(session)
    print(f"[SERVER] Session {session.session_id} created ({len(SESSIONS)} live)")
    return build_session_response(session.session_id, state)


@app.get("/api/sessions/{session_id}", response_model=SessionResponse)
async def get_session_state(session_id: str) -> SessionResponse:
    session = get_session(session_id)
    return build_session_response(session.session_id, session.state)


@app.delete("/api/sessions/{session_id}", status_code=204)
async def delete_session(session_id: str) -> Response:
    """Discard a session and its diagram."""
    get_session(session_id)
    del SESSIONS[session_id]
    print(f"[SERVER] Session {session_id} deleted ({len(SESSIONS)} live)")
    return Response(status_code=204)


@app.get("/api/sessions/{session_id}/flow", response_model=FlowState)
async def get_flow(session_id: str) -> FlowState:
    """React Flow nodes and edges for the session's canvas."""
    return to_flow_state(get_session(session_id).state)


@app.get("/api/sessions/{session_id}/diagram", response_model=DiagramState)
async def get_diagram(session_id: str) -> DiagramState:
    """Raw diagram state: tagged nodes, edges and answer counters."""
    return get_session(session_id).state


@app.post("/api/sessions/{session_id}/events", response_model=SessionResponse)
async def post_event(session_id: str, request: AuthoringEventRequest) -> SessionResponse:
    """Apply one authored event (non-streaming).

    Returns the complete session state after the event.
    For streaming updates, use /api/sessions/{session_id}/events/stream instead.
    """
    session = get_session(session_id)

    try:
        state = apply_event(session, request)
    except UnknownSourceError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return build_session_response(session.session_id, state)


@app.post("/api/sessions/{session_id}/events/stream")
async def stream_event(session_id: str, request: AuthoringEventRequest):
    """Apply one authored event with AG-UI streaming.

    Uses AG-UI protocol over SSE with JSON Patch (RFC 6902) for incremental updates.

    Returns SSE stream with events:
    - RUN_STARTED: Event accepted (threadId = session id)
    - STEP_STARTED: Transition begins (stepName = event type)
    - STATE_DELTA: JSON Patch ops adding nodes/edges or replacing values
    - STEP_FINISHED: Transition complete
    - CUSTOM (available_actions): Toolbox actions legal after the event
    - RUN_FINISHED: Done, result carries session stats
    - RUN_ERROR: The event was rejected (replaces STEP_FINISHED onwards)
    """
    session = get_session(session_id)
    run_id = uuid4().hex

    async def event_generator() -> AsyncGenerator[str, None]:
        yield encode_event(RunStartedEvent(thread_id=session.session_id, run_id=run_id))
        yield encode_event(StepStartedEvent(step_name=request.type))

        before = to_flow_state(session.state)
        try:
            state = apply_event(session, request)
        except UnknownSourceError as e:
            print(f"[SERVER] Event {request.type} rejected: {e}")
            yield encode_event(RunErrorEvent(message=str(e)))
            return

        ops = diff_flow_states(before, to_flow_state(state))
        if ops:
            yield encode_event(StateDeltaEvent(delta=[op.model_dump() for op in ops]))

        yield encode_event(StepFinishedEvent(step_name=request.type))
        yield encode_event(CustomEvent(
            name="available_actions",
            value=[action.value for action in ordered_actions(state)],
        ))
        yield encode_event(RunFinishedEvent(
            thread_id=session.session_id,
            run_id=run_id,
            result=session_stats(state).model_dump(),
        ))
        print(f"[SERVER] Stream complete: {request.type} -> {len(ops)} ops")

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )


@app.get("/api/sessions/{session_id}/snapshot/stream")
async def stream_snapshot(session_id: str):
    """Stream the full canvas once (STATE_SNAPSHOT), for loading a session."""
    session = get_session(session_id)
    run_id = uuid4().hex

    async def event_generator() -> AsyncGenerator[str, None]:
        state = session.state
        yield encode_event(RunStartedEvent(thread_id=session.session_id, run_id=run_id))
        yield encode_event(StateSnapshotEvent(snapshot=to_flow_state(state).model_dump()))
        yield encode_event(CustomEvent(
            name="available_actions",
            value=[action.value for action in ordered_actions(state)],
        ))
        yield encode_event(RunFinishedEvent(
            thread_id=session.session_id,
            run_id=run_id,
            result=session_stats(state).model_dump(),
        ))

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
