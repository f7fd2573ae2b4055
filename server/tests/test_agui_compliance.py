"""AG-UI Protocol Compliance Tests

These tests verify that the SSE events conform to the AG-UI protocol v0.1 spec
using the official ag-ui-protocol package types and EventEncoder.

AG-UI Protocol Requirements:
- Events use typed classes from ag_ui.core (not a flat envelope)
- RunStartedEvent/RunFinishedEvent: must include threadId, runId
- RunErrorEvent: must include message (no threadId/runId per spec)
- StepStartedEvent/StepFinishedEvent: must use stepName (not step_id)
- StateSnapshotEvent: must use snapshot field
- StateDeltaEvent: must use delta field with JSON Patch ops
- CustomEvent: carries domain-specific data with name + value
- EventEncoder: produces SSE format "data: {...}\n\n" with camelCase keys
- Timestamps: millisecond-precision timestamps on all events
"""

import json
import time

import pytest

from ag_ui.core import (
    CustomEvent,
    EventType,
    RunErrorEvent,
    RunFinishedEvent,
    RunStartedEvent,
    StateDeltaEvent,
    StateSnapshotEvent,
    StepFinishedEvent,
    StepStartedEvent,
)
from ag_ui.encoder import EventEncoder

from diagram import add_answers, change_value, initialize, submit, to_flow_state
from server.events import JsonPatchOp, diff_flow_states, encode_event

encoder = EventEncoder()


def decode(encoded: str) -> dict:
    return json.loads(encoded.removeprefix("data: ").rstrip())


class TestEventEncoder:
    """Test that EventEncoder produces correct SSE format."""

    def test_encode_produces_sse_format(self):
        """EventEncoder.encode() must produce 'data: {...}\\n\\n' format."""
        event = RunStartedEvent(thread_id="t-1", run_id="r-1")
        encoded = encoder.encode(event)
        assert encoded.startswith("data: ")
        assert encoded.endswith("\n\n")

    def test_encode_uses_camel_case_keys(self):
        """Encoded JSON must use camelCase keys (threadId, not thread_id)."""
        data = decode(encoder.encode(RunStartedEvent(thread_id="t-1", run_id="r-1")))
        assert "threadId" in data
        assert "runId" in data
        assert "thread_id" not in data

    def test_encode_excludes_none_fields(self):
        """Encoded JSON must exclude None fields (exclude_none behavior)."""
        data = decode(encoder.encode(StepStartedEvent(step_name="add_answers")))
        assert "stepName" in data
        assert "threadId" not in data


class TestEncodeEventHelper:
    """Test the encode_event helper that injects timestamps."""

    def test_encode_event_adds_timestamp(self):
        """encode_event() must inject a millisecond timestamp."""
        before = int(time.time() * 1000)
        data = decode(encode_event(RunStartedEvent(thread_id="t-1", run_id="r-1")))
        after = int(time.time() * 1000)
        assert before <= data["timestamp"] <= after

    def test_encode_event_preserves_sse_format(self):
        encoded = encode_event(StepStartedEvent(step_name="submit"))
        assert encoded.startswith("data: ")
        assert encoded.endswith("\n\n")

    def test_encode_event_does_not_mutate_original(self):
        event = RunStartedEvent(thread_id="t-1", run_id="r-1")
        assert event.timestamp is None
        encode_event(event)
        assert event.timestamp is None


class TestRunLifecycleEvents:
    def test_run_finished_with_result(self):
        """RunFinishedEvent uses 'result' field for session stats."""
        event = RunFinishedEvent(
            thread_id="session-1",
            run_id="run-1",
            result={"node_count": 5, "edge_count": 4},
        )
        data = decode(encoder.encode(event))
        assert data["type"] == "RUN_FINISHED"
        assert data["result"]["node_count"] == 5

    def test_run_error_uses_message_field(self):
        """RunErrorEvent uses 'message' field (not 'error'), no threadId/runId."""
        data = decode(encoder.encode(RunErrorEvent(message="Source node 'ghost' not found")))
        assert data["type"] == "RUN_ERROR"
        assert data["message"] == "Source node 'ghost' not found"
        assert "threadId" not in data


class TestStateEvents:
    def test_state_snapshot_carries_flow_state(self):
        snapshot = to_flow_state(submit(initialize(), "node-1", "Aspirin")).model_dump()
        data = decode(encoder.encode(StateSnapshotEvent(snapshot=snapshot)))
        assert data["type"] == "STATE_SNAPSHOT"
        assert [node["type"] for node in data["snapshot"]["nodes"]] == ["drugReviewNode", "followUpNode"]
        assert data["snapshot"]["edges"][0]["source"] == "node-1"

    def test_state_delta_carries_patch_ops(self):
        ops = [JsonPatchOp(op="add", path="/edges/-", value={"id": "ea-b", "source": "a", "target": "b"})]
        data = decode(encoder.encode(StateDeltaEvent(delta=[op.model_dump() for op in ops])))
        assert data["type"] == "STATE_DELTA"
        assert data["delta"][0]["op"] == "add"
        assert data["delta"][0]["path"] == "/edges/-"

    def test_custom_event_for_actions(self):
        data = decode(encoder.encode(CustomEvent(name="available_actions", value=["add_more_answers"])))
        assert data["type"] == "CUSTOM"
        assert data["name"] == "available_actions"
        assert data["value"] == ["add_more_answers"]


class TestDiffFlowStates:
    """JSON Patch ops between consecutive canvas states."""

    def test_no_change_no_ops(self):
        flow = to_flow_state(initialize())
        assert diff_flow_states(flow, flow) == []

    def test_appended_nodes_and_edges(self):
        before_state = submit(initialize(), "node-1", "Aspirin")
        after_state = add_answers(before_state)
        ops = diff_flow_states(to_flow_state(before_state), to_flow_state(after_state))

        assert [(op.op, op.path) for op in ops] == [
            ("add", "/nodes/-"),
            ("add", "/nodes/-"),
            ("add", "/edges/-"),
            ("add", "/edges/-"),
        ]
        assert ops[0].value["id"] == "answer-followUp-node-1-1"
        assert ops[0].value["type"] == "answerNode"
        assert ops[0].value["data"]["label"] == "Answer:"
        assert ops[2].value["target"] == "answer-followUp-node-1-1"

    def test_value_change_is_replace(self):
        before_state = submit(initialize(), "node-1", "Aspirin")
        after_state = change_value(before_state, "followUp-node-1", "How long?")
        ops = diff_flow_states(to_flow_state(before_state), to_flow_state(after_state))
        assert len(ops) == 1
        assert ops[0].op == "replace"
        assert ops[0].path == "/nodes/1/data/value"
        assert ops[0].value == "How long?"

    def test_submit_replaces_root_value_then_adds(self):
        before_state = initialize()
        after_state = submit(before_state, "node-1", "Aspirin")
        ops = diff_flow_states(to_flow_state(before_state), to_flow_state(after_state))
        assert [(op.op, op.path) for op in ops] == [
            ("replace", "/nodes/0/data/value"),
            ("add", "/nodes/-"),
            ("add", "/edges/-"),
        ]


class TestEventTypeEnum:
    """Test that ag_ui.core.EventType has the event types the server emits."""

    def test_run_lifecycle_events_exist(self):
        assert EventType.RUN_STARTED.value == "RUN_STARTED"
        assert EventType.RUN_FINISHED.value == "RUN_FINISHED"
        assert EventType.RUN_ERROR.value == "RUN_ERROR"

    def test_step_and_state_events_exist(self):
        assert EventType.STEP_STARTED.value == "STEP_STARTED"
        assert EventType.STEP_FINISHED.value == "STEP_FINISHED"
        assert EventType.STATE_SNAPSHOT.value == "STATE_SNAPSHOT"
        assert EventType.STATE_DELTA.value == "STATE_DELTA"
        assert EventType.CUSTOM.value == "CUSTOM"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
