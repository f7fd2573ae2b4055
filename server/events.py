"""AG-UI protocol helpers

These helpers implement the AG-UI streaming protocol for real-time canvas updates:
- JsonPatchOp: RFC 6902 JSON Patch operations for incremental updates
- diff_flow_states: JSON Patch ops turning one canvas state into the next
- encode_event: SSE encoding with a millisecond timestamp

Uses the official ag-ui-protocol package for event types and encoding.
"""

import time
from typing import Any, Literal

from ag_ui.core import BaseEvent
from ag_ui.encoder import EventEncoder
from pydantic import BaseModel

from diagram import FlowState

encoder = EventEncoder()


class JsonPatchOp(BaseModel):
    """RFC 6902 JSON Patch operation for incremental canvas updates.

    Used in STATE_DELTA events to append nodes/edges and replace node values
    without sending the full canvas state.
    """

    op: Literal["add", "remove", "replace"]
    path: str
    value: dict[str, Any] | list[Any] | str | int | bool | None = None


def diff_flow_states(before: FlowState, after: FlowState) -> list[JsonPatchOp]:
    """Compute the JSON Patch ops that turn ``before`` into ``after``.

    The diagram is append-only and only node values change in place, so the
    patch consists of:
    - replace /nodes/{i}/data/value for every existing node whose value changed
    - add /nodes/- for every appended node, in order
    - add /edges/- for every appended edge, in order
    """
    ops: list[JsonPatchOp] = []

    for index, (old, new) in enumerate(zip(before.nodes, after.nodes)):
        if old.data.value != new.data.value:
            ops.append(JsonPatchOp(op="replace", path=f"/nodes/{index}/data/value", value=new.data.value))

    for node in after.nodes[len(before.nodes):]:
        ops.append(JsonPatchOp(op="add", path="/nodes/-", value=node.model_dump()))

    for edge in after.edges[len(before.edges):]:
        ops.append(JsonPatchOp(op="add", path="/edges/-", value=edge.model_dump()))

    return ops


def encode_event(event: BaseEvent) -> str:
    """Encode an AG-UI event as an SSE frame with a millisecond timestamp.

    The original event is left untouched.
    """
    stamped = event.model_copy(update={"timestamp": int(time.time() * 1000)})
    return encoder.encode(stamped)
