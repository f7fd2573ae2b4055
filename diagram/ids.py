"""Identifier allocation for diagram nodes and edges

Ids are derived from context rather than drawn from a global counter:
- Root: fixed ROOT_ID
- Follow-up: derived from its trigger node, so a trigger has at most one
- Question/Prompt: derived from the node count (nodes are never deleted)
- Answer: derived from (source id, sequence number)
- Edge: derived from (source id, target id)
"""

ROOT_ID = "node-1"


def follow_up_id(trigger_id: str) -> str:
    """Id of the follow-up node spawned from ``trigger_id``.

    Examples:
        follow_up_id("node-1") -> "followUp-node-1"
    """
    return f"followUp-{trigger_id}"


def generic_node_id(node_count: int) -> str:
    """Id for a Question or Prompt node appended to a store of ``node_count`` nodes.

    The count only ever grows, so it stands in for a monotonic counter.

    Examples:
        generic_node_id(2) -> "node-3"
    """
    return f"node-{node_count + 1}"


def answer_id(source_id: str, sequence: int) -> str:
    """Id of answer number ``sequence`` attached to ``source_id``.

    Examples:
        answer_id("followUp-node-1", 2) -> "answer-followUp-node-1-2"
    """
    return f"answer-{source_id}-{sequence}"


def edge_id(source_id: str, target_id: str) -> str:
    """Id of the edge ``source_id`` -> ``target_id``.

    Examples:
        edge_id("node-1", "followUp-node-1") -> "enode-1-followUp-node-1"
    """
    return f"e{source_id}-{target_id}"
