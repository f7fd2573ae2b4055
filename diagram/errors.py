"""Diagram errors

Only add actions naming a missing source node raise. Every other malformed
authoring event (blank submission, unknown node on value change) is ignored
without changing state.
"""


class DiagramError(ValueError):
    """Base class for rejected diagram transitions."""


class UnknownSourceError(DiagramError):
    """An add action named a source node that does not exist."""

    def __init__(self, source_id: str | None):
        self.source_id = source_id
        super().__init__(f"Source node '{source_id}' not found")
