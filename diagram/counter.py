"""Answer-pairing counter

Tracks, per source node id, the next answer sequence number. Entries are
created lazily, never reset and only grow. The table is a tuple of
(source_id, next_sequence) pairs so it can live inside a frozen DiagramState.
"""

from collections.abc import Mapping

FIRST_SEQUENCE = 1

CounterPairs = tuple[tuple[str, int], ...]


def next_sequence(
    table: CounterPairs | Mapping[str, int], source_id: str, how_many: int
) -> tuple[int, int, CounterPairs]:
    """Reserve ``how_many`` consecutive sequence numbers for ``source_id``.

    Returns (first, last, new_table). The input table is not modified.

    Examples:
        next_sequence((), "followUp-node-1", 2) -> (1, 2, (("followUp-node-1", 3),))
        next_sequence((("followUp-node-1", 3),), "followUp-node-1", 1) -> (3, 3, (("followUp-node-1", 4),))
    """
    counters = dict(table)
    first = counters.get(source_id, FIRST_SEQUENCE)
    counters[source_id] = first + how_many
    return first, first + how_many - 1, tuple(counters.items())
