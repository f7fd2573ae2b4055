"""Affordance selector: which toolbox actions are currently legal

A pure projection of DiagramState, recomputed on every query.
"""

from .enums import Action, NodeKind
from .types import DiagramState

TOOLBOX_ACTIONS = frozenset({Action.ADD_QUESTION, Action.ADD_ANSWERS, Action.ADD_PROMPT})


def available_actions(state: DiagramState) -> frozenset[Action]:
    """Return the actions the author may trigger on ``state``.

    - The Question/Answers/Prompt toolbox shows only right after a follow-up
      was appended.
    - "Add More Answers" shows once any follow-up exists anywhere.
    """
    actions: set[Action] = set()

    if state.nodes and state.last_added_kind == NodeKind.FOLLOW_UP:
        actions.update(TOOLBOX_ACTIONS)

    if any(node.kind == NodeKind.FOLLOW_UP for node in state.nodes):
        actions.add(Action.ADD_MORE_ANSWERS)

    return frozenset(actions)
