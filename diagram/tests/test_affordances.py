"""Affordance selector tests

The Question/Answers/Prompt toolbox is tied to the most recently appended
node being a follow-up; "Add More Answers" only needs a follow-up to exist.
"""

from diagram import (
    Action,
    DiagramState,
    TOOLBOX_ACTIONS,
    add_answers,
    add_more_answers,
    add_prompt,
    add_question,
    available_actions,
    change_value,
    initialize,
    submit,
)


def _follow_up() -> DiagramState:
    return submit(initialize(), "node-1", "Aspirin")


class TestAvailableActions:
    def test_empty_diagram_has_no_actions(self):
        assert available_actions(DiagramState()) == frozenset()

    def test_root_only_has_no_actions(self):
        assert available_actions(initialize()) == frozenset()

    def test_follow_up_shows_everything(self):
        assert available_actions(_follow_up()) == frozenset(
            {Action.ADD_QUESTION, Action.ADD_ANSWERS, Action.ADD_PROMPT, Action.ADD_MORE_ANSWERS}
        )

    def test_question_hides_toolbox(self):
        state = add_question(_follow_up())
        actions = available_actions(state)
        assert actions.isdisjoint(TOOLBOX_ACTIONS)
        assert actions == frozenset({Action.ADD_MORE_ANSWERS})

    def test_question_hides_toolbox_regardless_of_history(self):
        state = add_answers(_follow_up())
        state = add_prompt(state)
        state = add_more_answers(state, "followUp-node-1")
        state = add_question(state)
        assert available_actions(state).isdisjoint(TOOLBOX_ACTIONS)

    def test_answers_and_prompts_hide_toolbox(self):
        assert available_actions(add_answers(_follow_up())) == frozenset({Action.ADD_MORE_ANSWERS})
        assert available_actions(add_prompt(_follow_up())) == frozenset({Action.ADD_MORE_ANSWERS})

    def test_value_edits_do_not_change_actions(self):
        state = _follow_up()
        edited = change_value(state, "followUp-node-1", "How often?")
        assert available_actions(edited) == available_actions(state)

    def test_projection_is_pure(self):
        state = _follow_up()
        assert available_actions(state) == available_actions(state)
        assert len(state.nodes) == 2
