"""Diagram enums for the drug review flow builder

Provides enums used for diagram nodes and the authoring toolbox.
These are shared between the authoring session and the server.
"""

from enum import Enum


class NodeKind(str, Enum):
    """Kind of a node in the questionnaire diagram."""

    DRUG_REVIEW = "drug_review"
    FOLLOW_UP = "follow_up"
    QUESTION = "question"
    ANSWER = "answer"
    PROMPT = "prompt"


class Action(str, Enum):
    """Toolbox action an author can trigger on the diagram."""

    ADD_QUESTION = "add_question"
    ADD_ANSWERS = "add_answers"
    ADD_PROMPT = "add_prompt"
    ADD_MORE_ANSWERS = "add_more_answers"


class EventType(str, Enum):
    """Authored event delivered by the presentation layer.

    - INITIALIZE: session start, creates the root node
    - VALUE_CHANGE: text typed into a node's input
    - SUBMIT: Enter pressed in a node's input
    - ADD_*: toolbox / "Add More Answers" buttons
    """

    INITIALIZE = "initialize"
    VALUE_CHANGE = "value_change"
    SUBMIT = "submit"
    ADD_QUESTION = "add_question"
    ADD_ANSWERS = "add_answers"
    ADD_PROMPT = "add_prompt"
    ADD_MORE_ANSWERS = "add_more_answers"
