"""Assembled test case messages."""

from typing import ClassVar

from bdd_assembly.models import MessageModel


class Group(MessageModel):
    """Captured group of a step match argument, with nested groups."""

    start: int | None = None
    value: str | None = None
    children: tuple['Group', ...] = ()


class StepMatchArgument(MessageModel):
    """Argument extracted from a step text by one step definition."""

    group: Group
    parameter_type_name: str | None = None


class StepMatchArgumentsList(MessageModel):
    """All arguments extracted by one matching step definition."""

    step_match_arguments: tuple[StepMatchArgument, ...] = ()


class TestStepMessage(MessageModel):
    """Test step referring either to a hook or to a pickle step.

    Hook steps carry `hook_id` only; pickle steps carry the pickle step id
    and the matching step definitions.
    """

    __test__: ClassVar[bool] = False

    id: str
    hook_id: str | None = None
    pickle_step_id: str | None = None
    step_definition_ids: tuple[str, ...] | None = None
    step_match_arguments_lists: tuple[StepMatchArgumentsList, ...] | None = None


class TestCaseMessage(MessageModel):
    """Assembled test case."""

    __test__: ClassVar[bool] = False

    id: str
    pickle_id: str
    test_steps: tuple[TestStepMessage, ...] = ()
    test_run_started_id: str | None = None
