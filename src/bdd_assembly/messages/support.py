"""Support code messages.

Serialized forms of parameter types, step definitions, hooks and
undefined parameter type notices.
"""

from enum import StrEnum

from bdd_assembly.models import MessageModel

from .sources import SourceReference


class HookType(StrEnum):
    """Kind of a hook."""

    BEFORE_TEST_RUN = 'BEFORE_TEST_RUN'
    AFTER_TEST_RUN = 'AFTER_TEST_RUN'
    BEFORE_TEST_CASE = 'BEFORE_TEST_CASE'
    AFTER_TEST_CASE = 'AFTER_TEST_CASE'


class StepDefinitionPatternType(StrEnum):
    """Syntax of a step definition pattern."""

    CUCUMBER_EXPRESSION = 'CUCUMBER_EXPRESSION'
    REGULAR_EXPRESSION = 'REGULAR_EXPRESSION'


class ParameterTypeMessage(MessageModel):
    """Defined parameter type."""

    id: str
    name: str
    regular_expressions: tuple[str, ...]
    prefer_for_regular_expression_match: bool
    use_for_snippets: bool
    source_reference: SourceReference


class StepDefinitionPattern(MessageModel):
    """Pattern of a step definition."""

    type: StepDefinitionPatternType
    source: str


class StepDefinitionMessage(MessageModel):
    """Defined step."""

    id: str
    pattern: StepDefinitionPattern
    source_reference: SourceReference


class HookMessage(MessageModel):
    """Defined hook of any kind."""

    id: str
    type: HookType
    name: str | None = None
    tag_expression: str | None = None
    source_reference: SourceReference


class UndefinedParameterTypeMessage(MessageModel):
    """Parameter type referenced by an expression but never defined."""

    name: str
    expression: str
