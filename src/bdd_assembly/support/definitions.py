"""Support code registrations and their compiled definitions.

Registrations (`New*` models) are the declarative descriptions handed to
the support code builder. Definitions (`Defined*` models) are what the
builder compiles them into: immutable records with a unique id and a
registration order shared across all categories, each able to serialize
itself into an envelope.
"""

from abc import abstractmethod
from collections.abc import Callable
from re import Pattern
from typing import Any

from pydantic import Field

from bdd_assembly.messages import (
    Envelope,
    HookMessage,
    HookType,
    ParameterTypeMessage,
    SourceReference,
    StepDefinitionMessage,
    StepDefinitionPattern,
    UndefinedParameterTypeMessage,
)
from bdd_assembly.models import SchemaModel
from bdd_assembly.names import ParameterTypeName  # noqa: TC001

from .expressions import ExpressionMatcher, MatchArgument  # noqa: TC001
from .tags import TagPredicate  # noqa: TC001

#: A function defined by the end user for a step or a hook.
type SupportCodeFunction = Callable[..., Any]


class SourcedMixin(SchemaModel):
    """Mixin providing the origin of user-defined support code."""

    source_reference: SourceReference = Field(
        title='Source reference',
        description=(
            'Reference to the user code defining the element. '
            'Used for diagnostics such as ambiguous step reports.'
        ),
    )


class NewParameterType(SourcedMixin, SchemaModel):
    """Attributes for registering a new parameter type."""

    name: ParameterTypeName = Field(
        title='Parameter type name',
    )

    regexp: str | Pattern[str] | tuple[str | Pattern[str], ...] = Field(
        title='Regular expressions',
        description=(
            'One or more regular expressions matching the parameter. '
            'Flags of compiled patterns are kept as scoped inline flags.'
        ),
    )

    transformer: Callable[..., Any] | None = Field(
        default=None,
        title='Value transformer',
        description=(
            'Callable converting the captured group values into the value '
            'passed to the step function. Without it the raw text is passed.'
        ),
    )

    use_for_snippets: bool = Field(
        default=True,
        title='Use for snippets',
        description='Whether to suggest the parameter type in snippets for undefined steps.',
    )

    prefer_for_regexp_match: bool = Field(
        default=False,
        title='Prefer for regular expression match',
        description=(
            'Whether the parameter type takes precedence when its regular '
            'expression is used inside a regular expression step pattern.'
        ),
    )

    pass_context: bool = Field(
        default=False,
        title='Pass execution context',
        description=(
            'Whether the transformer receives the execution context as its '
            'first argument. Such values are resolved when a step is prepared.'
        ),
    )

    @property
    def regexps(self) -> tuple[str | Pattern[str], ...]:
        """Return the registered regular expressions as a tuple."""
        if isinstance(self.regexp, tuple):
            return self.regexp

        return (self.regexp,)


class NewStep(SourcedMixin, SchemaModel):
    """Attributes for registering a new step definition."""

    pattern: str | Pattern[str] = Field(
        title='Step pattern',
        description=(
            'Cucumber Expression text, or a compiled regular expression, '
            'matched against the text of pickle steps.'
        ),
    )

    fn: SupportCodeFunction = Field(
        title='Step function',
    )


class NewTestCaseHook(SourcedMixin, SchemaModel):
    """Attributes for registering a new Before or After hook."""

    name: str | None = Field(
        default=None,
        title='Hook name',
    )

    tags: str | None = Field(
        default=None,
        title='Tag expression',
        description=(
            'Optional tag expression; the hook is omitted from test cases '
            'whose tags do not satisfy it.'
        ),
    )

    fn: SupportCodeFunction = Field(
        title='Hook function',
    )


class NewTestRunHook(SourcedMixin, SchemaModel):
    """Attributes for registering a new BeforeAll or AfterAll hook."""

    name: str | None = Field(
        default=None,
        title='Hook name',
    )

    fn: SupportCodeFunction = Field(
        title='Hook function',
    )


class DefinedMixin(SourcedMixin, SchemaModel):
    """Mixin providing identity and ordering of defined support code."""

    id: str = Field(title='Identifier')

    order: int = Field(
        ge=0,
        title='Registration order',
        description='Position of the registration across all categories.',
    )

    @abstractmethod
    def to_envelope(self) -> Envelope:
        """Wrap the definition message into an envelope."""


class DefinedParameterType(DefinedMixin, SchemaModel):
    """Parameter type available for use in expressions."""

    name: str
    regular_expressions: tuple[str, ...]
    prefer_for_regular_expression_match: bool
    use_for_snippets: bool

    def to_message(self) -> ParameterTypeMessage:
        """Convert the parameter type to a ParameterType message."""
        return ParameterTypeMessage(
            id=self.id,
            name=self.name,
            regular_expressions=self.regular_expressions,
            prefer_for_regular_expression_match=self.prefer_for_regular_expression_match,
            use_for_snippets=self.use_for_snippets,
            source_reference=self.source_reference,
        )

    def to_envelope(self) -> Envelope:
        """Wrap the parameter type message into an envelope."""
        return Envelope(parameter_type=self.to_message())


class DefinedStep(DefinedMixin, SchemaModel):
    """Step definition available for matching."""

    pattern: str | Pattern[str]
    matcher: ExpressionMatcher
    fn: SupportCodeFunction

    def match(self, text: str) -> tuple[MatchArgument, ...] | None:
        """Match a step text against the compiled pattern."""
        return self.matcher.match(text)

    def to_message(self) -> StepDefinitionMessage:
        """Convert the step definition to a StepDefinition message."""
        return StepDefinitionMessage(
            id=self.id,
            pattern=StepDefinitionPattern(
                type=self.matcher.pattern_type,
                source=self.matcher.source,
            ),
            source_reference=self.source_reference,
        )

    def to_envelope(self) -> Envelope:
        """Wrap the step definition message into an envelope."""
        return Envelope(step_definition=self.to_message())


class DefinedTestCaseHook(DefinedMixin, SchemaModel):
    """Before or After hook available for execution."""

    type: HookType
    name: str | None = None
    tags: TagPredicate | None = None
    fn: SupportCodeFunction

    def matches(self, tag_names: tuple[str, ...]) -> bool:
        """Check whether the hook applies to a test case with the given tags.

        A hook without a tag expression applies to every test case.
        """
        if self.tags is None:
            return True

        return self.tags.evaluate(tag_names)

    def to_message(self) -> HookMessage:
        """Convert the hook to a Hook message."""
        return HookMessage(
            id=self.id,
            type=self.type,
            name=self.name,
            tag_expression=self.tags.raw if self.tags else None,
            source_reference=self.source_reference,
        )

    def to_envelope(self) -> Envelope:
        """Wrap the hook message into an envelope."""
        return Envelope(hook=self.to_message())


class DefinedTestRunHook(DefinedMixin, SchemaModel):
    """BeforeAll or AfterAll hook available for execution."""

    type: HookType
    name: str | None = None
    fn: SupportCodeFunction

    def to_message(self) -> HookMessage:
        """Convert the hook to a Hook message."""
        return HookMessage(
            id=self.id,
            type=self.type,
            name=self.name,
            source_reference=self.source_reference,
        )

    def to_envelope(self) -> Envelope:
        """Wrap the hook message into an envelope."""
        return Envelope(hook=self.to_message())


class UndefinedParameterType(SchemaModel):
    """Parameter type referenced by a step pattern but never defined."""

    name: str
    expression: str

    def to_message(self) -> UndefinedParameterTypeMessage:
        """Convert the record to an UndefinedParameterType message."""
        return UndefinedParameterTypeMessage(name=self.name, expression=self.expression)

    def to_envelope(self) -> Envelope:
        """Wrap the notice into an envelope."""
        return Envelope(undefined_parameter_type=self.to_message())


class MatchedStep(SchemaModel):
    """Step definition matched to a step text, with extracted arguments."""

    definition: DefinedStep
    args: tuple[MatchArgument, ...] = ()
