"""Step expression matching.

This module adapts the `cucumber-expressions` library to the narrow
matcher interface used by the support code library: a compiled matcher
turns a step text into a list of match arguments, or reports no match.
The concrete expression classes never leave this module.
"""

from collections.abc import Callable, Mapping
from re import ASCII, DOTALL, IGNORECASE, MULTILINE, VERBOSE, Pattern
from typing import TYPE_CHECKING, Any

from cucumber_expressions.expression import CucumberExpression
from cucumber_expressions.parameter_type import ParameterType
from cucumber_expressions.regular_expression import RegularExpression

from bdd_assembly.messages import Group, StepDefinitionPatternType, StepMatchArgument

if TYPE_CHECKING:
    from cucumber_expressions.argument import Argument
    from cucumber_expressions.group import Group as ExpressionGroup
    from cucumber_expressions.parameter_type_registry import ParameterTypeRegistry

#: Raw pattern of a step definition.
#: Strings are Cucumber Expressions, compiled patterns are regular expressions.
type StepPattern = str | Pattern[str]

#: Transformer receiving the execution context before the captured values.
type ContextTransformer = Callable[..., Any]

#: Inline flag letters for regular expression flags that affect matching.
_INLINE_FLAGS = (
    ('a', ASCII),
    ('i', IGNORECASE),
    ('m', MULTILINE),
    ('s', DOTALL),
    ('x', VERBOSE),
)


def regexp_source(regexp: StepPattern) -> str:
    """Return the canonical source of a regular expression.

    Flags of a compiled pattern are embedded as a scoped inline group,
    so `re.compile('red', re.I)` becomes `(?i:red)`.

    Args:
        regexp: Pattern string or compiled pattern.

    Returns:
        Pattern source used at matching time.
    """
    if isinstance(regexp, str):
        return regexp

    flags = ''.join(
        letter
        for letter, flag in _INLINE_FLAGS
        if regexp.flags & flag
    )
    if not flags:
        return regexp.pattern

    return f'(?{flags}:{regexp.pattern})'


def _raw_values(*values: str | None) -> Any:  # noqa: ANN401
    """Pass captured values through without conversion."""
    if len(values) == 1:
        return values[0]

    return list(values)


def define_parameter_type(registry: 'ParameterTypeRegistry', *,  # noqa: PLR0913
                          name: str,
                          regexps: tuple[str, ...],
                          transformer: Callable[..., Any] | None,
                          use_for_snippets: bool,
                          prefer_for_regexp_match: bool,
                          pass_context: bool) -> None:
    """Define a parameter type in a parameter type registry.

    Context-aware transformers are not given to the registry: their
    arguments are transformed when a step is prepared.

    Raises:
        CucumberExpressionError: If the name is invalid or already defined.
    """
    registry.define_parameter_type(ParameterType(
        name,
        list(regexps),
        object,
        _raw_values if pass_context or transformer is None else transformer,
        use_for_snippets,
        prefer_for_regexp_match,
    ))


def map_group(group: 'ExpressionGroup') -> Group:
    """Convert a captured group tree into its message form."""
    return Group(
        start=group.start,
        value=group.value,
        children=tuple(map_group(child) for child in group.children or ()),
    )


class MatchArgument:
    """Argument extracted from a step text by a step definition.

    Wraps a matched expression argument and resolves its final value,
    optionally against the execution context.
    """

    def __init__(self, argument: 'Argument',
                 context_transformer: ContextTransformer | None = None) -> None:
        """Initialize a match argument.

        Args:
            argument: Argument produced by the expression library.
            context_transformer: Transformer expecting the execution context,
                if the parameter type requires it.
        """
        self.argument = argument
        self.context_transformer = context_transformer

    @property
    def parameter_type_name(self) -> str | None:
        """Return the name of the matched parameter type."""
        return self.argument.parameter_type.name or None

    @property
    def group(self) -> 'ExpressionGroup':
        """Return the captured group tree."""
        return self.argument.group

    def get_value(self, context: Any = None) -> Any:  # noqa: ANN401
        """Resolve the value of the argument.

        Args:
            context: Execution context the step is prepared for.

        Returns:
            The transformed argument value.

        Raises:
            Any exception raised by the parameter type transformer.
        """
        if self.context_transformer is None:
            return self.argument.value

        children = self.group.children or ()
        values = [child.value for child in children] or [self.group.value]

        return self.context_transformer(context, *values)

    def to_message(self) -> StepMatchArgument:
        """Convert the argument to a StepMatchArgument message."""
        return StepMatchArgument(
            group=map_group(self.group),
            parameter_type_name=self.parameter_type_name,
        )


class ExpressionMatcher:
    """Compiled step pattern.

    Exposes a single matching operation and the metadata required to
    serialize the step definition.
    """

    def __init__(self, pattern: StepPattern, registry: 'ParameterTypeRegistry',
                 context_transformers: Mapping[str, ContextTransformer] | None = None) -> None:
        """Compile a step pattern.

        Args:
            pattern: Cucumber Expression text or compiled regular expression.
            registry: Registry with all parameter types known so far.
            context_transformers: Context-aware transformers by parameter type name.

        Raises:
            UndefinedParameterTypeError: If the expression references an
                unknown parameter type.
            CucumberExpressionError: If the expression is malformed.
        """
        self.pattern = pattern
        self.context_transformers = dict(context_transformers or {})

        self.expression: CucumberExpression | RegularExpression
        if isinstance(pattern, str):
            self.expression = CucumberExpression(pattern, registry)
        else:
            self.expression = RegularExpression(regexp_source(pattern), registry)

    @property
    def pattern_type(self) -> StepDefinitionPatternType:
        """Return the syntax of the compiled pattern."""
        if isinstance(self.expression, CucumberExpression):
            return StepDefinitionPatternType.CUCUMBER_EXPRESSION

        return StepDefinitionPatternType.REGULAR_EXPRESSION

    @property
    def source(self) -> str:
        """Return the source text of the pattern.

        Flags of a compiled regular expression are embedded inline.
        """
        return regexp_source(self.pattern)

    def match(self, text: str) -> tuple[MatchArgument, ...] | None:
        """Match a step text.

        Args:
            text: Text of a pickle step.

        Returns:
            Extracted arguments, possibly empty, or None if there is no match.
        """
        arguments = self.expression.match(text)
        if arguments is None:
            return None

        return tuple(
            MatchArgument(
                argument,
                self.context_transformers.get(argument.parameter_type.name or ''),
            )
            for argument in arguments
        )
