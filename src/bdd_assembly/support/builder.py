"""Support code builder.

The builder accumulates user registrations in a mutable, chainable form
and compiles them into a sealed `SupportCodeLibrary`. Compilation never
mutates the raw registrations, so a builder may be built more than once.
"""

from itertools import count
from typing import TYPE_CHECKING, Any, NamedTuple, Self
from warnings import warn

from cucumber_expressions.errors import UndefinedParameterTypeError
from cucumber_expressions.parameter_type_registry import ParameterTypeRegistry

from bdd_assembly.errors import SupportCodeWarning
from bdd_assembly.messages import HookType

from .definitions import (
    DefinedParameterType,
    DefinedStep,
    DefinedTestCaseHook,
    DefinedTestRunHook,
    NewParameterType,
    NewStep,
    NewTestCaseHook,
    NewTestRunHook,
    UndefinedParameterType,
)
from .expressions import ExpressionMatcher, define_parameter_type, regexp_source
from .library import SupportCodeLibrary
from .tags import TagPredicate

if TYPE_CHECKING:
    from collections.abc import Callable

if TYPE_CHECKING:
    from bdd_assembly.ids import NewId

    from .expressions import ContextTransformer


class Registration(NamedTuple):
    """Raw registration with its issued id and global order."""

    id: str
    order: int
    item: Any


class SupportCodeBuilder:
    """Builder collecting user-defined support code.

    Every registration receives a fresh id from the identifier generator
    and an order number shared by all categories, so that the sealed
    library can serialize support code in authorship order.
    """

    def __init__(self, new_id: 'NewId') -> None:
        """Initialize an empty builder.

        Args:
            new_id: Identifier generator for registered definitions.
        """
        self.new_id = new_id

        self._order = count()

        self.parameter_types: list[Registration] = []
        self.steps: list[Registration] = []
        self.before_hooks: list[Registration] = []
        self.after_hooks: list[Registration] = []
        self.before_all_hooks: list[Registration] = []
        self.after_all_hooks: list[Registration] = []

    def _register(self, registry: list[Registration], item: Any) -> Self:  # noqa: ANN401
        """Append a registration with a fresh id and order."""
        registry.append(Registration(self.new_id(), next(self._order), item))

        return self

    def add_parameter_type(self, parameter_type: NewParameterType) -> Self:
        """Define a new parameter type."""
        return self._register(self.parameter_types, parameter_type)

    def add_before_hook(self, hook: NewTestCaseHook) -> Self:
        """Define a new Before hook."""
        return self._register(self.before_hooks, hook)

    def add_after_hook(self, hook: NewTestCaseHook) -> Self:
        """Define a new After hook."""
        return self._register(self.after_hooks, hook)

    def add_step(self, step: NewStep) -> Self:
        """Define a new step."""
        return self._register(self.steps, step)

    def add_before_all_hook(self, hook: NewTestRunHook) -> Self:
        """Define a new BeforeAll hook."""
        return self._register(self.before_all_hooks, hook)

    def add_after_all_hook(self, hook: NewTestRunHook) -> Self:
        """Define a new AfterAll hook."""
        return self._register(self.after_all_hooks, hook)

    def build(self) -> SupportCodeLibrary:
        """Build and seal the support code library.

        Parameter types are defined first, in registration order, so that
        step patterns may reference any of them. Steps referencing an
        unknown parameter type are left out of the library and reported
        as undefined parameter types instead.

        Returns:
            Immutable support code library.

        Raises:
            CucumberExpressionError: If a parameter type or a step pattern
                is malformed.
            TagExpressionError: If a hook tag expression is malformed.
        """
        registry = ParameterTypeRegistry()
        context_transformers: dict[str, ContextTransformer] = {}
        undefined: dict[str, dict[str, None]] = {}

        parameter_types = self.build_parameter_types(registry, context_transformers)
        steps = self.build_steps(registry, context_transformers, undefined)

        return SupportCodeLibrary(
            parameter_types=parameter_types,
            steps=steps,
            undefined_parameter_types=tuple(
                UndefinedParameterType(name=name, expression=expression)
                for name, expressions in undefined.items()
                for expression in expressions
            ),
            before_hooks=self.build_test_case_hooks(self.before_hooks, HookType.BEFORE_TEST_CASE),
            after_hooks=self.build_test_case_hooks(self.after_hooks, HookType.AFTER_TEST_CASE),
            before_all_hooks=self.build_test_run_hooks(self.before_all_hooks, HookType.BEFORE_TEST_RUN),
            after_all_hooks=self.build_test_run_hooks(self.after_all_hooks, HookType.AFTER_TEST_RUN),
            parameter_type_registry=registry,
        )

    def build_parameter_types(self, registry: ParameterTypeRegistry,
                              context_transformers: dict[str, 'ContextTransformer'],
                              ) -> tuple[DefinedParameterType, ...]:
        """Define all parameter types in the expression registry.

        Args:
            registry: Registry to define parameter types in.
            context_transformers: Collects transformers requiring context.

        Returns:
            Defined parameter types in registration order.
        """
        defined = []
        for registration in self.parameter_types:
            parameter_type: NewParameterType = registration.item
            regexps = tuple(regexp_source(regexp) for regexp in parameter_type.regexps)

            define_parameter_type(
                registry,
                name=parameter_type.name,
                regexps=regexps,
                transformer=parameter_type.transformer,
                use_for_snippets=parameter_type.use_for_snippets,
                prefer_for_regexp_match=parameter_type.prefer_for_regexp_match,
                pass_context=parameter_type.pass_context,
            )
            if parameter_type.pass_context and parameter_type.transformer is not None:
                context_transformers[parameter_type.name] = parameter_type.transformer

            defined.append(DefinedParameterType(
                id=registration.id,
                order=registration.order,
                name=parameter_type.name,
                regular_expressions=regexps,
                prefer_for_regular_expression_match=parameter_type.prefer_for_regexp_match,
                use_for_snippets=parameter_type.use_for_snippets,
                source_reference=parameter_type.source_reference,
            ))

        return tuple(defined)

    def build_steps(self, registry: ParameterTypeRegistry,
                    context_transformers: dict[str, 'ContextTransformer'],
                    undefined: dict[str, dict[str, None]]) -> tuple[DefinedStep, ...]:
        """Compile all step patterns.

        Args:
            registry: Registry with all defined parameter types.
            context_transformers: Transformers requiring context by name.
            undefined: Collects expressions by undefined parameter type name.

        Returns:
            Defined steps in registration order, without the steps that
            reference undefined parameter types.
        """
        defined = []
        for registration in self.steps:
            step: NewStep = registration.item
            try:
                matcher = ExpressionMatcher(step.pattern, registry, context_transformers)

            except UndefinedParameterTypeError as error:
                name = error.undefined_parameter_type_name
                expression = str(step.pattern)
                undefined.setdefault(name, {})[expression] = None
                warn(
                    f'Step {expression!r} from {step.source_reference.uri!r} '
                    f'references undefined parameter type {name!r}',
                    category=SupportCodeWarning,
                    stacklevel=3,
                )
                continue

            defined.append(DefinedStep(
                id=registration.id,
                order=registration.order,
                pattern=step.pattern,
                matcher=matcher,
                fn=step.fn,
                source_reference=step.source_reference,
            ))

        return tuple(defined)

    @staticmethod
    def build_test_case_hooks(registrations: list[Registration],
                              type_: HookType) -> tuple[DefinedTestCaseHook, ...]:
        """Compile Before or After hooks with their tag expressions.

        Raises:
            TagExpressionError: If a tag expression is malformed.
        """
        defined = []
        for registration in registrations:
            hook: NewTestCaseHook = registration.item
            defined.append(DefinedTestCaseHook(
                id=registration.id,
                order=registration.order,
                type=type_,
                name=hook.name,
                tags=TagPredicate.compile(hook.tags) if hook.tags else None,
                fn=hook.fn,
                source_reference=hook.source_reference,
            ))

        return tuple(defined)

    @staticmethod
    def build_test_run_hooks(registrations: list[Registration],
                             type_: HookType) -> tuple[DefinedTestRunHook, ...]:
        """Build BeforeAll or AfterAll hooks."""
        return tuple(
            DefinedTestRunHook(
                id=registration.id,
                order=registration.order,
                type=type_,
                name=registration.item.name,
                fn=registration.item.fn,
                source_reference=registration.item.source_reference,
            )
            for registration in registrations
        )


def build_support_code(new_id: 'Callable[[], str] | None' = None) -> SupportCodeBuilder:
    """Start building a library of user-defined support code.

    Args:
        new_id: Identifier generator. Defaults to the generator configured
            in the environment, random UUIDs unless overridden.

    Returns:
        Empty support code builder.
    """
    if new_id is None:
        from bdd_assembly.config import Settings  # noqa: PLC0415

        new_id = Settings().new_id()

    return SupportCodeBuilder(new_id)
