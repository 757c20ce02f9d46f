"""Sealed support code library.

The library is the immutable result of `SupportCodeBuilder.build`. It
holds only compiled definitions and answers the queries needed to
assemble test plans: step matching, hook selection by tags, source
listing and envelope serialization.
"""

from heapq import merge
from typing import TYPE_CHECKING

from cucumber_expressions.expression_generator import CucumberExpressionGenerator
from cucumber_expressions.parameter_type_registry import ParameterTypeRegistry

from .definitions import MatchedStep

if TYPE_CHECKING:
    from collections.abc import Iterable

if TYPE_CHECKING:
    from bdd_assembly.messages import Envelope, SourceReference

    from .definitions import (
        DefinedParameterType,
        DefinedStep,
        DefinedTestCaseHook,
        DefinedTestRunHook,
        UndefinedParameterType,
    )


class SupportCodeLibrary:
    """Immutable library of step definitions, hooks and parameter types.

    Safe to share between concurrent plan assemblies: no operation
    mutates the library after construction.
    """

    __slots__ = (
        '_after_all_hooks',
        '_after_hooks',
        '_before_all_hooks',
        '_before_hooks',
        '_parameter_type_registry',
        '_parameter_types',
        '_steps',
        '_undefined_parameter_types',
    )

    def __init__(self, *,  # noqa: PLR0913
                 parameter_types: 'Iterable[DefinedParameterType]' = (),
                 steps: 'Iterable[DefinedStep]' = (),
                 undefined_parameter_types: 'Iterable[UndefinedParameterType]' = (),
                 before_hooks: 'Iterable[DefinedTestCaseHook]' = (),
                 after_hooks: 'Iterable[DefinedTestCaseHook]' = (),
                 before_all_hooks: 'Iterable[DefinedTestRunHook]' = (),
                 after_all_hooks: 'Iterable[DefinedTestRunHook]' = (),
                 parameter_type_registry: ParameterTypeRegistry | None = None) -> None:
        """Initialize a sealed library from compiled definitions.

        Args:
            parameter_types: Defined parameter types.
            steps: Defined steps available for matching.
            undefined_parameter_types: Notices of unknown parameter types.
            before_hooks: Defined Before hooks.
            after_hooks: Defined After hooks.
            before_all_hooks: Defined BeforeAll hooks.
            after_all_hooks: Defined AfterAll hooks.
            parameter_type_registry: Expression registry the steps were
                compiled with, used to generate snippets.
        """
        self._parameter_types = tuple(parameter_types)
        self._steps = tuple(steps)
        self._undefined_parameter_types = tuple(undefined_parameter_types)
        self._before_hooks = tuple(before_hooks)
        self._after_hooks = tuple(after_hooks)
        self._before_all_hooks = tuple(before_all_hooks)
        self._after_all_hooks = tuple(after_all_hooks)
        if parameter_type_registry is None:
            parameter_type_registry = ParameterTypeRegistry()
        self._parameter_type_registry = parameter_type_registry

    @property
    def parameter_types(self) -> tuple['DefinedParameterType', ...]:
        """Return defined parameter types in registration order."""
        return self._parameter_types

    @property
    def steps(self) -> tuple['DefinedStep', ...]:
        """Return defined steps in registration order."""
        return self._steps

    @property
    def undefined_parameter_types(self) -> tuple['UndefinedParameterType', ...]:
        """Return notices of parameter types referenced but never defined."""
        return self._undefined_parameter_types

    def find_all_steps_by(self, text: str) -> list[MatchedStep]:
        """Find all step definitions matching a step text.

        Args:
            text: Text of a pickle step.

        Returns:
            Matches in registration order, each with its extracted arguments.
        """
        matches = []
        for definition in self._steps:
            args = definition.match(text)
            if args is not None:
                matches.append(MatchedStep(definition=definition, args=args))

        return matches

    def find_all_before_hooks_by(self, tag_names: 'Iterable[str]') -> list['DefinedTestCaseHook']:
        """Find all Before hooks applicable to the given tags.

        Returns:
            Matching hooks in registration order.
        """
        tag_names = tuple(tag_names)

        return [hook for hook in self._before_hooks if hook.matches(tag_names)]

    def find_all_after_hooks_by(self, tag_names: 'Iterable[str]') -> list['DefinedTestCaseHook']:
        """Find all After hooks applicable to the given tags.

        Hooks are returned in registration order; execution order is the
        reverse and is the consumer's concern.

        Returns:
            Matching hooks in registration order.
        """
        tag_names = tuple(tag_names)

        return [hook for hook in self._after_hooks if hook.matches(tag_names)]

    def get_all_before_all_hooks(self) -> list['DefinedTestRunHook']:
        """Return all BeforeAll hooks in registration order."""
        return list(self._before_all_hooks)

    def get_all_after_all_hooks(self) -> list['DefinedTestRunHook']:
        """Return all AfterAll hooks in registration order."""
        return list(self._after_all_hooks)

    def get_all_sources(self) -> list['SourceReference']:
        """Return source references of all support code.

        References are listed by category: parameter types, steps, Before,
        After, BeforeAll and AfterAll hooks.
        """
        return [
            definition.source_reference
            for category in (
                self._parameter_types,
                self._steps,
                self._before_hooks,
                self._after_hooks,
                self._before_all_hooks,
                self._after_all_hooks,
            )
            for definition in category
        ]

    def get_expression_generator(self) -> CucumberExpressionGenerator:
        """Get a Cucumber Expression generator for the defined parameter types.

        The generator suggests expressions for undefined step texts.
        """
        return CucumberExpressionGenerator(self._parameter_type_registry)

    def to_envelopes(self) -> list['Envelope']:
        """Produce envelopes for all support code.

        Parameter types, step definitions and hooks are emitted in their
        global registration order, followed by undefined parameter type
        notices.
        """
        definitions = merge(
            self._parameter_types,
            self._steps,
            self._before_hooks,
            self._after_hooks,
            self._before_all_hooks,
            self._after_all_hooks,
            key=lambda definition: definition.order,
        )

        return [
            *(definition.to_envelope() for definition in definitions),
            *(notice.to_envelope() for notice in self._undefined_parameter_types),
        ]
