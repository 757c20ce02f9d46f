"""Support code registry.

This package collects user-defined step definitions, hooks and parameter
types, compiles them, and seals them into an immutable library.

It provides:
- declarative registration models (`NewStep`, `NewTestCaseHook`, ...);
- a chainable `SupportCodeBuilder` started with `build_support_code`;
- the sealed `SupportCodeLibrary` used to assemble test plans.
"""

from .builder import SupportCodeBuilder, build_support_code
from .definitions import (
    DefinedParameterType,
    DefinedStep,
    DefinedTestCaseHook,
    DefinedTestRunHook,
    MatchedStep,
    NewParameterType,
    NewStep,
    NewTestCaseHook,
    NewTestRunHook,
    SupportCodeFunction,
    UndefinedParameterType,
)
from .expressions import ExpressionMatcher, MatchArgument
from .library import SupportCodeLibrary
from .tags import TagPredicate

__all__ = (
    'DefinedParameterType',
    'DefinedStep',
    'DefinedTestCaseHook',
    'DefinedTestRunHook',
    'ExpressionMatcher',
    'MatchArgument',
    'MatchedStep',
    'NewParameterType',
    'NewStep',
    'NewTestCaseHook',
    'NewTestRunHook',
    'SupportCodeBuilder',
    'SupportCodeFunction',
    'SupportCodeLibrary',
    'TagPredicate',
    'UndefinedParameterType',
    'build_support_code',
)
