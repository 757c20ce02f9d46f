"""Test case naming strategies.

A naming strategy reduces the lineage of a pickle (feature, rule,
scenario, examples block and examples row) to a display name.
"""

from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from bdd_assembly.messages import Pickle

    from .query import Lineage

NAME_SEPARATOR = ' - '


class NamingLength(StrEnum):
    """How much of the lineage goes into a name."""

    #: All named ancestors joined together.
    LONG = 'long'
    #: Only the most specific element.
    SHORT = 'short'


class NamingFeatureName(StrEnum):
    """Whether the feature name is part of a long name."""

    INCLUDE = 'include'
    EXCLUDE = 'exclude'


class NamingExampleName(StrEnum):
    """How pickles generated from examples rows are named."""

    #: Position of the examples block and the row, e.g. `#1.2`.
    NUMBER = 'number'
    #: Name of the pickle, with outline parameters substituted.
    PICKLE = 'pickle'
    #: Position, followed by the pickle name if parameters changed the scenario name.
    NUMBER_AND_PICKLE_IF_PARAMETERISED = 'number_and_pickle_if_parameterised'


class Namer(Protocol):
    """Anything able to name a pickle from its lineage."""

    def reduce(self, lineage: 'Lineage', pickle: 'Pickle') -> str:
        """Return a display name for the pickle."""
        ...  # pragma: no cover


class NamingStrategy:
    """Builtin naming strategy.

    The default (long names, feature name excluded, numbered examples)
    produces names such as `a rule - a scenario - examples - #1.2`.
    """

    def __init__(self, length: NamingLength = NamingLength.LONG,
                 feature_name: NamingFeatureName = NamingFeatureName.EXCLUDE,
                 example_name: NamingExampleName = NamingExampleName.NUMBER) -> None:
        """Initialize a naming strategy.

        Args:
            length: How much of the lineage to include.
            feature_name: Whether to include the feature name in long names.
            example_name: How to name pickles generated from examples rows.
        """
        self.length = length
        self.feature_name = feature_name
        self.example_name = example_name

    def reduce(self, lineage: 'Lineage', pickle: 'Pickle') -> str:
        """Reduce the lineage of a pickle to a display name.

        Args:
            lineage: Ancestors of the pickle in its document.
            pickle: Pickle to name.

        Returns:
            Display name; empty names of ancestors are skipped.
        """
        parts: list[str] = []

        if lineage.feature is not None and self.feature_name == NamingFeatureName.INCLUDE:
            parts.append(lineage.feature.name)
        if lineage.rule is not None:
            parts.append(lineage.rule.name)
        if lineage.scenario is not None:
            parts.append(lineage.scenario.name)
        if lineage.examples is not None:
            parts.append(lineage.examples.name)
        if lineage.example is not None:
            parts.append(self.name_example(lineage, pickle))

        parts = [part for part in parts if part]
        if not parts:
            return pickle.name

        if self.length == NamingLength.SHORT:
            return parts[-1]

        return NAME_SEPARATOR.join(parts)

    def name_example(self, lineage: 'Lineage', pickle: 'Pickle') -> str:
        """Name a pickle generated from an examples row."""
        number = f'#{(lineage.examples_index or 0) + 1}.{(lineage.example_index or 0) + 1}'

        if self.example_name == NamingExampleName.PICKLE:
            return pickle.name

        if self.example_name == NamingExampleName.NUMBER_AND_PICKLE_IF_PARAMETERISED:
            if lineage.scenario is not None and lineage.scenario.name != pickle.name:
                return f'{number}: {pickle.name}'

        return number
