"""Structural index of a Gherkin document.

Pickles refer to the AST nodes they were compiled from by id. The query
indexes a document once and resolves, for each pickle, its lineage (the
chain of containing feature, rule, scenario, examples block and row),
its location, and the AST step behind each pickle step.
"""

from typing import TYPE_CHECKING

from bdd_assembly.errors import PlanAssemblyError
from bdd_assembly.messages import (  # noqa: TC001
    Background,
    Examples,
    Feature,
    GherkinDocument,
    Rule,
    Scenario,
    Step,
    TableRow,
)
from bdd_assembly.models import SchemaModel

if TYPE_CHECKING:
    from collections.abc import Iterable

if TYPE_CHECKING:
    from bdd_assembly.messages import Location, Pickle, PickleStep


class Lineage(SchemaModel):
    """Ancestors of a pickle within its document."""

    document: GherkinDocument
    feature: Feature | None = None
    background: Background | None = None
    rule: Rule | None = None
    rule_background: Background | None = None
    scenario: Scenario | None = None
    examples: Examples | None = None
    examples_index: int | None = None
    example: TableRow | None = None
    example_index: int | None = None


class DocumentQuery:
    """Index of AST nodes of a single Gherkin document."""

    def __init__(self, document: GherkinDocument) -> None:
        """Index a document.

        Args:
            document: Parsed Gherkin document.
        """
        self.document = document

        self._scenarios: dict[str, Lineage] = {}
        self._rows: dict[str, tuple[Examples, int, TableRow, int]] = {}
        self._steps: dict[str, Step] = {}

        if document.feature is not None:
            self._index_feature(document.feature)

    def _index_feature(self, feature: Feature) -> None:
        """Index all children of a feature."""
        background = None
        for child in feature.children:
            if child.background is not None:
                background = child.background
                self._index_steps(background.steps)
            if child.scenario is not None:
                self._index_scenario(Lineage(
                    document=self.document,
                    feature=feature,
                    background=background,
                    scenario=child.scenario,
                ))
            if child.rule is not None:
                self._index_rule(feature, background, child.rule)

    def _index_rule(self, feature: Feature, background: Background | None,
                    rule: Rule) -> None:
        """Index all children of a rule."""
        rule_background = None
        for child in rule.children:
            if child.background is not None:
                rule_background = child.background
                self._index_steps(rule_background.steps)
            if child.scenario is not None:
                self._index_scenario(Lineage(
                    document=self.document,
                    feature=feature,
                    background=background,
                    rule=rule,
                    rule_background=rule_background,
                    scenario=child.scenario,
                ))

    def _index_scenario(self, lineage: Lineage) -> None:
        """Index a scenario, its steps and its examples rows."""
        scenario = lineage.scenario
        if scenario is None:  # pragma: no cover
            return

        self._scenarios[scenario.id] = lineage
        self._index_steps(scenario.steps)

        for examples_index, examples in enumerate(scenario.examples):
            for example_index, row in enumerate(examples.table_body):
                self._rows[row.id] = (examples, examples_index, row, example_index)

    def _index_steps(self, steps: 'Iterable[Step]') -> None:
        """Index steps by id."""
        for step in steps:
            self._steps[step.id] = step

    def find_lineage_by(self, pickle: 'Pickle') -> Lineage:
        """Find the ancestors of a pickle.

        Args:
            pickle: Pickle compiled from the indexed document.

        Returns:
            Lineage including the examples block and row for pickles
            generated from scenario outlines.

        Raises:
            PlanAssemblyError: If the pickle's AST nodes are not in the document.
        """
        if not pickle.ast_node_ids:
            raise PlanAssemblyError.missing_node('scenario', '', self.document.uri)

        scenario_id = pickle.ast_node_ids[0]
        if (lineage := self._scenarios.get(scenario_id)) is None:
            raise PlanAssemblyError.missing_node('scenario', scenario_id, self.document.uri)

        if len(pickle.ast_node_ids) < 2:  # noqa: PLR2004
            return lineage

        row_id = pickle.ast_node_ids[-1]
        if (found := self._rows.get(row_id)) is None:
            raise PlanAssemblyError.missing_node('examples row', row_id, self.document.uri)

        examples, examples_index, row, example_index = found

        return lineage.model_copy(update={
            'examples': examples,
            'examples_index': examples_index,
            'example': row,
            'example_index': example_index,
        })

    def find_location_of(self, pickle: 'Pickle') -> 'Location':
        """Find where a pickle is declared.

        Returns:
            Location of the examples row for outline pickles, otherwise
            location of the scenario.

        Raises:
            PlanAssemblyError: If the pickle's AST nodes are not in the document.
        """
        lineage = self.find_lineage_by(pickle)
        if lineage.example is not None:
            return lineage.example.location

        if lineage.scenario is None:  # pragma: no cover
            raise PlanAssemblyError.missing_node('scenario', pickle.id, self.document.uri)

        return lineage.scenario.location

    def find_step_by(self, pickle_step: 'PickleStep') -> Step:
        """Find the AST step a pickle step was compiled from.

        Raises:
            PlanAssemblyError: If the step is not in the document.
        """
        step_id = pickle_step.ast_node_ids[0] if pickle_step.ast_node_ids else ''
        if (step := self._steps.get(step_id)) is None:
            raise PlanAssemblyError.missing_node('step', step_id, self.document.uri)

        return step
