"""Test plan assembly.

This module turns a parsed Gherkin document, its pickles and a sealed
support code library into an executable test plan. Assembly never fails
because of undefined or ambiguous steps: such problems are reported only
when the affected step is prepared.
"""

from typing import TYPE_CHECKING, ClassVar

from bdd_assembly.messages import (  # noqa: TC001
    Envelope,
    GherkinDocument,
    Pickle,
    SourceReference,
    TestCaseMessage,
)
from bdd_assembly.models import SchemaModel
from bdd_assembly.support import SupportCodeLibrary  # noqa: TC001

from .query import DocumentQuery
from .steps import HookTestStep, PickleTestStep

if TYPE_CHECKING:
    from bdd_assembly.ids import NewId

    from .naming import Namer
    from .steps import AssembledTestStep


class TestPlanIngredients(SchemaModel):
    """Everything needed to assemble a test plan for one document."""

    __test__: ClassVar[bool] = False

    #: Identifier of the test run the plan belongs to.
    test_run_started_id: str | None = None
    #: Parsed Gherkin document the pickles were compiled from.
    gherkin_document: GherkinDocument
    #: Compiled pickles, in execution order.
    pickles: tuple[Pickle, ...] = ()
    #: Sealed support code library.
    support_code_library: SupportCodeLibrary


class AssembledTestCase(SchemaModel):
    """Executable test case for a single pickle."""

    __test__: ClassVar[bool] = False

    id: str
    pickle_id: str
    name: str
    source_reference: SourceReference
    #: Before hooks, pickle steps and After hooks, in execution order.
    test_steps: tuple[HookTestStep | PickleTestStep, ...] = ()
    test_run_started_id: str | None = None

    def to_message(self) -> TestCaseMessage:
        """Convert the test case to a TestCase message."""
        return TestCaseMessage(
            id=self.id,
            pickle_id=self.pickle_id,
            test_steps=tuple(step.to_message() for step in self.test_steps),
            test_run_started_id=self.test_run_started_id,
        )


class AssembledTestPlan(SchemaModel):
    """Executable test plan for a single document."""

    __test__: ClassVar[bool] = False

    #: Feature name, or the document URI for unnamed features.
    name: str | None = None
    test_run_started_id: str | None = None
    test_cases: tuple[AssembledTestCase, ...] = ()

    def to_envelopes(self) -> list[Envelope]:
        """Produce one envelope per test case, in plan order."""
        return [Envelope(test_case=test_case.to_message()) for test_case in self.test_cases]


class TestPlanAssembler:
    """Assembler of test cases for the pickles of a single document."""

    __test__ = False

    def __init__(self, ingredients: TestPlanIngredients, new_id: 'NewId', strategy: 'Namer') -> None:
        """Initialize an assembler.

        Args:
            ingredients: Document, pickles and support code library.
            new_id: Identifier generator for test cases and test steps.
            strategy: Naming strategy for test cases.
        """
        self.ingredients = ingredients
        self.new_id = new_id
        self.strategy = strategy

        self.query = DocumentQuery(ingredients.gherkin_document)

    @property
    def library(self) -> SupportCodeLibrary:
        """Return the support code library steps are matched against."""
        return self.ingredients.support_code_library

    def assemble(self) -> AssembledTestPlan:
        """Assemble the test plan.

        Returns:
            Test plan with one test case per pickle, in pickle order.

        Raises:
            PlanAssemblyError: If a pickle refers to nodes missing from the document.
        """
        document = self.ingredients.gherkin_document

        name = document.uri
        if document.feature is not None and document.feature.name:
            name = document.feature.name

        return AssembledTestPlan(
            name=name,
            test_run_started_id=self.ingredients.test_run_started_id,
            test_cases=tuple(self.assemble_test_case(pickle) for pickle in self.ingredients.pickles),
        )

    def assemble_test_case(self, pickle: Pickle) -> AssembledTestCase:
        """Assemble the test case of a single pickle."""
        lineage = self.query.find_lineage_by(pickle)
        source_reference = SourceReference(
            uri=pickle.uri,
            location=self.query.find_location_of(pickle),
        )

        test_case_id = self.new_id()

        test_steps: list[AssembledTestStep] = []
        test_steps.extend(self.from_before_hooks(pickle, source_reference))
        test_steps.extend(self.from_pickle_steps(pickle))
        test_steps.extend(self.from_after_hooks(pickle, source_reference))

        return AssembledTestCase(
            id=test_case_id,
            pickle_id=pickle.id,
            name=self.strategy.reduce(lineage, pickle),
            source_reference=source_reference,
            test_steps=tuple(test_steps),
            test_run_started_id=self.ingredients.test_run_started_id,
        )

    def from_before_hooks(self, pickle: Pickle,
                          source_reference: SourceReference) -> list[HookTestStep]:
        """Create test steps for Before hooks, in registration order."""
        return [
            HookTestStep.from_hook(hook, id_=self.new_id(), source_reference=source_reference)
            for hook in self.library.find_all_before_hooks_by(pickle.tag_names)
        ]

    def from_after_hooks(self, pickle: Pickle,
                         source_reference: SourceReference) -> list[HookTestStep]:
        """Create test steps for After hooks, in reverse registration order."""
        hooks = self.library.find_all_after_hooks_by(pickle.tag_names)

        return [
            HookTestStep.from_hook(hook, id_=self.new_id(), source_reference=source_reference)
            for hook in reversed(hooks)
        ]

    def from_pickle_steps(self, pickle: Pickle) -> list[PickleTestStep]:
        """Create test steps for the steps of a pickle, in document order."""
        test_steps = []
        for pickle_step in pickle.steps:
            step = self.query.find_step_by(pickle_step)
            test_steps.append(PickleTestStep.from_pickle_step(
                pickle_step,
                id_=self.new_id(),
                keyword=step.keyword,
                uri=pickle.uri,
                location=step.location,
                library=self.library,
            ))

        return test_steps


def make_test_plan(ingredients: TestPlanIngredients, *,
                   new_id: 'NewId | None' = None,
                   strategy: 'Namer | None' = None) -> AssembledTestPlan:
    """Make an executable test plan for a Gherkin document.

    Args:
        ingredients: Document, pickles, support code library and run id.
        new_id: Identifier generator. Defaults to the generator configured
            in the environment, random UUIDs unless overridden.
        strategy: Naming strategy for test cases. Defaults to the strategy
            configured in the environment: long names without the feature
            name and with numbered examples.

    Returns:
        Assembled test plan.

    Raises:
        PlanAssemblyError: If a pickle refers to nodes missing from the document.
    """
    if new_id is None or strategy is None:
        from bdd_assembly.config import Settings  # noqa: PLC0415

        settings = Settings()
        if new_id is None:
            new_id = settings.new_id()
        if strategy is None:
            strategy = settings.naming_strategy()

    return TestPlanAssembler(ingredients, new_id, strategy).assemble()
