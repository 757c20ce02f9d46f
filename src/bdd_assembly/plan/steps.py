"""Assembled test steps.

A test case is an ordered list of test steps: Before hooks, pickle steps,
then After hooks. Each step can be serialized without an execution
context, and prepared against one. Preparation binds the user function
to the context and resolves its arguments, but never invokes it.
"""

from abc import abstractmethod
from collections.abc import Callable
from functools import partial
from typing import Any, ClassVar

from bdd_assembly.errors import AmbiguousStepError, UndefinedStepError
from bdd_assembly.messages import (
    HookType,
    Location,
    PickleStep,
    SourceReference,
    StepMatchArgumentsList,
    TestStepMessage,
)
from bdd_assembly.models import SchemaModel
from bdd_assembly.support import DefinedTestCaseHook, SupportCodeLibrary  # noqa: TC001

from .datatable import DataTable


class TestStepName(SchemaModel):
    """Display name of a test step, e.g. `Given` + `a step text`."""

    __test__: ClassVar[bool] = False

    prefix: str
    body: str = ''

    def __str__(self) -> str:
        """String representation."""
        return f'{self.prefix} {self.body}'.strip()


class PreparedStep(SchemaModel):
    """User function ready to be invoked by a runner."""

    #: Function bound to the execution context as its first argument.
    fn: Callable[..., Any]
    #: Positional arguments to call the function with.
    args: tuple[Any, ...] = ()


class AssembledTestStep(SchemaModel):
    """Base of hook and pickle test steps."""

    __test__: ClassVar[bool] = False

    id: str
    name: TestStepName
    source_reference: SourceReference
    #: Whether the step runs even after a previous step failed.
    always: bool = False

    @abstractmethod
    def prepare(self, context: Any = None) -> PreparedStep:  # noqa: ANN401
        """Prepare the step function for the given execution context."""

    @abstractmethod
    def to_message(self) -> TestStepMessage:
        """Convert the step to a TestStep message."""


class HookTestStep(AssembledTestStep):
    """Test step running a Before or After hook."""

    hook: DefinedTestCaseHook

    @classmethod
    def from_hook(cls, hook: DefinedTestCaseHook, *, id_: str,
                  source_reference: SourceReference) -> 'HookTestStep':
        """Create a test step for a matched hook.

        After hooks are always executed, so that teardown runs even when
        a previous step failed.
        """
        is_after = hook.type == HookType.AFTER_TEST_CASE

        return cls(
            id=id_,
            name=TestStepName(prefix='After' if is_after else 'Before', body=hook.name or ''),
            source_reference=source_reference,
            always=is_after,
            hook=hook,
        )

    def prepare(self, context: Any = None) -> PreparedStep:  # noqa: ANN401
        """Bind the hook function to the execution context."""
        return PreparedStep(fn=partial(self.hook.fn, context))

    def to_message(self) -> TestStepMessage:
        """Convert the step to a hook reference."""
        return TestStepMessage(id=self.id, hook_id=self.hook.id)


class PickleTestStep(AssembledTestStep):
    """Test step running the step definition matching a pickle step.

    Matching is performed against the support code library on every
    `prepare` and `to_message` call; the library is immutable, so
    repeated calls give identical results.
    """

    pickle_step: PickleStep
    library: SupportCodeLibrary

    @classmethod
    def from_pickle_step(cls, pickle_step: PickleStep, *,  # noqa: PLR0913
                         id_: str,
                         keyword: str,
                         uri: str | None,
                         location: Location,
                         library: SupportCodeLibrary) -> 'PickleTestStep':
        """Create a test step for a pickle step.

        Args:
            pickle_step: Compiled step of a pickle.
            id_: Identifier of the test step.
            keyword: Keyword of the Gherkin step, e.g. `Given `.
            uri: URI of the document.
            location: Location of the Gherkin step.
            library: Support code library to match against.

        Returns:
            Pickle test step.
        """
        return cls(
            id=id_,
            name=TestStepName(prefix=keyword.strip(), body=pickle_step.text),
            source_reference=SourceReference(uri=uri, location=location),
            pickle_step=pickle_step,
            library=library,
        )

    def prepare(self, context: Any = None) -> PreparedStep:  # noqa: ANN401
        """Match the step and resolve the arguments of its function.

        Expression arguments come first, followed by the data table or the
        doc string content attached to the step, if any.

        Args:
            context: Execution context; bound as the first argument of the
                step function and passed to context-aware transformers.

        Returns:
            Prepared step function with its arguments.

        Raises:
            UndefinedStepError: If no step definition matches.
            AmbiguousStepError: If several step definitions match.
        """
        matches = self.library.find_all_steps_by(self.pickle_step.text)

        if not matches:
            raise UndefinedStepError(
                self.pickle_step,
                source_reference=self.source_reference,
            )

        if len(matches) > 1:
            raise AmbiguousStepError(
                self.pickle_step,
                [matched.definition.source_reference for matched in matches],
                source_reference=self.source_reference,
            )

        matched, = matches
        args = [arg.get_value(context) for arg in matched.args]

        argument = self.pickle_step.argument
        if argument is not None and argument.data_table is not None:
            args.append(DataTable(argument.data_table.cells))
        elif argument is not None and argument.doc_string is not None:
            args.append(argument.doc_string.content)

        return PreparedStep(fn=partial(matched.definition.fn, context), args=tuple(args))

    def to_message(self) -> TestStepMessage:
        """Convert the step to a message listing all matching definitions.

        Undefined steps serialize with empty lists; ambiguous steps list
        every matching definition.
        """
        matches = self.library.find_all_steps_by(self.pickle_step.text)

        return TestStepMessage(
            id=self.id,
            pickle_step_id=self.pickle_step.id,
            step_definition_ids=tuple(matched.definition.id for matched in matches),
            step_match_arguments_lists=tuple(
                StepMatchArgumentsList(
                    step_match_arguments=tuple(arg.to_message() for arg in matched.args),
                )
                for matched in matches
            ),
        )
