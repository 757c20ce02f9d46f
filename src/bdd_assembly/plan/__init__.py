"""Test plan assembler.

This package combines a parsed Gherkin document, its pickles and a
sealed support code library into an executable test plan.

It provides:
- `make_test_plan` and its `TestPlanIngredients`;
- assembled test cases and test steps, prepared lazily for execution;
- naming strategies for test cases;
- the `DataTable` argument passed to step functions.
"""

from .assembler import (
    AssembledTestCase,
    AssembledTestPlan,
    TestPlanAssembler,
    TestPlanIngredients,
    make_test_plan,
)
from .datatable import DataTable
from .naming import NAME_SEPARATOR, Namer, NamingExampleName, NamingFeatureName, NamingLength, NamingStrategy
from .query import DocumentQuery, Lineage
from .steps import AssembledTestStep, HookTestStep, PickleTestStep, PreparedStep, TestStepName

__all__ = (
    'NAME_SEPARATOR',
    'AssembledTestCase',
    'AssembledTestPlan',
    'AssembledTestStep',
    'DataTable',
    'DocumentQuery',
    'HookTestStep',
    'Lineage',
    'Namer',
    'NamingExampleName',
    'NamingFeatureName',
    'NamingLength',
    'NamingStrategy',
    'PickleTestStep',
    'PreparedStep',
    'TestPlanAssembler',
    'TestPlanIngredients',
    'TestStepName',
    'make_test_plan',
)
