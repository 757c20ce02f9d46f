"""Orchestration core for behaviour-driven test runners.

The `bdd_assembly` package turns user support code and compiled Gherkin
scenarios into an ordered, fully resolved test plan.

Key features:
- a chainable registry for steps, hooks and parameter types that is
  sealed into an immutable, queryable support code library;
- step matching with explicit undefined and ambiguous outcomes;
- tag-filtered hooks interleaved around scenario steps in a fixed order;
- canonical, vendor-neutral envelope serialization of support code and
  assembled test cases.

Executing the prepared callables is left to the runner built on top.
"""
