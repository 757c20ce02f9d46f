"""Tests configurations and fixtures."""

from textwrap import dedent
from typing import TYPE_CHECKING

import pytest

from bdd_assembly import ids
from bdd_assembly.documents import parse_feature
from bdd_assembly.messages import Location, SourceReference
from bdd_assembly.support import build_support_code

if TYPE_CHECKING:
    from collections.abc import Callable

if TYPE_CHECKING:
    from bdd_assembly.documents import ParsedFeature
    from bdd_assembly.ids import NewId
    from bdd_assembly.support import SupportCodeBuilder


@pytest.fixture
def new_id() -> 'NewId':
    """Provide a deterministic identifier generator.

    Each test receives its own counter starting at zero, so identifiers
    asserted in one test never depend on another.
    """
    return ids.incrementing()


@pytest.fixture
def builder(new_id: 'NewId') -> 'SupportCodeBuilder':
    """Provide an empty support code builder with deterministic ids."""
    return build_support_code(new_id)


@pytest.fixture
def source() -> 'Callable[..., SourceReference]':
    """Provide a factory for support code source references.

    The factory accepts a line and an optional column, and returns a
    reference into a fictional `steps.py` module.
    """
    def make(line: int | None = None, column: int | None = None, *,
             uri: str = 'steps.py') -> SourceReference:
        location = None
        if line is not None:
            location = Location(line=line, column=column)

        return SourceReference(uri=uri, location=location)

    return make


@pytest.fixture
def parse_gherkin() -> 'Callable[..., ParsedFeature]':
    """Provide a factory parsing Gherkin sources for tests.

    The source is dedented so that features can be written inline with
    the test code. Parsing uses its own deterministic identifier
    generator, separate from the `new_id` fixture.
    """
    def parse(content: str, uri: str = 'features/test.feature') -> 'ParsedFeature':
        return parse_feature(dedent(content).strip() + '\n', uri, new_id=ids.incrementing(1000))

    return parse
