"""Tag expression predicates for scenario hooks."""

from collections.abc import Iterable
from typing import Any

from cucumber_tag_expressions import parse
from pydantic import Field

from bdd_assembly.models import SchemaModel


class TagPredicate(SchemaModel):
    """Compiled tag expression with its raw text."""

    raw: str = Field(
        title='Tag expression',
        description='Boolean expression over tag names, e.g. `@smoke and not @slow`.',
    )

    compiled: Any = Field(
        title='Compiled expression',
        description='Predicate produced by the tag expression parser.',
    )

    @classmethod
    def compile(cls, raw: str) -> 'TagPredicate':
        """Compile a tag expression.

        Args:
            raw: Tag expression text.

        Returns:
            Compiled predicate.

        Raises:
            TagExpressionError: If the expression is malformed.
        """
        return cls(raw=raw, compiled=parse(raw))

    def evaluate(self, tag_names: Iterable[str]) -> bool:
        """Evaluate the predicate against a set of tag names."""
        return bool(self.compiled.evaluate(list(tag_names)))
