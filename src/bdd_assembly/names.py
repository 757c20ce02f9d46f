"""Name primitive types and validation rules.

This module defines strongly-typed aliases used to validate names that
appear in support code registrations.
"""

from typing import Annotated

from pydantic import Field

#: Characters reserved by the Cucumber Expression syntax.
_RESERVED_CHARACTERS = r'{}()\\/'


ParameterTypeName = Annotated[
    str, Field(
        pattern=rf'^[^{_RESERVED_CHARACTERS}]+$',
        title='Parameter type name',
        description=(
            'Name used to reference the parameter type inside Cucumber '
            'Expressions, for example `{color}`. Names must not contain '
            'braces, parentheses or slashes.'
        ),
        examples=[
            'color',
            'airport',
        ],
    ),
]

TagName = Annotated[
    str, Field(
        pattern=r'^@\S+$',
        title='Tag name',
        description='Name of a Gherkin tag, including the leading `@`.',
        examples=[
            '@smoke',
            '@regression',
        ],
    ),
]
