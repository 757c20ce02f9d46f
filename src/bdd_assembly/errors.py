"""Core exception hierarchy.

This module defines base error and warning types used across the library
to report step matching failures at preparation time, inconsistencies
between pickles and their documents, and feature parsing errors in a
structured and extensible way.

Errors raised by the expression and tag expression compilers are never
wrapped: malformed support code must reach the caller unmodified.
"""

from os import linesep
from typing import TYPE_CHECKING, TypedDict

if TYPE_CHECKING:
    from collections.abc import Sequence
    from typing import Self

if TYPE_CHECKING:
    from bdd_assembly.messages import PickleStep, SourceReference

FORMAT_FILENAME = '<unknown source>'
FORMAT_INDENT = 4
FORMAT_UNKNOWN = '?'


class ErrorContext(TypedDict, total=False):
    """Container describing contextual information for error formatting.

    All fields are optional; the formatter adapts output based on
    provided values.
    """

    #: URI of the source where the error occurred.
    uri: str | None

    #: Line number in the source, starting at 1.
    line_num: int | None
    #: Column number in the source, starting at 1.
    column_num: int | None

    #: Text of the step involved in the error.
    step_text: str | None


class ErrorFormatter:
    """Utility class for formatting library errors.

    This formatter is responsible for producing human-readable
    error messages with optional source location.
    """

    @classmethod
    def format(cls, message: str, context: ErrorContext | None = None) -> str:
        """Format an error message using contextual information.

        Args:
            message: Base human-readable error message.
            context: Optional error context with location data.

        Returns:
            A fully formatted error message suitable for display.
        """
        if not context:
            return message

        return message + linesep + cls.get_location_string(context, indent=FORMAT_INDENT)

    @classmethod
    def get_location_string(cls, context: ErrorContext, *,
                            indent: str | int | None = None) -> str:
        """Format source location information.

        Args:
            context: Error context containing location metadata.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted location string including uri, line,
            column and step text when available.
        """
        indent = cls._ensure_indent(indent)

        uri = context.get('uri') or FORMAT_FILENAME

        message = f'{indent}in "{uri}"'
        if (line_num := context.get('line_num')) is not None:
            message += f', line {line_num}'
            if (column_num := context.get('column_num')) is not None:
                message += f', column {column_num}'

        if step_text := context.get('step_text'):
            message += f'{linesep}{indent}on step "{step_text}"'

        return message

    @staticmethod
    def format_reference(reference: 'SourceReference') -> str:
        """Format a source reference as `uri:line:column`.

        Unknown parts are rendered as `?`.

        Args:
            reference: Source reference of a definition.

        Returns:
            Compact reference string.
        """
        line = column = FORMAT_UNKNOWN
        if reference.location is not None:
            line = str(reference.location.line)
            if reference.location.column is not None:
                column = str(reference.location.column)

        return f'{reference.uri or FORMAT_UNKNOWN}:{line}:{column}'

    @staticmethod
    def _ensure_indent(indent: str | int | None = None) -> str:
        """Normalize indentation input.

        Args:
            indent: Indentation as string or number of spaces.

        Returns:
            A string consisting of spaces or the provided string.
        """
        if isinstance(indent, int) and indent > 0:
            return ' ' * indent

        if isinstance(indent, str):
            return indent

        return ''


class SupportCodeWarning(UserWarning):
    """Warning emitted for recovered support code issues.

    Used when a step definition references a parameter type that was
    never registered: the step is left out of the library, but building
    continues.
    """


class BDDError(Exception, ErrorFormatter):
    """Base exception for all bdd-assembly errors.

    All custom exceptions raised by the library inherit from this class
    to allow unified error handling by callers.
    """

    def __init__(self, message: str, *,
                 context: ErrorContext | None = None) -> None:
        """Initialize an error.

        Args:
            message: Human-readable error description.
            context: Error context containing optional location values.
        """
        self.message = message
        self.context = context

        super().__init__(message)

    def __str__(self) -> str:
        """String representation."""
        return self.format(self.message, self.context)


class StepMatchError(BDDError):
    """Error raised when a pickle step cannot be prepared.

    Raised only when a consumer prepares the step, never during plan
    assembly or serialization.
    """

    def __init__(self, message: str, *,
                 pickle_step: 'PickleStep',
                 source_reference: 'SourceReference | None' = None) -> None:
        """Initialize a step matching error.

        Args:
            message: Human-readable error description.
            pickle_step: Pickle step that failed to match.
            source_reference: Location of the step in its document.
        """
        self.pickle_step = pickle_step
        self.text = pickle_step.text

        context = ErrorContext(step_text=pickle_step.text)
        if source_reference is not None:
            context['uri'] = source_reference.uri
            if source_reference.location is not None:
                context['line_num'] = source_reference.location.line
                context['column_num'] = source_reference.location.column

        super().__init__(message, context=context)


class UndefinedStepError(StepMatchError):
    """Error raised when no step definition matches the text of a step."""

    def __init__(self, pickle_step: 'PickleStep', *,
                 source_reference: 'SourceReference | None' = None) -> None:
        """Initialize an undefined step error.

        Args:
            pickle_step: Pickle step without a matching definition.
            source_reference: Location of the step in its document.
        """
        super().__init__(
            f'No matching step definitions found for text "{pickle_step.text}"',
            pickle_step=pickle_step,
            source_reference=source_reference,
        )


class AmbiguousStepError(StepMatchError):
    """Error raised when several step definitions match the text of a step.

    The message enumerates the source reference of every matching
    definition in registration order, numbered from 1.
    """

    def __init__(self, pickle_step: 'PickleStep',
                 references: 'Sequence[SourceReference]', *,
                 source_reference: 'SourceReference | None' = None) -> None:
        """Initialize an ambiguous step error.

        Args:
            pickle_step: Pickle step with several matching definitions.
            references: Source references of the matching definitions.
            source_reference: Location of the step in its document.
        """
        self.references = tuple(references)

        message = f'Multiple matching step definitions found for text "{pickle_step.text}":'
        for position, reference in enumerate(self.references, start=1):
            message += f'\n{position}) {self.format_reference(reference)}'

        super().__init__(
            message,
            pickle_step=pickle_step,
            source_reference=source_reference,
        )


class PlanAssemblyError(BDDError):
    """Error raised when pickles are inconsistent with their document.

    This exception indicates that a pickle or pickle step refers to an
    AST node that the supplied Gherkin document does not contain.
    """

    @classmethod
    def missing_node(cls, kind: str, node_id: str, uri: str | None) -> 'Self':
        """Create an error for an AST node absent from the document.

        Args:
            kind: Human-readable kind of the node.
            node_id: Identifier of the missing node.
            uri: URI of the document.

        Returns:
            PlanAssemblyError with document location context.
        """
        return cls(
            f'No {kind} with id {node_id!r} found in the document',
            context=ErrorContext(uri=uri),
        )


class FeatureParseError(BDDError):
    """Error raised when a feature source cannot be parsed."""


class DataTableError(BDDError):
    """Error raised when a data table has an unexpected shape."""
