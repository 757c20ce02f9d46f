"""Source location messages."""

from pydantic import Field

from bdd_assembly.models import MessageModel


class Location(MessageModel):
    """Position in a source file, 1-based."""

    line: int = Field(ge=0)
    column: int | None = Field(default=None, ge=0)


class SourceReference(MessageModel):
    """Reference to where a definition or test element originates.

    For support code this points at the user's code; for test cases and
    test steps it points at the Gherkin document.
    """

    uri: str | None = None
    location: Location | None = None
