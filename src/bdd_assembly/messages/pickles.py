"""Compiled scenario (pickle) messages.

Pickles are produced by the Gherkin compiler: one per scenario or per
examples row, with backgrounds and outline parameters already applied.
"""

from bdd_assembly.models import MessageModel
from bdd_assembly.names import TagName  # noqa: TC001

from .sources import Location


class PickleTableCell(MessageModel):
    """Cell of a pickle data table."""

    value: str


class PickleTableRow(MessageModel):
    """Row of a pickle data table."""

    cells: tuple[PickleTableCell, ...] = ()


class PickleTable(MessageModel):
    """Data table argument of a pickle step."""

    rows: tuple[PickleTableRow, ...] = ()

    @property
    def cells(self) -> tuple[tuple[str, ...], ...]:
        """Return the raw cell values, row by row."""
        return tuple(
            tuple(cell.value for cell in row.cells)
            for row in self.rows
        )


class PickleDocString(MessageModel):
    """Doc string argument of a pickle step."""

    content: str
    media_type: str | None = None


class PickleStepArgument(MessageModel):
    """Argument attached to a pickle step."""

    data_table: PickleTable | None = None
    doc_string: PickleDocString | None = None


class PickleStep(MessageModel):
    """Step of a pickle with its final text."""

    id: str
    text: str
    type: str | None = None
    ast_node_ids: tuple[str, ...] = ()
    argument: PickleStepArgument | None = None


class PickleTag(MessageModel):
    """Tag inherited by a pickle."""

    name: TagName
    ast_node_id: str | None = None


class Pickle(MessageModel):
    """Compiled, executable scenario."""

    id: str
    uri: str | None = None
    location: Location | None = None
    name: str = ''
    language: str = 'en'
    steps: tuple[PickleStep, ...] = ()
    tags: tuple[PickleTag, ...] = ()
    ast_node_ids: tuple[str, ...] = ()

    @property
    def tag_names(self) -> tuple[str, ...]:
        """Return names of all tags of the pickle."""
        return tuple(tag.name for tag in self.tags)
