"""Gherkin document messages.

Read-only structural models of a parsed feature file. They are only used
to resolve the lineage, location and keywords of compiled pickles.
"""

from bdd_assembly.models import MessageModel

from .sources import Location


class Comment(MessageModel):
    """Comment line of a document."""

    location: Location
    text: str


class Tag(MessageModel):
    """Tag attached to a feature, rule, scenario or examples block."""

    id: str | None = None
    name: str
    location: Location


class TableCell(MessageModel):
    """Cell of a Gherkin table."""

    location: Location
    value: str


class TableRow(MessageModel):
    """Row of a Gherkin table."""

    id: str
    location: Location
    cells: tuple[TableCell, ...] = ()


class DataTable(MessageModel):
    """Data table attached to a step."""

    location: Location
    rows: tuple[TableRow, ...] = ()


class DocString(MessageModel):
    """Doc string attached to a step."""

    location: Location
    content: str
    delimiter: str = '"""'
    media_type: str | None = None


class Step(MessageModel):
    """Step as written in the document."""

    id: str
    location: Location
    keyword: str
    keyword_type: str | None = None
    text: str
    data_table: DataTable | None = None
    doc_string: DocString | None = None


class Examples(MessageModel):
    """Examples block of a scenario outline."""

    id: str
    location: Location
    tags: tuple[Tag, ...] = ()
    keyword: str
    name: str = ''
    description: str = ''
    table_header: TableRow | None = None
    table_body: tuple[TableRow, ...] = ()


class Scenario(MessageModel):
    """Scenario or scenario outline."""

    id: str
    location: Location
    tags: tuple[Tag, ...] = ()
    keyword: str
    name: str = ''
    description: str = ''
    steps: tuple[Step, ...] = ()
    examples: tuple[Examples, ...] = ()


class Background(MessageModel):
    """Background shared by the scenarios of a feature or rule."""

    id: str
    location: Location
    keyword: str
    name: str = ''
    description: str = ''
    steps: tuple[Step, ...] = ()


class RuleChild(MessageModel):
    """Child of a rule: either a background or a scenario."""

    background: Background | None = None
    scenario: Scenario | None = None


class Rule(MessageModel):
    """Rule grouping scenarios within a feature."""

    id: str
    location: Location
    tags: tuple[Tag, ...] = ()
    keyword: str
    name: str = ''
    description: str = ''
    children: tuple[RuleChild, ...] = ()


class FeatureChild(MessageModel):
    """Child of a feature: a background, a scenario or a rule."""

    background: Background | None = None
    scenario: Scenario | None = None
    rule: Rule | None = None


class Feature(MessageModel):
    """Feature at the root of a document."""

    location: Location
    tags: tuple[Tag, ...] = ()
    language: str = 'en'
    keyword: str
    name: str = ''
    description: str = ''
    children: tuple[FeatureChild, ...] = ()


class GherkinDocument(MessageModel):
    """Parsed feature file."""

    uri: str | None = None
    feature: Feature | None = None
    comments: tuple[Comment, ...] = ()
