"""Feature documents.

Parses Gherkin sources with the official parser and compiles them into
pickles, returning validated message models ready for test plan
assembly.
"""

from pathlib import Path
from typing import TYPE_CHECKING

from gherkin.ast_builder import AstBuilder
from gherkin.errors import ParserError
from gherkin.parser import Parser
from gherkin.pickles.compiler import Compiler
from pydantic import Field

from bdd_assembly.errors import ErrorContext, FeatureParseError
from bdd_assembly.messages import GherkinDocument, Pickle  # noqa: TC001
from bdd_assembly.models import SchemaModel

if TYPE_CHECKING:
    from os import PathLike

if TYPE_CHECKING:
    from bdd_assembly.ids import NewId


class IdGeneratorAdapter:
    """Identifier generator in the form expected by the Gherkin parser."""

    def __init__(self, new_id: 'NewId') -> None:
        """Wrap an identifier factory."""
        self.new_id = new_id

    def get_next_id(self) -> str:
        """Return a fresh identifier."""
        return self.new_id()


class ParsedFeature(SchemaModel):
    """Gherkin document with its compiled pickles."""

    gherkin_document: GherkinDocument = Field(
        title='Gherkin document',
        description='Abstract syntax tree of the feature source.',
    )

    pickles: tuple[Pickle, ...] = Field(
        default=(),
        title='Pickles',
        description='Compiled scenarios, one per scenario or examples row, in document order.',
    )


def parse_feature(content: str, uri: str, *,
                  new_id: 'NewId | None' = None) -> ParsedFeature:
    """Parse a Gherkin source and compile its pickles.

    Args:
        content: Gherkin source text.
        uri: URI of the source, recorded in the document and pickles.
        new_id: Identifier generator for AST nodes and pickles.
            Defaults to the generator configured in the environment.

    Returns:
        Parsed document with its pickles.

    Raises:
        FeatureParseError: If the source is not valid Gherkin.
    """
    if new_id is None:
        from bdd_assembly.config import Settings  # noqa: PLC0415

        new_id = Settings().new_id()

    id_generator = IdGeneratorAdapter(new_id)

    try:
        document = Parser(AstBuilder(id_generator)).parse(content)

    except ParserError as base:
        raise FeatureParseError(
            f'Invalid Gherkin source: {base}',
            context=ErrorContext(uri=uri),
        ) from base

    document['uri'] = uri
    pickles = Compiler(id_generator).compile(document)

    return ParsedFeature.model_validate({
        'gherkin_document': document,
        'pickles': pickles,
    })


def load_feature(path: 'str | PathLike[str]', *,
                 uri: str | None = None,
                 new_id: 'NewId | None' = None) -> ParsedFeature:
    """Load and parse a Gherkin feature file.

    Args:
        path: Path to a UTF-8 encoded `.feature` file.
        uri: URI recorded in the document. Defaults to the path as given.
        new_id: Identifier generator for AST nodes and pickles.

    Returns:
        Parsed document with its pickles.

    Raises:
        FeatureParseError: If the file is not valid Gherkin.
        OSError: If the file cannot be read.
    """
    path = Path(path)

    return parse_feature(
        path.read_text(encoding='utf-8'),
        uri if uri is not None else path.as_posix(),
        new_id=new_id,
    )
