"""Message models exchanged with the outside world.

Inputs are Gherkin documents and pickles produced by a Gherkin parser and
compiler; outputs are envelopes describing support code and assembled
test cases. All messages use camel-cased field names on the wire.
"""

from .envelopes import Envelope
from .gherkin import (
    Background,
    Comment,
    DataTable,
    DocString,
    Examples,
    Feature,
    FeatureChild,
    GherkinDocument,
    Rule,
    RuleChild,
    Scenario,
    Step,
    TableCell,
    TableRow,
    Tag,
)
from .pickles import (
    Pickle,
    PickleDocString,
    PickleStep,
    PickleStepArgument,
    PickleTable,
    PickleTableCell,
    PickleTableRow,
    PickleTag,
)
from .plan import Group, StepMatchArgument, StepMatchArgumentsList, TestCaseMessage, TestStepMessage
from .sources import Location, SourceReference
from .support import (
    HookMessage,
    HookType,
    ParameterTypeMessage,
    StepDefinitionMessage,
    StepDefinitionPattern,
    StepDefinitionPatternType,
    UndefinedParameterTypeMessage,
)

__all__ = (
    'Background',
    'Comment',
    'DataTable',
    'DocString',
    'Envelope',
    'Examples',
    'Feature',
    'FeatureChild',
    'GherkinDocument',
    'Group',
    'HookMessage',
    'HookType',
    'Location',
    'ParameterTypeMessage',
    'Pickle',
    'PickleDocString',
    'PickleStep',
    'PickleStepArgument',
    'PickleTable',
    'PickleTableCell',
    'PickleTableRow',
    'PickleTag',
    'Rule',
    'RuleChild',
    'Scenario',
    'SourceReference',
    'Step',
    'StepDefinitionMessage',
    'StepDefinitionPattern',
    'StepDefinitionPatternType',
    'StepMatchArgument',
    'StepMatchArgumentsList',
    'TableCell',
    'TableRow',
    'Tag',
    'TestCaseMessage',
    'TestStepMessage',
    'UndefinedParameterTypeMessage',
)
