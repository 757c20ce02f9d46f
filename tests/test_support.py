"""Tests for the support code builder and library."""

import re
from typing import TYPE_CHECKING

import pytest
from cucumber_expressions.errors import CucumberExpressionError
from cucumber_tag_expressions.parser import TagExpressionError

from bdd_assembly.errors import SupportCodeWarning
from bdd_assembly.messages import HookType, StepDefinitionPatternType
from bdd_assembly.support import (
    NewParameterType,
    NewStep,
    NewTestCaseHook,
    NewTestRunHook,
    SupportCodeLibrary,
)
from bdd_assembly.support.definitions import DefinedMixin

if TYPE_CHECKING:
    from collections.abc import Callable

if TYPE_CHECKING:
    from bdd_assembly.messages import SourceReference
    from bdd_assembly.support import SupportCodeBuilder


def noop(*args: object) -> None:
    """Do nothing."""


def envelope_kinds(library: SupportCodeLibrary) -> list[tuple[str, str | None]]:
    """Return the message kind and id of each library envelope."""
    kinds = []
    for envelope in library.to_envelopes():
        (kind, message), = envelope.to_dict().items()
        kinds.append((kind, message.get('id')))

    return kinds


def test_empty_library(builder: 'SupportCodeBuilder') -> None:
    """Query a library built without registrations."""
    library = builder.build()

    assert library.find_all_steps_by('a step') == []
    assert library.find_all_before_hooks_by(['@smoke']) == []
    assert library.find_all_after_hooks_by([]) == []
    assert library.get_all_before_all_hooks() == []
    assert library.get_all_after_all_hooks() == []
    assert library.get_all_sources() == []
    assert library.to_envelopes() == []


def test_registration_is_chainable(builder: 'SupportCodeBuilder',
                                   source: 'Callable[..., SourceReference]') -> None:
    """Return the builder itself from every registration."""
    result = (
        builder
        .add_step(NewStep(pattern='a step', fn=noop, source_reference=source(1)))
        .add_before_hook(NewTestCaseHook(fn=noop, source_reference=source(2)))
        .add_after_hook(NewTestCaseHook(fn=noop, source_reference=source(3)))
        .add_before_all_hook(NewTestRunHook(fn=noop, source_reference=source(4)))
        .add_after_all_hook(NewTestRunHook(fn=noop, source_reference=source(5)))
    )

    assert result is builder
    assert len(builder.build().get_all_sources()) == 5


def test_envelopes_follow_registration_order(builder: 'SupportCodeBuilder',
                                             source: 'Callable[..., SourceReference]') -> None:
    """Serialize support code in authorship order, notices last."""
    builder.add_after_all_hook(NewTestRunHook(fn=noop, source_reference=source(1)))
    builder.add_step(NewStep(pattern='a {color} ball', fn=noop, source_reference=source(2)))
    builder.add_parameter_type(NewParameterType(
        name='color',
        regexp='red|blue',
        source_reference=source(3),
    ))
    builder.add_step(NewStep(pattern='a {flight}', fn=noop, source_reference=source(4)))
    builder.add_before_hook(NewTestCaseHook(fn=noop, source_reference=source(5)))

    with pytest.warns(SupportCodeWarning, match=r"undefined parameter type 'flight'"):
        library = builder.build()

    assert envelope_kinds(library) == [
        ('hook', '0'),
        ('stepDefinition', '1'),
        ('parameterType', '2'),
        ('hook', '4'),
        ('undefinedParameterType', None),
    ]


def test_undefined_parameter_types_are_deduplicated(builder: 'SupportCodeBuilder',
                                                    source: 'Callable[..., SourceReference]') -> None:
    """Record one notice per distinct expression of each unknown name."""
    for pattern in ('a {flight}', 'another {flight}', 'a {flight}', 'an {airport}'):
        builder.add_step(NewStep(pattern=pattern, fn=noop, source_reference=source()))

    with pytest.warns(SupportCodeWarning):
        library = builder.build()

    assert library.steps == ()
    assert [
        (notice.name, notice.expression)
        for notice in library.undefined_parameter_types
    ] == [
        ('flight', 'a {flight}'),
        ('flight', 'another {flight}'),
        ('airport', 'an {airport}'),
    ]
    assert library.to_envelopes()[0].to_dict() == {
        'undefinedParameterType': {
            'name': 'flight',
            'expression': 'a {flight}',
        },
    }


def test_malformed_expression_propagates(builder: 'SupportCodeBuilder',
                                         source: 'Callable[..., SourceReference]') -> None:
    """Abort building on a malformed step expression."""
    builder.add_step(NewStep(pattern='a {unclosed', fn=noop, source_reference=source()))

    with pytest.raises(CucumberExpressionError):
        builder.build()


def test_malformed_tag_expression_propagates(builder: 'SupportCodeBuilder',
                                             source: 'Callable[..., SourceReference]') -> None:
    """Abort building on a malformed hook tag expression."""
    builder.add_before_hook(NewTestCaseHook(tags='@smoke and', fn=noop, source_reference=source()))

    with pytest.raises(TagExpressionError):
        builder.build()


@pytest.mark.parametrize('tag_names, expected', (
    pytest.param(['@smoke'], ['untagged', 'smoke'], id='smoke'),
    pytest.param(['@regression'], ['untagged', 'regression'], id='regression'),
    pytest.param(['@smoke', '@regression'], ['untagged', 'smoke', 'regression'], id='both'),
    pytest.param([], ['untagged'], id='untagged'),
))
def test_hooks_filtered_by_tags(builder: 'SupportCodeBuilder',
                                source: 'Callable[..., SourceReference]',
                                tag_names: list[str], expected: list[str]) -> None:
    """Select scenario hooks whose tag expression holds."""
    for name, tags in (('untagged', None), ('smoke', '@smoke'), ('regression', '@regression')):
        builder.add_before_hook(NewTestCaseHook(name=name, tags=tags, fn=noop, source_reference=source()))
        builder.add_after_hook(NewTestCaseHook(name=name, tags=tags, fn=noop, source_reference=source()))

    library = builder.build()

    assert [hook.name for hook in library.find_all_before_hooks_by(tag_names)] == expected
    assert [hook.name for hook in library.find_all_after_hooks_by(tag_names)] == expected


def test_hook_messages(builder: 'SupportCodeBuilder',
                       source: 'Callable[..., SourceReference]') -> None:
    """Serialize hooks of every kind."""
    builder.add_before_hook(NewTestCaseHook(
        name='login',
        tags='@smoke and not @slow',
        fn=noop,
        source_reference=source(10, 2),
    ))
    builder.add_after_all_hook(NewTestRunHook(fn=noop, source_reference=source()))

    library = builder.build()

    assert [envelope.to_dict() for envelope in library.to_envelopes()] == [
        {
            'hook': {
                'id': '0',
                'type': 'BEFORE_TEST_CASE',
                'name': 'login',
                'tagExpression': '@smoke and not @slow',
                'sourceReference': {
                    'uri': 'steps.py',
                    'location': {'line': 10, 'column': 2},
                },
            },
        },
        {
            'hook': {
                'id': '1',
                'type': 'AFTER_TEST_RUN',
                'sourceReference': {'uri': 'steps.py'},
            },
        },
    ]


def test_run_hooks_are_copied(builder: 'SupportCodeBuilder',
                              source: 'Callable[..., SourceReference]') -> None:
    """Return fresh lists of run hooks on every call."""
    builder.add_before_all_hook(NewTestRunHook(name='first', fn=noop, source_reference=source()))
    builder.add_before_all_hook(NewTestRunHook(name='second', fn=noop, source_reference=source()))
    library = builder.build()

    hooks = library.get_all_before_all_hooks()
    hooks.clear()

    assert [hook.name for hook in library.get_all_before_all_hooks()] == ['first', 'second']
    assert library.get_all_before_all_hooks()[0].type == HookType.BEFORE_TEST_RUN


def test_sources_listed_by_category(builder: 'SupportCodeBuilder',
                                    source: 'Callable[..., SourceReference]') -> None:
    """List sources of parameter types, steps and hooks by category."""
    builder.add_after_all_hook(NewTestRunHook(fn=noop, source_reference=source(6)))
    builder.add_before_all_hook(NewTestRunHook(fn=noop, source_reference=source(5)))
    builder.add_after_hook(NewTestCaseHook(fn=noop, source_reference=source(4)))
    builder.add_before_hook(NewTestCaseHook(fn=noop, source_reference=source(3)))
    builder.add_step(NewStep(pattern='a step', fn=noop, source_reference=source(2)))
    builder.add_parameter_type(NewParameterType(name='color', regexp='red', source_reference=source(1)))

    library = builder.build()

    assert [reference.location.line for reference in library.get_all_sources()] == [1, 2, 3, 4, 5, 6]


def test_find_all_steps_by(builder: 'SupportCodeBuilder',
                           source: 'Callable[..., SourceReference]') -> None:
    """Match a step text against all step definitions."""
    builder.add_step(NewStep(pattern='I have {int} cukes', fn=noop, source_reference=source(1)))
    builder.add_step(NewStep(pattern='I have {word} cukes', fn=noop, source_reference=source(2)))
    builder.add_step(NewStep(pattern='I have no cukes', fn=noop, source_reference=source(3)))

    library = builder.build()
    matches = library.find_all_steps_by('I have 42 cukes')

    assert [matched.definition.id for matched in matches] == ['0', '1']

    argument, = matches[0].args
    assert argument.get_value() == 42
    assert argument.parameter_type_name == 'int'
    assert argument.to_message().to_dict() == {
        'group': {'start': 7, 'value': '42', 'children': []},
        'parameterTypeName': 'int',
    }


def test_regular_expression_step(builder: 'SupportCodeBuilder',
                                 source: 'Callable[..., SourceReference]') -> None:
    """Match a step defined by a compiled regular expression."""
    builder.add_step(NewStep(pattern=re.compile(r'^I have (\d+) cukes$'), fn=noop, source_reference=source()))

    library = builder.build()

    assert len(library.find_all_steps_by('I have 42 cukes')) == 1
    assert library.find_all_steps_by('I have many cukes') == []

    message = library.steps[0].to_message()
    assert message.pattern.type == StepDefinitionPatternType.REGULAR_EXPRESSION
    assert message.pattern.source == r'^I have (\d+) cukes$'


def test_regular_expression_step_flags(builder: 'SupportCodeBuilder',
                                       source: 'Callable[..., SourceReference]') -> None:
    """Keep flags of compiled step patterns when matching and serializing."""
    builder.add_step(NewStep(
        pattern=re.compile('^a (red|blue) ball$', re.IGNORECASE),
        fn=noop,
        source_reference=source(),
    ))

    library = builder.build()

    matched, = library.find_all_steps_by('a RED ball')
    assert matched.args[0].get_value() == 'RED'

    envelope, = library.to_envelopes()
    assert envelope.to_dict()['stepDefinition']['pattern'] == {
        'type': 'REGULAR_EXPRESSION',
        'source': '(?i:^a (red|blue) ball$)',
    }


@pytest.mark.parametrize('pattern, matches', (
    pytest.param(r'(\d+) cukes', True, id='unanchored'),
    pytest.param(r'^(\d+) cukes$', False, id='anchored'),
))
def test_regular_expression_step_anchoring(pattern: str, matches: bool,
                                           builder: 'SupportCodeBuilder',
                                           source: 'Callable[..., SourceReference]') -> None:
    """Match unanchored patterns against a prefix of a longer step text."""
    builder.add_step(NewStep(pattern=re.compile(pattern), fn=noop, source_reference=source()))

    found = builder.build().find_all_steps_by('42 cukes in the belly')

    assert len(found) == int(matches)
    if matches:
        assert found[0].args[0].get_value() == '42'


def test_parameter_type_flags_are_inlined(builder: 'SupportCodeBuilder',
                                          source: 'Callable[..., SourceReference]') -> None:
    """Embed flags of compiled parameter type patterns."""
    builder.add_parameter_type(NewParameterType(
        name='color',
        regexp=(re.compile('red|blue', re.IGNORECASE), 'green'),
        transformer=str.lower,
        use_for_snippets=False,
        source_reference=source(),
    ))
    builder.add_step(NewStep(pattern='a {color} ball', fn=noop, source_reference=source()))

    library = builder.build()

    assert library.parameter_types[0].to_message().to_dict() == {
        'id': '0',
        'name': 'color',
        'regularExpressions': ['(?i:red|blue)', 'green'],
        'preferForRegularExpressionMatch': False,
        'useForSnippets': False,
        'sourceReference': {'uri': 'steps.py'},
    }

    matched, = library.find_all_steps_by('a RED ball')
    assert matched.args[0].get_value() == 'red'


def test_context_parameter_type(builder: 'SupportCodeBuilder',
                                source: 'Callable[..., SourceReference]') -> None:
    """Pass the execution context to context-aware transformers."""
    builder.add_parameter_type(NewParameterType(
        name='user',
        regexp=r'\w+',
        transformer=lambda context, name: context['users'][name],
        pass_context=True,
        source_reference=source(),
    ))
    builder.add_step(NewStep(pattern='I log in as {user}', fn=noop, source_reference=source()))

    library = builder.build()
    matched, = library.find_all_steps_by('I log in as alice')

    assert matched.args[0].get_value({'users': {'alice': 'Alice Liddell'}}) == 'Alice Liddell'


def test_build_twice(builder: 'SupportCodeBuilder',
                     source: 'Callable[..., SourceReference]') -> None:
    """Build independent libraries from the same registrations."""
    builder.add_parameter_type(NewParameterType(name='color', regexp='red', source_reference=source()))
    builder.add_step(NewStep(pattern='a {color} ball', fn=noop, source_reference=source()))

    first = builder.build()
    second = builder.build()

    assert first is not second
    assert len(first.find_all_steps_by('a red ball')) == 1
    assert len(second.find_all_steps_by('a red ball')) == 1


def test_expression_generator(builder: 'SupportCodeBuilder') -> None:
    """Suggest expressions for undefined step texts."""
    generator = builder.build().get_expression_generator()

    assert generator.generate_expressions('I have 42 cukes')


@pytest.mark.parametrize('name', (
    pytest.param('', id='empty'),
    pytest.param('{color}', id='braces'),
    pytest.param('co(lor)', id='parentheses'),
    pytest.param('co/lor', id='slash'),
))
def test_invalid_parameter_type_name(name: str,
                                     source: 'Callable[..., SourceReference]') -> None:
    """Reject parameter type names with reserved characters."""
    with pytest.raises(ValueError, match=r'^1 validation error'):
        NewParameterType(name=name, regexp='red', source_reference=source())


def test_defined_mixin_is_abstract(source: 'Callable[..., SourceReference]') -> None:
    """Refuse to build a definition without a concrete kind."""
    with pytest.raises(TypeError, match='abstract'):
        DefinedMixin(id='0', order=0, source_reference=source())
