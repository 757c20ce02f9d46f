"""Tests for data table step arguments."""

import pytest

from bdd_assembly.errors import DataTableError
from bdd_assembly.plan import DataTable


def test_raw_returns_copy() -> None:
    """Return a copy of the cells."""
    cells = [['a', 'b', 'c'], ['1', '2', '3']]
    table = DataTable(cells)

    raw = table.raw()
    raw[0][0] = 'changed'

    assert raw is not cells
    assert table.raw() == cells


def test_rows() -> None:
    """Return cells without the header row."""
    table = DataTable([['a', 'b', 'c'], ['1', '2', '3'], ['4', '5', '6']])

    assert table.rows() == [['1', '2', '3'], ['4', '5', '6']]


def test_hashes() -> None:
    """Key each row by the header row."""
    table = DataTable([['a', 'b', 'c'], ['1', '2', '3'], ['4', '5', '6'], ['7', '8', '9']])

    assert table.hashes() == [
        {'a': '1', 'b': '2', 'c': '3'},
        {'a': '4', 'b': '5', 'c': '6'},
        {'a': '7', 'b': '8', 'c': '9'},
    ]


def test_rows_hash() -> None:
    """Key values of the second column by the first column."""
    table = DataTable([['Tom', '1'], ['Dick', '2'], ['Sally', '3']])

    assert table.rows_hash() == {'Tom': '1', 'Dick': '2', 'Sally': '3'}


def test_list() -> None:
    """List values of a single column."""
    assert DataTable([['foo'], ['bar'], ['baz']]).list() == ['foo', 'bar', 'baz']


@pytest.mark.parametrize('cells, method, message', (
    pytest.param(
        [['Tom', '1'], ['Dick', '2', 'whoops'], ['Sally', '3']],
        'rows_hash',
        r'^All rows must have exactly 2 columns$',
        id='rows hash',
    ),
    pytest.param(
        [['foo', 'bar'], ['baz']],
        'list',
        r'^All rows must have exactly 1 column$',
        id='list',
    ),
    pytest.param(
        [['a', 'b', 'c'], ['1', '2'], ['4', '5', '6']],
        'hashes',
        r'^All rows must have the same number of columns$',
        id='hashes with short row',
    ),
    pytest.param(
        [['a', 'b'], ['1', '2', '3']],
        'hashes',
        r'^All rows must have the same number of columns$',
        id='hashes with long row',
    ),
    pytest.param(
        [['a', 'b', 'c'], ['1', '2']],
        'transpose',
        r'^All rows must have the same number of columns$',
        id='transpose',
    ),
))
def test_unexpected_shape(cells: list[list[str]], method: str, message: str) -> None:
    """Reject tables with an unexpected number of columns."""
    with pytest.raises(DataTableError, match=message):
        getattr(DataTable(cells), method)()


def test_transpose() -> None:
    """Swap rows and columns."""
    table = DataTable([['a', 'b', 'c'], ['1', '2', '3']])

    assert table.transpose() == DataTable([['a', '1'], ['b', '2'], ['c', '3']])
    assert table.transpose().raw() == [['a', '1'], ['b', '2'], ['c', '3']]
