"""Data table argument passed to step functions.

For steps that include a data table, a `DataTable` instance is appended
as the last argument of the prepared step function.
"""

from typing import TYPE_CHECKING

from bdd_assembly.errors import DataTableError

if TYPE_CHECKING:
    from collections.abc import Iterable


class DataTable:
    """Cells of a Gherkin data table attached to a step.

    Example:
        >>> table = DataTable([['a', 'b'], ['1', '2']])
        >>> table.hashes()
        [{'a': '1', 'b': '2'}]
    """

    __slots__ = ('_cells',)

    def __init__(self, cells: 'Iterable[Iterable[str]]') -> None:
        """Initialize a data table.

        Args:
            cells: Rows of cell values; the first row is the header
                for `hashes` and `rows`.
        """
        self._cells = tuple(tuple(row) for row in cells)

    def raw(self) -> list[list[str]]:
        """Return a copy of all cells, row by row."""
        return [list(row) for row in self._cells]

    def rows(self) -> list[list[str]]:
        """Return a copy of all cells without the header row."""
        return self.raw()[1:]

    def hashes(self) -> list[dict[str, str]]:
        """Return data rows as mappings keyed by the header row.

        Returns:
            One dictionary per data row.

        Raises:
            DataTableError: If the rows differ in their number of columns.
        """
        if not self._cells:
            return []

        self._check_rectangular()
        keys, *rows = self._cells

        return [dict(zip(keys, row, strict=True)) for row in rows]

    def rows_hash(self) -> dict[str, str]:
        """Return key/value pairs from a two-column table.

        Returns:
            Mapping of first column values to second column values.

        Raises:
            DataTableError: If any row does not have exactly 2 columns.
        """
        if not all(len(row) == 2 for row in self._cells):  # noqa: PLR2004
            raise DataTableError('All rows must have exactly 2 columns')

        return {key: value for key, value in self._cells}

    def list(self) -> list[str]:
        """Return the values of a single-column table.

        Raises:
            DataTableError: If any row does not have exactly 1 column.
        """
        if not all(len(row) == 1 for row in self._cells):
            raise DataTableError('All rows must have exactly 1 column')

        return [value for (value,) in self._cells]

    def transpose(self) -> 'DataTable':
        """Return a new table with rows and columns swapped.

        Raises:
            DataTableError: If the rows differ in their number of columns.
        """
        self._check_rectangular()

        return DataTable(zip(*self._cells, strict=True))

    def _check_rectangular(self) -> None:
        if len({len(row) for row in self._cells}) > 1:
            raise DataTableError('All rows must have the same number of columns')

    def __eq__(self, other: object) -> bool:
        """Compare tables by their cells."""
        if not isinstance(other, DataTable):
            return NotImplemented

        return self._cells == other._cells

    def __hash__(self) -> int:
        """Hash of the cells."""
        return hash(self._cells)

    def __repr__(self) -> str:
        """String representation."""
        return f'{type(self).__name__}({self.raw()!r})'
