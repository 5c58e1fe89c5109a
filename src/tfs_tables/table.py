"""In-memory table of named, typed columns."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from tfs_tables.column import Column
from tfs_tables.errors import DuplicateColumnError, KeyNotFoundError, TypeMismatchError
from tfs_tables.types import KEY_WIDTH, DataType, FloatPrecision
from tfs_tables.value import ScalarValue

logger = logging.getLogger(__name__)


def infer_kind(values: Iterable[Any]) -> DataType | None:
    """Infer a column kind from the element types of ``values``.

    Returns None for an empty input. Mixed element types raise.
    """
    kinds = set()
    for value in values:
        # bool must be checked before int
        if isinstance(value, bool):
            kinds.add(DataType.BOOL)
        elif isinstance(value, int):
            kinds.add(DataType.INT)
        elif isinstance(value, float):
            kinds.add(DataType.FLOAT)
        elif isinstance(value, str):
            kinds.add(DataType.STRING)
        else:
            raise TypeMismatchError(f"Cannot store {type(value).__name__} in a column")
    if not kinds:
        return None
    if len(kinds) > 1:
        names = ", ".join(sorted(k.value for k in kinds))
        raise TypeMismatchError(f"Column values have mixed types: {names}")
    return kinds.pop()


class Table:
    """Ordered named columns plus a property block.

    Columns keep their declaration order and names are unique. All columns are
    expected to have the same length; that is the caller's responsibility and
    can be inspected with :meth:`verify`.
    """

    def __init__(self, precision: FloatPrecision = FloatPrecision.FLOAT64) -> None:
        self.precision = precision
        self.columns: list[Column] = []
        self.column_index: dict[str, int] = {}
        self.properties: dict[str, ScalarValue] = {}
        self.row_index: dict[str, int] = {}

    # ---- Columns ------------------------------------------------------------

    def add_column(
        self,
        name: str,
        values: Iterable[Any] | None = None,
        kind: DataType | None = None,
    ) -> Column:
        """Append a column and return it.

        Args:
            name: Column name, unique within the table.
            values: Initial values. Their element type selects the kind when
                ``kind`` is not given.
            kind: Column kind. Required when ``values`` is empty or omitted.

        Returns:
            The new column, for incremental population.
        """
        values = list(values) if values is not None else []
        if kind is None:
            kind = infer_kind(values)
            if kind is None:
                raise TypeMismatchError(f"Cannot infer the kind of empty column '{name}'")
        if name in self.column_index:
            raise DuplicateColumnError(f"Column '{name}' already exists")

        column = Column.create(kind, name, values, self.precision)
        self.column_index[name] = len(self.columns)
        self.columns.append(column)
        return column

    def get_column(self, key: str | int) -> Column:
        """Get a column by name or by position."""
        if isinstance(key, str):
            position = self.column_index.get(key)
            if position is None:
                raise KeyNotFoundError(f"Column '{key}' not found")
            return self.columns[position]
        if key < 0 or key >= len(self.columns):
            raise IndexError(f"Index {key} out of range [0, {len(self.columns)})")
        return self.columns[key]

    def __getitem__(self, key: str | int) -> Column:
        return self.get_column(key)

    def __contains__(self, name: object) -> bool:
        return name in self.column_index

    def __iter__(self) -> Iterator[Column]:
        return iter(self.columns)

    def column_names(self) -> list[str]:
        """Return the column names in declaration order."""
        return list(self.column_index)

    # ---- Properties ---------------------------------------------------------

    def insert_property(self, key: str, value: Any) -> None:
        """Store a property, replacing any existing value under ``key``."""
        self.properties[key] = ScalarValue.of(value, self.precision)

    def get_property(self, key: str) -> ScalarValue:
        value = self.properties.get(key)
        if value is None:
            raise KeyNotFoundError(f"Property '{key}' not found")
        return value

    # ---- Rows ---------------------------------------------------------------

    def row_count(self) -> int:
        """Return the number of rows, i.e. the length of the first column."""
        if not self.columns:
            return 0
        first = next(iter(self.column_index.values()))
        return len(self.columns[first])

    def build_row_index(self, column_name: str) -> None:
        """Map each value of a string column to its row number.

        When a value repeats, the last row holding it wins.
        """
        column = self.get_column(column_name)
        if column.kind is not DataType.STRING:
            raise TypeMismatchError(
                f"Index column '{column_name}' is {column.kind.value}, not string"
            )
        self.row_index = {}
        for i, value in enumerate(column.as_string_sequence()):
            self.row_index[value] = i
        logger.debug("Indexed %d rows by column '%s'", len(column), column_name)

    def row_of(self, value: str) -> int:
        """Return the row number recorded in the row index for ``value``."""
        row = self.row_index.get(value)
        if row is None:
            raise KeyNotFoundError(f"No row indexed under '{value}'")
        return row

    def verify(self) -> dict[str, int]:
        """Report the length of every column.

        This only observes; a table whose columns disagree in length is logged
        with a warning but no error is raised.
        """
        lengths = {name: len(self.columns[i]) for name, i in self.column_index.items()}
        for name, length in lengths.items():
            logger.info("%s: %d elements", name, length)
        if len(set(lengths.values())) > 1:
            logger.warning("Column lengths differ: %s", lengths)
        return lengths

    # ---- Display ------------------------------------------------------------

    def describe(self) -> str:
        """Return a short human readable summary of the table."""
        lines = [
            f"{len(self.columns)} columns, {self.row_count()} rows",
            "Properties:",
        ]
        for key, value in self.properties.items():
            lines.append(f"{key:>{KEY_WIDTH}}: {value.format()}")
        lines.append("Columns:")
        for name, i in self.column_index.items():
            column = self.columns[i]
            lines.append(f"{name:>{KEY_WIDTH}}: {column.kind.value} [{len(column)}]")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return f"Table(columns={self.column_names()!r}, rows={self.row_count()})"
