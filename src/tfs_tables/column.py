"""Typed column storage."""

from __future__ import annotations

from collections.abc import Callable, Iterable, MutableSequence, Sequence
from typing import Any, TextIO

from tfs_tables.convert import parse_bool, parse_float, parse_int
from tfs_tables.errors import TypeMismatchError
from tfs_tables.parsing.tfs_lexer import quote_token
from tfs_tables.types import FIELD_WIDTH, DataType, FloatPrecision


class TypedValues(MutableSequence):
    """List of column elements that checks every write.

    This is the backing store of a column, and what the ``*_mut`` accessors
    hand out, so elements of the wrong type can never get in.
    """

    def __init__(self, coerce: Callable[[Any], Any], values: Iterable[Any] = ()) -> None:
        self._coerce = coerce
        self._data: list[Any] = [coerce(v) for v in values]

    def __getitem__(self, index):
        return self._data[index]

    def __setitem__(self, index, value) -> None:
        if isinstance(index, slice):
            self._data[index] = [self._coerce(v) for v in value]
        else:
            self._data[index] = self._coerce(value)

    def __delitem__(self, index) -> None:
        del self._data[index]

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self):
        return iter(self._data)

    def insert(self, index: int, value: Any) -> None:
        self._data.insert(index, self._coerce(value))

    def append(self, value: Any) -> None:
        self._data.append(self._coerce(value))

    def extend(self, values: Iterable[Any]) -> None:
        self._data.extend(self._coerce(v) for v in values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TypedValues):
            return self._data == other._data
        if isinstance(other, Sequence) and not isinstance(other, str):
            return self._data == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"TypedValues({self._data!r})"


class Column:
    """A named, homogeneously typed sequence of values.

    Build columns with :meth:`create`; each kind is a separate subclass, so a
    column's kind is fixed for its lifetime and its backing list only ever
    holds values of that kind.
    """

    kind: DataType

    def __init__(self, name: str = "", values: Iterable[Any] = ()) -> None:
        self.name = name
        self._values = TypedValues(self._coerce, values)

    @staticmethod
    def create(
        kind: DataType,
        name: str = "",
        values: Iterable[Any] = (),
        precision: FloatPrecision = FloatPrecision.FLOAT64,
    ) -> Column:
        """Create an empty (or pre-filled) column of the given kind."""
        if not kind.is_column_kind:
            raise TypeMismatchError(f"{kind.value} is not a column kind")
        if kind is DataType.INT:
            return IntColumn(name, values)
        if kind is DataType.FLOAT:
            return FloatColumn(name, values, precision)
        if kind is DataType.STRING:
            return StringColumn(name, values)
        return BoolColumn(name, values)

    @property
    def type_tag(self) -> str:
        return self.kind.type_tag

    def _coerce(self, value: Any) -> Any:
        """Validate ``value`` for this column, returning the stored form."""
        raise NotImplementedError

    def _from_text(self, token: str, strict: bool) -> Any:
        raise NotImplementedError

    def _type_error(self, value: Any) -> TypeMismatchError:
        return TypeMismatchError(
            f"Cannot push {type(value).__name__} into {self.kind.value} column '{self.name}'"
        )

    # ---- Insertion ----------------------------------------------------------

    def push(self, value: Any) -> None:
        """Append one value of this column's kind."""
        self._values.append(value)

    def extend(self, values: Iterable[Any]) -> None:
        self._values.extend(values)

    def convert_from_text(self, token: str, strict: bool = False) -> None:
        """Parse ``token`` according to this column's kind and append it."""
        self._values.append(self._from_text(token, strict))

    # ---- Extraction ---------------------------------------------------------

    def _view(self, kind: DataType) -> TypedValues:
        if self.kind is not kind:
            raise TypeMismatchError(f"Column '{self.name}' is {self.kind.value}, not {kind.value}")
        return self._values

    def as_int_sequence(self) -> tuple[int, ...]:
        return tuple(self._view(DataType.INT))

    def as_float_sequence(self) -> tuple[float, ...]:
        return tuple(self._view(DataType.FLOAT))

    def as_string_sequence(self) -> tuple[str, ...]:
        return tuple(self._view(DataType.STRING))

    def as_bool_sequence(self) -> tuple[bool, ...]:
        return tuple(self._view(DataType.BOOL))

    def as_int_sequence_mut(self) -> TypedValues:
        return self._view(DataType.INT)

    def as_float_sequence_mut(self) -> TypedValues:
        return self._view(DataType.FLOAT)

    def as_string_sequence_mut(self) -> TypedValues:
        return self._view(DataType.STRING)

    def as_bool_sequence_mut(self) -> TypedValues:
        return self._view(DataType.BOOL)

    # ---- Properties ---------------------------------------------------------

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, index: int) -> Any:
        return self._values[index]

    def __iter__(self):
        return iter(self._values)

    def format_at(self, index: int) -> str:
        """Return the text of element ``index`` as written to a TFS file."""
        return str(self._values[index])

    def print_at(self, index: int, sink: TextIO) -> None:
        """Write element ``index`` right-justified, followed by one space."""
        if index < 0 or index >= len(self._values):
            raise IndexError(f"Index {index} out of range [0, {len(self._values)})")
        sink.write(f"{self.format_at(index):>{FIELD_WIDTH}} ")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, len={len(self)})"


class IntColumn(Column):
    kind = DataType.INT

    def _coerce(self, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise self._type_error(value)
        return int(value)

    def _from_text(self, token: str, strict: bool) -> int:
        return parse_int(token, strict)


class FloatColumn(Column):
    """Floating-point column; values are held at the column's precision."""

    kind = DataType.FLOAT

    def __init__(
        self,
        name: str = "",
        values: Iterable[Any] = (),
        precision: FloatPrecision = FloatPrecision.FLOAT64,
    ) -> None:
        self.precision = precision
        super().__init__(name, values)

    def _coerce(self, value: Any) -> float:
        if not isinstance(value, float):
            raise self._type_error(value)
        return self.precision.narrow(value)

    def _from_text(self, token: str, strict: bool) -> float:
        return self.precision.narrow(parse_float(token, strict))

    def format_at(self, index: int) -> str:
        return repr(self._values[index])


class StringColumn(Column):
    kind = DataType.STRING

    def _coerce(self, value: Any) -> str:
        if not isinstance(value, str):
            raise self._type_error(value)
        return value

    def _from_text(self, token: str, strict: bool) -> str:
        return token

    def format_at(self, index: int) -> str:
        return quote_token(self._values[index])


class BoolColumn(Column):
    kind = DataType.BOOL

    def _coerce(self, value: Any) -> bool:
        if not isinstance(value, bool):
            raise self._type_error(value)
        return value

    def _from_text(self, token: str, strict: bool) -> bool:
        return parse_bool(token, strict)

    def format_at(self, index: int) -> str:
        return "True" if self._values[index] else "False"
