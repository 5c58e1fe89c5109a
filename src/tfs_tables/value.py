"""Scalar values stored as table properties."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from tfs_tables.errors import TypeMismatchError
from tfs_tables.types import DataType, FloatPrecision

# Python type each kind's payload must have
_PAYLOAD_TYPES: dict[DataType, type] = {
    DataType.INT: int,
    DataType.FLOAT: float,
    DataType.BOOL: bool,
    DataType.COMPLEX: complex,
    DataType.STRING: str,
}


@dataclass(frozen=True)
class ScalarValue:
    """A single tagged value.

    Use the ``from_*`` constructors or :meth:`of`; the kind always follows
    from the constructor, so the payload can never disagree with it.
    """

    kind: DataType
    payload: Any

    def __post_init__(self) -> None:
        expected = _PAYLOAD_TYPES[self.kind]
        # bool is a subclass of int, so compare exact types
        if type(self.payload) is not expected:
            raise TypeMismatchError(
                f"{self.kind.value} value cannot hold {type(self.payload).__name__}"
            )

    @classmethod
    def from_int(cls, value: int) -> ScalarValue:
        return cls(DataType.INT, int(value))

    @classmethod
    def from_float(
        cls, value: float, precision: FloatPrecision = FloatPrecision.FLOAT64
    ) -> ScalarValue:
        return cls(DataType.FLOAT, precision.narrow(value))

    @classmethod
    def from_bool(cls, value: bool) -> ScalarValue:
        return cls(DataType.BOOL, bool(value))

    @classmethod
    def from_complex(
        cls, value: complex, precision: FloatPrecision = FloatPrecision.FLOAT64
    ) -> ScalarValue:
        return cls(DataType.COMPLEX, precision.narrow_complex(complex(value)))

    @classmethod
    def from_string(cls, value: str) -> ScalarValue:
        return cls(DataType.STRING, value)

    @classmethod
    def of(cls, value: Any, precision: FloatPrecision = FloatPrecision.FLOAT64) -> ScalarValue:
        """Wrap a Python primitive, choosing the kind from its type."""
        if isinstance(value, ScalarValue):
            return value
        # bool must be checked before int
        if isinstance(value, bool):
            return cls.from_bool(value)
        if isinstance(value, int):
            return cls.from_int(value)
        if isinstance(value, float):
            return cls.from_float(value, precision)
        if isinstance(value, complex):
            return cls.from_complex(value, precision)
        if isinstance(value, str):
            return cls.from_string(value)
        raise TypeMismatchError(f"Cannot store {type(value).__name__} as a property value")

    @property
    def type_tag(self) -> str:
        """Return the TFS type tag for this value."""
        return self.kind.type_tag

    def _require(self, kind: DataType) -> Any:
        if self.kind is not kind:
            raise TypeMismatchError(f"Value is {self.kind.value}, not {kind.value}")
        return self.payload

    def as_int(self) -> int:
        return self._require(DataType.INT)

    def as_float(self) -> float:
        return self._require(DataType.FLOAT)

    def as_bool(self) -> bool:
        return self._require(DataType.BOOL)

    def as_complex(self) -> complex:
        """Return the complex payload; FLOAT values widen with a zero imaginary part."""
        if self.kind is DataType.FLOAT:
            return complex(self.payload, 0.0)
        return self._require(DataType.COMPLEX)

    def as_string(self) -> str:
        return self._require(DataType.STRING)

    def format(self) -> str:
        """Render the value as it is written to a TFS file."""
        if self.kind is DataType.BOOL:
            return "True" if self.payload else "False"
        return str(self.payload)

    def __str__(self) -> str:
        return self.format()
