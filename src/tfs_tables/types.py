"""Type definitions for the tfs_tables library."""

from __future__ import annotations

import struct
from enum import Enum

# Printed values are right-justified in this many characters, plus one space
FIELD_WIDTH = 15

# Property keys are right-justified in this many characters
KEY_WIDTH = 32

# Property type tags are right-justified in this many characters
TAG_WIDTH = 4


class DataType(Enum):
    """Element kinds for columns and property values."""

    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    COMPLEX = "complex"
    STRING = "string"

    @property
    def type_tag(self) -> str:
        """Return the TFS type tag written for this kind."""
        tags = {
            DataType.INT: "%d",
            DataType.FLOAT: "%le",
            DataType.BOOL: "%b",
        }
        # Complex has no tag of its own and is written as a string
        return tags.get(self, "%s")

    @property
    def is_column_kind(self) -> bool:
        """Return whether a column can be declared with this kind."""
        return self is not DataType.COMPLEX


# Mapping from type tag strings to DataType enum values
TYPE_TAGS: dict[str, DataType] = {
    "%d": DataType.INT,
    "%le": DataType.FLOAT,
    "%b": DataType.BOOL,
    "%s": DataType.STRING,
}


def data_type_from_tag(tag: str) -> DataType:
    """Return the kind for a type tag, defaulting to STRING."""
    return TYPE_TAGS.get(tag, DataType.STRING)


def is_known_tag(tag: str) -> bool:
    """Check if a type tag is one the format defines."""
    return tag in TYPE_TAGS


class FloatPrecision(Enum):
    """Storage width of floating-point columns and properties."""

    FLOAT32 = "float32"
    FLOAT64 = "float64"

    def narrow(self, value: float) -> float:
        """Round ``value`` to this precision.

        Python floats are always double precision; FLOAT32 values are stored as
        the double nearest to the single-precision rounding of the input.
        """
        if self is FloatPrecision.FLOAT64:
            return float(value)
        try:
            return struct.unpack("<f", struct.pack("<f", value))[0]
        except OverflowError:
            # Out of single-precision range rounds to infinity
            return float("inf") if value > 0 else float("-inf")

    def narrow_complex(self, value: complex) -> complex:
        """Round both parts of ``value`` to this precision."""
        return complex(self.narrow(value.real), self.narrow(value.imag))
