"""TFS Tables - typed, column-oriented tables and the TFS text format."""

from tfs_tables.codec import (
    ParseState,
    TfsCodec,
    dump,
    dumps,
    load,
    loads,
    read_tfs,
    write_tfs,
)
from tfs_tables.column import (
    BoolColumn,
    Column,
    FloatColumn,
    IntColumn,
    StringColumn,
    TypedValues,
)
from tfs_tables.errors import (
    DuplicateColumnError,
    InconsistentTableError,
    KeyNotFoundError,
    MalformedLineError,
    TfsError,
    TypeMismatchError,
)
from tfs_tables.table import Table
from tfs_tables.types import DataType, FloatPrecision
from tfs_tables.value import ScalarValue

__all__ = [
    # Main API
    "Table",
    "TfsCodec",
    "read_tfs",
    "write_tfs",
    "load",
    "loads",
    "dump",
    "dumps",
    "ParseState",
    # Values and columns
    "ScalarValue",
    "Column",
    "IntColumn",
    "FloatColumn",
    "StringColumn",
    "BoolColumn",
    "TypedValues",
    "DataType",
    "FloatPrecision",
    # Errors
    "TfsError",
    "TypeMismatchError",
    "KeyNotFoundError",
    "DuplicateColumnError",
    "InconsistentTableError",
    "MalformedLineError",
]

__version__ = "0.1.0"
