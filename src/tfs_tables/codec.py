"""Reading and writing tables in the TFS text format.

A TFS file is line oriented::

    @ <KEY> <TYPE-TAG> <VALUE...>     property lines, zero or more
    * <col1> <col2> ... <colN>         header line, exactly one
    $ <tag1> <tag2> ... <tagN>         type line, exactly one
      <v1> <v2> ... <vN>               data rows, zero or more

Type tags are ``%d`` (integer), ``%le`` (float), ``%b`` (boolean) and
``%s`` (string); any other tag is read as string. A field in double quotes,
with ``\\`` escapes, is one token even if it is empty or holds spaces.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Iterable
from enum import Enum
from pathlib import Path
from typing import TextIO

from ply.lex import LexToken

from tfs_tables.convert import parse_bool, parse_float, parse_int
from tfs_tables.errors import InconsistentTableError, MalformedLineError
from tfs_tables.parsing.tfs_lexer import TfsLexer, quote_token
from tfs_tables.table import Table
from tfs_tables.types import (
    FIELD_WIDTH,
    KEY_WIDTH,
    TAG_WIDTH,
    DataType,
    FloatPrecision,
    data_type_from_tag,
    is_known_tag,
)
from tfs_tables.value import ScalarValue

logger = logging.getLogger(__name__)

PROPERTY_MARKER = "@"
HEADER_MARKER = "*"
TYPES_MARKER = "$"


class ParseState(Enum):
    """Phases of reading a TFS file, traversed once in order."""

    READING_METADATA = "reading_metadata"
    READING_HEADER = "reading_header"
    READING_TYPES = "reading_types"
    INITIALIZED = "initialized"
    READING_ROWS = "reading_rows"
    DONE = "done"


class _TfsReader:
    """State for one parse of a TFS line source."""

    def __init__(self, table: Table, lexer: TfsLexer, strict: bool) -> None:
        self.table = table
        self.lexer = lexer
        self.strict = strict
        self.state = ParseState.READING_METADATA
        self.names: list[str] | None = None
        self.tags: list[str] | None = None
        self.lineno = 0

    def _set_state(self, state: ParseState) -> None:
        logger.debug("%s -> %s at line %d", self.state.value, state.value, self.lineno)
        self.state = state

    def _error(self, message: str, line: str) -> MalformedLineError:
        return MalformedLineError(message, self.lineno, line.rstrip("\n"))

    def feed(self, line: str) -> None:
        """Process one line of input."""
        self.lineno += 1
        try:
            if self.state in (ParseState.INITIALIZED, ParseState.READING_ROWS):
                self._read_row(line)
                return

            tokens = self.lexer.tokenize(line)
            if tokens and tokens[0].type == "MARKER":
                marker, fields = tokens[0].value, tokens[1:]
                if marker == PROPERTY_MARKER:
                    self._read_property(fields, line)
                elif marker == HEADER_MARKER:
                    self._read_column_headers(fields, line)
                else:
                    self._read_column_types(fields, line)
            else:
                logger.debug("Ignoring line %d before the column definition", self.lineno)
            self._check_initialized(line)
        except MalformedLineError as exc:
            if exc.lineno is not None:
                raise
            raise self._error(exc.reason, line) from exc

    def finish(self) -> Table:
        """Validate the end of input and return the table."""
        if self.state not in (ParseState.INITIALIZED, ParseState.READING_ROWS):
            if self.names is not None:
                raise MalformedLineError("Input ended without a type line")
            if self.tags is not None:
                raise MalformedLineError("Input ended without a header line")
            logger.debug("Input has no column definition, only properties were read")
        self._set_state(ParseState.DONE)
        return self.table

    # ---- Line readers -------------------------------------------------------

    def _check_tag(self, tok: LexToken, line: str) -> None:
        if tok.type != "TAG" or not is_known_tag(tok.value):
            raise self._error(f"Unknown type tag '{tok.value}'", line)

    def _read_property(self, fields: list[LexToken], line: str) -> None:
        if len(fields) < 2:
            raise self._error("Property line needs a key and a type tag", line)
        key, tag = fields[0].value, fields[1].value
        values = [tok.value for tok in fields[2:]]
        if self.strict:
            self._check_tag(fields[1], line)

        kind = data_type_from_tag(tag)
        if kind is DataType.STRING:
            # Runs of whitespace between unquoted words collapse to single spaces
            self.table.insert_property(key, ScalarValue.from_string(" ".join(values)))
            return

        if not values:
            if self.strict:
                raise self._error(f"Property '{key}' has no value", line)
            values = [""]
        if kind is DataType.INT:
            value = ScalarValue.from_int(parse_int(values[0], self.strict))
        elif kind is DataType.FLOAT:
            value = ScalarValue.from_float(parse_float(values[0], self.strict), self.table.precision)
        else:
            value = ScalarValue.from_bool(parse_bool(values[0], self.strict))
        self.table.insert_property(key, value)

    def _read_column_headers(self, fields: list[LexToken], line: str) -> None:
        if self.names is not None:
            raise self._error("Duplicate header line", line)
        names = [tok.value for tok in fields]
        if len(set(names)) != len(names):
            duplicates = sorted({n for n in names if names.count(n) > 1})
            raise self._error(f"Duplicate column names {duplicates}", line)
        self.names = names
        if self.tags is None:
            self._set_state(ParseState.READING_TYPES)

    def _read_column_types(self, fields: list[LexToken], line: str) -> None:
        if self.tags is not None:
            raise self._error("Duplicate type line", line)
        if self.strict:
            for tok in fields:
                self._check_tag(tok, line)
        self.tags = [tok.value for tok in fields]
        if self.names is None:
            self._set_state(ParseState.READING_HEADER)

    def _check_initialized(self, line: str) -> None:
        """Create the columns once both the header and type lines are known."""
        if self.names is None or self.tags is None:
            return
        if len(self.names) != len(self.tags):
            raise self._error(
                f"Header declares {len(self.names)} columns but the type line declares {len(self.tags)}",
                line,
            )
        for name, tag in zip(self.names, self.tags):
            self.table.add_column(name, kind=data_type_from_tag(tag))
        self._set_state(ParseState.INITIALIZED)

    def _read_row(self, line: str) -> None:
        tokens = self.lexer.split(line, row=True)
        if not tokens:
            return
        if self.state is ParseState.INITIALIZED:
            self._set_state(ParseState.READING_ROWS)

        columns = self.table.columns
        if len(tokens) != len(columns):
            if self.strict:
                raise self._error(
                    f"Row has {len(tokens)} values for {len(columns)} columns", line
                )
            logger.warning(
                "Line %d has %d values for %d columns", self.lineno, len(tokens), len(columns)
            )
        for column, token in zip(columns, tokens):
            column.convert_from_text(token, self.strict)


class TfsCodec:
    """Parser and writer for TFS text.

    Args:
        precision: Width of floating-point columns and properties.
        strict: Raise :class:`MalformedLineError` for unknown type tags,
            ragged rows and numbers that do not parse completely, instead of
            reading them leniently.
    """

    def __init__(
        self,
        precision: FloatPrecision = FloatPrecision.FLOAT64,
        strict: bool = False,
    ) -> None:
        self.precision = precision
        self.strict = strict
        self.lexer = TfsLexer()
        self.lexer.build()

    def parse(self, source: Iterable[str], index_column: str | None = None) -> Table:
        """Read a table from an iterable of lines.

        Args:
            source: Lines of TFS text, with or without line endings.
            index_column: Name of a string column to build the row index on.

        Returns:
            The parsed table.
        """
        reader = _TfsReader(Table(self.precision), self.lexer, self.strict)
        for line in source:
            reader.feed(line)
        table = reader.finish()

        if index_column:
            table.build_row_index(index_column)
        return table

    def serialize(self, table: Table, sink: TextIO) -> None:
        """Write ``table`` as TFS text to ``sink``.

        Names and string values that are empty or hold whitespace or double
        quotes are written double-quoted so they read back unchanged.

        Raises:
            InconsistentTableError: If the columns differ in length. Nothing
                is written to ``sink`` in that case.
        """
        rows = table.row_count()
        for name, i in table.column_index.items():
            if len(table.columns[i]) != rows:
                raise InconsistentTableError(
                    f"Column '{name}' has {len(table.columns[i])} values, expected {rows}"
                )

        for key, value in table.properties.items():
            text = value.format()
            if value.kind is DataType.STRING:
                text = quote_token(text)
            sink.write(
                f"{PROPERTY_MARKER} {quote_token(key):>{KEY_WIDTH}} {value.type_tag:>{TAG_WIDTH}} {text}\n"
            )

        columns = [table.columns[i] for i in table.column_index.values()]
        sink.write(f"{HEADER_MARKER} ")
        for name in table.column_index:
            sink.write(f"{quote_token(name):>{FIELD_WIDTH}} ")
        sink.write(f"\n{TYPES_MARKER} ")
        for column in columns:
            sink.write(f"{column.type_tag:>{FIELD_WIDTH}} ")
        sink.write("\n")

        for i in range(rows):
            sink.write("  ")
            for column in columns:
                column.print_at(i, sink)
            sink.write("\n")


def loads(text: str, index_column: str | None = None, **options) -> Table:
    """Parse a table from a TFS string."""
    return TfsCodec(**options).parse(text.splitlines(), index_column)


def dumps(table: Table) -> str:
    """Serialize a table to a TFS string."""
    buffer = io.StringIO()
    TfsCodec().serialize(table, buffer)
    return buffer.getvalue()


def load(fp: TextIO, index_column: str | None = None, **options) -> Table:
    """Parse a table from an open text file."""
    return TfsCodec(**options).parse(fp, index_column)


def dump(table: Table, fp: TextIO) -> None:
    """Write a table to an open text file."""
    TfsCodec().serialize(table, fp)


def read_tfs(path: str | Path, index_column: str | None = None, **options) -> Table:
    """Read a TFS file.

    Raises:
        OSError: If the file cannot be opened.
    """
    with open(path, encoding="utf-8") as f:
        return load(f, index_column, **options)


def write_tfs(table: Table, path: str | Path) -> None:
    """Write a table to a TFS file, replacing any existing file.

    The whole table is serialized before the file is opened, so a table that
    cannot be written leaves an existing file untouched.

    Raises:
        InconsistentTableError: If the columns differ in length.
        OSError: If the file cannot be created.
    """
    text = dumps(table)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    logger.debug("Wrote %d rows to %s", table.row_count(), path)
