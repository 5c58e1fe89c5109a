"""Tests for typed columns and text conversion."""

import io

import pytest

from tfs_tables import (
    BoolColumn,
    Column,
    DataType,
    FloatColumn,
    FloatPrecision,
    IntColumn,
    MalformedLineError,
    StringColumn,
    TypeMismatchError,
)
from tfs_tables.convert import parse_bool, parse_float, parse_int


class TestConvert:
    """Tests for lenient and strict token conversion."""

    def test_int_prefix(self):
        """Test that trailing characters are ignored."""
        assert parse_int("12abc") == 12
        assert parse_int("  -7") == -7
        assert parse_int("+3") == 3

    def test_int_no_digits_is_zero(self):
        """Test that a token without digits converts to zero."""
        assert parse_int("abc") == 0
        assert parse_int("") == 0
        assert parse_int("-") == 0

    def test_int_strict(self):
        """Test that strict conversion rejects partial parses."""
        assert parse_int("42", strict=True) == 42
        with pytest.raises(MalformedLineError):
            parse_int("12abc", strict=True)
        with pytest.raises(MalformedLineError):
            parse_int("abc", strict=True)

    def test_float_prefix(self):
        """Test the longest numeric prefix is used."""
        assert parse_float("1.5e3xyz") == 1500.0
        assert parse_float("1e") == 1.0
        assert parse_float(".25") == 0.25
        assert parse_float("-2.") == -2.0
        assert parse_float("garbage") == 0.0

    def test_float_special_values(self):
        """Test infinities and NaN."""
        assert parse_float("inf") == float("inf")
        assert parse_float("-Infinity") == float("-inf")
        assert parse_float("nan") != parse_float("nan")

    def test_float_strict(self):
        """Test that strict conversion rejects partial parses."""
        assert parse_float("62.31", strict=True) == 62.31
        with pytest.raises(MalformedLineError):
            parse_float("1.0.0", strict=True)

    def test_bool(self):
        """Test boolean tokens."""
        assert parse_bool("True") is True
        assert parse_bool("1") is True
        assert parse_bool("false") is False
        assert parse_bool("maybe") is False
        with pytest.raises(MalformedLineError):
            parse_bool("maybe", strict=True)


class TestColumnCreation:
    """Tests for creating columns."""

    @pytest.mark.parametrize(
        "kind, cls",
        [
            (DataType.INT, IntColumn),
            (DataType.FLOAT, FloatColumn),
            (DataType.STRING, StringColumn),
            (DataType.BOOL, BoolColumn),
        ],
    )
    def test_create_each_kind(self, kind, cls):
        """Test that every kind gets its own class and an empty backing list."""
        column = Column.create(kind, "c")
        assert isinstance(column, cls)
        assert column.kind is kind
        assert len(column) == 0

    def test_complex_is_not_a_column_kind(self):
        """Test that complex columns cannot be created."""
        with pytest.raises(TypeMismatchError):
            Column.create(DataType.COMPLEX, "z")
        assert not DataType.COMPLEX.is_column_kind
        assert all(k.is_column_kind for k in DataType if k is not DataType.COMPLEX)

    def test_name_can_be_reassigned(self):
        """Test that a column can be renamed."""
        column = Column.create(DataType.INT)
        assert column.name == ""
        column.name = "ints"
        assert column.name == "ints"


class TestPush:
    """Tests for appending values."""

    def test_push_matching_values(self):
        """Test pushing values of the right type."""
        column = Column.create(DataType.INT, "i")
        column.push(1)
        column.extend([2, 3])
        assert column.as_int_sequence() == (1, 2, 3)

    @pytest.mark.parametrize(
        "kind, value",
        [
            (DataType.INT, 1.0),
            (DataType.INT, True),
            (DataType.INT, "1"),
            (DataType.FLOAT, 1),
            (DataType.FLOAT, "1.0"),
            (DataType.STRING, 1),
            (DataType.BOOL, 1),
        ],
    )
    def test_push_wrong_type_rejected(self, kind, value):
        """Test that values of another type are rejected."""
        column = Column.create(kind, "c")
        with pytest.raises(TypeMismatchError):
            column.push(value)
        assert len(column) == 0

    def test_float32_column_narrows(self):
        """Test that a single precision column rounds pushed floats."""
        column = Column.create(DataType.FLOAT, "f", precision=FloatPrecision.FLOAT32)
        column.push(0.1)
        assert column[0] == FloatPrecision.FLOAT32.narrow(0.1)
        assert column[0] != 0.1


class TestConvertFromText:
    """Tests for appending parsed tokens."""

    def test_int_column_lenient(self):
        """Test that '12abc' becomes 12 in an int column."""
        column = Column.create(DataType.INT, "i")
        column.convert_from_text("12abc")
        assert column.as_int_sequence() == (12,)

    def test_float_column(self):
        """Test float tokens."""
        column = Column.create(DataType.FLOAT, "f")
        column.convert_from_text("2.5")
        column.convert_from_text("x")
        assert column.as_float_sequence() == (2.5, 0.0)

    def test_string_column_verbatim(self):
        """Test that string tokens are stored unchanged."""
        column = Column.create(DataType.STRING, "s")
        column.convert_from_text("%le")
        column.convert_from_text('"quoted"')
        assert column.as_string_sequence() == ("%le", '"quoted"')

    def test_bool_column(self):
        """Test boolean tokens."""
        column = Column.create(DataType.BOOL, "b")
        for token in ["True", "False", "1", "0"]:
            column.convert_from_text(token)
        assert column.as_bool_sequence() == (True, False, True, False)

    def test_strict_rejects_partial(self):
        """Test that strict conversion raises instead of truncating."""
        column = Column.create(DataType.INT, "i")
        with pytest.raises(MalformedLineError):
            column.convert_from_text("12abc", strict=True)
        assert len(column) == 0


class TestAccessors:
    """Tests for typed views."""

    @pytest.mark.parametrize("kind", [DataType.INT, DataType.FLOAT, DataType.STRING, DataType.BOOL])
    def test_only_matching_accessor_succeeds(self, kind):
        """Test that every accessor except the column's own raises."""
        column = Column.create(kind, "c")
        accessors = {
            DataType.INT: column.as_int_sequence,
            DataType.FLOAT: column.as_float_sequence,
            DataType.STRING: column.as_string_sequence,
            DataType.BOOL: column.as_bool_sequence,
        }
        for accessor_kind, accessor in accessors.items():
            if accessor_kind is kind:
                assert accessor() == ()
            else:
                with pytest.raises(TypeMismatchError):
                    accessor()

    def test_immutable_view_is_a_copy(self):
        """Test that the immutable view is a tuple snapshot."""
        column = Column.create(DataType.STRING, "s", ["a"])
        view = column.as_string_sequence()
        column.push("b")
        assert view == ("a",)

    def test_mutable_view_extends_column(self):
        """Test in-place extension through the mutable view."""
        column = Column.create(DataType.FLOAT, "f")
        values = column.as_float_sequence_mut()
        values.extend([1.0, 2.0])
        values.append(3.0)
        assert len(column) == 3
        assert values == [1.0, 2.0, 3.0]

    def test_mutable_view_checks_types(self):
        """Test that the mutable view keeps the column homogeneous."""
        column = Column.create(DataType.INT, "i", [1, 2])
        values = column.as_int_sequence_mut()
        with pytest.raises(TypeMismatchError):
            values.append("3")
        with pytest.raises(TypeMismatchError):
            values[0] = 1.5
        with pytest.raises(TypeMismatchError):
            values[0:1] = ["x"]
        assert column.as_int_sequence() == (1, 2)

    def test_mutable_view_wrong_kind(self):
        """Test that mutable accessors also check the kind."""
        column = Column.create(DataType.INT, "i")
        with pytest.raises(TypeMismatchError):
            column.as_string_sequence_mut()


class TestPrintAt:
    """Tests for fixed-width output."""

    def test_right_justified_with_trailing_space(self):
        """Test the 15 character field plus separator."""
        column = Column.create(DataType.INT, "i", [42])
        sink = io.StringIO()
        column.print_at(0, sink)
        assert sink.getvalue() == " " * 13 + "42 "

    def test_float_uses_round_trip_repr(self):
        """Test that floats print without losing precision."""
        column = Column.create(DataType.FLOAT, "f", [0.1 + 0.2])
        sink = io.StringIO()
        column.print_at(0, sink)
        assert sink.getvalue().strip() == repr(0.1 + 0.2)

    def test_bool_prints_capitalized(self):
        """Test that booleans print as True/False."""
        column = Column.create(DataType.BOOL, "b", [True, False])
        assert column.format_at(0) == "True"
        assert column.format_at(1) == "False"

    def test_long_value_not_truncated(self):
        """Test that values wider than the field are written in full."""
        column = Column.create(DataType.STRING, "s", ["a_very_long_string_value"])
        sink = io.StringIO()
        column.print_at(0, sink)
        assert sink.getvalue() == "a_very_long_string_value "

    def test_out_of_range(self):
        """Test that printing past the end raises."""
        column = Column.create(DataType.INT, "i", [1])
        with pytest.raises(IndexError):
            column.print_at(1, io.StringIO())

    def test_string_needing_quotes(self):
        """Test that empty and spaced strings print quoted."""
        column = Column.create(DataType.STRING, "s", ["two words", "", "plain"])
        assert column.format_at(0) == '"two words"'
        assert column.format_at(1) == '""'
        assert column.format_at(2) == "plain"
