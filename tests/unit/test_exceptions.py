"""Tests for custom exception hierarchy."""

import io

import pytest

from minelib_parser import (
    InvalidOptionsError,
    MineLibError,
    ParseError,
    UnexpectedEndOfInputError,
    UnknownFormatError,
    load_instance,
    parse_cpit,
    parse_precedences,
)


def test_all_exceptions_inherit_from_base():
    """Test that all custom exceptions inherit from MineLibError."""
    assert issubclass(ParseError, MineLibError)
    assert issubclass(UnexpectedEndOfInputError, MineLibError)
    assert issubclass(UnknownFormatError, MineLibError)
    assert issubclass(InvalidOptionsError, MineLibError)


def test_base_exception_is_exception():
    """Test that MineLibError inherits from Exception."""
    assert issubclass(MineLibError, Exception)


def test_end_of_input_is_a_parse_error():
    """Truncated sections can be handled together with other parse failures."""
    assert issubclass(UnexpectedEndOfInputError, ParseError)


def test_parse_error_with_line_number():
    """Test the location prefix and attributes of ParseError."""
    error = ParseError("Block line requires at least 4 fields", line_number=7, line="1 2 3")

    assert str(error) == "Line 7: Block line requires at least 4 fields"
    assert error.line_number == 7
    assert error.line == "1 2 3"


def test_parse_error_without_line_number():
    """Test that ParseError without a location keeps the message unchanged."""
    error = ParseError("Invalid numeric value 'abc'")

    assert str(error) == "Invalid numeric value 'abc'"
    assert error.line_number is None
    assert error.line is None


def test_unexpected_end_of_input_attributes():
    """Test UnexpectedEndOfInputError carries section progress."""
    error = UnexpectedEndOfInputError("objective function", expected=5, found=3, line_number=12)

    assert error.section == "objective function"
    assert error.expected == 5
    assert error.found == 3
    assert error.line_number == 12
    assert "expected 5 records, found 3" in str(error)
    assert str(error).startswith("Line 12:")


def test_parse_error_raised_with_offending_line():
    """Test ParseError raised by a parser keeps the offending text."""
    with pytest.raises(ParseError) as exc_info:
        parse_precedences(io.StringIO("0 0\n1 2 0\n"))

    assert exc_info.value.line_number == 2
    assert exc_info.value.line == "1 2 0"


def test_catching_base_class():
    """Test that every parser failure can be caught as MineLibError."""
    with pytest.raises(MineLibError):
        parse_cpit(io.StringIO("NPERIODS: soon\n"))


def test_unknown_format_error(tmp_path):
    """Test UnknownFormatError raised for an unsupported suffix."""
    path = tmp_path / "instance.txt"
    path.write_text("NAME: x\n", encoding="utf-8")

    with pytest.raises(UnknownFormatError) as exc_info:
        load_instance(path)

    assert ".txt" in str(exc_info.value)


def test_exception_messages_are_informative():
    """Test that exception messages name the offending value."""
    with pytest.raises(ParseError) as exc_info:
        parse_precedences(io.StringIO("0 zero\n"))

    message = str(exc_info.value)
    assert "zero" in message
    assert "predecessor count" in message
    assert message.startswith("Line 1:")
