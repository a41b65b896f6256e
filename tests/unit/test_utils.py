"""Tests for the scalar lexical helpers."""

import math

import pytest

from minelib_parser import ParseError
from minelib_parser.utils import (
    is_comment_or_blank,
    parse_attribute_value,
    parse_float_token,
    parse_int_token,
    split_key_value,
)


class TestParseFloatToken:
    """Tests for parse_float_token()."""

    def test_plain_decimal(self):
        assert parse_float_token("3.14") == 3.14
        assert parse_float_token("-1430.25") == -1430.25
        assert parse_float_token("1e6") == 1_000_000.0

    @pytest.mark.parametrize("token", ["infinity", "inf", "+infinity", "+inf", "INF", "Infinity"])
    def test_positive_infinity_spellings(self, token):
        assert parse_float_token(token) == math.inf

    @pytest.mark.parametrize("token", ["-infinity", "-inf", "-INFINITY", "-Inf"])
    def test_negative_infinity_spellings(self, token):
        assert parse_float_token(token) == -math.inf

    def test_surrounding_whitespace_is_trimmed(self):
        assert parse_float_token("  Infinity  ") == math.inf
        assert parse_float_token("\t2.5\n") == 2.5

    @pytest.mark.parametrize("token", ["abc", "", "1.2.3", "nan", "1_000", "L"])
    def test_invalid_tokens_raise_parse_error(self, token):
        with pytest.raises(ParseError, match="Invalid numeric value"):
            parse_float_token(token)

    @pytest.mark.parametrize("token", ["NaN", "+nan", "-NaN", " nan "])
    def test_not_a_number_spellings_are_rejected(self, token):
        with pytest.raises(ParseError, match="Invalid numeric value"):
            parse_float_token(token)

    def test_words_containing_nan_are_not_special(self):
        # Only the whole token counts as a NaN spelling.
        with pytest.raises(ParseError, match="Invalid numeric value 'nanite'"):
            parse_float_token("nanite")

    def test_parse_error_has_no_line_number(self):
        with pytest.raises(ParseError) as exc_info:
            parse_float_token("oops")
        assert exc_info.value.line_number is None


class TestParseIntToken:
    """Tests for parse_int_token()."""

    def test_integers(self):
        assert parse_int_token("42") == 42
        assert parse_int_token(" 0 ") == 0

    @pytest.mark.parametrize("token", ["4.0", "x", "", "1_0"])
    def test_invalid_integers(self, token):
        with pytest.raises(ParseError, match="Invalid integer value"):
            parse_int_token(token)


class TestParseAttributeValue:
    """Numeric tokens become floats, anything else stays text."""

    def test_numeric_token(self):
        value = parse_attribute_value("0.8")
        assert isinstance(value, float)
        assert value == 0.8

    def test_infinity_token(self):
        assert parse_attribute_value("inf") == math.inf

    def test_text_token_falls_back_to_string(self):
        assert parse_attribute_value("oxide") == "oxide"

    def test_nan_tokens_stay_text(self):
        assert parse_attribute_value("nan") == "nan"
        assert parse_attribute_value("nanoclay") == "nanoclay"


class TestIsCommentOrBlank:
    """Tests for is_comment_or_blank()."""

    def test_blank_lines(self):
        assert is_comment_or_blank("")
        assert is_comment_or_blank("  ")
        assert is_comment_or_blank("\n")

    def test_comment_lines(self):
        assert is_comment_or_blank("% comment")
        assert is_comment_or_blank("   %indented comment")

    def test_data_lines(self):
        assert not is_comment_or_blank("data")
        assert not is_comment_or_blank("0 1 2")
        # Only a leading percent sign marks a comment.
        assert not is_comment_or_blank("1 50%")


class TestSplitKeyValue:
    """Tests for split_key_value()."""

    def test_simple_pair(self):
        assert split_key_value("NAME: test") == ("NAME", "test")

    def test_spaces_in_key_become_underscores(self):
        assert split_key_value("DISCOUNT RATE: 0.1") == ("DISCOUNT_RATE", "0.1")

    def test_key_is_uppercased_and_trimmed(self):
        assert split_key_value("  nblocks :  12 ") == ("NBLOCKS", "12")

    def test_no_colon_returns_none(self):
        assert split_key_value("no colon here") is None

    def test_only_first_colon_splits(self):
        assert split_key_value("NAME: a:b:c") == ("NAME", "a:b:c")

    def test_header_without_value(self):
        assert split_key_value("OBJECTIVE_FUNCTION:") == ("OBJECTIVE_FUNCTION", "")
