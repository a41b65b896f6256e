"""Scalar lexical helpers shared by the MineLib format parsers."""

from __future__ import annotations

import math

from .exceptions import ParseError

_POSITIVE_INFINITY = frozenset({"infinity", "inf", "+infinity", "+inf"})
_NEGATIVE_INFINITY = frozenset({"-infinity", "-inf"})
_NOT_A_NUMBER = frozenset({"nan", "+nan", "-nan"})

COMMENT_PREFIX = "%"


def parse_float_token(text: str) -> float:
    """Parse a numeric token, accepting the MineLib infinity spellings.

    Examples:
        >>> parse_float_token("3.14")
        3.14
        >>> parse_float_token("  Infinity  ")
        inf
        >>> parse_float_token("-inf")
        -inf

    Raises:
        ParseError: If the token is neither an infinity literal nor a decimal number.
    """
    value = text.strip()
    lowered = value.lower()
    if lowered in _POSITIVE_INFINITY:
        return math.inf
    if lowered in _NEGATIVE_INFINITY:
        return -math.inf
    # float() also understands "nan" and digit separators; neither is a MineLib literal.
    if "_" in value or lowered in _NOT_A_NUMBER:
        raise ParseError(f"Invalid numeric value '{text}'")
    try:
        return float(value)
    except ValueError as e:
        raise ParseError(f"Invalid numeric value '{text}'") from e


def parse_int_token(text: str) -> int:
    """Parse a decimal integer identifier or count."""
    value = text.strip()
    if "_" in value:
        raise ParseError(f"Invalid integer value '{text}'")
    try:
        return int(value)
    except ValueError as e:
        raise ParseError(f"Invalid integer value '{text}'") from e


def parse_attribute_value(text: str) -> float | str:
    """Return the token as a float when it is numeric, otherwise as text."""
    try:
        return parse_float_token(text)
    except ParseError:
        return text


def is_comment_or_blank(line: str) -> bool:
    """Return True for empty lines and ``%`` comment lines."""
    stripped = line.strip()
    return not stripped or stripped.startswith(COMMENT_PREFIX)


def split_key_value(line: str) -> tuple[str, str] | None:
    """Split a ``KEY: value`` header line.

    Only the first colon is a delimiter. The key is uppercased and inner
    spaces become underscores, so ``"DISCOUNT RATE: 0.1"`` yields
    ``("DISCOUNT_RATE", "0.1")``. Lines without a colon yield None.
    """
    if ":" not in line:
        return None
    key, value = line.split(":", 1)
    return key.strip().replace(" ", "_").upper(), value.strip()
