"""Configuration options shared by the MineLib parsers."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .exceptions import InvalidOptionsError


@dataclass
class ParserOptions:
    """Configuration options for the MineLib parsers.

    Attributes:
        encoding: Text encoding used when a parser opens a path (default: "utf-8").
                  Ignored for streams, which are read as supplied.
        strict_bound_types: How to treat a limit line whose bound type is not L, G or I.
                           - False (default): leave that row unset and log a warning
                           - True: raise ParseError
        column_names: Default names for block-model columns after x, y, z.
                      An explicit ``column_names`` argument to parse_block_model() wins.
                      Unnamed columns become "attr_1", "attr_2", ...

    Examples:
        >>> # Defaults
        >>> options = ParserOptions()

        >>> # Reject unknown bound types instead of skipping them
        >>> options = ParserOptions(strict_bound_types=True)

        >>> # Latin-1 encoded block model with named columns
        >>> options = ParserOptions(encoding="latin-1", column_names=["tonnage", "cu"])
    """

    encoding: str = "utf-8"
    strict_bound_types: bool = False
    column_names: list[str] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.encoding, str) or not self.encoding:
            raise InvalidOptionsError(
                f"encoding must be a non-empty string, got {self.encoding!r}."
            )
        if self.column_names is not None:
            self.column_names = validate_column_names(self.column_names)


_RESERVED_COLUMNS = frozenset({"x", "y", "z"})


def validate_column_names(column_names: Iterable[str]) -> list[str]:
    """Check block-model column names and return them as a list."""
    names = list(column_names)
    if any(not isinstance(name, str) or not name for name in names):
        raise InvalidOptionsError(f"column_names must contain non-empty strings, got {names!r}.")
    if len(set(names)) != len(names):
        raise InvalidOptionsError(f"column_names must be unique, got {names!r}.")
    reserved = _RESERVED_COLUMNS.intersection(names)
    if reserved:
        raise InvalidOptionsError(
            f"column_names may not reuse the coordinate names {sorted(reserved)}."
        )
    return names
