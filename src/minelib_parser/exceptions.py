"""Custom exceptions for the MineLib parser library."""

from __future__ import annotations


class MineLibError(Exception):
    """Base exception for all MineLib parser errors.

    All custom exceptions in the minelib_parser package inherit from this class,
    allowing users to catch every parsing-related error with a single except clause.

    Example:
        try:
            data = parse_cpit("newman1.cpit")
        except MineLibError as e:
            print(f"Could not read instance: {e}")
    """


class ParseError(MineLibError):
    """Raised when an input source is not a valid instance of its format.

    This covers both structural and lexical problems:
    - Too few fields on a required line
    - A declared predecessor count larger than the tokens available
    - A token that is neither a number nor an infinity literal where a number is required

    The message is prefixed with ``Line <n>:`` whenever the 1-based line
    number of the offending line is known.

    Example:
        ParseError("Block line requires at least 4 fields (id, x, y, z), got 3", line_number=7)
    """

    def __init__(self, message: str, line_number: int | None = None, line: str | None = None):
        """Initialize with message and optional location information."""
        if line_number is not None:
            message = f"Line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number
        self.line = line


class UnexpectedEndOfInputError(ParseError):
    """Raised when input runs out in the middle of a fixed-count section.

    Fixed-count sections are OBJECTIVE_FUNCTION (one line per block),
    RESOURCE_CONSTRAINT_LIMITS (one line per resource and period) and
    GENERAL_CONSTRAINT_LIMITS (one line per general constraint row).

    Example:
        UnexpectedEndOfInputError(
            "objective function", expected=5, found=3, line_number=12
        )
    """

    def __init__(
        self,
        section: str,
        expected: int = 0,
        found: int = 0,
        line_number: int | None = None,
    ):
        """Initialize with the section being read and how far it got."""
        super().__init__(
            f"Unexpected end of input while reading {section} "
            f"(expected {expected} records, found {found})",
            line_number=line_number,
        )
        self.section = section
        self.expected = expected
        self.found = found


class UnknownFormatError(MineLibError):
    """Raised when a path cannot be mapped to a MineLib file kind.

    Example:
        UnknownFormatError("Unrecognized MineLib file extension '.txt' for instance.txt")
    """


class InvalidOptionsError(MineLibError):
    """Raised when parser options are invalid.

    Example:
        InvalidOptionsError("encoding must be a non-empty string, got ''")
    """
