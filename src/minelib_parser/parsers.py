"""Parsers for the MineLib file formats.

This module implements readers for the three MineLib file kinds:
- Block-model descriptor files (.blocks)
- Block-precedence descriptor files (.prec)
- Optimization-model descriptor files (.upit, .cpit, .pcpsp)

Format Overview:
    % comment lines and blank lines are ignored everywhere

    Block model:   <id> <x> <y> <z> [<attr> ...]
    Precedences:   <id> <num_preds> <pred_1> ... <pred_n>
    Problem files: KEY: value headers followed by section bodies, e.g.

        NAME: newman1
        NBLOCKS: 1060
        NPERIODS: 6
        NRESOURCE SIDE CONSTRAINTS: 2
        DISCOUNT RATE: 0.08
        OBJECTIVE_FUNCTION:
        0 -1430.2
        ...
        RESOURCE CONSTRAINT LIMITS:
        0 0 L 2000000
        ...
        RESOURCE CONSTRAINT COEFFICIENTS:
        0 0 1430.2
        ...
        EOF

Header keys are uppercased with spaces turned into underscores, so
``DISCOUNT RATE`` and ``DISCOUNT_RATE`` are the same key.

Reference:
    Espinoza, D., Goycoolea, M., Moreno, E., & Newman, A. (2013).
    MineLib: a library of open pit mining problems.
    Annals of Operations Research, 206(1), 93-114.

Example:
    >>> prec = parse_precedences("newman1.prec")
    >>> data = parse_cpit("newman1.cpit", precedences=prec)
    >>> data.get_discounted_profit(0, period=2)
"""

from __future__ import annotations

import io
import logging
import math
import os
from collections.abc import Callable, Iterator, Sequence
from functools import singledispatch
from typing import Union

from .data import (
    Block,
    BlockModel,
    BoundType,
    CPITData,
    PCPSPData,
    Precedences,
    ResourceLimits,
    UPITData,
)
from .exceptions import ParseError, UnexpectedEndOfInputError
from .io import LineCursor, LineSource, open_source
from .options import ParserOptions, validate_column_names
from .utils import (
    is_comment_or_blank,
    parse_attribute_value,
    parse_float_token,
    parse_int_token,
    split_key_value,
)

logger = logging.getLogger(__name__)

PrecedenceInput = Union[Precedences, LineSource, None]

EOF_SENTINEL = "EOF"


class _Record:
    """A whitespace-split data line that reports errors with its line number."""

    __slots__ = ("line", "line_number", "fields")

    def __init__(self, line: str, line_number: int):
        self.line = line
        self.line_number = line_number
        self.fields = line.split()

    def __len__(self) -> int:
        return len(self.fields)

    def error(self, message: str) -> ParseError:
        return ParseError(message, line_number=self.line_number, line=self.line)

    def field(self, index: int, what: str) -> str:
        if index >= len(self.fields):
            raise self.error(
                f"Missing {what} (field {index + 1}); line has {len(self.fields)} fields"
            )
        return self.fields[index]

    def int_at(self, index: int, what: str) -> int:
        try:
            return parse_int_token(self.field(index, what))
        except ParseError as e:
            if e.line_number is not None:
                raise
            raise self.error(f"{e} for {what}") from e

    def float_at(self, index: int, what: str) -> float:
        try:
            return parse_float_token(self.field(index, what))
        except ParseError as e:
            if e.line_number is not None:
                raise
            raise self.error(f"{e} for {what}") from e


def _data_records(cursor: LineCursor) -> Iterator[_Record]:
    # Whole-file walk used by the headerless formats.
    for line in cursor:
        if is_comment_or_blank(line):
            continue
        yield _Record(line.strip(), cursor.line_number)


def _fixed_records(cursor: LineCursor, count: int, section: str) -> Iterator[_Record]:
    """Yield exactly ``count`` data records; running out of input is fatal."""
    for found in range(count):
        line = cursor.next_data_line()
        if line is None:
            raise UnexpectedEndOfInputError(
                section, expected=count, found=found, line_number=cursor.line_number
            )
        yield _Record(line, cursor.line_number)


def _open_records(
    cursor: LineCursor, min_fields: int, section: str, stop_at_header: bool
) -> Iterator[_Record]:
    """Yield records of an open-ended section until its terminator.

    The section ends at an ``EOF`` line or, when ``stop_at_header`` is set, at
    a line containing ``:``; both are consumed, so a header ending the section
    does not start its own. A line with fewer than ``min_fields`` fields also
    ends the section and is pushed back to the header scan.
    """
    count = 0
    while True:
        line = cursor.next_line()
        if line is None:
            break
        stripped = line.strip()
        if is_comment_or_blank(stripped):
            continue
        if stripped.upper() == EOF_SENTINEL:
            break
        if stop_at_header and ":" in stripped:
            logger.debug(f"Line {cursor.line_number}: '{stripped}' ends the {section} section")
            break
        record = _Record(stripped, cursor.line_number)
        if len(record) < min_fields:
            cursor.push_back(line)
            break
        count += 1
        yield record
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Read {count} {section} records ending at line {cursor.line_number}")


def _read_bounds(
    record: _Record, offset: int, options: ParserOptions
) -> tuple[float, float] | None:
    """Interpret ``<type> <args...>`` starting at ``offset``.

    Returns None for an unrecognized bound type unless strict_bound_types is set.
    """
    token = record.field(offset, "bound type")
    bound_type = BoundType.from_token(token)
    if bound_type is BoundType.LESS_THAN:
        return -math.inf, record.float_at(offset + 1, "upper bound")
    if bound_type is BoundType.GREATER_THAN:
        return record.float_at(offset + 1, "lower bound"), math.inf
    if bound_type is BoundType.INTERVAL:
        return (
            record.float_at(offset + 1, "lower bound"),
            record.float_at(offset + 2, "upper bound"),
        )
    if options.strict_bound_types:
        raise record.error(f"Unknown bound type '{token}'. Expected 'L', 'G' or 'I'.")
    logger.warning(
        f"Line {record.line_number}: ignoring limit with unknown bound type '{token}'"
    )
    return None


def _read_resource_limits(
    cursor: LineCursor,
    limits: ResourceLimits,
    num_resources: int,
    num_periods: int,
    options: ParserOptions,
) -> None:
    for resource in range(num_resources):
        limits.lower_bounds.setdefault(resource, {})
        limits.upper_bounds.setdefault(resource, {})

    count = num_resources * num_periods
    for record in _fixed_records(cursor, count, "resource constraint limits"):
        resource = record.int_at(0, "resource id")
        period = record.int_at(1, "period")
        bounds = _read_bounds(record, 2, options)
        if bounds is not None:
            limits.set_bounds(resource, period, lower=bounds[0], upper=bounds[1])


def _read_single_objective(cursor: LineCursor, objective: dict[int, float], num_blocks: int) -> None:
    for record in _fixed_records(cursor, num_blocks, "objective function"):
        objective[record.int_at(0, "block id")] = record.float_at(1, "objective value")


def _scan_headers(
    cursor: LineCursor, handlers: dict[str, Callable[[str], None]], kind: str
) -> None:
    """Dispatch every ``KEY: value`` line to its handler.

    Lines without a colon and unknown keys are ignored.
    """
    for line in cursor:
        if is_comment_or_blank(line):
            continue
        key_value = split_key_value(line.strip())
        if key_value is None:
            continue
        key, value = key_value
        handler = handlers.get(key)
        if handler is None:
            logger.debug(f"{kind}: ignoring header '{key}' at line {cursor.line_number}")
            continue
        line_number = cursor.line_number
        try:
            handler(value)
        except ParseError as e:
            if e.line_number is not None:
                raise
            raise ParseError(f"{e} for {key}", line_number=line_number, line=line) from e


# ============================================================================
# Block model
# ============================================================================


def parse_block_model(
    source: LineSource,
    column_names: Sequence[str] | None = None,
    options: ParserOptions | None = None,
) -> BlockModel:
    """Parse a MineLib block-model descriptor file.

    Args:
        source: File path or open text stream.
        column_names: Names for the columns after x, y, z (e.g. ["tonnage", "grade"]).
                      Columns without a name become "attr_1", "attr_2", ... counted
                      among the extra columns.
        options: Parser configuration. ``options.column_names`` is used when
                 ``column_names`` is not given.

    Returns:
        BlockModel keyed by block ID. Attribute values are floats when numeric
        (infinity spellings included) and the raw token otherwise.

    Raises:
        ParseError: If a line has fewer than 4 fields or a non-integer id/coordinate.

    Examples:
        >>> model = parse_block_model("mine.blocks", column_names=["tonnage", "cu"])
        >>> model.get_block(0)["tonnage"]
        1000.0
    """
    options = options or ParserOptions()
    if column_names is not None:
        names = validate_column_names(column_names)
    else:
        names = list(options.column_names or [])
    model = BlockModel()

    with open_source(source, options.encoding) as stream:
        for record in _data_records(LineCursor(stream)):
            if len(record) < 4:
                raise record.error(
                    f"Block line requires at least 4 fields (id, x, y, z), got {len(record)}"
                )
            block_id = record.int_at(0, "block id")
            attributes = {}
            for position, token in enumerate(record.fields[4:], start=1):
                name = names[position - 1] if position <= len(names) else f"attr_{position}"
                attributes[name] = parse_attribute_value(token)
            model.blocks[block_id] = Block(
                id=block_id,
                x=record.int_at(1, "x coordinate"),
                y=record.int_at(2, "y coordinate"),
                z=record.int_at(3, "z coordinate"),
                attributes=attributes,
            )
            model.num_blocks = max(model.num_blocks, block_id + 1)

    logger.info(f"Parsed block model: {len(model)} blocks (num_blocks={model.num_blocks})")
    return model


# ============================================================================
# Precedences
# ============================================================================


def parse_precedences(source: LineSource, options: ParserOptions | None = None) -> Precedences:
    """Parse a MineLib block-precedence descriptor file.

    Each line lists a block, its predecessor count N and then N predecessor IDs.
    Tokens after the N predecessors are ignored. A negative N is logged and
    read as no predecessors.

    Raises:
        ParseError: If a line has fewer than 2 fields or fewer predecessors than declared.

    Examples:
        >>> prec = parse_precedences("newman1.prec")
        >>> prec.get_predecessors(10)
        [1, 2, 3]
    """
    options = options or ParserOptions()
    predecessors: dict[int, list[int]] = {}
    num_blocks = 0

    with open_source(source, options.encoding) as stream:
        for record in _data_records(LineCursor(stream)):
            if len(record) < 2:
                raise record.error(
                    f"Precedence line requires at least 2 fields (id, predecessor count), "
                    f"got {len(record)}"
                )
            block_id = record.int_at(0, "block id")
            num_preds = record.int_at(1, "predecessor count")
            if num_preds < 0:
                logger.warning(
                    f"Line {record.line_number}: negative predecessor count {num_preds} "
                    f"for block {block_id}; treating it as no predecessors"
                )
                num_preds = 0
            if len(record) < 2 + num_preds:
                raise record.error(
                    f"Expected {num_preds} predecessors but only {len(record) - 2} provided"
                )
            predecessors[block_id] = [
                record.int_at(index, "predecessor id") for index in range(2, 2 + num_preds)
            ]
            num_blocks = max(num_blocks, block_id + 1)

    prec = Precedences(num_blocks=num_blocks, predecessors=predecessors)
    logger.info(f"Parsed precedences: {num_blocks} blocks, {prec.num_arcs()} arcs")
    return prec


@singledispatch
def resolve_precedences(
    precedences: object, options: ParserOptions | None = None
) -> Precedences | None:
    """Normalize the ``precedences`` argument of the problem parsers.

    - Precedences: returned unchanged
    - path (str or os.PathLike) or open text stream: parsed with parse_precedences()
    - None: no precedence graph

    Raises:
        TypeError: For any other input.
    """
    raise TypeError(
        f"precedences must be a Precedences object, a path, an open text stream or None, "
        f"got {type(precedences).__name__}"
    )


@resolve_precedences.register(Precedences)
def _resolve_graph(precedences: Precedences, options: ParserOptions | None = None) -> Precedences:
    return precedences


@resolve_precedences.register(type(None))
def _resolve_none(precedences: None, options: ParserOptions | None = None) -> None:
    return None


@resolve_precedences.register(str)
@resolve_precedences.register(os.PathLike)
@resolve_precedences.register(io.IOBase)
def _resolve_source(precedences: LineSource, options: ParserOptions | None = None) -> Precedences:
    return parse_precedences(precedences, options)


# ============================================================================
# UPIT
# ============================================================================


def parse_upit(
    source: LineSource,
    precedences: PrecedenceInput = None,
    options: ParserOptions | None = None,
) -> UPITData:
    """Parse a UPIT (ultimate pit limit) problem file.

    Args:
        source: File path or open text stream for the .upit file.
        precedences: Precedences object, path/stream of a .prec file, or None.
        options: Parser configuration.

    Raises:
        ParseError: On malformed headers or objective lines.
        UnexpectedEndOfInputError: If the input ends inside OBJECTIVE_FUNCTION.

    Examples:
        >>> data = parse_upit("newman1.upit", precedences="newman1.prec")
        >>> data.total_positive_value()
    """
    options = options or ParserOptions()
    data = UPITData()

    def set_name(value: str) -> None:
        data.name = value

    def set_num_blocks(value: str) -> None:
        data.num_blocks = parse_int_token(value)

    with open_source(source, options.encoding) as stream:
        cursor = LineCursor(stream)
        handlers: dict[str, Callable[[str], None]] = {
            "NAME": set_name,
            "NBLOCKS": set_num_blocks,
            "OBJECTIVE_FUNCTION": lambda _: _read_single_objective(
                cursor, data.objective, data.num_blocks
            ),
        }
        _scan_headers(cursor, handlers, "UPIT")

    data.precedences = resolve_precedences(precedences, options)
    logger.info(
        f"Parsed UPIT instance '{data.name}': {data.num_blocks} blocks, "
        f"{len(data.objective)} objective entries"
    )
    return data


# ============================================================================
# CPIT
# ============================================================================


def parse_cpit(
    source: LineSource,
    precedences: PrecedenceInput = None,
    options: ParserOptions | None = None,
) -> CPITData:
    """Parse a CPIT (constrained pit limit) problem file.

    Recognized sections are OBJECTIVE_FUNCTION (one ``<block> <profit>`` line
    per block), RESOURCE_CONSTRAINT_LIMITS (one ``<resource> <period> <L|G|I>
    <bound...>`` line per resource and period) and
    RESOURCE_CONSTRAINT_COEFFICIENTS (``<block> <resource> <coefficient>``
    lines up to ``EOF``).

    Raises:
        ParseError: On malformed headers or section lines.
        UnexpectedEndOfInputError: If the input ends inside a fixed-count section.

    Examples:
        >>> data = parse_cpit("newman1.cpit", precedences="newman1.prec")
        >>> data.resource_limits.get_bounds(resource=0, period=0)
        (-inf, 2000000.0)
    """
    options = options or ParserOptions()
    data = CPITData()

    def set_name(value: str) -> None:
        data.name = value

    def set_num_blocks(value: str) -> None:
        data.num_blocks = parse_int_token(value)

    def set_num_periods(value: str) -> None:
        data.num_periods = parse_int_token(value)

    def set_num_resources(value: str) -> None:
        data.num_resources = parse_int_token(value)

    def set_discount_rate(value: str) -> None:
        data.discount_rate = parse_float_token(value)

    with open_source(source, options.encoding) as stream:
        cursor = LineCursor(stream)

        def read_coefficients(_: str) -> None:
            records = _open_records(
                cursor, 3, "resource coefficient", stop_at_header=False
            )
            for record in records:
                block_id = record.int_at(0, "block id")
                resource = record.int_at(1, "resource id")
                coefficient = record.float_at(2, "coefficient")
                data.resource_coefficients.setdefault(block_id, {})[resource] = coefficient

        handlers: dict[str, Callable[[str], None]] = {
            "NAME": set_name,
            "NBLOCKS": set_num_blocks,
            "NPERIODS": set_num_periods,
            "NRESOURCE_SIDE_CONSTRAINTS": set_num_resources,
            "DISCOUNT_RATE": set_discount_rate,
            "OBJECTIVE_FUNCTION": lambda _: _read_single_objective(
                cursor, data.objective, data.num_blocks
            ),
            "RESOURCE_CONSTRAINT_LIMITS": lambda _: _read_resource_limits(
                cursor, data.resource_limits, data.num_resources, data.num_periods, options
            ),
            "RESOURCE_CONSTRAINT_COEFFICIENTS": read_coefficients,
        }
        _scan_headers(cursor, handlers, "CPIT")

    data.precedences = resolve_precedences(precedences, options)
    logger.info(
        f"Parsed CPIT instance '{data.name}': {data.num_blocks} blocks, "
        f"{data.num_periods} periods, {data.num_resources} resources"
    )
    return data


# ============================================================================
# PCPSP
# ============================================================================


def parse_pcpsp(
    source: LineSource,
    precedences: PrecedenceInput = None,
    options: ParserOptions | None = None,
) -> PCPSPData:
    """Parse a PCPSP (precedence constrained production scheduling) problem file.

    In addition to the CPIT sections, PCPSP files carry per-destination
    objective values (``<block> <profit_dest_0> ... <profit_dest_D-1>``),
    resource coefficients per destination (``<block> <dest> <resource>
    <coefficient>``), GENERAL_CONSTRAINT_COEFFICIENTS (``<block> <dest>
    <period> <row> <coefficient>``) and GENERAL_CONSTRAINT_LIMITS (one
    ``<row> <L|G|I> <bound...>`` line per general constraint row).

    Coefficient sections end at ``EOF`` or at the next ``KEY: value`` line,
    both consumed, or at a line too short to be a coefficient record.

    Raises:
        ParseError: On malformed headers or section lines.
        UnexpectedEndOfInputError: If the input ends inside a fixed-count section.

    Examples:
        >>> data = parse_pcpsp("newman1.pcpsp", precedences="newman1.prec")
        >>> data.get_resource_coefficient(block=2, destination=1, resource=0)
    """
    options = options or ParserOptions()
    data = PCPSPData()

    def set_name(value: str) -> None:
        data.name = value

    def set_int(attribute: str) -> Callable[[str], None]:
        def setter(value: str) -> None:
            setattr(data, attribute, parse_int_token(value))

        return setter

    def set_discount_rate(value: str) -> None:
        data.discount_rate = parse_float_token(value)

    with open_source(source, options.encoding) as stream:
        cursor = LineCursor(stream)

        def read_objective(_: str) -> None:
            for record in _fixed_records(cursor, data.num_blocks, "objective function"):
                block_id = record.int_at(0, "block id")
                data.objective[block_id] = {
                    dest: record.float_at(1 + dest, f"objective value for destination {dest}")
                    for dest in range(data.num_destinations)
                }

        def read_resource_coefficients(_: str) -> None:
            records = _open_records(cursor, 4, "resource coefficient", stop_at_header=True)
            for record in records:
                block_id = record.int_at(0, "block id")
                dest = record.int_at(1, "destination id")
                resource = record.int_at(2, "resource id")
                coefficient = record.float_at(3, "coefficient")
                by_dest = data.resource_coefficients.setdefault(block_id, {})
                by_dest.setdefault(dest, {})[resource] = coefficient

        def read_general_coefficients(_: str) -> None:
            records = _open_records(cursor, 5, "general coefficient", stop_at_header=True)
            for record in records:
                key = (
                    record.int_at(0, "block id"),
                    record.int_at(1, "destination id"),
                    record.int_at(2, "period"),
                    record.int_at(3, "constraint row"),
                )
                data.general_coefficients[key] = record.float_at(4, "coefficient")

        def read_general_limits(_: str) -> None:
            records = _fixed_records(
                cursor, data.num_general_constraints, "general constraint limits"
            )
            for record in records:
                row = record.int_at(0, "constraint row")
                bounds = _read_bounds(record, 1, options)
                if bounds is not None:
                    data.general_limits[row] = bounds

        handlers: dict[str, Callable[[str], None]] = {
            "NAME": set_name,
            "NBLOCKS": set_int("num_blocks"),
            "NPERIODS": set_int("num_periods"),
            "NDESTINATIONS": set_int("num_destinations"),
            "NRESOURCE_SIDE_CONSTRAINTS": set_int("num_resources"),
            "NGENERAL_SIDE_CONSTRAINTS": set_int("num_general_constraints"),
            "DISCOUNT_RATE": set_discount_rate,
            "OBJECTIVE_FUNCTION": read_objective,
            "RESOURCE_CONSTRAINT_LIMITS": lambda _: _read_resource_limits(
                cursor, data.resource_limits, data.num_resources, data.num_periods, options
            ),
            "RESOURCE_CONSTRAINT_COEFFICIENTS": read_resource_coefficients,
            "GENERAL_CONSTRAINT_COEFFICIENTS": read_general_coefficients,
            "GENERAL_CONSTRAINT_LIMITS": read_general_limits,
        }
        _scan_headers(cursor, handlers, "PCPSP")

    data.precedences = resolve_precedences(precedences, options)
    logger.info(
        f"Parsed PCPSP instance '{data.name}': {data.num_blocks} blocks, "
        f"{data.num_periods} periods, {data.num_destinations} destinations, "
        f"{data.num_resources} resources, {data.num_general_constraints} general constraints"
    )
    return data
