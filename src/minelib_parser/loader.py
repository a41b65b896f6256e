"""Extension-based loading of MineLib instance files."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .data import BlockModel, CPITData, PCPSPData, Precedences, ProblemType, UPITData
from .exceptions import UnknownFormatError
from .options import ParserOptions
from .parsers import (
    PrecedenceInput,
    parse_block_model,
    parse_cpit,
    parse_pcpsp,
    parse_precedences,
    parse_upit,
)

logger = logging.getLogger(__name__)

BLOCK_MODEL_SUFFIX = ".blocks"
PRECEDENCE_SUFFIX = ".prec"

_PROBLEM_PARSERS = {
    ProblemType.UPIT: parse_upit,
    ProblemType.CPIT: parse_cpit,
    ProblemType.PCPSP: parse_pcpsp,
}

MineLibRecord = BlockModel | Precedences | UPITData | CPITData | PCPSPData


def detect_problem_type(path: str | os.PathLike[str]) -> ProblemType | None:
    """Return the problem type implied by a file suffix, or None."""
    suffix = Path(path).suffix.lower().lstrip(".")
    try:
        return ProblemType(suffix)
    except ValueError:
        return None


def load_instance(
    path: str | os.PathLike[str],
    precedences: PrecedenceInput = None,
    options: ParserOptions | None = None,
) -> MineLibRecord:
    """Load any MineLib file, choosing the parser from its extension.

    Suffixes (case-insensitive): ``.blocks``, ``.prec``, ``.upit``, ``.cpit``
    and ``.pcpsp``. For problem files without an explicit ``precedences``
    argument, a sibling ``<stem>.prec`` file is attached when present.

    Args:
        path: Path to the instance file.
        precedences: Precedence input passed on to the problem parser.
        options: Parser configuration.

    Returns:
        BlockModel, Precedences, UPITData, CPITData or PCPSPData.

    Raises:
        UnknownFormatError: If the suffix is not a MineLib file kind.
        FileNotFoundError: If the file does not exist.
        ParseError: If the file content is malformed.

    Examples:
        >>> data = load_instance("data/newman1.cpit")  # picks up data/newman1.prec
        >>> data.precedences.num_arcs()
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == BLOCK_MODEL_SUFFIX:
        return parse_block_model(path, options=options)
    if suffix == PRECEDENCE_SUFFIX:
        return parse_precedences(path, options=options)

    problem_type = detect_problem_type(path)
    if problem_type is None:
        raise UnknownFormatError(
            f"Unrecognized MineLib file extension '{path.suffix}' for {path}. "
            f"Expected one of .blocks, .prec, .upit, .cpit or .pcpsp."
        )

    if precedences is None:
        sibling = path.with_suffix(PRECEDENCE_SUFFIX)
        if sibling.is_file():
            logger.info(f"Attaching precedences from {sibling}")
            precedences = sibling
    return _PROBLEM_PARSERS[problem_type](path, precedences=precedences, options=options)
