"""High-level entrypoints for the MineLib instance parser library."""

from .arrays import (
    discount_factors,
    discounted_profit_matrix,
    discounted_profit_tensor,
    objective_vector,
    precedence_arc_array,
    resource_bound_arrays,
    resource_coefficient_matrix,
    resource_coefficient_tensor,
)
from .data import (
    AttributeValue,
    Block,
    BlockModel,
    BoundType,
    CPITData,
    PCPSPData,
    Precedences,
    ProblemType,
    ResourceLimits,
    UPITData,
    discount_factor,
)
from .exceptions import (
    InvalidOptionsError,
    MineLibError,
    ParseError,
    UnexpectedEndOfInputError,
    UnknownFormatError,
)
from .graph import precedence_digraph
from .io import LineCursor, open_source
from .loader import detect_problem_type, load_instance
from .options import ParserOptions
from .parsers import (
    parse_block_model,
    parse_cpit,
    parse_pcpsp,
    parse_precedences,
    parse_upit,
    resolve_precedences,
)
from .utils import is_comment_or_blank, parse_float_token, split_key_value

__version__ = "0.1.0"

__all__ = [
    # Main API
    "parse_block_model",
    "parse_precedences",
    "parse_upit",
    "parse_cpit",
    "parse_pcpsp",
    "resolve_precedences",
    "load_instance",
    "detect_problem_type",
    # Configuration
    "ParserOptions",
    # Data model
    "ProblemType",
    "BoundType",
    "Precedences",
    "ResourceLimits",
    "Block",
    "BlockModel",
    "AttributeValue",
    "UPITData",
    "CPITData",
    "PCPSPData",
    "discount_factor",
    # Line reading
    "LineCursor",
    "open_source",
    "is_comment_or_blank",
    "parse_float_token",
    "split_key_value",
    # Dense arrays
    "discount_factors",
    "objective_vector",
    "discounted_profit_matrix",
    "discounted_profit_tensor",
    "resource_coefficient_matrix",
    "resource_coefficient_tensor",
    "resource_bound_arrays",
    "precedence_arc_array",
    # Graph export
    "precedence_digraph",
    # Exceptions
    "MineLibError",
    "ParseError",
    "UnexpectedEndOfInputError",
    "UnknownFormatError",
    "InvalidOptionsError",
    # Version
    "__version__",
]
