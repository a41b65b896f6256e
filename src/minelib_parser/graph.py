"""Export of precedence graphs to networkx.

networkx is an optional dependency; install it with
``pip install 'minelib-parser[graph]'``.

Example:
    >>> import networkx as nx
    >>> graph = precedence_digraph(parse_precedences("newman1.prec"))
    >>> nx.is_directed_acyclic_graph(graph)
    True
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .data import Precedences

logger = logging.getLogger(__name__)

# Check for optional dependencies
try:
    import networkx as nx  # type: ignore[import-untyped,unused-ignore]

    _HAS_GRAPH_DEPS = True
except ImportError:
    _HAS_GRAPH_DEPS = False


def _check_dependencies() -> None:
    """Check if graph export dependencies are installed."""
    if not _HAS_GRAPH_DEPS:
        msg = (
            "Graph export requires optional dependencies. "
            "Install with: pip install 'minelib-parser[graph]'"
        )
        raise ImportError(msg)


def precedence_digraph(precedences: Precedences) -> Any:
    """Build a ``networkx.DiGraph`` with an edge from each predecessor to its block.

    Nodes are ``0 .. num_blocks - 1`` plus any other id referenced by an arc,
    so blocks without precedences still appear as isolated nodes.

    Args:
        precedences: Parsed precedence graph.

    Returns:
        networkx.DiGraph

    Raises:
        ImportError: If networkx is not installed.
    """
    _check_dependencies()
    graph = nx.DiGraph()
    graph.add_nodes_from(range(precedences.num_blocks))
    graph.add_edges_from(precedences.arcs())
    if graph.number_of_nodes() > precedences.num_blocks:
        logger.debug(
            f"Precedence graph references {graph.number_of_nodes() - precedences.num_blocks} "
            f"block ids beyond num_blocks={precedences.num_blocks}"
        )
    return graph
