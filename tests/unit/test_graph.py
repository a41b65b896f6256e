"""Tests for the networkx precedence export."""

import logging

import pytest

from minelib_parser import Precedences, parse_precedences, precedence_digraph
from minelib_parser import graph as graph_module

nx = pytest.importorskip("networkx")


def test_digraph_from_sample(precedence_stream):
    graph = precedence_digraph(parse_precedences(precedence_stream))

    assert isinstance(graph, nx.DiGraph)
    assert graph.number_of_nodes() == 5
    assert graph.number_of_edges() == 7
    assert graph.has_edge(0, 1)
    assert graph.has_edge(3, 4)
    assert not graph.has_edge(4, 3)
    assert nx.is_directed_acyclic_graph(graph)
    assert sorted(graph.predecessors(4)) == [1, 2, 3]


def test_isolated_blocks_are_nodes():
    graph = precedence_digraph(Precedences(num_blocks=4, predecessors={1: [0]}))
    assert sorted(graph.nodes) == [0, 1, 2, 3]
    assert graph.number_of_edges() == 1


def test_ids_beyond_num_blocks_are_logged(caplog):
    prec = Precedences(num_blocks=2, predecessors={1: [7]})
    with caplog.at_level(logging.DEBUG, logger="minelib_parser.graph"):
        graph = precedence_digraph(prec)

    assert 7 in graph
    assert any("beyond num_blocks=2" in r.message for r in caplog.records)


def test_missing_networkx_raises_import_error(monkeypatch):
    monkeypatch.setattr(graph_module, "_HAS_GRAPH_DEPS", False)
    with pytest.raises(ImportError, match=r"pip install 'minelib-parser\[graph\]'"):
        precedence_digraph(Precedences(num_blocks=1))
