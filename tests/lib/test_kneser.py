"""Tests for Kneser graph construction."""

import networkx as nx
import pytest

from optgraph.errors import InvalidArgument
from optgraph.lib.kneser import kneser_graph


def test_kneser_five_two_is_petersen():
    K = kneser_graph(5, 2)
    assert K.number_of_nodes() == 10
    assert K.number_of_edges() == 15
    assert nx.is_isomorphic(K, nx.petersen_graph())


def test_kneser_n_one_is_complete():
    K = kneser_graph(4, 1)
    assert nx.is_isomorphic(K, nx.complete_graph(4))
    assert frozenset({1}) in K


def test_nodes_are_subsets_and_edges_disjoint():
    K = kneser_graph(6, 2)
    assert all(len(v) == 2 and v <= set(range(1, 7)) for v in K.nodes)
    assert all(u.isdisjoint(v) for u, v in K.edges())


def test_edgeless_when_a_below_2b():
    K = kneser_graph(5, 3)
    assert K.number_of_nodes() == 10
    assert K.number_of_edges() == 0


def test_b_zero_is_a_single_looped_vertex():
    K = kneser_graph(3, 0)
    assert list(K.nodes) == [frozenset()]
    assert K.has_edge(frozenset(), frozenset())


def test_a_below_b_is_empty():
    assert kneser_graph(2, 3).number_of_nodes() == 0


def test_negative_parameters():
    with pytest.raises(InvalidArgument):
        kneser_graph(-1, 2)
