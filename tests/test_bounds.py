"""Tests for the chromatic number bracket."""

from __future__ import annotations

import networkx as nx
import pytest

from optgraph.bounds import estimate_bounds
from optgraph.types import ColorBounds


def test_null_and_edgeless_graphs():
    assert estimate_bounds(nx.Graph()) == ColorBounds(0, 0)
    assert estimate_bounds(nx.empty_graph(5)) == ColorBounds(1, 1)


def test_complete_graph_is_tight():
    assert estimate_bounds(nx.complete_graph(5)) == ColorBounds(5, 5)


def test_petersen_lower_bound(petersen):
    lower, upper = estimate_bounds(petersen)
    # alpha = 4 gives 10 // 4 = 2, omega = 2
    assert lower == 2
    assert 3 <= upper <= 4


def test_complement_of_seven_cycle():
    # omega = 3 and alpha = 2, so both bounds give 3 (chi is 4)
    G = nx.complement(nx.cycle_graph(7))
    assert estimate_bounds(G).lower == 3


@pytest.mark.parametrize(
    "G,chi",
    [
        (nx.cycle_graph(5), 3),
        (nx.cycle_graph(6), 2),
        (nx.wheel_graph(6), 4),
        (nx.mycielski_graph(4), 4),
    ],
    ids=["c5", "c6", "wheel6", "grotzsch"],
)
def test_bracket_contains_chromatic_number(G, chi):
    bounds = estimate_bounds(G)
    assert bounds.lower <= chi <= bounds.upper


def test_color_bounds_validation():
    with pytest.raises(ValueError):
        ColorBounds(4, 3)
    assert ColorBounds(2, 5).width == 3


def test_color_bounds_unpack():
    lower, upper = ColorBounds(2, 5)
    assert (lower, upper) == (2, 5)
    assert list(ColorBounds(3, 3)) == [3, 3]
