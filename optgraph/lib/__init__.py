"""Graph subroutines and indexing utilities used by the formulations.

This package contains the NetworkX-backed helper algorithms and the element
indexing used to name solver variables.
"""

from optgraph.lib.index import ElementIndex
from optgraph.lib.kneser import kneser_graph
