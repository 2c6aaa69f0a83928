###
# title: graph.py
# language: python3
#
# date: 2024-12-09
# license: GPLv3
# author: bue, willem
#
# descriprion:
#   undirected adjacency list graph, the interference graph that
#   register allocation colors. edges are only ever added.
#####


# library
from typing import Any, Dict, Iterable, List, Set, Tuple

from graphviz import Graph

from errors import LookupFailure
from utils import soft_assert


class UndirectedAdjList:

    def __init__(self, vertices: Iterable = ()):
        self.out: Dict[Any, Set] = {}
        for v in vertices:
            self.out[v] = set()

    def add_vertex(self, v):
        if v not in self.out:
            self.out[v] = set()

    def add_edge(self, u, v):
        soft_assert(u != v, f'self loop on {u!r} in interference graph')
        self.add_vertex(u)
        self.out[u].add(v)
        self.add_vertex(v)
        self.out[v].add(u)

    def adjacent(self, u) -> Set:
        try:
            return self.out[u]
        except KeyError:
            raise LookupFailure(u) from None

    def has_edge(self, u, v) -> bool:
        return u in self.out and v in self.out[u]

    def degree(self, u) -> int:
        return len(self.adjacent(u))

    def vertices(self) -> List:
        return list(self.out.keys())

    def num_vertices(self) -> int:
        return len(self.out)

    def edges(self) -> List[Tuple]:
        # each undirected edge once, in insertion order of the first endpoint
        seen = set()
        result = []
        for u, ls_v in self.out.items():
            for v in ls_v:
                if (v, u) not in seen:
                    seen.add((u, v))
                    result.append((u, v))
        return result

    def num_edges(self) -> int:
        return len(self.edges())

    def __contains__(self, v) -> bool:
        return v in self.out

    def __repr__(self):
        return 'UndirectedAdjList(' + repr(self.out) + ')'

    def show(self) -> Graph:
        dot = Graph(engine='neato')
        for v in self.out:
            dot.node(str(v))
        for (u, v) in self.edges():
            dot.edge(str(u), str(v))
        return dot
