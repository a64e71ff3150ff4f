"""
Graph Domain Model

Immutable-per-update snapshot of the graph being visualized: node sequence,
edge keys and forward/reverse adjacency.

Edge keys keep the orientation the edge was entered with ("u v"), so the same
key is used by the analyzers, the simulator and the renderer regardless of
whether the graph is treated as directed.

Usage:
    graph = GraphModel.from_edges(["A", "B", "C"], [("A", "B"), "B C"])
    graph.neighbors("B")   # ['C', 'A']
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from functools import cached_property
from typing import Dict, Iterable, List, Sequence, Tuple, Union

import networkx as nx


EdgeLike = Union[str, Sequence[str]]


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class GraphIntegrityError(ValueError):
    """Node sequence, edge list and adjacency disagree with each other."""


class MissingNodeError(KeyError):
    """Lookup of a node that is not part of the graph."""


class MissingEdgeError(KeyError):
    """Lookup of an edge that is not part of the graph."""


# ---------------------------------------------------------------------------
# Edge keys
# ---------------------------------------------------------------------------

def edge_key(u: str, v: str) -> str:
    return f"{u} {v}"


def split_edge_key(key: str) -> Tuple[str, str]:
    parts = key.split(" ")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise GraphIntegrityError(f"Malformed edge key: {key!r}")
    return parts[0], parts[1]


def _as_pair(edge: EdgeLike) -> Tuple[str, str]:
    if isinstance(edge, str):
        return split_edge_key(edge.strip())
    u, v = edge
    return str(u), str(v)


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GraphModel:
    """
    Graph snapshot consumed by the analyzers and the layout simulator.

    Invariants (checked on construction):
        - node ids are unique and contain no whitespace
        - every edge endpoint appears in ``nodes``
        - ``adj``/``rev`` hold exactly the edges of ``edges``
    """
    nodes: Tuple[str, ...] = ()
    edges: Tuple[str, ...] = ()
    adj: Dict[str, List[str]] = field(default_factory=dict)
    rev: Dict[str, List[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "nodes", tuple(self.nodes))
        object.__setattr__(self, "edges", tuple(self.edges))
        self.validate()

    def __hash__(self) -> int:
        # adj/rev are derived from nodes and edges
        return hash((self.nodes, self.edges))

    @classmethod
    def from_edges(
        cls,
        nodes: Iterable[str] = (),
        edges: Iterable[EdgeLike] = (),
    ) -> "GraphModel":
        """
        Build a graph and its adjacency from an edge sequence.

        Nodes only mentioned by edges are appended after ``nodes`` in the
        order they are first seen.
        """
        node_list: List[str] = []
        seen = set()
        for n in nodes:
            n = str(n)
            if n in seen:
                raise GraphIntegrityError(f"Duplicate node id: {n!r}")
            seen.add(n)
            node_list.append(n)

        pairs = [_as_pair(e) for e in edges]
        for u, v in pairs:
            for endpoint in (u, v):
                if endpoint not in seen:
                    seen.add(endpoint)
                    node_list.append(endpoint)

        adj: Dict[str, List[str]] = {n: [] for n in node_list}
        rev: Dict[str, List[str]] = {n: [] for n in node_list}
        for u, v in pairs:
            adj[u].append(v)
            rev[v].append(u)

        return cls(
            nodes=tuple(node_list),
            edges=tuple(edge_key(u, v) for u, v in pairs),
            adj=adj,
            rev=rev,
        )

    # ------------------------------------------------------------------
    # Integrity
    # ------------------------------------------------------------------

    def validate(self) -> None:
        """Raise GraphIntegrityError if the snapshot is inconsistent."""
        node_set = set(self.nodes)
        if len(node_set) != len(self.nodes):
            dupes = [n for n, c in Counter(self.nodes).items() if c > 1]
            raise GraphIntegrityError(f"Duplicate node ids: {dupes}")
        for n in self.nodes:
            if not n or any(ch.isspace() for ch in n):
                raise GraphIntegrityError(f"Invalid node id: {n!r}")

        expected_adj: Dict[str, List[str]] = {n: [] for n in self.nodes}
        expected_rev: Dict[str, List[str]] = {n: [] for n in self.nodes}
        for key in self.edges:
            u, v = split_edge_key(key)
            missing = [x for x in (u, v) if x not in node_set]
            if missing:
                raise GraphIntegrityError(
                    f"Edge {key!r} references unknown node(s): {missing}"
                )
            expected_adj[u].append(v)
            expected_rev[v].append(u)

        for name, given, expected in (
            ("adj", self.adj, expected_adj),
            ("rev", self.rev, expected_rev),
        ):
            stray = set(given) - node_set
            if stray:
                raise GraphIntegrityError(
                    f"{name} has entries for unknown nodes: {sorted(stray)}"
                )
            for n in self.nodes:
                if sorted(given.get(n, [])) != sorted(expected[n]):
                    raise GraphIntegrityError(
                        f"{name}[{n!r}] is inconsistent with the edge list"
                    )

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node: object) -> bool:
        return node in self._node_index

    @cached_property
    def _node_index(self) -> Dict[str, int]:
        return {n: i for i, n in enumerate(self.nodes)}

    @cached_property
    def _edge_set(self) -> frozenset:
        return frozenset(self.edges)

    def index_of(self, node: str) -> int:
        try:
            return self._node_index[node]
        except KeyError:
            raise MissingNodeError(node) from None

    def successors(self, node: str) -> List[str]:
        if node not in self:
            raise MissingNodeError(node)
        return list(self.adj.get(node, []))

    def predecessors(self, node: str) -> List[str]:
        if node not in self:
            raise MissingNodeError(node)
        return list(self.rev.get(node, []))

    def neighbors(self, node: str) -> List[str]:
        """Undirected neighbors: successors followed by predecessors."""
        return self.successors(node) + self.predecessors(node)

    def has_edge(self, u: str, v: str, either_direction: bool = False) -> bool:
        if edge_key(u, v) in self._edge_set:
            return True
        return either_direction and edge_key(v, u) in self._edge_set

    def find_edge_key(self, u: str, v: str) -> str:
        """Key of the edge joining u and v in whichever orientation exists."""
        for key in (edge_key(u, v), edge_key(v, u)):
            if key in self._edge_set:
                return key
        raise MissingEdgeError(edge_key(u, v))

    @cached_property
    def edge_pairs(self) -> Tuple[Tuple[str, str], ...]:
        return tuple(split_edge_key(k) for k in self.edges)

    @cached_property
    def incidences(self) -> Dict[str, List[Tuple[str, int]]]:
        """
        Undirected incidence lists as (neighbor, edge index) pairs.

        Out-edges come first in edge order, then in-edges. Self-loops are
        listed once. Edge indices let traversals tell parallel edges apart.
        """
        out_inc: Dict[str, List[Tuple[str, int]]] = {n: [] for n in self.nodes}
        in_inc: Dict[str, List[Tuple[str, int]]] = {n: [] for n in self.nodes}
        for i, (u, v) in enumerate(self.edge_pairs):
            out_inc[u].append((v, i))
            if u != v:
                in_inc[v].append((u, i))
        return {n: out_inc[n] + in_inc[n] for n in self.nodes}

    # ------------------------------------------------------------------
    # Interop
    # ------------------------------------------------------------------

    def to_networkx(self, directed: bool = False) -> nx.MultiGraph:
        """Export as a NetworkX multigraph, keeping parallel edges."""
        G = nx.MultiDiGraph() if directed else nx.MultiGraph()
        G.add_nodes_from(self.nodes)
        for key, (u, v) in zip(self.edges, self.edge_pairs):
            G.add_edge(u, v, edge_key=key)
        return G

    def to_dict(self) -> Dict[str, object]:
        return {"nodes": list(self.nodes), "edges": list(self.edges)}
