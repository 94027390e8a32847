# Copyright 2026 RiverType Contributors
# SPDX-License-Identifier: Apache-2.0

"""Graph construction for River types.

Builds a neutral graph description from a :class:`RiverTree` in a single
recursive traversal. Formatting the description as text is left to
:mod:`rivertype.views.dot`.

The graph contains:
- One node per AST element, labelled with the variant and its parameters.
- One directed edge per parent/child pair, in source order.
- A nested cluster around the child of every ``Root``, ``Dim``, ``New`` and
  ``Rev`` node.

Node declarations appear in pre-order. Among the children of a ``Group`` or
``Union``, ``New`` children are emitted after all other siblings so that their
clusters are drawn on top; edges keep the source order.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rivertype.model.river import (
    BitsNode,
    DimNode,
    FlatNode,
    GroupNode,
    NewNode,
    RevNode,
    RiverKind,
    RiverParameters,
    RiverTree,
    RootNode,
    UnionNode,
    child_indices,
)

# ###############
# Public Interface
# ###############


class RenderingDefect(RuntimeError):
    """Raised when a River variant has no styling. Indicates a programming error."""


# Fill color per variant. Must cover every RiverKind.
FILL_COLORS: dict[RiverKind, str] = {
    RiverKind.BITS: "#e8e8e8",
    RiverKind.ROOT: "#a6cee3",
    RiverKind.GROUP: "#b2df8a",
    RiverKind.DIM: "#fdbf6f",
    RiverKind.NEW: "#cab2d6",
    RiverKind.FLAT: "#ffff99",
    RiverKind.REV: "#fb9a99",
    RiverKind.UNION: "#8dd3c7",
}

# Variants that open a nested cluster around their child.
CLUSTER_KINDS: frozenset[RiverKind] = frozenset({RiverKind.ROOT, RiverKind.DIM, RiverKind.NEW, RiverKind.REV})


@dataclass(frozen=True)
class GraphNode:
    """A node declaration.

    Attributes:
        id: Identifier derived from the arena index (``n<index>``).
        label: Display label, e.g. ``Root<N=1,C=2,U=3>``.
        kind: The River variant of the node.
        fill_color: Fill color for the variant.
    """

    id: str
    label: str
    kind: RiverKind
    fill_color: str


@dataclass(frozen=True)
class GraphEdge:
    """A directed parent to child edge."""

    source: str
    target: str


@dataclass
class GraphCluster:
    """A nested cluster introduced by a scope-introducing node.

    Attributes:
        id: Identifier derived from the owning node (``cluster_<index>``).
        label: The variant name of the owning node.
        kind: The variant of the owning node.
        items: Nodes and sub-clusters inside the cluster, in emission order.
    """

    id: str
    label: str
    kind: RiverKind
    items: list[GraphNode | GraphCluster] = field(default_factory=list)


@dataclass
class RiverGraph:
    """Full description of a graph to be formatted.

    Attributes:
        items: Top-level nodes and clusters in emission order.
        edges: All parent to child edges.
    """

    items: list[GraphNode | GraphCluster] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)

    def nodes(self) -> list[GraphNode]:
        """Return every node declaration in emission order, clusters flattened."""
        return list(_iter_nodes(self.items))

    def clusters(self) -> list[GraphCluster]:
        """Return every cluster in emission order, nested ones included."""
        return list(_iter_clusters(self.items))


def build_graph(tree: RiverTree) -> RiverGraph:
    """Build a :class:`RiverGraph` from *tree*.

    Args:
        tree: The parsed River type.

    Returns:
        The graph description.

    Raises:
        RenderingDefect: If a variant of the tree has no fill color.
    """
    graph = RiverGraph()
    _emit(tree, tree.root, graph.items)
    for index, node in tree.walk():
        for child in child_indices(node):
            graph.edges.append(GraphEdge(source=node_id(index), target=node_id(child)))
    return graph


def node_id(index: int) -> str:
    """Return the graph node identifier for the arena index *index*."""
    return f"n{index}"


def node_label(node: BitsNode | RootNode | DimNode | NewNode | FlatNode | RevNode | GroupNode | UnionNode) -> str:
    """Return the display label for *node*."""
    if isinstance(node, BitsNode):
        return f"Bits<{node.width}>"
    if isinstance(node, (RootNode, DimNode, NewNode, FlatNode, RevNode)):
        return f"{node.kind.value}<{_params_label(node.params)}>"
    if isinstance(node, (GroupNode, UnionNode)):
        return node.kind.value
    raise RenderingDefect(f"No label for node {node!r}")


def fill_color(kind: RiverKind) -> str:
    """Return the fill color for *kind*.

    Raises:
        RenderingDefect: If *kind* has no entry in :data:`FILL_COLORS`.
    """
    try:
        return FILL_COLORS[kind]
    except KeyError:
        raise RenderingDefect(f"No fill color for variant {kind!r}") from None


# ################
# Implementation
# ################


def _emit(tree: RiverTree, index: int, items: list[GraphNode | GraphCluster]) -> None:
    """Append the declarations for the subtree at *index* to *items*."""
    node = tree.node(index)
    items.append(GraphNode(id=node_id(index), label=node_label(node), kind=node.kind, fill_color=fill_color(node.kind)))

    if node.kind in CLUSTER_KINDS:
        cluster = GraphCluster(id=f"cluster_{index}", label=node.kind.value, kind=node.kind)
        for child in child_indices(node):
            _emit(tree, child, cluster.items)
        items.append(cluster)
    else:
        for child in _emission_order(tree, child_indices(node)):
            _emit(tree, child, items)


def _emission_order(tree: RiverTree, children: tuple[int, ...]) -> list[int]:
    """Order siblings so that ``New`` children follow all others."""
    others = [c for c in children if tree.node(c).kind != RiverKind.NEW]
    news = [c for c in children if tree.node(c).kind == RiverKind.NEW]
    return others + news


def _params_label(params: RiverParameters) -> str:
    return f"N={params.effective_elements},C={params.effective_complexity},U={params.effective_userbits}"


def _iter_nodes(items: list[GraphNode | GraphCluster]):
    for item in items:
        if isinstance(item, GraphCluster):
            yield from _iter_nodes(item.items)
        else:
            yield item


def _iter_clusters(items: list[GraphNode | GraphCluster]):
    for item in items:
        if isinstance(item, GraphCluster):
            yield item
            yield from _iter_clusters(item.items)
