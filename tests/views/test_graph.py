# Copyright 2026 RiverType Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for building the intermediate River graph."""

import pytest

from rivertype.model.river import BitsNode, GroupNode, RiverKind, RiverTree
from rivertype.parser import parse
from rivertype.views import graph as graph_module
from rivertype.views.graph import (
    CLUSTER_KINDS,
    FILL_COLORS,
    GraphCluster,
    GraphEdge,
    GraphNode,
    RenderingDefect,
    build_graph,
    fill_color,
    node_label,
)

# ###############
# Helpers
# ###############

_UNARY_FORMS = ("Root", "Dim", "New", "Flat", "Rev")
_COMPOSITE_FORMS = ("Group", "Union")


def _expressions(depth: int) -> list[str]:
    """Return River expressions using every variant, nested up to *depth* levels."""
    if depth == 0:
        return ["Bits<1>"]
    expressions = ["Bits<2>"]
    for child in _expressions(depth - 1):
        for name in _UNARY_FORMS:
            expressions.append(f"{name}<{child}>")
            expressions.append(f"{name}<{child}, 2,,1>")
        for name in _COMPOSITE_FORMS:
            expressions.append(f"{name}<{child}>")
            expressions.append(f"{name}<New<Bits<3>>, {child}, {child}>")
    return expressions


_GENERATED = _expressions(2)


def _labels(source: str) -> list[str]:
    return [node.label for node in build_graph(parse(source)).nodes()]


# ###############
# Labels and styling
# ###############


class TestLabels:
    @pytest.mark.parametrize(
        ("source", "label"),
        [
            ("Bits<8>", "Bits<8>"),
            ("Root<Bits<8>, 1, 2, 3>", "Root<N=1,C=2,U=3>"),
            ("Dim<Bits<8>>", "Dim<N=1,C=0,U=0>"),
            ("Rev<Bits<8>, 4,,2>", "Rev<N=4,C=0,U=2>"),
            ("Flat<Bits<8>, 2>", "Flat<N=2,C=0,U=0>"),
            ("Group<Bits<8>>", "Group"),
            ("Union<Bits<8>>", "Union"),
        ],
    )
    def test_root_label(self, source: str, label: str) -> None:
        tree = parse(source)
        assert node_label(tree.root_node) == label

    def test_node_label_rejects_foreign_objects(self) -> None:
        with pytest.raises(RenderingDefect):
            node_label("Bits<8>")  # type: ignore[arg-type]


class TestStyling:
    def test_every_variant_has_a_fill_color(self) -> None:
        assert set(FILL_COLORS) == set(RiverKind)

    def test_fill_colors_are_distinct(self) -> None:
        assert len(set(FILL_COLORS.values())) == len(FILL_COLORS)

    def test_cluster_kinds(self) -> None:
        assert CLUSTER_KINDS == {RiverKind.ROOT, RiverKind.DIM, RiverKind.NEW, RiverKind.REV}

    def test_missing_color_is_a_defect(self, monkeypatch: pytest.MonkeyPatch) -> None:
        colors = dict(FILL_COLORS)
        del colors[RiverKind.GROUP]
        monkeypatch.setattr(graph_module, "FILL_COLORS", colors)
        with pytest.raises(RenderingDefect, match="Group"):
            fill_color(RiverKind.GROUP)
        with pytest.raises(RenderingDefect):
            build_graph(parse("Group<Bits<1>>"))

    @pytest.mark.parametrize("source", _GENERATED)
    def test_nodes_carry_variant_color(self, source: str) -> None:
        for node in build_graph(parse(source)).nodes():
            assert node.fill_color == FILL_COLORS[node.kind]


# ###############
# Structure
# ###############


class TestStructure:
    def test_leaf(self) -> None:
        graph = build_graph(parse("Bits<8>"))
        expected = GraphNode(id="n0", label="Bits<8>", kind=RiverKind.BITS, fill_color=FILL_COLORS[RiverKind.BITS])
        assert graph.items == [expected]
        assert graph.edges == []

    def test_root_opens_cluster_around_child(self) -> None:
        graph = build_graph(parse("Root<Bits<8>, 1, 2, 3>"))
        root, cluster = graph.items
        assert isinstance(root, GraphNode)
        assert root.id == "n1"
        assert isinstance(cluster, GraphCluster)
        assert cluster.id == "cluster_1"
        assert cluster.label == "Root"
        assert [item.id for item in cluster.items] == ["n0"]
        assert graph.edges == [GraphEdge(source="n1", target="n0")]

    def test_group_and_flat_do_not_open_clusters(self) -> None:
        graph = build_graph(parse("Group<Flat<Bits<1>>, Bits<2>>"))
        assert graph.clusters() == []
        assert [node.id for node in graph.nodes()] == ["n3", "n1", "n0", "n2"]

    def test_clusters_nest_with_depth(self) -> None:
        graph = build_graph(parse("Root<Dim<Rev<Bits<1>>>>"))
        outer = graph.items[1]
        assert outer.kind == RiverKind.ROOT
        middle = outer.items[1]
        assert middle.kind == RiverKind.DIM
        inner = middle.items[1]
        assert inner.kind == RiverKind.REV
        assert [item.label for item in inner.items] == ["Bits<1>"]

    def test_pre_order_declarations(self) -> None:
        assert _labels("Root<Group<Bits<3>, Dim<Bits<4>,1,2,3>>, 1, 2, 3>") == [
            "Root<N=1,C=2,U=3>",
            "Group",
            "Bits<3>",
            "Dim<N=1,C=2,U=3>",
            "Bits<4>",
        ]

    def test_identical_subtrees_get_distinct_ids(self) -> None:
        graph = build_graph(parse("Group<Dim<Bits<8>>, Dim<Bits<8>>>"))
        ids = [node.id for node in graph.nodes()]
        assert len(ids) == len(set(ids)) == 5

    def test_ids_follow_arena_indices(self) -> None:
        tree = RiverTree(nodes=(BitsNode(width=1), BitsNode(width=2), GroupNode(children=(1, 0))), root=2)
        graph = build_graph(tree)
        assert [node.id for node in graph.nodes()] == ["n2", "n1", "n0"]
        assert graph.edges == [GraphEdge(source="n2", target="n1"), GraphEdge(source="n2", target="n0")]


# ###############
# Ordering of New siblings
# ###############


class TestNewOrdering:
    def test_new_sibling_emitted_last(self) -> None:
        assert _labels("Group<New<Bits<1>>, Bits<2>, Bits<3>>") == [
            "Group",
            "Bits<2>",
            "Bits<3>",
            "New<N=1,C=0,U=0>",
            "Bits<1>",
        ]

    def test_union_children_reordered_too(self) -> None:
        assert _labels("Union<New<Bits<1>>, Dim<Bits<2>>>")[1] == "Dim<N=1,C=0,U=0>"

    def test_relative_order_within_partitions_is_kept(self) -> None:
        labels = _labels("Group<New<Bits<1>>, Bits<2>, New<Bits<3>>, Bits<4>>")
        assert labels == [
            "Group",
            "Bits<2>",
            "Bits<4>",
            "New<N=1,C=0,U=0>",
            "Bits<1>",
            "New<N=1,C=0,U=0>",
            "Bits<3>",
        ]

    def test_edges_keep_source_order(self) -> None:
        tree = parse("Group<New<Bits<1>>, Bits<2>>")
        graph = build_graph(tree)
        targets = [edge.target for edge in graph.edges if edge.source == f"n{tree.root}"]
        assert targets == [f"n{child}" for child in tree.root_node.children]

    def test_reordering_applies_at_every_level(self) -> None:
        labels = _labels("Group<Bits<1>, Group<New<Bits<2>>, Bits<3>>>")
        assert labels == ["Group", "Bits<1>", "Group", "Bits<3>", "New<N=1,C=0,U=0>", "Bits<2>"]


# ###############
# Totality
# ###############


class TestTotality:
    def test_generated_expressions_cover_every_variant(self) -> None:
        kinds = {node.kind for source in _GENERATED for _, node in parse(source).walk()}
        assert kinds == set(RiverKind)

    @pytest.mark.parametrize("source", _GENERATED)
    def test_one_node_per_element(self, source: str) -> None:
        tree = parse(source)
        graph = build_graph(tree)
        assert sorted(node.id for node in graph.nodes()) == sorted(f"n{i}" for i in range(len(tree)))

    @pytest.mark.parametrize("source", _GENERATED)
    def test_one_edge_per_parent_child_pair(self, source: str) -> None:
        tree = parse(source)
        graph = build_graph(tree)
        expected = {(f"n{parent}", f"n{child}") for parent, _ in tree.walk() for child in tree.children(parent)}
        assert len(graph.edges) == len(tree) - 1
        assert {(edge.source, edge.target) for edge in graph.edges} == expected

    @pytest.mark.parametrize("source", _GENERATED)
    def test_one_cluster_per_scope_node(self, source: str) -> None:
        tree = parse(source)
        graph = build_graph(tree)
        scope_nodes = [index for index, node in tree.walk() if node.kind in CLUSTER_KINDS]
        assert sorted(cluster.id for cluster in graph.clusters()) == sorted(f"cluster_{index}" for index in scope_nodes)
