# Copyright 2026 RiverType Contributors
# SPDX-License-Identifier: Apache-2.0

"""Graph views of River types."""

from rivertype.views.dot import RANKDIRS, RenderOptions, render_dot
from rivertype.views.graph import (
    CLUSTER_KINDS,
    FILL_COLORS,
    GraphCluster,
    GraphEdge,
    GraphNode,
    RenderingDefect,
    RiverGraph,
    build_graph,
    fill_color,
    node_id,
    node_label,
)

__all__ = [
    "CLUSTER_KINDS",
    "FILL_COLORS",
    "GraphCluster",
    "GraphEdge",
    "GraphNode",
    "RANKDIRS",
    "RenderOptions",
    "RenderingDefect",
    "RiverGraph",
    "build_graph",
    "fill_color",
    "node_id",
    "node_label",
    "render_dot",
]
