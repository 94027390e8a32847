# Copyright 2026 RiverType Contributors
# SPDX-License-Identifier: Apache-2.0

"""Graphviz DOT formatting for River graphs."""

from __future__ import annotations

from dataclasses import dataclass

from rivertype.views.graph import GraphCluster, GraphNode, RiverGraph

# ###############
# Public Interface
# ###############

RANKDIRS: tuple[str, ...] = ("TB", "LR", "BT", "RL")


@dataclass(frozen=True)
class RenderOptions:
    """Presentation settings for the DOT output.

    Attributes:
        graph_name: Name of the emitted digraph.
        rankdir: Graphviz layout direction, one of :data:`RANKDIRS`.
        fontname: Font used for nodes and cluster labels.
        clusters: When False, cluster boundaries are omitted and their
            contents are emitted inline in the same order.
    """

    graph_name: str = "river"
    rankdir: str = "TB"
    fontname: str = "Helvetica"
    clusters: bool = True

    def __post_init__(self) -> None:
        if self.rankdir not in RANKDIRS:
            raise ValueError(f"rankdir must be one of {', '.join(RANKDIRS)}, got {self.rankdir!r}")


def render_dot(graph: RiverGraph, options: RenderOptions | None = None) -> str:
    """Format *graph* as a Graphviz ``digraph``.

    Node declarations and cluster boundaries are written in the order of
    ``graph.items``; all edges follow.

    Args:
        graph: The graph built by :func:`~rivertype.views.graph.build_graph`.
        options: Presentation settings, defaults to :class:`RenderOptions`.

    Returns:
        The DOT source text, ending with a newline.
    """
    options = options or RenderOptions()
    lines = [
        f"digraph {_quote(options.graph_name)} {{",
        f"  graph [rankdir={options.rankdir}, fontname={_quote(options.fontname)}];",
        f"  node [shape=box, style=filled, fontname={_quote(options.fontname)}];",
    ]
    _format_items(graph.items, options, lines, indent=1)
    for edge in graph.edges:
        lines.append(f"  {edge.source} -> {edge.target};")
    lines.append("}")
    return "\n".join(lines) + "\n"


# ################
# Implementation
# ################


def _format_items(
    items: list[GraphNode | GraphCluster],
    options: RenderOptions,
    lines: list[str],
    indent: int,
) -> None:
    pad = "  " * indent
    for item in items:
        if isinstance(item, GraphNode):
            lines.append(f"{pad}{item.id} [label={_quote(item.label)}, fillcolor={_quote(item.fill_color)}];")
        elif options.clusters:
            lines.append(f"{pad}subgraph {item.id} {{")
            lines.append(f"{pad}  label={_quote(item.label)};")
            lines.append(f"{pad}  style=dashed;")
            _format_items(item.items, options, lines, indent + 1)
            lines.append(f"{pad}}}")
        else:
            _format_items(item.items, options, lines, indent)


def _quote(text: str) -> str:
    """Return *text* as a double-quoted DOT string."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
