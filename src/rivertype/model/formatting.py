# Copyright 2026 RiverType Contributors
# SPDX-License-Identifier: Apache-2.0

"""Canonical text rendering of River and Data ASTs.

The output uses ``", "`` between items and is accepted by the parsers, which
reproduce an equal AST from it. Unwritten trailing parameters are dropped;
an unwritten parameter followed by a written one is kept as an empty field.
"""

from __future__ import annotations

from rivertype.model.data import (
    Data,
    EmptyData,
    PrimData,
    SeqData,
    StructData,
    TupleData,
    VariantData,
)
from rivertype.model.river import (
    DEFAULT_ELEMENTS,
    BitsNode,
    DimNode,
    FlatNode,
    GroupNode,
    NewNode,
    RevNode,
    RiverParameters,
    RiverTree,
    RootNode,
    UnionNode,
)

# ###############
# Public Interface
# ###############


def format_river(tree: RiverTree) -> str:
    """Return the canonical source text for *tree*."""
    return _format_node(tree, tree.root)


def format_parameters(params: RiverParameters) -> str:
    """Return the written parameters as source text, e.g. ``"1, , 3"``.

    Returns an empty string when no parameter was written. The grammar needs
    ``elements`` before any later field, so its default is written out when only
    ``complexity`` or ``userbits`` is set.
    """
    fields = [params.elements, params.complexity, params.userbits]
    while fields and fields[-1] is None:
        fields.pop()
    if fields and fields[0] is None:
        fields[0] = DEFAULT_ELEMENTS
    return ", ".join("" if value is None else str(value) for value in fields)


def format_data(data: Data) -> str:
    """Return the canonical source text for a Data type."""
    if isinstance(data, EmptyData):
        return "Empty"
    if isinstance(data, PrimData):
        return f"Prim<{data.bits}>"
    if isinstance(data, StructData):
        return f"Struct<{', '.join(format_data(f) for f in data.fields)}>"
    if isinstance(data, TupleData):
        return f"Tuple<{format_data(data.element)}, {data.count}>"
    if isinstance(data, SeqData):
        return f"Seq<{format_data(data.element)}>"
    if isinstance(data, VariantData):
        return f"Variant<{', '.join(format_data(o) for o in data.options)}>"
    raise TypeError(f"Not a Data type: {data!r}")


# ################
# Implementation
# ################


def _format_node(tree: RiverTree, index: int) -> str:
    node = tree.node(index)
    if isinstance(node, BitsNode):
        return f"Bits<{node.width}>"
    if isinstance(node, (RootNode, DimNode, NewNode, FlatNode, RevNode)):
        child = _format_node(tree, node.child)
        params = format_parameters(node.params)
        if params:
            return f"{node.kind.value}<{child}, {params}>"
        return f"{node.kind.value}<{child}>"
    if isinstance(node, (GroupNode, UnionNode)):
        children = ", ".join(_format_node(tree, c) for c in node.children)
        return f"{node.kind.value}<{children}>"
    raise TypeError(f"Not a River node: {node!r}")
