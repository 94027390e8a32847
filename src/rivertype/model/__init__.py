# Copyright 2026 RiverType Contributors
# SPDX-License-Identifier: Apache-2.0

"""AST models for River stream types and Data types."""

from rivertype.model.data import (
    Data,
    EmptyData,
    PrimData,
    SeqData,
    StructData,
    TupleData,
    VariantData,
)
from rivertype.model.formatting import format_data, format_parameters, format_river
from rivertype.model.river import (
    BitsNode,
    CompositeNode,
    DimNode,
    FlatNode,
    GroupNode,
    NewNode,
    RevNode,
    RiverKind,
    RiverNode,
    RiverParameters,
    RiverTree,
    RootNode,
    UnaryNode,
    UnionNode,
    child_indices,
)

__all__ = [
    # River
    "RiverKind",
    "RiverParameters",
    "BitsNode",
    "RootNode",
    "DimNode",
    "NewNode",
    "FlatNode",
    "RevNode",
    "GroupNode",
    "UnionNode",
    "UnaryNode",
    "CompositeNode",
    "RiverNode",
    "RiverTree",
    "child_indices",
    # Data
    "Data",
    "EmptyData",
    "PrimData",
    "StructData",
    "TupleData",
    "SeqData",
    "VariantData",
    # Formatting
    "format_river",
    "format_parameters",
    "format_data",
]
