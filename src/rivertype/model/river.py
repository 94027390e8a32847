# Copyright 2026 RiverType Contributors
# SPDX-License-Identifier: Apache-2.0

"""River stream types: parameters, node variants, and the node arena."""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class RiverKind(Enum):
    """Tags of the River variants. Values are the grammar keywords."""

    BITS = "Bits"
    ROOT = "Root"
    GROUP = "Group"
    DIM = "Dim"
    NEW = "New"
    FLAT = "Flat"
    REV = "Rev"
    UNION = "Union"


DEFAULT_ELEMENTS = 1
DEFAULT_COMPLEXITY = 0
DEFAULT_USERBITS = 0


class RiverParameters(BaseModel):
    """Parameters attached to a single-child River type.

    Each field is ``None`` when it was not written in the source. Defaults are
    only applied by :meth:`resolved` and the ``effective_*`` properties.

    Attributes:
        elements: N, number of elements per handshake.
        complexity: C, complexity level.
        userbits: U, number of user bits.
    """

    model_config = ConfigDict(frozen=True)

    elements: Annotated[int, _Field(ge=0)] | None = None
    complexity: Annotated[int, _Field(ge=0)] | None = None
    userbits: Annotated[int, _Field(ge=0)] | None = None

    @property
    def is_unspecified(self) -> bool:
        """Return True if none of the parameters was written."""
        return self.elements is None and self.complexity is None and self.userbits is None

    @property
    def effective_elements(self) -> int:
        return DEFAULT_ELEMENTS if self.elements is None else self.elements

    @property
    def effective_complexity(self) -> int:
        return DEFAULT_COMPLEXITY if self.complexity is None else self.complexity

    @property
    def effective_userbits(self) -> int:
        return DEFAULT_USERBITS if self.userbits is None else self.userbits

    def resolved(self) -> RiverParameters:
        """Return a copy with every unspecified field set to its default."""
        return RiverParameters(
            elements=self.effective_elements,
            complexity=self.effective_complexity,
            userbits=self.effective_userbits,
        )


class BitsNode(BaseModel):
    """Bits<b>: a leaf carrying ``width`` data bits."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[RiverKind.BITS] = RiverKind.BITS
    width: Annotated[int, _Field(ge=0)]


class RootNode(BaseModel):
    """Root<T, N, C, U>"""

    model_config = ConfigDict(frozen=True)

    kind: Literal[RiverKind.ROOT] = RiverKind.ROOT
    child: int
    params: RiverParameters = RiverParameters()


class DimNode(BaseModel):
    """Dim<T, N, C, U>"""

    model_config = ConfigDict(frozen=True)

    kind: Literal[RiverKind.DIM] = RiverKind.DIM
    child: int
    params: RiverParameters = RiverParameters()


class NewNode(BaseModel):
    """New<T, N, C, U>"""

    model_config = ConfigDict(frozen=True)

    kind: Literal[RiverKind.NEW] = RiverKind.NEW
    child: int
    params: RiverParameters = RiverParameters()


class FlatNode(BaseModel):
    """Flat<T, N, C, U>"""

    model_config = ConfigDict(frozen=True)

    kind: Literal[RiverKind.FLAT] = RiverKind.FLAT
    child: int
    params: RiverParameters = RiverParameters()


class RevNode(BaseModel):
    """Rev<T, N, C, U>"""

    model_config = ConfigDict(frozen=True)

    kind: Literal[RiverKind.REV] = RiverKind.REV
    child: int
    params: RiverParameters = RiverParameters()


class GroupNode(BaseModel):
    """Group<T, U, ...>: fixed positional aggregation of one or more children."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[RiverKind.GROUP] = RiverKind.GROUP
    children: Annotated[tuple[int, ...], _Field(min_length=1)]


class UnionNode(BaseModel):
    """Union<T, U, ...>: alternative aggregation of one or more children."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[RiverKind.UNION] = RiverKind.UNION
    children: Annotated[tuple[int, ...], _Field(min_length=1)]


# Nodes with exactly one child and attached parameters.
UnaryNode = RootNode | DimNode | NewNode | FlatNode | RevNode

# Nodes with an ordered, non-empty list of children and no parameters.
CompositeNode = GroupNode | UnionNode

# Any River node. The `kind` discriminator selects the variant.
RiverNode = Annotated[
    BitsNode | RootNode | DimNode | NewNode | FlatNode | RevNode | GroupNode | UnionNode,
    _Field(discriminator="kind"),
]


def child_indices(node: BitsNode | UnaryNode | CompositeNode) -> tuple[int, ...]:
    """Return the arena indices of the direct children of *node*, in order."""
    if isinstance(node, BitsNode):
        return ()
    if isinstance(node, (RootNode, DimNode, NewNode, FlatNode, RevNode)):
        return (node.child,)
    if isinstance(node, (GroupNode, UnionNode)):
        return node.children
    raise TypeError(f"Not a River node: {node!r}")


class RiverTree(BaseModel):
    """A River AST stored as a flat arena of nodes.

    Nodes are stored bottom-up: every child index is smaller than the index of
    its parent. The arena index of a node is its identity; structurally equal
    subtrees occupy distinct indices.

    Attributes:
        nodes: The node arena.
        root: Index of the root node.
    """

    model_config = ConfigDict(frozen=True)

    nodes: tuple[RiverNode, ...]
    root: int

    @model_validator(mode="after")
    def _check_tree_shape(self) -> RiverTree:
        if not 0 <= self.root < len(self.nodes):
            raise ValueError(f"root index {self.root} is outside the arena")
        parents: dict[int, int] = {}
        for index, node in enumerate(self.nodes):
            for child in child_indices(node):
                if not 0 <= child < index:
                    raise ValueError(f"node {index} references child {child} which is not an earlier node")
                if child in parents:
                    raise ValueError(f"node {child} is shared by nodes {parents[child]} and {index}")
                parents[child] = index
        for index in range(len(self.nodes)):
            if index != self.root and index not in parents:
                raise ValueError(f"node {index} is not reachable from the root")
        if self.root in parents:
            raise ValueError(f"root node {self.root} has a parent")
        return self

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def root_node(self) -> BitsNode | UnaryNode | CompositeNode:
        """The root node."""
        return self.nodes[self.root]

    def node(self, index: int) -> BitsNode | UnaryNode | CompositeNode:
        """Return the node stored at *index*."""
        return self.nodes[index]

    def children(self, index: int) -> tuple[int, ...]:
        """Return the child indices of the node at *index*."""
        return child_indices(self.nodes[index])

    def walk(self) -> Iterator[tuple[int, BitsNode | UnaryNode | CompositeNode]]:
        """Yield ``(index, node)`` pairs in pre-order, children in source order."""
        stack = [self.root]
        while stack:
            index = stack.pop()
            node = self.nodes[index]
            yield index, node
            stack.extend(reversed(child_indices(node)))

    def depth(self) -> int:
        """Return the number of nodes on the longest root-to-leaf path."""
        depths: list[int] = []
        for node in self.nodes:
            children = child_indices(node)
            depths.append(1 + max((depths[c] for c in children), default=0))
        return depths[self.root]
