# Copyright 2026 RiverType Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for River stream types.

Grammar (keywords are case-sensitive; whitespace is only allowed after a
separating comma)::

    River  := Union | Rev | Flat | New | Dim | Group | Root | Bits
    Bits   := "Bits" "<" UInt ">"
    Root   := "Root" "<" River ("," Params)? ">"      (same for Dim, New, Flat, Rev)
    Group  := "Group" "<" River ("," River)* ">"      (same for Union)
    Params := UInt ("," UInt?)? ("," UInt?)?

A comma after the child with nothing following it is the same as writing no
parameters at all, so ``Root<Bits<8>,>`` equals ``Root<Bits<8>>``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from rivertype.model.river import (
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
from rivertype.parser.combinators import (
    DEFAULT_MAX_DEPTH,
    Parser,
    ParserState,
    alt,
    char,
    lazy,
    map_,
    nested,
    nonempty_comma_list,
    opt,
    preceded,
    run,
    seq,
    space_opt,
    type_form,
    uint,
)

# ###############
# Public Interface
# ###############


def parse(source: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> RiverTree:
    """Parse a single River type expression into a :class:`RiverTree`.

    Args:
        source: The type expression, e.g. ``"Root<Bits<8>, 1, 2, 3>"``.
        max_depth: Maximum nesting of River forms before the input is rejected.

    Returns:
        The parsed tree. Its arena holds the nodes bottom-up in parse order.

    Raises:
        ParseError: If the input does not match the grammar or is not fully consumed.
    """
    root, state = run(river_type, source, max_depth)
    return RiverTree(nodes=tuple(state.arena), root=root)


def river_parameters(state: ParserState, pos: int) -> tuple[RiverParameters, int]:
    """Parse up to three comma-separated parameters.

    ``elements`` must be written for the later fields to be read; ``complexity``
    and ``userbits`` may each be left empty. Never fails: without a leading
    integer nothing is consumed and all fields are unspecified.
    """
    return _parameters(state, pos)


def river_type(state: ParserState, pos: int) -> tuple[int, int]:
    """Parse any River form and return the arena index of its node."""
    return _river_type(state, pos)


# ################
# Implementation
# ################


def _allocate(parser: Parser, build: Callable[[Any], Any]) -> Parser:
    """Run *parser*, store ``build(value)`` in the arena and return its index."""

    def parse(state: ParserState, pos: int) -> tuple[int, int]:
        value, pos = parser(state, pos)
        state.arena.append(build(value))
        return len(state.arena) - 1, pos

    return parse


_comma = space_opt(char(","))


def _build_parameters(fields: tuple[int, int | None, int | None] | None) -> RiverParameters:
    if fields is None:
        return RiverParameters()
    return RiverParameters(elements=fields[0], complexity=fields[1], userbits=fields[2])


_parameters: Parser = map_(
    opt(
        seq(
            uint,
            opt(preceded(_comma, opt(uint))),
            opt(preceded(_comma, opt(uint))),
        )
    ),
    _build_parameters,
)

_recurse = lazy(lambda: _river_type)


def _unary(name: str, node_cls: type) -> Parser:
    """Build the parser for a single-child form with optional parameters."""
    inner = seq(_recurse, opt(preceded(_comma, _parameters)))
    return _allocate(
        type_form(name, nested(inner)),
        lambda value: node_cls(child=value[0], params=value[1] or RiverParameters()),
    )


def _composite(name: str, node_cls: type) -> Parser:
    """Build the parser for a form taking one or more child types."""
    return _allocate(
        type_form(name, nested(nonempty_comma_list(_recurse))),
        lambda children: node_cls(children=tuple(children)),
    )


_bits = _allocate(type_form("Bits", uint), lambda width: BitsNode(width=width))

_river_type: Parser = alt(
    _composite("Union", UnionNode),
    _unary("Rev", RevNode),
    _unary("Flat", FlatNode),
    _unary("New", NewNode),
    _unary("Dim", DimNode),
    _composite("Group", GroupNode),
    _unary("Root", RootNode),
    _bits,
)
