# Copyright 2026 RiverType Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for high-level Data types.

Grammar::

    Data    := Struct | Tuple | Seq | Variant | Prim | Empty
    Struct  := "Struct" "<" Data ("," Data)* ">"
    Tuple   := "Tuple" "<" Data "," UInt ">"
    Seq     := "Seq" "<" Data ">"
    Variant := "Variant" "<" Data ("," Data)* ">"
    Prim    := "Prim" "<" UInt ">"
    Empty   := "Empty"
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
from rivertype.parser.combinators import (
    DEFAULT_MAX_DEPTH,
    Parser,
    ParserState,
    alt,
    char,
    lazy,
    literal,
    map_,
    nested,
    nonempty_comma_list,
    run,
    seq,
    space_opt,
    type_form,
    uint,
)

# ###############
# Public Interface
# ###############


def parse_data(source: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Data:
    """Parse a single Data type expression.

    Raises:
        ParseError: If the input does not match the grammar or is not fully consumed.
    """
    value, _ = run(data_type, source, max_depth)
    return value


def data_type(state: ParserState, pos: int) -> tuple[Data, int]:
    """Parse any Data form."""
    return _data_type(state, pos)


# ################
# Implementation
# ################


_recurse = lazy(lambda: _data_type)

_struct = map_(
    type_form("Struct", nested(nonempty_comma_list(_recurse))),
    lambda fields: StructData(fields=tuple(fields)),
)

_tuple = map_(
    type_form("Tuple", nested(seq(_recurse, space_opt(char(",")), uint))),
    lambda value: TupleData(element=value[0], count=value[2]),
)

_seq = map_(type_form("Seq", nested(_recurse)), lambda element: SeqData(element=element))

_variant = map_(
    type_form("Variant", nested(nonempty_comma_list(_recurse))),
    lambda options: VariantData(options=tuple(options)),
)

_prim = map_(type_form("Prim", uint), lambda bits: PrimData(bits=bits))

_empty = map_(literal("Empty"), lambda _: EmptyData())

_data_type: Parser = alt(_struct, _tuple, _seq, _variant, _prim, _empty)
