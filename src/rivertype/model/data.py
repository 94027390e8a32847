# Copyright 2026 RiverType Contributors
# SPDX-License-Identifier: Apache-2.0

"""High-level data types, a structural description independent of River."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class EmptyData(BaseModel):
    """Empty"""

    model_config = ConfigDict(frozen=True)

    kind: Literal["empty"] = "empty"


class PrimData(BaseModel):
    """Prim<B>: a primitive of ``bits`` bits."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["prim"] = "prim"
    bits: Annotated[int, _Field(ge=0)]


class StructData(BaseModel):
    """Struct<T, U, ...>"""

    model_config = ConfigDict(frozen=True)

    kind: Literal["struct"] = "struct"
    fields: Annotated[tuple[Data, ...], _Field(min_length=1)]


class TupleData(BaseModel):
    """Tuple<T, n>: ``count`` repetitions of ``element``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["tuple"] = "tuple"
    element: Data
    count: Annotated[int, _Field(ge=0)]


class SeqData(BaseModel):
    """Seq<T>"""

    model_config = ConfigDict(frozen=True)

    kind: Literal["seq"] = "seq"
    element: Data


class VariantData(BaseModel):
    """Variant<T, U, ...>"""

    model_config = ConfigDict(frozen=True)

    kind: Literal["variant"] = "variant"
    options: Annotated[tuple[Data, ...], _Field(min_length=1)]


# Any data type. The `kind` discriminator selects the variant.
Data = Annotated[
    EmptyData | PrimData | StructData | TupleData | SeqData | VariantData,
    _Field(discriminator="kind"),
]


# Resolve forward references in self-referential models.
StructData.model_rebuild()
TupleData.model_rebuild()
SeqData.model_rebuild()
VariantData.model_rebuild()
