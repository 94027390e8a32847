# Copyright 2026 RiverType Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for canonical text formatting of River and Data types."""

import pytest

from rivertype.model.data import EmptyData, PrimData, SeqData, StructData, TupleData, VariantData
from rivertype.model.formatting import format_data, format_parameters, format_river
from rivertype.model.river import RiverParameters
from rivertype.parser import parse, parse_data


class TestFormatParameters:
    @pytest.mark.parametrize(
        ("params", "expected"),
        [
            (RiverParameters(), ""),
            (RiverParameters(elements=1, complexity=2, userbits=3), "1, 2, 3"),
            (RiverParameters(elements=1), "1"),
            (RiverParameters(elements=1, userbits=3), "1, , 3"),
            (RiverParameters(complexity=2), "1, 2"),
        ],
    )
    def test_written_fields_only(self, params: RiverParameters, expected: str) -> None:
        assert format_parameters(params) == expected


class TestFormatRiver:
    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("Bits<8>", "Bits<8>"),
            ("Root<Bits<8>,1,2,3>", "Root<Bits<8>, 1, 2, 3>"),
            ("Root<Bits<8>,>", "Root<Bits<8>>"),
            ("Dim<Bits<8>, 1,,3>", "Dim<Bits<8>, 1, , 3>"),
            ("Group<Bits<3>,Dim<Bits<4>,1,2,3>>", "Group<Bits<3>, Dim<Bits<4>, 1, 2, 3>>"),
            ("Union<New<Bits<1>,2>,Flat<Rev<Bits<2>>>>", "Union<New<Bits<1>, 2>, Flat<Rev<Bits<2>>>>"),
        ],
    )
    def test_canonical_text(self, source: str, expected: str) -> None:
        assert format_river(parse(source)) == expected

    @pytest.mark.parametrize(
        "source",
        [
            "Root<Group<Bits<3>, Dim<Bits<4>,1,2,3>>, 1, 2, 3>",
            "Rev<Union<Bits<1>, New<Bits<2>, 3, ,7>>, 4,,>",
        ],
    )
    def test_output_parses_to_equal_tree(self, source: str) -> None:
        tree = parse(source)
        assert parse(format_river(tree)) == tree


class TestFormatData:
    def test_all_forms(self) -> None:
        data = StructData(
            fields=(
                PrimData(bits=3),
                TupleData(element=PrimData(bits=8), count=4),
                SeqData(element=VariantData(options=(EmptyData(), PrimData(bits=1)))),
            )
        )
        text = format_data(data)
        assert text == "Struct<Prim<3>, Tuple<Prim<8>, 4>, Seq<Variant<Empty, Prim<1>>>>"
        assert parse_data(text) == data
