# Copyright 2026 RiverType Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parsers for River stream types and Data types."""

from rivertype.parser.combinators import DEFAULT_MAX_DEPTH, ParseError
from rivertype.parser.data import parse_data
from rivertype.parser.river import parse

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "ParseError",
    "parse",
    "parse_data",
]
