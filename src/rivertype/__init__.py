# Copyright 2026 RiverType Contributors
# SPDX-License-Identifier: Apache-2.0

"""RiverType: parse River stream type expressions and render them as graphs."""

from rivertype.parser import ParseError, parse, parse_data
from rivertype.render import render

__all__ = [
    "ParseError",
    "parse",
    "parse_data",
    "render",
]
