# Copyright 2026 RiverType Contributors
# SPDX-License-Identifier: Apache-2.0

"""Single entry point turning River source text into a DOT graph."""

from rivertype.parser.combinators import DEFAULT_MAX_DEPTH
from rivertype.parser.river import parse
from rivertype.views.dot import RenderOptions, render_dot
from rivertype.views.graph import build_graph

# ###############
# Public Interface
# ###############


def render(source: str, *, options: RenderOptions | None = None, max_depth: int = DEFAULT_MAX_DEPTH) -> str:
    """Parse *source* and return the DOT description of the River type.

    Surrounding whitespace is ignored.

    Args:
        source: A single River type expression.
        options: Presentation settings for the DOT output.
        max_depth: Maximum nesting of River forms.

    Returns:
        The DOT source text.

    Raises:
        ParseError: If *source* is not a well-formed River type.
    """
    tree = parse(source.strip(), max_depth=max_depth)
    return render_dot(build_graph(tree), options)
