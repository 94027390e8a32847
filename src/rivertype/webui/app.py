# Copyright 2026 RiverType Contributors
# SPDX-License-Identifier: Apache-2.0

"""Dash-based playground: type a River expression, see its AST and graph."""

import dash
from dash import Input, Output, dcc, html

from rivertype.config import RiverConfig
from rivertype.model.formatting import format_river
from rivertype.parser import ParseError, parse
from rivertype.views.dot import render_dot
from rivertype.views.graph import build_graph

# ###############
# Public Interface
# ###############

INITIAL_EXPRESSION = "Bits<1>"


def create_app(config: RiverConfig | None = None) -> dash.Dash:
    """Create and configure the RiverType playground application."""
    config = config or RiverConfig()
    app = dash.Dash(
        __name__,
        title="RiverType Playground",
    )
    app.layout = _build_layout()

    @app.callback(
        Output("ast-output", "children"),
        Output("dot-output", "children"),
        Input("expression-input", "value"),
    )
    def _update(expression: str | None) -> tuple[str, str]:
        return evaluate(expression or "", config)

    return app


def evaluate(expression: str, config: RiverConfig | None = None) -> tuple[str, str]:
    """Return the canonical AST text and DOT text for *expression*.

    On a parse error the AST panel shows the error and the DOT panel is empty.
    """
    config = config or RiverConfig()
    try:
        tree = parse(expression.strip(), max_depth=config.max_depth)
    except ParseError as exc:
        return f"Error: {exc}", ""
    return format_river(tree), render_dot(build_graph(tree), config.render)


# ################
# Implementation
# ################


def _build_layout() -> html.Div:
    """Build the application layout."""
    return html.Div(
        [
            html.H1("RiverType Playground"),
            dcc.Textarea(
                id="expression-input",
                value=INITIAL_EXPRESSION,
                style={"width": "100%", "height": "6rem", "fontFamily": "monospace"},
            ),
            html.Hr(),
            html.H3("AST"),
            html.Pre(id="ast-output"),
            html.H3("Graph (DOT)"),
            html.Pre(id="dot-output", style={"color": "#333"}),
        ],
        style={"fontFamily": "sans-serif", "padding": "2rem"},
    )
