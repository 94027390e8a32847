# Copyright 2026 RiverType Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the RiverType command-line interface."""

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from rivertype.config import ConfigError, RiverConfig, find_config, load_config
from rivertype.parser import ParseError

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the RiverType CLI."""
    parser = argparse.ArgumentParser(
        prog="rivertype",
        description="RiverType - parse River stream types and render them as graphs",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Path to a configuration file (default: {_CONFIG_HINT} in the current directory, if present)",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # parse subcommand
    parse_parser = subparsers.add_parser(
        "parse",
        help="Parse a type expression and print its AST",
        description="Parse a River (or Data) type expression and print it in canonical form.",
    )
    parse_parser.add_argument("expression", help="The type expression, or '-' to read it from stdin")
    parse_parser.add_argument(
        "--data",
        action="store_true",
        help="Parse a Data type (Prim, Struct, Tuple, Seq, Variant) instead of a River type",
    )
    parse_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the AST as JSON instead of canonical text",
    )

    # dot subcommand
    dot_parser = subparsers.add_parser(
        "dot",
        help="Render a River type as a Graphviz digraph",
        description="Parse a River type expression and print its Graphviz DOT description.",
    )
    dot_parser.add_argument("expression", help="The River type expression, or '-' to read it from stdin")
    dot_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write the DOT text to this file instead of stdout",
    )
    dot_parser.add_argument(
        "--rankdir",
        choices=["TB", "LR", "BT", "RL"],
        default=None,
        help="Layout direction (default: from configuration, otherwise TB)",
    )
    dot_parser.add_argument(
        "--no-clusters",
        action="store_true",
        help="Omit cluster boundaries",
    )

    # serve subcommand
    serve_parser = subparsers.add_parser(
        "serve",
        help="Launch the interactive playground",
        description="Launch a web-based playground showing the AST and graph of a type expression.",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        default=8050,
        help="Port to run the server on (default: 8050)",
    )
    serve_parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host to bind the server to (default: 127.0.0.1)",
    )

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################

_CONFIG_HINT = ".rivertype.yaml"


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    try:
        config = _load_config(args.config)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.command == "parse":
        return _cmd_parse(args, config)
    if args.command == "dot":
        return _cmd_dot(args, config)
    if args.command == "serve":
        return _cmd_serve(args, config)
    return 0


def _load_config(path: str | None) -> RiverConfig:
    """Load the explicit configuration file, or the one in the current directory."""
    if path is not None:
        return load_config(Path(path))
    found = find_config(Path.cwd())
    if found is None:
        return RiverConfig()
    return load_config(found)


def _read_expression(expression: str) -> str:
    """Return the expression argument, reading stdin for '-'."""
    if expression == "-":
        return sys.stdin.read().strip()
    return expression.strip()


def _report_parse_error(exc: ParseError) -> None:
    """Print a parse error with the source line and a caret under the failing column."""
    print(f"Error: {exc}", file=sys.stderr)
    print(f"  {exc.source}", file=sys.stderr)
    print(f"  {' ' * exc.offset}^", file=sys.stderr)


def _cmd_parse(args: argparse.Namespace, config: RiverConfig) -> int:
    """Handle the parse subcommand."""
    from rivertype.model.formatting import format_data, format_river
    from rivertype.parser import parse, parse_data

    source = _read_expression(args.expression)
    try:
        if args.data:
            data = parse_data(source, max_depth=config.max_depth)
            output = _dump_json(data) if args.json else format_data(data)
        else:
            tree = parse(source, max_depth=config.max_depth)
            output = tree.model_dump_json(indent=2) if args.json else format_river(tree)
    except ParseError as exc:
        _report_parse_error(exc)
        return 1

    print(output)
    return 0


def _dump_json(data: object) -> str:
    """Dump a Data value, which is a union of models, as indented JSON."""
    from pydantic import TypeAdapter

    from rivertype.model.data import Data

    return TypeAdapter(Data).dump_json(data, indent=2).decode("utf-8")


def _cmd_dot(args: argparse.Namespace, config: RiverConfig) -> int:
    """Handle the dot subcommand."""
    from rivertype.render import render

    options = config.render
    if args.rankdir is not None:
        options = replace(options, rankdir=args.rankdir)
    if args.no_clusters:
        options = replace(options, clusters=False)

    source = _read_expression(args.expression)
    try:
        dot = render(source, options=options, max_depth=config.max_depth)
    except ParseError as exc:
        _report_parse_error(exc)
        return 1

    if args.output is None:
        print(dot, end="")
        return 0

    output_path = Path(args.output)
    try:
        output_path.write_text(dot, encoding="utf-8")
    except OSError as exc:
        print(f"Error: cannot write '{output_path}': {exc}", file=sys.stderr)
        return 1
    print(f"Wrote graph to '{output_path}'.")
    return 0


def _cmd_serve(args: argparse.Namespace, config: RiverConfig) -> int:
    """Handle the serve subcommand."""
    from rivertype.webui.app import create_app

    print(f"Serving playground at http://{args.host}:{args.port}/")
    app = create_app(config=config)
    app.run(host=args.host, port=args.port, debug=False)
    return 0
