# Copyright 2026 RiverType Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parser-combinator toolkit shared by the River and Data grammars.

A parser is any callable ``(state, pos) -> (value, new_pos)``. A parser that
does not match raises :class:`Backtrack` without consuming input, so ordered
alternation can simply try the next branch. The :class:`ParserState` records
the furthest position at which a match failed, together with what was
expected there, which is what :class:`ParseError` finally reports.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import Any

# ###############
# Public Interface
# ###############

DEFAULT_MAX_DEPTH = 64


class ParseError(Exception):
    """Raised when source text does not match the grammar.

    Attributes:
        source: The full input text.
        offset: 0-based offset of the first character that could not be consumed.
        expected: Grammar alternatives attempted at ``offset``, sorted.
    """

    def __init__(self, message: str, source: str, offset: int, expected: tuple[str, ...] = ()) -> None:
        super().__init__(f"Column {offset + 1}: {message}")
        self.source = source
        self.offset = offset
        self.expected = expected

    @property
    def column(self) -> int:
        """1-based column of the failure."""
        return self.offset + 1

    @property
    def remainder(self) -> str:
        """The unconsumed input starting at the failure position."""
        return self.source[self.offset :]


class Backtrack(Exception):
    """Internal signal: the current alternative does not match at ``pos``."""

    def __init__(self, pos: int) -> None:
        super().__init__(pos)
        self.pos = pos


class ParserState:
    """Per-call parser state.

    Attributes:
        text: The input being parsed.
        max_depth: Maximum nesting of composite forms.
        depth: Current nesting of composite forms.
        arena: Append-only node storage for grammars that allocate nodes.
        furthest: Furthest offset at which a primitive failed to match.
        expected: Expectations recorded at ``furthest``.
    """

    def __init__(self, text: str, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.text = text
        self.max_depth = max_depth
        self.depth = 0
        self.arena: list[Any] = []
        self.furthest = 0
        self.expected: set[str] = set()
        self.depth_exceeded_at: int | None = None

    def fail(self, pos: int, expected: str) -> Backtrack:
        """Record an expectation at *pos* and return the signal to raise."""
        if pos > self.furthest:
            self.furthest = pos
            self.expected = {expected}
        elif pos == self.furthest:
            self.expected.add(expected)
        return Backtrack(pos)

    def error(self) -> ParseError:
        """Build the user-facing error for the furthest failure."""
        if self.depth_exceeded_at is not None:
            return ParseError(
                f"Nesting deeper than {self.max_depth} levels",
                self.text,
                self.depth_exceeded_at,
            )
        expected = tuple(sorted(self.expected))
        found = repr(self.text[self.furthest]) if self.furthest < len(self.text) else "end of input"
        if expected:
            message = f"Expected {', '.join(expected)}, got {found}"
        else:
            message = f"Unexpected {found}"
        return ParseError(message, self.text, self.furthest, expected)


Parser = Callable[[ParserState, int], tuple[Any, int]]


def run(parser: Parser, text: str, max_depth: int = DEFAULT_MAX_DEPTH) -> tuple[Any, ParserState]:
    """Apply *parser* to the whole of *text*.

    Returns:
        The parsed value and the final state (whose arena the caller may own).

    Raises:
        ParseError: If *parser* fails or does not consume all of *text*.
    """
    state = ParserState(text, max_depth)
    try:
        value, _ = terminated(parser, end_of_input)(state, 0)
    except (Backtrack, _DepthExceeded):
        raise state.error() from None
    except RecursionError:
        # The interpreter stack ran out before max_depth was reached.
        raise ParseError("Nesting too deep to parse", state.text, state.furthest) from None
    return value, state


# ------------------------------------------------------------------
# Primitive lexical helpers
# ------------------------------------------------------------------


def literal(text: str) -> Parser:
    """Match *text* exactly (case-sensitive)."""

    def parse(state: ParserState, pos: int) -> tuple[str, int]:
        if state.text.startswith(text, pos):
            return text, pos + len(text)
        raise state.fail(pos, repr(text))

    return parse


def char(ch: str) -> Parser:
    """Match the single character *ch*."""
    return literal(ch)


def uint(state: ParserState, pos: int) -> tuple[int, int]:
    """Match one or more ASCII digits and return their integer value."""
    end = pos
    while end < len(state.text) and state.text[end] in _DIGITS:
        end += 1
    if end == pos:
        raise state.fail(pos, "unsigned integer")
    try:
        value = int(state.text[pos:end])
    except ValueError:
        raise state.fail(pos, f"unsigned integer of at most {sys.get_int_max_str_digits()} digits") from None
    return value, end


def space0(state: ParserState, pos: int) -> tuple[str, int]:
    """Skip zero or more spaces or tabs. Never fails."""
    end = pos
    while end < len(state.text) and state.text[end] in _SPACES:
        end += 1
    return state.text[pos:end], end


def end_of_input(state: ParserState, pos: int) -> tuple[None, int]:
    """Succeed only when *pos* is at the end of the input."""
    if pos == len(state.text):
        return None, pos
    raise state.fail(pos, "end of input")


# ------------------------------------------------------------------
# Combinators
# ------------------------------------------------------------------


def seq(*parsers: Parser) -> Parser:
    """Apply *parsers* in order and return the tuple of their values."""

    def parse(state: ParserState, pos: int) -> tuple[tuple[Any, ...], int]:
        values = []
        for parser in parsers:
            value, pos = parser(state, pos)
            values.append(value)
        return tuple(values), pos

    return parse


def alt(*parsers: Parser) -> Parser:
    """Ordered choice: return the first alternative that matches.

    Nodes allocated by a failed alternative are discarded from the arena, so a
    failed branch leaves no trace.
    """

    def parse(state: ParserState, pos: int) -> tuple[Any, int]:
        mark = len(state.arena)
        for parser in parsers:
            try:
                return parser(state, pos)
            except Backtrack:
                del state.arena[mark:]
        raise Backtrack(pos)

    return parse


def opt(parser: Parser) -> Parser:
    """Apply *parser* if it matches, otherwise return None without consuming."""

    def parse(state: ParserState, pos: int) -> tuple[Any, int]:
        mark = len(state.arena)
        try:
            return parser(state, pos)
        except Backtrack:
            del state.arena[mark:]
            return None, pos

    return parse


def preceded(first: Parser, second: Parser) -> Parser:
    """Apply both parsers and keep the value of *second*."""
    return map_(seq(first, second), lambda values: values[1])


def terminated(first: Parser, second: Parser) -> Parser:
    """Apply both parsers and keep the value of *first*."""
    return map_(seq(first, second), lambda values: values[0])


def delimited(open_: Parser, inner: Parser, close: Parser) -> Parser:
    """Apply three parsers and keep the value of the middle one."""
    return map_(seq(open_, inner, close), lambda values: values[1])


def sep_by1(parser: Parser, separator: Parser) -> Parser:
    """Match one or more *parser* occurrences separated by *separator*.

    A trailing separator that is not followed by another item is left
    unconsumed.
    """

    def parse(state: ParserState, pos: int) -> tuple[list[Any], int]:
        first, pos = parser(state, pos)
        items = [first]
        while True:
            mark = len(state.arena)
            try:
                _, next_pos = separator(state, pos)
                item, next_pos = parser(state, next_pos)
            except Backtrack:
                del state.arena[mark:]
                return items, pos
            items.append(item)
            pos = next_pos

    return parse


def map_(parser: Parser, fn: Callable[[Any], Any]) -> Parser:
    """Transform the value of *parser* with *fn*."""

    def parse(state: ParserState, pos: int) -> tuple[Any, int]:
        value, pos = parser(state, pos)
        return fn(value), pos

    return parse


def lazy(factory: Callable[[], Parser]) -> Parser:
    """Defer construction of a parser, allowing recursive grammars."""

    def parse(state: ParserState, pos: int) -> tuple[Any, int]:
        return factory()(state, pos)

    return parse


def nested(parser: Parser) -> Parser:
    """Apply *parser* one nesting level deeper, failing beyond ``max_depth``.

    Place it after the opening delimiter of a form, so that only a form that
    has already been recognised counts towards the bound. Exceeding the bound
    aborts the whole parse; alternation does not catch it.
    """

    def parse(state: ParserState, pos: int) -> tuple[Any, int]:
        if state.depth >= state.max_depth:
            if state.depth_exceeded_at is None:
                state.depth_exceeded_at = pos
            raise _DepthExceeded(pos)
        state.depth += 1
        try:
            return parser(state, pos)
        finally:
            state.depth -= 1

    return parse


def space_opt(parser: Parser) -> Parser:
    """Apply *parser* and skip any whitespace that follows it."""
    return terminated(parser, space0)


def nonempty_comma_list(parser: Parser) -> Parser:
    """Match a non-empty list of *parser* separated by commas.

    Each comma may be followed by optional whitespace.
    """
    return sep_by1(parser, space_opt(char(",")))


def type_form(name: str, inner: Parser) -> Parser:
    """Match ``name<inner>`` and return the value of *inner*."""
    return preceded(literal(name), delimited(char("<"), inner, char(">")))


# ################
# Implementation
# ################

_DIGITS = frozenset("0123456789")
_SPACES = frozenset(" \t")


class _DepthExceeded(Exception):
    """Aborts a parse that nests deeper than the configured bound."""
