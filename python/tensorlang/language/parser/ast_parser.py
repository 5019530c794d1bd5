# Copyright (c) PyPTO Contributors.
# This program is free software, you can redistribute it and/or modify it under the terms and conditions of
# CANN Open Software License Agreement Version 2.0 (the "License").
# Please refer to the License for details. You may not use this file except in compliance with the License.
# THIS SOFTWARE IS PROVIDED ON AN "AS IS" BASIS, WITHOUT WARRANTIES OF ANY KIND, EITHER EXPRESS OR IMPLIED,
# INCLUDING BUT NOT LIMITED TO NON-INFRINGEMENT, MERCHANTABILITY, OR FITNESS FOR A PARTICULAR PURPOSE.
# See LICENSE in the root of the software repository for the full text of the License.
# -----------------------------------------------------------------------------------------------------------

"""Parse tensorlang source text into a spanned AST."""

import logging
from pathlib import Path
from typing import Union

from lark import Lark, Token, v_args
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, UnexpectedToken, VisitError
from lark.visitors import Transformer_NonRecursive

from tensorlang.ir.nodes import (
    Assign,
    Binary,
    BinaryOp,
    ExprStmt,
    FillTensor,
    Program,
    RangeTensor,
    Variable,
)
from tensorlang.ir.span import Span, Spanned

from .diagnostics import ParserError, ParserSyntaxError, _attach_source_to_error, _line_col

logger = logging.getLogger(__name__)

# Largest value accepted for fill, start, stop and step literals (signed 32-bit)
MAX_INT_LITERAL = 2**31 - 1

# Stop collecting syntax errors after this many
MAX_SYNTAX_ERRORS = 10

GRAMMAR = r"""
program: stmt*

?stmt: assign_stmt
     | expr_stmt

assign_stmt: NAME _EQUAL expr _SEMI
expr_stmt: expr _SEMI

// Multiplication chains fold to the left: a * b * c == (a * b) * c
?expr: atom
     | expr MUL atom -> binary

// Alternatives in priority order: fill_tensor, range_tensor, identifier.
// Both tensor literals open with "[" UINT. The token after that first UINT
// selects the literal: "x" or ";" continue a fill_tensor, ".." continues a
// range_tensor.
?atom: fill_tensor
     | range_tensor
     | NAME -> variable

fill_tensor: _LSQB shape _SEMI UINT _RSQB
shape: UINT (_X UINT)*
range_tensor: _LSQB UINT _DOTDOT UINT (_SEMI UINT)? _RSQB

// "x" is only a keyword inside a shape; the contextual lexer keeps it a
// plain NAME everywhere else.
_X: "x"
_LSQB: "["
_RSQB: "]"
_SEMI: ";"
_DOTDOT: ".."
_EQUAL: "="
MUL: "*"
// No leading zeros: "0" or a digit string starting 1-9
UINT: /0|[1-9][0-9]*/
NAME: /[A-Za-z_][A-Za-z0-9_]*/

%import common.WS
%ignore WS
"""

_TOKEN_DESCRIPTIONS = {
    "_X": "'x'",
    "_LSQB": "'['",
    "_RSQB": "']'",
    "_SEMI": "';'",
    "_DOTDOT": "'..'",
    "_EQUAL": "'='",
    "MUL": "'*'",
    "UINT": "integer",
    "NAME": "identifier",
    "$END": "end of input",
}

_PARSER = Lark(
    GRAMMAR,
    parser="lalr",
    start="program",
    propagate_positions=True,
    maybe_placeholders=False,
)


def _token_span(token: Token) -> Span:
    return Span(token.start_pos, token.end_pos)


def _meta_span(meta) -> Span:
    if getattr(meta, "empty", True):
        return Span.unknown()
    return Span(meta.start_pos, meta.end_pos)


def _int_literal(token: Token) -> Spanned[int]:
    """Convert a UINT token holding a signed 32-bit literal."""
    value = int(token)
    span = _token_span(token)
    if value > MAX_INT_LITERAL:
        raise ParserSyntaxError(
            f"Integer literal {value} is out of range",
            span=span,
            hint=f"Literals must not exceed {MAX_INT_LITERAL}",
        )
    return Spanned(value, span)


@v_args(meta=True)
class _AstBuilder(Transformer_NonRecursive):
    """Builds AST nodes bottom-up from the lark parse tree.

    Long multiplication chains produce deep trees, so the walk uses an
    explicit stack rather than recursion.
    """

    def program(self, meta, stmts):
        return tuple(stmts)

    def assign_stmt(self, meta, children):
        name, rhs = children
        return Spanned(Assign(Spanned(str(name), _token_span(name)), rhs), _meta_span(meta))

    def expr_stmt(self, meta, children):
        (expr,) = children
        return Spanned(ExprStmt(expr), _meta_span(meta))

    def binary(self, meta, children):
        lhs, op, rhs = children
        node = Binary(lhs, rhs, Spanned(BinaryOp.MUL, _token_span(op)))
        return Spanned(node, lhs.span.union(rhs.span))

    def variable(self, meta, children):
        (name,) = children
        return Spanned(Variable(str(name)), _token_span(name))

    def shape(self, meta, dims):
        return tuple(Spanned(int(dim), _token_span(dim)) for dim in dims)

    def fill_tensor(self, meta, children):
        shape, fill = children
        node = FillTensor(fill=_int_literal(fill), shape=shape, data_type=None)
        return Spanned(node, _meta_span(meta))

    def range_tensor(self, meta, children):
        start, stop, *rest = children
        step = _int_literal(rest[0]) if rest else None
        node = RangeTensor(start=_int_literal(start), stop=_int_literal(stop), step=step)
        return Spanned(node, _meta_span(meta))


_BUILDER = _AstBuilder()


def _describe_expected(expected) -> str:
    names = sorted({_TOKEN_DESCRIPTIONS.get(name, name) for name in expected})
    return ", ".join(names)


def _to_syntax_error(error: UnexpectedInput, source: str) -> ParserSyntaxError:
    """Translate a lark error into a ParserSyntaxError with a span and hint."""
    pos = error.pos_in_stream if error.pos_in_stream is not None else len(source)

    if isinstance(error, UnexpectedCharacters):
        message = f"unexpected character {error.char!r}"
        span = Span(pos, pos + 1)
        expected = error.allowed or set()
    elif isinstance(error, UnexpectedToken):
        token = error.token
        if token.type == "$END":
            message = "unexpected end of input"
            span = Span(len(source), len(source))
        else:
            message = f"unexpected token {str(token)!r}"
            span = Span(pos, pos + len(token))
        expected = error.expected
    else:
        message = str(error)
        span = Span(pos, pos)
        expected = getattr(error, "expected", None) or set()

    line, column = _line_col(source, span.start)
    hint = f"expected one of: {_describe_expected(expected)}" if expected else None
    return ParserSyntaxError(f"{message} at {line}:{column}", span=span, hint=hint)


def parse(source: str) -> Program:
    """Parse tensorlang source text.

    Parsing is all-or-nothing: any grammar violation aborts the parse and
    no partial program is returned. Every syntax error found while scanning
    the input is reported in a single exception.

    Args:
        source: Program text

    Returns:
        The parsed Program; its statements and expressions carry spans into
        ``source``

    Raises:
        ParserSyntaxError: If the text does not match the grammar
    """
    errors: list[UnexpectedInput] = []

    def on_error(error: UnexpectedInput) -> bool:
        errors.append(error)
        return len(errors) < MAX_SYNTAX_ERRORS

    try:
        tree = _PARSER.parse(source, on_error=on_error)
    except UnexpectedInput as e:
        if not errors or errors[-1] is not e:
            errors.append(e)

    if errors:
        # Recovery may report the same position twice
        unique = {}
        for error in errors:
            detail = _to_syntax_error(error, source)
            unique.setdefault((detail.message, detail.span), detail)
        details = list(unique.values())
        logger.debug("Parse failed with %d error(s)", len(details))
        first = details[0]
        message = "failed to parse: " + "\n".join(detail.message for detail in details)
        raise ParserSyntaxError(message, span=first.span, hint=first.hint)

    try:
        stmts = _BUILDER.transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, ParserError):
            raise e.orig_exc from None
        raise

    program = Program(stmts, Span(0, len(source)))
    logger.debug("Parsed %d statement(s)", len(program.stmts))
    return program


def parse_file(path: Union[str, Path]) -> Program:
    """Read and parse a source file.

    Errors raised while parsing have the file's source attached, so that
    ``str(error)`` renders the offending line.

    Args:
        path: Path to a tensorlang source file

    Returns:
        The parsed Program
    """
    path = Path(path)
    source = path.read_text(encoding="utf-8")
    try:
        return parse(source)
    except ParserError as e:
        _attach_source_to_error(e, str(path), source)
        raise


__all__ = ["GRAMMAR", "parse", "parse_file"]
