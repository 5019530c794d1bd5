# Copyright (c) PyPTO Contributors.
# This program is free software, you can redistribute it and/or modify it under the terms and conditions of
# CANN Open Software License Agreement Version 2.0 (the "License").
# Please refer to the License for details. You may not use this file except in compliance with the License.
# THIS SOFTWARE IS PROVIDED ON AN "AS IS" BASIS, WITHOUT WARRANTIES OF ANY KIND, EITHER EXPRESS OR IMPLIED,
# INCLUDING BUT NOT LIMITED TO NON-INFRINGEMENT, MERCHANTABILITY, OR FITNESS FOR A PARTICULAR PURPOSE.
# See LICENSE in the root of the software repository for the full text of the License.
# -----------------------------------------------------------------------------------------------------------

"""Print AST nodes back to tensorlang source text."""

from .nodes import Assign, Binary, Expr, ExprStmt, FillTensor, Program, RangeTensor, Stmt, Variable


def print_expr(expr: Expr) -> str:
    """Print an expression in canonical surface syntax.

    Args:
        expr: Expression node

    Returns:
        Source text that parses back to an equal expression
    """
    if isinstance(expr, FillTensor):
        shape = " x ".join(str(dim) for dim in expr.dims())
        return f"[{shape}; {expr.fill.value}]"
    if isinstance(expr, RangeTensor):
        text = f"[{expr.start.value}..{expr.stop.value}"
        if expr.step is not None:
            text += f"; {expr.step.value}"
        return text + "]"
    if isinstance(expr, Variable):
        return expr.name
    if isinstance(expr, Binary):
        chain = []
        while isinstance(expr, Binary):
            chain.append(expr)
            expr = expr.lhs.value
        parts = [print_expr(expr)]
        for binary in reversed(chain):
            parts.append(binary.op.value.token)
            parts.append(print_expr(binary.rhs.value))
        return " ".join(parts)
    raise TypeError(f"Unsupported expression node: {type(expr).__name__}")


def print_stmt(stmt: Stmt) -> str:
    if isinstance(stmt, ExprStmt):
        return f"{print_expr(stmt.expr.value)};"
    if isinstance(stmt, Assign):
        return f"{stmt.lhs.value} = {print_expr(stmt.rhs.value)};"
    raise TypeError(f"Unsupported statement node: {type(stmt).__name__}")


def print_program(program: Program) -> str:
    """Print a whole program, one statement per line."""
    return "".join(print_stmt(stmt.value) + "\n" for stmt in program.stmts)


__all__ = ["print_expr", "print_program", "print_stmt"]
