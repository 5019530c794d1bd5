# Copyright (c) PyPTO Contributors.
# This program is free software, you can redistribute it and/or modify it under the terms and conditions of
# CANN Open Software License Agreement Version 2.0 (the "License").
# Please refer to the License for details. You may not use this file except in compliance with the License.
# THIS SOFTWARE IS PROVIDED ON AN "AS IS" BASIS, WITHOUT WARRANTIES OF ANY KIND, EITHER EXPRESS OR IMPLIED,
# INCLUDING BUT NOT LIMITED TO NON-INFRINGEMENT, MERCHANTABILITY, OR FITNESS FOR A PARTICULAR PURPOSE.
# See LICENSE in the root of the software repository for the full text of the License.
# -----------------------------------------------------------------------------------------------------------

"""AST node definitions for tensorlang programs.

Every payload field is wrapped in :class:`~tensorlang.ir.span.Spanned` so the
type checker can report diagnostics against the exact source range a value
came from. Examples of the surface syntax each node is parsed from:

    [2 x 3; 0]        FillTensor (zeros)
    [2 x 3; 1]        FillTensor (ones)
    [0..10]           RangeTensor
    [0..10; 2]        RangeTensor with step
    a * b             Binary(MUL)
    c = a * b;        Assign
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from tensorlang.core import DataType

from .span import Span, Spanned


class BinaryOp(Enum):
    """Binary operators modelled by the AST. The parser only produces MUL."""

    ADD = "+"
    SUB = "-"
    MUL = "*"

    @property
    def token(self) -> str:
        return self.value


@dataclass(frozen=True)
class FillTensor:
    """Tensor of ``shape`` filled with ``fill``."""

    fill: Spanned[int]
    shape: tuple[Spanned[int], ...]
    data_type: Optional[Spanned[DataType]] = None

    def dims(self) -> list[int]:
        return [dim.value for dim in self.shape]


@dataclass(frozen=True)
class RangeTensor:
    """1-D integer tensor over ``[start, stop)`` with an optional step."""

    start: Spanned[int]
    stop: Spanned[int]
    step: Optional[Spanned[int]] = None


@dataclass(frozen=True)
class Variable:
    """Reference to a previously assigned name."""

    name: str


@dataclass(frozen=True)
class Binary:
    lhs: Spanned["Expr"]
    rhs: Spanned["Expr"]
    op: Spanned[BinaryOp]


Expr = Union[FillTensor, RangeTensor, Variable, Binary]


@dataclass(frozen=True)
class ExprStmt:
    """Expression evaluated for emission only."""

    expr: Spanned[Expr]


@dataclass(frozen=True)
class Assign:
    """Binds ``lhs`` to the result of ``rhs`` for the rest of the program."""

    lhs: Spanned[str]
    rhs: Spanned[Expr]


Stmt = Union[ExprStmt, Assign]


@dataclass(frozen=True)
class Program:
    """Ordered statements; order is both evaluation and emission order.

    A parsed program spans the whole input text.
    """

    stmts: tuple[Spanned[Stmt], ...] = ()
    span: Span = field(default_factory=Span.unknown, compare=False)


__all__ = [
    "Assign",
    "Binary",
    "BinaryOp",
    "Expr",
    "ExprStmt",
    "FillTensor",
    "Program",
    "RangeTensor",
    "Stmt",
    "Variable",
]
