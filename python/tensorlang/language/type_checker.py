# Copyright (c) PyPTO Contributors.
# This program is free software, you can redistribute it and/or modify it under the terms and conditions of
# CANN Open Software License Agreement Version 2.0 (the "License").
# Please refer to the License for details. You may not use this file except in compliance with the License.
# THIS SOFTWARE IS PROVIDED ON AN "AS IS" BASIS, WITHOUT WARRANTIES OF ANY KIND, EITHER EXPRESS OR IMPLIED,
# INCLUDING BUT NOT LIMITED TO NON-INFRINGEMENT, MERCHANTABILITY, OR FITNESS FOR A PARTICULAR PURPOSE.
# See LICENSE in the root of the software repository for the full text of the License.
# -----------------------------------------------------------------------------------------------------------

"""Type inference and multiplication diagnostics for tensorlang programs.

The checker walks statements in order, inferring a TensorType or ScalarType
for every expression and recording the type of each assigned name. Problems
are collected as diagnostics in an accumulator list; nothing is raised, and
checking always continues with the next statement.
"""

import logging
import math
from dataclasses import dataclass
from typing import ClassVar, Optional

from tensorlang.core import DEFAULT_FILL_DTYPE, RANGE_DTYPE, DataType
from tensorlang.ir.nodes import (
    Assign,
    Binary,
    BinaryOp,
    Expr,
    ExprStmt,
    FillTensor,
    Program,
    RangeTensor,
    Stmt,
    Variable,
)
from tensorlang.ir.span import Span, Spanned
from tensorlang.ir.type import ScalarType, TensorType, Type

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TypeCheckError:
    """Base class for type diagnostics.

    Subclasses provide a stable ``code``, a ``message`` and labelled spans
    for rendering against the source text.
    """

    code: ClassVar[str] = "type_check::error"

    @property
    def message(self) -> str:
        raise NotImplementedError

    @property
    def labels(self) -> list[tuple[Span, str]]:
        return []

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class IncompatibleDataTypes(TypeCheckError):
    """Operands of a multiplication have different dtypes."""

    code: ClassVar[str] = "type_check::incompatible_data_types"

    lhs: DataType
    rhs: DataType
    lhs_span: Span
    rhs_span: Span

    @property
    def message(self) -> str:
        return f"Data types {self.lhs} and {self.rhs} cannot be combined"

    @property
    def labels(self) -> list[tuple[Span, str]]:
        return [
            (self.lhs_span, "a value of this data type"),
            (self.rhs_span, "cannot be combined with a value of this data type"),
        ]


@dataclass(frozen=True)
class CannotMultiply(TypeCheckError):
    """Tensor shapes are incompatible for matrix multiplication."""

    code: ClassVar[str] = "type_check::cannot_multiply"

    lhs_shape: tuple[int, ...]
    rhs_shape: tuple[int, ...]
    lhs_span: Span
    rhs_span: Span

    @property
    def message(self) -> str:
        return f"Cannot multiply tensor of shape {list(self.lhs_shape)} with tensor of shape {list(self.rhs_shape)}"

    @property
    def labels(self) -> list[tuple[Span, str]]:
        return [
            (self.lhs_span, "this shape"),
            (self.rhs_span, "cannot be multiplied with this shape"),
        ]


@dataclass(frozen=True)
class UnsupportedOperator(TypeCheckError):
    """The checker has no inference rule for this operator yet."""

    code: ClassVar[str] = "type_check::unsupported_operator"

    op: BinaryOp
    span: Span

    @property
    def message(self) -> str:
        return f"Operator '{self.op.token}' is not supported by the type checker yet"

    @property
    def labels(self) -> list[tuple[Span, str]]:
        return [(self.span, "unsupported operator")]


@dataclass(frozen=True)
class SymbolEntry:
    """Type of a bound name and the span of the expression that defined it."""

    type: Type
    span: Span


def _range_length(start: int, stop: int, step: int) -> int:
    """Number of elements in ``[start, stop)``, truncating like integer division."""
    distance = stop - start
    if distance != 0 and (distance < 0) != (step < 0):
        return 0
    return abs(distance) // abs(step)


def infer_mul(
    lhs_ty: Type,
    lhs_span: Span,
    rhs_ty: Type,
    rhs_span: Span,
    diagnostics: list[TypeCheckError],
) -> Optional[Type]:
    """Infer the result type of ``lhs * rhs``.

    Args:
        lhs_ty: Type of the left operand
        lhs_span: Span reported for the left operand
        rhs_ty: Type of the right operand
        rhs_span: Span reported for the right operand
        diagnostics: Accumulator receiving any diagnostic

    Returns:
        Result type, or None if the operands cannot be multiplied
    """
    if isinstance(lhs_ty, TensorType) and isinstance(rhs_ty, TensorType):
        return infer_matmul(lhs_ty, lhs_span, rhs_ty, rhs_span, diagnostics)

    if lhs_ty.dtype != rhs_ty.dtype:
        diagnostics.append(IncompatibleDataTypes(lhs_ty.dtype, rhs_ty.dtype, lhs_span, rhs_span))
        return None

    # Tensor scaled by a scalar keeps the tensor's type
    if isinstance(lhs_ty, TensorType):
        return lhs_ty
    if isinstance(rhs_ty, TensorType):
        return rhs_ty
    return ScalarType(lhs_ty.dtype)


def infer_matmul(
    lhs_ty: TensorType,
    lhs_span: Span,
    rhs_ty: TensorType,
    rhs_span: Span,
    diagnostics: list[TypeCheckError],
) -> Optional[TensorType]:
    """Infer the result type of a (batched) matrix multiplication.

    All axes before the last two are batch axes. Their product must agree
    between operands and becomes the single leading axis of the result:
    ``[2, 3, 4] * [2, 4, 5]`` gives ``[2, 3, 5]`` and ``[2, 3, 4, 5] * [6, 5, 7]``
    is rejected for unequal rank, while ``[2, 3, 4, 5] * [3, 2, 5, 7]`` gives
    ``[6, 4, 7]``.
    """
    if lhs_ty.dtype != rhs_ty.dtype:
        diagnostics.append(IncompatibleDataTypes(lhs_ty.dtype, rhs_ty.dtype, lhs_span, rhs_span))
        return None

    lhs_shape, rhs_shape = lhs_ty.shape, rhs_ty.shape

    def cannot_multiply() -> None:
        diagnostics.append(CannotMultiply(lhs_shape, rhs_shape, lhs_span, rhs_span))

    if len(lhs_shape) < 2 or len(lhs_shape) != len(rhs_shape):
        cannot_multiply()
        return None

    rank = len(lhs_shape)
    lhs_k = lhs_shape[rank - 1]
    rhs_k = rhs_shape[rank - 2]
    lhs_batch = math.prod(lhs_shape[: rank - 2])
    rhs_batch = math.prod(rhs_shape[: rank - 2])

    if lhs_k != rhs_k or lhs_batch != rhs_batch:
        cannot_multiply()
        return None

    return TensorType([lhs_batch, lhs_shape[rank - 2], rhs_shape[rank - 1]], lhs_ty.dtype)


class TypeChecker:
    """Single-pass type inference over a program.

    The symbol table maps each assigned name to its type and the span of the
    defining expression. Entries are overwritten by later assignments and
    never removed.

    Example:
        >>> program = parse("a = [2 x 3; 0]; b = [3 x 4; 1]; a * b;")
        >>> checker = TypeChecker()
        >>> diagnostics = checker.check_program(program)
        >>> assert diagnostics == []
        >>> checker.symbols["a"].type
        TensorType(shape=(2, 3), dtype=<DataType.F32: ('f32', 'float32')>)
    """

    def __init__(self):
        self.symbols: dict[str, SymbolEntry] = {}

    def check_program(
        self, program: Program, diagnostics: Optional[list[TypeCheckError]] = None
    ) -> list[TypeCheckError]:
        """Check every statement in order.

        Args:
            program: Parsed program
            diagnostics: Accumulator to append to (a new list by default)

        Returns:
            The accumulator holding all diagnostics found
        """
        if diagnostics is None:
            diagnostics = []
        for stmt in program.stmts:
            self.check_stmt(stmt, diagnostics)
        return diagnostics

    def check_stmt(self, stmt: Spanned[Stmt], diagnostics: list[TypeCheckError]) -> None:
        node = stmt.value
        if isinstance(node, ExprStmt):
            self.check_expr(node.expr, diagnostics)
        elif isinstance(node, Assign):
            rhs_ty = self.check_expr(node.rhs, diagnostics)
            # An untyped right-hand side leaves any earlier binding in place
            if rhs_ty is not None:
                self.symbols[node.lhs.value] = SymbolEntry(rhs_ty, node.rhs.span)
        else:
            raise TypeError(f"Unsupported statement node: {type(node).__name__}")

    def source_span(self, expr: Spanned[Expr]) -> Span:
        """Span to report for an operand.

        Variables are reported where their value was defined, everything else
        where it appears.
        """
        if isinstance(expr.value, Variable):
            entry = self.symbols.get(expr.value.name)
            if entry is not None:
                return entry.span
        return expr.span

    def check_expr(self, expr: Spanned[Expr], diagnostics: list[TypeCheckError]) -> Optional[Type]:
        """Infer the type of an expression.

        Args:
            expr: Spanned expression node
            diagnostics: Accumulator receiving any diagnostic

        Returns:
            The inferred type, or None if it cannot be determined
        """
        node = expr.value

        if isinstance(node, FillTensor):
            dtype = node.data_type.value if node.data_type is not None else DEFAULT_FILL_DTYPE
            return TensorType(node.dims(), dtype)

        if isinstance(node, RangeTensor):
            step = node.step.value if node.step is not None else 1
            if step == 0:
                logger.warning("Range tensor at %s has a zero step; leaving it untyped", expr.span)
                return None
            return TensorType([_range_length(node.start.value, node.stop.value, step)], RANGE_DTYPE)

        if isinstance(node, Variable):
            entry = self.symbols.get(node.name)
            if entry is None:
                # Unbound names are untyped rather than reported
                logger.debug("Reference to unbound variable '%s' at %s", node.name, expr.span)
                return None
            return entry.type

        if isinstance(node, Binary):
            return self._check_binary(expr, diagnostics)

        raise TypeError(f"Unsupported expression node: {type(node).__name__}")

    def _check_binary(self, expr: Spanned[Expr], diagnostics: list[TypeCheckError]) -> Optional[Type]:
        """Infer a left-folded chain ``((a * b) * c) * ...`` without recursing on the left spine."""
        chain: list[Binary] = []
        while isinstance(expr.value, Binary):
            chain.append(expr.value)
            expr = expr.value.lhs

        # The outermost unsupported operator is the only one reported
        for node in chain:
            op = node.op.value
            if op is not BinaryOp.MUL:
                diagnostics.append(UnsupportedOperator(op, node.op.span))
                return None

        ty = self.check_expr(expr, diagnostics)
        for node in reversed(chain):
            if ty is None:
                return None
            rhs_ty = self.check_expr(node.rhs, diagnostics)
            if rhs_ty is None:
                return None
            ty = infer_mul(ty, self.source_span(node.lhs), rhs_ty, self.source_span(node.rhs), diagnostics)
        return ty


def check(program: Program) -> list[TypeCheckError]:
    """Type-check a program and return its diagnostics in source order."""
    diagnostics = TypeChecker().check_program(program)
    logger.debug("Type check produced %d diagnostic(s)", len(diagnostics))
    return diagnostics


__all__ = [
    "CannotMultiply",
    "IncompatibleDataTypes",
    "SymbolEntry",
    "TypeCheckError",
    "TypeChecker",
    "UnsupportedOperator",
    "check",
    "infer_matmul",
    "infer_mul",
]
