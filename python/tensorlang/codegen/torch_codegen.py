# Copyright (c) PyPTO Contributors.
# This program is free software, you can redistribute it and/or modify it under the terms and conditions of
# CANN Open Software License Agreement Version 2.0 (the "License").
# Please refer to the License for details. You may not use this file except in compliance with the License.
# THIS SOFTWARE IS PROVIDED ON AN "AS IS" BASIS, WITHOUT WARRANTIES OF ANY KIND, EITHER EXPRESS OR IMPLIED,
# INCLUDING BUT NOT LIMITED TO NON-INFRINGEMENT, MERCHANTABILITY, OR FITNESS FOR A PARTICULAR PURPOSE.
# See LICENSE in the root of the software repository for the full text of the License.
# -----------------------------------------------------------------------------------------------------------

"""Lower tensorlang programs to PyTorch tensor construction calls.

Lowering is depth-first and produces a flat sequence of Python source
fragments. ``render`` wraps the fragments in a synthetic ``main`` function,
checks that the result parses as Python and pretty-prints it.
"""

import ast
import logging
from collections.abc import Sequence
from typing import Optional

from tensorlang.core import DEFAULT_FILL_DTYPE, RANGE_DTYPE, DataType
from tensorlang.ir.nodes import Assign, Binary, Expr, ExprStmt, FillTensor, Program, RangeTensor, Stmt, Variable
from tensorlang.ir.span import Span, Spanned

logger = logging.getLogger(__name__)

# Device every generated tensor is created on unless configured otherwise
DEFAULT_DEVICE = "cpu"

# Name of the synthetic function wrapping the generated statements
ENTRY_FUNCTION = "main"

STMT_TERMINATOR = ";"


class CodegenError(Exception):
    """Generated code could not be produced or is not valid Python."""

    def __init__(self, message: str, span: Optional[Span] = None, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.span = span
        self.hint = hint

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message}\n  hint: {self.hint}"
        return self.message


class TorchCodegen:
    """Code generator targeting ``torch`` tensor constructors.

    Code generation does not consult type-check results: an ill-typed program
    still lowers to code.

    Usage:
        gen = TorchCodegen(device="cuda")
        gen.compile_program(parse("a = [2 x 3; 0]; a * a;"))
        print(gen.render())
    """

    def __init__(self, device: str = DEFAULT_DEVICE):
        """Initialize the generator.

        Args:
            device: torch device string every tensor is created on
        """
        self.device = device
        self.output: list[str] = []

    @staticmethod
    def compile_data_type(dtype: DataType) -> str:
        return f"torch.{dtype.torch_name}"

    def _placement(self, dtype: DataType) -> str:
        return f"dtype={self.compile_data_type(dtype)}, device={self.device!r}"

    @staticmethod
    def _shape_literal(shape: Sequence[int], span: Span) -> str:
        if not shape:
            raise CodegenError(
                "Cannot emit an empty shape literal", span=span, hint="Give the tensor at least one dimension"
            )
        if len(shape) == 1:
            return f"({shape[0]},)"
        return "(" + ", ".join(str(dim) for dim in shape) + ")"

    def compile_program(self, program: Program) -> None:
        for stmt in program.stmts:
            self.compile_stmt(stmt)

    def compile_stmt(self, stmt: Spanned[Stmt]) -> None:
        node = stmt.value
        if isinstance(node, ExprStmt):
            self.compile_expr(node.expr)
            self.output.append(STMT_TERMINATOR)
        elif isinstance(node, Assign):
            self.output.append(f"{node.lhs.value} =")
            self.compile_expr(node.rhs)
            self.output.append(STMT_TERMINATOR)
        else:
            raise CodegenError(f"Unsupported statement node: {type(node).__name__}", span=stmt.span)

    def compile_expr(self, expr: Spanned[Expr]) -> None:
        node = expr.value

        if isinstance(node, FillTensor):
            dtype = node.data_type.value if node.data_type is not None else DEFAULT_FILL_DTYPE
            shape = self._shape_literal(node.dims(), expr.span)
            fill = node.fill.value
            if fill == 0:
                self.output.append(f"torch.zeros({shape}, {self._placement(dtype)})")
            elif fill == 1:
                self.output.append(f"torch.ones({shape}, {self._placement(dtype)})")
            else:
                self.output.append(f"torch.full({shape}, {fill}, {self._placement(dtype)})")

        elif isinstance(node, RangeTensor):
            bounds = [node.start.value, node.stop.value]
            if node.step is not None:
                bounds.append(node.step.value)
            args = ", ".join(str(bound) for bound in bounds)
            self.output.append(f"torch.arange({args}, {self._placement(RANGE_DTYPE)})")

        elif isinstance(node, Variable):
            self.output.append(node.name)

        elif isinstance(node, Binary):
            # Left-folded chains are emitted with a loop over the left spine
            chain: list[Binary] = []
            while isinstance(expr.value, Binary):
                chain.append(expr.value)
                expr = expr.value.lhs
            self.compile_expr(expr)
            for binary in reversed(chain):
                self.output.append(binary.op.value.token)
                self.compile_expr(binary.rhs)

        else:
            raise CodegenError(f"Unsupported expression node: {type(node).__name__}", span=expr.span)

    def tokens(self) -> list[str]:
        """Fragments emitted so far, in emission order."""
        return list(self.output)

    def render(self) -> str:
        """Wrap the emitted fragments in ``main`` and pretty-print them.

        Returns:
            Python module source that imports torch and defines ``main``

        Raises:
            CodegenError: If the wrapped fragments are not valid Python, or
                nest too deeply for ``ast`` to parse and print
        """
        body = " ".join(self.output) or "pass"
        source = f"def {ENTRY_FUNCTION}(): {body}"
        try:
            tree = ast.parse(source, filename="<tensorlang>")
            code = ast.unparse(tree)
        except SyntaxError as e:
            raise CodegenError(
                f"Generated code is not valid Python: {e.msg}",
                hint="Check that no variable is named after a Python keyword",
            ) from e
        except (RecursionError, MemoryError) as e:
            raise CodegenError(
                "Generated code is too deeply nested to format",
                hint="Split long multiplication chains across several assignments",
            ) from e
        logger.debug("Rendered %d fragment(s)", len(self.output))
        return "import torch\n\n\n" + code + "\n"


def generate(program: Program, device: str = DEFAULT_DEVICE) -> list[str]:
    """Lower a program to a sequence of Python source fragments.

    Args:
        program: Parsed program (type errors do not prevent lowering)
        device: torch device string for every created tensor

    Returns:
        Fragments in emission order, e.g. ``["a =", "torch.zeros(...)", ";"]``
    """
    gen = TorchCodegen(device=device)
    gen.compile_program(program)
    return gen.tokens()


__all__ = ["CodegenError", "DEFAULT_DEVICE", "TorchCodegen", "generate"]
