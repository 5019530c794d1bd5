# Copyright (c) PyPTO Contributors.
# This program is free software, you can redistribute it and/or modify it under the terms and conditions of
# CANN Open Software License Agreement Version 2.0 (the "License").
# Please refer to the License for details. You may not use this file except in compliance with the License.
# THIS SOFTWARE IS PROVIDED ON AN "AS IS" BASIS, WITHOUT WARRANTIES OF ANY KIND, EITHER EXPRESS OR IMPLIED,
# INCLUDING BUT NOT LIMITED TO NON-INFRINGEMENT, MERCHANTABILITY, OR FITNESS FOR A PARTICULAR PURPOSE.
# See LICENSE in the root of the software repository for the full text of the License.
# -----------------------------------------------------------------------------------------------------------

"""
tensorlang IR module.

This module provides:
- Span and Spanned, the source-location wrapper carried by every node
- AST nodes produced by the parser
- TensorType and ScalarType inferred by the type checker
- A printer turning AST nodes back into source text
"""

from .nodes import (
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
from .printer import print_expr, print_program, print_stmt
from .span import Span, Spanned
from .type import ScalarType, TensorType, Type

__all__ = [
    "Assign",
    "Binary",
    "BinaryOp",
    "Expr",
    "ExprStmt",
    "FillTensor",
    "Program",
    "RangeTensor",
    "ScalarType",
    "Span",
    "Spanned",
    "Stmt",
    "TensorType",
    "Type",
    "Variable",
    "print_expr",
    "print_program",
    "print_stmt",
]  # fmt: skip
