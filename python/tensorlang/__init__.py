# Copyright (c) PyPTO Contributors.
# This program is free software, you can redistribute it and/or modify it under the terms and conditions of
# CANN Open Software License Agreement Version 2.0 (the "License").
# Please refer to the License for details. You may not use this file except in compliance with the License.
# THIS SOFTWARE IS PROVIDED ON AN "AS IS" BASIS, WITHOUT WARRANTIES OF ANY KIND, EITHER EXPRESS OR IMPLIED,
# INCLUDING BUT NOT LIMITED TO NON-INFRINGEMENT, MERCHANTABILITY, OR FITNESS FOR A PARTICULAR PURPOSE.
# See LICENSE in the root of the software repository for the full text of the License.
# -----------------------------------------------------------------------------------------------------------

"""
tensorlang - a small language for declaring tensors, compiled to PyTorch.

This module provides:
- DataType and its convenience constants
- compile / compile_file: the full parse, check and codegen pipeline
- Sub-modules ``ir``, ``language`` and ``codegen`` for each stage

Typical usage:
    import tensorlang

    result = tensorlang.compile("a = [2 x 3; 0]; b = [3 x 4; 1]; a * b;")
    for diagnostic in result.diagnostics:
        print(diagnostic.message)
    print(result.code)
"""

from . import codegen, ir, language
from .codegen import CodegenError
from .compiler import CompileResult, compile, compile_file
from .core import DEFAULT_FILL_DTYPE, RANGE_DTYPE, DataType
from .language import ParserError, ParserSyntaxError, check, parse, parse_file

# Export common DataType values for convenience
F32 = DataType.F32
F64 = DataType.F64
I64 = DataType.I64
U32 = DataType.U32
U8 = DataType.U8
BF16 = DataType.BF16
F16 = DataType.F16

__version__ = "0.1.0"

__all__ = [
    "BF16",
    "CodegenError",
    "CompileResult",
    "DEFAULT_FILL_DTYPE",
    "DataType",
    "F16",
    "F32",
    "F64",
    "I64",
    "ParserError",
    "ParserSyntaxError",
    "RANGE_DTYPE",
    "U32",
    "U8",
    "check",
    "codegen",
    "compile",
    "compile_file",
    "ir",
    "language",
    "parse",
    "parse_file",
]  # fmt: skip
