# Copyright (c) PyPTO Contributors.
# This program is free software, you can redistribute it and/or modify it under the terms and conditions of
# CANN Open Software License Agreement Version 2.0 (the "License").
# Please refer to the License for details. You may not use this file except in compliance with the License.
# THIS SOFTWARE IS PROVIDED ON AN "AS IS" BASIS, WITHOUT WARRANTIES OF ANY KIND, EITHER EXPRESS OR IMPLIED,
# INCLUDING BUT NOT LIMITED TO NON-INFRINGEMENT, MERCHANTABILITY, OR FITNESS FOR A PARTICULAR PURPOSE.
# See LICENSE in the root of the software repository for the full text of the License.
# -----------------------------------------------------------------------------------------------------------

"""
tensorlang language front end.

This module provides:
- parse / parse_file: source text to spanned AST
- check: type inference and multiplication diagnostics over a parsed program
"""

from .parser import ParserError, ParserSyntaxError, parse, parse_file, render_diagnostic, render_error
from .type_checker import (
    CannotMultiply,
    IncompatibleDataTypes,
    SymbolEntry,
    TypeChecker,
    TypeCheckError,
    UnsupportedOperator,
    check,
)

__all__ = [
    "CannotMultiply",
    "IncompatibleDataTypes",
    "ParserError",
    "ParserSyntaxError",
    "SymbolEntry",
    "TypeCheckError",
    "TypeChecker",
    "UnsupportedOperator",
    "check",
    "parse",
    "parse_file",
    "render_diagnostic",
    "render_error",
]
