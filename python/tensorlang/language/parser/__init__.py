# Copyright (c) PyPTO Contributors.
# This program is free software, you can redistribute it and/or modify it under the terms and conditions of
# CANN Open Software License Agreement Version 2.0 (the "License").
# Please refer to the License for details. You may not use this file except in compliance with the License.
# THIS SOFTWARE IS PROVIDED ON AN "AS IS" BASIS, WITHOUT WARRANTIES OF ANY KIND, EITHER EXPRESS OR IMPLIED,
# INCLUDING BUT NOT LIMITED TO NON-INFRINGEMENT, MERCHANTABILITY, OR FITNESS FOR A PARTICULAR PURPOSE.
# See LICENSE in the root of the software repository for the full text of the License.
# -----------------------------------------------------------------------------------------------------------

"""
Parser for tensorlang source text.

This module turns program text into the spanned AST defined in
``tensorlang.ir.nodes`` and provides the errors raised on malformed input.
"""

from .ast_parser import GRAMMAR, parse, parse_file
from .diagnostics import ParserError, ParserSyntaxError, render_diagnostic, render_error

__all__ = [
    "GRAMMAR",
    "ParserError",
    "ParserSyntaxError",
    "parse",
    "parse_file",
    "render_diagnostic",
    "render_error",
]
