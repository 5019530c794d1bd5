# Copyright (c) PyPTO Contributors.
# This program is free software, you can redistribute it and/or modify it under the terms and conditions of
# CANN Open Software License Agreement Version 2.0 (the "License").
# Please refer to the License for details. You may not use this file except in compliance with the License.
# THIS SOFTWARE IS PROVIDED ON AN "AS IS" BASIS, WITHOUT WARRANTIES OF ANY KIND, EITHER EXPRESS OR IMPLIED,
# INCLUDING BUT NOT LIMITED TO NON-INFRINGEMENT, MERCHANTABILITY, OR FITNESS FOR A PARTICULAR PURPOSE.
# See LICENSE in the root of the software repository for the full text of the License.
# -----------------------------------------------------------------------------------------------------------

"""End-to-end compilation: parse, type-check and generate torch code."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from tensorlang.codegen import DEFAULT_DEVICE, TorchCodegen
from tensorlang.ir.nodes import Program
from tensorlang.language.parser import ParserError, parse, render_diagnostic
from tensorlang.language.parser.diagnostics import _attach_source_to_error
from tensorlang.language.type_checker import TypeCheckError, check

logger = logging.getLogger(__name__)


@dataclass
class CompileResult:
    """Artifacts of one compilation.

    Attributes:
        source: Program text that was compiled
        program: Parsed AST
        diagnostics: Type diagnostics, in source order
        tokens: Generated code fragments
        code: Formatted Python module
    """

    source: str
    program: Program
    diagnostics: list[TypeCheckError] = field(default_factory=list)
    tokens: list[str] = field(default_factory=list)
    code: str = ""

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def render_diagnostics(self, filename: str = "<source>") -> str:
        return "\n\n".join(render_diagnostic(diag, self.source, filename) for diag in self.diagnostics)


def compile(source: str, device: str = DEFAULT_DEVICE) -> CompileResult:
    """Compile tensorlang source to a torch program.

    Type diagnostics are returned, not raised, and do not stop code
    generation.

    Args:
        source: Program text
        device: torch device string for every created tensor (default: "cpu")

    Returns:
        CompileResult holding the AST, diagnostics and generated code

    Raises:
        ParserSyntaxError: If the source does not parse
        CodegenError: If the generated code is not valid Python

    Example:
        >>> result = compile("a = [2 x 3; 0]; b = [3 x 4; 1]; a * b;")
        >>> result.ok
        True
        >>> print(result.code)
        import torch
        <BLANKLINE>
        <BLANKLINE>
        def main():
            a = torch.zeros((2, 3), dtype=torch.float32, device='cpu')
            b = torch.ones((3, 4), dtype=torch.float32, device='cpu')
            a * b
        <BLANKLINE>
    """
    program = parse(source)
    diagnostics = check(program)
    if diagnostics:
        logger.info("Found %d type diagnostic(s); generating code anyway", len(diagnostics))

    gen = TorchCodegen(device=device)
    gen.compile_program(program)
    code = gen.render()

    return CompileResult(source, program, diagnostics, gen.tokens(), code)


def compile_file(path: Union[str, Path], device: str = DEFAULT_DEVICE) -> CompileResult:
    """Compile a source file; parse errors carry the file's source for rendering."""
    path = Path(path)
    source = path.read_text(encoding="utf-8")
    try:
        return compile(source, device=device)
    except ParserError as e:
        _attach_source_to_error(e, str(path), source)
        raise


__all__ = ["CompileResult", "compile", "compile_file"]
