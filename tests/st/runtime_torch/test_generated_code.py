# Copyright (c) PyPTO Contributors.
# This program is free software, you can redistribute it and/or modify it under the terms and conditions of
# CANN Open Software License Agreement Version 2.0 (the "License").
# Please refer to the License for details. You may not use this file except in compliance with the License.
# THIS SOFTWARE IS PROVIDED ON AN "AS IS" BASIS, WITHOUT WARRANTIES OF ANY KIND, EITHER EXPRESS OR IMPLIED,
# INCLUDING BUT NOT LIMITED TO NON-INFRINGEMENT, MERCHANTABILITY, OR FITNESS FOR A PARTICULAR PURPOSE.
# See LICENSE in the root of the software repository for the full text of the License.
# -----------------------------------------------------------------------------------------------------------

"""
Runtime tests that evaluate generated code with PyTorch.

Each tensor literal is lowered to a single fragment, which is evaluated
against the ``torch`` module and compared with a tensor built directly.
Whole programs are rendered, executed and their ``main`` called.
"""

import pytest
import tensorlang
import torch
from tensorlang.codegen import generate
from tensorlang.ir import ExprStmt, FillTensor, Program, Spanned
from tensorlang.language import parse


def _eval_expr(source: str) -> torch.Tensor:
    fragments = generate(parse(source))
    assert fragments[-1] == ";"
    return eval(" ".join(fragments[:-1]), {"torch": torch})


def _run(code: str) -> dict:
    namespace: dict = {}
    exec(code, namespace)
    namespace["main"]()
    return namespace


class TestFillTensorRuntime:
    """Generated fills produce the expected tensors."""

    @pytest.mark.parametrize(
        "source, expected",
        [
            ("[2 x 3; 0];", torch.zeros(2, 3)),
            ("[4; 1];", torch.ones(4)),
            ("[2 x 2; 7];", torch.full((2, 2), 7.0)),
            ("[1 x 2 x 3; 9];", torch.full((1, 2, 3), 9.0)),
        ],
    )
    def test_fill(self, source, expected):
        actual = _eval_expr(source)
        assert actual.dtype == torch.float32
        assert actual.device.type == "cpu"
        assert torch.equal(actual, expected)

    def test_declared_dtype(self):
        node = FillTensor(Spanned(3), (Spanned(2), Spanned(2)), Spanned(tensorlang.F16))
        fragments = generate(Program((Spanned(ExprStmt(Spanned(node))),)))
        actual = eval(fragments[0], {"torch": torch})
        assert actual.dtype == torch.float16
        assert torch.equal(actual, torch.full((2, 2), 3, dtype=torch.float16))

    @pytest.mark.parametrize("dtype", list(tensorlang.DataType))
    def test_every_dtype_is_a_torch_dtype(self, dtype):
        assert isinstance(getattr(torch, dtype.torch_name), torch.dtype)


class TestRangeTensorRuntime:
    """Generated aranges match the checker's inferred length."""

    @pytest.mark.parametrize(
        "source, expected",
        [
            ("[0..10];", list(range(10))),
            ("[2..20; 2];", list(range(2, 20, 2))),
            ("[3..3];", []),
        ],
    )
    def test_range(self, source, expected):
        actual = _eval_expr(source)
        assert actual.dtype == torch.int64
        assert actual.tolist() == expected

    @pytest.mark.parametrize("source", ["[0..10];", "[2..20; 2];", "[0..9; 3];", "[5..7];"])
    def test_length_matches_checker(self, source):
        program = parse(source)
        checker = tensorlang.language.TypeChecker()
        ty = checker.check_expr(program.stmts[0].value.expr, [])
        assert list(_eval_expr(source).shape) == list(ty.shape)


class TestProgramRuntime:
    """Rendered programs execute."""

    def test_elementwise_program(self):
        result = tensorlang.compile("a = [2 x 3; 2]; b = [2 x 3; 3]; c = a * b; [0..4];")
        namespace = _run(result.code)
        assert "main" in namespace

    def test_device_is_honoured(self):
        result = tensorlang.compile("a = [2; 1]; a * a;", device="meta")
        _run(result.code)

    def test_empty_program(self):
        _run(tensorlang.compile("").code)


if __name__ == "__main__":
    pytest.main(["-v", __file__])
