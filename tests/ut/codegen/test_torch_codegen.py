# Copyright (c) PyPTO Contributors.
# This program is free software, you can redistribute it and/or modify it under the terms and conditions of
# CANN Open Software License Agreement Version 2.0 (the "License").
# Please refer to the License for details. You may not use this file except in compliance with the License.
# THIS SOFTWARE IS PROVIDED ON AN "AS IS" BASIS, WITHOUT WARRANTIES OF ANY KIND, EITHER EXPRESS OR IMPLIED,
# INCLUDING BUT NOT LIMITED TO NON-INFRINGEMENT, MERCHANTABILITY, OR FITNESS FOR A PARTICULAR PURPOSE.
# See LICENSE in the root of the software repository for the full text of the License.
# -----------------------------------------------------------------------------------------------------------

"""Unit tests for the torch code generator."""

import pytest
from tensorlang.codegen import CodegenError, TorchCodegen, generate
from tensorlang.core import DataType
from tensorlang.ir import Assign, Binary, BinaryOp, ExprStmt, Program, Spanned
from tensorlang.language import parse


def _program(*exprs):
    return Program(tuple(Spanned(ExprStmt(expr)) for expr in exprs))


class TestFillTensorCodegen:
    """Tests for zero, one and constant fills."""

    def test_zeros(self):
        assert generate(parse("[2 x 3; 0];")) == [
            "torch.zeros((2, 3), dtype=torch.float32, device='cpu')",
            ";",
        ]

    def test_ones(self):
        assert generate(parse("[1 x 5; 1];"))[0] == "torch.ones((1, 5), dtype=torch.float32, device='cpu')"

    def test_full(self):
        assert generate(parse("[2 x 2; 7];"))[0] == "torch.full((2, 2), 7, dtype=torch.float32, device='cpu')"

    def test_rank_one_shape_is_a_tuple(self):
        assert generate(parse("[4; 0];"))[0] == "torch.zeros((4,), dtype=torch.float32, device='cpu')"

    def test_declared_dtype(self, fill_tensor):
        tokens = generate(_program(fill_tensor([3, 3], fill=1, dtype=DataType.BF16)))
        assert tokens[0] == "torch.ones((3, 3), dtype=torch.bfloat16, device='cpu')"

    def test_device(self):
        tokens = generate(parse("[2 x 3; 0];"), device="cuda:1")
        assert tokens[0] == "torch.zeros((2, 3), dtype=torch.float32, device='cuda:1')"

    def test_empty_shape_is_rejected(self, fill_tensor):
        with pytest.raises(CodegenError, match="empty shape"):
            generate(_program(fill_tensor([])))


class TestRangeTensorCodegen:
    """Tests for arange lowering."""

    def test_arange(self):
        assert generate(parse("[0..10];"))[0] == "torch.arange(0, 10, dtype=torch.int64, device='cpu')"

    def test_arange_with_step(self):
        assert generate(parse("[2..20; 2];"))[0] == "torch.arange(2, 20, 2, dtype=torch.int64, device='cpu')"


class TestStatementCodegen:
    """Tests for statements, variables and operators."""

    def test_assign_and_use(self):
        tokens = generate(parse("a = [2 x 3; 0]; a * a;"))
        assert tokens == [
            "a =",
            "torch.zeros((2, 3), dtype=torch.float32, device='cpu')",
            ";",
            "a",
            "*",
            "a",
            ";",
        ]

    def test_binary_is_infix_without_parentheses(self):
        assert generate(parse("a * b * c;")) == ["a", "*", "b", "*", "c", ";"]

    @pytest.mark.parametrize("op, token", [(BinaryOp.ADD, "+"), (BinaryOp.SUB, "-"), (BinaryOp.MUL, "*")])
    def test_operator_tokens(self, op, token, variable):
        program = _program(Binary(variable("x"), variable("y"), Spanned(op)))
        assert generate(program) == ["x", token, "y", ";"]

    def test_ill_typed_program_still_generates(self):
        """Test that code generation ignores type diagnostics."""
        tokens = generate(parse("[0..3] * [2 x 2; 0];"))
        assert tokens[1] == "*"

    def test_long_chain_tokens(self):
        """Test that a 2000 operand chain lowers to a flat token sequence."""
        tokens = generate(parse("a = [2 x 2; 0]; " + " * ".join(["a"] * 2000) + ";"))
        assert len(tokens) == 3 + 2000 + 1999 + 1
        assert tokens[3:8] == ["a", "*", "a", "*", "a"]
        assert tokens[-2:] == ["a", ";"]

    def test_tokens_is_a_copy(self):
        gen = TorchCodegen()
        gen.compile_program(parse("[0..3];"))
        gen.tokens().clear()
        assert len(gen.output) == 2


class TestRender:
    """Tests for wrapping and pretty-printing generated code."""

    def test_render(self):
        gen = TorchCodegen()
        gen.compile_program(parse("a = [2 x 3; 0]; b = [3 x 4; 1]; c = a * b; [0..10; 2];"))
        assert gen.render() == (
            "import torch\n"
            "\n"
            "\n"
            "def main():\n"
            "    a = torch.zeros((2, 3), dtype=torch.float32, device='cpu')\n"
            "    b = torch.ones((3, 4), dtype=torch.float32, device='cpu')\n"
            "    c = a * b\n"
            "    torch.arange(0, 10, 2, dtype=torch.int64, device='cpu')\n"
        )

    def test_render_empty_program(self):
        gen = TorchCodegen()
        gen.compile_program(parse(""))
        assert gen.render() == "import torch\n\n\ndef main():\n    pass\n"

    @pytest.mark.parametrize("name", ["class", "def", "None", "lambda"])
    def test_keyword_identifier_fails(self, name):
        """Test that names colliding with Python keywords are fatal."""
        gen = TorchCodegen()
        gen.compile_program(parse(f"{name} = [2 x 2; 0];"))
        with pytest.raises(CodegenError, match="not valid Python"):
            gen.render()

    def test_too_deeply_nested_fails(self):
        """Test that a chain too deep for the ast module is a codegen error."""
        gen = TorchCodegen()
        gen.compile_program(parse("a = [2 x 2; 0]; " + " * ".join(["a"] * 2000) + ";"))
        with pytest.raises(CodegenError, match="too deeply nested"):
            gen.render()

    def test_assign_node_with_keyword_from_ast(self, fill_tensor):
        program = Program((Spanned(Assign(Spanned("if"), fill_tensor([1]))),))
        gen = TorchCodegen()
        gen.compile_program(program)
        with pytest.raises(CodegenError):
            gen.render()


if __name__ == "__main__":
    pytest.main(["-v", __file__])
