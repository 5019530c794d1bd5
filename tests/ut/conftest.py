# Copyright (c) PyPTO Contributors.
# This program is free software, you can redistribute it and/or modify it under the terms and conditions of
# CANN Open Software License Agreement Version 2.0 (the "License").
# Please refer to the License for details. You may not use this file except in compliance with the License.
# THIS SOFTWARE IS PROVIDED ON AN "AS IS" BASIS, WITHOUT WARRANTIES OF ANY KIND, EITHER EXPRESS OR IMPLIED,
# INCLUDING BUT NOT LIMITED TO NON-INFRINGEMENT, MERCHANTABILITY, OR FITNESS FOR A PARTICULAR PURPOSE.
# See LICENSE in the root of the software repository for the full text of the License.
# -----------------------------------------------------------------------------------------------------------

"""Shared fixtures for unit tests."""

import pytest
from tensorlang.ir import FillTensor, RangeTensor, Span, Spanned, Variable


@pytest.fixture
def fill_tensor():
    """Factory for spanned FillTensor nodes built without parsing.

    Usage: ``fill_tensor([2, 3], fill=0, dtype=DataType.F16, span=Span(0, 10))``
    """

    def _make(shape, fill=0, dtype=None, span=None):
        data_type = Spanned(dtype) if dtype is not None else None
        node = FillTensor(Spanned(fill), tuple(Spanned(dim) for dim in shape), data_type)
        return Spanned(node, span if span is not None else Span.unknown())

    return _make


@pytest.fixture
def range_tensor():
    """Factory for spanned RangeTensor nodes built without parsing."""

    def _make(start, stop, step=None, span=None):
        node = RangeTensor(Spanned(start), Spanned(stop), Spanned(step) if step is not None else None)
        return Spanned(node, span if span is not None else Span.unknown())

    return _make


@pytest.fixture
def variable():
    """Factory for spanned Variable nodes."""

    def _make(name, span=None):
        return Spanned(Variable(name), span if span is not None else Span.unknown())

    return _make

