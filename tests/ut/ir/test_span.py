# Copyright (c) PyPTO Contributors.
# This program is free software, you can redistribute it and/or modify it under the terms and conditions of
# CANN Open Software License Agreement Version 2.0 (the "License").
# Please refer to the License for details. You may not use this file except in compliance with the License.
# THIS SOFTWARE IS PROVIDED ON AN "AS IS" BASIS, WITHOUT WARRANTIES OF ANY KIND, EITHER EXPRESS OR IMPLIED,
# INCLUDING BUT NOT LIMITED TO NON-INFRINGEMENT, MERCHANTABILITY, OR FITNESS FOR A PARTICULAR PURPOSE.
# See LICENSE in the root of the software repository for the full text of the License.
# -----------------------------------------------------------------------------------------------------------

"""Tests for Span and Spanned."""

import dataclasses

import pytest
from tensorlang.ir import Span, Spanned


class TestSpan:
    """Tests for Span class."""

    def test_span_creation(self):
        span = Span(3, 7)
        assert span.start == 3
        assert span.end == 7
        assert len(span) == 4
        assert str(span) == "3..7"

    def test_span_is_valid(self):
        assert Span(0, 0).is_valid()
        assert Span(2, 5).is_valid()
        assert not Span(5, 2).is_valid()
        assert not Span.unknown().is_valid()

    def test_span_union(self):
        """Test that union covers both spans regardless of order."""
        assert Span(4, 6).union(Span(0, 2)) == Span(0, 6)
        assert Span(0, 2).union(Span(4, 6)) == Span(0, 6)
        assert Span(0, 10).union(Span(2, 3)) == Span(0, 10)

    def test_span_union_with_unknown(self):
        """Test that unknown spans are absorbed by known ones."""
        assert Span.unknown().union(Span(1, 2)) == Span(1, 2)
        assert Span(1, 2).union(Span.unknown()) == Span(1, 2)

    def test_span_immutability(self):
        span = Span(0, 1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            span.start = 5  # type: ignore


class TestSpanned:
    """Tests for the Spanned wrapper."""

    def test_default_span_is_unknown(self):
        assert not Spanned(3).span.is_valid()

    def test_map_preserves_span(self):
        """Test that map transforms the value and keeps the span."""
        wrapped = Spanned("42", Span(10, 12))
        mapped = wrapped.map(int)
        assert mapped.value == 42
        assert mapped.span == Span(10, 12)

    def test_equality_ignores_span(self):
        assert Spanned(1, Span(0, 1)) == Spanned(1, Span(5, 6))
        assert Spanned(1, Span(0, 1)) != Spanned(2, Span(0, 1))

    def test_hashable(self):
        assert hash(Spanned(1, Span(0, 1))) == hash(Spanned(1, Span(4, 5)))


if __name__ == "__main__":
    pytest.main(["-v", __file__])
