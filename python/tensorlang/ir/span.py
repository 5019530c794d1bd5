# Copyright (c) PyPTO Contributors.
# This program is free software, you can redistribute it and/or modify it under the terms and conditions of
# CANN Open Software License Agreement Version 2.0 (the "License").
# Please refer to the License for details. You may not use this file except in compliance with the License.
# THIS SOFTWARE IS PROVIDED ON AN "AS IS" BASIS, WITHOUT WARRANTIES OF ANY KIND, EITHER EXPRESS OR IMPLIED,
# INCLUDING BUT NOT LIMITED TO NON-INFRINGEMENT, MERCHANTABILITY, OR FITNESS FOR A PARTICULAR PURPOSE.
# See LICENSE in the root of the software repository for the full text of the License.
# -----------------------------------------------------------------------------------------------------------

"""Source spans and the span wrapper attached to every AST payload."""

from dataclasses import dataclass, field
from typing import Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Span:
    """Half-open offset range ``[start, end)`` into the source text.

    Spans are only used to point diagnostics at source locations; they never
    influence semantics.
    """

    start: int
    end: int

    @staticmethod
    def unknown() -> "Span":
        """Span for nodes that were not produced from source text."""
        return Span(-1, -1)

    def is_valid(self) -> bool:
        return 0 <= self.start <= self.end

    def union(self, other: "Span") -> "Span":
        """Smallest span covering both ``self`` and ``other``.

        Unknown spans are absorbed by known ones.
        """
        if not self.is_valid():
            return other
        if not other.is_valid():
            return self
        return Span(min(self.start, other.start), max(self.end, other.end))

    def __len__(self) -> int:
        return max(self.end - self.start, 0)

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"


@dataclass(frozen=True)
class Spanned(Generic[T]):
    """A value paired with the span of source text it came from.

    The span is excluded from equality so that two trees parsed from
    differently formatted text compare equal when their values do.
    """

    value: T
    span: Span = field(default_factory=Span.unknown, compare=False)

    def map(self, fn: Callable[[T], U]) -> "Spanned[U]":
        """Transform the wrapped value, keeping the span."""
        return Spanned(fn(self.value), self.span)

    def __repr__(self) -> str:
        return f"Spanned({self.value!r}, {self.span})"


__all__ = ["Span", "Spanned"]
