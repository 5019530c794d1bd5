# Copyright (c) PyPTO Contributors.
# This program is free software, you can redistribute it and/or modify it under the terms and conditions of
# CANN Open Software License Agreement Version 2.0 (the "License").
# Please refer to the License for details. You may not use this file except in compliance with the License.
# THIS SOFTWARE IS PROVIDED ON AN "AS IS" BASIS, WITHOUT WARRANTIES OF ANY KIND, EITHER EXPRESS OR IMPLIED,
# INCLUDING BUT NOT LIMITED TO NON-INFRINGEMENT, MERCHANTABILITY, OR FITNESS FOR A PARTICULAR PURPOSE.
# See LICENSE in the root of the software repository for the full text of the License.
# -----------------------------------------------------------------------------------------------------------

"""Parser errors and plain-text rendering of source diagnostics."""

from typing import Iterable, Optional, Protocol

from tensorlang.ir.span import Span


class ParserError(Exception):
    """Base class for errors raised while turning source text into an AST.

    Attributes:
        message: Human-readable description of the problem
        span: Offending source range, if known
        hint: Optional suggestion for fixing the problem
        source_file: File name attached by the caller for rendering
        source: Full source text attached by the caller for rendering
    """

    code = "parse::error"

    def __init__(self, message: str, span: Optional[Span] = None, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.span = span
        self.hint = hint
        self.source_file: Optional[str] = None
        self.source: Optional[str] = None

    def __str__(self) -> str:
        if self.source is not None:
            return render_error(self, self.source, self.source_file or "<source>")
        if self.hint:
            return f"{self.message}\n  hint: {self.hint}"
        return self.message


class ParserSyntaxError(ParserError):
    """Source text does not match the grammar."""

    code = "parse::syntax"


class _Diagnostic(Protocol):
    code: str

    @property
    def message(self) -> str: ...

    @property
    def labels(self) -> list[tuple[Span, str]]: ...


def _line_col(source: str, offset: int) -> tuple[int, int]:
    """Convert an offset into 1-based (line, column)."""
    offset = max(0, min(offset, len(source)))
    line = source.count("\n", 0, offset) + 1
    line_start = source.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1


def _render_labels(source: str, labels: Iterable[tuple[Span, str]]) -> list[str]:
    known = [(span, text) for span, text in labels if span.is_valid()]
    if not known:
        return []

    lines = source.split("\n")
    last_line = max(_line_col(source, span.start)[0] for span, _ in known)
    gutter = len(str(last_line))
    pad = " " * gutter

    out = [f"{pad} |"]
    for span, text in sorted(known, key=lambda item: item[0].start):
        line_no, col = _line_col(source, span.start)
        line = lines[line_no - 1]
        # Multi-line spans are underlined up to the end of their first line
        width = max(1, min(len(span), len(line) - col + 1))
        out.append(f"{line_no:>{gutter}} | {line}")
        out.append(f"{pad} | {' ' * (col - 1)}{'^' * width} {text}".rstrip())
    return out


def render_diagnostic(diagnostic: _Diagnostic, source: str, filename: str = "<source>") -> str:
    """Render a diagnostic against the source text it was produced from.

    Args:
        diagnostic: Object exposing ``code``, ``message`` and ``labels``
        source: Original source text
        filename: Name shown in the location pointer

    Returns:
        Multi-line, human-readable report
    """
    out = [f"error[{diagnostic.code}]: {diagnostic.message}"]
    labels = diagnostic.labels
    first = next((span for span, _ in labels if span.is_valid()), None)
    if first is not None:
        line, col = _line_col(source, first.start)
        out.append(f"  --> {filename}:{line}:{col}")
    out.extend(_render_labels(source, labels))
    return "\n".join(out)


def render_error(error: ParserError, source: str, filename: str = "<source>") -> str:
    """Render a parser error in the same layout as type diagnostics."""
    out = [f"error[{error.code}]: {error.message}"]
    if error.span is not None and error.span.is_valid():
        line, col = _line_col(source, error.span.start)
        out.append(f"  --> {filename}:{line}:{col}")
        out.extend(_render_labels(source, [(error.span, "here")]))
    if error.hint:
        out.append(f"  hint: {error.hint}")
    return "\n".join(out)


def _attach_source_to_error(error: ParserError, source_file: str, source: str) -> None:
    """Attach source information so ``str(error)`` renders with context."""
    error.source_file = source_file
    error.source = source


__all__ = [
    "ParserError",
    "ParserSyntaxError",
    "render_diagnostic",
    "render_error",
]
