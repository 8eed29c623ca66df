#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass
from typing import Optional


# ==========================
# Source positions
# ==========================

@dataclass(frozen=True)
class SourceLoc:
    line: int  # starting at 1
    column: int  # starting at 1
    offset: int  # code points consumed since the start of the text

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class SourceRange:
    start: SourceLoc  # inclusive
    end: SourceLoc  # exclusive

    def __post_init__(self) -> None:
        if self.end.offset < self.start.offset:
            raise ValueError(f"source range ends before it starts: {self.start!r} > {self.end!r}")

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"

    @property
    def length(self) -> int:
        return self.end.offset - self.start.offset

    def text_of(self, source: str) -> str:
        return source[self.start.offset:self.end.offset]


# ==========================
# Scanner
# ==========================

class Scanner:
    """
    One-character-lookahead cursor over the source text.

    The scanner never backtracks; callers remember the locations they need
    and build ranges from them.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.length = len(source)
        self.line = 1
        self.column = 1
        self.offset = 0

    @property
    def current_char(self) -> Optional[str]:
        if self.offset >= self.length:
            return None
        return self.source[self.offset]

    @property
    def source_loc(self) -> SourceLoc:
        return SourceLoc(self.line, self.column, self.offset)

    def at_end(self) -> bool:
        return self.offset >= self.length

    def consume_char(self) -> None:
        c = self.current_char
        if c is None:
            return
        self.offset += 1
        if c == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1


# ==========================
# Errors
# ==========================

@dataclass
class CompilationError(Exception):
    """A user-facing failure at a precise source location."""
    message: str
    location: SourceLoc
    filename: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"
