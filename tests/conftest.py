#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from mc_context import CompilationContext, LogLevel
from mc_driver import MinCamlDriver
from mc_lexer import Lexer, TokenKind
from mc_parser import parse


@pytest.fixture
def lex_kinds():
    """Tokenize a source string and return the token kinds, EOF included."""

    def _lex(src: str) -> list[TokenKind]:
        return [t.kind for t in Lexer.from_source(src).tokenize()]

    return _lex


@pytest.fixture
def parse_one():
    """Parse a source string holding a single top-level expression and return it."""

    def _parse(src: str):
        root = parse(src)
        assert len(root.expressions) == 1, root.expressions
        return root.expressions[0]

    return _parse


@pytest.fixture
def driver() -> MinCamlDriver:
    return MinCamlDriver(CompilationContext(log_level=LogLevel.WARNING))


def has_error_code(diagnostics, code: str) -> bool:
    """Check if any diagnostic contains the given code.

    Args:
        diagnostics: List of Diagnostic objects
        code: Code string like "PAR-0010" or "[PAR-0010]"

    Returns:
        True if any diagnostic message contains the code
    """
    if not code.startswith("["):
        code = f"[{code}]"
    return any(code in d.message for d in diagnostics)
