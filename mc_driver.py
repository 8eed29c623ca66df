#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass, field
from typing import List, Optional

from mc_ast import ASTRoot, walk
from mc_context import CompilationContext
from mc_diagnostics import Diagnostic, diag_from_error
from mc_lexer import LexerError, Lexer
from mc_logger import log_debug, log_error, log_stage
from mc_parser import Parser, ParseError


@dataclass
class ParseResult:
    """Outcome of parsing one source text: an AST, or the first error."""
    root: Optional[ASTRoot]
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def has_errors(self) -> bool:
        return any(d.kind == "error" for d in self.diagnostics)

    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.kind == "warning"]


class MinCamlDriver:
    """
    Front-end driver:
      - lex and parse one in-memory source text
      - turn the first lexer/parser error into a Diagnostic
      - report lexer warnings alongside

    Reading files is left to the caller.
    """

    def __init__(self, context: CompilationContext | None = None):
        self.context = context or CompilationContext.default()

    def parse_source(self, source: str, filename: Optional[str] = None) -> ParseResult:
        log_stage(self.context, "Parsing", filename)
        lexer = Lexer(source, filename, self.context)
        result = ParseResult(root=None)

        try:
            result.root = Parser(lexer, filename, self.context).parse()
        except (LexerError, ParseError) as e:
            diag = diag_from_error("error", e)
            log_error(self.context, diag.format())
            result.diagnostics.append(diag)

        # warnings come first: they were raised before the error, if any
        warnings = [diag_from_error("warning", w) for w in lexer.warnings]
        result.diagnostics[:0] = warnings

        if result.root is not None:
            count = sum(1 for _ in walk(result.root)) - 1
            log_debug(self.context, f"Parsed {len(result.root.expressions)} top-level expression(s), {count} node(s)")
        return result
