#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, List, Optional, Union

from mc_context import CompilationContext
from mc_logger import log_warning
from mc_source import CompilationError, Scanner, SourceLoc, SourceRange


# ==========================
# Tokens and lexer
# ==========================

class TokenKind(Enum):
    # Special
    EOF = auto()
    COMMENT = auto()  # (* ... *), never handed to the parser

    IDENT = auto()  # identifier, e.g. x, print_int, Array.length
    BOOL = auto()  # true, false
    INT = auto()  # integer literal, e.g. 42
    FLOAT = auto()  # float literal, e.g. 3.14, 1e10, 10.

    # Keywords
    IF = auto()
    THEN = auto()
    ELSE = auto()
    LET = auto()
    IN = auto()
    REC = auto()
    FUN = auto()
    NOT = auto()
    ARRAY_CREATE = auto()  # create_array, Array.create, Array.make
    INPUT = auto()
    OUTPUT = auto()

    # Punctuation
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    COMMA = auto()  # ,
    DOT = auto()  # .
    SEMI = auto()  # ;
    COLON = auto()  # :
    ARROW = auto()  # ->
    LESS_MINUS = auto()  # <-

    OPERATOR = auto()  # + - * / +. -. *. /. = <> <= >= < > lxor lor land lsl lsr


KEYWORDS = {
    "if": TokenKind.IF,
    "then": TokenKind.THEN,
    "else": TokenKind.ELSE,
    "let": TokenKind.LET,
    "in": TokenKind.IN,
    "rec": TokenKind.REC,
    "fun": TokenKind.FUN,
    "not": TokenKind.NOT,
    "true": TokenKind.BOOL,
    "false": TokenKind.BOOL,
    "input": TokenKind.INPUT,
    "output": TokenKind.OUTPUT,
    "create_array": TokenKind.ARRAY_CREATE,
    "Array.create": TokenKind.ARRAY_CREATE,
    "Array.make": TokenKind.ARRAY_CREATE,
    "lxor": TokenKind.OPERATOR,
    "lor": TokenKind.OPERATOR,
    "land": TokenKind.OPERATOR,
    "lsl": TokenKind.OPERATOR,
    "lsr": TokenKind.OPERATOR,
}

PUNCTUATION = {
    ")": TokenKind.RPAREN,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    ";": TokenKind.SEMI,
    ":": TokenKind.COLON,
}

# Canonical spelling of tokens whose kind alone determines their text
CANONICAL_SPELLINGS = {
    TokenKind.EOF: "",
    TokenKind.IF: "if",
    TokenKind.THEN: "then",
    TokenKind.ELSE: "else",
    TokenKind.LET: "let",
    TokenKind.IN: "in",
    TokenKind.REC: "rec",
    TokenKind.FUN: "fun",
    TokenKind.NOT: "not",
    TokenKind.ARRAY_CREATE: "Array.make",
    TokenKind.INPUT: "input",
    TokenKind.OUTPUT: "output",
    TokenKind.LPAREN: "(",
    TokenKind.RPAREN: ")",
    TokenKind.COMMA: ",",
    TokenKind.DOT: ".",
    TokenKind.SEMI: ";",
    TokenKind.COLON: ":",
    TokenKind.ARROW: "->",
    TokenKind.LESS_MINUS: "<-",
}

WHITESPACE = (" ", "\t", "\n", "\r")
OPERATOR_CHARS = "+-*/=<>"
COMPARISON_OPERATORS = ("=", "<>", "<=", ">=", "<", ">")
ARITHMETIC_OPERATORS = ("+", "-", "*", "/")

# Signed 64-bit machine integers
INT_MAX = 2 ** 63 - 1


@dataclass
class Token:
    kind: TokenKind
    text: str  # exact source spelling
    source_range: SourceRange
    value: Union[bool, int, float, str, None] = field(default=None, compare=False)

    @property
    def canonical_text(self) -> str:
        spelling = CANONICAL_SPELLINGS.get(self.kind)
        if spelling is not None:
            return spelling
        if self.kind is TokenKind.BOOL:
            return "true" if self.value else "false"
        if self.kind is TokenKind.FLOAT:
            return repr(float(self.value))
        if self.kind is TokenKind.INT:
            return str(self.value)
        return self.text

    def __repr__(self) -> str:
        return f"{self.text!r}" if self.kind != TokenKind.EOF else "end-of-file"


@dataclass
class LexerError(CompilationError):
    pass


def _is_alpha(c: str) -> bool:
    return ("a" <= c <= "z") or ("A" <= c <= "Z")


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def _is_identifier_char(c: str) -> bool:
    # '.' is allowed so that builtins such as Array.create lex as one name
    return _is_alpha(c) or _is_digit(c) or c == "_" or c == "."


class Lexer:
    def __init__(self, source: str, filename: Optional[str] = None,
                 context: Optional[CompilationContext] = None) -> None:
        self.scanner = Scanner(source)
        self.filename = filename
        self.context = context
        self.warnings: List[CompilationError] = []
        # Token split off the end of the previous one, handed out next
        self._pending: Optional[Token] = None

    @classmethod
    def from_source(cls, source: str) -> "Lexer":
        return cls(source)

    # --- low-level char utilities ---

    def _range_from(self, start: SourceLoc) -> SourceRange:
        return SourceRange(start, self.scanner.source_loc)

    def _gather_while(self, condition: Callable[[str], bool]) -> str:
        chars: List[str] = []
        c = self.scanner.current_char
        while c is not None and condition(c):
            chars.append(c)
            self.scanner.consume_char()
            c = self.scanner.current_char
        return "".join(chars)

    def _error(self, message: str, location: SourceLoc) -> LexerError:
        return LexerError(message, location, self.filename)

    # --- main API ---

    def tokenize(self) -> List[Token]:
        tokens: List[Token] = []
        while True:
            tok = self.next_token()
            tokens.append(tok)
            if tok.kind is TokenKind.EOF:
                break
        return tokens

    def next_token(self) -> Token:
        """Return the next meaningful token; comments are skipped."""
        while True:
            tok = self.next_raw_token()
            if tok.kind is not TokenKind.COMMENT:
                return tok

    def next_raw_token(self) -> Token:
        if self._pending is not None:
            tok, self._pending = self._pending, None
            return tok

        scanner = self.scanner
        while scanner.current_char in WHITESPACE:
            scanner.consume_char()

        c = scanner.current_char
        start = scanner.source_loc

        if c is None:
            return Token(TokenKind.EOF, "", self._range_from(start))
        if _is_alpha(c):
            return self._lex_identifier()
        if _is_digit(c):
            return self._lex_number()
        if c in OPERATOR_CHARS:
            return self._lex_operator()
        if c == "(":
            return self._lex_comment_or_lparen()
        if c in PUNCTUATION:
            scanner.consume_char()
            return Token(PUNCTUATION[c], c, self._range_from(start))

        # consume first so that the caller can keep lexing past the error
        scanner.consume_char()
        raise self._error(f"[LEX-0010] invalid character {c!r}", start)

    # --- token classes ---

    def _lex_identifier(self) -> Token:
        start = self.scanner.source_loc
        chars: List[str] = []
        dot_loc: Optional[SourceLoc] = None
        c = self.scanner.current_char
        while c is not None and _is_identifier_char(c):
            dot_loc = self.scanner.source_loc if c == "." else None
            chars.append(c)
            self.scanner.consume_char()
            c = self.scanner.current_char
        name = "".join(chars)

        # `a.(i)`: the trailing dot belongs to the array-index syntax
        if dot_loc is not None:
            name = name[:-1]
            if name.endswith("."):
                raise self._error(f"[LEX-0040] identifier '{name}' cannot end with '.'", start)
            self._pending = Token(TokenKind.DOT, ".", SourceRange(dot_loc, self.scanner.source_loc))
            source_range = SourceRange(start, dot_loc)
        else:
            source_range = self._range_from(start)

        kind = KEYWORDS.get(name, TokenKind.IDENT)
        if kind is TokenKind.BOOL:
            return Token(kind, name, source_range, name == "true")
        return Token(kind, name, source_range, name)

    def _lex_number(self) -> Token:
        start = self.scanner.source_loc
        text = self._gather_while(_is_digit)
        is_float = False

        if self.scanner.current_char == ".":
            self.scanner.consume_char()
            text += "." + self._gather_while(_is_digit)
            is_float = True
        if self.scanner.current_char in ("e", "E"):
            text += self.scanner.current_char
            self.scanner.consume_char()
            if self.scanner.current_char in ("+", "-"):
                text += self.scanner.current_char
                self.scanner.consume_char()
            text += self._gather_while(_is_digit)
            is_float = True

        source_range = self._range_from(start)
        if not is_float:
            value = int(text)
            if value > INT_MAX:
                raise self._error(f"[LEX-0030] integer literal '{text}' exceeds 64-bit signed range", start)
            return Token(TokenKind.INT, text, source_range, value)

        try:
            fvalue = float(text)
        except ValueError:
            raise self._error(f"[LEX-0031] invalid float literal '{text}'", start) from None
        if math.isinf(fvalue):
            raise self._error(f"[LEX-0032] float literal '{text}' is out of range", start)
        return Token(TokenKind.FLOAT, text, source_range, fvalue)

    def _lex_operator(self) -> Token:
        start = self.scanner.source_loc
        name = self._gather_while(lambda ch: ch in OPERATOR_CHARS)

        if name == "->":
            return Token(TokenKind.ARROW, name, self._range_from(start))
        if name == "<-":
            return Token(TokenKind.LESS_MINUS, name, self._range_from(start))
        if name in ARITHMETIC_OPERATORS:
            if self.scanner.current_char == ".":
                self.scanner.consume_char()
                name += "."
            return Token(TokenKind.OPERATOR, name, self._range_from(start), name)
        if name in COMPARISON_OPERATORS:
            return Token(TokenKind.OPERATOR, name, self._range_from(start), name)

        raise self._error(f"[LEX-0020] invalid operator '{name}'", start)

    def _lex_comment_or_lparen(self) -> Token:
        scanner = self.scanner
        start = scanner.source_loc
        scanner.consume_char()  # '('
        if scanner.current_char != "*":
            return Token(TokenKind.LPAREN, "(", self._range_from(start))

        scanner.consume_char()  # '*'
        depth = 1
        while depth > 0 and not scanner.at_end():
            c = scanner.current_char
            scanner.consume_char()
            if c == "*" and scanner.current_char == ")":
                scanner.consume_char()
                depth -= 1
            elif c == "(" and scanner.current_char == "*":
                scanner.consume_char()
                depth += 1

        source_range = self._range_from(start)
        if depth > 0:
            warning = LexerError("[LEX-0070] unterminated comment", start, self.filename)
            self.warnings.append(warning)
            log_warning(self.context, f"{self.filename or '<input>'}:{start}: warning: {warning.message}")
        return Token(TokenKind.COMMENT, source_range.text_of(scanner.source), source_range)
