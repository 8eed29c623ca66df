#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass
from typing import List, Optional

from mc_ast import (
    ASTRoot, Expr, BoolLiteral, IntLiteral, FloatLiteral, UnitLiteral, Variable, SingleOp, BinaryOp, If, Let,
    Argument, LetRec, ArrayGet, ArrayPut, ArrayCreate, Application, UnaryOperator, BinaryOperator,
    BINARY_PRECEDENCE, UNARY_PRECEDENCE)
from mc_context import CompilationContext
from mc_internal_error import InternalCompilerError, ICELocation
from mc_lexer import TokenKind, Token, Lexer
from mc_source import CompilationError, SourceLoc, SourceRange
from mc_types import Type, ArrayType, gen_type, get_primitive_type


# ==========================
# Parser
# ==========================

@dataclass
class ParseError(CompilationError):
    token: Optional[Token] = None


_BINARY_OPERATORS = {op.spelling: op for op in BinaryOperator}

# Comparisons without a node of their own; rewritten with `not`, `=` and `<=`
_DERIVED_COMPARISONS = ("<>", "<", ">", ">=")

_OPERATOR_PRECEDENCE = {spelling: op.precedence for spelling, op in _BINARY_OPERATORS.items()} | {
    spelling: BINARY_PRECEDENCE[BinaryOperator.EQUAL] for spelling in _DERIVED_COMPARISONS
}


class Parser:
    """
    Recursive-descent parser with precedence climbing for binary operators.

    Tokens are pulled from the lexer one at a time: `next_token` is the single
    token of lookahead and `last_token` the one consumed most recently, which
    is where the source range of a finished node ends.
    """

    def __init__(self, lexer: Lexer, filename: Optional[str] = None,
                 context: Optional[CompilationContext] = None) -> None:
        self.lexer = lexer
        self.filename = filename if filename is not None else lexer.filename
        self.context = context
        self.last_token: Optional[Token] = None
        self.next_token: Token = lexer.next_token()

    @classmethod
    def from_source(cls, source: str, filename: Optional[str] = None,
                    context: Optional[CompilationContext] = None) -> "Parser":
        return cls(Lexer(source, filename, context), filename, context)

    # --- token utilities ---

    def _advance(self) -> Token:
        tok = self.next_token
        if tok.kind is not TokenKind.EOF:
            self.last_token = tok
            self.next_token = self.lexer.next_token()
        return tok

    def _check(self, kind: TokenKind) -> bool:
        return self.next_token.kind is kind

    def _match(self, kind: TokenKind) -> bool:
        if self._check(kind):
            self._advance()
            return True
        return False

    def _error(self, message: str, location: SourceLoc, token: Optional[Token] = None) -> ParseError:
        return ParseError(message, location, self.filename, token)

    def _expect(self, kind: TokenKind, msg: str) -> Token:
        if not self._check(kind):
            tok = self.next_token
            raise self._error(f"{msg}, got {tok!r} instead", tok.source_range.start, tok)
        return self._advance()

    def _expect_operator(self, spelling: str, msg: str) -> Token:
        tok = self.next_token
        if tok.kind is not TokenKind.OPERATOR or tok.text != spelling:
            raise self._error(f"{msg}, got {tok!r} instead", tok.source_range.start, tok)
        return self._advance()

    def _start(self) -> SourceLoc:
        return self.next_token.source_range.start

    def _range_from(self, start: SourceLoc) -> SourceRange:
        return SourceRange(start, self.last_token.source_range.end)

    # --- entry point ---

    def parse(self) -> ASTRoot:
        expressions: List[Expr] = []
        while not self._check(TokenKind.EOF):
            # `e1; e2` at the top level: the separator carries no meaning of its own
            if self._match(TokenKind.SEMI):
                continue
            expressions.append(self.parse_expression())
        end = self.next_token.source_range.end
        return ASTRoot(tuple(expressions), source_range=SourceRange(SourceLoc(1, 1, 0), end))

    # --- atoms ---

    def parse_simple_expression(self) -> Optional[Expr]:
        """Parse an atom, or return None without consuming anything."""
        tok = self.next_token

        if tok.kind is TokenKind.LPAREN:
            self._advance()
            if self._match(TokenKind.RPAREN):
                return UnitLiteral(source_range=self._range_from(tok.source_range.start))
            inner = self.parse_expression()
            if not self._check(TokenKind.RPAREN):
                raise self._error(f"[PAR-0010] expected ')', got {self.next_token!r} instead",
                                  tok.source_range.start, tok)
            self._advance()
            return inner

        if tok.kind is TokenKind.BOOL:
            self._advance()
            return BoolLiteral(tok.value, source_range=tok.source_range)
        if tok.kind is TokenKind.INT:
            self._advance()
            return IntLiteral(tok.value, source_range=tok.source_range)
        if tok.kind is TokenKind.FLOAT:
            self._advance()
            return FloatLiteral(tok.value, source_range=tok.source_range)
        if tok.kind is TokenKind.IDENT:
            self._advance()
            return Variable(tok.value, source_range=tok.source_range)
        return None

    def _parse_index_suffix(self, array: Expr, start: SourceLoc) -> Expr:
        # array.(index) possibly repeated, as in a.(i).(j)
        while self._match(TokenKind.DOT):
            lparen = self._expect(TokenKind.LPAREN, "[PAR-0020] expected '(' after '.'")
            index = self.parse_expression()
            if not self._check(TokenKind.RPAREN):
                raise self._error(f"[PAR-0021] expected ')' after array index, got {self.next_token!r} instead",
                                  lparen.source_range.start, lparen)
            self._advance()
            array = ArrayGet(array, index, source_range=self._range_from(start))
        return array

    def _parse_argument(self) -> Optional[Expr]:
        start = self._start()
        atom = self.parse_simple_expression()
        if atom is not None and self._check(TokenKind.DOT):
            atom = self._parse_index_suffix(atom, start)
        return atom

    # --- expressions with precedence ---

    def parse_expression(self, min_precedence: int = 0) -> Expr:
        start = self._start()
        atom = self.parse_simple_expression()

        if atom is None:
            lhs = self._parse_compound_expression(start)
        elif self._check(TokenKind.DOT):
            # the index syntax is tried before application
            lhs = self._parse_index_suffix(atom, start)
            if self._match(TokenKind.LESS_MINUS):
                value = self.parse_expression()
                lhs = ArrayPut(lhs.array, lhs.index, value, source_range=self._range_from(start))
        else:
            args: List[Expr] = []
            while True:
                arg = self._parse_argument()
                if arg is None:
                    break
                args.append(arg)
            if args:
                lhs = Application(atom, tuple(args), source_range=self._range_from(start))
            else:
                lhs = atom

        return self._parse_binary_continuation(lhs, start, min_precedence)

    def _parse_binary_continuation(self, lhs: Expr, start: SourceLoc, min_precedence: int) -> Expr:
        while self._check(TokenKind.OPERATOR):
            spelling = self.next_token.text
            precedence = _OPERATOR_PRECEDENCE.get(spelling)
            if precedence is None or precedence < min_precedence:
                break
            self._advance()
            # left-associative: the right operand only takes tighter operators
            rhs = self.parse_expression(precedence + 1)
            lhs = self._make_binary(spelling, lhs, rhs, self._range_from(start))
        return lhs

    def _make_binary(self, spelling: str, lhs: Expr, rhs: Expr, source_range: SourceRange) -> Expr:
        op = _BINARY_OPERATORS.get(spelling)
        if op is not None:
            return BinaryOp(op, lhs, rhs, source_range=source_range)
        if spelling == "<>":
            inner = BinaryOp(BinaryOperator.EQUAL, lhs, rhs, source_range=source_range)
            return SingleOp(UnaryOperator.NOT, inner, source_range=source_range)
        if spelling == ">=":
            return BinaryOp(BinaryOperator.LESS_OR_EQUAL, rhs, lhs, source_range=source_range)
        if spelling == "<":
            inner = BinaryOp(BinaryOperator.LESS_OR_EQUAL, rhs, lhs, source_range=source_range)
            return SingleOp(UnaryOperator.NOT, inner, source_range=source_range)
        if spelling == ">":
            inner = BinaryOp(BinaryOperator.LESS_OR_EQUAL, lhs, rhs, source_range=source_range)
            return SingleOp(UnaryOperator.NOT, inner, source_range=source_range)
        raise InternalCompilerError(f"[ICE-0020] operator '{spelling}' has a precedence but no node",
                                    ICELocation(self.filename, source_range))

    def _parse_compound_expression(self, start: SourceLoc) -> Expr:
        tok = self.next_token

        if tok.kind is TokenKind.NOT:
            return self._parse_unary(UnaryOperator.NOT, start)
        # `-1.5` is integer negation of a float; float literals need `-.`
        if tok.kind is TokenKind.OPERATOR and tok.text == "-":
            return self._parse_unary(UnaryOperator.NEG, start)
        if tok.kind is TokenKind.OPERATOR and tok.text == "-.":
            return self._parse_unary(UnaryOperator.FNEG, start)
        if tok.kind is TokenKind.IF:
            return self._parse_if(start)
        if tok.kind is TokenKind.LET:
            return self._parse_let(start)
        if tok.kind is TokenKind.ARRAY_CREATE:
            return self._parse_array_create(start)
        if tok.kind is TokenKind.EOF:
            raise self._error("[PAR-0070] unexpected end of input", tok.source_range.start, tok)
        raise self._error(f"[PAR-0071] unexpected token {tok!r}", tok.source_range.start, tok)

    def _parse_unary(self, op: UnaryOperator, start: SourceLoc) -> Expr:
        self._advance()
        operand = self.parse_expression(UNARY_PRECEDENCE)
        return SingleOp(op, operand, source_range=self._range_from(start))

    def _parse_if(self, start: SourceLoc) -> If:
        if_tok = self._advance()
        condition = self.parse_expression()
        self._expect(TokenKind.THEN, "[PAR-0030] expected 'then' after condition")
        then_body = self.parse_expression()
        else_body = None
        else_range = None
        if self._check(TokenKind.ELSE):
            else_range = self._advance().source_range
            else_body = self.parse_expression()
        return If(condition, then_body, else_body, source_range=self._range_from(start),
                  if_range=if_tok.source_range, else_range=else_range)

    def _parse_let(self, start: SourceLoc) -> Expr:
        # Without `in`, the binding implicitly ends the enclosing sequence and
        # stands as a top-level expression of its own (next_body is None).
        self._advance()  # let
        if self._match(TokenKind.REC):
            return self._parse_let_rec(start)

        name_tok = self._expect(TokenKind.IDENT, "[PAR-0040] expected variable name after 'let'")
        self._expect_operator("=", "[PAR-0041] expected '=' in let binding")
        body = self.parse_expression()
        next_body = None
        if self._match(TokenKind.IN):
            next_body = self.parse_expression()
        return Let(name_tok.value, gen_type(), body, next_body, source_range=self._range_from(start))

    def _parse_let_rec(self, start: SourceLoc) -> LetRec:
        name_tok = self._expect(TokenKind.IDENT, "[PAR-0050] expected function name after 'let rec'")

        args: List[Argument] = []
        while True:
            arg_start = self._start()
            if self._check(TokenKind.IDENT):
                arg_tok = self._advance()
                args.append(Argument(arg_tok.value, gen_type(), source_range=arg_tok.source_range))
            elif self._match(TokenKind.LPAREN):
                arg_tok = self._expect(TokenKind.IDENT, "[PAR-0051] expected argument name")
                self._expect(TokenKind.COLON, "[PAR-0052] expected ':' after argument name")
                arg_type = self._parse_type()
                self._expect(TokenKind.RPAREN, "[PAR-0053] expected ')' after argument type")
                args.append(Argument(arg_tok.value, arg_type, source_range=self._range_from(arg_start)))
            else:
                break
        if not args:
            tok = self.next_token
            raise self._error(f"[PAR-0054] function '{name_tok.text}' needs at least one argument",
                              tok.source_range.start, tok)

        return_type: Type = gen_type()
        if self._match(TokenKind.COLON):
            return_type = self._parse_type()
        self._expect_operator("=", "[PAR-0055] expected '=' after function arguments")

        body = self.parse_expression()
        next_body = None
        if self._match(TokenKind.IN):
            next_body = self.parse_expression()
        return LetRec(name_tok.value, return_type, tuple(args), body, next_body,
                      source_range=self._range_from(start))

    def _parse_array_create(self, start: SourceLoc) -> ArrayCreate:
        keyword = self._advance()
        size = self._parse_argument()
        if size is None:
            raise self._error(f"[PAR-0080] expected array size after '{keyword.text}'",
                              self.next_token.source_range.start, self.next_token)
        initial = self._parse_argument()
        if initial is None:
            raise self._error("[PAR-0081] expected initial element after array size",
                              self.next_token.source_range.start, self.next_token)
        return ArrayCreate(size, initial, source_range=self._range_from(start))

    # --- types ---

    def _parse_type(self) -> Type:
        name_tok = self._expect(TokenKind.IDENT, "[PAR-0060] expected type name")
        t = get_primitive_type(name_tok.text)
        if t is None:
            raise self._error(f"[PAR-0061] unknown type '{name_tok.text}'", name_tok.source_range.start, name_tok)
        # postfix constructor: `int array array`
        while self._check(TokenKind.IDENT) and self.next_token.text == "array":
            self._advance()
            t = ArrayType(t)
        return t


def parse(source: str, filename: Optional[str] = None, context: Optional[CompilationContext] = None) -> ASTRoot:
    """Parse a whole source text; raises LexerError or ParseError on the first error."""
    return Parser.from_source(source, filename, context).parse()
