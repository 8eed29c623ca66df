#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import pytest

from mc_lexer import LexerError
from mc_parser import ParseError, Parser, parse
from mc_source import SourceLoc


def parse_error(src: str) -> ParseError:
    with pytest.raises(ParseError) as excinfo:
        parse(src)
    return excinfo.value


def test_missing_closing_paren_is_reported_at_the_opening_paren():
    err = parse_error("(1")
    assert "[PAR-0010]" in err.message
    assert "expected ')'" in err.message
    assert err.location == SourceLoc(1, 1, 0)


def test_missing_closing_paren_deep_in_the_text():
    err = parse_error("let x =\n  f (g 1 in x")
    assert "[PAR-0010]" in err.message
    assert (err.location.line, err.location.column) == (2, 5)


def test_missing_paren_after_index_dot():
    err = parse_error("a. 0")
    assert "[PAR-0020]" in err.message
    assert "expected '('" in err.message


def test_missing_closing_paren_of_index_points_at_its_opening_paren():
    err = parse_error("a.(0 <- 1")
    assert "[PAR-0021]" in err.message
    assert err.location.offset == 2


def test_missing_then():
    err = parse_error("if x 1 else 2")
    assert "[PAR-0030]" in err.message
    assert err.token is not None
    assert err.token.text == "else"


def test_let_needs_a_name_and_an_equal_sign():
    assert "[PAR-0040]" in parse_error("let 1 = 2").message
    assert "[PAR-0041]" in parse_error("let x 2").message


def test_malformed_let_rec_argument_lists():
    assert "[PAR-0050]" in parse_error("let rec (x : int) = x").message
    assert "[PAR-0051]" in parse_error("let rec f () = 1").message
    assert "[PAR-0052]" in parse_error("let rec f (x int) = x").message
    assert "[PAR-0053]" in parse_error("let rec f (x : int = x").message
    assert "[PAR-0054]" in parse_error("let rec f = 1").message
    assert "[PAR-0055]" in parse_error("let rec f x -> x").message


def test_bad_type_annotations():
    assert "[PAR-0060]" in parse_error("let rec f (x : 1) = x").message
    assert "[PAR-0061]" in parse_error("let rec f (x : string) = x").message


def test_unexpected_end_of_input():
    err = parse_error("1 +")
    assert "[PAR-0070]" in err.message
    assert err.location.offset == 3


def test_unexpected_token():
    err = parse_error("x )")
    assert "[PAR-0071]" in err.message
    assert err.location.offset == 2


def test_array_create_needs_two_operands():
    assert "[PAR-0080]" in parse_error("Array.make").message
    assert "[PAR-0081]" in parse_error("Array.make 3").message


def test_lexer_errors_surface_through_the_parser():
    with pytest.raises(LexerError) as excinfo:
        parse("let x = 1 in x # 2")
    assert "[LEX-0010]" in excinfo.value.message
    assert excinfo.value.location.column == 16


def test_parse_error_carries_filename():
    with pytest.raises(ParseError) as excinfo:
        Parser.from_source("(", filename="broken.ml").parse()
    assert excinfo.value.filename == "broken.ml"
