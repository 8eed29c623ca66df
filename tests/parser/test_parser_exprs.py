#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from mc_ast import (
    Application, ArrayCreate, ArrayGet, ArrayPut, BinaryOp, BinaryOperator, BoolLiteral, FloatLiteral, If,
    IntLiteral, SingleOp, UnaryOperator, UnitLiteral, Variable,
)
from mc_parser import parse

ADD = BinaryOperator.ADD
SUB = BinaryOperator.SUB
MUL = BinaryOperator.MUL


def test_multiplication_binds_tighter_than_addition(parse_one):
    assert parse_one("1 + 2 * 3") == BinaryOp(ADD, IntLiteral(1), BinaryOp(MUL, IntLiteral(2), IntLiteral(3)))


def test_binary_operators_are_left_associative(parse_one):
    assert parse_one("1 - 2 - 3") == BinaryOp(SUB, BinaryOp(SUB, IntLiteral(1), IntLiteral(2)), IntLiteral(3))


def test_parentheses_override_precedence(parse_one):
    assert parse_one("(1 + 2) * 3") == BinaryOp(MUL, BinaryOp(ADD, IntLiteral(1), IntLiteral(2)), IntLiteral(3))


def test_precedence_levels(parse_one):
    # = (1) < lor (2) < + (3) < * (4) < lsl (6)
    expr = parse_one("a = b lor c + d * e lsl f")
    assert expr == BinaryOp(
        BinaryOperator.EQUAL,
        Variable("a"),
        BinaryOp(
            BinaryOperator.OR,
            Variable("b"),
            BinaryOp(
                ADD,
                Variable("c"),
                BinaryOp(MUL, Variable("d"), BinaryOp(BinaryOperator.SLL, Variable("e"), Variable("f"))),
            ),
        ),
    )


def test_float_operators(parse_one):
    assert parse_one("x +. y *. 2.0") == BinaryOp(
        BinaryOperator.FADD, Variable("x"), BinaryOp(BinaryOperator.FMUL, Variable("y"), FloatLiteral(2.0))
    )


def test_word_operators(parse_one):
    assert parse_one("a land b lxor c") == BinaryOp(
        BinaryOperator.XOR, BinaryOp(BinaryOperator.AND, Variable("a"), Variable("b")), Variable("c")
    )
    assert parse_one("a lsr 2").operator is BinaryOperator.SRL


def test_derived_comparisons(parse_one):
    leq = BinaryOperator.LESS_OR_EQUAL
    assert parse_one("a <= b") == BinaryOp(leq, Variable("a"), Variable("b"))
    assert parse_one("a >= b") == BinaryOp(leq, Variable("b"), Variable("a"))
    assert parse_one("a < b") == SingleOp(UnaryOperator.NOT, BinaryOp(leq, Variable("b"), Variable("a")))
    assert parse_one("a > b") == SingleOp(UnaryOperator.NOT, BinaryOp(leq, Variable("a"), Variable("b")))
    assert parse_one("a <> b") == SingleOp(
        UnaryOperator.NOT, BinaryOp(BinaryOperator.EQUAL, Variable("a"), Variable("b"))
    )


def test_unary_minus_and_binary_minus(parse_one):
    assert parse_one("-x") == SingleOp(UnaryOperator.NEG, Variable("x"))
    assert parse_one("-.x") == SingleOp(UnaryOperator.FNEG, Variable("x"))
    assert parse_one("a - -1") == BinaryOp(SUB, Variable("a"), SingleOp(UnaryOperator.NEG, IntLiteral(1)))
    assert parse_one("a -. b") == BinaryOp(BinaryOperator.FSUB, Variable("a"), Variable("b"))


def test_unary_binds_tighter_than_binary(parse_one):
    assert parse_one("-x + 1") == BinaryOp(ADD, SingleOp(UnaryOperator.NEG, Variable("x")), IntLiteral(1))
    assert parse_one("not a = b") == BinaryOp(
        BinaryOperator.EQUAL, SingleOp(UnaryOperator.NOT, Variable("a")), Variable("b")
    )


def test_unary_minus_applies_to_a_whole_application(parse_one):
    assert parse_one("- f x") == SingleOp(UnaryOperator.NEG, Application(Variable("f"), (Variable("x"),)))


def test_atoms(parse_one):
    assert parse_one("true") == BoolLiteral(True)
    assert parse_one("42") == IntLiteral(42)
    assert parse_one("2.5") == FloatLiteral(2.5)
    assert parse_one("()") == UnitLiteral()
    assert parse_one("x") == Variable("x")
    assert parse_one("((x))") == Variable("x")


def test_application_collects_atoms(parse_one):
    assert parse_one("f 1 2") == Application(Variable("f"), (IntLiteral(1), IntLiteral(2)))
    assert parse_one("f") == Variable("f")


def test_nested_application_needs_parentheses(parse_one):
    assert parse_one("f (g x) y") == Application(
        Variable("f"), (Application(Variable("g"), (Variable("x"),)), Variable("y"))
    )
    assert parse_one("f g x") == Application(Variable("f"), (Variable("g"), Variable("x")))


def test_application_binds_tighter_than_operators(parse_one):
    assert parse_one("f x + g y") == BinaryOp(
        ADD, Application(Variable("f"), (Variable("x"),)), Application(Variable("g"), (Variable("y"),))
    )


def test_array_get_and_put(parse_one):
    assert parse_one("a.(0) <- 1") == ArrayPut(Variable("a"), IntLiteral(0), IntLiteral(1))
    assert parse_one("a.(0)") == ArrayGet(Variable("a"), IntLiteral(0))


def test_array_put_value_takes_a_full_expression(parse_one):
    assert parse_one("a.(i + 1) <- x * 2") == ArrayPut(
        Variable("a"), BinaryOp(ADD, Variable("i"), IntLiteral(1)), BinaryOp(MUL, Variable("x"), IntLiteral(2))
    )


def test_chained_array_get(parse_one):
    assert parse_one("m.(i).(j)") == ArrayGet(ArrayGet(Variable("m"), Variable("i")), Variable("j"))
    assert parse_one("m.(i).(j) <- 0") == ArrayPut(ArrayGet(Variable("m"), Variable("i")), Variable("j"), IntLiteral(0))


def test_array_get_as_argument(parse_one):
    assert parse_one("f a.(0) b") == Application(Variable("f"), (ArrayGet(Variable("a"), IntLiteral(0)), Variable("b")))


def test_array_get_in_arithmetic(parse_one):
    assert parse_one("a.(0) + 1") == BinaryOp(ADD, ArrayGet(Variable("a"), IntLiteral(0)), IntLiteral(1))


def test_array_create(parse_one):
    assert parse_one("Array.make 10 0.0") == ArrayCreate(IntLiteral(10), FloatLiteral(0.0))
    assert parse_one("create_array (n + 1) x") == ArrayCreate(BinaryOp(ADD, Variable("n"), IntLiteral(1)), Variable("x"))


def test_if_then_else(parse_one):
    assert parse_one("if a <= b then 1 else 2 + 3") == If(
        BinaryOp(BinaryOperator.LESS_OR_EQUAL, Variable("a"), Variable("b")),
        IntLiteral(1),
        BinaryOp(ADD, IntLiteral(2), IntLiteral(3)),
    )


def test_if_without_else(parse_one):
    expr = parse_one("if c then print_int 1")
    assert expr == If(Variable("c"), Application(Variable("print_int"), (IntLiteral(1),)), None)
    assert expr.else_body is None


def test_dangling_else_binds_to_inner_if(parse_one):
    expr = parse_one("if a then if b then 1 else 2")
    assert expr == If(Variable("a"), If(Variable("b"), IntLiteral(1), IntLiteral(2)), None)


def test_top_level_sequence_keeps_order():
    root = parse("print_int 1; print_int 2;; x")
    assert root.expressions == (
        Application(Variable("print_int"), (IntLiteral(1),)),
        Application(Variable("print_int"), (IntLiteral(2),)),
        Variable("x"),
    )


def test_empty_source_gives_empty_root():
    root = parse("  (* nothing *)  ")
    assert root.expressions == ()
    assert root.source_range.end.offset == 17


def test_minus_before_float_literal_is_integer_negation(parse_one):
    assert parse_one("-1.5") == SingleOp(UnaryOperator.NEG, FloatLiteral(1.5))
    assert parse_one("-.1.5") == SingleOp(UnaryOperator.FNEG, FloatLiteral(1.5))
