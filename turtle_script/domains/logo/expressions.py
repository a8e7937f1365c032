"""
Prefix expressions.

The operator always comes first, so ``+ "5 * "2 :x`` is ``5 + (2 * x)``
and no precedence table is needed. Parsing and evaluation are separate:
``parse_expression`` builds a tree from tokens, ``evaluate`` computes its
value against an environment.
"""

import math
import operator
from typing import List, Tuple, Union

from .ast import BinaryOp, Boolean, BoolOp, Expression, Not, Number, Query, Variable
from .errors import DivisionByZero, InvalidOperandType, ParseError
from .tokens import Token, TokenKind

Value = Union[float, bool]

ARITHMETIC = {
    '+': operator.add,
    '-': operator.sub,
    '*': operator.mul,
    '/': operator.truediv,
}
COMPARISONS = {
    'EQ': operator.eq,
    'NE': operator.ne,
    'LT': operator.lt,
    'GT': operator.gt,
}
BOOLEAN_OPERATORS = {
    'AND': lambda a, b: a and b,
    'OR': lambda a, b: a or b,
}
QUERIES = ('XCOR', 'YCOR', 'HEADING', 'COLOR')
NEGATION = 'NOT'

OPERATORS = frozenset(ARITHMETIC) | frozenset(COMPARISONS) | frozenset(BOOLEAN_OPERATORS) | {NEGATION}


def to_number(value: Value) -> float:
    """Numeric view of a value; booleans read as 1.0 and 0.0."""
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    return float(value)


def truthy(value: Value) -> bool:
    if isinstance(value, bool):
        return value
    return value != 0.0


def parse_literal(token: Token) -> Expression:
    if token.text == 'TRUE':
        return Boolean(True)
    elif token.text == 'FALSE':
        return Boolean(False)
    try:
        value = float(token.text)
    except ValueError:
        raise ParseError(f"Cannot parse {token.raw!r} as a number", token)
    if not math.isfinite(value):
        raise ParseError(f"{token.raw!r} is not a finite number", token)
    return Number(value)


def parse_expression(tokens: List[Token], pos: int) -> Tuple[Expression, int]:
    """Parses one expression starting at ``pos``; returns it with the position after it."""
    if pos >= len(tokens):
        raise ParseError("Expected an expression")

    token = tokens[pos]
    if token.kind is TokenKind.QUOTED:
        return parse_literal(token), pos + 1
    elif token.kind is TokenKind.VARIABLE:
        return Variable(token.text), pos + 1
    elif token.kind is TokenKind.WORD:
        if token.text in QUERIES:
            return Query(token.text), pos + 1

        if token.text == NEGATION:
            operand, pos = parse_expression(tokens, pos + 1)
            return Not(operand), pos

        if token.text in OPERATORS:
            left, pos = parse_expression(tokens, pos + 1)
            right, pos = parse_expression(tokens, pos)
            if token.text in BOOLEAN_OPERATORS:
                return BoolOp(token.text, left, right), pos
            return BinaryOp(token.text, left, right), pos

    raise ParseError("Expected an expression", token)


def evaluate(expr: Expression, env) -> Value:
    """
    Computes the value of ``expr``. Both operands of an operator are always
    evaluated, left first. Comparisons and boolean operators give a bool.
    """
    if isinstance(expr, Number):
        return expr.value
    elif isinstance(expr, Boolean):
        return expr.value
    elif isinstance(expr, Variable):
        return env.lookup(expr.name)
    elif isinstance(expr, Query):
        return env.turtle.query(expr.kind)
    elif isinstance(expr, BinaryOp):
        left = to_number(evaluate(expr.left, env))
        right = to_number(evaluate(expr.right, env))
        if expr.op in COMPARISONS:
            return COMPARISONS[expr.op](left, right)
        if expr.op == '/' and right == 0.0:
            raise DivisionByZero()
        if expr.op not in ARITHMETIC:
            raise InvalidOperandType(f"Unknown operator: {expr.op!r}")
        return ARITHMETIC[expr.op](left, right)
    elif isinstance(expr, BoolOp):
        left = truthy(evaluate(expr.left, env))
        right = truthy(evaluate(expr.right, env))
        if expr.op not in BOOLEAN_OPERATORS:
            raise InvalidOperandType(f"Unknown operator: {expr.op!r}")
        return BOOLEAN_OPERATORS[expr.op](left, right)
    elif isinstance(expr, Not):
        return not truthy(evaluate(expr.operand, env))

    raise InvalidOperandType(f"Not an expression: {expr!r}")
