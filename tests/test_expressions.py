from unittest import TestCase, main

from turtle_script.domains.logo.ast import BinaryOp, Boolean, BoolOp, Not, Number, Query, Variable
from turtle_script.domains.logo.environment import Environment, Turtle
from turtle_script.domains.logo.errors import DivisionByZero, ParseError, UndefinedVariable
from turtle_script.domains.logo.expressions import evaluate, parse_expression, to_number, truthy
from turtle_script.domains.logo.tokens import tokenize_script


def parse(text):
    expr, _ = parse_expression(tokenize_script(text), 0)
    return expr


def calc(text, env=None):
    return evaluate(parse(text), env if env is not None else Environment())


class TestParseExpression(TestCase):

    def test_literal(self):
        self.assertEqual(parse('"5'), Number(5.0))
        self.assertEqual(parse('"-2.5'), Number(-2.5))
        self.assertEqual(parse('"TRUE'), Boolean(True))
        self.assertEqual(parse('"FALSE'), Boolean(False))

    def test_variable_and_query(self):
        self.assertEqual(parse(':size'), Variable('size'))
        self.assertEqual(parse('HEADING'), Query('HEADING'))

    def test_prefix_operator(self):
        tokens = tokenize_script('+ "5 "3 FORWARD')
        expr, pos = parse_expression(tokens, 0)
        self.assertEqual(expr, BinaryOp('+', Number(5.0), Number(3.0)))
        self.assertEqual(pos, 3)

    def test_nested(self):
        self.assertEqual(parse('* + "1 "2 - :x "4'), BinaryOp(
            '*',
            BinaryOp('+', Number(1.0), Number(2.0)),
            BinaryOp('-', Variable('x'), Number(4.0)),
        ))

    def test_boolean_operators(self):
        self.assertEqual(parse('AND LT :x "3 NOT EQ XCOR "0'), BoolOp(
            'AND',
            BinaryOp('LT', Variable('x'), Number(3.0)),
            Not(BinaryOp('EQ', Query('XCOR'), Number(0.0))),
        ))

    def test_starts_mid_stream(self):
        tokens = tokenize_script('FORWARD / :d "2 PENUP')
        expr, pos = parse_expression(tokens, 1)
        self.assertEqual(expr, BinaryOp('/', Variable('d'), Number(2.0)))
        self.assertEqual(tokens[pos].text, 'PENUP')

    def test_not_a_number(self):
        with self.assertRaises(ParseError) as cm:
            parse('"10x')
        self.assertEqual(cm.exception.index, 0)
        self.assertEqual(cm.exception.token_text, '"10x')

    def test_not_a_finite_number(self):
        for text in ('"inf', '"-Infinity', '"nan'):
            with self.assertRaises(ParseError) as cm:
                parse(text)
            self.assertEqual(cm.exception.token_text, text)

    def test_missing_operand(self):
        with self.assertRaises(ParseError) as cm:
            parse('+ "5')
        self.assertIsNone(cm.exception.index)

    def test_command_is_not_expression(self):
        tokens = tokenize_script('- "1 FORWARD')
        with self.assertRaises(ParseError) as cm:
            parse_expression(tokens, 0)
        self.assertEqual(cm.exception.index, 2)

    def test_bracket_is_not_expression(self):
        tokens = tokenize_script('[ ]')
        self.assertRaises(ParseError, parse_expression, tokens, 1)


class TestEvaluate(TestCase):

    def test_arithmetic(self):
        self.assertEqual(calc('+ "5 "3'), 8.0)
        self.assertEqual(calc('- "5 "3'), 2.0)
        self.assertEqual(calc('* "5 "3'), 15.0)
        self.assertEqual(calc('/ "8 "2'), 4.0)
        self.assertEqual(calc('* + "1 "2 - "10 "4'), 18.0)

    def test_division_by_zero(self):
        self.assertRaises(DivisionByZero, calc, '/ "1 "0')
        self.assertRaises(DivisionByZero, calc, '/ "1 - "2 "2')

    def test_comparisons_are_booleans(self):
        for text, expected in [('EQ "1 "1', 1.0), ('EQ "1 "2', 0.0), ('NE "1 "2', 1.0),
                               ('LT "1 "2', 1.0), ('LT "2 "1', 0.0), ('GT "2 "1', 1.0)]:
            result = calc(text)
            self.assertIs(type(result), bool)
            self.assertEqual(result, expected)

    def test_boolean_operators(self):
        for text, expected in [('AND "TRUE "TRUE', 1.0), ('AND "1 "0', 0.0),
                               ('OR "0 "0', 0.0), ('OR "0 "2', 1.0),
                               ('NOT "FALSE', 1.0), ('NOT "3', 0.0)]:
            result = calc(text)
            self.assertIn(result, (1.0, 0.0))
            self.assertIs(type(result), bool)
            self.assertEqual(result, expected)

    def test_boolean_in_arithmetic(self):
        self.assertEqual(calc('+ "TRUE "1'), 2.0)
        self.assertEqual(calc('EQ "TRUE "1'), True)

    def test_eager_evaluation(self):
        # No short-circuit: the right operand still fails
        self.assertRaises(DivisionByZero, calc, 'OR "TRUE / "1 "0')

    def test_variables(self):
        env = Environment()
        env.assign('x', 4.0)
        self.assertEqual(calc('* :x :x', env), 16.0)

    def test_undefined_variable(self):
        with self.assertRaises(UndefinedVariable) as cm:
            calc(':UNSET')
        self.assertEqual(cm.exception.name, 'UNSET')

    def test_queries(self):
        env = Environment(Turtle(10, 20, 90))
        self.assertEqual(calc('XCOR', env), 10.0)
        self.assertEqual(calc('YCOR', env), 20.0)
        self.assertEqual(calc('HEADING', env), 90.0)
        self.assertEqual(calc('COLOR', env), float(Turtle.DEFAULT_PEN_COLOR))

    def test_conversions(self):
        self.assertEqual(to_number(True), 1.0)
        self.assertEqual(to_number(False), 0.0)
        self.assertTrue(truthy(-1.0))
        self.assertFalse(truthy(0.0))


if __name__ == '__main__':
    main()
