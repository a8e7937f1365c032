from .ast import (ASTNode, BinaryOp, Boolean, BoolOp, Command, Expression, If, Not, Number,
                  ProcedureCall, ProcedureDefinition, Query, Variable, While, node_summary, to_source)
from .environment import Environment, Turtle
from .errors import (DivisionByZero, ExecutionError, InterpreterHalted, InvalidOperandType, LexError,
                     ParseError, TurtleScriptError, UndefinedProcedure, UndefinedVariable)
from .expressions import evaluate, parse_expression, to_number, truthy
from .interpreter import (ExecutionResult, ExecutionState, Interpreter, LineTo, MoveTo, PenState,
                          SetColor, execute)
from .parser import Parser, parse_script, parse_tokens
from .tokens import Token, TokenKind, tokenize_script
