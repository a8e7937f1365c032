"""
Syntax tree of a turtle script.

Expressions and nodes are plain dataclasses, so two trees compare equal when
they have the same structure. ``to_source`` turns a tree back into script
text that parses to an equal tree.
"""

from dataclasses import dataclass, field
from typing import List, Optional


#
#   Expressions
#
class Expression:
    pass


@dataclass
class Number(Expression):
    value: float


@dataclass
class Boolean(Expression):
    value: bool


@dataclass
class Variable(Expression):
    name: str


@dataclass
class Query(Expression):
    # XCOR, YCOR, HEADING or COLOR
    kind: str


@dataclass
class BinaryOp(Expression):
    # + - * / EQ NE LT GT
    op: str
    left: Expression
    right: Expression


@dataclass
class BoolOp(Expression):
    # AND OR
    op: str
    left: Expression
    right: Expression


@dataclass
class Not(Expression):
    operand: Expression


#
#   Statements
#
class ASTNode:
    pass


@dataclass
class Command(ASTNode):
    kind: str
    operands: List[Expression] = field(default_factory=list)
    # Variable name for MAKE / ADDASSIGN
    target: Optional[str] = None


@dataclass
class If(ASTNode):
    condition: Expression
    block: List[ASTNode]


@dataclass
class While(ASTNode):
    condition: Expression
    block: List[ASTNode]


@dataclass
class ProcedureDefinition(ASTNode):
    name: str
    parameters: List[str]
    body: List[ASTNode]


@dataclass
class ProcedureCall(ASTNode):
    name: str
    arguments: List[Expression]


#
#   Serialisation
#
def _format_number(value: float) -> str:
    return '"' + repr(float(value))


def expression_to_source(expr: Expression) -> str:
    if isinstance(expr, Number):
        return _format_number(expr.value)
    elif isinstance(expr, Boolean):
        return '"TRUE' if expr.value else '"FALSE'
    elif isinstance(expr, Variable):
        return ':' + expr.name
    elif isinstance(expr, Query):
        return expr.kind
    elif isinstance(expr, (BinaryOp, BoolOp)):
        return ' '.join((expr.op, expression_to_source(expr.left), expression_to_source(expr.right)))
    elif isinstance(expr, Not):
        return 'NOT ' + expression_to_source(expr.operand)
    raise TypeError(f"Not an expression: {expr!r}")


def node_summary(node: ASTNode) -> str:
    """One line describing a node, without the contents of its blocks."""
    if isinstance(node, Command):
        parts = [node.kind]
        if node.target is not None:
            parts.append('"' + node.target)
        parts.extend(expression_to_source(e) for e in node.operands)
        return ' '.join(parts)
    elif isinstance(node, If):
        return 'IF ' + expression_to_source(node.condition)
    elif isinstance(node, While):
        return 'WHILE ' + expression_to_source(node.condition)
    elif isinstance(node, ProcedureDefinition):
        return ' '.join(['TO', node.name] + ['"' + p for p in node.parameters])
    elif isinstance(node, ProcedureCall):
        return ' '.join([node.name] + [expression_to_source(a) for a in node.arguments])
    raise TypeError(f"Not a syntax node: {node!r}")


def _node_lines(node: ASTNode, indent: str) -> List[str]:
    inner = indent + '  '
    if isinstance(node, (If, While)):
        lines = [indent + node_summary(node) + ' [']
        for child in node.block:
            lines.extend(_node_lines(child, inner))
        lines.append(indent + ']')
        return lines
    elif isinstance(node, ProcedureDefinition):
        lines = [indent + node_summary(node)]
        for child in node.body:
            lines.extend(_node_lines(child, inner))
        lines.append(indent + 'END')
        return lines
    return [indent + node_summary(node)]


def to_source(nodes: List[ASTNode]) -> str:
    lines = []
    for node in nodes:
        lines.extend(_node_lines(node, ''))
    return '\n'.join(lines) + '\n' if lines else ''
