from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ...utils import logger
from .ast import ASTNode, Command, If, ProcedureCall, ProcedureDefinition, While, node_summary
from .environment import Environment, Scope, Turtle
from .errors import ExecutionError, InterpreterHalted, InvalidOperandType, UndefinedProcedure
from .expressions import evaluate, to_number, truthy


#
#   Draw primitives, consumed in order by a renderer
#
@dataclass
class MoveTo:
    x: float
    y: float


@dataclass
class LineTo:
    x: float
    y: float


@dataclass
class SetColor:
    index: int


@dataclass
class PenState:
    down: bool


class ExecutionState(Enum):
    RUNNING = "running"
    HALTED_SUCCESS = "halted_success"
    HALTED_ERROR = "halted_error"


@dataclass
class ExecutionResult:
    primitives: List[object]
    turtle: Turtle
    variables: Scope = field(default_factory=dict)


class Interpreter:
    """
    Walks a syntax tree, changing the environment and collecting draw
    primitives. An interpreter runs one tree once; the first error halts it.
    """
    # --- Movement Rules ---
    # command -> (direction, degrees added to the heading)
    MOVEMENTS = {'FORWARD': (1, 0.0), 'BACK': (-1, 0.0), 'LEFT': (1, -90.0), 'RIGHT': (1, 90.0)}

    def __init__(self, environment: Optional[Environment] = None):
        self.env = environment if environment is not None else Environment()
        self.primitives: List[object] = []
        self.state = ExecutionState.RUNNING
        self.error: Optional[BaseException] = None

    def run(self, ast: List[ASTNode]) -> ExecutionResult:
        if self.state is not ExecutionState.RUNNING:
            raise InterpreterHalted(f"Interpreter already finished ({self.state.value})")

        turtle = self.env.turtle
        self.primitives.append(MoveTo(turtle.x, turtle.y))
        try:
            self.execute_block(ast)
        except BaseException as e:
            # RecursionError and friends halt the run too, but are not converted
            self.state = ExecutionState.HALTED_ERROR
            self.error = e
            logger.debug("Run halted: %s", e)
            raise

        self.state = ExecutionState.HALTED_SUCCESS
        logger.debug("Run finished with %d primitives", len(self.primitives))
        return ExecutionResult(self.primitives, turtle, dict(self.env.variables))

    def execute_block(self, nodes: List[ASTNode]):
        for node in nodes:
            try:
                self.execute(node)
            except ExecutionError as e:
                if e.context is None:
                    e.context = node_summary(node)
                raise

    def execute(self, node: ASTNode):
        if isinstance(node, Command):
            self.execute_command(node)
        elif isinstance(node, If):
            if truthy(evaluate(node.condition, self.env)):
                self.execute_block(node.block)
        elif isinstance(node, While):
            while truthy(evaluate(node.condition, self.env)):
                self.execute_block(node.block)
        elif isinstance(node, ProcedureDefinition):
            self.env.define(node)
            logger.debug("Defined procedure %s", node.name)
        elif isinstance(node, ProcedureCall):
            self.call(node)
        else:
            raise InvalidOperandType(f"Not a syntax node: {node!r}")

    def call(self, node: ProcedureCall):
        """Runs the definition in force now, which a later TO may have replaced."""
        procedure = self.env.procedures.get(node.name)
        if procedure is None:
            raise UndefinedProcedure(node.name)
        if len(node.arguments) != len(procedure.parameters):
            raise InvalidOperandType(
                f"{node.name} takes {len(procedure.parameters)} arguments, got {len(node.arguments)}")

        # Arguments see the caller's scope
        values = [evaluate(arg, self.env) for arg in node.arguments]
        with self.env.scope(zip(procedure.parameters, values)):
            self.execute_block(procedure.body)

    def _number(self, node: Command) -> float:
        return to_number(evaluate(node.operands[0], self.env))

    def execute_command(self, node: Command):
        turtle = self.env.turtle
        kind = node.kind

        if kind in self.MOVEMENTS:
            sign, offset = self.MOVEMENTS[kind]
            turtle.move(sign * self._number(node), offset)
            primitive = LineTo if turtle.pen_down else MoveTo
            self.primitives.append(primitive(turtle.x, turtle.y))

        elif kind == 'PENUP' or kind == 'PENDOWN':
            turtle.pen_down = kind == 'PENDOWN'
            self.primitives.append(PenState(turtle.pen_down))

        elif kind == 'TURN':
            turtle.turn(self._number(node))
        elif kind == 'SETHEADING':
            turtle.heading = self._number(node)

        elif kind == 'SETX' or kind == 'SETY':
            value = self._number(node)
            if kind == 'SETX':
                turtle.x = value
            else:
                turtle.y = value
            self.primitives.append(MoveTo(turtle.x, turtle.y))

        elif kind == 'SETPENCOLOR':
            turtle.color = Turtle.color_index(self._number(node))
            self.primitives.append(SetColor(turtle.color))

        elif kind == 'MAKE':
            self.env.assign(node.target, evaluate(node.operands[0], self.env))
        elif kind == 'ADDASSIGN':
            self.env.add_to(node.target, self._number(node))

        else:
            raise InvalidOperandType(f"Unknown command: {kind!r}")


def execute(ast: List[ASTNode], environment: Optional[Environment] = None) -> ExecutionResult:
    return Interpreter(environment).run(ast)
