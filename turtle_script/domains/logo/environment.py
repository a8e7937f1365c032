import math
from contextlib import contextmanager
from typing import Dict, Iterable, List, Optional, Tuple

from .ast import ProcedureDefinition
from .errors import InvalidOperandType, UndefinedVariable
from .expressions import Value, to_number

Scope = Dict[str, Value]


class Turtle:
    """
    Pose and pen of the drawing cursor. Coordinates follow image conventions:
    y grows downwards, heading 0 points up and angles grow clockwise.
    """
    # --- Pen Rules ---
    PALETTE_SIZE = 16
    DEFAULT_PEN_COLOR = 7   # white

    def __init__(self, x=0.0, y=0.0, heading=0.0):
        self.x = float(x)
        self.y = float(y)
        self.heading = float(heading)
        self.pen_down = False
        self.color = self.DEFAULT_PEN_COLOR

    def move(self, distance: float, offset: float = 0.0):
        """Moves ``distance`` along the heading turned by ``offset`` degrees."""
        radians = math.radians(self.heading + offset)
        self.x += distance * math.sin(radians)
        self.y -= distance * math.cos(radians)

    def turn(self, degrees: float):
        self.heading += degrees

    def query(self, kind: str) -> float:
        if kind == 'XCOR':
            return self.x
        elif kind == 'YCOR':
            return self.y
        elif kind == 'HEADING':
            return self.heading
        elif kind == 'COLOR':
            return float(self.color)
        raise InvalidOperandType(f"Unknown query: {kind!r}")

    @classmethod
    def color_index(cls, value: float) -> int:
        """Validates a pen colour; the index must be a whole number inside the palette."""
        if isinstance(value, bool) or not float(value).is_integer():
            raise InvalidOperandType(f"Colour index must be a whole number, got {value!r}")
        if not 0 <= value < cls.PALETTE_SIZE:
            raise InvalidOperandType(
                f"Colour index must be between 0 and {cls.PALETTE_SIZE - 1} inclusive, got {value!r}")
        return int(value)

    def as_dict(self) -> dict:
        return {
            "x": self.x,
            "y": self.y,
            "heading": self.heading,
            "pen_down": self.pen_down,
            "color": self.color,
        }


class Environment:
    """
    Everything a running script can change: global variables, the stack of
    procedure parameter scopes, the turtle and the defined procedures.
    """

    def __init__(self, turtle: Optional[Turtle] = None):
        self.turtle = turtle if turtle is not None else Turtle()
        self.variables: Scope = {}
        self.procedures: Dict[str, ProcedureDefinition] = {}
        self._scopes: List[Scope] = []

    @property
    def local_scope(self) -> Optional[Scope]:
        return self._scopes[-1] if self._scopes else None

    def _scope_of(self, name: str) -> Optional[Scope]:
        # Only the innermost call's parameters are visible, then globals
        local = self.local_scope
        if local is not None and name in local:
            return local
        if name in self.variables:
            return self.variables
        return None

    def lookup(self, name: str) -> Value:
        scope = self._scope_of(name)
        if scope is None:
            raise UndefinedVariable(name)
        return scope[name]

    def assign(self, name: str, value: Value):
        scope = self._scope_of(name)
        if scope is None:
            scope = self.variables
        scope[name] = value

    def add_to(self, name: str, amount: float) -> float:
        scope = self._scope_of(name)
        if scope is None:
            raise UndefinedVariable(name)
        scope[name] = to_number(scope[name]) + amount
        return scope[name]

    def define(self, procedure: ProcedureDefinition):
        self.procedures[procedure.name] = procedure

    @contextmanager
    def scope(self, bindings: Iterable[Tuple[str, Value]]):
        """Pushes a parameter scope for the duration of a procedure call."""
        self._scopes.append(dict(bindings))
        try:
            yield self._scopes[-1]
        finally:
            self._scopes.pop()

    @property
    def depth(self) -> int:
        return len(self._scopes)
