from .utils import logger
from .core import AppConfig, run_script
from .domains.logo import (Environment, ExecutionResult, Interpreter, LexError, LineTo, MoveTo,
                           ParseError, PenState, SetColor, Turtle, TurtleScriptError, execute,
                           parse_script, to_source, tokenize_script)

__version__: str = "0.1.0"
