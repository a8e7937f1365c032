# turtle_script/core.py
import os
from dataclasses import asdict
from typing import Any, Callable, Dict

from .domains.logo.environment import Environment, Turtle
from .domains.logo.errors import TurtleScriptError
from .domains.logo.interpreter import Interpreter
from .domains.logo.parser import parse_script
from .domains.logo.tokens import GRAMMAR_PATH
from .utils import logger


# --- Configuration ---
class AppConfig:
    """Centralized configuration for the application."""
    PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
    # Relative to PROJECT_ROOT; the tokenizer owns the grammar location
    GRAMMAR_FILE = os.path.relpath(GRAMMAR_PATH, PROJECT_ROOT)
    # The renderer owns the canvas; the turtle starts at its centre
    CANVAS_WIDTH = 500
    CANVAS_HEIGHT = 500

    @staticmethod
    def get_grammar_path(grammar_file: str) -> str:
        """Constructs the full path to a grammar file."""
        return os.path.join(AppConfig.PROJECT_ROOT, grammar_file)


def primitive_to_dict(primitive) -> Dict[str, Any]:
    return {"op": type(primitive).__name__, **asdict(primitive)}


def _process_script(
    script_text: str,
    grammar_file: str,
    interpreter_factory: Callable[[], Interpreter],
) -> Dict[str, Any]:
    """
    Generic processor: tokenizes, parses and runs a script. Script errors
    are reported in the returned dictionary; a failed run returns no
    primitives at all.
    """
    try:
        ast = parse_script(script_text, AppConfig.get_grammar_path(grammar_file))
        interpreter = interpreter_factory()
        result = interpreter.run(ast)
    except TurtleScriptError as e:
        logger.info("Script failed with %s: %s", e.kind, e)
        return {
            "status": "error",
            "error_kind": e.kind,
            "message": str(e),
            "token": e.token_text,
        }

    logger.debug("Script produced %d primitives", len(result.primitives))
    return {
        "status": "success",
        "primitives": [primitive_to_dict(p) for p in result.primitives],
        "turtle": result.turtle.as_dict(),
        "variables": result.variables,
    }


def run_script(
    script_text: str,
    width: int = AppConfig.CANVAS_WIDTH,
    height: int = AppConfig.CANVAS_HEIGHT,
) -> Dict[str, Any]:
    """Runs a turtle script with the turtle starting at the centre of a ``width`` x ``height`` canvas."""
    interpreter_factory = lambda: Interpreter(Environment(Turtle(width / 2, height / 2)))
    return _process_script(script_text, AppConfig.GRAMMAR_FILE, interpreter_factory)
