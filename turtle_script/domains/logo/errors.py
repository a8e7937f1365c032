class TurtleScriptError(ValueError):
    """Base class for every error a script can produce."""

    @property
    def kind(self) -> str:
        return type(self).__name__


class LexError(TurtleScriptError):
    def __init__(self, message, line=None, column=None, text=None):
        self.line = line
        self.column = column
        self.text = text
        if line is not None:
            message = f"{message} at line {line}, column {column}"
        super().__init__(message)

    @property
    def token_text(self):
        return self.text


class ParseError(TurtleScriptError):
    """Raised by the parser; ``token`` is the offending token or None at end of input."""

    def __init__(self, message, token=None):
        self.token = token
        if token is not None:
            message = f"{message} (token {token.index}: {token.raw!r})"
        else:
            message = f"{message} (at end of script)"
        super().__init__(message)

    @property
    def index(self):
        return self.token.index if self.token is not None else None

    @property
    def token_text(self):
        return self.token.raw if self.token is not None else None


class ExecutionError(TurtleScriptError):
    """
    Raised while running a syntax tree. The interpreter fills in ``context``
    with a one-line summary of the innermost node that was executing.
    """

    def __init__(self, message):
        self.message = message
        self.context = None
        super().__init__(message)

    @property
    def token_text(self):
        return self.context

    def __str__(self):
        if self.context:
            return f"{self.message} (while executing {self.context})"
        return self.message


class UndefinedVariable(ExecutionError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"Variable not found: ':{name}'")


class DivisionByZero(ExecutionError):
    def __init__(self):
        super().__init__("Division by zero")


class InvalidOperandType(ExecutionError):
    pass


class UndefinedProcedure(ExecutionError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"Procedure not defined: '{name}'")


class InterpreterHalted(ExecutionError):
    pass
