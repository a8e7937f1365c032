"""
Recursive-descent parser from tokens to a syntax tree.

Every parsing method takes the cursor position as an argument and returns
``(result, new_position)``; the parser never stores the cursor, so nested
blocks and procedure bodies always resume at the right token.
"""

from typing import Dict, List, Tuple

from ...utils import logger
from .ast import ASTNode, Command, If, ProcedureCall, ProcedureDefinition, While
from .errors import ParseError
from .expressions import OPERATORS, QUERIES, parse_expression
from .tokens import GRAMMAR_PATH, Token, TokenKind, tokenize_script


class Parser:
    # --- Language Rules ---
    COMMAND_ARITY = {
        'PENUP': 0,
        'PENDOWN': 0,
        'FORWARD': 1,
        'BACK': 1,
        'LEFT': 1,
        'RIGHT': 1,
        'TURN': 1,
        'SETHEADING': 1,
        'SETX': 1,
        'SETY': 1,
        'SETPENCOLOR': 1,
    }
    ASSIGNMENTS = ('MAKE', 'ADDASSIGN')
    CONTROL_FLOW = {'IF': If, 'WHILE': While}
    PROCEDURE_START = 'TO'
    PROCEDURE_END = 'END'

    RESERVED_WORDS = (frozenset(COMMAND_ARITY) | frozenset(ASSIGNMENTS) | frozenset(CONTROL_FLOW)
                      | {PROCEDURE_START, PROCEDURE_END} | frozenset(QUERIES) | OPERATORS)

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        # Procedure name -> number of parameters, for the procedures seen so far
        self.signatures: Dict[str, int] = {}

    def parse(self) -> List[ASTNode]:
        nodes, _ = self.parse_sequence(0, len(self.tokens), top_level=True)
        logger.debug("Parsed %d top-level nodes, %d procedures", len(nodes), len(self.signatures))
        return nodes

    def is_recognised(self, word: str) -> bool:
        return word in self.RESERVED_WORDS or word in self.signatures

    def _token_at(self, pos: int):
        return self.tokens[pos] if pos < len(self.tokens) else None

    def parse_sequence(self, pos: int, stop: int, top_level: bool = False) -> Tuple[List[ASTNode], int]:
        """Parses nodes from ``pos`` until exactly ``stop``."""
        nodes = []
        while pos < stop:
            node, pos = self.parse_node(pos, top_level)
            nodes.append(node)

        if pos != stop:
            raise ParseError("Statement runs past the end of its block", self._token_at(stop))
        return nodes, pos

    def parse_node(self, pos: int, top_level: bool = False) -> Tuple[ASTNode, int]:
        token = self.tokens[pos]
        if token.kind is TokenKind.CLOSE_BLOCK:
            raise ParseError("Unexpected ']'", token)
        if token.kind is not TokenKind.WORD:
            raise ParseError("Expected a command", token)

        word = token.text
        if word in self.COMMAND_ARITY:
            operands, pos = self.parse_arguments(pos + 1, self.COMMAND_ARITY[word])
            return Command(word, operands), pos

        elif word in self.ASSIGNMENTS:
            name = self.expect_name(pos + 1, word)
            value, pos = parse_expression(self.tokens, pos + 2)
            return Command(word, [value], target=name), pos

        elif word in self.CONTROL_FLOW:
            condition, pos = parse_expression(self.tokens, pos + 1)
            block, pos = self.parse_block(pos)
            return self.CONTROL_FLOW[word](condition, block), pos

        elif word == self.PROCEDURE_START:
            if not top_level:
                raise ParseError("Procedures can only be defined at the top level", token)
            return self.parse_procedure(pos)

        elif word == self.PROCEDURE_END:
            raise ParseError("END without a matching TO", token)

        elif word in self.signatures:
            arguments, pos = self.parse_arguments(pos + 1, self.signatures[word])
            return ProcedureCall(word, arguments), pos

        raise ParseError("Unknown command or undefined procedure", token)

    def parse_arguments(self, pos: int, count: int):
        arguments = []
        for _ in range(count):
            expr, pos = parse_expression(self.tokens, pos)
            arguments.append(expr)
        return arguments, pos

    def expect_name(self, pos: int, command: str) -> str:
        token = self._token_at(pos)
        if token is None or token.kind is not TokenKind.QUOTED:
            raise ParseError(f"{command} expects a quoted variable name", token)
        return token.text

    def matching_close(self, pos: int) -> int:
        """Index of the ``]`` closing the ``[`` at ``pos``."""
        depth = 0
        for index in range(pos, len(self.tokens)):
            kind = self.tokens[index].kind
            if kind is TokenKind.OPEN_BLOCK:
                depth += 1
            elif kind is TokenKind.CLOSE_BLOCK:
                depth -= 1
                if depth == 0:
                    return index
        raise ParseError("Unterminated block", self.tokens[pos])

    def parse_block(self, pos: int) -> Tuple[List[ASTNode], int]:
        token = self._token_at(pos)
        if token is None or token.kind is not TokenKind.OPEN_BLOCK:
            raise ParseError("Expected '[' to start a block", token)

        end = self.matching_close(pos)
        block, _ = self.parse_sequence(pos + 1, end)
        return block, end + 1

    def parse_procedure(self, pos: int) -> Tuple[ProcedureDefinition, int]:
        """
        Parses ``TO name params... body END``. A later ``TO`` with the same name
        replaces the recorded signature, so calls parsed afterwards use the new
        arity. Calls already parsed keep the old one; the interpreter checks
        them against the definition in force when they run.
        """
        name_token = self._token_at(pos + 1)
        if name_token is None or name_token.kind is not TokenKind.WORD:
            raise ParseError("TO expects a procedure name", name_token)
        name = name_token.text
        if name in self.RESERVED_WORDS:
            raise ParseError(f"{name!r} is reserved and cannot name a procedure", name_token)

        parameters = []
        pos += 2
        while pos < len(self.tokens):
            token = self.tokens[pos]
            if token.kind is TokenKind.QUOTED:
                parameter = token.text
            elif token.kind is TokenKind.WORD and token.text != name and not self.is_recognised(token.text):
                parameter = token.text
            else:
                break
            if parameter in parameters:
                raise ParseError(f"Duplicate parameter {parameter!r} in procedure {name!r}", token)
            parameters.append(parameter)
            pos += 1

        end = next((index for index in range(pos, len(self.tokens))
                    if self.tokens[index].is_word(self.PROCEDURE_END)), None)
        if end is None:
            raise ParseError(f"Procedure {name!r} has no END", name_token)

        # Registered before the body is parsed so that it can call itself
        self.signatures[name] = len(parameters)
        logger.debug("Procedure %s takes %d parameters", name, len(parameters))

        body, _ = self.parse_sequence(pos, end)
        return ProcedureDefinition(name, parameters, body), end + 1


def parse_tokens(tokens: List[Token]) -> List[ASTNode]:
    return Parser(tokens).parse()


def parse_script(script_text: str, grammar_path: str = GRAMMAR_PATH) -> List[ASTNode]:
    return parse_tokens(tokenize_script(script_text, grammar_path))
