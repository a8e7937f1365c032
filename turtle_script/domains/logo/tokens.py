import os
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from lark.exceptions import UnexpectedInput

from ...framework.base_lexer import BaseLexer, lex_dsl
from ...utils import logger
from .errors import LexError

GRAMMAR_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "grammar.dsl")


class TokenKind(Enum):
    WORD = "word"
    QUOTED = "quoted"
    VARIABLE = "variable"
    OPEN_BLOCK = "open_block"
    CLOSE_BLOCK = "close_block"


SIGILS = {TokenKind.QUOTED: '"', TokenKind.VARIABLE: ':'}


@dataclass
class Token:
    kind: TokenKind
    text: str
    index: int = 0
    line: Optional[int] = field(default=None, compare=False)
    column: Optional[int] = field(default=None, compare=False)

    @property
    def raw(self) -> str:
        return SIGILS.get(self.kind, '') + self.text

    def is_word(self, *words) -> bool:
        return self.kind is TokenKind.WORD and (not words or self.text in words)


class LogoLexer(BaseLexer):
    """Maps the terminals of ``grammar.dsl`` onto numbered :class:`Token` objects."""

    def _token(self, kind, tok, text=None):
        return Token(kind, tok.value if text is None else text, line=tok.line, column=tok.column)

    def WORD(self, tok): return self._token(TokenKind.WORD, tok)
    def QUOTED(self, tok): return self._token(TokenKind.QUOTED, tok, tok.value[1:])
    def VARIABLE(self, tok): return self._token(TokenKind.VARIABLE, tok, tok.value[1:])
    def OPEN_BLOCK(self, tok): return self._token(TokenKind.OPEN_BLOCK, tok)
    def CLOSE_BLOCK(self, tok): return self._token(TokenKind.CLOSE_BLOCK, tok)

    def start(self, items):
        tokens = list(items)
        for index, token in enumerate(tokens):
            token.index = index
        return tokens


def _check_brackets(tokens: List[Token]):
    open_blocks = []
    for token in tokens:
        if token.kind is TokenKind.OPEN_BLOCK:
            open_blocks.append(token)
        elif token.kind is TokenKind.CLOSE_BLOCK:
            if not open_blocks:
                raise LexError("Unmatched ']'", token.line, token.column, token.raw)
            open_blocks.pop()

    if open_blocks:
        token = open_blocks[-1]
        raise LexError("Unclosed '['", token.line, token.column, token.raw)


def tokenize_script(script_text: str, grammar_path: str = GRAMMAR_PATH) -> List[Token]:
    """
    Splits script text into tokens. Whitespace separates tokens, ``[`` and
    ``]`` always stand alone and ``//`` comments run to the end of the line.

    >>> [t.raw for t in tokenize_script('FORWARD "100 // go')]
    ['FORWARD', '"100']
    """
    try:
        tokens = lex_dsl(script_text, grammar_path, LogoLexer())
    except UnexpectedInput as e:
        char = getattr(e, 'char', None)
        if char in ('"', ':'):
            message = f"Expected a name after {char!r}"
        else:
            message = f"Unexpected character {char!r}"
        raise LexError(message, e.line, e.column, char) from e

    _check_brackets(tokens)
    logger.debug("Tokenized script into %d tokens", len(tokens))
    return tokens
