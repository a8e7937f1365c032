# turtle_script/framework/base_lexer.py
from functools import lru_cache

from lark import Lark, Transformer

from ..utils import logger


class BaseLexer(Transformer):
    """
    Turns the flat tree produced by a token-level grammar into a list of
    domain tokens. Subclasses add one callback per terminal name; each
    callback receives the lark token and returns the domain token.
    """

    def start(self, items):
        return list(items)


@lru_cache(maxsize=None)
def load_grammar(grammar_path: str) -> Lark:
    with open(grammar_path, 'r') as f:
        grammar = f.read()

    logger.debug("Loaded lexing grammar from %s", grammar_path)
    return Lark(grammar, parser='lalr')


def lex_dsl(dsl_text: str, grammar_path: str, lexer_instance: BaseLexer) -> list:
    """
    Lexes DSL text using a pre-configured lexer instance.

    Args:
        dsl_text: The string containing the DSL code.
        grammar_path: The file path to the Lark grammar.
        lexer_instance: An already created instance of a lexer class.

    Raises:
        lark.exceptions.UnexpectedInput: when the text contains characters
            that no terminal of the grammar accepts.
    """
    parser = load_grammar(grammar_path)
    tree = parser.parse(dsl_text)

    return lexer_instance.transform(tree)
