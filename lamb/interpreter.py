"""lamb: a small expression language with first-class, single-parameter closures.

Program flow is a straight pipeline, with nothing flowing back:
    1. Lexer (lamb/pure/lexical.py): source text -> list of Tokens, ending early with an INVALID token if some text
       cannot be lexed
    2. Parser (lamb/pure/syntax.py): Tokens -> concrete syntax tree, one node type per grammar nonterminal
    3. Evaluator (lamb/lang/evaluator.py): syntax tree -> value, passing an immutable Environment down the tree

Every call starts from scratch: no state survives between two calls of evaluate_program.
"""

from lamb.lang.evaluator import evaluate
from lamb.pure.syntax import parse


def evaluate_program(source, error_handler=None):
    """Returns the value of the program in source. Raises a GenericException subclass if lexing, parsing, or evaluation
    fails.
    """
    return evaluate(parse(source), error_handler=error_handler)
