"""Monkey interpreter: entry points into the core pipeline.

Basic program flow:
    1. Lexer (lang/lexical.py): turns source text into tokens, one at a time
    2. Parser (lang/parser.py): builds an abstract syntax tree (lang/syntax.py) from the tokens by precedence climbing
    3. Evaluator (lang/evaluator.py): walks the tree and computes a value (lang/objects.py), keeping bindings in
       chained Environments (lang/environment.py)

Not a compiler: the tree is executed directly. Errors from every stage are MonkeyErrors (lang/error.py).
"""

from monkey.lang.environment import Environment
from monkey.lang.evaluator import Evaluator
from monkey.lang.lexical import Lexer
from monkey.lang.parser import Parser


def parse(source):
    """Returns the Program parsed from source. Raises a ParseError on the first syntax error."""
    return Parser(Lexer(source)).parse_program()


def evaluate(program, env=None, max_depth=None):
    """Returns the value of program evaluated in env (a fresh Environment if None). Raises an EvaluationError on the
    first runtime error.
    """
    if env is None:
        env = Environment()
    return Evaluator(max_depth).evaluate(program, env)


def run(source, env=None, max_depth=None):
    """Parses and evaluates source."""
    return evaluate(parse(source), env, max_depth)
