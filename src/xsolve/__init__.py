'''
Expression solver.

Compiles a real-valued infix expression in one variable, x, into postfix
tokens, then evaluates it, finds its roots or integrates it. Supports the
usual arithmetic, a handful of constants, and the mathematical functions
you would expect, of up to three arguments. No symbolic anything.

The pipeline is a lexer feeding a shunting-yard parser feeding a stack
machine:

    >>> from xsolve import compile_expression, root
    >>> f = compile_expression('sin(x) - x^3 + 3')
    >>> f(0.0)
    3.0
    >>> round(root(f, 1, 2, 1e-7), 6)
    1.587383

Parsing happens once per expression; evaluating is cheap enough to do for
every step of a root search.
'''

from .cli import CLI
from .errors import ExecutionError, LexError, ParseError, XSolveError
from .expression import Expression, compile_expression, evaluate
from .lexer import Lexer, tokenize
from .machine import Machine
from .parser import Parser
from .solvers import integral, root


__all__ = (
    'CLI', 'Expression', 'ExecutionError', 'LexError', 'Lexer', 'Machine',
    'ParseError', 'Parser', 'XSolveError', 'compile_expression', 'evaluate',
    'integral', 'root', 'tokenize',
)
