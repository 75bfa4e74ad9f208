'''
Compile an expression once, evaluate it for as many x as needed.
'''

import logging

from .lexer import Lexer
from .machine import Machine
from .parser import Parser


logger = logging.getLogger(__name__)


class Expression:
    '''
    A compiled expression: its source and postfix tokens.

    Calling it with x evaluates it, which makes it the f(x) handed to the
    solvers.
    '''

    def __init__(self, source, postfix):
        self.source = source
        self.postfix = postfix

    def evaluate(self, x=None) -> float:
        return Machine(x, source=self.source).run(self.postfix)

    def __call__(self, x) -> float:
        return self.evaluate(x)

    def __repr__(self):
        return '{}({!r})'.format(type(self).__name__, self.source)


def compile_expression(source) -> Expression:
    '''
    Lex and parse source into a reusable Expression.

    Raises LexError or ParseError on the first problem found.
    '''
    postfix = Parser(source).parse(Lexer(source))
    logger.debug('compiled %r into %s', source,
                 ' '.join(token.text for token in postfix))
    return Expression(source, postfix)


def evaluate(source, x=None) -> float:
    '''
    Compile and evaluate source in one go.
    '''
    return compile_expression(source).evaluate(x)
