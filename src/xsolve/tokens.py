'''
Token model shared by the lexer, parser and machine.
'''

from enum import Enum
from typing import Any, Callable, NamedTuple


class Kind(Enum):
    NUMBER = 'number'
    VAR = 'variable'
    CONST = 'constant'
    ADD = '+'
    SUB = '-'
    MUL = '*'
    DIV = '/'
    POW = '^'
    UNARY_MINUS = 'unary -'
    LPAREN = '('
    RPAREN = ')'
    COMMA = ','
    FUNC = 'function'


OPERANDS = frozenset({Kind.NUMBER, Kind.VAR, Kind.CONST})
BINARY = frozenset({Kind.ADD, Kind.SUB, Kind.MUL, Kind.DIV, Kind.POW})

# Higher binds tighter. LPAREN is only ever popped by a matching RPAREN;
# RPAREN and COMMA are sentinels that flush everything down to it.
PRECEDENCE = {
    Kind.FUNC: 6,
    Kind.UNARY_MINUS: 5,
    Kind.POW: 4,
    Kind.MUL: 3,
    Kind.DIV: 3,
    Kind.ADD: 2,
    Kind.SUB: 2,
    Kind.RPAREN: 1,
    Kind.COMMA: 1,
    Kind.LPAREN: 0,
}


class Function(NamedTuple):
    '''
    Built-in function of fixed arity.
    '''
    name: str
    arity: int
    func: Callable[..., Any]

    def apply(self, args):
        '''
        Call with arguments in the order they were written.
        '''
        return self.func(*args)


class Token(NamedTuple):
    '''
    A lexeme: where it starts, what it says, and what it means.

    ``value`` is the float of a number or constant, the ``Function`` of a
    function reference, and None for everything else.
    '''
    pos: int
    text: str
    kind: Kind
    value: Any = None

    @property
    def is_operand(self):
        return self.kind in OPERANDS

    @property
    def closes_operand(self):
        '''
        True if a ``-`` right after this token is binary subtraction.
        '''
        return self.kind in OPERANDS or self.kind is Kind.RPAREN

    @property
    def precedence(self):
        return PRECEDENCE[self.kind]

    def __str__(self):
        return self.text
