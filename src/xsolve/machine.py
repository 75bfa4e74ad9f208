'''
Stack machine running postfix token sequences.
'''

from typing import NamedTuple, Optional
import operator

import numpy as np

from .errors import ExecutionError
from .tokens import BINARY, Kind, Token


class Operand(NamedTuple):
    value: np.float64
    # Leftmost token of the subexpression that produced the value
    origin: Token


class Argument(NamedTuple):
    # Stack depth of the first argument of the call this one belongs to
    depth: int
    value: np.float64
    comma: Token


class Machine:
    '''
    Arithmetic stack machine.

    Takes postfix tokens and runs them. Holds the binding of x between runs,
    nothing else: every run starts from empty stacks, so one postfix
    sequence may be run any number of times, by any number of machines at
    once.

    Values are numpy float64 and numpy is told to keep quiet, so that 1/0,
    sqrt(-1) and exp(1000) come out as inf, nan and inf like any other IEEE
    float rather than raising.
    '''

    OPERATORS = {
        Kind.ADD: operator.__add__,
        Kind.SUB: operator.__sub__,
        Kind.MUL: operator.__mul__,
        Kind.DIV: operator.__truediv__,
        Kind.POW: operator.__pow__,
    }

    def __init__(self, x=None, source=None):
        '''
        :param x: value of the variable x, if the expression has one.
        :param source: expression text, for error reports.
        '''
        self.x = None if x is None else np.float64(x)
        self.source = source
        self.stack = []
        self.arguments = []

    def run(self, postfix) -> float:
        '''
        Run postfix tokens, returning the single value they leave behind.
        '''
        self.stack = []
        self.arguments = []
        with np.errstate(all='ignore'):
            for token in postfix:
                self._step(token)
        return float(self._result().value)

    def _step(self, token):
        kind = token.kind
        if kind is Kind.NUMBER or kind is Kind.CONST:
            self._pshstack(np.float64(token.value), token)
        elif kind is Kind.VAR:
            if self.x is None:
                self._fail(ExecutionError.Kind.MISSING_ARGUMENT_VALUE, token)
            self._pshstack(self.x, token)
        elif kind is Kind.UNARY_MINUS:
            operand = self._popstack(token)
            self._pshstack(-operand.value, token)
        elif kind in BINARY:
            self._binary(token)
        elif kind is Kind.COMMA:
            operand = self._popstack(token)
            self.arguments.append(Argument(len(self.stack), operand.value,
                                           token))
        elif kind is Kind.FUNC:
            self._call(token)
        # Parentheses were spent on the ordering.

    def _binary(self, token):
        '''
        Pop the right operand and fold it into the left one.
        '''
        if len(self.stack) < 2:
            self._fail(ExecutionError.Kind.UNMATCHED_OPERATOR, token)
        right = self.stack.pop()
        # An operator eating the first argument of a call leaves that call's
        # other arguments stranded: (1, 2) + 3
        if self.arguments and self.arguments[-1].depth >= len(self.stack):
            self._stray_argument(self.arguments[-1])
        left = self.stack[-1]
        self.stack[-1] = Operand(type(self).OPERATORS[token.kind](left.value,
                                                                  right.value),
                                 left.origin)

    def _call(self, token):
        '''
        Apply a function to its first argument on the stack and the rest
        waiting in the argument accumulator.
        '''
        function = token.value
        if not self.stack:
            self._fail(ExecutionError.Kind.WRONG_ARGS, token)
        depth = len(self.stack)
        first = self.stack.pop()
        # Accumulated last written first.
        args = []
        while self.arguments and self.arguments[-1].depth == depth:
            args.append(self.arguments.pop().value)
        args.append(first.value)
        args.reverse()
        if len(args) != function.arity:
            self._fail(ExecutionError.Kind.WRONG_ARGS, token)
        self._pshstack(function.apply(args), token)

    def _result(self) -> Operand:
        if self.arguments:
            self._stray_argument(self.arguments[0])
        if not self.stack:
            raise ExecutionError(ExecutionError.Kind.EMPTY_EXPRESSION, '', 0,
                                 source=self.source)
        if len(self.stack) > 1:
            self._fail(ExecutionError.Kind.MISSING_OPERATOR,
                       self.stack[1].origin)
        return self.stack[0]

    def _pshstack(self, value, origin):
        self.stack.append(Operand(value, origin))

    def _popstack(self, token) -> Operand:
        '''
        Pop the top of the stack, for the operator token.
        '''
        if not self.stack:
            self._fail(ExecutionError.Kind.UNMATCHED_OPERATOR, token)
        return self.stack.pop()

    def _stray_argument(self, argument):
        self._fail(ExecutionError.Kind.MISSING_OPERATOR, argument.comma)

    def _fail(self, kind, token):
        raise ExecutionError(kind, token.text, token.pos, source=self.source)


def evaluate(postfix, x: Optional[float] = None, source=None) -> float:
    '''
    Run postfix tokens on a fresh machine.
    '''
    return Machine(x, source=source).run(postfix)
