'''
Errors of every stage, and how they are shown to a human.

Each error knows what went wrong, the offending text and where it starts,
which is enough to point at it in the source:

    error: unmatched parenthesis `(` at 0
    (1 + 2
    ^
'''

from enum import Enum


class XSolveError(Exception):
    '''
    Root of all expression errors.

    Subclasses define a ``Kind`` Enum whose values are the messages.
    '''

    def __init__(self, kind, text, pos, source=None):
        self.kind = kind
        self.text = text
        self.pos = pos
        self.source = source
        super().__init__(self.brief)

    @property
    def brief(self):
        if not self.text:
            return '{} at {}'.format(self.kind.value, self.pos)
        return '{} `{}` at {}'.format(self.kind.value, self.text, self.pos)

    def diagnostic(self, source=None):
        '''
        Return (brief, source line, caret line) pointing at the offending text.
        '''
        if source is None:
            source = self.source or ''
        start = source.rfind('\n', 0, self.pos) + 1
        end = source.find('\n', self.pos)
        if end == -1:
            end = len(source)
        cursor = ' ' * (self.pos - start) + '^' * max(len(self.text), 1)
        return self.brief, source[start:end], cursor

    def render(self, source=None):
        return 'error: {}\n{}\n{}'.format(*self.diagnostic(source))


class LexError(XSolveError):
    class Kind(Enum):
        WRONG_NUMBER = 'could not parse number'
        UNKNOWN_IDENT = 'unknown identifier'
        UNKNOWN_SYMBOL = 'unknown symbol'


class ParseError(XSolveError):
    class Kind(Enum):
        UNMATCHED_PARENTHESIS = 'unmatched parenthesis'
        MISSING_CALL = 'expected `(` after function'


class ExecutionError(XSolveError):
    class Kind(Enum):
        MISSING_ARGUMENT_VALUE = 'argument value is required for'
        UNMATCHED_OPERATOR = 'unmatched operator'
        MISSING_OPERATOR = 'missing operator before'
        WRONG_ARGS = 'wrong number of arguments for'
        EMPTY_EXPRESSION = 'nothing to evaluate'
