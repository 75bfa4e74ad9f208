from functools import reduce
import operator

import regex

from .errors import LexError
from .namespace import resolve
from .tokens import Kind, Token


SYMBOLS = {
    '+': Kind.ADD,
    # Always unary here. Whether it subtracts depends on what came before it,
    # which is the parser's business.
    '-': Kind.UNARY_MINUS,
    '*': Kind.MUL,
    '/': Kind.DIV,
    '^': Kind.POW,
    '(': Kind.LPAREN,
    ')': Kind.RPAREN,
    ',': Kind.COMMA,
}


class Lexer:
    '''
    Lexer for infix expressions in x.

    Iterates over the tokens of one source string, on demand. Like any
    iterator, it is spent once exhausted; lex the source again with a new
    Lexer.
    '''
    # ASCII only; \s and \d would let in Unicode spaces and digits.
    SPACE = r'[\t\n\x0c\r\x20]+'
    # Maximal run of digits and dots; float() decides whether it is a number.
    NUMBER = r'[0-9.]+'
    IDENT = r'[A-Za-z_][A-Za-z0-9_]*'
    SYMBOL = r'[-+*/^(),]'

    # All possible lexemes, and then anything else, one character at a time.
    LEXEME = r'''
              (?<space>{SPACE})
              |
              (?<number>{NUMBER})
              |
              (?<ident>{IDENT})
              |
              (?<symbol>{SYMBOL})
              |
              (?<unknown>.)
              '''.format(SPACE=SPACE, NUMBER=NUMBER, IDENT=IDENT,
                         SYMBOL=SYMBOL)
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)
    PATTERN = regex.compile(LEXEME, flags=FLAGS)

    def __init__(self, source):
        self.source = source
        self.pos = 0

    def __iter__(self):
        return self

    def __next__(self):
        while self.pos < len(self.source):
            match = type(self).PATTERN.match(self.source, self.pos)
            self.pos = match.end()
            if match.lastgroup != 'space':
                return self._token(match)
        raise StopIteration

    def _token(self, match):
        '''
        Turn a lexeme match into a token, or raise on a bad one.
        '''
        pos, text = match.start(), match.group()
        group = match.lastgroup
        if group == 'symbol':
            return Token(pos, text, SYMBOLS[text])
        elif group == 'number':
            try:
                return Token(pos, text, Kind.NUMBER, float(text))
            except ValueError:
                self._fail(LexError.Kind.WRONG_NUMBER, text, pos)
        elif group == 'ident':
            resolved = resolve(text)
            if resolved is None:
                self._fail(LexError.Kind.UNKNOWN_IDENT, text, pos)
            kind, value = resolved
            return Token(pos, text, kind, value)
        self._fail(LexError.Kind.UNKNOWN_SYMBOL, text, pos)

    def _fail(self, kind, text, pos):
        # Nothing after a bad lexeme is worth reading.
        self.pos = len(self.source)
        raise LexError(kind, text, pos, source=self.source)


def tokenize(source):
    '''
    Return all tokens of source as a list.
    '''
    return list(Lexer(source))
