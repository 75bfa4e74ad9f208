'''
Infix to postfix, by the shunting-yard algorithm.
'''

from .errors import ParseError
from .tokens import Kind


class Parser:
    '''
    Rewrite a token stream into Reverse Polish order.

    Only parenthesis nesting and call syntax are checked. Whether operators
    have their operands and functions their arguments is left to the machine
    running the result.
    '''

    def __init__(self, source):
        self.source = source

    def parse(self, tokens):
        '''
        Return the postfix tuple of tokens.

        :param tokens: iterable of tokens, typically a Lexer over the source.
        '''
        output = []
        stack = []
        previous = None
        for token in tokens:
            if previous is not None and previous.kind is Kind.FUNC and \
               token.kind is not Kind.LPAREN:
                self._fail(ParseError.Kind.MISSING_CALL, previous)
            if token.kind is Kind.UNARY_MINUS and \
               previous is not None and previous.closes_operand:
                token = token._replace(kind=Kind.SUB)

            if token.is_operand:
                output.append(token)
            elif token.kind in (Kind.FUNC, Kind.LPAREN):
                stack.append(token)
            elif token.kind is Kind.RPAREN:
                self._close(token, stack, output)
            else:
                while stack and stack[-1].precedence >= token.precedence:
                    output.append(stack.pop())
                stack.append(token)
            previous = token

        if previous is not None and previous.kind is Kind.FUNC:
            self._fail(ParseError.Kind.MISSING_CALL, previous)
        while stack:
            token = stack.pop()
            if token.kind is Kind.LPAREN:
                self._fail(ParseError.Kind.UNMATCHED_PARENTHESIS, token)
            output.append(token)
        return tuple(output)

    def _close(self, rparen, stack, output):
        '''
        Pop operators down to the matching parenthesis, dropping both.
        '''
        while stack:
            token = stack.pop()
            if token.kind is Kind.LPAREN:
                return
            output.append(token)
        self._fail(ParseError.Kind.UNMATCHED_PARENTHESIS, rparen)

    def _fail(self, kind, token):
        raise ParseError(kind, token.text, token.pos, source=self.source)
