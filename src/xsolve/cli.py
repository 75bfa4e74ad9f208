from os import path
from argparse import ArgumentParser, OPTIONAL
import logging
import sys

from prompt_toolkit import PromptSession, print_formatted_text
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.history import FileHistory

from .errors import XSolveError
from .expression import compile_expression
from .solvers import MAX_ITERATIONS, integral, root
from .tokens import Kind


logger = logging.getLogger(__name__)


def print_diagnostic(error, file=None):
    '''
    Show an error under the source line it points into.

    Coloured on a terminal, plain text otherwise.
    '''
    brief, line, cursor = error.diagnostic()
    print_formatted_text(FormattedText([('bold fg:ansired', 'error'),
                                        ('', ': {}\n{}\n'.format(brief, line)),
                                        ('bold fg:ansiyellow', cursor)]),
                         file=file or sys.stderr)


class InteractiveInput:
    def __init__(self, prompt, history=None):
        self.prompt = prompt
        self.history = history

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    history=self.history,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the expression solver.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.xsolve_history'
    DEFAULT_EPS = 0.000_001
    DEFAULT_MAX_ITERATIONS = MAX_ITERATIONS

    def _value(self, expr):
        '''
        Evaluate a numeric argument, itself an expression without x.
        '''
        return compile_expression(expr).evaluate()

    def _bounds(self):
        '''
        Compile the function and evaluate the interval and tolerance.
        '''
        f = compile_expression(self.args.expr)
        x1 = self._value(self.args.x1)
        x2 = self._value(self.args.x2)
        if self.args.eps is None:
            eps = self.DEFAULT_EPS
        else:
            eps = self._value(self.args.eps)
        logger.debug('%r on [%g, %g], eps %g', f, x1, x2, eps)
        return f, x1, x2, eps

    def evaluate(self):
        '''
        Print the value of the expression.
        '''
        x = None if self.args.x is None else self._value(self.args.x)
        print(compile_expression(self.args.expr).evaluate(x))

    def find_root(self):
        '''
        Print a root of the expression within the interval.
        '''
        f, x1, x2, eps = self._bounds()
        result = root(f, x1, x2, eps, self.args.max_iterations)
        if result is None:
            print('could not find root')
        else:
            print(result)

    def integrate(self):
        '''
        Print the definite integral of the expression over the interval.
        '''
        f, x1, x2, eps = self._bounds()
        print(integral(f, x1, x2, eps, self.args.max_iterations))

    def dumper(self):
        '''
        Dump the compiled postfix tokens, with function arity.
        '''
        expression = compile_expression(self.args.expr)
        print('<kind>\t<repr(text)>\t<pos>\t<arity>')
        for token in expression.postfix:
            arity = token.value.arity if token.kind is Kind.FUNC else None
            print(token.kind.name, repr(token.text), token.pos, arity,
                  sep='\t')

    def executor(self):
        '''
        Evaluate expressions line by line until input runs out.
        '''
        x = None if self.args.x is None else self._value(self.args.x)
        for line in self._prompting_input():
            line = line.strip()
            if not line:
                continue
            try:
                print(compile_expression(line).evaluate(x))
            # Report and carry on with the next line
            except XSolveError as e:
                print_diagnostic(e)

    def _prompting_input(self):
        '''
        Return prompting input if either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        and plain stdin otherwise.
        '''
        if self.args.prompt or \
           sys.stdin.isatty() and sys.stdout.isatty():
            history = FileHistory(path.expanduser(self.HISTORY_FILE))
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    history=history)
        else:
            return sys.stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(
            prog='xsolve',
            description='Evaluate, find roots of and integrate expressions '
                        'in x')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='log what is being solved')
        commands = self.argument_parser.add_subparsers(dest='command',
                                                       metavar='COMMAND',
                                                       required=True)

        eval_ = commands.add_parser('eval', help='evaluate expression')
        eval_.add_argument('expr', help='expression to be evaluated')
        eval_.add_argument('-x',
                           help='value of x, not required for expressions '
                                'without it (expression allowed)')
        eval_.set_defaults(action=self.evaluate)

        for name, action, help_ in [('root', self.find_root,
                                     'find a root of EXPR between X1 and X2 '
                                     'by false position'),
                                    ('integral', self.integrate,
                                     'integrate EXPR from X1 to X2 by '
                                     'the trapezoid rule')]:
            solver = commands.add_parser(name, help=help_)
            solver.add_argument('expr', help='expression in x')
            solver.add_argument('x1',
                                help='interval bound (expression allowed)')
            solver.add_argument('x2', help='same as for X1')
            solver.add_argument('--eps',
                                help='tolerance, defaults to {:g} '
                                     '(expression allowed)'
                                     .format(self.DEFAULT_EPS))
            solver.add_argument('--max-iterations',
                                type=int,
                                default=self.DEFAULT_MAX_ITERATIONS,
                                help='defaults to {}'
                                     .format(self.DEFAULT_MAX_ITERATIONS))
            solver.set_defaults(action=action)

        dump = commands.add_parser('postfix',
                                   help='show the compiled postfix tokens')
        dump.add_argument('expr')
        dump.set_defaults(action=self.dumper)

        repl = commands.add_parser('repl',
                                   help='evaluate expressions read line by '
                                        'line')
        repl.add_argument('-p', '--prompt',
                          nargs=OPTIONAL,
                          const=self.DEFAULT_PROMPT)
        repl.add_argument('-x', help='value of x (expression allowed)')
        repl.set_defaults(action=self.executor)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.

        Returns the exit status.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(
            level=logging.DEBUG if self.args.verbose else logging.WARNING,
            format='%(levelname)s %(name)s: %(message)s')
        try:
            self.args.action()
        except XSolveError as e:
            print_diagnostic(e)
            return 1
        except KeyboardInterrupt:
            return 1
        return 0


def main():
    sys.exit(CLI().run())
