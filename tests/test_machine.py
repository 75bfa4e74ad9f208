'''
Stack machine tests
'''

from concurrent.futures import ThreadPoolExecutor
import math

import regex

from xsolve.errors import ExecutionError
from xsolve.lexer import Lexer
from xsolve.machine import Machine, evaluate
from xsolve.parser import Parser
from xsolve.tokens import Kind, Token

from pytest import approx, raises


def postfix(source):
    return Parser(source).parse(Lexer(source))


def run(source, x=None):
    return evaluate(postfix(source), x, source=source)


def test_it_works():
    assert run('-2 * e^sin(3.5)') == approx(-1.40827, abs=0.000_01)


def test_arithmetic():
    assert run('2 + 3 * 4') == 14.0
    assert run('(2 + 3) * 4') == 20.0
    assert run('10 / 4') == 2.5
    assert run('7 - 2 - 1') == 4.0
    assert run('2 ^ 10') == 1024.0


def test_unary_minus():
    assert run('3 - -2') == 5.0
    assert run('-3 - 2') == -5.0
    assert run('(3) - 2') == 1.0
    # Negation binds tighter than ^
    assert run('-2 ^ 2') == 4.0


def test_pow_is_left_associative():
    assert run('2 ^ 3 ^ 2') == 64.0


def test_functions():
    assert run('sqrt(16)') == 4.0
    assert run('max(1, 2)') == 2.0
    assert run('min(1, 2)') == 1.0
    assert run('pow(2, 10)') == 1024.0
    assert run('atan2(1, 0)') == approx(math.pi / 2)
    assert run('hypot(3, 4)') == 5.0
    assert run('mul_add(2, 3, 4)') == 10.0
    assert run('clamp(5, 0, 3)') == 3.0
    assert run('clamp(-5, 0, 3)') == 0.0
    assert run('toDeg(pi)') == approx(180.0)
    assert run('toRad(180)') == approx(math.pi)
    assert run('cbrt(-27)') == approx(-3.0)
    assert run('recip(4)') == 0.25


def test_rounding_functions():
    assert run('round(2.5)') == 3.0
    assert run('round(-2.5)') == -3.0
    assert run('round(2.4)') == 2.0
    assert run('round(x)', 0.499_999_999_999_999_94) == 0.0
    assert run('round(-0.5)') == -1.0
    assert run('round(4503599627370497)') == 4503599627370497.0
    assert run('round(1 / 0)') == math.inf
    assert math.isnan(run('round(0 / 0)'))
    assert run('floor(-1.5)') == -2.0
    assert run('ceil(-1.5)') == -1.0
    assert run('trunc(-1.5)') == -1.0
    assert run('fract(-1.25)') == -0.25
    assert run('sign(-3)') == -1.0
    assert run('sign(0)') == 1.0


def test_arguments_in_written_order():
    assert run('pow(2, 3)') == 8.0
    assert run('atan2(0, -1)') == approx(math.pi)
    assert run('clamp(1, 2, 3)') == 2.0


def test_nested_calls():
    assert run('max(1, min(2, 3))') == 2.0
    assert run('clamp(1, 2, min(3, 4))') == 2.0
    assert run('clamp(1, min(2, 3), 4)') == 2.0
    assert run('clamp(max(1, 2), 0, 4)') == 2.0
    assert run('clamp(1, 2 * min(3, 4), 10)') == 6.0
    assert run('clamp(0, 1 - 2, 3)') == 0.0
    assert run('2 * max(1, 3) + sin(0)') == 6.0


def test_ieee_semantics():
    assert run('1 / 0') == math.inf
    assert run('-1 / 0') == -math.inf
    assert math.isnan(run('0 / 0'))
    assert math.isnan(run('sqrt(-1)'))
    assert run('ln(0)') == -math.inf
    assert run('exp(1000)') == math.inf
    assert run('10 ^ 400') == math.inf
    assert math.isnan(run('(-8) ^ (1 / 3)'))
    assert math.isnan(run('acos(2)'))


def test_variable():
    assert run('x ^ 2 + 1', 3.0) == 10.0
    assert run('-x', 2) == -2.0


def test_missing_variable():
    with raises(ExecutionError, match=regex.escape(
            'argument value is required for `x` at 4')) as e:
        run('1 + x')
    assert e.value.kind is ExecutionError.Kind.MISSING_ARGUMENT_VALUE


def test_wrong_args():
    with raises(ExecutionError, match=regex.escape(
            'wrong number of arguments for `sin` at 0')) as e:
        run('sin(1, 2)')
    assert e.value.kind is ExecutionError.Kind.WRONG_ARGS
    with raises(ExecutionError, match=regex.escape('`max` at 0')):
        run('max(1)')
    with raises(ExecutionError, match=regex.escape('`clamp` at 0')):
        run('clamp(1, 2)')
    with raises(ExecutionError, match=regex.escape('`max` at 0')):
        run('max()')


def test_unmatched_operator():
    with raises(ExecutionError,
                match=regex.escape('unmatched operator `+` at 2')) as e:
        run('1 +')
    assert e.value.kind is ExecutionError.Kind.UNMATCHED_OPERATOR
    with raises(ExecutionError, match=regex.escape('`-` at 0')):
        run('-')
    with raises(ExecutionError, match=regex.escape('`*` at 0')):
        run('* 2')
    with raises(ExecutionError, match=regex.escape('`,` at 0')):
        run(',')
    # A negation stacked on a negation is flushed before its operand
    with raises(ExecutionError, match=regex.escape('`-` at 0')):
        run('--2')
    assert run('-(-2)') == 2.0


def test_missing_operator():
    tokens = (Token(0, '1', Kind.NUMBER, 1.0), Token(2, '2', Kind.NUMBER, 2.0))
    with raises(ExecutionError,
                match=regex.escape('missing operator before `2` at 2')) as e:
        evaluate(tokens)
    assert e.value.kind is ExecutionError.Kind.MISSING_OPERATOR


def test_missing_operator_points_at_subexpression():
    with raises(ExecutionError, match=regex.escape('`3` at 2')):
        run('2 3 * 4')
    with raises(ExecutionError, match=regex.escape('`sin` at 4')):
        run('(1) sin(2)')


def test_stray_arguments():
    with raises(ExecutionError,
                match=regex.escape('missing operator before `,` at 1')):
        run('1, 2')
    with raises(ExecutionError, match=regex.escape('`,` at 2')):
        run('(1, 2) + 3')
    with raises(ExecutionError, match=regex.escape('`,` at 6')):
        run('3 + (1, 2)')


def test_empty():
    with raises(ExecutionError,
                match=regex.escape('nothing to evaluate at 0')) as e:
        run('')
    assert e.value.kind is ExecutionError.Kind.EMPTY_EXPRESSION
    with raises(ExecutionError):
        run('()')


def test_deterministic():
    tokens = postfix('2 + 2 * sin(3 ^ -3) / pi')
    assert evaluate(tokens) == evaluate(tokens)


def test_postfix_reusable():
    tokens = postfix('x ^ 2 - x')
    before = tuple(tokens)
    assert [evaluate(tokens, x) for x in range(4)] == [0.0, 0.0, 2.0, 6.0]
    assert tokens == before


def test_machine_reusable():
    machine = Machine(x=2.0)
    assert machine.run(postfix('x + 1')) == 3.0
    assert machine.run(postfix('x * 3')) == 6.0
    with raises(ExecutionError):
        machine.run(postfix('x 1'))
    assert machine.run(postfix('x')) == 2.0


def test_concurrent_evaluation():
    tokens = postfix('sin(x) - x ^ 3 + 3')
    xs = [i / 10 for i in range(200)]
    expected = [evaluate(tokens, x) for x in xs]
    with ThreadPoolExecutor(max_workers=4) as pool:
        assert list(pool.map(lambda x: evaluate(tokens, x), xs)) == expected


def test_result_is_float():
    assert type(run('1 + 1')) is float


def test_mul_add_is_fused():
    assert run('mul_add(0.1, 10, -1)') == 5.551115123125783e-17
    assert run('mul_add(10^300, 10^10, -1)') == math.inf
    assert math.isnan(run('mul_add(1 / 0, 0, 1)'))
