from pytest import fixture

from xsolve.expression import compile_expression


@fixture
def cubic():
    '''
    f(x) = sin(x) - x³ + 3, root near 1.58738286, 12 under it on [-2, 2].
    '''
    return compile_expression('sin(x) - x^3 + 3')
