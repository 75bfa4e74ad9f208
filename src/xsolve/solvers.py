'''
Numerical methods over a real function of one variable.

Both take any callable f(x) -> float, typically a compiled Expression.
Whatever f raises propagates: a function that cannot be evaluated at some
x is not something to iterate around.
'''

import logging


logger = logging.getLogger(__name__)

MAX_ITERATIONS = 100_000


def root(f, x1, x2, eps, max_iterations=None):
    '''
    Find a root of f between x1 and x2 by false position.

    Each step draws the secant through the bracket ends and keeps the half
    whose ends differ in sign.

    :return: the root, or None without a sign change or within the
             iteration limit.
    '''
    if max_iterations is None:
        max_iterations = MAX_ITERATIONS
    for iteration in range(max_iterations):
        if x1 > x2:
            x1, x2 = x2, x1
        f1, f2 = f(x1), f(x2)
        if f1 == 0.0:
            return x1
        if f2 == 0.0:
            return x2
        if x2 - x1 < eps and f1 * f2 < 0.0:
            logger.debug('root bracketed within %g after %d steps',
                         eps, iteration)
            return x1
        if f1 == f2:
            break
        x3 = (x1 * f2 - x2 * f1) / (f2 - f1)
        f3 = f(x3)
        # No progress left to make, at this precision.
        if f3 == 0.0 or f3 == f1:
            logger.debug('root converged after %d steps', iteration)
            return x3
        if f1 * f3 < 0.0:
            x2 = x3
        elif f2 * f3 < 0.0:
            x1 = x3
        else:
            break
    else:
        logger.debug('root not found in %d steps', max_iterations)
    return None


def integral(f, x1, x2, eps, max_iterations=None):
    '''
    Integrate f from x1 to x2 by the trapezoid rule, doubling the number of
    samples until the midpoints agree with the trapezoids so far.

    :param max_iterations: cap on the number of midpoints sampled in one
                           refinement.
    '''
    if max_iterations is None:
        max_iterations = MAX_ITERATIONS
    # TODO: Negate the result for reversed bounds.
    if x1 > x2:
        x1, x2 = x2, x1

    step = x2 - x1
    total = 0.5 * (f(x1) + f(x2))
    n = 1
    while n < max_iterations:
        xi = x1 + 0.5 * step
        inc = f(xi)
        for _ in range(1, n):
            xi += step
            inc += f(xi)
        if step * abs(total - inc) < 6.0 * eps:
            logger.debug('integral converged with %d samples', 2 * n)
            return 0.5 * step * (total + inc)
        total += inc
        step *= 0.5
        n <<= 1
    logger.warning('integral did not converge within %d samples per step',
                   max_iterations)
    return step * total
