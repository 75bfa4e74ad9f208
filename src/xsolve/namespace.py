'''
Names an expression may refer to: the variable, constants and functions.

Everything runs on numpy scalars so that domain errors and overflow give
NaN and infinities instead of raising, like any other IEEE float.
'''

from fractions import Fraction

import numpy as np

from .tokens import Function, Kind


VARIABLE = 'x'

CONSTANTS = {
    'e': float(np.e),
    'pi': float(np.pi),
    'eps': 0.000_001,
}


def _unary(name, f):
    return Function(name, 1, f)


def _binary(name, f):
    return Function(name, 2, f)


def _ternary(name, f):
    return Function(name, 3, f)


def _fract(value):
    return value - np.trunc(value)


def _round(value):
    # Half away from zero; np.round rounds half to even. Never adds 0.5,
    # which rounds 0.49999999999999994 and odd integers past 2**52 up.
    whole = np.trunc(value)
    if np.abs(value - whole) >= 0.5:
        return whole + np.copysign(1.0, value)
    return whole


def _sign(value):
    if np.isnan(value):
        return value
    return np.copysign(np.float64(1.0), value)


def _recip(value):
    return np.float64(1.0) / value


def _mul_add(value, factor, addend):
    # Fused: the exact value * factor + addend is rounded once.
    if not (np.isfinite(value) and np.isfinite(factor)
            and np.isfinite(addend)):
        return value * factor + addend
    exact = (Fraction(float(value)) * Fraction(float(factor))
             + Fraction(float(addend)))
    try:
        return np.float64(float(exact))
    except OverflowError:
        return np.float64(np.inf if exact > 0 else -np.inf)


FUNCTIONS = {
    function.name: function
    for function in [
        _unary('abs', np.fabs),
        _unary('acos', np.arccos),
        _unary('acosh', np.arccosh),
        _unary('asin', np.arcsin),
        _unary('asinh', np.arcsinh),
        _unary('atan', np.arctan),
        _unary('atanh', np.arctanh),
        _unary('cbrt', np.cbrt),
        _unary('ceil', np.ceil),
        _unary('cos', np.cos),
        _unary('cosh', np.cosh),
        _unary('exp', np.exp),
        _unary('exp2', np.exp2),
        _unary('floor', np.floor),
        _unary('fract', _fract),
        _unary('ln', np.log),
        _unary('log2', np.log2),
        _unary('log10', np.log10),
        _unary('recip', _recip),
        _unary('round', _round),
        _unary('sign', _sign),
        _unary('sin', np.sin),
        _unary('sinh', np.sinh),
        _unary('sqrt', np.sqrt),
        _unary('tan', np.tan),
        _unary('tanh', np.tanh),
        _unary('toDeg', np.degrees),
        _unary('toRad', np.radians),
        _unary('trunc', np.trunc),

        _binary('atan2', np.arctan2),
        _binary('hypot', np.hypot),
        # fmax/fmin ignore a NaN argument rather than propagating it.
        _binary('max', np.fmax),
        _binary('min', np.fmin),
        _binary('pow', np.power),

        _ternary('clamp', np.clip),
        _ternary('mul_add', _mul_add),
    ]
}


def resolve(name):
    '''
    Return (kind, value) for an identifier, or None if it means nothing.
    '''
    if name == VARIABLE:
        return Kind.VAR, None
    if name in CONSTANTS:
        return Kind.CONST, CONSTANTS[name]
    if name in FUNCTIONS:
        return Kind.FUNC, FUNCTIONS[name]
    return None
