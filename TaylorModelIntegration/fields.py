"""Coefficient fields of the polynomials.

A polynomial stores its coefficients as a pair of arrays ``(lb, ub)``. In the
real field both entries are the same array and the arithmetic is plain
floating point; in the interval field the pair holds the bounds of interval
coefficients and the arithmetic is rounded outward. Mixing both fields gives
the interval field, since a real coefficient pair ``(c, c)`` is a valid thin
interval.

Remainders are always interval valued, also for polynomials with real
coefficients. The set operations on remainders only exist in the interval
field, since a real hull would not fit in a single array.
"""
import numpy as np

from .interval import Interval
from .intervalN import add_iv, sub_iv, mul_iv_s, mul_iv_i, polymul_i, \
                       polymul_r, supnorm_i, inflate_iv, hull_iv, subset_iv, \
                       add_down, add_up, div_down


class RealField:
    """Floating point coefficients (round to nearest)"""
    isInterval = False

    @staticmethod
    def add(a, b):
        res = a[0] + b[0]
        return res, res

    @staticmethod
    def sub(a, b):
        res = a[0] - b[0]
        return res, res

    @staticmethod
    def neg(a):
        res = -a[0]
        return res, res

    @staticmethod
    def scale(a, val):
        res = a[0] * float(val)
        return res, res

    @staticmethod
    def divide(a, val):
        res = a[0] / float(val)
        return res, res

    @staticmethod
    def addConstant(a, val):
        res = a[0].copy()
        res[0] += float(val)
        return res, res

    @staticmethod
    def mul(a, b, ctx, nOut):
        res = polymul_r(a[0], b[0], ctx.prodA, ctx.prodB, ctx.prodC, nOut)
        return res, res

    @staticmethod
    def supNorm(a):
        return float(np.max(np.abs(a[0])))

    @staticmethod
    def hasZero(aux):
        return aux == 0.0

    @staticmethod
    def stepCandidate(epsilon, aux, k):
        """ (epsilon/aux)^(1/k) used directly as a step"""
        return (epsilon / aux) ** (1.0 / k)


class IntervalField:
    """Interval coefficients with outward rounded arithmetic"""
    isInterval = True

    @staticmethod
    def add(a, b):
        return add_iv(a[0], a[1], b[0], b[1])

    @staticmethod
    def sub(a, b):
        return sub_iv(a[0], a[1], b[0], b[1])

    @staticmethod
    def neg(a):
        return -a[1], -a[0]

    @staticmethod
    def scale(a, val):
        if isinstance(val, Interval):
            return mul_iv_i(a[0], a[1], val.lb, val.ub)
        return mul_iv_s(a[0], a[1], float(val))

    @staticmethod
    def divide(a, val):
        return IntervalField.scale(a, Interval(1.0) / val)

    @staticmethod
    def addConstant(a, val):
        val = Interval(val)
        res_lb = a[0].copy()
        res_ub = a[1].copy()
        res_lb[0] = add_down(res_lb[0], val.lb)
        res_ub[0] = add_up(res_ub[0], val.ub)
        return res_lb, res_ub

    @staticmethod
    def mul(a, b, ctx, nOut):
        return polymul_i(a[0], a[1], b[0], b[1],
                         ctx.prodA, ctx.prodB, ctx.prodC, nOut)

    @staticmethod
    def supNorm(a):
        return Interval(*supnorm_i(a[0], a[1]))

    @staticmethod
    def hasZero(aux):
        return aux.contains(0.0)

    @staticmethod
    def stepCandidate(epsilon, aux, k):
        """ Lower bound of the enclosure of (epsilon/aux)^(1/k), so that the
            step never overshoots"""
        ratio = div_down(float(epsilon), aux.ub)
        return float(np.nextafter(ratio ** (1.0 / k), -np.inf))

    @staticmethod
    def hull(a, b):
        return hull_iv(a[0], a[1], b[0], b[1])

    @staticmethod
    def subset(a, b):
        return subset_iv(a[0], a[1], b[0], b[1])

    @staticmethod
    def inflate(a):
        """ Floating predecessor of the lower bounds and successor of the
            upper bounds"""
        return inflate_iv(a[0], a[1])


def promote(fieldA, fieldB):
    """ Field of the result of an operation mixing fieldA and fieldB"""
    if fieldA.isInterval or fieldB.isInterval:
        return IntervalField
    return RealField
