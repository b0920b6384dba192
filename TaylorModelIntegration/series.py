import numpy as np

from numpy import float64 as realN

from .interval import Interval, i2n
from .intervalN import polyeval_i
from .fields import RealField, IntervalField, promote


class TaylorN:
    """Truncated polynomial in the jet transport variables of a JetContext.

    Parameters
    ----------
    :param ctx: The JetContext the polynomial is built on
    :param coeffs: Pair (lb, ub) of coefficient arrays of length
                   ctx.ncoeffs(order). For the real field both entries are
                   the same array.
    :param order: The order (degree) of the polynomial
    :param field: RealField or IntervalField
    """
    __array_ufunc__ = None

    def __init__(self, ctx, coeffs, order, field=IntervalField):
        nCoeffs = ctx.ncoeffs(order)
        c_lb = np.asarray(coeffs[0], dtype=realN)
        assert c_lb.shape == (nCoeffs,), \
            "Expected {} coefficients, got {}".format(nCoeffs, c_lb.shape)
        if field.isInterval:
            c_ub = np.asarray(coeffs[1], dtype=realN)
            assert c_ub.shape == c_lb.shape
        else:
            c_ub = c_lb
        self.ctx = ctx
        self.order = order
        self.field = field
        self.coeffs = (c_lb, c_ub)

    @staticmethod
    def zero(ctx, order, field=IntervalField):
        res = np.zeros(ctx.ncoeffs(order), dtype=realN)
        return TaylorN(ctx, (res, res.copy()), order, field)

    @staticmethod
    def constant(ctx, val, order, field=IntervalField):
        if isinstance(val, Interval):
            field = promote(field, IntervalField)
        return TaylorN.zero(ctx, order, field) + val

    @staticmethod
    def variable(ctx, i, order, field=IntervalField):
        """ The i-th (0-based) jet transport variable"""
        assert 0 <= i < ctx.numvars and order >= 1
        res = np.zeros(ctx.ncoeffs(order), dtype=realN)
        exps = [0] * ctx.numvars
        exps[i] = 1
        res[ctx.index[tuple(exps)]] = 1.0
        return TaylorN(ctx, (res, res.copy()), order, field)

    def __repr__(self):
        terms = []
        for k in range(self.coeffs[0].shape[0]):
            c = self.coeff(k)
            if c == 0:
                continue
            terms.append('{} {}'.format(c, tuple(self.ctx.exps[k])))
        return 'TaylorN(' + (' + '.join(terms) if terms else '0') + ')'

    def coeff(self, k):
        """ Coefficient of the k-th monomial, or of the monomial with the
            given exponent tuple"""
        if isinstance(k, tuple):
            k = self.ctx.index[k]
        if self.field.isInterval:
            return Interval(self.coeffs[0][k], self.coeffs[1][k])
        return float(self.coeffs[0][k])

    def _check(self, other):
        assert self.ctx is other.ctx, \
            "Polynomials from different jet transport contexts; values " \
            "built before set_variables cannot be reused"

    def _padded(self, order):
        """ Coefficients extended with zeros up to the given order"""
        n = self.ctx.ncoeffs(order)
        c_lb, c_ub = self.coeffs
        if c_lb.shape[0] == n:
            return self.coeffs
        res_lb = np.zeros(n, dtype=realN)
        res_lb[:c_lb.shape[0]] = c_lb
        if c_ub is c_lb:
            return res_lb, res_lb
        res_ub = np.zeros(n, dtype=realN)
        res_ub[:c_ub.shape[0]] = c_ub
        return res_lb, res_ub

    def __add__(self, other):
        if isinstance(other, TaylorN):
            self._check(other)
            order = max(self.order, other.order)
            field = promote(self.field, other.field)
            return TaylorN(self.ctx, field.add(self._padded(order),
                                               other._padded(order)),
                           order, field)
        if isinstance(other, Interval):
            return TaylorN(self.ctx, IntervalField.addConstant(self.coeffs,
                           other), self.order, IntervalField)
        if isinstance(other, (int, float, np.integer, np.floating)):
            return TaylorN(self.ctx, self.field.addConstant(self.coeffs,
                           other), self.order, self.field)
        return NotImplemented

    def __radd__(self, other):
        return self.__add__(other)

    def __neg__(self):
        return TaylorN(self.ctx, self.field.neg(self.coeffs), self.order,
                       self.field)

    def __sub__(self, other):
        if isinstance(other, (TaylorN, Interval, int, float, np.integer,
                              np.floating)):
            return self.__add__(-other)
        return NotImplemented

    def __rsub__(self, other):
        return (-self).__add__(other)

    def product(self, other, order):
        """ Product of two polynomials truncated at the given order"""
        self._check(other)
        field = promote(self.field, other.field)
        nOut = self.ctx.ncoeffs(order)
        return TaylorN(self.ctx, field.mul(self.coeffs, other.coeffs,
                       self.ctx, nOut), order, field)

    def __mul__(self, other):
        if isinstance(other, TaylorN):
            return self.product(other, max(self.order, other.order))
        if isinstance(other, Interval):
            return TaylorN(self.ctx, IntervalField.scale(self.coeffs, other),
                           self.order, IntervalField)
        if isinstance(other, (int, float, np.integer, np.floating)):
            return TaylorN(self.ctx, self.field.scale(self.coeffs, other),
                           self.order, self.field)
        return NotImplemented

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        if isinstance(other, Interval):
            return TaylorN(self.ctx, IntervalField.divide(self.coeffs, other),
                           self.order, IntervalField)
        if isinstance(other, (int, float, np.integer, np.floating)):
            return TaylorN(self.ctx, self.field.divide(self.coeffs, other),
                           self.order, self.field)
        return NotImplemented

    def truncate(self, order):
        """ Polynomial made of the terms of degree <= order"""
        n = self.ctx.ncoeffs(order)
        c_lb, c_ub = self.coeffs
        res_ub = c_lb[:n].copy() if c_ub is c_lb else c_ub[:n].copy()
        res_lb = res_ub if c_ub is c_lb else c_lb[:n].copy()
        return TaylorN(self.ctx, (res_lb, res_ub), order, self.field)

    def tail(self, order):
        """ Polynomial made of the terms of degree > order"""
        n = self.ctx.ncoeffs(order)
        c_lb, c_ub = self.coeffs
        res_lb = c_lb.copy()
        res_lb[:n] = 0.0
        if c_ub is c_lb:
            res_ub = res_lb
        else:
            res_ub = c_ub.copy()
            res_ub[:n] = 0.0
        return TaylorN(self.ctx, (res_lb, res_ub), self.order, self.field)

    def evaluate(self, d_lb, d_ub=None):
        """ Enclosure of the polynomial over the box (d_lb, d_ub) of the
            variables. A box of Interval, or a point, is also accepted."""
        if d_ub is None:
            d_lb, d_ub = i2n(d_lb)
        m_lb, m_ub = self.ctx.monomialBounds(d_lb, d_ub)
        return Interval(*polyeval_i(self.coeffs[0], self.coeffs[1],
                                    m_lb, m_ub))

    def __call__(self, d_lb, d_ub=None):
        return self.evaluate(d_lb, d_ub)

    def supNorm(self):
        """ Maximum absolute value of the coefficients: a float in the real
            field, an Interval in the interval field"""
        return self.field.supNorm(self.coeffs)

    def toIntervalField(self):
        c_lb, c_ub = self.coeffs
        return TaylorN(self.ctx, (c_lb.copy(), c_ub.copy()), self.order,
                       IntervalField)

    def midpoint(self):
        """ Split into the real polynomial of the coefficient midpoints and
            the interval polynomial of the deviations from them"""
        c_lb, c_ub = self.coeffs
        mid = 0.5 * c_lb + 0.5 * c_ub
        midPol = TaylorN(self.ctx, (mid, mid), self.order, RealField)
        dev = TaylorN(self.ctx, (c_lb, c_ub), self.order, IntervalField) - \
                midPol
        return midPol, dev


def zeroLike(c):
    if hasattr(c, 'zero'):
        return c.zero()
    return 0.0 * c

def oneLike(c):
    return zeroLike(c) + 1.0


class Taylor1:
    """Truncated Taylor series in one variable (the time) whose coefficients
    can be numbers, Interval or Taylor models.

    :param coeffs: The coefficients, padded with zeros or truncated to
                   order+1 entries
    :param order: The order of the series, len(coeffs)-1 by default
    """
    __array_ufunc__ = None

    def __init__(self, coeffs, order=None):
        coeffs = list(coeffs)
        assert len(coeffs) >= 1, "A Taylor1 needs at least one coefficient"
        if order is None:
            order = len(coeffs) - 1
        if len(coeffs) < order + 1:
            zero = zeroLike(coeffs[0])
            coeffs.extend([zero] * (order + 1 - len(coeffs)))
        self.coeffs = tuple(coeffs[:order + 1])
        self.order = order

    @staticmethod
    def variable(order, t0=0.0):
        """ The independent variable t0 + t"""
        return Taylor1([t0, oneLike(t0)], order)

    def __repr__(self):
        return 'Taylor1({}, order={})'.format(list(self.coeffs), self.order)

    def __getitem__(self, k):
        return self.coeffs[k]

    def __len__(self):
        return self.order + 1

    def constant_term(self):
        return self.coeffs[0]

    def truncate(self, order):
        return Taylor1(self.coeffs[:order + 1], order)

    def _padded(self, order):
        if order == self.order:
            return self.coeffs
        return Taylor1(self.coeffs, order).coeffs

    def __add__(self, other):
        if isinstance(other, Taylor1):
            order = max(self.order, other.order)
            return Taylor1([a + b for a, b in zip(self._padded(order),
                                                  other._padded(order))],
                           order)
        return Taylor1((self.coeffs[0] + other,) + self.coeffs[1:],
                       self.order)

    def __radd__(self, other):
        return Taylor1((other + self.coeffs[0],) + self.coeffs[1:],
                       self.order)

    def __neg__(self):
        return Taylor1([-c for c in self.coeffs], self.order)

    def __sub__(self, other):
        if isinstance(other, Taylor1):
            return self.__add__(-other)
        return Taylor1((self.coeffs[0] - other,) + self.coeffs[1:],
                       self.order)

    def __rsub__(self, other):
        return (-self).__radd__(other)

    def __mul__(self, other):
        if isinstance(other, Taylor1):
            order = max(self.order, other.order)
            a = self._padded(order)
            b = other._padded(order)
            coeffs = []
            for k in range(order + 1):
                acc = a[0] * b[k]
                for i in range(1, k + 1):
                    acc = acc + a[i] * b[k - i]
                coeffs.append(acc)
            return Taylor1(coeffs, order)
        return Taylor1([c * other for c in self.coeffs], self.order)

    def __rmul__(self, other):
        return Taylor1([other * c for c in self.coeffs], self.order)

    def __truediv__(self, other):
        if isinstance(other, Taylor1):
            return NotImplemented
        return Taylor1([c / other for c in self.coeffs], self.order)

    def __pow__(self, val):
        assert isinstance(val, (int, np.integer)) and val >= 0,\
            'Power: {val} not a non-negative integer'.format(val=val)
        res = Taylor1([oneLike(self.coeffs[0])], self.order)
        for _ in range(val):
            res = res * self
        return res

    def evaluate(self, dt):
        """ Horner evaluation of the series at dt (a number or an
            Interval)"""
        res = self.coeffs[-1]
        for k in range(self.order - 1, -1, -1):
            res = res * dt + self.coeffs[k]
        return res

    def __call__(self, dt):
        return self.evaluate(dt)
