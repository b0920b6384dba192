import numpy as np

from .interval import Interval, n2i, i2n
from .intervalN import sub_iv
from .fields import IntervalField
from .series import TaylorN, Taylor1

def _box(x):
    """ Bounds (lb, ub) of a box given as a sequence of Interval or numbers"""
    x_lb, x_ub = i2n(np.array(list(x), dtype=object))
    return x_lb, x_ub

def _scalar(val):
    return isinstance(val, (int, float, np.integer, np.floating, Interval))


class TaylorModelN:
    """ Taylor model in N variables: a polynomial pol in the offsets from the
        expansion point x0 and an interval remainder rem such that a function
        g satisfies g(x) in pol(x - x0) + rem for every x in the domain dom.

    Parameters
    ----------
    :param pol: TaylorN polynomial
    :param rem: Interval remainder, must contain 0
    :param x0: Expansion point box, sequence of Interval
    :param dom: Domain box, sequence of Interval containing x0
    """
    __array_ufunc__ = None

    def __init__(self, pol, rem, x0, dom):
        x0_lb, x0_ub = _box(x0)
        dom_lb, dom_ub = _box(dom)
        assert x0_lb.shape[0] == pol.ctx.numvars, \
            "Taylor model of {} variables over a jet transport context of " \
            "{} variables".format(x0_lb.shape[0], pol.ctx.numvars)
        assert dom_lb.shape == x0_lb.shape
        assert np.all(IntervalField.subset((x0_lb, x0_ub), (dom_lb, dom_ub))),\
            "Expansion point {} not inside the domain {}".format(n2i(x0_lb,
                x0_ub), n2i(dom_lb, dom_ub))
        self._x0 = (x0_lb, x0_ub)
        self._dom = (dom_lb, dom_ub)
        self._centered = sub_iv(dom_lb, dom_ub, x0_lb, x0_ub)
        self._set(pol, rem)

    @classmethod
    def variable(cls, ctx, i, order, x0, dom):
        """ Taylor model of the i-th (0-based) independent variable, that is
            x0[i] plus the i-th offset from the expansion point"""
        x0_lb, x0_ub = _box(x0)
        pol = TaylorN.variable(ctx, i, order) + Interval(x0_lb[i], x0_ub[i])
        return cls(pol, Interval(0.0), x0, dom)

    @classmethod
    def constant(cls, ctx, val, order, x0, dom, field=IntervalField):
        """ Taylor model of the constant val. Interval values give interval
            coefficients whatever the field"""
        return cls(TaylorN.constant(ctx, val, order, field), Interval(0.0),
                   x0, dom)

    def _set(self, pol, rem):
        rem = Interval(rem)
        assert rem.contains(0.0), \
            "The remainder {} must contain 0".format(rem)
        self.pol = pol
        self.rem = rem

    def _like(self, pol, rem):
        """ New Taylor model with the same expansion point and domain"""
        res = TaylorModelN.__new__(TaylorModelN)
        res._x0 = self._x0
        res._dom = self._dom
        res._centered = self._centered
        res._set(pol, rem)
        return res

    @property
    def x0(self):
        return n2i(*self._x0)

    @property
    def dom(self):
        return n2i(*self._dom)

    @property
    def order(self):
        return self.pol.order

    @property
    def field(self):
        return self.pol.field

    def __repr__(self):
        return 'TaylorModelN({}, rem={})'.format(self.pol, self.rem)

    def _check(self, other):
        assert self.pol.ctx is other.pol.ctx, \
            "Taylor models from different jet transport contexts; values " \
            "built before set_variables cannot be reused"
        assert np.array_equal(self._x0[0], other._x0[0]) and \
               np.array_equal(self._x0[1], other._x0[1]) and \
               np.array_equal(self._dom[0], other._dom[0]) and \
               np.array_equal(self._dom[1], other._dom[1]), \
            "Taylor models with different expansion points or domains"

    def withRemainder(self, rem):
        """ Same polynomial, expansion point and domain with the remainder
            rem"""
        return self._like(self.pol, rem)

    def zero(self):
        return self._like(TaylorN.zero(self.pol.ctx, self.order, self.field),
                          Interval(0.0))

    def __add__(self, other):
        if isinstance(other, TaylorModelN):
            self._check(other)
            return self._like(self.pol + other.pol, self.rem + other.rem)
        if _scalar(other):
            return self._like(self.pol + other, self.rem)
        return NotImplemented

    def __radd__(self, other):
        return self.__add__(other)

    def __neg__(self):
        return self._like(-self.pol, -self.rem)

    def __sub__(self, other):
        if isinstance(other, TaylorModelN) or _scalar(other):
            return self.__add__(-other)
        return NotImplemented

    def __rsub__(self, other):
        return (-self).__add__(other)

    def __mul__(self, other):
        if _scalar(other):
            return self._like(self.pol * other, self.rem * other)
        if not isinstance(other, TaylorModelN):
            return NotImplemented
        self._check(other)
        order = max(self.order, other.order)
        ctx = self.pol.ctx
        assert 2 * order <= ctx.order, \
            "Products of order {} polynomials need a jet transport order of " \
            "at least {}, got {}".format(order, 2 * order, ctx.order)
        full = self.pol.product(other.pol, 2 * order)
        pol = full.truncate(order)
        # Terms above the order go to the remainder together with the
        # products involving the remainders
        rem = self._bound(full.tail(order))
        bSelf = self._bound(self.pol)
        bOther = self._bound(other.pol)
        rem = rem + bSelf * other.rem + bOther * self.rem + \
                self.rem * other.rem
        return self._like(pol, rem)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        if _scalar(other):
            return self._like(self.pol / other, self.rem / other)
        return NotImplemented

    def __pow__(self, val):
        assert isinstance(val, (int, np.integer)) and val >= 0,\
            'Power: {val} not a non-negative integer'.format(val=val)
        res = self.zero() + 1.0
        for _ in range(val):
            res = res * self
        return res

    def _bound(self, pol):
        return pol.evaluate(*self._centered)

    def evaluate(self, d_lb, d_ub=None):
        """ Enclosure of the Taylor model over the box (d_lb, d_ub), given in
            the coordinates of the domain. A box of Interval is also
            accepted."""
        if d_ub is None:
            d_lb, d_ub = _box(d_lb)
        d_lb, d_ub = sub_iv(np.asarray(d_lb, dtype=np.float64),
                            np.asarray(d_ub, dtype=np.float64), *self._x0)
        return self.pol.evaluate(d_lb, d_ub) + self.rem

    def __call__(self, d_lb, d_ub=None):
        return self.evaluate(d_lb, d_ub)

    def bound(self):
        """ Enclosure of the Taylor model over its whole domain"""
        return self._bound(self.pol) + self.rem

    def supNorm(self):
        """ Sup-norm of the polynomial part only"""
        return self.pol.supNorm()

    def fp_rpa(self):
        """ Floating point rigorous polynomial approximation: the interval
            coefficients are replaced by their midpoints and the deviation is
            moved into the remainder. Taylor models with floating point
            coefficients are returned unchanged."""
        if not self.field.isInterval:
            return self
        midPol, dev = self.pol.midpoint()
        return self._like(midPol, self.rem + self._bound(dev))

    def toIntervalField(self):
        """ Same Taylor model with thin interval coefficients"""
        return self._like(self.pol.toIntervalField(), self.rem)


def _interval(val):
    return val if isinstance(val, Interval) else Interval(val)


class TaylorModel1:
    """ Taylor model in one variable with an absolute remainder: a function g
        satisfies g(x) in pol(x - x0) + rem for every x in dom.

    Parameters
    ----------
    :param pol: Taylor1 with Interval coefficients
    :param rem: Interval remainder, must contain 0
    :param x0: Expansion point (Interval)
    :param dom: Domain (Interval) containing x0
    """
    def __init__(self, pol, rem, x0, dom):
        self.pol = Taylor1([_interval(c) for c in pol.coeffs], pol.order)
        self.rem = _interval(rem)
        self.x0 = _interval(x0)
        self.dom = _interval(dom)
        self._checkRemainder()
        assert self.x0.subset(self.dom), \
            "Expansion point {} not inside the domain {}".format(self.x0,
                                                                 self.dom)

    def _checkRemainder(self):
        assert self.rem.contains(0.0), \
            "The remainder {} must contain 0".format(self.rem)

    @classmethod
    def variable(cls, order, x0=None, dom=None):
        """ Taylor model of the independent variable x around x0, the
            midpoint of dom by default"""
        assert dom is not None, "The domain of the Taylor model is required"
        if x0 is None:
            x0 = _interval(dom).mid()
        x0 = _interval(x0)
        return cls(Taylor1([x0, Interval(1.0)], order), Interval(0.0), x0, dom)

    @classmethod
    def constant(cls, val, order, x0, dom):
        return cls(Taylor1([_interval(val)], order), Interval(0.0), x0, dom)

    @property
    def order(self):
        return self.pol.order

    def __repr__(self):
        return '{}({}, rem={}, x0={}, dom={})'.format(type(self).__name__,
                    list(self.pol.coeffs), self.rem, self.x0, self.dom)

    def _remainder(self, dx):
        return self.rem

    def evaluate(self, x):
        """ Enclosure of the Taylor model at x (a number or an Interval
            inside the domain)"""
        x = _interval(x)
        assert x.subset(self.dom), \
            "{} is outside the domain {}".format(x, self.dom)
        dx = x - self.x0
        return self.pol.evaluate(dx) + self._remainder(dx)

    def __call__(self, x):
        return self.evaluate(x)

    def bound(self):
        """ Enclosure of the Taylor model over its whole domain"""
        return self.evaluate(self.dom)


class RTaylorModel1(TaylorModel1):
    """ Taylor model in one variable with a relative remainder: a function g
        satisfies g(x) in pol(x - x0) + rem * (x - x0)^(n+1) for every x in
        dom, n being the order of pol. The remainder does not need to contain
        0.
    """
    def _checkRemainder(self):
        pass

    def _remainder(self, dx):
        return self.rem * dx ** (self.order + 1)
