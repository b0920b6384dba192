import numpy as np

from .intervalN import add_down, add_up, mul_i, div_i, pow_i

class Interval:
    """Represents a closed Interval and provides the basic mathematical
    operations on intervals. Every operation is rounded outward so that the
    result encloses the exact result for all values of the operands.
    Intervals are immutable.
    :param lb: The lower bound of the interval, can be +-np.inf.
    :param ub: The upper bound of the interval, can be +-np.inf.
    """

    def __init__(self, lb=None, ub=None):
        if isinstance(lb, Interval):
            self._lb = lb.lb
            self._ub = lb.ub
            return
        if lb is None and ub is None:
            lb = 0
            ub = 0
        if lb is None and ub is not None:
            lb = ub
        if lb is not None and ub is None:
            ub = lb
        lb = float(lb)
        ub = float(ub)
        assert lb <= ub,\
            "Lower bound {} must be less than upper bound {}".format(lb,ub)
        self._lb = lb
        self._ub = ub

    @property
    def lb(self):
        """Return the lower bound of the interval"""
        return self._lb

    @property
    def ub(self):
        """Return the upper bound of the interval"""
        return self._ub

    def __repr__(self):
        return '[{lb:.17g} , {ub:.17g}]'.format(lb=self.lb, ub=self.ub)

    @staticmethod
    def _bounds(other):
        if isinstance(other, Interval):
            return other.lb, other.ub
        if isinstance(other, (int, float, np.integer, np.floating)):
            return float(other), float(other)
        return None

    def __add__(self, other):
        o = Interval._bounds(other)
        if o is None:
            return NotImplemented
        return Interval(add_down(self.lb, o[0]), add_up(self.ub, o[1]))

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        o = Interval._bounds(other)
        if o is None:
            return NotImplemented
        return Interval(add_down(self.lb, -o[1]), add_up(self.ub, -o[0]))

    def __rsub__(self, other):
        o = Interval._bounds(other)
        if o is None:
            return NotImplemented
        return Interval(add_down(o[0], -self.ub), add_up(o[1], -self.lb))

    def __mul__(self, other):
        o = Interval._bounds(other)
        if o is None:
            return NotImplemented
        return Interval(*mul_i(self.lb, self.ub, o[0], o[1]))

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        o = Interval._bounds(other)
        if o is None:
            return NotImplemented
        assert o[0] > 0 or o[1] < 0, "0 is inside the interval"
        return Interval(*div_i(self.lb, self.ub, o[0], o[1]))

    def __rtruediv__(self, other):
        o = Interval._bounds(other)
        if o is None:
            return NotImplemented
        return Interval(*o).__truediv__(self)

    def __pow__(self, val):
        assert isinstance(val, (int, np.integer)) and val >= 0,\
            'Power: {val} not a non-negative integer'.format(val=val)
        return Interval(*pow_i(self.lb, self.ub, int(val)))

    def __neg__(self):
        return Interval(-self.ub, -self.lb)

    def __abs__(self):
        return Interval(self.mig(), self.mag())

    def __eq__(self, other):
        o = Interval._bounds(other)
        if o is None:
            return NotImplemented
        return self.lb == o[0] and self.ub == o[1]

    def __ne__(self, other):
        res = self.__eq__(other)
        if res is NotImplemented:
            return res
        return not res

    __hash__ = None

    def __or__(self, other):
        """ Interval hull"""
        o = Interval._bounds(other)
        if o is None:
            return NotImplemented
        return Interval(min(self.lb, o[0]), max(self.ub, o[1]))

    __ror__ = __or__

    def __and__(self, other):
        o = Interval._bounds(other)
        if o is None:
            return NotImplemented
        lb, ub = max(self.lb, o[0]), min(self.ub, o[1])
        assert lb <= ub, " Empty intersection"
        return Interval(lb, ub)

    def contains(self, val):
        """ Check if the number or the interval val is inside this interval"""
        o = Interval._bounds(val)
        assert o is not None, 'Wrong type {} for contains'.format(type(val))
        return self.lb <= o[0] and o[1] <= self.ub

    def subset(self, other):
        """ Check if this interval is included in other"""
        return Interval(other).contains(self)

    def mid(self):
        if self.lb == -np.inf or self.ub == np.inf:
            return 0.0 if self.lb == -self.ub else (self.lb + self.ub)
        return 0.5 * self.lb + 0.5 * self.ub

    def diam(self):
        """ Upper bound of the width of the interval"""
        return add_up(self.ub, -self.lb)

    def rad(self):
        """ Upper bound of the radius of the interval"""
        m = self.mid()
        return max(add_up(self.ub, -m), add_up(m, -self.lb))

    def mag(self):
        return max(abs(self.lb), abs(self.ub))

    def mig(self):
        if self.contains(0.0):
            return 0.0
        return min(abs(self.lb), abs(self.ub))

    def isThin(self):
        return self.lb == self.ub

    def inflate(self):
        """ Move each bound one unit in the last place outward"""
        return Interval(np.nextafter(self.lb, -np.inf),
                        np.nextafter(self.ub, np.inf))

    def zero(self):
        return Interval(0.0)


def n2i(x_lb, x_ub):
    """ Build an array of Interval from the arrays of lower and upper
        bounds"""
    if isinstance(x_lb, (int, float)):
        return Interval(float(x_lb), float(x_ub))
    x_lb = np.asarray(x_lb, dtype=np.float64)
    x_ub = np.asarray(x_ub, dtype=np.float64)
    res = np.empty(x_lb.shape, dtype=object)
    for idx in np.ndindex(*x_lb.shape):
        res[idx] = Interval(x_lb[idx], x_ub[idx])
    return res

def i2n(intVal):
    """ Split an (array of) Interval into arrays of lower and upper bounds.
        Plain numbers give thin bounds"""
    if isinstance(intVal, Interval):
        return intVal.lb, intVal.ub
    intVal = np.asarray(intVal, dtype=object)
    res_lb = np.empty(intVal.shape, dtype=np.float64)
    res_ub = np.empty(intVal.shape, dtype=np.float64)
    for idx in np.ndindex(*intVal.shape):
        res_lb[idx], res_ub[idx] = Interval(intVal[idx]).lb, \
                                   Interval(intVal[idx]).ub
    return res_lb, res_ub
