import numpy as np

from numpy import int64 as indTypeN

from .intervalN import monomials_i

# Number of boxes whose monomial ranges are kept by a context
maxCachedBoxes = 64


def _monomials(numvars, degree):
    """ Exponents of all the monomials of total degree `degree` in `numvars`
        variables, in decreasing lexicographic order"""
    if numvars == 1:
        return [(degree,)]
    res = []
    for first in range(degree, -1, -1):
        for rest in _monomials(numvars - 1, degree - first):
            res.append((first,) + rest)
    return res


class JetContext:
    """ Jet transport configuration shared by all the multivariate
        polynomials of an integration: the number of variables and the
        maximum order. Monomials are sorted by total degree, so that the
        truncation of a polynomial to order n is a prefix of its coefficient
        array.

        Polynomials built on a context can only be combined with polynomials
        of the same context. Replacing the process-wide context with
        set_variables invalidates every value built on the previous one.
    """
    def __init__(self, numvars, order):
        assert numvars >= 1, "At least one jet transport variable is needed"
        assert order >= 0, "The order {} must be non-negative".format(order)
        self.numvars = numvars
        self.order = order

        exps = []
        for d in range(order + 1):
            exps.extend(_monomials(numvars, d))
        self.exps = np.array(exps, dtype=indTypeN).reshape(len(exps), numvars)
        self.degrees = self.exps.sum(axis=1)
        self.index = {e: k for k, e in enumerate(exps)}

        # Product table: (prodA[t], prodB[t]) -> prodC[t] for all pairs of
        # monomials whose product is still of degree <= order
        prodA, prodB, prodC = [], [], []
        for i, ei in enumerate(exps):
            for j, ej in enumerate(exps):
                if self.degrees[i] + self.degrees[j] > order:
                    # Monomials are sorted by degree
                    break
                prodA.append(i)
                prodB.append(j)
                prodC.append(self.index[tuple(a + b for a, b in zip(ei, ej))])
        self.prodA = np.array(prodA, dtype=indTypeN)
        self.prodB = np.array(prodB, dtype=indTypeN)
        self.prodC = np.array(prodC, dtype=indTypeN)

        # Monomial ranges over the most recently used boxes, oldest first
        self._bounds = dict()

    def __repr__(self):
        return 'JetContext(numvars={}, order={})'.format(self.numvars,
                                                          self.order)

    def ncoeffs(self, order):
        """ Number of monomials of degree <= order"""
        assert order <= self.order, \
            "Order {} exceeds the jet transport order {}".format(order,
                                                                 self.order)
        return int(np.searchsorted(self.degrees, order, side='right'))

    def monomialBounds(self, d_lb, d_ub):
        """ Range of every monomial over the box (d_lb, d_ub)"""
        key = (tuple(d_lb), tuple(d_ub))
        res = self._bounds.pop(key, None)
        if res is None:
            res = monomials_i(self.exps, np.asarray(d_lb, dtype=np.float64),
                              np.asarray(d_ub, dtype=np.float64))
            if len(self._bounds) >= maxCachedBoxes:
                del self._bounds[next(iter(self._bounds))]
        self._bounds[key] = res
        return res


# Process-wide jet transport configuration
_currentContext = None

def set_variables(numvars, order):
    """ Replace the process-wide jet transport configuration and return the
        new context. Values built on the previous context must not be used
        with the new one."""
    global _currentContext
    _currentContext = JetContext(numvars, order)
    return _currentContext

def get_context():
    return _currentContext

def get_numvars():
    assert _currentContext is not None, "No jet transport variables set"
    return _currentContext.numvars

def get_order():
    assert _currentContext is not None, "No jet transport variables set"
    return _currentContext.order
