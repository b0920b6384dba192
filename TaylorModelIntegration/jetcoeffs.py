"""Non-validated Taylor coefficients of the flow of x' = f(t, x).

The right-hand side is a function ``f(t, x)`` where ``t`` is the Taylor1
series of the time and ``x`` a list of Taylor1 series, one per dimension. It
returns a sequence of derivatives, each of them a Taylor1 series or a
constant.

Two strategies fill the coefficients of ``x`` up to the order of ``t``:
the generic recursion that only calls ``f``, and specialized routines
registered for a given right-hand side with the ``taylorize`` decorator.
"""
from .series import Taylor1, zeroLike

# Specialized jet coefficient routines indexed by right-hand side
_registry = dict()

def taylorize(f):
    """ Register the decorated function as the specialized jet coefficient
        routine of the right-hand side f. The routine takes (t, x) and
        returns the list of Taylor1 series of x filled up to the order of t.
    """
    def register(routine):
        _registry[f] = routine
        return routine
    return register

def getSpecialized(f):
    """ Specialized routine registered for f, None if there is none"""
    return _registry.get(f, None)

def coefficient(d, k, zero):
    """ Coefficient of order k of the derivative d, promoted to the type of
        zero when d or its coefficients are plain numbers or intervals"""
    if isinstance(d, Taylor1):
        c = d[k] if k <= d.order else zero
    else:
        c = d if k == 0 else zero
    if type(c) is not type(zero):
        c = zero + c
    return c

def asSeries(dx, order, zero):
    """ Derivatives returned by a right-hand side as Taylor1 series of the
        given order"""
    return [Taylor1([coefficient(d, k, zero) for k in range(order + 1)], order)
                for d in dx]


class GenericJetCoeffs:
    """ Taylor coefficients through the recurrence
        x_{k+1} = f_k(t, x) / (k+1), evaluating f on the series truncated
        at order k
    """
    def __init__(self, f):
        self.f = f

    def __call__(self, t, x):
        order = t.order
        zero = zeroLike(x[0][0])
        coeffs = [[xi[0]] for xi in x]
        for k in range(order):
            tk = t.truncate(k)
            xk = [Taylor1(c, k) for c in coeffs]
            dx = self.f(tk, xk)
            assert len(dx) == len(x), \
                "The right-hand side returned {} derivatives for {} " \
                "states".format(len(dx), len(x))
            for i in range(len(x)):
                coeffs[i].append(coefficient(dx[i], k, zero) / (k + 1))
        return [Taylor1(c, order) for c in coeffs]


class SpecializedJetCoeffs:
    """ Taylor coefficients computed by a routine registered with
        taylorize"""
    def __init__(self, f, routine):
        self.f = f
        self.routine = routine

    def __call__(self, t, x):
        res = self.routine(t, x)
        assert len(res) == len(x), \
            "The specialized routine returned {} series for {} " \
            "states".format(len(res), len(x))
        return asSeries(res, t.order, zeroLike(x[0][0]))


def jetCoeffsFactory(f, t, x, parse_eqs=True, verbose=False):
    """ Select once the jet coefficient strategy of the right-hand side f.
        The specialized routine is used when parse_eqs is True, a routine is
        registered for f and a trial call on (t, x) succeeds. Otherwise the
        generic recursion is returned.
    """
    generic = GenericJetCoeffs(f)
    routine = getSpecialized(f) if parse_eqs else None
    if routine is None:
        return generic
    specialized = SpecializedJetCoeffs(f, routine)
    try:
        specialized(t, list(x))
    except Exception as e:
        if verbose:
            print('[jetcoeffs] Specialized routine of {} failed ({}), using '
                  'the generic recursion'.format(getattr(f, '__name__', f), e))
        return generic
    if verbose:
        print('[jetcoeffs] Using the specialized routine of {}'.format(
                getattr(f, '__name__', f)))
    return specialized
