from TaylorModelIntegration import *
from TaylorModelIntegration.jetcoeffs import getSpecialized, asSeries, \
                                             coefficient
import numpy as np
import pytest

ctx = JetContext(1, 4)
dom = n2i(np.array([-1.0]), np.array([1.0]))
zI = n2i(np.zeros(1), np.zeros(1))

def factorial(k):
    return float(np.prod(np.arange(1, k + 1)))

def growth(t, x):
    return [x[0]]

def decay(t, x):
    return [-x[0]]

@taylorize(decay)
def decayJet(t, x):
    order = t.order
    c = [x[0][0]]
    for k in range(order):
        c.append(-c[k] / (k + 1))
    return [Taylor1(c, order)]

def broken(t, x):
    return [x[0]]

@taylorize(broken)
def brokenJet(t, x):
    raise ValueError('unsupported right-hand side')

def wrongSize(t, x):
    return [x[0]]

@taylorize(wrongSize)
def wrongSizeJet(t, x):
    return [x[0], x[0]]

def test_generic_exponential():
    t = Taylor1.variable(8)
    x = GenericJetCoeffs(growth)(t, [Taylor1([1.0], 8)])
    assert len(x) == 1 and x[0].order == 8
    for k in range(9):
        assert np.isclose(x[0][k], 1.0 / factorial(k), rtol=1e-14)

def test_generic_time_dependent():
    t = Taylor1.variable(4)
    # x' = t
    x = GenericJetCoeffs(lambda t, x: [t])(t, [Taylor1([3.0], 4)])
    assert list(x[0].coeffs) == [3.0, 0.0, 0.5, 0.0, 0.0]
    # Around t0 = 2, x' = t gives x = 3 + 2 t + t^2/2
    t = Taylor1.variable(4, 2.0)
    x = GenericJetCoeffs(lambda t, x: [t])(t, [Taylor1([3.0], 4)])
    assert list(x[0].coeffs) == [3.0, 2.0, 0.5, 0.0, 0.0]
    # Constant right-hand side
    x = GenericJetCoeffs(lambda t, x: [2.0])(t, [Taylor1([1.0], 4)])
    assert list(x[0].coeffs) == [1.0, 2.0, 0.0, 0.0, 0.0]

def test_generic_oscillator():
    def oscillator(t, x):
        return [x[1], -x[0]]
    t = Taylor1.variable(6)
    x, y = GenericJetCoeffs(oscillator)(t, [Taylor1([1.0], 6),
                                            Taylor1([0.0], 6)])
    # cos and -sin
    assert np.allclose(x.coeffs, [1, 0, -1/2, 0, 1/24, 0, -1/720])
    assert np.allclose(y.coeffs, [0, -1, 0, 1/6, 0, -1/120, 0])

def test_generic_taylormodels():
    u = TaylorN.variable(ctx, 0, 2)
    x0 = TaylorModelN(u * 0.1 + 1.0, Interval(0), zI, dom)
    t = Taylor1.variable(5, Interval(0.0))
    x = GenericJetCoeffs(growth)(t, [Taylor1([x0], 5)])
    for k in range(6):
        assert isinstance(x[0][k], TaylorModelN)
        assert x[0][k].pol.coeff(0).contains(1.0 / factorial(k))
        assert x[0][k].pol.coeff(1).contains(0.1 / factorial(k))
        assert x[0][k].rem == Interval(0)
    # Plain numbers returned by the right-hand side become Taylor models
    x = GenericJetCoeffs(lambda t, x: [1.0])(t, [Taylor1([x0], 5)])
    assert isinstance(x[0][1], TaylorModelN)
    assert x[0][1].pol.coeff(0) == Interval(1.0)
    assert x[0][2].pol.coeff(0) == Interval(0.0)

def test_generic_dimension():
    t = Taylor1.variable(3)
    with pytest.raises(AssertionError):
        GenericJetCoeffs(lambda t, x: [x[0], x[0]])(t, [Taylor1([1.0], 3)])

def test_registry():
    assert getSpecialized(decay) is decayJet
    assert getSpecialized(growth) is None

def test_specialized():
    t = Taylor1.variable(7)
    x = [Taylor1([2.0], 7)]
    jet = jetCoeffsFactory(decay, t, x)
    assert isinstance(jet, SpecializedJetCoeffs)
    # The trial call does not modify x
    assert x[0].coeffs[1:] == (0.0,) * 7
    xS = jet(t, x)
    xG = GenericJetCoeffs(decay)(t, x)
    assert xS[0].coeffs == xG[0].coeffs
    # Generic recursion when the parsing is disabled
    jet = jetCoeffsFactory(decay, t, x, parse_eqs=False)
    assert isinstance(jet, GenericJetCoeffs)
    assert isinstance(jetCoeffsFactory(growth, t, x), GenericJetCoeffs)

def test_specialized_fallback(capsys):
    t = Taylor1.variable(4)
    x = [Taylor1([1.0], 4)]
    jet = jetCoeffsFactory(broken, t, x)
    assert isinstance(jet, GenericJetCoeffs)
    assert capsys.readouterr().out == ''
    jet = jetCoeffsFactory(broken, t, x, verbose=True)
    assert isinstance(jet, GenericJetCoeffs)
    assert '[jetcoeffs]' in capsys.readouterr().out
    # Routines returning the wrong number of series are rejected too
    assert isinstance(jetCoeffsFactory(wrongSize, t, x), GenericJetCoeffs)
    jetCoeffsFactory(decay, t, x, verbose=True)
    assert 'specialized routine of decay' in capsys.readouterr().out

def test_as_series():
    res = asSeries([2.0, Taylor1([1.0, 3.0])], 3, 0.0)
    assert list(res[0].coeffs) == [2.0, 0.0, 0.0, 0.0]
    assert list(res[1].coeffs) == [1.0, 3.0, 0.0, 0.0]
    tmZero = TaylorModelN(TaylorN.zero(ctx, 2), Interval(0), zI, dom)
    c = coefficient(Interval(1, 2), 0, tmZero)
    assert isinstance(c, TaylorModelN)
    assert c.pol.coeff(0) == Interval(1, 2)
    assert coefficient(Taylor1([1.0]), 2, tmZero).pol.coeff(0) == Interval(0)
