from TaylorModelIntegration import Interval, n2i, i2n
import numpy as np
import pytest

def test_addsub():
    x1 = Interval(-1,2)
    x2 = Interval(2,6)
    x3 = Interval (-6,-2)
    assert x1 + x2 == Interval(1,8)
    assert x2 - 2 == Interval(0,4)
    assert 2 - x2 == Interval(-4,0)
    assert -x3 == Interval(2,6)
    assert x3 + 2 == Interval(-4,0)

def test_muldiv():
    x1 = Interval(-1,2)
    x2 = Interval(2,6)
    x3 = Interval (-6,-2)
    assert x1 * x2 == Interval(-6,12)
    assert x2 * x3 == Interval(-36,-4)
    assert x1 * x3 == Interval(-12,6)
    assert x1 * -1 == Interval(-2,1)
    assert -1 * x1 == Interval(-2,1)
    assert (1.0 / x2).contains(Interval(1.0/6, 0.5))
    assert (x3 / x2).contains(Interval(-3, -1.0/3))
    assert x2**2 == Interval(4,36)
    assert x1**2 == Interval(0,4)
    assert x1**3 == Interval(-1,8)
    assert x3**0 == Interval(1)

def test_outward_rounding():
    # 0.1 + 0.2 is not exact in floating point
    x = Interval(0.1) + Interval(0.2)
    assert x.lb < x.ub
    assert x.contains(0.1 + 0.2)
    # Exact operations stay thin
    assert (Interval(0.5) + Interval(0.25)).isThin()
    assert (Interval(3.0) * Interval(0.125)).isThin()
    y = Interval(1.0) / 3
    assert y.contains(1.0/3)
    assert not y.isThin()
    z = Interval(0.1) * Interval(0.1)
    assert z.contains(0.1 * 0.1) and not z.isThin()

def test_unbounded():
    real = Interval(-np.inf, np.inf)
    res = Interval(0, 1) * real
    assert res == real
    assert not np.isnan(res.lb) and not np.isnan(res.ub)
    assert Interval(0) * real == Interval(0)
    assert real * Interval(0) == Interval(0)
    assert Interval(2, 3) * Interval(1, np.inf) == Interval(2, np.inf)
    assert Interval(-1, 0) * Interval(0, np.inf) == Interval(-np.inf, 0)
    # Overflow of finite bounds is rounded outward
    big = Interval(1e300) * Interval(1e300)
    assert big.lb == np.finfo(np.float64).max and big.ub == np.inf

def test_setops():
    x1 = Interval(-1,2)
    x2 = Interval(2,6)
    assert (x1 | x2) == Interval(-1,6)
    assert (x1 & x2) == Interval(2,2)
    assert (x1 | 7) == Interval(-1,7)
    assert x1.contains(0)
    assert not x2.contains(0)
    assert Interval(0,1).subset(x1)
    assert not x2.subset(x1)
    assert x1.mid() == 0.5 and x1.rad() == 1.5 and x1.diam() == 3.0
    assert x1.mag() == 2 and x1.mig() == 0
    assert Interval(-6,-2).mig() == 2
    assert abs(Interval(-6,-2)) == Interval(2,6)
    xi = x1.inflate()
    assert xi.lb < -1 and xi.ub > 2
    assert xi.lb == np.nextafter(-1.0, -np.inf)

def test_invariants():
    with pytest.raises(AssertionError):
        Interval(2, 1)
    with pytest.raises(AssertionError):
        Interval(1, 2) / Interval(-1, 1)
    with pytest.raises(AssertionError):
        Interval(0, 1) & Interval(2, 3)

def test_conversion():
    x_lb = np.array([-1.0, 0.0, 2.0])
    x_ub = np.array([1.0, 0.5, 3.0])
    box = n2i(x_lb, x_ub)
    assert box.shape == (3,) and box[2] == Interval(2,3)
    b_lb, b_ub = i2n(box)
    assert np.array_equal(b_lb, x_lb) and np.array_equal(b_ub, x_ub)
    p_lb, p_ub = i2n(np.array([1.0, Interval(0, 2)], dtype=object))
    assert np.array_equal(p_lb, [1.0, 0.0])
    assert np.array_equal(p_ub, [1.0, 2.0])
    assert n2i(1, 2) == Interval(1, 2)
