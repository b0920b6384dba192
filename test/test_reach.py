from TaylorModelIntegration import *
import numpy as np
import pytest
import warnings

def growth(t, x):
    return [x[0]]

def oscillator(t, x):
    return [x[1], -x[0]]

def quadratic(t, x):
    return [x[0] * x[0]]

def growthParsed(t, x):
    return [x[0]]

@taylorize(growthParsed)
def growthJet(t, x):
    c = [x[0][0]]
    for k in range(t.order):
        c.append(c[k] / (k + 1))
    return [Taylor1(c, t.order)]

def integrateExp(orderT, q0=Interval(1.0), dq0=Interval(0.0), **kwargs):
    set_variables(1, 4)
    with warnings.catch_warnings():
        warnings.simplefilter('error', RemainderConvergenceWarning)
        return validatedInteg(growth, [q0], [dq0], 0.0, 1.0, 2, orderT,
                              1e-20, **kwargs)

def test_exponential():
    tv, xv = integrateExp(12)
    assert tv[0] == 0.0 and tv[-1] == 1.0
    assert np.all(np.diff(tv) > 0)
    assert xv.shape == (tv.shape[0], 1)
    assert xv[0, 0] == Interval(1.0)
    # The time grid is exact so the last box encloses e
    assert xv[-1, 0].contains(np.e)

def test_exponential_orders():
    for orderT in (8, 12, 16):
        tv, xv = integrateExp(orderT)
        assert tv[-1] == 1.0
        for j in range(1, tv.shape[0]):
            tm = 0.5 * (tv[j - 1] + tv[j])
            assert xv[j, 0].contains(np.exp(tm))
            exact = np.exp(tv[j]) - np.exp(tv[j - 1])
            assert xv[j, 0].diam() <= exact + 1e-10
    # Higher orders take larger steps
    assert integrateExp(16)[0].shape[0] < integrateExp(8)[0].shape[0]

def test_exponential_real():
    tv, xv, xTMNv = integrateExp(12, q0=1.0, dq0=0.0, returnTM=True)
    assert tv[-1] == 1.0
    assert abs(xv[-1, 0].ub - np.e) < 1e-9
    for j in range(xTMNv.shape[1]):
        assert xTMNv[0, j].field is RealField

def test_step_budget():
    set_variables(1, 4)
    with pytest.warns(StepBudgetWarning):
        tv, xv = validatedInteg(growth, [Interval(1.0)], [Interval(0.0)], 0.0,
                                1.0, 2, 12, 1e-20, maxsteps=1)
    assert tv.shape == (2,) and xv.shape == (2, 1)
    assert 0.0 < tv[1] < 1.0
    # No warning when the final time is reached with the last step
    with warnings.catch_warnings():
        warnings.simplefilter('error', StepBudgetWarning)
        tv, xv = validatedInteg(growth, [Interval(1.0)], [Interval(0.0)], 0.0,
                                1e-3, 2, 12, 1e-20, maxsteps=1)
    assert tv.shape == (2,) and tv[1] == 1e-3

def test_nested_perturbations():
    set_variables(1, 4)
    dqS = Interval(-0.01, 0.01)
    dqL = Interval(-0.05, 0.05)
    tS, xS = validatedInteg(growth, [Interval(1.0)], [dqS], 0.0, 1.0, 2, 10,
                            1e-20)
    tL, xL = validatedInteg(growth, [Interval(1.0)], [dqL], 0.0, 1.0, 2, 10,
                            1e-20)
    common = np.intersect1d(tS, tL)
    assert common.shape[0] >= 2
    for tc in common:
        jS = int(np.searchsorted(tS, tc))
        jL = int(np.searchsorted(tL, tc))
        assert xS[jS, 0].subset(xL[jL, 0])
    for x0 in 1.0 + 0.05 * np.linspace(-0.9, 0.9, 7):
        for j in range(tL.shape[0]):
            assert xL[j, 0].contains(x0 * np.exp(tL[j]))

def test_oscillator():
    set_variables(2, 4)
    q0 = [Interval(1.0), Interval(0.0)]
    dq0 = [Interval(-0.05, 0.05), Interval(-0.05, 0.05)]
    tv, xv = validatedInteg(oscillator, q0, dq0, 0.0, 1.0, 2, 10, 1e-20)
    assert tv[-1] == 1.0 and xv.shape == (tv.shape[0], 2)
    traj = generateTraj(oscillator, q0, dq0, tv, nbPoint=10, scale=0.9,
                        seed=0)
    for p in range(traj.shape[0]):
        for j in range(tv.shape[0]):
            for i in range(2):
                assert xv[j, i].contains(traj[p, i, j])
    # The enclosures stay tight for a linear system
    assert xv[-1, 0].diam() < 0.25 and xv[-1, 1].diam() < 0.25

def test_quadratic():
    set_variables(1, 4)
    tv, xv = validatedInteg(quadratic, [Interval(0.5)],
                            [Interval(-0.01, 0.01)], 0.0, 0.5, 2, 10, 1e-16)
    assert tv[-1] == 0.5
    for x0 in 0.5 + 0.01 * np.linspace(-0.9, 0.9, 5):
        for j in range(tv.shape[0]):
            assert xv[j, 0].contains(x0 / (1 - x0 * tv[j]))
    traj = generateTraj(quadratic, [0.5], [Interval(-0.01, 0.01)], tv,
                        nbPoint=5, scale=0.9, seed=1)
    for p in range(traj.shape[0]):
        for j in range(tv.shape[0]):
            assert xv[j, 0].contains(traj[p, 0, j])

def test_one_sided_normalization():
    set_variables(1, 4)
    dq = Interval(-0.05, 0.05)
    tv, xv, xTMNv = validatedInteg(growth, [Interval(1.0)], [dq], 0.0, 1.0,
                                   2, 10, 1e-20, sym_norm=False,
                                   returnTM=True)
    assert xTMNv[0, 0].dom[0] == Interval(0, 1)
    assert xv[0, 0].contains(Interval(0.95, 1.05))
    for x0 in 1.0 + 0.05 * np.linspace(-0.9, 0.9, 7):
        for j in range(tv.shape[0]):
            assert xv[j, 0].contains(x0 * np.exp(tv[j]))

def test_dimension_mismatch():
    set_variables(2, 4)
    with pytest.raises(AssertionError):
        validatedInteg(oscillator, [1.0, 0.0], [0.1], 0.0, 1.0, 2, 10, 1e-20)
    # The jet transport context must have one variable per state
    with pytest.raises(AssertionError):
        validatedInteg(growth, [1.0], [0.1], 0.0, 1.0, 2, 10, 1e-20)

def test_context():
    # The process-wide context is reconfigured to twice the order
    set_variables(1, 6)
    tv, xv, xTMNv = validatedInteg(growth, [Interval(1.0)], [Interval(0.0)],
                                   0.0, 0.1, 2, 8, 1e-20, returnTM=True)
    assert get_order() == 4 and get_numvars() == 1
    assert xTMNv[0, -1].pol.ctx is get_context()
    # An explicit context is not installed globally
    set_variables(1, 6)
    glob = get_context()
    own = JetContext(1, 2)
    tv, xv, xTMNv = validatedInteg(growth, [Interval(1.0)], [Interval(0.0)],
                                   0.0, 0.1, 2, 8, 1e-20, ctx=own,
                                   returnTM=True)
    assert get_context() is glob and get_order() == 6
    assert xTMNv[0, -1].pol.ctx.order == 4
    assert xTMNv[0, -1].pol.ctx is not own
    # A context of the right order is used as is
    own = JetContext(1, 4)
    tv, xv, xTMNv = validatedInteg(growth, [Interval(1.0)], [Interval(0.0)],
                                   0.0, 0.1, 2, 8, 1e-20, ctx=own,
                                   returnTM=True)
    assert xTMNv[0, -1].pol.ctx is own

def test_taylormodels():
    set_variables(2, 4)
    q0 = [Interval(1.0), Interval(0.0)]
    dq0 = [Interval(-0.05, 0.05), Interval(-0.05, 0.05)]
    tv, xv, xTMNv = validatedInteg(oscillator, q0, dq0, 0.0, 0.5, 2, 10,
                                   1e-20, returnTM=True)
    assert xTMNv.shape == (2, tv.shape[0])
    for j in range(tv.shape[0]):
        for i in range(2):
            tm = xTMNv[i, j]
            assert isinstance(tm, TaylorModelN) and tm.order == 2
            assert tm.evaluate(tm.dom) == xv[j, i]
    # Initial Taylor models: q0 + rad(dq0) * variable, exactly
    tm = xTMNv[0, 0]
    assert tm.pol.coeff((0, 0)) == Interval(1.0)
    assert tm.pol.coeff((1, 0)) == Interval(0.05)
    assert tm.rem == Interval(0.0)
    assert xv[0, 0] == Interval(0.95, 1.05)

def test_specialized():
    set_variables(1, 4)
    tG, xG = validatedInteg(growthParsed, [Interval(1.0)],
                            [Interval(-0.01, 0.01)], 0.0, 1.0, 2, 12, 1e-20,
                            parse_eqs=False)
    tS, xS = validatedInteg(growthParsed, [Interval(1.0)],
                            [Interval(-0.01, 0.01)], 0.0, 1.0, 2, 12, 1e-20)
    assert np.array_equal(tG, tS)
    for j in range(tG.shape[0]):
        assert xG[j, 0] == xS[j, 0]

def test_verbose(capsys):
    set_variables(1, 4)
    validatedInteg(growthParsed, [Interval(1.0)], [Interval(0.0)], 0.0, 0.1, 2,
                   8, 1e-20, verbose=True)
    out = capsys.readouterr().out
    assert '[jetcoeffs]' in out
    assert '[reach] step 1' in out
