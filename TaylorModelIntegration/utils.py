import numpy as np
from scipy.integrate import solve_ivp

from .interval import Interval, i2n

def synthTraj(fFun, xInit, evalTime, atol=1e-12, rtol=1e-12,
              method='DOP853'):
    """Compute a (non-validated) solution of the ODE x' = fFun(t, x) with the
    initial state given by xInit, and evalTime contains the different time at
    which the state and its derivative (xDotVal) should be returned.
    fFun is the right-hand side given to validatedInteg: it is called here
    with a float t and a (n,) array x.
    """
    xInit = np.asarray(xInit, dtype=np.float64)
    nState = xInit.shape[0]
    t0 = evalTime[0] # Init time
    tend = evalTime[-1] # End time
    def dynFun (t, x):
        return np.array([float(v) for v in fFun(t, x)], dtype=np.float64)
    # Numerical solution of the ODE
    solODE = solve_ivp(dynFun, t_span=(t0, tend), y0=xInit,
                        t_eval=evalTime, atol=atol, rtol=rtol, method=method)
    xDotVal = np.zeros((nState, len(evalTime)))
    # Compute xDot
    for i in range(len(evalTime)):
        xDotVal[:,i] = dynFun(solODE.t[i], solODE.y[:,i])
    return solODE.t, solODE.y, xDotVal


def sampleInitialStates(q0, dq0, nbPoint, scale=1.0, seed=None):
    """ Draw nbPoint initial states uniformly in the box q0 + scale * dq0.
        Returns a (nbPoint, n) array.
    """
    q0Val = np.array([Interval(q).mid() for q in q0], dtype=np.float64)
    dq_lb, dq_ub = i2n(np.array(list(dq0), dtype=object))
    center = q0Val + 0.5 * (dq_lb + dq_ub)
    radius = 0.5 * scale * (dq_ub - dq_lb)
    rng = np.random.default_rng(seed)
    return center + radius * rng.uniform(-1.0, 1.0,
                                         size=(nbPoint, q0Val.shape[0]))


def generateTraj(fFun, q0, dq0, evalTime, nbPoint=10, scale=1.0, seed=None,
                 atol=1e-12, rtol=1e-12):
    """
    Generate trajectories of x' = fFun(t, x) starting from nbPoint initial
    states sampled in q0 + scale * dq0. The states are returned at the times
    evalTime as an array of shape (nbPoint, n, len(evalTime)).
    """
    xInits = sampleInitialStates(q0, dq0, nbPoint, scale, seed)
    res = np.zeros((nbPoint, xInits.shape[1], len(evalTime)))
    for i in range(nbPoint):
        _, xVal, _ = synthTraj(fFun, xInits[i], evalTime, atol, rtol)
        res[i] = xVal
    return res
