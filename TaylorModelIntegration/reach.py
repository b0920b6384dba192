import numpy as np

import warnings

from numpy import float64 as realN

from .interval import Interval, n2i, i2n
from .fields import RealField, IntervalField
from .jetvars import JetContext, get_context, set_variables
from .series import TaylorN, Taylor1
from .taylormodels import TaylorModelN
from .jetcoeffs import jetCoeffsFactory, asSeries

# Maximum number of iterations of the remainder fixpoint
maxRemainderIter = 100

class RemainderConvergenceWarning(RuntimeWarning):
    """ The remainder fixpoint was not reached within the maximum number of
        iterations. The returned remainder is not a proven enclosure."""
    pass

class StepBudgetWarning(RuntimeWarning):
    """ The maximum number of integration steps was reached before the final
        time"""
    pass


def _coeffNorm(c):
    """ Field and sup-norm of the polynomial part of a jet coefficient"""
    if isinstance(c, TaylorModelN):
        return c.field, c.supNorm()
    if isinstance(c, Interval):
        return IntervalField, Interval(c.mig(), c.mag())
    return RealField, abs(float(c))

def stepSize(x, epsilon):
    """ Step size of the integration given the Taylor series x of the state
        and the tolerance epsilon. The orders k of the last two coefficients
        of each series give the candidates (epsilon/|x_k|)^(1/k), and the
        step is the smallest candidate over the series. An order whose norm
        may be 0 does not constrain the step of that series.

    Parameters
    ----------
    :param x : list of Taylor1 series, one per dimension
    :param epsilon : Absolute tolerance

    Returns
    -------
    float
        the step size, np.inf if no coefficient constrains it
    """
    order = x[0].order
    h = np.inf
    for k in (order - 1, order):
        if k < 1:
            continue
        for xi in x:
            field, aux = _coeffNorm(xi[k])
            if field.hasZero(aux):
                continue
            h = min(h, field.stepCandidate(epsilon, aux, k))
    return h


def _enclose(c, dI_lb, dI_ub):
    if isinstance(c, TaylorModelN):
        return c.evaluate(dI_lb, dI_ub)
    return Interval(c)

def remainderTaylorStep(dx, dI, dt, maxIter=maxRemainderIter):
    """ Enclosure of the remainder of an integration step through the
        fixpoint of the Picard operator restricted to the remainders,
        Delta = dt * (Delta + c_n dt^n/(n+1)) where c_n is the last
        coefficient of the right-hand side over the box dI.

    Parameters
    ----------
    :param dx : list of Taylor1 series of the right-hand side
    :param dI : Box of the initial condition variables
    :param dt : Interval of the step, usually [0, h]
    :param maxIter : Maximum number of fixpoint iterations

    Returns
    -------
    tuple
        the lower and upper bounds of the remainder for each dimension
    """
    orderT = dx[0].order
    dt = Interval(dt)
    dI_lb, dI_ub = i2n(dI)
    aux = dt ** orderT / (orderT + 1)
    nS = len(dx)
    last_lb = np.empty(nS, dtype=realN)
    last_ub = np.empty(nS, dtype=realN)
    for i in range(nS):
        lastCoeff = _enclose(dx[i][orderT], dI_lb, dI_ub) * aux
        last_lb[i], last_ub[i] = lastCoeff.lb, lastCoeff.ub

    # Remainders are intervals in both fields
    field = IntervalField
    rem = (np.zeros(nS, dtype=realN), np.zeros(nS, dtype=realN))
    for _ in range(maxIter):
        newRem = field.scale(field.add(rem, (last_lb, last_ub)), dt)
        if np.array_equal(newRem[0], rem[0]) and \
                np.array_equal(newRem[1], rem[1]):
            return field.inflate(newRem)
        # Enlarge the components that are not contained, never shrink
        isIn = field.subset(newRem, rem)
        hull_lb, hull_ub = field.hull(newRem, rem)
        rem = (np.where(isIn, rem[0], hull_lb),
               np.where(isIn, rem[1], hull_ub))

    warnings.warn('Maximum number of iterations ({}) reached in the '
                  'remainder fixpoint'.format(maxIter),
                  RemainderConvergenceWarning)
    return rem


def taylorStep(jet, t, x, t0, t1, orderT, abstol):
    """ Non-validated integration step: fill the Taylor coefficients of x in
        place with the strategy jet and return the step size, at most
        t1 - t0
    """
    assert t1 > t0, "Final time {} must be after {}".format(t1, t0)
    assert t.order == orderT
    x[:] = jet(t, x)
    dt = stepSize(x, abstol)
    return min(dt, t1 - t0)


def normalizeTaylor(ctx, q, dq, i, orderQ, field, sym_norm=True):
    """ Polynomial q + dq written in the i-th normalized variable, which
        ranges over [-1,1] if sym_norm else [0,1]
    """
    assert orderQ >= 1, "The order of the jet transport must be positive"
    dq = Interval(dq)
    if sym_norm:
        center, width = dq.mid(), dq.rad()
    else:
        center, width = dq.lb, dq.diam()
    if field.isInterval:
        center = Interval(q) + center
    else:
        center = float(q) + center
    return TaylorN.variable(ctx, i, orderQ, field) * width + center


def validatedInteg(f, q0, dq0, t0, tmax, orderQ, orderT, abstol,
                    maxsteps=500, parse_eqs=True, sym_norm=True,
                    maxIter=maxRemainderIter, ctx=None, returnTM=False,
                    verbose=False):
    """ Compute Taylor models enclosing the solutions of x' = f(t, x) for all
        the initial states in q0 + dq0, from t0 to tmax.

    Parameters
    ----------
    :param f : Right-hand side f(t, x) with t the Taylor1 series of the time
               and x the list of Taylor1 series of the state
    :param q0 : Nominal initial state. Interval values give coefficients in
                interval arithmetic, floats in floating point arithmetic
    :param dq0 : Box of the initial state perturbation
    :param t0 : Initial time
    :param tmax : Final time
    :param orderQ : Order of the Taylor models in the perturbation
    :param orderT : Order of the Taylor series in time
    :param abstol : Tolerance of the step size
    :param maxsteps : Maximum number of integration steps
    :param parse_eqs : Try the specialized jet routine registered for f
    :param sym_norm : Normalized perturbation in [-1,1] if True else [0,1]
    :param maxIter : Maximum number of iterations of the remainder fixpoint
    :param ctx : Jet transport context, the process-wide one by default
    :param returnTM : Also return the Taylor models of each step

    Returns
    -------
    array
        the times of the integration
    array
        the boxes enclosing the states at those times, one row per time
    array
        if returnTM, the Taylor models of each dimension (row) and time
        (column), valid over the corresponding step
    """
    q0 = np.array(list(q0), dtype=object)
    dq0 = np.array(list(dq0), dtype=object)
    nS = q0.shape[0]
    assert dq0.shape[0] == nS, \
        "Perturbation of dimension {} for a state of dimension {}".format(
            dq0.shape[0], nS)

    # Jet transport configuration
    if ctx is None:
        ctx = get_context()
    assert ctx is not None, \
        "No jet transport variables, call set_variables({}, {})".format(nS,
            2 * orderQ)
    assert ctx.numvars == nS, \
        "Jet transport context of {} variables for a system of dimension " \
        "{}".format(ctx.numvars, nS)
    if ctx.order != 2 * orderQ:
        if ctx is get_context():
            ctx = set_variables(nS, 2 * orderQ)
        else:
            ctx = JetContext(nS, 2 * orderQ)

    field = IntervalField if any(isinstance(q, Interval) for q in q0) \
                else RealField
    dqNorm_lb = np.full(nS, -1.0 if sym_norm else 0.0)
    dqNorm_ub = np.ones(nS, dtype=realN)
    dqNorm = n2i(dqNorm_lb, dqNorm_ub)
    zI = n2i(np.zeros(nS), np.zeros(nS))

    # Output
    tv = np.empty(maxsteps + 1, dtype=realN)
    xv = np.empty((maxsteps + 1, nS), dtype=object)
    xTMNv = np.empty((nS, maxsteps + 1), dtype=object)

    # Initial condition
    xTMN = [TaylorModelN(normalizeTaylor(ctx, q0[i], dq0[i], i, orderQ, field,
                                         sym_norm), Interval(0.0), zI, dqNorm)
                for i in range(nS)]
    x = [Taylor1([xTMN[i]], orderT) for i in range(nS)]
    tv[0] = t0
    for i in range(nS):
        xTMNv[i, 0] = xTMN[i]
        xv[0, i] = xTMN[i].evaluate(dqNorm_lb, dqNorm_ub)

    def timeSeries(tVal):
        return Taylor1.variable(orderT, Interval(tVal) if field.isInterval \
                                            else tVal)

    # Jet coefficient strategy, chosen once
    t = timeSeries(t0)
    jet = jetCoeffsFactory(f, t, x, parse_eqs, verbose)

    nsteps = 1
    while t0 < tmax:
        # Non-validated step
        dt = taylorStep(jet, t, x, t0, tmax, orderT, abstol)
        # Rounded end of the step, never beyond tmax. In interval arithmetic
        # the Taylor models are evaluated at an enclosure of t1 - t0 so that
        # the time grid tv is exact
        t1 = min(t0 + dt, tmax)
        assert t1 > t0, \
            "Step size {} below the resolution of the time {}".format(dt, t0)
        if field.isInterval:
            dtEnd = Interval(t1) - t0
            dt = dtEnd.ub
        else:
            dt = dtEnd = t1 - t0

        # Last coefficient of the right-hand side, needed by the remainder
        dx = asSeries(f(t, x), orderT, xTMN[0].zero())
        dtI = Interval(0.0, dt)
        rem_lb, rem_ub = remainderTaylorStep(dx, dqNorm, dtI, maxIter)

        # Taylor models over the step and at its end, with the remainder
        for i in range(nS):
            delta = Interval(rem_lb[i], rem_ub[i])
            tmStep = x[i].evaluate(dtI)
            if not field.isInterval:
                tmStep = tmStep.fp_rpa()
            tmStep = tmStep.withRemainder(tmStep.rem + delta)
            tmEnd = x[i].evaluate(dtEnd)
            xTMN[i] = tmEnd.withRemainder(tmEnd.rem + delta)
            xTMNv[i, nsteps] = tmStep
            xv[nsteps, i] = tmStep.evaluate(dqNorm_lb, dqNorm_ub)
            x[i] = Taylor1([xTMN[i]], orderT)

        t0 = t1
        tv[nsteps] = t0
        t = timeSeries(t0)
        if verbose:
            print('[reach] step {} : t = {}, dt = {}, remainder = {}'.format(
                    nsteps, t0, dt, n2i(rem_lb, rem_ub)))
        nsteps += 1
        if nsteps > maxsteps:
            if t0 < tmax:
                warnings.warn('Maximum number of integration steps ({}) '
                              'reached at t = {}'.format(maxsteps, t0),
                              StepBudgetWarning)
            break

    if returnTM:
        return tv[:nsteps], xv[:nsteps], xTMNv[:, :nsteps]
    return tv[:nsteps], xv[:nsteps]
