import numpy as np

from numba import jit
from numpy import float64 as realN

# Veltkamp splitting constant 2**27 + 1
splitFactor = 134217729.0
# Outside of this range the error-free product may overflow or underflow,
# and the result is widened unconditionally
minSafeProd = 1e-270
maxSafeProd = 1e290

########################################################################
@jit(nopython=True, parallel=False, fastmath=False)
def two_sum(a, b):
    """ Error-free transformation of the sum: a + b = s + err exactly"""
    s = a + b
    bb = s - a
    err = (a - (s - bb)) + (b - bb)
    return s, err

@jit(nopython=True, parallel=False, fastmath=False)
def two_prod(a, b):
    """ Error-free transformation of the product (Dekker): a * b = p + err
        exactly, provided no overflow or underflow occurs
    """
    p = a * b
    c = splitFactor * a
    a_hi = c - (c - a)
    a_lo = a - a_hi
    c = splitFactor * b
    b_hi = c - (c - b)
    b_lo = b - b_hi
    err = a_lo * b_lo - (((p - a_hi * b_hi) - a_lo * b_hi) - a_hi * b_lo)
    return p, err

@jit(nopython=True, parallel=False, fastmath=False)
def add_down(a, b):
    """ Largest float below or equal to the exact sum a + b"""
    s, err = two_sum(a, b)
    if err < 0 or not np.isfinite(err):
        return np.nextafter(s, -np.inf)
    return s

@jit(nopython=True, parallel=False, fastmath=False)
def add_up(a, b):
    """ Smallest float above or equal to the exact sum a + b"""
    s, err = two_sum(a, b)
    if err > 0 or not np.isfinite(err):
        return np.nextafter(s, np.inf)
    return s

@jit(nopython=True, parallel=False, fastmath=False)
def _prod_exact_sign(a, b):
    """ Return (p, sgn) where p = fl(a*b) and sgn is the sign of a*b - p.
        sgn is 2 when the sign cannot be decided
    """
    # 0 * inf is 0 for interval bounds
    if a == 0.0 or b == 0.0:
        return 0.0, 0
    p = a * b
    if np.isinf(a) or np.isinf(b):
        return p, 0
    absP = np.abs(p)
    if absP <= minSafeProd or absP >= maxSafeProd or \
            np.abs(a) >= maxSafeProd or np.abs(b) >= maxSafeProd:
        return p, 2
    _, err = two_prod(a, b)
    if err > 0:
        return p, 1
    if err < 0:
        return p, -1
    return p, 0

@jit(nopython=True, parallel=False, fastmath=False)
def mul_down(a, b):
    """ Largest float below or equal to the exact product a * b"""
    p, sgn = _prod_exact_sign(a, b)
    if sgn == -1 or sgn == 2:
        return np.nextafter(p, -np.inf)
    return p

@jit(nopython=True, parallel=False, fastmath=False)
def mul_up(a, b):
    """ Smallest float above or equal to the exact product a * b"""
    p, sgn = _prod_exact_sign(a, b)
    if sgn == 1 or sgn == 2:
        return np.nextafter(p, np.inf)
    return p

@jit(nopython=True, parallel=False, fastmath=False)
def _div_exact(a, b, q):
    """ Check that the floating point quotient q is exactly a / b"""
    p, sgn = _prod_exact_sign(q, b)
    return p == a and sgn == 0

@jit(nopython=True, parallel=False, fastmath=False)
def div_down(a, b):
    q = a / b
    if a == 0.0 or _div_exact(a, b, q):
        return q
    return np.nextafter(q, -np.inf)

@jit(nopython=True, parallel=False, fastmath=False)
def div_up(a, b):
    q = a / b
    if a == 0.0 or _div_exact(a, b, q):
        return q
    return np.nextafter(q, np.inf)
########################################################################

########################################################################
@jit(nopython=True, parallel=False, fastmath=False)
def add_i(x_lb, x_ub, y_lb, y_ub):
    """ Define the outward rounded addition between two intervals
        x=(x_lb,x_ub) and y = (y_lb, y_ub)"""
    return add_down(x_lb, y_lb), add_up(x_ub, y_ub)

@jit(nopython=True, parallel=False, fastmath=False)
def sub_i(x_lb, x_ub, y_lb, y_ub):
    """ Define the outward rounded substraction between two intervals"""
    return add_down(x_lb, -y_ub), add_up(x_ub, -y_lb)

@jit(nopython=True, parallel=False, fastmath=False)
def mul_i(x_lb, x_ub, y_lb, y_ub):
    """Define the multiplication between an interval x=(x_lb,x_ub) and an
       interval given by y = (y_lb, y_ub)
    """
    lb = min(min(mul_down(x_lb, y_lb), mul_down(x_lb, y_ub)),
             min(mul_down(x_ub, y_lb), mul_down(x_ub, y_ub)))
    ub = max(max(mul_up(x_lb, y_lb), mul_up(x_lb, y_ub)),
             max(mul_up(x_ub, y_lb), mul_up(x_ub, y_ub)))
    return lb, ub

@jit(nopython=True, parallel=False, fastmath=False)
def div_i(x_lb, x_ub, y_lb, y_ub):
    """ Define the division between two intervals """
    assert y_lb > 0 or y_ub < 0
    lb = min(min(div_down(x_lb, y_lb), div_down(x_lb, y_ub)),
             min(div_down(x_ub, y_lb), div_down(x_ub, y_ub)))
    ub = max(max(div_up(x_lb, y_lb), div_up(x_lb, y_ub)),
             max(div_up(x_ub, y_lb), div_up(x_ub, y_ub)))
    return lb, ub

@jit(nopython=True, parallel=False, fastmath=False)
def _powabs(a, n, up):
    """ Directed rounded a**n for a >= 0"""
    res = 1.0
    for _ in range(n):
        res = mul_up(res, a) if up else mul_down(res, a)
    return res

@jit(nopython=True, parallel=False, fastmath=False)
def pow_i(x_lb, x_ub, n):
    """ Compute x^n for the interval x=(x_lb, x_ub) and an integer n >= 0"""
    if n == 0:
        return 1.0, 1.0
    if x_lb >= 0:
        return _powabs(x_lb, n, False), _powabs(x_ub, n, True)
    if x_ub <= 0:
        if n % 2 == 0:
            return _powabs(-x_ub, n, False), _powabs(-x_lb, n, True)
        return -_powabs(-x_lb, n, True), -_powabs(-x_ub, n, False)
    if n % 2 == 0:
        return 0.0, _powabs(max(-x_lb, x_ub), n, True)
    return -_powabs(-x_lb, n, True), _powabs(x_ub, n, True)

@jit(nopython=True, parallel=False, fastmath=False)
def contains_i(x_lb, x_ub, y_lb, y_ub):
    """ Check if the interval y is included in the interval x"""
    return x_lb <= y_lb and y_ub <= x_ub
########################################################################

########################################################################
@jit(nopython=True, parallel=False, fastmath=False)
def add_iv(x_lb, x_ub, y_lb, y_ub):
    """ Elementwise outward rounded addition of two interval vectors"""
    res_lb = np.empty(x_lb.shape[0], dtype=realN)
    res_ub = np.empty(x_lb.shape[0], dtype=realN)
    for i in range(x_lb.shape[0]):
        res_lb[i], res_ub[i] = add_i(x_lb[i], x_ub[i], y_lb[i], y_ub[i])
    return res_lb, res_ub

@jit(nopython=True, parallel=False, fastmath=False)
def sub_iv(x_lb, x_ub, y_lb, y_ub):
    """ Elementwise outward rounded substraction of two interval vectors"""
    res_lb = np.empty(x_lb.shape[0], dtype=realN)
    res_ub = np.empty(x_lb.shape[0], dtype=realN)
    for i in range(x_lb.shape[0]):
        res_lb[i], res_ub[i] = sub_i(x_lb[i], x_ub[i], y_lb[i], y_ub[i])
    return res_lb, res_ub

@jit(nopython=True, parallel=False, fastmath=False)
def mul_iv_i(x_lb, x_ub, s_lb, s_ub):
    """ Multiplication between an interval vector x=(x_lb,x_ub) and the
        interval s=(s_lb, s_ub)"""
    res_lb = np.empty(x_lb.shape[0], dtype=realN)
    res_ub = np.empty(x_lb.shape[0], dtype=realN)
    for i in range(x_lb.shape[0]):
        res_lb[i], res_ub[i] = mul_i(x_lb[i], x_ub[i], s_lb, s_ub)
    return res_lb, res_ub

@jit(nopython=True, parallel=False, fastmath=False)
def mul_iv_s(x_lb, x_ub, val):
    """ Multiplication between an interval vector x=(x_lb,x_ub) and the
        scalar val"""
    return mul_iv_i(x_lb, x_ub, val, val)

@jit(nopython=True, parallel=False, fastmath=False)
def hull_iv(x_lb, x_ub, y_lb, y_ub):
    """ Elementwise interval hull of two interval vectors"""
    return np.minimum(x_lb, y_lb), np.maximum(x_ub, y_ub)

@jit(nopython=True, parallel=False, fastmath=False)
def subset_iv(x_lb, x_ub, y_lb, y_ub):
    """ Elementwise check that the interval vector x is included in y"""
    res = np.empty(x_lb.shape[0], dtype=np.bool_)
    for i in range(x_lb.shape[0]):
        res[i] = contains_i(y_lb[i], y_ub[i], x_lb[i], x_ub[i])
    return res

@jit(nopython=True, parallel=False, fastmath=False)
def inflate_iv(x_lb, x_ub):
    """ Move every lower bound to its floating predecessor and every upper
        bound to its floating successor"""
    res_lb = np.empty(x_lb.shape[0], dtype=realN)
    res_ub = np.empty(x_lb.shape[0], dtype=realN)
    for i in range(x_lb.shape[0]):
        res_lb[i] = np.nextafter(x_lb[i], -np.inf)
        res_ub[i] = np.nextafter(x_ub[i], np.inf)
    return res_lb, res_ub
########################################################################

########################################################################
@jit(nopython=True, parallel=False, fastmath=False)
def supnorm_i(c_lb, c_ub):
    """ Sup-norm of an interval coefficient vector, as the interval
        [max_k mig(c_k), max_k mag(c_k)]"""
    res_lb = 0.0
    res_ub = 0.0
    for k in range(c_lb.shape[0]):
        mag = max(np.abs(c_lb[k]), np.abs(c_ub[k]))
        if c_lb[k] <= 0 and c_ub[k] >= 0:
            mig = 0.0
        else:
            mig = min(np.abs(c_lb[k]), np.abs(c_ub[k]))
        res_lb = max(res_lb, mig)
        res_ub = max(res_ub, mag)
    return res_lb, res_ub

@jit(nopython=True, parallel=False, fastmath=False)
def monomials_i(exps, d_lb, d_ub):
    """ Range of every monomial of the table exps over the box d=(d_lb,d_ub)"""
    nM = exps.shape[0]
    nV = exps.shape[1]
    maxDeg = 0
    for k in range(nM):
        for j in range(nV):
            maxDeg = max(maxDeg, exps[k, j])
    pw_lb = np.empty((nV, maxDeg + 1), dtype=realN)
    pw_ub = np.empty((nV, maxDeg + 1), dtype=realN)
    for j in range(nV):
        for e in range(maxDeg + 1):
            pw_lb[j, e], pw_ub[j, e] = pow_i(d_lb[j], d_ub[j], e)
    m_lb = np.empty(nM, dtype=realN)
    m_ub = np.empty(nM, dtype=realN)
    for k in range(nM):
        lb, ub = 1.0, 1.0
        for j in range(nV):
            e = exps[k, j]
            if e > 0:
                lb, ub = mul_i(lb, ub, pw_lb[j, e], pw_ub[j, e])
        m_lb[k] = lb
        m_ub[k] = ub
    return m_lb, m_ub

@jit(nopython=True, parallel=False, fastmath=False)
def polyeval_i(c_lb, c_ub, m_lb, m_ub):
    """ Enclosure of sum_k c_k m_k where m_k is the range of the k-th
        monomial"""
    res_lb = 0.0
    res_ub = 0.0
    for k in range(c_lb.shape[0]):
        if c_lb[k] == 0 and c_ub[k] == 0:
            continue
        t_lb, t_ub = mul_i(c_lb[k], c_ub[k], m_lb[k], m_ub[k])
        res_lb = add_down(res_lb, t_lb)
        res_ub = add_up(res_ub, t_ub)
    return res_lb, res_ub

@jit(nopython=True, parallel=False, fastmath=False)
def polymul_i(a_lb, a_ub, b_lb, b_ub, pa, pb, pc, nOut):
    """ Product of two polynomials with interval coefficients. The product
        table (pa, pb, pc) lists the index pairs (pa[t], pb[t]) whose monomial
        product has index pc[t]. Only the first nOut coefficients are kept.
    """
    na = a_lb.shape[0]
    nb = b_lb.shape[0]
    c_lb = np.zeros(nOut, dtype=realN)
    c_ub = np.zeros(nOut, dtype=realN)
    for t in range(pa.shape[0]):
        i = pa[t]
        j = pb[t]
        k = pc[t]
        if i >= na or j >= nb or k >= nOut:
            continue
        if (a_lb[i] == 0 and a_ub[i] == 0) or (b_lb[j] == 0 and b_ub[j] == 0):
            continue
        p_lb, p_ub = mul_i(a_lb[i], a_ub[i], b_lb[j], b_ub[j])
        c_lb[k] = add_down(c_lb[k], p_lb)
        c_ub[k] = add_up(c_ub[k], p_ub)
    return c_lb, c_ub

@jit(nopython=True, parallel=False, fastmath=False)
def polymul_r(a, b, pa, pb, pc, nOut):
    """ Product of two polynomials with floating point coefficients
        (round to nearest)"""
    na = a.shape[0]
    nb = b.shape[0]
    c = np.zeros(nOut, dtype=realN)
    for t in range(pa.shape[0]):
        i = pa[t]
        j = pb[t]
        k = pc[t]
        if i >= na or j >= nb or k >= nOut:
            continue
        c[k] += a[i] * b[j]
    return c
########################################################################
