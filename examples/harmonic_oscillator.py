import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from TaylorModelIntegration import *

def computeData(overApprox):
    x_lb = np.zeros(overApprox.shape)
    x_ub = np.zeros(overApprox.shape)
    for i in range(overApprox.shape[0]):
        for j in range(overApprox.shape[1]):
            x_lb[i,j] = overApprox[i,j].lb
            x_ub[i,j] = overApprox[i,j].ub
    return x_lb , x_ub

# Harmonic oscillator x'' = -x
def f(t, x):
    return [x[1], -x[0]]

# Initial state and its perturbation
q0 = [Interval(1.0), Interval(0.0)]
dq0 = [Interval(-0.1, 0.1), Interval(-0.1, 0.1)]

# Integration parameters
orderQ = 2
orderT = 12
abstol = 1e-20
tmax = 2 * np.pi

set_variables(len(q0), 2 * orderQ)
tv, xv = validatedInteg(f, q0, dq0, 0.0, tmax, orderQ, orderT, abstol,
                        verbose=True)
x_lb, x_ub = computeData(xv)

# Non-validated trajectories from initial states inside the box
evalTime = np.linspace(0, tv[-1], 201)
trajs = generateTraj(f, q0, dq0, evalTime, nbPoint=20, seed=0)

plt.figure()
for j in range(xv.shape[0]):
    plt.gca().add_patch(Rectangle((x_lb[j,0], x_lb[j,1]),
                        x_ub[j,0] - x_lb[j,0], x_ub[j,1] - x_lb[j,1],
                        alpha=0.5, facecolor="tab:blue",
                        edgecolor="darkcyan"))
for p in range(trajs.shape[0]):
    plt.plot(trajs[p,0,:], trajs[p,1,:], 'tab:orange', linewidth=0.8)
plt.xlabel('$x$')
plt.ylabel('$\\dot{x}$')
plt.axis('equal')
plt.grid(True)
plt.tight_layout()

plt.figure()
plt.fill_between(tv, x_lb[:,0], x_ub[:,0], alpha=0.7, facecolor="tab:blue",\
    edgecolor= "darkcyan", label="Taylor models")
for p in range(trajs.shape[0]):
    plt.plot(evalTime, trajs[p,0,:], 'tab:orange',
             label="$x$" if p == 0 else None)
plt.autoscale(enable=True, axis='x', tight=True)
plt.legend(ncol=2, bbox_to_anchor=(0,1), loc='lower left', columnspacing=2.5)
plt.grid(True)
plt.tight_layout()

plt.show()
