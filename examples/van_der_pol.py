import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from TaylorModelIntegration import *

# Van der Pol oscillator
mu = 1.0
def f(t, x):
    return [x[1], mu * (1 - x[0] * x[0]) * x[1] - x[0]]

# Initial set
q0 = [Interval(1.25), Interval(2.35)]
dq0 = [Interval(-0.05, 0.05), Interval(-0.05, 0.05)]

orderQ = 3
orderT = 10
abstol = 1e-20
tmax = 3.0

set_variables(len(q0), 2 * orderQ)
tv, xv, xTMNv = validatedInteg(f, q0, dq0, 0.0, tmax, orderQ, orderT, abstol,
                               maxsteps=2000, returnTM=True)
print('Number of steps : ', tv.shape[0] - 1)
print('Final enclosure : ', xv[-1])
print('Final remainders : ', [xTMNv[i,-1].rem for i in range(len(q0))])

# Sampled trajectories
evalTime = np.linspace(0, tv[-1], 301)
trajs = generateTraj(f, q0, dq0, evalTime, nbPoint=30, seed=1)

plt.figure()
for j in range(xv.shape[0]):
    plt.gca().add_patch(Rectangle((xv[j,0].lb, xv[j,1].lb), xv[j,0].diam(),
                        xv[j,1].diam(), alpha=0.4, facecolor="tab:green",
                        edgecolor="darkgreen"))
for p in range(trajs.shape[0]):
    plt.plot(trajs[p,0,:], trajs[p,1,:], 'tab:orange', linewidth=0.8)
plt.xlabel('$x$')
plt.ylabel('$y$')
plt.autoscale(enable=True)
plt.grid(True)
plt.tight_layout()

plt.show()
