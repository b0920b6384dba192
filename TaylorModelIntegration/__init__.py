from .interval import Interval, n2i, i2n

from .intervalN import add_i, sub_i, mul_i, div_i, pow_i, contains_i

from .fields import RealField, IntervalField, promote

from .jetvars import JetContext, set_variables, get_context, get_numvars,\
                     get_order

from .series import TaylorN, Taylor1

from .taylormodels import TaylorModelN, TaylorModel1, RTaylorModel1

from .jetcoeffs import taylorize, GenericJetCoeffs, SpecializedJetCoeffs,\
                       jetCoeffsFactory

from .reach import stepSize, remainderTaylorStep, taylorStep
from .reach import validatedInteg
from .reach import RemainderConvergenceWarning, StepBudgetWarning
from .reach import maxRemainderIter

from .utils import generateTraj
from .utils import sampleInitialStates
from .utils import synthTraj
