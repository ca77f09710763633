## Center of pressure constraint on a 6D contact wrench

import numpy as np
from . abstract_model import ConstraintModelAbstract


class CoPConstraintModel(ConstraintModelAbstract):
    '''
    Keeps the CoP of a 6D contact inside its support region, i.e.
        support.lb <= support.A @ f <= support.ub
    with f = lambda_c[force_slice] the contact wrench computed by the
    contact dynamics.
    '''
    def __init__(self, state, nu, support, force_slice=slice(0, 6)):
        ConstraintModelAbstract.__init__(self, state, len(support.lb), nu, support.lb, support.ub)
        self.support = support
        self.force_slice = force_slice

    def update_support(self, support):
        if len(support.lb) != self.nc:
            raise ValueError("support has "+str(len(support.lb))+" rows, expected "+str(self.nc))
        self.support = support
        self.lb = np.asarray(support.lb, dtype=float)
        self.ub = np.asarray(support.ub, dtype=float)

    def calc(self, cdata, data, x, u=None):
        f = data.differential.pinocchio.lambda_c[self.force_slice]
        cdata.c = self.support.A @ f

    def calcDiff(self, cdata, data, x, u=None):
        A = self.support.A
        cdata.Cx = A @ data.differential.df_dx[self.force_slice]
        cdata.Cu = A @ data.differential.df_du[self.force_slice]
