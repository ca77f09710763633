## This is the abstract model class to enforce constraints in the OCP solvers

import numpy as np


class ConstraintModelAbstract():
    '''
    Constraint lb <= c(x, u) <= ub with nc rows at one node of the OCP
    '''
    def __init__(self, state, nc, nu, lb, ub):
        self.state = state
        self.nc = nc
        self.nu = nu
        self.lb = np.asarray(lb, dtype=float)
        self.ub = np.asarray(ub, dtype=float)
        assert len(self.lb) == nc and len(self.ub) == nc

    def createData(self):
        data = ConstraintData(self)
        return data

    def calc(self, cdata, data, x, u=None):
        raise NotImplementedError

    def calcDiff(self, cdata, data, x, u=None):
        raise NotImplementedError


class ConstraintData():
    def __init__(self, cmodel):
        self.c = np.zeros(cmodel.nc)
        self.Cx = np.zeros((cmodel.nc, cmodel.state.ndx))
        self.Cu = np.zeros((cmodel.nc, cmodel.nu))


class NoConstraintModel(ConstraintModelAbstract):
    def __init__(self, state, nu):
        ConstraintModelAbstract.__init__(self, state, 0, nu, np.zeros(0), np.zeros(0))

    def calc(self, cdata, data, x, u=None):
        pass

    def calcDiff(self, cdata, data, x, u=None):
        pass
