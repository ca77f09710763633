## Computes all the constraints at a particular time step

import numpy as np

from . abstract_model import ConstraintModelAbstract


class ConstraintModelStack(ConstraintModelAbstract):
    def __init__(self, constraintmodels, state, nu):

        self.cmodels = constraintmodels
        self.cdatas = [cmodel.createData() for cmodel in constraintmodels]

        nc = sum(cmodel.nc for cmodel in constraintmodels)
        lmin = np.concatenate([cmodel.lb for cmodel in constraintmodels])
        lmax = np.concatenate([cmodel.ub for cmodel in constraintmodels])

        ConstraintModelAbstract.__init__(self, state, nc, nu, lmin, lmax)

    def refresh_bounds(self):
        """re-reads the bounds of the stacked models"""
        self.lb = np.concatenate([cmodel.lb for cmodel in self.cmodels])
        self.ub = np.concatenate([cmodel.ub for cmodel in self.cmodels])

    def calc(self, cdata, data, x, u=None):
        count = 0 
        for (ci, di) in zip(self.cmodels, self.cdatas):
            ci.calc(di, data, x, u)
            cdata.c[count:count + ci.nc] = di.c
            count += ci.nc

    def calcDiff(self, cdata, data, x, u=None):
        count = 0
        for (ci, di) in zip(self.cmodels, self.cdatas):
            ci.calcDiff(di, data, x, u)
            cdata.Cx[count:count + ci.nc] = di.Cx     
            cdata.Cu[count:count + ci.nc] = di.Cu     
            count += ci.nc

    def compute_CxCu(self, dx, du):
        """returns Cx @ dx + Cu @ du"""
        z = np.zeros(self.nc)
        count = 0
        for (ci, di) in zip(self.cmodels, self.cdatas):
            z[count: count + ci.nc] = di.Cx @ dx + di.Cu @ du
            count += ci.nc
        return z
