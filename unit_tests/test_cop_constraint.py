### UNIT TESTS for the CoP constraint models used by the OCP solvers

from types import SimpleNamespace

import numpy as np
import pinocchio as pin

from contact_ocp import CoPSupport
from contact_ocp.constraint_model import (CoPConstraintModel, ConstraintModelStack,
                                          NoConstraintModel)

np.random.seed(10)
TOL = 1e-6


# Numerical difference function
def numdiff(f, inX, h=1e-6):
    f0 = f(inX).copy()
    x = inX.copy()
    Fx = []
    for ix in range(len(x)):
        x[ix] += h
        Fx.append((f(x) - f0) / h)
        x[ix] = inX[ix]
    return np.array(Fx).T


class LinearContactDynamics:
    '''
    Contact wrench f(x, u) = f0 + df_dx @ x + df_du @ u, stored like the
    contact forward dynamics data
    '''
    def __init__(self, nf, ndx, nu):
        self.f0 = np.random.rand(nf)
        self.df_dx = np.random.rand(nf, ndx)
        self.df_du = np.random.rand(nf, nu)

    def calc(self, x, u):
        lambda_c = self.f0 + self.df_dx @ x + self.df_du @ u
        return SimpleNamespace(differential=SimpleNamespace(pinocchio=SimpleNamespace(lambda_c=lambda_c),
                                                            df_dx=self.df_dx,
                                                            df_du=self.df_du))


nx = 8
nu = 3
state = SimpleNamespace(nx=nx, ndx=nx)
R = pin.rpy.rpyToMatrix(np.array([0.1, -0.2, 0.3]))


def test_cop_constraint_calc_and_derivatives():
    support = CoPSupport(R=R, box=[0.2, 0.1])
    dyn = LinearContactDynamics(6, nx, nu)
    cmodel = CoPConstraintModel(state, nu, support)
    cdata = cmodel.createData()
    assert cmodel.nc == 4
    assert np.array_equal(cmodel.lb, support.lb)
    assert np.array_equal(cmodel.ub, support.ub)

    x0 = np.random.rand(nx)
    u0 = np.random.rand(nu)
    data = dyn.calc(x0, u0)
    cmodel.calc(cdata, data, x0, u0)
    cmodel.calcDiff(cdata, data, x0, u0)
    assert np.linalg.norm(cdata.c - support.residual(data.differential.pinocchio.lambda_c)) <= TOL

    def c_of(x, u):
        cd = cmodel.createData()
        cmodel.calc(cd, dyn.calc(x, u), x, u)
        return cd.c
    Cx_ND = numdiff(lambda x_: c_of(x_, u0), x0)
    Cu_ND = numdiff(lambda u_: c_of(x0, u_), u0)
    assert np.linalg.norm(Cx_ND - cdata.Cx) <= 1e-4
    assert np.linalg.norm(Cu_ND - cdata.Cu) <= 1e-4


def test_update_support_refreshes_bounds():
    cmodel = CoPConstraintModel(state, nu, CoPSupport())
    support = CoPSupport(R=np.eye(3), box=[0.2, 0.1])
    cmodel.update_support(support)
    assert cmodel.support is support
    assert np.array_equal(cmodel.lb, support.lb)
    assert np.array_equal(cmodel.ub, support.ub)


def test_stack_of_two_feet():
    left = CoPSupport(R=np.eye(3), box=[0.2, 0.1])
    right = CoPSupport(R=R, box=[0.25, 0.12])
    dyn = LinearContactDynamics(12, nx, nu)
    cmodels = [CoPConstraintModel(state, nu, left, slice(0, 6)),
               NoConstraintModel(state, nu),
               CoPConstraintModel(state, nu, right, slice(6, 12))]
    stack = ConstraintModelStack(cmodels, state, nu)
    cdata = stack.createData()
    assert stack.nc == 8
    assert np.array_equal(stack.lb, np.concatenate([left.lb, right.lb]))
    assert np.array_equal(stack.ub, np.zeros(8))

    x0 = np.random.rand(nx)
    u0 = np.random.rand(nu)
    data = dyn.calc(x0, u0)
    stack.calc(cdata, data, x0, u0)
    stack.calcDiff(cdata, data, x0, u0)
    f = data.differential.pinocchio.lambda_c
    assert np.linalg.norm(cdata.c[:4] - left.A @ f[:6]) <= TOL
    assert np.linalg.norm(cdata.c[4:] - right.A @ f[6:]) <= TOL
    assert np.linalg.norm(cdata.Cx[4:] - right.A @ dyn.df_dx[6:]) <= TOL
    assert np.linalg.norm(cdata.Cu[:4] - left.A @ dyn.df_du[:6]) <= TOL

    dx = np.random.rand(nx)
    du = np.random.rand(nu)
    z = stack.compute_CxCu(dx, du)
    assert np.linalg.norm(z - (cdata.Cx @ dx + cdata.Cu @ du)) <= TOL

    cmodels[0].update_support(CoPSupport())
    stack.refresh_bounds()
    assert np.array_equal(stack.lb, np.concatenate([cmodels[0].lb, right.lb]))
