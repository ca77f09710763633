## Center of pressure (CoP) support region of a rectangular contact surface
##
## The support is described by the orientation of the contact frame and the
## (length, width) of the surface. It defines 4 one-sided inequalities
##     lb <= A @ f <= ub
## over the spatial wrench f = [force; moment] that keep the CoP inside the
## rectangle. The sign of the normal force is NOT constrained here, this has to
## be added by a richer representation (e.g. a wrench cone).

from collections import namedtuple
import copy

import numpy as np

from .utils import (CustomLogger, GLOBAL_LOG_LEVEL, GLOBAL_LOG_FORMAT, raiseIfNan,
                    readonly, is_rotation, rotation_from_two_vectors)

logger = CustomLogger(__name__, GLOBAL_LOG_LEVEL, GLOBAL_LOG_FORMAT).logger


UNBOUNDED = np.finfo(float).max
UP = np.array([0., 0., 1.])

SupportCorrection = namedtuple('SupportCorrection', ['kind', 'field', 'old', 'new'])


class NotARotationError(ValueError):
    pass


class CoPSupport:
    '''
    CoP support region of a rectangular contact surface.

    Build it from
      - nothing : unbounded surface aligned with the z axis
      - R and box : orientation of the contact frame and (length, width)
      - nsurf and box : surface normal, R is the shortest-arc rotation taking nsurf to z
      - a wrench cone, see from_wrench_cone

    The arrays returned by the accessors are read-only views. Every mutation
    re-computes A, ub and lb before returning. Malformed normals and boxes are
    corrected and reported (see corrections), an orientation which is not a
    rotation raises NotARotationError.
    '''
    def __init__(self, R=None, box=None, nsurf=None, tol=1e-9):
        if R is not None and nsurf is not None:
            raise ValueError("Give either R or nsurf, not both")
        self.tol = tol
        self.corrections = []

        if box is None:
            box = np.array([UNBOUNDED, UNBOUNDED])
        box, events = self._sanitize_box(box)
        if nsurf is not None:
            nsurf, nevents = self._sanitize_nsurf(nsurf)
            events = nevents + events
            R = rotation_from_two_vectors(nsurf, UP)
        elif R is not None:
            R = self._check_rotation(R)
            nsurf = R.T @ UP
        else:
            R = np.eye(3)
            nsurf = UP.copy()

        A, ub, lb = self._derive(R, box)
        self._commit(R, nsurf, box, A, ub, lb)
        self._report(events)

    @classmethod
    def from_wrench_cone(cls, cone):
        '''
        CoP view of a wrench cone. A, ub, lb, R, nsurf and box are copied from
        the cone as they are, nothing is re-derived. Cones which do not expose
        nsurf (crocoddyl.WrenchCone) get it from R as in set_R.
        '''
        support = cls.__new__(cls)
        support.tol = 1e-9
        support.corrections = []
        R = np.array(cone.R, dtype=float)
        nsurf = getattr(cone, 'nsurf', None)
        if nsurf is None:
            nsurf = R.T @ UP
        support._commit(R,
                        np.array(nsurf, dtype=float),
                        np.array(cone.box, dtype=float),
                        np.array(cone.A, dtype=float),
                        np.array(cone.ub, dtype=float),
                        np.array(cone.lb, dtype=float))
        return support

    def update(self):
        """re-computes the inequality matrix and bounds from R and box"""
        A, ub, lb = self._derive(self._R, self._box)
        self._A, self._ub, self._lb = A, ub, lb

    # Mutators

    def set_R(self, R):
        R = self._check_rotation(R)
        nsurf = R.T @ UP
        A, ub, lb = self._derive(R, self._box)
        self._commit(R, nsurf, self._box, A, ub, lb)
        return []

    def set_nsurf(self, nsurf):
        nsurf, events = self._sanitize_nsurf(nsurf)
        R = rotation_from_two_vectors(nsurf, UP)
        A, ub, lb = self._derive(R, self._box)
        self._commit(R, nsurf, self._box, A, ub, lb)
        self._report(events)
        return events

    def set_box(self, box):
        box, events = self._sanitize_box(box)
        A, ub, lb = self._derive(self._R, box)
        self._commit(self._R, self._nsurf, box, A, ub, lb)
        self._report(events)
        return events

    def clear_corrections(self):
        self.corrections = []

    # Accessors

    @property
    def A(self):
        return readonly(self._A)

    @property
    def ub(self):
        return readonly(self._ub)

    @property
    def lb(self):
        return readonly(self._lb)

    @property
    def R(self):
        return readonly(self._R)

    @R.setter
    def R(self, R):
        self.set_R(R)

    @property
    def nsurf(self):
        return readonly(self._nsurf)

    @nsurf.setter
    def nsurf(self, nsurf):
        self.set_nsurf(nsurf)

    @property
    def box(self):
        return readonly(self._box)

    @box.setter
    def box(self, box):
        self.set_box(box)

    inequality_matrix = A
    upper_bound = ub
    lower_bound = lb
    orientation = R
    surface_normal = nsurf
    extent = box

    # Evaluation

    def residual(self, wrench):
        """returns A @ wrench, wrench is a 6d vector or a pinocchio.Force"""
        if hasattr(wrench, 'vector'):
            wrench = wrench.vector
        return self._A @ np.asarray(wrench, dtype=float)

    def is_satisfied(self, wrench, tol=0.):
        r = self.residual(wrench)
        return bool(np.all(r <= self._ub + tol) and np.all(r >= self._lb - tol))

    def copy(self):
        return copy.deepcopy(self)

    def __str__(self):
        fmt = lambda v : np.array2string(np.asarray(v), precision=4, separator=' ')
        s  = "         R: " + "; ".join(fmt(row) for row in self._R) + "\n"
        s += "   (nsurf): " + fmt(self._nsurf) + "\n"
        s += "       box: " + fmt(self._box)
        return s

    def __repr__(self):
        return "CoPSupport(R=" + repr(self._R.tolist()) + ", box=" + repr(self._box.tolist()) + ")"

    # Internals

    def _derive(self, R, box):
        A = np.zeros((4, 6))
        ub = np.zeros(4)
        lb = -UNBOUNDED * np.ones(4)

        # A = [0 0 -W  1  0  0;
        #      0 0 -W -1  0  0;
        #      0 0 -L  0  1  0;
        #      0 0 -L  0 -1  0]  for R = I
        # An unbounded side leaves its two rows at zero
        L = box[0] / 2.
        W = box[1] / 2.
        if box[1] < UNBOUNDED:
            A[0, :3] = -W * R[:, 2]
            A[0, 3:] = R[:, 0]
            A[1, :3] = -W * R[:, 2]
            A[1, 3:] = -R[:, 0]
        if box[0] < UNBOUNDED:
            A[2, :3] = -L * R[:, 2]
            A[2, 3:] = R[:, 1]
            A[3, :3] = -L * R[:, 2]
            A[3, 3:] = -R[:, 1]
        raiseIfNan(A)
        return A, ub, lb

    def _commit(self, R, nsurf, box, A, ub, lb):
        self._R = R
        self._nsurf = nsurf
        self._box = box
        self._A = A
        self._ub = ub
        self._lb = lb

    def _report(self, events):
        for e in events:
            if e.kind == 'non_unit_normal':
                logger.warning("normal is not an unitary vector, then we normalized it: " + str(e.old) + " -> " + str(e.new))
            else:
                logger.warning(e.field + " has to be a positive value, set to max. float (was " + str(e.old) + ")")
        self.corrections.extend(events)

    def _check_rotation(self, R):
        R = np.array(R, dtype=float)
        if not is_rotation(R, self.tol):
            raise NotARotationError("R must be a 3x3 rotation matrix, got\n" + str(R))
        return R

    def _sanitize_nsurf(self, nsurf):
        n = np.array(nsurf, dtype=float)
        if n.shape != (3,):
            raise ValueError("nsurf must be a 3d vector, got shape " + str(n.shape))
        norm = np.linalg.norm(n)
        if not np.isfinite(norm) or norm == 0.:
            raise ValueError("nsurf must be a finite non-zero vector, got " + str(n))
        if abs(norm - 1.) <= self.tol:
            return n, []
        n_unit = n / norm
        return n_unit, [SupportCorrection('non_unit_normal', 'nsurf', n, n_unit.copy())]

    def _sanitize_box(self, box):
        b = np.array(box, dtype=float)
        if b.shape != (2,):
            raise ValueError("box must be a 2d vector (length, width), got shape " + str(b.shape))
        if np.any(np.isnan(b)):
            raise ValueError("box must not contain NaN, got " + str(b))
        events = []
        for i in range(2):
            if b[i] < 0.:
                events.append(SupportCorrection('negative_extent', 'box(' + str(i) + ')', float(b[i]), UNBOUNDED))
                b[i] = UNBOUNDED
            elif np.isinf(b[i]):
                b[i] = UNBOUNDED
        return b, events
