## Builds the CoP constraints of a biped standing on a tilted floor and checks a few wrenches

import pathlib

import numpy as np
import pinocchio as pin

from contact_ocp import CoPSupport, load_supports
from contact_ocp.constraint_model import CoPConstraintModel, ConstraintModelStack

np.set_printoptions(precision=4, linewidth=180)

repo_root = pathlib.Path(__file__).absolute().parent.parent
supports = load_supports('biped_feet', path_prefix=str(repo_root))

# Tilt the soles by 10 degrees around the y axis
R_floor = pin.rpy.rpyToMatrix(np.array([0., np.deg2rad(10.), 0.]))
for name in ['left_sole', 'right_sole']:
    supports[name].set_R(R_floor)
    print(name)
    print(supports[name])
    print("A = \n", supports[name].A)

# Wrench of 400N along the floor normal with the CoP 3cm in front of the sole center
fz = 400.
f_local = np.array([0., 0., fz, 0., -0.03 * fz, 0.])
f_world = np.concatenate([R_floor @ f_local[:3], R_floor @ f_local[3:]])
print("CoP inside the left sole : ", supports['left_sole'].is_satisfied(f_world))

# Stack the two feet constraints like in a contact OCP node
state = type('State', (), {'nx': 12, 'ndx': 12})()
nu = 6
stack = ConstraintModelStack([CoPConstraintModel(state, nu, supports['left_sole'], slice(0, 6)),
                              CoPConstraintModel(state, nu, supports['right_sole'], slice(6, 12))],
                             state, nu)
print("stacked constraints : ", stack.nc)
print("unbounded support   : \n", CoPSupport())
