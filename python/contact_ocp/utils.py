## Logging, numerical guards and rotation helpers shared by the package

import logging
import sys

import numpy as np
import pinocchio as pin
import scipy.linalg as scl


GLOBAL_LOG_LEVEL = 'INFO'
GLOBAL_LOG_FORMAT = 'SHORT'

SUPPORTED_LOG_LEVELS = {'DEBUG'   : logging.DEBUG,
                        'INFO'    : logging.INFO,
                        'WARNING' : logging.WARNING,
                        'ERROR'   : logging.ERROR,
                        'CRITICAL': logging.CRITICAL}

LOG_FORMATS = {'SHORT': '[%(levelname)s] %(name)s: %(message)s',
               'LONG' : '%(asctime)s [%(levelname)s] %(name)s (%(funcName)s:%(lineno)d): %(message)s'}


class CustomLogger:
    '''
    Module logger writing to stdout with one of the supported formats.
    Records still propagate to the root logger.
    '''
    def __init__(self, module_name, log_level_name=GLOBAL_LOG_LEVEL, log_format=GLOBAL_LOG_FORMAT):
        if log_level_name not in SUPPORTED_LOG_LEVELS:
            raise ValueError("log level must be in "+str(list(SUPPORTED_LOG_LEVELS.keys())))
        if log_format not in LOG_FORMATS:
            raise ValueError("log format must be in "+str(list(LOG_FORMATS.keys())))
        self.log_level_name = log_level_name
        self.log_level = SUPPORTED_LOG_LEVELS[log_level_name]
        self.logger = logging.getLogger(module_name)
        self.logger.setLevel(self.log_level)
        # Modules may be reloaded, only attach one handler
        if not any(getattr(h, '_custom_logger', False) for h in self.logger.handlers):
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(logging.Formatter(LOG_FORMATS[log_format]))
            handler._custom_logger = True
            self.logger.addHandler(handler)


def raiseIfNan(A, error=None):
    if error is None:
        error = scl.LinAlgError("NaN in array")
    if np.any(np.isnan(A)) or np.any(np.isinf(A)):
        raise error


def readonly(a):
    """returns a non writeable view of a"""
    v = a.view()
    v.flags.writeable = False
    return v


def is_rotation(R, tol=1e-9):
    '''
    True if R is a 3x3 orthonormal matrix with determinant +1 (up to tol)
    '''
    R = np.asarray(R, dtype=float)
    if R.shape != (3, 3) or not np.all(np.isfinite(R)):
        return False
    if np.linalg.norm(R.T @ R - np.eye(3)) > tol:
        return False
    return abs(np.linalg.det(R) - 1.) <= tol


def rotation_from_two_vectors(a, b):
    '''
    Shortest-arc rotation matrix R such that R @ a is aligned with b
    '''
    a = np.asarray(a, dtype=float).reshape(3)
    b = np.asarray(b, dtype=float).reshape(3)
    return pin.Quaternion.FromTwoVectors(a, b).toRotationMatrix()
