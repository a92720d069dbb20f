"""
Logit transformation: y = x0 + (1/k) * log(x / (1-x))

The exact inverse of the sigmoid with the same (k, x0): here x0 is the
vertical center. Domain (0, 1), range all reals.
"""
from typing import NamedTuple

import numpy as np

from ...config import CENTER_TOLERANCE
from ...errors import IndeterminateSteepnessError
from ..transformation.transformation import Transformation
from . import sigmoid


class LogitParams(NamedTuple):
    k: float
    x0: float


def f(k, x0, x):
    return sigmoid.f_inv(k, x0, x)


def df(k, x0, x):
    """df/dx = 1 / (k * x * (1-x))"""
    return sigmoid.df_inv(k, x0, x)


def f_inv(k, x0, y):
    """x = 1 / (1 + e^(-k(y-x0)))"""
    return sigmoid.f(k, x0, y)


def df_inv(k, x0, y):
    """d(f^{-1})/dy = k * s * (1-s) where s = f^{-1}(y)"""
    return sigmoid.df(k, x0, y)


def compute_k(x0, x, y, tolerance=CENTER_TOLERANCE):
    """
    Solves the steepness k that puts (x, y) on the curve centered at x0.

    k = log(x / (1-x)) / (y - x0)

    Raises:
        IndeterminateSteepnessError: If y is within `tolerance` of x0.
    """
    if abs(y - x0) < tolerance:
        raise IndeterminateSteepnessError("y too close to x0, cannot compute k")
    with np.errstate(divide="ignore", invalid="ignore"):
        log_odds = np.log(np.float64(x) / (1.0 - np.float64(x)))
    return float(log_odds / (y - x0))


class LogitTransformation(Transformation):
    def __init__(self, k, x0):
        self.params = LogitParams(float(k), float(x0))

    def f(self, x):
        return f(*self.params, x)

    def df(self, x):
        return df(*self.params, x)

    def f_inv(self, y):
        return f_inv(*self.params, y)

    def df_inv(self, y):
        return df_inv(*self.params, y)

    def __repr__(self):
        return f"LogitTransformation(k={self.params.k}, x0={self.params.x0})"


def create_logit_transformation(k, x0):
    return LogitTransformation(k, x0)
