"""
Sigmoid transformation: y = 1 / (1 + e^(-k(x-x0)))

k is the steepness (k > 0) and x0 the horizontal center. The range is the
open interval (0, 1); the inverse diverges at its boundaries.
"""
from typing import NamedTuple

import numpy as np

from ...config import CENTER_TOLERANCE
from ...errors import IndeterminateSteepnessError
from ..transformation.transformation import Transformation, as_float


class SigmoidParams(NamedTuple):
    k: float
    x0: float


def f(k, x0, x):
    with np.errstate(over="ignore"):
        return 1.0 / (1.0 + np.exp(-k * (as_float(x) - x0)))


def df(k, x0, x):
    """df/dx = k * s * (1 - s) where s = f(x)"""
    s = f(k, x0, x)
    return k * s * (1.0 - s)


def f_inv(k, x0, y):
    """x = x0 + (1/k) * log(y / (1-y))"""
    y = as_float(y)
    with np.errstate(divide="ignore", invalid="ignore"):
        return x0 + (1.0 / np.float64(k)) * np.log(y / (1.0 - y))


def df_inv(k, x0, y):
    """d(f^{-1})/dy = 1 / (k * y * (1-y))"""
    y = as_float(y)
    with np.errstate(divide="ignore", invalid="ignore"):
        return 1.0 / (np.float64(k) * y * (1.0 - y))


def compute_k(x0, x, y, tolerance=CENTER_TOLERANCE):
    """
    Solves the steepness k that puts (x, y) on the curve centered at x0.

    k = ln(y/(1-y)) / (x - x0)

    Raises:
        IndeterminateSteepnessError: If x is within `tolerance` of x0.
    """
    if abs(x - x0) < tolerance:
        raise IndeterminateSteepnessError("x too close to x0, cannot compute k")
    with np.errstate(divide="ignore", invalid="ignore"):
        log_odds = np.log(np.float64(y) / (1.0 - np.float64(y)))
    return float(log_odds / (x - x0))


class SigmoidTransformation(Transformation):
    def __init__(self, k, x0):
        self.params = SigmoidParams(float(k), float(x0))

    def f(self, x):
        return f(*self.params, x)

    def df(self, x):
        return df(*self.params, x)

    def f_inv(self, y):
        return f_inv(*self.params, y)

    def df_inv(self, y):
        return df_inv(*self.params, y)

    def __repr__(self):
        return f"SigmoidTransformation(k={self.params.k}, x0={self.params.x0})"


def create_sigmoid_transformation(k, x0):
    return SigmoidTransformation(k, x0)
