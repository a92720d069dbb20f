from typing import NamedTuple

import numpy as np

from ..transformation.transformation import Transformation, as_float


class LinearParams(NamedTuple):
    scale: float
    shift: float


def f(scale, shift, x):
    """Forward linear map: y = scale * x + shift"""
    return scale * as_float(x) + shift


def df(scale, shift, x):
    """df/dx = scale, broadcast to the shape of x"""
    return np.zeros_like(as_float(x)) + scale


def f_inv(scale, shift, y):
    """Inverse: x = (y - shift) / scale"""
    # scale == 0 is left to IEEE arithmetic (inf/nan)
    with np.errstate(divide="ignore", invalid="ignore"):
        return (as_float(y) - shift) / np.float64(scale)


def df_inv(scale, shift, y):
    """d(f^{-1})/dy = 1 / scale"""
    with np.errstate(divide="ignore"):
        return np.zeros_like(as_float(y)) + np.float64(1.0) / np.float64(scale)


class LinearTransformation(Transformation):
    """
    y = scale * x + shift over all reals.
    """
    def __init__(self, scale, shift):
        self.params = LinearParams(float(scale), float(shift))

    def f(self, x):
        return f(*self.params, x)

    def df(self, x):
        return df(*self.params, x)

    def f_inv(self, y):
        return f_inv(*self.params, y)

    def df_inv(self, y):
        return df_inv(*self.params, y)

    def __repr__(self):
        return f"LinearTransformation(scale={self.params.scale}, shift={self.params.shift})"


def create_linear_transformation(scale, shift):
    return LinearTransformation(scale, shift)
