import functools

import numpy as np

from ...config import (
    BISECTION_MAX_ITER,
    BISECTION_TOLERANCE,
    FINITE_DIFFERENCE_STEP,
    NEAR_ZERO_SLOPE,
    SPLINE_DEGREE,
)
from ...diagnostics import emit
from ..transformation.transformation import Transformation
from .basis import (
    bspline_basis,
    bspline_basis_derivative,
    clamped_uniform_knots,
    evaluate_curve,
)
from .control_points import as_control_points, validate_control_points, with_boundaries


def _elementwise(method):
    """Lets a scalar-only method accept numpy arrays, one element at a time."""
    @functools.wraps(method)
    def wrapper(self, value):
        if np.ndim(value) == 0:
            return method(self, float(value))
        flat = [method(self, float(v)) for v in np.ravel(value)]
        return np.array(flat, dtype=np.float64).reshape(np.shape(value))
    return wrapper


def _clamp(value, lower=0.0, upper=1.0):
    return max(lower, min(upper, value))


class BSplineTransformation(Transformation):
    """
    Monotone cubic B-spline map of [0, 1] onto itself.

    The curve (X(u), Y(u)) is guided by, but does not pass through, the
    control points. (0, 0) and (1, 1) are always added as the first and last
    control points and the knot vector is clamped, so the curve is pinned to
    the corners. If the points increase strictly in both coordinates, X and
    Y are increasing in u and y = Y(X^{-1}(x)) is a bijection.

    Both x -> u and y -> u are solved by bisection with a fixed iteration
    budget. df_inv is a central finite difference of f_inv, so
    df_inv(y) == 1 / df(f_inv(y)) holds only approximately for this map.
    """
    def __init__(
        self,
        control_points,
        degree=SPLINE_DEGREE,
        tolerance=BISECTION_TOLERANCE,
        max_iter=BISECTION_MAX_ITER,
        step=FINITE_DIFFERENCE_STEP,
        on_diagnostic=None,
    ):
        self.control_points = as_control_points(control_points)
        self.tolerance = tolerance
        self.max_iter = max_iter
        self.step = step
        self.on_diagnostic = on_diagnostic

        full = with_boundaries(self.control_points)
        self.control_x = tuple(p.x for p in full)
        self.control_y = tuple(p.y for p in full)

        n = len(full)
        # Fewer than four control points cannot carry a clamped cubic
        self.degree = min(degree, n - 1)
        self.knots = clamped_uniform_knots(n, self.degree)

        if not validate_control_points(self.control_points):
            emit(
                "B-spline control points are not strictly increasing; the map may not be invertible",
                on_diagnostic,
                control_points=self.control_points,
            )

    # Curve evaluation in the shared parameter u

    def evaluate_x(self, u):
        return evaluate_curve(self.control_x, self.degree, u, self.knots)

    def evaluate_y(self, u):
        return evaluate_curve(self.control_y, self.degree, u, self.knots)

    def evaluate_x_derivative(self, u):
        return evaluate_curve(
            self.control_x, self.degree, u, self.knots, basis=bspline_basis_derivative
        )

    def evaluate_y_derivative(self, u):
        return evaluate_curve(
            self.control_y, self.degree, u, self.knots, basis=bspline_basis_derivative
        )

    def _solve_u(self, evaluate, target, tolerance):
        """
        Bisection for u in [0, 1] with evaluate(u) == target. The curve
        passes through (0, 0) and (1, 1), so the endpoints are exact.
        """
        if target <= 0.0:
            return 0.0
        if target >= 1.0:
            return 1.0

        u_min, u_max = 0.0, 1.0
        for _ in range(self.max_iter):
            u_mid = 0.5 * (u_min + u_max)
            value = evaluate(u_mid)
            if abs(value - target) < tolerance:
                return u_mid
            if value < target:
                u_min = u_mid
            else:
                u_max = u_mid
        return 0.5 * (u_min + u_max)

    def find_u_for_x(self, x):
        return self._solve_u(self.evaluate_x, _clamp(x), self.tolerance)

    def find_u_for_y(self, y):
        return self._solve_u(self.evaluate_y, _clamp(y), self.tolerance)

    # Transformation interface

    @_elementwise
    def f(self, x):
        if np.isnan(x):
            return np.nan
        return self.evaluate_y(self.find_u_for_x(x))

    @_elementwise
    def df(self, x):
        """
        dy/dx = (dY/du) / (dX/du) at the u solving X(u) = x.
        """
        if np.isnan(x):
            return np.nan
        u = self.find_u_for_x(x)
        dydu = self.evaluate_y_derivative(u)
        dxdu = self.evaluate_x_derivative(u)

        if abs(dxdu) < NEAR_ZERO_SLOPE:
            emit("[BSpline] df: near-zero dx/du", self.on_diagnostic, x=x, u=u)
            return 0.0
        return dydu / dxdu

    @_elementwise
    def f_inv(self, y):
        if np.isnan(y):
            return np.nan
        return self.evaluate_x(self.find_u_for_y(y))

    @_elementwise
    def df_inv(self, y):
        """
        Central difference of f_inv with step h, y clamped into [h, 1-h].

        The two samples are solved to the full iteration budget: stopping at
        the residual tolerance would leave noise of order tolerance / h in
        the quotient.
        """
        if np.isnan(y):
            return np.nan
        h = self.step
        y = _clamp(y, h, 1.0 - h)
        u1 = self._solve_u(self.evaluate_y, y - h, 0.0)
        u2 = self._solve_u(self.evaluate_y, y + h, 0.0)
        x1 = self.evaluate_x(u1)
        x2 = self.evaluate_x(u2)
        return (x2 - x1) / (2 * h)

    def __repr__(self):
        points = ", ".join(f"({p.x:g}, {p.y:g})" for p in self.control_points)
        return f"BSplineTransformation([{points}])"


def create_bspline_transformation(inner_control_points_x, inner_control_points_y, **kwargs):
    """
    Builds a B-spline transformation from separate x and y sequences of
    inner control points.
    """
    if len(inner_control_points_x) != len(inner_control_points_y):
        raise ValueError("control point x and y sequences must have the same length")
    points = list(zip(inner_control_points_x, inner_control_points_y))
    return BSplineTransformation(points, **kwargs)
