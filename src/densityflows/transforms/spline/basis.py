"""
B-spline basis functions via the Cox-de Boor recursion.
"""


def clamped_uniform_knots(num_control_points, degree):
    """
    Builds a clamped, uniform knot vector on [0, 1].

    The first and last degree+1 knots are repeated so the curve starts at
    the first control point and ends at the last; the remaining knots are
    evenly spaced in between.

    Args:
        num_control_points (int): Number of control points n (n > degree).
        degree (int): Spline degree p.

    Returns:
        list of float: n + p + 1 knots.
    """
    num_internal = num_control_points - degree - 1
    internal = [i / (num_internal + 1) for i in range(1, num_internal + 1)]
    return [0.0] * (degree + 1) + internal + [1.0] * (degree + 1)


def bspline_basis(i, p, u, knots):
    """
    N_{i,p}(u). Spans of zero width contribute nothing.
    """
    if p == 0:
        if knots[i] <= u < knots[i + 1]:
            return 1.0
        # The last non-empty span is closed so that N is defined at u = 1
        if u == knots[-1] and knots[i] < knots[i + 1] == knots[-1]:
            return 1.0
        return 0.0

    left = knots[i + p] - knots[i]
    right = knots[i + p + 1] - knots[i + 1]

    term1 = 0.0
    term2 = 0.0
    if left > 0:
        term1 = ((u - knots[i]) / left) * bspline_basis(i, p - 1, u, knots)
    if right > 0:
        term2 = ((knots[i + p + 1] - u) / right) * bspline_basis(i + 1, p - 1, u, knots)
    return term1 + term2


def bspline_basis_derivative(i, p, u, knots):
    """
    dN_{i,p}/du = p * (N_{i,p-1} / (t_{i+p} - t_i) - N_{i+1,p-1} / (t_{i+p+1} - t_{i+1}))
    """
    if p == 0:
        return 0.0

    left = knots[i + p] - knots[i]
    right = knots[i + p + 1] - knots[i + 1]

    term1 = 0.0
    term2 = 0.0
    if left > 0:
        term1 = bspline_basis(i, p - 1, u, knots) / left
    if right > 0:
        term2 = bspline_basis(i + 1, p - 1, u, knots) / right
    return p * (term1 - term2)


def evaluate_curve(coefficients, degree, u, knots, basis=bspline_basis):
    """
    Sum of coefficient_i * basis(i, degree, u). Only the basis functions
    whose support [t_i, t_{i+p+1}] contains u are evaluated.
    """
    total = 0.0
    for i, c in enumerate(coefficients):
        if knots[i] <= u <= knots[i + degree + 1]:
            total += c * basis(i, degree, u, knots)
    return total
