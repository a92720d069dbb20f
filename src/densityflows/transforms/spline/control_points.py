from typing import NamedTuple


class ControlPoint(NamedTuple):
    x: float
    y: float


START_POINT = ControlPoint(0.0, 0.0)
END_POINT = ControlPoint(1.0, 1.0)


def as_control_points(points):
    """Normalizes (x, y) pairs into a tuple of ControlPoint."""
    return tuple(ControlPoint(float(x), float(y)) for x, y in points)


def with_boundaries(points):
    """Prepends (0, 0) and appends (1, 1) to the inner control points."""
    return (START_POINT,) + as_control_points(points) + (END_POINT,)


def validate_control_points(points):
    """
    Checks that the inner points, together with the fixed boundary points,
    are strictly increasing in both x and y. That is what makes the spline
    a bijection of [0, 1].

    Args:
        points (sequence of (float, float)): Inner control points.

    Returns:
        bool: True if the monotonicity invariant holds.
    """
    full = with_boundaries(points)
    return all(
        prev.x < cur.x and prev.y < cur.y
        for prev, cur in zip(full[:-1], full[1:])
    )
