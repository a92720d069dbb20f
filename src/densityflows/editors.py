"""
Parameter updates behind the interactive curve editors.

Each function takes the current parameters and a dragged position in data
coordinates (the caller converts from pixels with Scale.inverse) and returns
new parameters. Nothing is mutated; the caller rebuilds its transformation
from the returned value.
"""
from .config import (
    CONTROL_POINT_MARGIN,
    LOGIT_STEEPNESS_LEFT_X,
    LOGIT_STEEPNESS_RIGHT_X,
    LOGIT_Y_DOMAIN,
    SIGMOID_STEEPNESS_DISTANCE,
    SIGMOID_X_DOMAIN,
    SIGMOID_Y_CLIP,
)
from .errors import IndeterminateSteepnessError
from .transforms.scalar import logit, sigmoid
from .transforms.scalar.logit import LogitParams
from .transforms.scalar.sigmoid import SigmoidParams
from .transforms.spline.control_points import END_POINT, START_POINT, ControlPoint, as_control_points


def _clip(value, bounds):
    return max(bounds[0], min(bounds[1], value))


def drag_sigmoid_center(params, x, x_domain=SIGMOID_X_DOMAIN, distance=SIGMOID_STEEPNESS_DISTANCE):
    """
    Moves the sigmoid center horizontally to x (clamped to the domain).

    The steepness handle keeps its position relative to the center, so k is
    re-derived from the point one handle distance to the right.
    """
    k, _ = params
    x0 = _clip(x, x_domain)
    steepness_x = x0 + distance
    steepness_y = float(sigmoid.f(k, x0, steepness_x))
    try:
        k = sigmoid.compute_k(x0, steepness_x, steepness_y)
    except IndeterminateSteepnessError:
        pass
    return SigmoidParams(k, x0)


def drag_sigmoid_steepness(params, y, side="right", y_clip=SIGMOID_Y_CLIP, distance=SIGMOID_STEEPNESS_DISTANCE):
    """
    Moves a steepness handle vertically. The handle sits at x0 - distance
    (side="left") or x0 + distance (side="right").
    """
    k, x0 = params
    if side not in ("left", "right"):
        raise ValueError(f"side must be 'left' or 'right', got {side!r}")
    steepness_x = x0 - distance if side == "left" else x0 + distance
    try:
        k = sigmoid.compute_k(x0, steepness_x, _clip(y, y_clip))
    except IndeterminateSteepnessError:
        pass
    return SigmoidParams(k, x0)


def drag_logit_center(params, y, y_domain=LOGIT_Y_DOMAIN, handle_x=LOGIT_STEEPNESS_RIGHT_X):
    """
    Moves the logit center vertically to y (clamped to the y-domain) and
    re-derives k from the right handle.
    """
    k, _ = params
    x0 = _clip(y, y_domain)
    steepness_y = float(logit.f(k, x0, handle_x))
    try:
        k = logit.compute_k(x0, handle_x, steepness_y)
    except IndeterminateSteepnessError:
        pass
    return LogitParams(k, x0)


def drag_logit_steepness(
    params,
    y,
    side="right",
    y_domain=LOGIT_Y_DOMAIN,
    left_x=LOGIT_STEEPNESS_LEFT_X,
    right_x=LOGIT_STEEPNESS_RIGHT_X,
):
    """
    Moves a logit steepness handle, fixed at x = left_x or right_x, to height y.

    If y lands within the center tolerance of x0 the previous k is kept.
    """
    k, x0 = params
    if side not in ("left", "right"):
        raise ValueError(f"side must be 'left' or 'right', got {side!r}")
    handle_x = left_x if side == "left" else right_x
    try:
        k = logit.compute_k(x0, handle_x, _clip(y, y_domain))
    except IndeterminateSteepnessError:
        pass
    return LogitParams(k, x0)


def move_control_point(points, index, x, y, margin=CONTROL_POINT_MARGIN, domain=(0.0, 1.0)):
    """
    Moves one inner spline control point while keeping the sequence strictly
    increasing in both coordinates.

    The point is clamped to stay at least `margin` away from its neighbours
    (the fixed (0, 0) and (1, 1) end points count as neighbours) and then to
    the domain.

    Args:
        points (sequence of (float, float)): Inner control points.
        index (int): Which point is dragged.
        x, y (float): Requested position.

    Returns:
        tuple: (new_points, constraint_violated). Callers typically skip the
        downstream update while constraint_violated is True.
    """
    points = as_control_points(points)
    if not 0 <= index < len(points):
        raise IndexError(f"control point index {index} out of range")

    prev_point = points[index - 1] if index > 0 else START_POINT
    next_point = points[index + 1] if index < len(points) - 1 else END_POINT
    violated = False

    if x < prev_point.x + margin:
        x = prev_point.x + margin
        violated = True
    if x > next_point.x - margin:
        x = next_point.x - margin
        violated = True
    if y < prev_point.y + margin:
        y = prev_point.y + margin
        violated = True
    if y > next_point.y - margin:
        y = next_point.y - margin
        violated = True

    x = _clip(x, domain)
    y = _clip(y, domain)

    moved = list(points)
    moved[index] = ControlPoint(x, y)
    return tuple(moved), violated
