from .transformation.transformation import Transformation
from .transformation.composed_transformation import ComposedTransformation, compose_transformations
from .scalar.linear import LinearParams, LinearTransformation, create_linear_transformation
from .scalar.sigmoid import SigmoidParams, SigmoidTransformation, create_sigmoid_transformation
from .scalar.logit import LogitParams, LogitTransformation, create_logit_transformation
from .spline.control_points import ControlPoint, validate_control_points
from .spline.bspline import BSplineTransformation, create_bspline_transformation

__all__ = [
    "Transformation",
    "ComposedTransformation",
    "compose_transformations",
    "LinearParams",
    "LinearTransformation",
    "create_linear_transformation",
    "SigmoidParams",
    "SigmoidTransformation",
    "create_sigmoid_transformation",
    "LogitParams",
    "LogitTransformation",
    "create_logit_transformation",
    "ControlPoint",
    "validate_control_points",
    "BSplineTransformation",
    "create_bspline_transformation",
]
