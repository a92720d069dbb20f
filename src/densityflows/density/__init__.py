from .change_of_variables import (
    density_area,
    naive_pdf,
    normal_pdf,
    sample_function,
    transformed_pdf,
)
from .scale import Scale, make_scale

__all__ = [
    "density_area",
    "naive_pdf",
    "normal_pdf",
    "sample_function",
    "transformed_pdf",
    "Scale",
    "make_scale",
]
