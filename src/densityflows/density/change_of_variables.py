"""
Change of variables for 1D densities.

If Y = f(X) for an invertible f, then

    p_Y(y) = p_X(f^{-1}(y)) * |d f^{-1}/dy (y)|

The functions here combine any Transformation (usually a composition) with
a base density and sample the result on a grid for plotting.
"""
import numpy as np

from ..config import DEFAULT_SAMPLE_COUNT, LARGE_VALUE_THRESHOLD
from ..diagnostics import emit


def normal_pdf(x):
    """Standard normal density."""
    x = np.asarray(x, dtype=np.float64)
    return np.exp(-(x ** 2) / 2) / np.sqrt(2 * np.pi)


def transformed_pdf(transformation, base_pdf, threshold=LARGE_VALUE_THRESHOLD, on_diagnostic=None):
    """
    Builds the density of f(X) for X ~ base_pdf.

    Values near a singularity (for instance y close to 0 or 1 after a
    sigmoid) are reported through the diagnostic hook but still returned,
    so the blow-up stays visible in a plot.

    Args:
        transformation (Transformation): The map f.
        base_pdf (callable): Density of X.
        threshold (float): Magnitude above which a value is reported.
        on_diagnostic (callable, optional): Hook for the report.

    Returns:
        callable: y -> p_Y(y).
    """
    def pdf(y):
        x = transformation.f_inv(y)
        jacobian = np.abs(transformation.df_inv(y))
        with np.errstate(invalid="ignore", over="ignore"):
            density = base_pdf(x) * jacobian
        if np.any(jacobian > threshold) or np.any(density > threshold):
            emit(
                "large value in transformed density",
                on_diagnostic,
                y=y,
                jacobian=np.max(jacobian),
                density=np.max(density),
            )
        return density

    return pdf


def naive_pdf(transformation, base_pdf):
    """
    p_X(f^{-1}(y)) without the Jacobian factor. Not a density in general:
    for a linear map its area is |scale| instead of 1.
    """
    def pdf(y):
        return base_pdf(transformation.f_inv(y))

    return pdf


def sample_function(fn, domain, sample_count=DEFAULT_SAMPLE_COUNT):
    """
    Evaluates fn on a uniform grid over a closed interval.

    Args:
        fn (callable): Scalar function to sample.
        domain (tuple of float): (low, high).
        sample_count (int): Number of grid points, endpoints included.

    Returns:
        tuple of numpy.ndarray: (xs, ys).
    """
    xs = np.linspace(domain[0], domain[1], sample_count)
    ys = np.array([fn(x) for x in xs], dtype=np.float64)
    return xs, ys


def density_area(xs, ys):
    """Trapezoidal area under sampled values, ignoring non-finite samples."""
    xs = np.asarray(xs, dtype=np.float64)
    ys = np.asarray(ys, dtype=np.float64)
    ys = np.where(np.isfinite(ys), ys, 0.0)
    return float(np.sum((ys[1:] + ys[:-1]) * np.diff(xs)) / 2)
