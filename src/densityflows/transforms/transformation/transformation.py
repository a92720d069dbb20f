import numpy as np


class Transformation:
    """
    Base class for invertible scalar maps y = f(x).

    A transformation is a value: its parameters are fixed at construction
    and every method is a pure function of those parameters and the input.
    Subclasses must keep the four methods consistent, in particular
    df_inv(y) == 1 / df(f_inv(y)).
    """

    def f(self, x):
        """
        Computes the forward map y = f(x).

        Args:
            x (float or numpy.ndarray): A point in the domain.

        Returns:
            float or numpy.ndarray: The mapped point.
        """
        raise NotImplementedError

    def df(self, x):
        """
        Computes the derivative dy/dx of the forward map at x.
        """
        raise NotImplementedError

    def f_inv(self, y):
        """
        Computes the inverse map x = f^{-1}(y).

        Args:
            y (float or numpy.ndarray): A point in the range.

        Returns:
            float or numpy.ndarray: The preimage of y.
        """
        raise NotImplementedError

    def df_inv(self, y):
        """
        Computes the derivative dx/dy of the inverse map at y.
        """
        raise NotImplementedError

    def __call__(self, x):
        return self.f(x)

    def log_abs_det_jacobian(self, x):
        """
        log|df(x)|, the 1D analogue of a flow layer's log-determinant.
        """
        with np.errstate(divide="ignore"):
            return np.log(np.abs(self.df(x)))


def as_float(value):
    """Converts scalars and sequences to float64 so IEEE rules apply."""
    return np.asarray(value, dtype=np.float64)
