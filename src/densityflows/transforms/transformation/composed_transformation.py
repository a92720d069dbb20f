from .transformation import Transformation


class ComposedTransformation(Transformation):
    """
    A sequence of transformations applied one after another.

    The forward direction applies transforms[0] first; the inverse direction
    is applied in the reverse order. An empty sequence is the identity.
    """
    def __init__(self, transforms):
        if not isinstance(transforms, (list, tuple)):
            raise ValueError("transforms must be a list or tuple")
        self.transforms = tuple(transforms)

    def f(self, x):
        result = x
        for transform in self.transforms:
            result = transform.f(result)
        return result

    def df(self, x):
        """
        Chain rule: multiply each step's derivative at the running value,
        then advance the running value through that step.
        """
        result = x
        derivative = 1.0
        for transform in self.transforms:
            derivative = derivative * transform.df(result)
            result = transform.f(result)
        return derivative

    def f_inv(self, y):
        result = y
        for transform in reversed(self.transforms):
            result = transform.f_inv(result)
        return result

    def df_inv(self, y):
        result = y
        derivative = 1.0
        for transform in reversed(self.transforms):
            derivative = derivative * transform.df_inv(result)
            result = transform.f_inv(result)
        return derivative

    def __len__(self):
        return len(self.transforms)

    def __repr__(self):
        inner = ", ".join(repr(t) for t in self.transforms)
        return f"ComposedTransformation([{inner}])"


def compose_transformations(transforms):
    """
    Composes transformations into f_n o ... o f_1 o f_0.

    Args:
        transforms (list of Transformation): Applied in list order.

    Returns:
        ComposedTransformation: The composite map.
    """
    return ComposedTransformation(transforms)
