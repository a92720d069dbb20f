class Scale:
    """
    Affine map from a numeric domain interval to a pixel interval.

    The range may be reversed (e.g. (height - margin, margin) for a y axis
    that grows downwards).
    """
    def __init__(self, domain, range):
        self.domain = (float(domain[0]), float(domain[1]))
        self.range = (float(range[0]), float(range[1]))
        if self.domain[0] == self.domain[1]:
            raise ValueError("Scale domain must have non-zero width")
        self._ratio = (self.range[1] - self.range[0]) / (self.domain[1] - self.domain[0])

    def __call__(self, value):
        return self.range[0] + (value - self.domain[0]) * self._ratio

    def inverse(self, pixel):
        return self.domain[0] + (pixel - self.range[0]) / self._ratio

    def __repr__(self):
        return f"Scale(domain={self.domain}, range={self.range})"


def make_scale(domain, range):
    return Scale(domain, range)
