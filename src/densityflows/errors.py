class IndeterminateSteepnessError(ValueError):
    """
    Raised when a steepness k cannot be solved from a point because the point
    lies too close to the curve's center line. Callers keep their previous k.
    """
