import torch
from sklearn.datasets import make_moons as sklearn_make_moons

from ..config import MOONS_NOISE


def make_moons(n_samples, noise=MOONS_NOISE, random_state=None):
    """
    Two interleaving half circles as a float tensor of shape (n_samples, 2).

    The outer moon is the upper unit half circle; the inner one is flipped
    and shifted to (1 - cos, 0.5 - sin). Gaussian noise with standard
    deviation `noise` is added to both coordinates.
    """
    X, _ = sklearn_make_moons(n_samples=n_samples, noise=noise, random_state=random_state)
    return torch.FloatTensor(X)
