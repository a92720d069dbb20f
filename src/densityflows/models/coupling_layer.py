import torch
import torch.nn as nn

from ..config import HIDDEN_DIMS
from .flow import Flow


class MLP(nn.Module):
    """
    1 -> hidden -> hidden -> 1 conditioner. The output layer starts at zero,
    so a fresh coupling layer is the identity.
    """
    def __init__(self, hidden_dims=HIDDEN_DIMS):
        super().__init__()
        self.net = nn.Sequential(
            nn.Linear(1, hidden_dims),
            nn.ReLU(),
            nn.Linear(hidden_dims, hidden_dims),
            nn.ReLU(),
            nn.Linear(hidden_dims, 1),
        )
        nn.init.zeros_(self.net[-1].weight)
        nn.init.zeros_(self.net[-1].bias)

    def forward(self, x):
        return self.net(x)


class CouplingLayer(Flow):
    """
    Affine coupling layer on 2D points.

    One coordinate passes through unchanged and conditions a scale and shift
    for the other:

        s = tanh(scale_net(x1)),  t = shift_net(x1)
        y1 = x1,                  y2 = exp(s) * x2 + t

    `flip` swaps which coordinate is the conditioner, so stacking layers
    with alternating flip transforms both coordinates.
    """
    def __init__(self, flip, hidden_dims=HIDDEN_DIMS):
        super().__init__()
        self.flip = flip
        self.scale_net = MLP(hidden_dims)
        self.shift_net = MLP(hidden_dims)

    def _split(self, x):
        x1, x2 = torch.chunk(x, 2, dim=1)
        if self.flip:
            x1, x2 = x2, x1
        return x1, x2

    def _join(self, y1, y2):
        if self.flip:
            return torch.cat([y2, y1], dim=1)
        return torch.cat([y1, y2], dim=1)

    def forward(self, x):
        x1, x2 = self._split(x)

        # tanh bounds the log-scale to (-1, 1)
        s = torch.tanh(self.scale_net(x1))
        t = self.shift_net(x1)

        y2 = torch.exp(s) * x2 + t
        log_det = s.sum(dim=1)
        return self._join(x1, y2), log_det

    def inverse(self, y):
        y1, y2 = self._split(y)

        s = torch.tanh(self.scale_net(y1))
        t = self.shift_net(y1)

        x2 = (y2 - t) * torch.exp(-s)
        log_det = -s.sum(dim=1)
        return self._join(y1, x2), log_det
