import torch
import torch.nn as nn

from ..config import HIDDEN_DIMS, NUM_LAYERS
from .coupling_layer import CouplingLayer
from .flow import Flow


class NormalizingFlow(Flow):
    """
    A stack of affine coupling layers with alternating conditioner.

    forward maps data to the standard-normal latent space (used for the
    loss); inverse maps latent samples back to data (used for generation).
    Both can return every intermediate frame so the transport from one space
    to the other can be animated.
    """
    def __init__(self, num_layers=NUM_LAYERS, hidden_dims=HIDDEN_DIMS):
        super().__init__()
        self.num_layers = num_layers
        self.layers = nn.ModuleList(
            [CouplingLayer(i % 2 == 0, hidden_dims) for i in range(num_layers)]
        )

    def forward(self, x, return_frames=False):
        """
        Applies all layers in order, x -> z.

        Args:
            x (torch.Tensor): Data batch, shape (batch, 2).
            return_frames (bool): Return [x, after layer 0, ..., z] instead of z.

        Returns:
            torch.Tensor or list of torch.Tensor: z, or all frames.
            torch.Tensor: Summed log-determinant, shape (batch,).
        """
        log_det = torch.zeros(x.size(0), device=x.device)
        frames = [x]
        current = x
        for layer in self.layers:
            current, layer_log_det = layer(current)
            log_det = log_det + layer_log_det
            frames.append(current)
        return (frames if return_frames else current), log_det

    def inverse(self, z, return_frames=False):
        """
        Applies the layer inverses in reverse order, z -> x.
        """
        log_det = torch.zeros(z.size(0), device=z.device)
        frames = [z]
        current = z
        for layer in reversed(self.layers):
            current, layer_log_det = layer.inverse(current)
            log_det = log_det + layer_log_det
            frames.append(current)
        return (frames if return_frames else current), log_det

    def compute_loss(self, x):
        """
        Mean negative log-likelihood under a standard normal prior, up to the
        constant log(2*pi):  mean(0.5 * |z|^2 - log|det J|).
        """
        z, log_det = self.forward(x)
        prior = 0.5 * torch.sum(z ** 2, dim=1)
        return torch.mean(prior - log_det)

    def generate_frames(self, num_samples, device='cpu'):
        """
        Samples the latent normal and returns the generation frames
        [normal, ..., data] without tracking gradients.
        """
        with torch.no_grad():
            z = torch.randn(num_samples, 2, device=device)
            frames, _ = self.inverse(z, return_frames=True)
        return frames

    def save_weights(self, path):
        torch.save(self.state_dict(), path)
        print(f"Saved model weights to {path}")

    def load_weights(self, path):
        """
        Loads weights saved by save_weights.

        Returns:
            bool: False if the file is missing or does not match this model.
        """
        try:
            state_dict = torch.load(path, map_location='cpu')
            self.load_state_dict(state_dict)
        except (OSError, RuntimeError) as e:
            print(f"Could not load model weights from {path}: {e}")
            return False
        print(f"Loaded model weights from {path}")
        return True
