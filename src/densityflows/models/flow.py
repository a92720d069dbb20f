import torch.nn as nn


class Flow(nn.Module):
    """
    Base class for the 2D flow layers.

    The forward direction is the normalizing one, data x -> latent z, which
    is what the likelihood needs. The inverse direction generates data from
    latent samples.
    """
    def __init__(self):
        super().__init__()

    def forward(self, x):
        """
        Computes z = f(x) and log|det J_f(x)|.

        Args:
            x (torch.Tensor): A batch from the data space, shape (batch, 2).

        Returns:
            torch.Tensor: The latent tensor.
            torch.Tensor: The log-determinant of the Jacobian of f, shape (batch,).
        """
        raise NotImplementedError

    def inverse(self, z):
        """
        Computes x = f^{-1}(z) and log|det J_{f^{-1}}(z)|.
        """
        raise NotImplementedError

    def log_prob(self, x, base_dist):
        """
        Computes log p(x) = log p_Z(f(x)) + log|det J_f(x)|.

        Args:
            x (torch.Tensor): A batch of samples from the data space.
            base_dist (torch.distributions.Distribution): The latent distribution.

        Returns:
            torch.Tensor: The log probability of each sample.
        """
        z, log_det = self.forward(x)
        log_p_z = base_dist.log_prob(z)
        if len(log_p_z.shape) > 1:
            log_p_z = log_p_z.sum(dim=1)
        return log_p_z + log_det

    def sample(self, num_samples, base_dist, device='cpu'):
        """
        Draws latent samples and maps them to the data space.
        """
        z = base_dist.sample((num_samples,)).to(device)
        x, _ = self.inverse(z)
        return x
