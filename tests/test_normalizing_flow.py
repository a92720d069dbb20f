import itertools
from types import SimpleNamespace

import numpy as np
import pytest
import torch

from densityflows.data.moons import make_moons
from densityflows.models import CouplingLayer, NormalizingFlow
from densityflows.training import PipelineState, TrainingState, reconstruction_error, train_model
from densityflows.training import train as train_module


def perturb_weights(module, std=0.1):
    """Moves a freshly built flow away from the identity."""
    with torch.no_grad():
        for param in module.parameters():
            param.add_(torch.randn_like(param) * std)


class TestCouplingLayer:
    @pytest.mark.parametrize("flip", [False, True])
    def test_conditioner_coordinate_passes_through(self, flip):
        layer = CouplingLayer(flip, hidden_dims=8)
        perturb_weights(layer)
        x = torch.randn(16, 2)
        y, _ = layer(x)
        kept = 1 if flip else 0
        assert torch.equal(y[:, kept], x[:, kept])

    def test_log_det_is_bounded_by_tanh(self):
        layer = CouplingLayer(False, hidden_dims=8)
        perturb_weights(layer, std=2.0)
        _, log_det = layer(torch.randn(64, 2) * 5)
        assert torch.all(log_det.abs() <= 1.0)

    def test_inverse(self):
        layer = CouplingLayer(True, hidden_dims=8)
        perturb_weights(layer)
        x = torch.randn(32, 2)
        with torch.no_grad():
            y, log_det_fwd = layer(x)
            x_rec, log_det_inv = layer.inverse(y)
        assert torch.allclose(x, x_rec, atol=1e-5)
        assert torch.allclose(log_det_fwd + log_det_inv, torch.zeros(32), atol=1e-5)


class TestNormalizingFlow:
    def test_round_trip(self):
        flow = NormalizingFlow(num_layers=6, hidden_dims=16)
        perturb_weights(flow)
        x = make_moons(128, random_state=0)
        with torch.no_grad():
            z, log_det_fwd = flow.forward(x)
            x_rec, log_det_inv = flow.inverse(z)
        if not torch.allclose(x, x_rec, atol=1e-4):
            pytest.fail("**critical-bug** inverse(forward(x)) != x for the coupling flow")
        assert torch.allclose(log_det_fwd + log_det_inv, torch.zeros(128), atol=1e-4)

    def test_log_det_matches_autograd_jacobian(self):
        flow = NormalizingFlow(num_layers=4, hidden_dims=8)
        perturb_weights(flow)
        x = torch.randn(5, 2)
        _, log_det = flow.forward(x)
        for i in range(x.size(0)):
            jacobian = torch.autograd.functional.jacobian(lambda p: flow.forward(p.unsqueeze(0))[0].squeeze(0), x[i])
            expected = torch.log(torch.abs(torch.det(jacobian)))
            assert log_det[i].item() == pytest.approx(expected.item(), abs=1e-4)

    def test_frames(self):
        flow = NormalizingFlow(num_layers=4, hidden_dims=8)
        frames = flow.generate_frames(50)
        assert len(frames) == 5
        assert all(frame.shape == (50, 2) for frame in frames)
        assert not frames[-1].requires_grad

        x = torch.randn(10, 2)
        forward_frames, _ = flow.forward(x, return_frames=True)
        assert forward_frames[0] is x
        assert len(forward_frames) == 5

    def test_loss_is_finite(self):
        flow = NormalizingFlow(num_layers=4)
        loss = flow.compute_loss(make_moons(64))
        assert torch.isfinite(loss)
        assert loss.dim() == 0

    def test_loss_of_identity_flow(self):
        """With zero log-det the loss is the mean of 0.5 * |x|^2."""
        flow = NormalizingFlow(num_layers=2)
        x = torch.randn(100, 2)
        expected = torch.mean(0.5 * torch.sum(x ** 2, dim=1))
        assert flow.compute_loss(x).item() == pytest.approx(expected.item(), rel=1e-6)

    def test_log_prob_and_sample(self):
        flow = NormalizingFlow(num_layers=2)
        base = torch.distributions.MultivariateNormal(torch.zeros(2), torch.eye(2))
        x = torch.zeros(3, 2)
        log_p = flow.log_prob(x, base)
        assert log_p.shape == (3,)
        assert log_p[0].item() == pytest.approx(-np.log(2 * np.pi), rel=1e-6)
        assert flow.sample(7, base).shape == (7, 2)

    def test_save_and_load_weights(self, tmp_path):
        path = tmp_path / "flow.pt"
        flow = NormalizingFlow(num_layers=3, hidden_dims=8)
        perturb_weights(flow)
        flow.save_weights(path)

        restored = NormalizingFlow(num_layers=3, hidden_dims=8)
        assert restored.load_weights(path)
        x = torch.randn(8, 2)
        with torch.no_grad():
            assert torch.allclose(flow(x)[0], restored(x)[0])

    def test_load_failures_return_false(self, tmp_path):
        flow = NormalizingFlow(num_layers=3, hidden_dims=8)
        assert flow.load_weights(tmp_path / "missing.pt") is False

        other = NormalizingFlow(num_layers=5, hidden_dims=8)
        other.save_weights(tmp_path / "other.pt")
        assert flow.load_weights(tmp_path / "other.pt") is False


class TestMoons:
    def test_shape_and_dtype(self):
        x = make_moons(200)
        assert x.shape == (200, 2)
        assert x.dtype == torch.float32

    def test_noiseless_points_lie_on_half_circles(self):
        x = make_moons(100, noise=0.0, random_state=0).numpy()
        outer = np.abs(np.hypot(x[:, 0], x[:, 1]) - 1) < 1e-5
        inner = np.abs(np.hypot(x[:, 0] - 1, x[:, 1] - 0.5) - 1) < 1e-5
        assert np.all(outer | inner)


class TestTrainingPipeline:
    def test_pause_and_resume(self):
        state = PipelineState(num_layers=2, num_epochs=20)
        state = train_model(state, batch_size=32, log_every=0, should_pause=lambda s: s.epoch >= 8)
        assert state.training_state == TrainingState.PAUSED
        assert state.epoch == 8
        assert len(state.loss_history) == 8

        state = train_model(state, batch_size=32, log_every=0)
        assert state.training_state == TrainingState.COMPLETED
        assert state.epoch == 20
        assert [epoch for epoch, _ in state.loss_history] == list(range(20))

    def test_pause_from_epoch_callback(self):
        def on_epoch(state, epoch, loss):
            if epoch == 2:
                state.request_pause()

        state = train_model(PipelineState(num_layers=2, num_epochs=10), batch_size=32,
                            log_every=0, on_epoch=on_epoch)
        assert state.training_state == TrainingState.PAUSED
        assert state.epoch == 3

    def test_completed_state_is_not_retrained(self):
        state = train_model(PipelineState(num_layers=2, num_epochs=3), batch_size=16, log_every=0)
        history = list(state.loss_history)
        state = train_model(state, batch_size=16, log_every=0)
        assert state.loss_history == history

    def test_reset(self):
        state = train_model(PipelineState(num_layers=2, num_epochs=3), batch_size=16, log_every=0)
        state.reset()
        assert state.model is None
        assert state.optimizer is None
        assert state.epoch == 0
        assert state.loss_history == []
        assert state.training_state == TrainingState.NOT_STARTED

    def test_progress_is_printed(self, capsys):
        train_model(PipelineState(num_layers=2, num_epochs=4), batch_size=16, log_every=2)
        out = capsys.readouterr().out
        assert "Epoch 0/4" in out
        assert "Training finished." in out

    def test_progress_timing_counts_epochs_since_last_line(self, monkeypatch, capsys):
        clock = itertools.count()
        monkeypatch.setattr(train_module, "time", SimpleNamespace(perf_counter=lambda: float(next(clock))))

        train_model(PipelineState(num_layers=2, num_epochs=4), batch_size=16, log_every=2)
        lines = [line for line in capsys.readouterr().out.splitlines() if line.startswith("Epoch ")]
        assert "1000.0ms/epoch" in lines[0]
        assert "500.0ms/epoch" in lines[1]
        assert "ETA: 0m 3s" in lines[0]

    def test_reconstruction_error_is_small(self):
        flow = NormalizingFlow(num_layers=4, hidden_dims=8)
        perturb_weights(flow)
        assert reconstruction_error(flow) < 1e-4


if __name__ == "__main__":
    pytest.main([__file__])
