import time

import torch
import torch.optim as optim

from ..config import BATCH_SIZE, LEARNING_RATE, LOG_EVERY, MAX_GRAD_NORM, MOONS_NOISE
from ..data.moons import make_moons
from ..models.normalizing_flow import NormalizingFlow
from .state import PipelineState, TrainingState


def train_model(
    state=None,
    batch_size=BATCH_SIZE,
    lr=LEARNING_RATE,
    noise=MOONS_NOISE,
    log_every=LOG_EVERY,
    on_epoch=None,
    should_pause=None,
):
    """
    Trains (or resumes training of) the coupling-layer flow on two moons.

    Every epoch draws a fresh moons batch and takes one Adam step on the
    negative log-likelihood. Training stops early, leaving the state
    PAUSED, if `should_pause(state)` returns True or `state.request_pause()`
    was called from `on_epoch`; calling train_model again with the same
    state continues from the stored epoch.

    Args:
        state (PipelineState): Shared pipeline state. A new one is created
            when omitted; a model is created if the state has none.
        batch_size (int): Samples per epoch.
        lr (float): Adam learning rate.
        noise (float): Moons noise level.
        log_every (int): Print progress every this many epochs.
        on_epoch (callable): Called as on_epoch(state, epoch, loss) after each step.
        should_pause (callable): Polled before each epoch.

    Returns:
        PipelineState: The updated state, with the trained model.
    """
    if state is None:
        state = PipelineState()
    if state.model is None:
        state.model = NormalizingFlow(state.num_layers)
        print(f"Created normalizing flow with {state.num_layers} coupling layers")
    if state.training_state == TrainingState.COMPLETED:
        print("Training already completed.")
        return state

    flow = state.model
    flow.train()
    if state.optimizer is None:
        state.optimizer = optim.Adam(flow.parameters(), lr=lr)
    optimizer = state.optimizer

    state.training_state = TrainingState.TRAINING
    print(f"Starting training at epoch {state.epoch}/{state.num_epochs}...")

    start_time = time.perf_counter()
    last_log_time = start_time
    last_log_epoch = state.epoch
    timings = []

    while state.epoch < state.num_epochs:
        if should_pause is not None and should_pause(state):
            state.request_pause()
        if state.training_state != TrainingState.TRAINING:
            break

        epoch = state.epoch
        x = make_moons(batch_size, noise)

        optimizer.zero_grad()
        loss = flow.compute_loss(x)

        if torch.isnan(loss) or torch.isinf(loss):
            raise FloatingPointError(f"Invalid loss value at epoch {epoch}: {loss.item()}")

        loss.backward()
        torch.nn.utils.clip_grad_norm_(flow.parameters(), max_norm=MAX_GRAD_NORM)
        optimizer.step()

        loss_value = loss.item()
        state.loss_history.append((epoch, loss_value))
        state.epoch += 1

        if on_epoch is not None:
            on_epoch(state, epoch, loss_value)

        if log_every and epoch % log_every == 0:
            now = time.perf_counter()
            epoch_time = (now - last_log_time) / (state.epoch - last_log_epoch)
            timings.append(epoch_time)
            # Moving average over the last five measurements
            timings = timings[-5:]
            avg_epoch_time = sum(timings) / len(timings)
            eta = (state.num_epochs - state.epoch) * avg_epoch_time
            progress = epoch / state.num_epochs * 100
            print(
                f"Epoch {epoch}/{state.num_epochs} ({progress:.1f}%) - "
                f"Loss: {loss_value:.4f} - "
                f"{epoch_time * 1000:.1f}ms/epoch - "
                f"ETA: {int(eta // 60)}m {int(eta % 60)}s"
            )
            last_log_time = now
            last_log_epoch = state.epoch

    if state.epoch >= state.num_epochs:
        state.training_state = TrainingState.COMPLETED
        print("Training finished.")
        print(f"Reconstruction error: {reconstruction_error(flow, noise=noise):.2e}")
    else:
        state.training_state = TrainingState.PAUSED
        print(f"Training paused at epoch {state.epoch}/{state.num_epochs}.")

    flow.eval()
    return state


def reconstruction_error(flow, n_samples=100, noise=MOONS_NOISE):
    """
    Mean absolute error of inverse(forward(x)) on a fresh moons batch.
    """
    flow.eval()
    with torch.no_grad():
        x = make_moons(n_samples, noise)
        z, _ = flow.forward(x)
        x_reconstructed, _ = flow.inverse(z)
        return torch.mean(torch.abs(x - x_reconstructed)).item()
