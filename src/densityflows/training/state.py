from enum import Enum

from ..config import NUM_EPOCHS, NUM_LAYERS


class TrainingState(str, Enum):
    NOT_STARTED = "not_started"
    TRAINING = "training"
    PAUSED = "paused"
    COMPLETED = "completed"


class PipelineState:
    """
    Everything the training pipeline shares between runs: configuration,
    the current model, how far training got, and the loss curve so far.
    """
    def __init__(self, num_layers=NUM_LAYERS, num_epochs=NUM_EPOCHS):
        self.num_layers = num_layers
        self.num_epochs = num_epochs
        self.model = None
        self.optimizer = None
        self.train_data = None
        self.training_state = TrainingState.NOT_STARTED
        self.epoch = 0
        self.loss_history = []

    def reset(self, model=None):
        """Discards progress, optionally installing a fresh model."""
        self.model = model
        self.optimizer = None
        self.training_state = TrainingState.NOT_STARTED
        self.epoch = 0
        self.loss_history = []

    def request_pause(self):
        """Asks a running training loop to stop after the current epoch."""
        if self.training_state == TrainingState.TRAINING:
            self.training_state = TrainingState.PAUSED
