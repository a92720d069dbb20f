from .state import PipelineState, TrainingState
from .train import reconstruction_error, train_model
from .loss_history import dequantize_floats, load_loss_history, quantize_floats, save_loss_history

__all__ = [
    "PipelineState",
    "TrainingState",
    "reconstruction_error",
    "train_model",
    "dequantize_floats",
    "load_loss_history",
    "quantize_floats",
    "save_loss_history",
]
