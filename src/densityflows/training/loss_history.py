"""
Compact loss-history files.

Format: an 8-byte little-endian header holding the minimum and maximum loss
as float32, followed by one uint8 per epoch. Each byte is the loss rescaled
linearly from [min, max] to [0, 255]; epochs are implicit (0, 1, 2, ...).
"""
import numpy as np

_HEADER = np.dtype("<f4")


def quantize_floats(values):
    """
    Quantizes a float sequence to the binary format above.

    Returns:
        bytes: Header plus one byte per value.
    """
    values = np.asarray(values, dtype=np.float32)
    if values.size == 0:
        low = high = np.float32(0.0)
    else:
        low, high = values.min(), values.max()
    span = high - low
    if span > 0:
        # Halves round up
        codes = np.floor((values - low) * 255 / span + 0.5)
    else:
        codes = np.zeros_like(values)
    header = np.array([low, high], dtype=_HEADER).tobytes()
    return header + codes.astype(np.uint8).tobytes()


def dequantize_floats(buffer):
    """
    Inverts quantize_floats.

    Returns:
        tuple: (min, max, numpy.ndarray of float32 values).
    """
    if len(buffer) < 8:
        raise ValueError("loss history buffer is shorter than its header")
    low, high = np.frombuffer(buffer[:8], dtype=_HEADER)
    codes = np.frombuffer(buffer[8:], dtype=np.uint8)
    values = low + codes.astype(np.float32) / 255 * (high - low)
    return float(low), float(high), values.astype(np.float32)


def save_loss_history(loss_history, path):
    """
    Writes [(epoch, loss), ...] to `path`. Only the losses are stored.
    """
    losses = [loss for _, loss in loss_history]
    with open(path, "wb") as f:
        f.write(quantize_floats(losses))
    print(f"Loss history saved to {path} ({len(losses)} epochs)")


def load_loss_history(path):
    """
    Reads a file written by save_loss_history.

    Returns:
        list of (int, float) or None: (epoch, loss) pairs, or None if the
        file cannot be read.
    """
    try:
        with open(path, "rb") as f:
            buffer = f.read()
        _, _, losses = dequantize_floats(buffer)
    except (OSError, ValueError) as e:
        print(f"Failed to load loss history: {e}")
        return None

    history = [(epoch, float(loss)) for epoch, loss in enumerate(losses)]
    print(f"Loaded loss history with {len(history)} epochs")
    return history
