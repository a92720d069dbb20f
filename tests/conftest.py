import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest
import torch

from densityflows.diagnostics import DiagnosticCollector


@pytest.fixture
def collector():
    return DiagnosticCollector()


@pytest.fixture(autouse=True)
def seed():
    torch.manual_seed(42)
    np.random.seed(42)
