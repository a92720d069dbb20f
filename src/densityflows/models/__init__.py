from .flow import Flow
from .coupling_layer import MLP, CouplingLayer
from .normalizing_flow import NormalizingFlow

__all__ = [
    "Flow",
    "MLP",
    "CouplingLayer",
    "NormalizingFlow",
]
