"""Pairwise and global entanglement scoring over qubit scalars."""
import numpy as np
from typing import Sequence

from .common import clamp_unit


def pairwise_entanglement(control: float, target: float) -> float:
    """Correlation strength of a control/target pair."""
    return abs(control * target - (1.0 - control) * (1.0 - target))


def accumulate_pairwise(entanglement: float, control: float, target: float) -> float:
    """Incremental update applied by CNOT."""
    return min(1.0, entanglement + 0.1 * pairwise_entanglement(control, target))


def global_entanglement(qubits: Sequence[float]) -> float:
    """Mean over unordered pairs of |qi*qj - sqrt((1-qi^2)(1-qj^2))|, clamped into [0, 1]."""
    q = np.asarray(qubits, dtype=np.float64)
    n = q.size
    if n < 2:
        return 0.0

    i, j = np.triu_indices(n, k=1)
    radicand = np.maximum(0.0, (1.0 - q[i] ** 2) * (1.0 - q[j] ** 2))
    total = np.abs(q[i] * q[j] - np.sqrt(radicand)).sum()
    return clamp_unit(total / (n * (n - 1) / 2))
