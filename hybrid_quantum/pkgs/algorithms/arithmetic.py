"""
Number-theoretic and phase-estimation helpers.
"""
import math
import numpy as np
import logging
from typing import Callable

from ..core_physics.common import DegenerateNormalization
from ..core_physics.complex_ops import as_complex_array

logger = logging.getLogger(__name__)


def modular_exponentiation(base: int, exponent: int, modulus: int) -> int:
    """base**exponent mod modulus by square-and-multiply."""
    if modulus < 1:
        raise ValueError(f"modulus must be >= 1, got {modulus}")
    if exponent < 0:
        raise ValueError(f"exponent must be >= 0, got {exponent}")
    if modulus == 1:
        return 0

    result = 1
    base = base % modulus
    while exponent > 0:
        if exponent & 1:
            result = (result * base) % modulus
        base = (base * base) % modulus
        exponent >>= 1
    return result


def measure_phase(state) -> float:
    """Phase of the first normalised component, in turns."""
    psi = as_complex_array(state)
    probability = float(np.sum(np.abs(psi) ** 2))
    if psi.size == 0 or not np.isfinite(probability) or probability == 0.0:
        raise DegenerateNormalization("Cannot read a phase from a state with zero norm")
    first = psi[0] / np.sqrt(probability)
    return float(np.arctan2(first.imag, first.real) / (2.0 * np.pi))


def quantum_phase_estimation(unitary: Callable[[np.ndarray], np.ndarray], eigenstate,
                             precision: float) -> float:
    """Accumulate one phase bit per power-of-two application of the unitary."""
    if precision <= 0:
        raise ValueError(f"precision must be positive, got {precision}")
    n_bits = math.ceil(math.log2(1.0 / precision))
    initial = as_complex_array(eigenstate)

    phase = 0.0
    for k in range(max(0, n_bits)):
        current = initial
        for _ in range(2 ** k):
            current = as_complex_array(unitary(current))
        phase += measure_phase(current) * 2.0 ** -(k + 1)

    logger.debug(f"Phase estimation with {n_bits} bits: phase={phase:.6f}")
    return phase
