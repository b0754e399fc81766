"""
Encoding and teleportation protocols on single complex qubits.

The Steane-style encoder is a placeholder linear combination over two fixed
7-element bases, not the real [[7,1,3]] code.
"""
import numpy as np
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ..core_physics.complex_ops import Complex

STEANE_LENGTH = 7


def logical_zero() -> np.ndarray:
    basis = np.zeros(STEANE_LENGTH, dtype=np.complex128)
    basis[0] = 1.0
    return basis


def logical_one() -> np.ndarray:
    basis = np.zeros(STEANE_LENGTH, dtype=np.complex128)
    basis[3] = 1.0
    return basis


def steane_encode(qubit: Complex) -> np.ndarray:
    """logical_zero scaled by the real part plus logical_one scaled by the imaginary part."""
    return logical_zero() * qubit.real + logical_one() * qubit.imag


def pauli_x(qubit: Complex) -> Complex:
    """Swap real and imaginary parts."""
    return Complex(qubit.imag, qubit.real)


def pauli_z(qubit: Complex) -> Complex:
    """Negate the imaginary part."""
    return Complex(qubit.real, -qubit.imag)


@dataclass(frozen=True)
class TeleportationResult:
    measurements: Tuple[int, int]
    final_state: Complex


def bell_measurement(state: Complex, entangled: Complex,
                     rng: Optional[np.random.Generator] = None) -> Tuple[int, int]:
    """Two independent outcomes with probabilities state.real**2 and entangled.real**2."""
    rng = rng if rng is not None else np.random.default_rng()
    m1 = 1 if rng.random() < state.real ** 2 else 0
    m2 = 1 if rng.random() < entangled.real ** 2 else 0
    return m1, m2


def apply_teleportation_corrections(qubit: Complex, measurements: Sequence[int]) -> Complex:
    """X-like correction on the second bit, then Z-like correction on the first."""
    corrected = qubit
    if measurements[1]:
        corrected = pauli_x(corrected)
    if measurements[0]:
        corrected = pauli_z(corrected)
    return corrected


def quantum_teleport(state: Complex, bell_pair: Tuple[Complex, Complex],
                     rng: Optional[np.random.Generator] = None) -> TeleportationResult:
    if len(bell_pair) != 2:
        raise ValueError("bell_pair must contain exactly two qubits")
    measurements = bell_measurement(state, bell_pair[0], rng)
    final_state = apply_teleportation_corrections(bell_pair[1], measurements)
    return TeleportationResult(measurements=measurements, final_state=final_state)
