"""
Stateless algorithm library operating on complex amplitude arrays.
"""

from .transforms import quantum_fourier_transform, grover_diffusion, tensor_product
from .arithmetic import modular_exponentiation, measure_phase, quantum_phase_estimation
from .protocols import (
    steane_encode, logical_zero, logical_one,
    pauli_x, pauli_z, bell_measurement, apply_teleportation_corrections,
    quantum_teleport, TeleportationResult,
)

__all__ = [
    # Transforms
    'quantum_fourier_transform', 'grover_diffusion', 'tensor_product',
    # Arithmetic
    'modular_exponentiation', 'measure_phase', 'quantum_phase_estimation',
    # Protocols
    'steane_encode', 'logical_zero', 'logical_one',
    'pauli_x', 'pauli_z', 'bell_measurement', 'apply_teleportation_corrections',
    'quantum_teleport', 'TeleportationResult',
]
