"""
Core physics components for the scalar-qubit simulation substrate.

This package contains the state representation, decoherence model, gate
engine, entanglement estimator and the processor that reports measurements.
"""

# Complex primitives
from .complex_ops import Complex, as_complex_array, as_complex_matrix, to_complex_list

# Shared state, constants and errors
from .common import (
    QuantumState, StateSnapshot, DecoherenceModel, WaveFunction, ProcessingResult,
    QuantumCoreError, InvalidQubitIndex, DegenerateNormalization, SingularFisherMatrix,
    PLANCK_CONSTANT, BOLTZMANN_CONSTANT, clamp_unit,
)

# Decoherence
from .decoherence import DecoherenceChannel, apply_repetition_code

# Entanglement
from .entanglement import pairwise_entanglement, accumulate_pairwise, global_entanglement

# Gates
from .gates import GateKind, QuantumGate, QuantumCircuit, GateEngine

# Processor
from .processor import QuantumProcessor

__all__ = [
    # Complex
    'Complex', 'as_complex_array', 'as_complex_matrix', 'to_complex_list',
    # Common
    'QuantumState', 'StateSnapshot', 'DecoherenceModel', 'WaveFunction', 'ProcessingResult',
    'QuantumCoreError', 'InvalidQubitIndex', 'DegenerateNormalization', 'SingularFisherMatrix',
    'PLANCK_CONSTANT', 'BOLTZMANN_CONSTANT', 'clamp_unit',
    # Decoherence
    'DecoherenceChannel', 'apply_repetition_code',
    # Entanglement
    'pairwise_entanglement', 'accumulate_pairwise', 'global_entanglement',
    # Gates
    'GateKind', 'QuantumGate', 'QuantumCircuit', 'GateEngine',
    # Processor
    'QuantumProcessor',
]
