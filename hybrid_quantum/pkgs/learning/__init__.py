"""Quantum-neural trainer components."""

from .quantum_ai import (
    QuantumAI, AIModel, QuantumLayer, NeuralArchitecture, HybridOptimizerConfig,
    EntanglementPattern, apply_register_gate, calculate_parameters,
    MAX_QUBITS, COHERENCE_TIME, BASE_GATES,
)

__all__ = [
    'QuantumAI', 'AIModel', 'QuantumLayer', 'NeuralArchitecture', 'HybridOptimizerConfig',
    'EntanglementPattern', 'apply_register_gate', 'calculate_parameters',
    'MAX_QUBITS', 'COHERENCE_TIME', 'BASE_GATES',
]
