"""Hybrid optimiser: QAOA, VQE, quantum natural gradient and imaginary-time evolution."""

from .hybrid_optimizer import (
    QuantumOptimizer, OptimizationResult,
    qaoa_objective, vqe_objective, normalize_state,
    MAX_ITERATIONS, CONVERGENCE_THRESHOLD, LEARNING_RATE,
)

__all__ = [
    'QuantumOptimizer', 'OptimizationResult',
    'qaoa_objective', 'vqe_objective', 'normalize_state',
    'MAX_ITERATIONS', 'CONVERGENCE_THRESHOLD', 'LEARNING_RATE',
]
