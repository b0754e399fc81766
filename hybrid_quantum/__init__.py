"""Hybrid Quantum Engine - simplified quantum substrate with hybrid optimisation and training."""

__version__ = "0.1.0"

# Core components
from .pkgs.core_physics import (
    Complex,
    QuantumState, StateSnapshot, DecoherenceModel, ProcessingResult,
    QuantumCoreError, InvalidQubitIndex, DegenerateNormalization, SingularFisherMatrix,
    GateKind, QuantumGate, QuantumCircuit,
    QuantumProcessor,
)

from .pkgs.algorithms import (
    quantum_fourier_transform, grover_diffusion, tensor_product,
    modular_exponentiation, quantum_phase_estimation,
    steane_encode, quantum_teleport, TeleportationResult,
)

from .pkgs.optimization import QuantumOptimizer, OptimizationResult

from .pkgs.learning import QuantumAI, AIModel, QuantumLayer, HybridOptimizerConfig

from .pkgs.engine_runtime import SimpleRecorder, InitRequest, TrainRequest

from .pkgs.observability import (
    setup_logging,
    MetricsCollector, SeedManager,
    EventBus
)

# High-level service
from .apps.engine.engine_service import EngineService

__all__ = [
    # Core physics
    'Complex',
    'QuantumState', 'StateSnapshot', 'DecoherenceModel', 'ProcessingResult',
    'QuantumCoreError', 'InvalidQubitIndex', 'DegenerateNormalization', 'SingularFisherMatrix',
    'GateKind', 'QuantumGate', 'QuantumCircuit',
    'QuantumProcessor',

    # Algorithms
    'quantum_fourier_transform', 'grover_diffusion', 'tensor_product',
    'modular_exponentiation', 'quantum_phase_estimation',
    'steane_encode', 'quantum_teleport', 'TeleportationResult',

    # Optimisation and learning
    'QuantumOptimizer', 'OptimizationResult',
    'QuantumAI', 'AIModel', 'QuantumLayer', 'HybridOptimizerConfig',

    # Engine runtime
    'SimpleRecorder', 'InitRequest', 'TrainRequest',

    # Observability
    'setup_logging', 'MetricsCollector', 'SeedManager', 'EventBus',

    # High-level interface
    'EngineService'
]
