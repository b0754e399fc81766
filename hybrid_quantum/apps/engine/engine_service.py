"""Engine service that wraps the processor, trainer and optimiser with a clean API."""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

import numpy as np

from ...pkgs.core_physics import ProcessingResult, QuantumCircuit, QuantumGate, QuantumProcessor, QuantumState
from ...pkgs.engine_runtime import InitRequest, SimpleRecorder, TrainRequest
from ...pkgs.learning import AIModel, QuantumAI
from ...pkgs.observability import (
    EventBus, MetricsCollector, SeedManager, setup_logging,
    MODEL_STATS_EVENT, QUANTUM_STATE_EVENT,
)
from ...pkgs.optimization import OptimizationResult, QuantumOptimizer

logger = logging.getLogger(__name__)


class EngineService:
    """High-level service interface for the hybrid quantum engine."""

    def __init__(self, cfg: Optional[Dict] = None):
        self.cfg = cfg or {}
        self.processor: Optional[QuantumProcessor] = None
        self.trainer: Optional[QuantumAI] = None
        self.optimizer: Optional[QuantumOptimizer] = None
        self.recorder = SimpleRecorder(enabled=self.cfg.get('enable_recorder', True))
        self.metrics = MetricsCollector()
        self.events = EventBus()
        self.seed_manager = SeedManager(self.cfg.get('global_seed', 0))
        self._init_request: Optional[InitRequest] = None

        setup_logging(self.cfg.get('log_level', 'INFO'), component_levels=self.cfg.get('log_components'))
        logger.info("EngineService initialized")

    def _require_init(self):
        if self.processor is None or self.trainer is None:
            raise RuntimeError("Engine not initialized. Call init() first.")

    def init(self, req: InitRequest) -> Dict[str, Any]:
        """Build the processor, trainer and optimiser from per-component generators."""
        logger.info(f"Initializing engine with seed={req.seed}, qubits={req.qubits}, layers={req.layers}")
        self.seed_manager = SeedManager(req.seed)
        self._init_request = req

        rngs = self.seed_manager.generators("processor", "trainer", "optimizer")
        self.processor = QuantumProcessor(req.qubits, rng=rngs["processor"])
        self.trainer = QuantumAI(req.layers, rng=rngs["trainer"], recorder=self.recorder)
        self.optimizer = QuantumOptimizer(rng=rngs["optimizer"])
        self.recorder.set_metadata(seed=req.seed, qubits=req.qubits, layers=req.layers)

        return {
            "status": "initialized",
            "seed": req.seed,
            "qubits": req.qubits,
            "layers": req.layers,
            "parameters": self.trainer.parameters,
            "coherence": self.processor.state.coherence,
        }

    def apply_gate(self, gate: Union[QuantumGate, Mapping[str, Any]]) -> QuantumState:
        self._require_init()
        try:
            state = self.processor.apply_gate(gate)
        except Exception as e:
            logger.error(f"Gate rejected: {e}")
            raise
        self.metrics.increment_counter("gates_applied")
        self.events.publish(QUANTUM_STATE_EVENT, self.processor.quantum_context())
        return state

    def run_circuit(self, circuit: Union[QuantumCircuit, Mapping[str, Any]]) -> QuantumState:
        self._require_init()
        if not isinstance(circuit, QuantumCircuit):
            circuit = QuantumCircuit.model_validate(circuit)
        state = self.processor.state
        for gate in circuit.gates:
            state = self.apply_gate(gate)
        return state

    def measure(self) -> ProcessingResult:
        self._require_init()
        with self.metrics.timed("measure_duration"):
            result = self.processor.measure()
        self.metrics.increment_counter("measurements")
        self.metrics.observe("fidelity", result.probability)
        self.metrics.observe("coherence", result.confidence)

        self.recorder.log({
            "event": "measure",
            "qubits": result.state.qubits,
            "entanglement": result.state.entanglement,
            "coherence": result.state.coherence,
            "probability": result.probability,
            "confidence": result.confidence,
            "execution_time": result.execution_time,
        })
        self.events.publish(QUANTUM_STATE_EVENT, result.state.context())
        return result

    def train(self, req: Union[TrainRequest, int]) -> AIModel:
        self._require_init()
        if not isinstance(req, TrainRequest):
            req = TrainRequest(epochs=req)
        first_epoch = len(self.trainer.history)
        with self.metrics.timed("train_duration"):
            stats = self.trainer.train(req.epochs)
        self.metrics.increment_counter("epochs", req.epochs)
        for row in self.trainer.history[first_epoch:]:
            self.metrics.observe("loss", row["loss"])
        self.events.publish(MODEL_STATS_EVENT, stats.model_dump())
        return stats

    def predict(self, values: Sequence[float]) -> List[float]:
        self._require_init()
        return self.trainer.predict(values)

    def model_stats(self) -> AIModel:
        self._require_init()
        return self.trainer.get_model_stats()

    def optimize_qaoa(self, depth: int, should_stop: Optional[Callable[[], bool]] = None,
                      deadline: Optional[float] = None) -> OptimizationResult:
        """QAOA over identity Hamiltonians sized to the register."""
        self._require_init()
        dim = 2 ** min(self.processor.num_qubits, 4)
        identity = np.eye(dim, dtype=np.complex128)
        result = self.optimizer.optimize_qaoa(identity, identity, depth, should_stop=should_stop, deadline=deadline)
        self.metrics.set_metric("qaoa_energy", result.energy)
        return result

    def optimize_vqe(self, should_stop: Optional[Callable[[], bool]] = None,
                     deadline: Optional[float] = None) -> OptimizationResult:
        self._require_init()
        dim = 2 ** min(self.processor.num_qubits, 4)
        hamiltonian = np.diag(np.linspace(-1.0, 1.0, dim)).astype(np.complex128)
        result = self.optimizer.optimize_vqe(hamiltonian, lambda params: hamiltonian,
                                             should_stop=should_stop, deadline=deadline)
        self.metrics.set_metric("vqe_eigenvalue", result.eigenvalue)
        return result

    def snapshot(self) -> Dict[str, Any]:
        """Return summary snapshot of current state."""
        if self.processor is None:
            return {"status": "not_initialized"}

        return {
            "status": "active",
            "state": self.processor.quantum_context(),
            "model": self.trainer.get_model_stats().model_dump(),
            "layers": [
                {"qubits": l.qubits, "pattern": l.entanglement_pattern.value, "gates": list(l.gate_sequence)}
                for l in self.trainer.quantum_layers
            ],
            "metrics_summary": self.metrics.summary_stats(),
            "recent_logs": self.recorder.get_recent(5),
        }

    def export_logs(self, format: str = "jsonl", path: str = "logs/quantum_run") -> str:
        """Export recorded logs in the specified format."""
        if format == "csv":
            full_path = f"{path}.csv"
            self.recorder.dump_csv(full_path)
        elif format == "jsonl":
            full_path = f"{path}.jsonl"
            self.recorder.dump_jsonl(full_path)
        else:
            raise ValueError(f"Unsupported format: {format}")

        logger.info(f"Logs exported to: {full_path}")
        return full_path

    def reset(self):
        """Rebuild components from the last init request and clear recordings."""
        self.recorder.clear()
        self.metrics.reset()
        if self._init_request is not None:
            self.init(self._init_request)
        logger.info("Engine reset to initial state")
