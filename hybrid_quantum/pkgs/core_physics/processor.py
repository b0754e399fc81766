"""
Quantum processor: owns the live QuantumState and reports measurements.

The processor wires the decoherence channel and gate engine together, runs
calibration and the repetition code at construction, and samples the state
into ProcessingResult snapshots. Measurement is read-only: it never writes the
sampled values back into the live register.
"""
import numpy as np
import logging
from typing import Any, Dict, Mapping, Optional, Union

from .common import (
    GATE_OPERATION_TIME, MAX_PROCESSING_OVERHEAD, PLANCK_CONSTANT, READOUT_TIME,
    DecoherenceModel, ProcessingResult, QuantumState, StateSnapshot, clamp_unit,
)
from .decoherence import DecoherenceChannel, apply_repetition_code
from .gates import GateEngine, QuantumCircuit, QuantumGate

logger = logging.getLogger(__name__)


class QuantumProcessor:
    """Scalar-qubit processor with decoherence, gates and sampling measurement."""

    def __init__(self, num_qubits: int, rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None, model: Optional[DecoherenceModel] = None):
        if num_qubits < 1:
            raise ValueError(f"num_qubits must be >= 1, got {num_qubits}")
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self._state = QuantumState.ground(num_qubits)
        self.channel = DecoherenceChannel(model, self.rng)
        self.engine = GateEngine(self._state, self.channel, self.rng)
        self._initialize_quantum_system()

    def _initialize_quantum_system(self):
        self.channel.calibrate(self._state)
        self._state.qubits = apply_repetition_code(self._state.qubits)
        logger.info(f"QuantumProcessor initialized with {self.num_qubits} qubits "
                    f"(T1={self.decoherence_model.T1:.1e}s, T2={self.decoherence_model.T2:.1e}s)")

    @property
    def num_qubits(self) -> int:
        return self._state.num_qubits

    @property
    def decoherence_model(self) -> DecoherenceModel:
        return self.channel.model

    @property
    def state(self) -> QuantumState:
        """Clamped copy of the live state."""
        return self._state.clamped()

    def quantum_context(self) -> Dict[str, Any]:
        return self._state.context()

    def apply_gate(self, gate: Union[QuantumGate, Mapping[str, Any]]) -> QuantumState:
        """Apply a single gate and return the updated (clamped) state."""
        if not isinstance(gate, QuantumGate):
            gate = QuantumGate.model_validate(gate)
        self.engine.apply(gate)
        return self.state

    def run_circuit(self, circuit: Union[QuantumCircuit, Mapping[str, Any]]) -> QuantumState:
        """Apply every gate of a circuit in order; stops at the first invalid gate."""
        if not isinstance(circuit, QuantumCircuit):
            circuit = QuantumCircuit.model_validate(circuit)
        for gate in circuit.gates:
            self.engine.apply(gate)
        return self.state

    def measure(self) -> ProcessingResult:
        """Sample the register into a ProcessingResult snapshot."""
        self.channel.apply(self._state)

        observed = []
        for idx, q in enumerate(self._state.qubits):
            probability = self.channel.wave_function(self._state, idx).probability
            observed.append(1.0 if self.rng.random() < probability else q)

        energy = self._system_energy()
        fidelity = self._measurement_fidelity()

        sampled = self._state.copy()
        sampled.qubits = observed
        snapshot = StateSnapshot.from_state(sampled)
        result = ProcessingResult(
            state=snapshot,
            probability=clamp_unit(fidelity),
            confidence=snapshot.coherence,
            execution_time=self._execution_time(),
            energy=energy,
        )
        logger.debug(f"Measured {self.num_qubits} qubits: fidelity={result.probability:.4f}, "
                     f"t_exec={result.execution_time:.1f}")
        return result

    def _system_energy(self) -> float:
        energy = 0.0
        for idx in range(self.num_qubits):
            wf = self.channel.wave_function(self._state, idx)
            energy += wf.amplitude * np.cos(wf.phase) * PLANCK_CONSTANT
        return float(energy)

    def _measurement_fidelity(self) -> float:
        environmental = 1.0 - self.decoherence_model.environmental_noise
        return self._state.coherence * environmental * (1.0 - self.channel.readout_thermal_noise())

    def _execution_time(self) -> float:
        # Seconds scaled by 1e9, i.e. nanoseconds
        overhead = self.rng.random() * MAX_PROCESSING_OVERHEAD
        return (GATE_OPERATION_TIME + READOUT_TIME + overhead) * 1e9
