"""
Gate engine for the scalar qubit register.

Contains the QuantumGate / QuantumCircuit boundary schemas and GateEngine,
which validates a gate, dispatches it against the live QuantumState and then
feeds the decoherence channel and the global entanglement estimator.
"""
import numpy as np
import logging
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from .common import InvalidQubitIndex, QuantumState, clamp_unit
from .decoherence import DecoherenceChannel
from .entanglement import accumulate_pairwise, global_entanglement

logger = logging.getLogger(__name__)


class GateKind(str, Enum):
    H = "H"
    X = "X"
    Y = "Y"
    Z = "Z"
    CNOT = "CNOT"
    RX = "RX"
    RY = "RY"
    RZ = "RZ"
    T = "T"
    S = "S"


ROTATION_GATES = (GateKind.RX, GateKind.RY, GateKind.RZ)


class QuantumGate(BaseModel):
    """Gate request: {kind, target, control?, angle?}."""
    kind: GateKind
    target: int = Field(ge=0)
    control: Optional[int] = Field(default=None, ge=0)
    angle: Optional[float] = None

    @model_validator(mode="after")
    def _check_operands(self):
        if self.kind == GateKind.CNOT and self.control is None:
            raise ValueError("CNOT requires a control qubit")
        if self.kind in ROTATION_GATES and self.angle is None:
            raise ValueError(f"{self.kind.value} requires an angle")
        return self


class QuantumCircuit(BaseModel):
    """Ordered gate list with its depth and width."""
    gates: List[QuantumGate] = []
    depth: Optional[int] = None
    width: Optional[int] = None

    @model_validator(mode="after")
    def _fill_shape(self):
        if self.depth is None:
            self.depth = len(self.gates)
        if self.width is None:
            indices = [g.target for g in self.gates] + [g.control for g in self.gates if g.control is not None]
            self.width = max(indices) + 1 if indices else 0
        return self


class GateEngine:
    """Dispatches gates onto a QuantumState owned by a processor."""

    def __init__(self, state: QuantumState, channel: DecoherenceChannel, rng: Optional[np.random.Generator] = None):
        self.state = state
        self.channel = channel
        self.rng = rng if rng is not None else channel.rng

    @property
    def noise(self) -> float:
        return self.channel.model.environmental_noise

    def validate(self, gate: QuantumGate) -> None:
        n = self.state.num_qubits
        if gate.target >= n:
            raise InvalidQubitIndex(f"Invalid target qubit: {gate.target} (register has {n} qubits)")
        if gate.control is not None and gate.control >= n:
            raise InvalidQubitIndex(f"Invalid control qubit: {gate.control} (register has {n} qubits)")

    def apply(self, gate: QuantumGate) -> None:
        """Validate, dispatch, then decohere and recompute global entanglement."""
        self.validate(gate)
        kind = gate.kind
        if kind == GateKind.H:
            self._hadamard(gate.target)
        elif kind == GateKind.X:
            self._pauli_x(gate.target)
        elif kind == GateKind.Y:
            self._pauli_y(gate.target)
        elif kind == GateKind.Z:
            self._phase(gate.target, 1.0)
        elif kind == GateKind.CNOT:
            self._cnot(gate.control, gate.target)
        elif kind in (GateKind.RX, GateKind.RY):
            self._rotate(gate.target, gate.angle)
        elif kind == GateKind.RZ:
            self._phase(gate.target, abs(np.sin(gate.angle / 2.0)))
        elif kind == GateKind.T:
            self._phase(gate.target, abs(np.sin(np.pi / 8.0)))
        elif kind == GateKind.S:
            self._phase(gate.target, abs(np.sin(np.pi / 4.0)))
        else:
            raise ValueError(f"Unsupported gate kind: {kind}")

        self.channel.apply(self.state)
        self.state.entanglement = global_entanglement(self.state.qubits)
        logger.debug(f"Applied {kind.value} on q{gate.target}: coherence={self.state.coherence:.6f}, "
                     f"entanglement={self.state.entanglement:.6f}")

    def _hadamard(self, target: int):
        wf = self.channel.wave_function(self.state, target)
        self.state.superposition = True
        coherence = self.state.coherence * (1.0 - wf.amplitude * np.sin(wf.phase))
        fluctuation = self.rng.random() * self.noise
        self.state.coherence = clamp_unit(coherence * (1.0 - fluctuation))

    def _pauli_x(self, target: int):
        previous = self.state.qubits[target]
        eps = self.channel.wave_function(self.state, target).probability * self.noise
        self.state.qubits[target] = 1.0 - eps if previous == 0 else eps

    def _pauli_y(self, target: int):
        self._pauli_x(target)
        self._phase(target, 1.0)

    def _phase(self, target: int, strength: float):
        """Phase-type gates leave the scalar alone and only dephase."""
        p = self.channel.wave_function(self.state, target).probability
        self.state.coherence = clamp_unit(self.state.coherence * (1.0 - strength * p * self.noise))

    def _rotate(self, target: int, angle: float):
        q = self.state.qubits[target]
        c2, s2 = np.cos(angle / 2.0) ** 2, np.sin(angle / 2.0) ** 2
        self.state.qubits[target] = float(q * c2 + (1.0 - q) * s2)
        self._phase(target, abs(np.sin(angle / 2.0)))

    def _cnot(self, control: int, target: int):
        c = self.state.qubits[control]
        if c == 1:
            self._pauli_x(target)
        self.state.entanglement = accumulate_pairwise(
            self.state.entanglement, self.state.qubits[control], self.state.qubits[target])
