"""
Common data structures, constants and errors used across the physics package.

Contains shared types like QuantumState and DecoherenceModel that are used
by the decoherence channel, the gate engine and the processor, together with
the ProcessingResult report handed to display collaborators.
"""
import numpy as np
from dataclasses import dataclass
from typing import Any, Dict, List, NamedTuple, Tuple

from pydantic import BaseModel, ConfigDict, Field

PLANCK_CONSTANT = 6.62607015e-34
BOLTZMANN_CONSTANT = 1.380649e-23
REFERENCE_FREQUENCY = 1e9  # 1 GHz qubit frequency
DECOHERENCE_TIME_STEP = 1e-9  # seconds per decoherence tick

GATE_OPERATION_TIME = 20e-9
READOUT_TIME = 100e-9
MAX_PROCESSING_OVERHEAD = 50e-9


class QuantumCoreError(Exception):
    """Base class for simulation core errors."""


class InvalidQubitIndex(QuantumCoreError, IndexError):
    """Gate target or control outside the register."""


class DegenerateNormalization(QuantumCoreError, ZeroDivisionError):
    """A state with zero total probability mass was about to be normalised."""


class SingularFisherMatrix(QuantumCoreError, ZeroDivisionError):
    """Regularised Fisher matrix has a zero diagonal entry."""


def clamp_unit(value: float) -> float:
    """Clip a scalar into [0, 1]."""
    return float(min(1.0, max(0.0, value)))


@dataclass(frozen=True)
class DecoherenceModel:
    """Relaxation constants and environment of the simulated device."""
    T1: float = 50e-6  # relaxation time
    T2: float = 70e-6  # dephasing time
    environmental_noise: float = 0.001
    temperature: float = 0.015  # Kelvin


class WaveFunction(NamedTuple):
    amplitude: float
    phase: float
    probability: float


@dataclass
class QuantumState:
    """Per-qubit scalars plus the global superposition, entanglement and coherence values."""
    qubits: List[float]
    superposition: bool = False
    entanglement: float = 0.0
    coherence: float = 1.0

    @classmethod
    def ground(cls, num_qubits: int) -> "QuantumState":
        return cls(qubits=[0.0] * num_qubits)

    @property
    def num_qubits(self) -> int:
        return len(self.qubits)

    def copy(self) -> "QuantumState":
        return QuantumState(list(self.qubits), self.superposition, self.entanglement, self.coherence)

    def clamped(self) -> "QuantumState":
        """Copy with every [0, 1] quantity clipped into range."""
        return QuantumState(
            qubits=[float(q) for q in np.clip(self.qubits, 0.0, 1.0)],
            superposition=self.superposition,
            entanglement=clamp_unit(self.entanglement),
            coherence=clamp_unit(self.coherence),
        )

    def context(self) -> Dict[str, Any]:
        """State summary consumed by the chat assistant when building its prompt."""
        snap = self.clamped()
        return {
            "qubits": snap.qubits,
            "superposition": snap.superposition,
            "entanglement": snap.entanglement,
            "coherence": snap.coherence,
        }


class StateSnapshot(BaseModel):
    """Frozen copy of a QuantumState carried by measurement reports."""
    model_config = ConfigDict(frozen=True)

    qubits: Tuple[float, ...]
    superposition: bool = False
    entanglement: float = Field(default=0.0, ge=0.0, le=1.0)
    coherence: float = Field(default=1.0, ge=0.0, le=1.0)

    @classmethod
    def from_state(cls, state: QuantumState) -> "StateSnapshot":
        snap = state.clamped()
        return cls(qubits=tuple(snap.qubits), superposition=snap.superposition,
                   entanglement=snap.entanglement, coherence=snap.coherence)

    def context(self) -> Dict[str, Any]:
        return {
            "qubits": list(self.qubits),
            "superposition": self.superposition,
            "entanglement": self.entanglement,
            "coherence": self.coherence,
        }


class ProcessingResult(BaseModel):
    """Immutable measurement report."""
    model_config = ConfigDict(frozen=True)

    state: StateSnapshot
    probability: float
    confidence: float
    execution_time: float
    energy: float = 0.0
