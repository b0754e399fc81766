"""
Decoherence channel: time decay, thermal noise and the coherence-coupled wavefunction.

Also hosts the construction-time calibration and the 3-qubit repetition code.
"""
import numpy as np
import logging
from typing import List, Optional

from .common import (
    BOLTZMANN_CONSTANT, DECOHERENCE_TIME_STEP, PLANCK_CONSTANT, REFERENCE_FREQUENCY,
    DecoherenceModel, QuantumState, WaveFunction, clamp_unit,
)

logger = logging.getLogger(__name__)


class DecoherenceChannel:
    """Applies the decoherence model to a QuantumState in place."""

    def __init__(self, model: Optional[DecoherenceModel] = None, rng: Optional[np.random.Generator] = None):
        self.model = model if model is not None else DecoherenceModel()
        self.rng = rng if rng is not None else np.random.default_rng()

    @property
    def thermal_energy(self) -> float:
        return BOLTZMANN_CONSTANT * self.model.temperature

    @property
    def quantum_energy(self) -> float:
        return PLANCK_CONSTANT * REFERENCE_FREQUENCY

    def thermal_noise(self) -> float:
        """Boltzmann occupation of the 1 GHz reference level."""
        return float(np.exp(-self.quantum_energy / self.thermal_energy))

    def readout_thermal_noise(self) -> float:
        """Thermal-to-quantum energy ratio used by measurement fidelity."""
        return self.thermal_energy / self.quantum_energy

    def apply(self, state: QuantumState) -> float:
        """One decoherence tick: T2 dephasing followed by thermal noise. Returns the new coherence."""
        coherence = state.coherence * np.exp(-DECOHERENCE_TIME_STEP / self.model.T2)
        coherence *= (1.0 - self.thermal_noise())
        state.coherence = clamp_unit(coherence)
        return state.coherence

    def wave_function(self, state: QuantumState, qubit_index: int) -> WaveFunction:
        """Pseudo-wavefunction for a qubit.

        Amplitude depends only on global coherence, so every index gets the
        same amplitude; only the random phase differs between calls.
        """
        amplitude = float(np.sqrt(max(0.0, 1.0 - state.coherence ** 2)))
        phase = float(2.0 * np.pi * self.rng.random())
        return WaveFunction(amplitude, phase, amplitude ** 2)

    def calibrate(self, state: QuantumState) -> None:
        """Scale every qubit scalar by its environmental survival factor."""
        noise = self.model.environmental_noise
        state.qubits = [
            q * (1.0 - noise * self.wave_function(state, idx).probability)
            for idx, q in enumerate(state.qubits)
        ]


def apply_repetition_code(qubits: List[float]) -> List[float]:
    """3-qubit bit-flip code: copy the first scalar of each full triple into the next two."""
    encoded = list(qubits)
    for start in range(0, len(encoded) - 2, 3):
        encoded[start + 1] = encoded[start]
        encoded[start + 2] = encoded[start]
    return encoded
