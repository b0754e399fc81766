"""
Quantum-neural trainer with one simulated register per layer.

Contains the layered architecture description, the hybrid optimiser
configuration and QuantumAI, which perturbs each layer's register with noisy
gate transforms every epoch and tracks aggregate accuracy and loss.
"""
import math
import time
import torch
import numpy as np
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Literal, Optional, Sequence

from pydantic import BaseModel

logger = logging.getLogger(__name__)

MAX_QUBITS = 50
COHERENCE_TIME = 100e-6  # seconds
BASE_GATES = ("H", "CNOT", "RX", "RY", "RZ")
SQRT_2_INV = 1.0 / math.sqrt(2.0)


class EntanglementPattern(str, Enum):
    LINEAR = "linear"
    CIRCULAR = "circular"
    FULL = "full"


@dataclass
class QuantumLayer:
    """Qubit count, entanglement pattern and fixed gate program of one layer."""
    qubits: int
    entanglement_pattern: EntanglementPattern
    gate_sequence: List[str]


@dataclass
class NeuralArchitecture:
    input_dimension: int = 128
    hidden_layers: List[int] = field(default_factory=list)
    output_dimension: int = 64
    activation_functions: List[str] = field(
        default_factory=lambda: ["quantum_relu", "quantum_tanh", "hybrid_sigmoid"])


@dataclass(frozen=True)
class HybridOptimizerConfig:
    classical_optimizer: str
    quantum_optimizer: str
    learning_rate: float
    momentum: float
    quantum_noise_threshold: float


class AIModel(BaseModel):
    """Model statistics snapshot read by the display layer."""
    kind: Literal["quantum", "classical", "hybrid"] = "hybrid"
    parameters: int
    layers: int
    accuracy: float = 0.0
    loss: float = 1.0


def calculate_parameters(layers: int) -> int:
    quantum_params = math.floor(layers * MAX_QUBITS * (1.0 - math.exp(-layers / COHERENCE_TIME)))
    return layers * 1000 + quantum_params


def hidden_layer_structure(layers: int) -> List[int]:
    return [
        max(32, math.floor(256 * math.exp(-i / layers) + 64 * math.sin(i * math.pi / layers)))
        for i in range(layers)
    ]


def layer_qubits(index: int) -> int:
    return min(MAX_QUBITS, math.floor(10 * math.log2(index + 2)))


def entanglement_pattern(index: int) -> EntanglementPattern:
    if index % 3 == 0:
        return EntanglementPattern.FULL
    if index % 2 == 0:
        return EntanglementPattern.CIRCULAR
    return EntanglementPattern.LINEAR


def apply_register_gate(gate: str, pairs: torch.Tensor, error: float) -> torch.Tensor:
    """Noisy transform of every (real, imag) pair in a (n, 2) view."""
    real, imag = pairs[:, 0], pairs[:, 1]
    if gate == "H":
        scale = SQRT_2_INV * (1.0 - error)
        return torch.stack(((real + imag) * scale, (real - imag) * scale), dim=1)
    if gate == "RX":
        c, s = math.cos(error), math.sin(error)
        return torch.stack((real * c - imag * s, imag * c + real * s), dim=1)
    return pairs * (1.0 - error)


class QuantumAI:
    """Hybrid quantum-neural model trained by simulated noisy gate sequences."""

    def __init__(self, layers: int, rng: Optional[np.random.Generator] = None, seed: Optional[int] = None,
                 recorder=None, clock: Callable[[], float] = time.monotonic, device: str = "cpu"):
        if layers < 1:
            raise ValueError(f"layers must be >= 1, got {layers}")
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.recorder = recorder
        self.clock = clock
        self.device = device
        self._created_at = clock()

        self.num_layers = layers
        self.parameters = calculate_parameters(layers)
        self.accuracy = 0.0
        self.loss = 1.0
        self.history: List[Dict[str, float]] = []

        self.architecture = NeuralArchitecture(hidden_layers=hidden_layer_structure(layers))
        self.quantum_layers = self._initialize_quantum_layers(layers)
        self.optimizer = HybridOptimizerConfig(
            classical_optimizer="adam",
            quantum_optimizer="quantum_natural_gradient",
            learning_rate=0.001 * math.exp(-layers / 10),
            momentum=0.9,
            quantum_noise_threshold=0.01,
        )
        self.quantum_memory = self._initialize_quantum_registers()
        logger.info(f"QuantumAI initialized: layers={layers}, parameters={self.parameters}, "
                    f"qubits={[l.qubits for l in self.quantum_layers]}")

    def _initialize_quantum_layers(self, layers: int) -> List[QuantumLayer]:
        return [
            QuantumLayer(
                qubits=layer_qubits(i),
                entanglement_pattern=entanglement_pattern(i),
                gate_sequence=self._generate_gate_sequence(i),
            )
            for i in range(layers)
        ]

    def _generate_gate_sequence(self, index: int) -> List[str]:
        length = math.floor(5 * math.log2(index + 2))
        return [BASE_GATES[int(self.rng.integers(len(BASE_GATES)))] for _ in range(length)]

    def _initialize_quantum_registers(self) -> List[torch.Tensor]:
        """One flat register of 2*qubits (cos theta, sin theta) slots per layer."""
        registers = []
        for layer in self.quantum_layers:
            theta = self.rng.random(layer.qubits) * np.pi
            pairs = np.stack((np.cos(theta), np.sin(theta)), axis=1)
            registers.append(torch.tensor(pairs.reshape(-1), dtype=torch.float64, device=self.device))
        return registers

    @property
    def noise_threshold(self) -> float:
        return self.optimizer.quantum_noise_threshold

    def train(self, epochs: int) -> "AIModel":
        """Run epochs strictly in order and return the final stats."""
        if epochs < 0:
            raise ValueError(f"epochs must be >= 0, got {epochs}")
        for epoch in range(epochs):
            epoch_loss = self._train_epoch(epoch)
            self._update_model_metrics(epoch_loss, epoch)
            row = {"epoch": epoch, "epoch_loss": epoch_loss, "loss": self.loss, "accuracy": self.accuracy}
            self.history.append(row)
            if self.recorder is not None:
                self.recorder.log(row)
            logger.debug(f"Epoch {epoch}: loss={self.loss:.6f}, accuracy={self.accuracy:.6f}")
        logger.info(f"Training finished after {epochs} epochs: accuracy={self.accuracy:.4f}, loss={self.loss:.4f}")
        return self.get_model_stats()

    def _train_epoch(self, epoch: int) -> float:
        epoch_loss = 0.0
        for idx, layer in enumerate(self.quantum_layers):
            register = self.quantum_memory[idx]
            layer_loss, register = self._simulate_quantum_operations(layer, register)
            register = self._apply_noise_reduction(register, epoch)
            self.quantum_memory[idx] = register
            epoch_loss += layer_loss
        return epoch_loss / len(self.quantum_layers)

    def _simulate_quantum_operations(self, layer: QuantumLayer, register: torch.Tensor):
        loss = 0.0
        pairs = register.view(-1, 2)
        for gate in layer.gate_sequence:
            error = float(self.rng.random() * self.noise_threshold)
            loss += error
            pairs = apply_register_gate(gate, pairs, error)
        return loss, pairs.reshape(-1)

    def _apply_noise_reduction(self, register: torch.Tensor, epoch: int) -> torch.Tensor:
        reduction = math.exp(-epoch / self.num_layers)
        return register * (1.0 - self.noise_threshold * reduction)

    def _update_model_metrics(self, epoch_loss: float, epoch: int):
        improvement = ((1.0 - self.accuracy) * 0.1 * math.exp(-epoch_loss)
                       * (1.0 - epoch / (self.num_layers * 2)))
        self.accuracy = min(1.0, max(0.0, self.accuracy + improvement))
        self.loss = epoch_loss * math.exp(-epoch / self.num_layers) + self.noise_threshold

    def _quantum_noise(self) -> float:
        elapsed = max(0.0, self.clock() - self._created_at)
        coherence_factor = math.exp(-elapsed / (COHERENCE_TIME * 1e6))
        return (self.rng.random() - 0.5) * self.noise_threshold * coherence_factor

    def predict(self, inputs: Sequence[float]) -> List[float]:
        """Noisy pass-through clamped into [0, 1]."""
        outputs = []
        for x in inputs:
            quantum_noise = self._quantum_noise()
            classical_noise = (self.rng.random() - 0.5) * (1.0 - self.accuracy)
            outputs.append(min(1.0, max(0.0, float(x) + quantum_noise + classical_noise)))
        return outputs

    def get_model_stats(self) -> AIModel:
        return AIModel(
            kind="hybrid",
            parameters=self.parameters,
            layers=self.num_layers,
            accuracy=min(1.0, max(0.0, self.accuracy)),
            loss=max(0.0, self.loss),
        )

    def registers(self) -> List[torch.Tensor]:
        """Detached copies of the per-layer registers."""
        return [r.detach().clone() for r in self.quantum_memory]
