"""
Hybrid classical/quantum parameter optimisation.

Contains QuantumOptimizer with QAOA- and VQE-style gradient loops over
closed-form trigonometric objectives, a quantum natural gradient step and
Euler imaginary-time evolution. Loops stop on convergence, on the iteration
cap, or when a cooperative cancellation check fires between iterations.
"""
import time
import numpy as np
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from ..core_physics.common import DegenerateNormalization, SingularFisherMatrix
from ..core_physics.complex_ops import as_complex_array, as_complex_matrix

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 1000
CONVERGENCE_THRESHOLD = 1e-6
LEARNING_RATE = 0.01
FISHER_REGULARIZATION = 1e-5
VQE_PARAMETER_COUNT = 10

Objective = Callable[[np.ndarray], Tuple[float, np.ndarray]]


@dataclass
class OptimizationResult:
    """Outcome of an optimisation loop. Non-convergence is reported, never raised."""
    parameters: List[float]
    cost: float
    iterations: int
    converged: bool
    cancelled: bool = False

    @property
    def energy(self) -> float:
        return self.cost

    @property
    def eigenvalue(self) -> float:
        return self.cost


def qaoa_objective(parameters: np.ndarray) -> Tuple[float, np.ndarray]:
    """Alternating-sign cosine sum and its gradient."""
    sign = np.where(np.arange(parameters.size) % 2 == 1, 1.0, -1.0)
    energy = float(np.sum(np.cos(parameters) * sign))
    gradient = -np.sin(parameters) * sign
    return energy, gradient


def vqe_objective(parameters: np.ndarray) -> Tuple[float, np.ndarray]:
    """Sum of cos^2 and its gradient."""
    eigenvalue = float(np.sum(np.cos(parameters) ** 2))
    gradient = -2.0 * np.cos(parameters) * np.sin(parameters)
    return eigenvalue, gradient


def _check_square(name: str, matrix) -> np.ndarray:
    m = as_complex_matrix(matrix)
    if m.shape[0] != m.shape[1]:
        raise ValueError(f"{name} must be square, got shape {m.shape}")
    return m


class QuantumOptimizer:
    """Gradient-descent driver shared by the variational optimisers."""

    def __init__(self, rng: Optional[np.random.Generator] = None, seed: Optional[int] = None,
                 learning_rate: float = LEARNING_RATE, max_iterations: int = MAX_ITERATIONS,
                 convergence_threshold: float = CONVERGENCE_THRESHOLD,
                 clock: Callable[[], float] = time.monotonic):
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.learning_rate = learning_rate
        self.max_iterations = max_iterations
        self.convergence_threshold = convergence_threshold
        self.clock = clock

    def initialize_parameters(self, count: int) -> np.ndarray:
        """Uniform draws in [-pi, pi)."""
        return (self.rng.random(count) - 0.5) * 2.0 * np.pi

    def update_parameters(self, parameters: np.ndarray, gradient: np.ndarray) -> np.ndarray:
        return parameters - self.learning_rate * gradient

    def _minimize(self, name: str, objective: Objective, parameters: np.ndarray,
                  should_stop: Optional[Callable[[], bool]] = None,
                  deadline: Optional[float] = None) -> OptimizationResult:
        current = float("inf")
        iteration = 0
        converged = cancelled = False
        stop_at = self.clock() + deadline if deadline is not None else None

        while iteration < self.max_iterations:
            if (should_stop is not None and should_stop()) or (stop_at is not None and self.clock() >= stop_at):
                cancelled = True
                logger.warning(f"{name} cancelled after {iteration} iterations")
                break

            value, gradient = objective(parameters)
            if abs(value - current) < self.convergence_threshold:
                converged = True
                break

            parameters = self.update_parameters(parameters, gradient)
            current = value
            iteration += 1

        if not converged and not cancelled:
            logger.warning(f"{name} did not converge within {self.max_iterations} iterations "
                           f"(last cost {current:.6e})")
        else:
            logger.debug(f"{name} finished: iterations={iteration}, cost={current:.6e}")
        return OptimizationResult(parameters=[float(p) for p in parameters], cost=current,
                                  iterations=iteration, converged=converged, cancelled=cancelled)

    def optimize_qaoa(self, cost_hamiltonian, mixing_hamiltonian, depth: int,
                      should_stop: Optional[Callable[[], bool]] = None,
                      deadline: Optional[float] = None) -> OptimizationResult:
        """QAOA-style search over 2*depth angles.

        The Hamiltonians only fix dimensionality; the simplified objective
        depends on the angles alone.
        """
        if depth < 1:
            raise ValueError(f"depth must be >= 1, got {depth}")
        _check_square("cost_hamiltonian", cost_hamiltonian)
        _check_square("mixing_hamiltonian", mixing_hamiltonian)
        parameters = self.initialize_parameters(2 * depth)
        return self._minimize("QAOA", qaoa_objective, parameters, should_stop, deadline)

    def optimize_vqe(self, hamiltonian, ansatz: Callable[[List[float]], object],
                     should_stop: Optional[Callable[[], bool]] = None,
                     deadline: Optional[float] = None) -> OptimizationResult:
        """VQE-style search over a fixed 10-parameter vector; the ansatz is accepted but not evaluated."""
        _check_square("hamiltonian", hamiltonian)
        if not callable(ansatz):
            raise ValueError("ansatz must be callable")
        parameters = self.initialize_parameters(VQE_PARAMETER_COUNT)
        return self._minimize("VQE", vqe_objective, parameters, should_stop, deadline)

    def quantum_natural_gradient(self, parameters, quantum_fisher, gradient) -> List[float]:
        """One natural-gradient step.

        The regularised Fisher matrix is inverted on the diagonal only
        (off-diagonal entries of the inverse are zero). This is a known
        limitation, not a general linear solve.
        """
        params = np.asarray(parameters, dtype=np.float64)
        grad = np.asarray(gradient, dtype=np.float64)
        fisher = as_complex_matrix(quantum_fisher)
        n = fisher.shape[0]
        if fisher.shape != (n, n) or params.size != n or grad.size != n:
            raise ValueError(f"Shape mismatch: fisher {fisher.shape}, parameters {params.size}, gradient {grad.size}")

        regularized = fisher + FISHER_REGULARIZATION
        inverse = self._diagonal_inverse(regularized)
        return [float(p) for p in params - self.learning_rate * (inverse.real @ grad)]

    @staticmethod
    def _diagonal_inverse(matrix: np.ndarray) -> np.ndarray:
        diag = matrix.diagonal().real
        if np.any(diag == 0.0):
            raise SingularFisherMatrix("Regularised Fisher matrix has a zero diagonal entry")
        inverse = np.zeros_like(matrix)
        np.fill_diagonal(inverse, 1.0 / diag)
        return inverse

    def imaginary_time_evolution(self, hamiltonian, initial_state, evolution_time: float,
                                 time_steps: int) -> np.ndarray:
        """First-order Euler steps psi += H psi dt, renormalised after every step."""
        if time_steps < 0:
            raise ValueError(f"time_steps must be >= 0, got {time_steps}")
        H = _check_square("hamiltonian", hamiltonian)
        state = as_complex_array(initial_state).copy()
        if H.shape[0] != state.size:
            raise ValueError(f"Hamiltonian shape {H.shape} does not match state length {state.size}")
        if time_steps == 0:
            return state

        dt = evolution_time / time_steps
        for _ in range(time_steps):
            state = state + (H @ state) * dt
            state = normalize_state(state)
        return state


def normalize_state(state: np.ndarray) -> np.ndarray:
    norm = float(np.sqrt(np.sum(np.abs(state) ** 2)))
    if norm == 0.0 or not np.isfinite(norm):
        raise DegenerateNormalization("Cannot normalise a state with zero total probability")
    return state / norm
