"""
Linear transforms over complex amplitude arrays.

Contains the direct-evaluation quantum Fourier transform, the Grover
diffusion step and the tensor product used to compose circuit matrices.
"""
import numpy as np

from ..core_physics.complex_ops import as_complex_array, as_complex_matrix


def quantum_fourier_transform(amplitudes) -> np.ndarray:
    """out[k] = N^-1/2 * sum_n a[n] * exp(-2*pi*i*k*n/N), evaluated directly in O(N^2)."""
    a = as_complex_array(amplitudes)
    N = a.size
    if N == 0:
        return a.copy()

    k = np.arange(N).reshape(-1, 1)
    n = np.arange(N).reshape(1, -1)
    angle = 2.0 * np.pi * k * n / N
    exp_term = np.cos(angle) - 1j * np.sin(angle)
    return (exp_term @ a) / np.sqrt(N)


def grover_diffusion(state) -> np.ndarray:
    """Reflection about the mean: each amplitude a becomes 2*mean*N - a."""
    a = as_complex_array(state)
    N = a.size
    if N == 0:
        return a.copy()
    mean = a.sum() / N
    return 2.0 * mean * N - a


def tensor_product(a, b) -> np.ndarray:
    """Kronecker product of two complex matrices."""
    return np.kron(as_complex_matrix(a), as_complex_matrix(b))
