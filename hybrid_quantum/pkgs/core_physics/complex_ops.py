"""
Complex arithmetic primitives shared by every component.

Contains the immutable Complex value type plus helpers that convert between
sequences of Complex values and numpy complex128 arrays.
"""
from __future__ import annotations

import numpy as np
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Union


@dataclass(frozen=True)
class Complex:
    """Two-component (real, imaginary) value. All operations return new values."""
    real: float
    imag: float = 0.0

    def add(self, other: "Complex") -> "Complex":
        return Complex(self.real + other.real, self.imag + other.imag)

    def subtract(self, other: "Complex") -> "Complex":
        return Complex(self.real - other.real, self.imag - other.imag)

    def multiply(self, other: "Complex") -> "Complex":
        return Complex(
            self.real * other.real - self.imag * other.imag,
            self.real * other.imag + self.imag * other.real,
        )

    def scale(self, scalar: float) -> "Complex":
        return Complex(self.real * scalar, self.imag * scalar)

    def abs2(self) -> float:
        """Squared modulus."""
        return self.real * self.real + self.imag * self.imag

    def to_complex(self) -> complex:
        return complex(self.real, self.imag)

    @classmethod
    def from_complex(cls, z) -> "Complex":
        z = complex(z)
        return cls(float(z.real), float(z.imag))

    def __add__(self, other: "Complex") -> "Complex":
        return self.add(other)

    def __sub__(self, other: "Complex") -> "Complex":
        return self.subtract(other)

    def __mul__(self, other: Union["Complex", float, int]) -> "Complex":
        if isinstance(other, Complex):
            return self.multiply(other)
        return self.scale(float(other))

    __rmul__ = __mul__


ComplexLike = Union[Complex, complex, float, int, Sequence[float]]


def _to_builtin(value) -> complex:
    if isinstance(value, Complex):
        return value.to_complex()
    if isinstance(value, (tuple, list)) and len(value) == 2:
        return complex(float(value[0]), float(value[1]))
    return complex(value)


def as_complex_array(values: Union[np.ndarray, Iterable[ComplexLike]]) -> np.ndarray:
    """Coerce Complex values, complex numbers, (re, im) pairs or an array into a 1-D complex128 array."""
    if isinstance(values, np.ndarray):
        return np.asarray(values, dtype=np.complex128).reshape(-1)
    return np.array([_to_builtin(v) for v in values], dtype=np.complex128)


def as_complex_matrix(rows) -> np.ndarray:
    """Coerce a nested sequence (or array) into a 2-D complex128 matrix."""
    if isinstance(rows, np.ndarray):
        matrix = np.asarray(rows, dtype=np.complex128)
    else:
        matrix = np.array([[_to_builtin(v) for v in row] for row in rows], dtype=np.complex128)
    if matrix.ndim != 2:
        raise ValueError(f"Expected a 2-D matrix, got shape {matrix.shape}")
    return matrix


def to_complex_list(array: np.ndarray) -> List[Complex]:
    """Convert a complex array back into Complex values."""
    return [Complex.from_complex(z) for z in np.asarray(array).reshape(-1)]
