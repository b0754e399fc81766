"""Tests for the stateless algorithm library."""

import numpy as np
import pytest

from hybrid_quantum.pkgs.algorithms import (
    apply_teleportation_corrections, grover_diffusion, measure_phase, modular_exponentiation,
    pauli_x, pauli_z, quantum_fourier_transform, quantum_phase_estimation, quantum_teleport,
    steane_encode, tensor_product,
)
from hybrid_quantum.pkgs.core_physics import Complex, DegenerateNormalization


class TestFourierTransform:
    """Test the direct-evaluation QFT."""

    def test_single_element_identity(self):
        out = quantum_fourier_transform([Complex(3.0, 4.0)])
        np.testing.assert_allclose(out, [3 + 4j])

    def test_delta_spreads_uniformly(self):
        out = quantum_fourier_transform([1, 0, 0, 0])
        np.testing.assert_allclose(out, [0.5] * 4, atol=1e-12)

    def test_matches_normalised_dft(self, rng):
        x = rng.normal(size=8) + 1j * rng.normal(size=8)
        np.testing.assert_allclose(quantum_fourier_transform(x), np.fft.fft(x) / np.sqrt(8), atol=1e-10)

    def test_linearity(self, rng):
        x = rng.normal(size=6) + 1j * rng.normal(size=6)
        y = rng.normal(size=6) + 1j * rng.normal(size=6)
        a, b = 0.7 - 0.2j, -1.3 + 0.5j
        lhs = quantum_fourier_transform(a * x + b * y)
        rhs = a * quantum_fourier_transform(x) + b * quantum_fourier_transform(y)
        np.testing.assert_allclose(lhs, rhs, atol=1e-10)

    def test_empty_input(self):
        assert quantum_fourier_transform([]).size == 0


class TestGrover:

    def test_reflection(self):
        out = grover_diffusion([1, 2, 3])
        np.testing.assert_allclose(out, [11, 10, 9])

    def test_complex_input(self):
        out = grover_diffusion([Complex(0.0, 1.0), Complex(0.0, -1.0)])
        np.testing.assert_allclose(out, [-1j, 1j])


class TestModularExponentiation:

    def test_known_value(self):
        assert modular_exponentiation(7, 128, 13) == 3

    @pytest.mark.parametrize("base,modulus", [(2, 5), (10, 7), (0, 3), (123, 1000)])
    def test_zero_exponent(self, base, modulus):
        assert modular_exponentiation(base, 0, modulus) == 1

    def test_modulus_one(self):
        assert modular_exponentiation(5, 3, 1) == 0

    def test_matches_builtin_pow(self, rng):
        for _ in range(50):
            b, e, m = (int(v) for v in rng.integers(1, 10_000, size=3))
            assert modular_exponentiation(b, e, m) == pow(b, e, m)

    def test_invalid_arguments(self):
        with pytest.raises(ValueError):
            modular_exponentiation(2, 3, 0)
        with pytest.raises(ValueError):
            modular_exponentiation(2, -1, 5)


class TestPhaseEstimation:

    def test_recovers_eighth_turn(self):
        rotation = np.exp(2j * np.pi * 0.125)
        phase = quantum_phase_estimation(lambda s: s * rotation, [1, 0], precision=0.25)
        assert phase == pytest.approx(0.125)

    def test_coarse_precision_returns_zero(self):
        assert quantum_phase_estimation(lambda s: s, [1, 0], precision=1.0) == 0.0

    def test_measure_phase(self):
        assert measure_phase([1j, 0]) == pytest.approx(0.25)

    def test_zero_state_is_degenerate(self):
        with pytest.raises(DegenerateNormalization):
            quantum_phase_estimation(lambda s: s, [0, 0], precision=0.5)

    def test_invalid_precision(self):
        with pytest.raises(ValueError):
            quantum_phase_estimation(lambda s: s, [1, 0], precision=0.0)


class TestProtocols:

    def test_steane_encode(self):
        encoded = steane_encode(Complex(0.6, 0.8))
        np.testing.assert_allclose(encoded, [0.6, 0, 0, 0.8, 0, 0, 0])
        assert encoded.size == 7

    def test_corrections_are_involutions(self):
        q = Complex(0.3, -0.7)
        assert pauli_x(pauli_x(q)) == q
        assert pauli_z(pauli_z(q)) == q
        for bits in ((0, 0), (0, 1), (1, 0)):
            once = apply_teleportation_corrections(q, bits)
            assert apply_teleportation_corrections(once, bits) == q

    def test_both_corrections_undone_in_reverse(self):
        q = Complex(0.3, -0.7)
        corrected = apply_teleportation_corrections(q, (1, 1))
        assert corrected == Complex(-0.7, -0.3)
        assert pauli_x(pauli_z(corrected)) == q

    def test_teleport_deterministic_outcomes(self, rng):
        result = quantum_teleport(Complex(1.0, 0.0), (Complex(0.0, 1.0), Complex(0.2, 0.5)), rng=rng)
        assert result.measurements == (1, 0)
        assert result.final_state == Complex(0.2, -0.5)

    def test_teleport_bits_are_binary(self, rng):
        for _ in range(20):
            result = quantum_teleport(Complex(0.6, 0.8), (Complex(0.7, 0.1), Complex(0.1, 0.9)), rng=rng)
            assert set(result.measurements) <= {0, 1}

    def test_tensor_product(self):
        eye = [[1, 0], [0, 1]]
        x = [[0, 1], [1, 0]]
        out = tensor_product(eye, x)
        assert out.shape == (4, 4)
        np.testing.assert_allclose(out, np.kron(np.eye(2), np.array(x)))
