"""Tests for the state, decoherence, gate and measurement components."""

import math

import numpy as np
import pytest
from pydantic import ValidationError

from hybrid_quantum.pkgs.algorithms import quantum_fourier_transform
from hybrid_quantum.pkgs.core_physics import (
    Complex, DecoherenceChannel, DecoherenceModel, GateKind, InvalidQubitIndex,
    QuantumCircuit, QuantumGate, QuantumProcessor, QuantumState, StateSnapshot,
    apply_repetition_code, as_complex_array, global_entanglement, pairwise_entanglement,
    accumulate_pairwise, to_complex_list, PLANCK_CONSTANT, BOLTZMANN_CONSTANT,
)


class TestComplex:
    """Test complex arithmetic primitives."""

    def test_arithmetic(self):
        a, b = Complex(1.0, 2.0), Complex(3.0, -1.0)
        assert a.add(b) == Complex(4.0, 1.0)
        assert a.subtract(b) == Complex(-2.0, 3.0)
        assert a.multiply(b) == Complex(5.0, 5.0)
        assert a.scale(2.0) == Complex(2.0, 4.0)
        assert a * b == Complex(5.0, 5.0)
        assert 2 * a == Complex(2.0, 4.0)

    def test_immutable(self):
        a = Complex(1.0, 1.0)
        with pytest.raises(Exception):
            a.real = 2.0

    def test_array_coercion(self):
        arr = as_complex_array([Complex(1.0, 2.0), (3.0, 4.0), 5j])
        assert arr.dtype == np.complex128
        np.testing.assert_allclose(arr, [1 + 2j, 3 + 4j, 5j])

    def test_qft_output_as_complex_values(self):
        values = to_complex_list(quantum_fourier_transform([Complex(1.0, 0.0), Complex(0.0, 0.0)]))
        assert all(isinstance(v, Complex) for v in values)
        assert values[0].real == pytest.approx(1.0 / math.sqrt(2.0))
        assert values[1].abs2() == pytest.approx(0.5)


class TestQuantumState:
    """Test construction and decoherence."""

    @pytest.mark.parametrize("n", [1, 2, 3, 4, 7, 10])
    def test_fresh_state(self, n):
        proc = QuantumProcessor(n, seed=0)
        state = proc.state
        assert state.coherence == 1.0
        assert state.entanglement == 0.0
        assert state.superposition is False
        assert state.qubits == [0.0] * n

    def test_rejects_empty_register(self):
        with pytest.raises(ValueError):
            QuantumProcessor(0)

    def test_decoherence_strictly_decreases(self, rng):
        channel = DecoherenceChannel(rng=rng)
        state = QuantumState.ground(3)
        previous = state.coherence
        for _ in range(50):
            coherence = channel.apply(state)
            assert 0.0 <= coherence <= 1.0
            assert coherence < previous
            previous = coherence

    def test_decoherence_formula(self, rng):
        channel = DecoherenceChannel(rng=rng)
        state = QuantumState.ground(1)
        channel.apply(state)
        thermal = math.exp(-(PLANCK_CONSTANT * 1e9) / (BOLTZMANN_CONSTANT * 0.015))
        expected = math.exp(-1e-9 / 70e-6) * (1 - thermal)
        assert state.coherence == pytest.approx(expected)

    def test_wave_function_ignores_index(self, rng):
        channel = DecoherenceChannel(rng=rng)
        state = QuantumState(qubits=[0.0, 0.0, 0.0], coherence=0.6)
        wfs = [channel.wave_function(state, i) for i in range(3)]
        for wf in wfs:
            assert wf.amplitude == pytest.approx(0.8)
            assert wf.probability == pytest.approx(0.64)
            assert 0.0 <= wf.phase < 2 * math.pi

    def test_calibration_scales_qubits(self, rng):
        model = DecoherenceModel(environmental_noise=0.1)
        channel = DecoherenceChannel(model, rng)
        state = QuantumState(qubits=[1.0, 0.5], coherence=0.6)
        channel.calibrate(state)
        assert state.qubits == pytest.approx([1.0 - 0.1 * 0.64, 0.5 * (1.0 - 0.1 * 0.64)])

    def test_repetition_code(self):
        assert apply_repetition_code([0.1, 0.2, 0.3, 0.4, 0.5]) == [0.1, 0.1, 0.1, 0.4, 0.5]
        assert apply_repetition_code([0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7]) == \
            [0.1, 0.1, 0.1, 0.4, 0.4, 0.4, 0.7]
        assert apply_repetition_code([0.3, 0.9]) == [0.3, 0.9]

    def test_context_shape(self, processor):
        ctx = processor.quantum_context()
        assert set(ctx) == {"qubits", "superposition", "entanglement", "coherence"}
        assert len(ctx["qubits"]) == 4


class TestEntanglement:
    """Test entanglement estimation."""

    def test_pairwise(self):
        assert pairwise_entanglement(1.0, 1.0) == 1.0
        assert pairwise_entanglement(0.5, 0.5) == 0.0
        assert accumulate_pairwise(0.95, 1.0, 1.0) == 1.0
        assert accumulate_pairwise(0.0, 1.0, 1.0) == pytest.approx(0.1)

    def test_global_small_registers(self):
        assert global_entanglement([]) == 0.0
        assert global_entanglement([0.3]) == 0.0
        assert global_entanglement([0.0, 0.0]) == pytest.approx(1.0)

    def test_global_bounded(self, rng):
        for _ in range(100):
            n = int(rng.integers(2, 12))
            qubits = rng.uniform(-0.5, 1.5, size=n)
            value = global_entanglement(qubits)
            assert 0.0 <= value <= 1.0
            assert not math.isnan(value)


class TestGates:
    """Test gate validation and dispatch."""

    def test_gate_schema(self):
        gate = QuantumGate(kind="CNOT", target=1, control=0)
        assert gate.kind is GateKind.CNOT
        with pytest.raises(ValidationError):
            QuantumGate(kind="CNOT", target=1)
        with pytest.raises(ValidationError):
            QuantumGate(kind="H", target=-1)
        with pytest.raises(ValidationError):
            QuantumGate(kind="RX", target=0)
        with pytest.raises(ValidationError):
            QuantumGate(kind="SWAP", target=0)

    def test_invalid_index_leaves_state(self, processor):
        processor.apply_gate({"kind": "H", "target": 0})
        before = processor.state
        with pytest.raises(InvalidQubitIndex):
            processor.apply_gate(QuantumGate(kind="X", target=4))
        with pytest.raises(IndexError):
            processor.apply_gate(QuantumGate(kind="CNOT", target=0, control=9))
        assert processor.state == before

    def test_hadamard_sets_superposition(self, processor):
        state = processor.apply_gate(QuantumGate(kind="H", target=0))
        assert state.superposition is True
        assert state.coherence < 1.0

    def test_pauli_x_flips(self, processor):
        state = processor.apply_gate(QuantumGate(kind="X", target=0))
        assert state.qubits[0] == 1.0
        state = processor.apply_gate(QuantumGate(kind="X", target=0))
        assert state.qubits[0] < 1e-3

    def test_pauli_x_only_lifts_exact_zero(self, processor):
        angle = 2.0 * math.asin(math.sqrt(0.3))
        state = processor.apply_gate(QuantumGate(kind="RX", target=0, angle=angle))
        assert state.qubits[0] == pytest.approx(0.3)
        state = processor.apply_gate(QuantumGate(kind="X", target=0))
        assert state.qubits[0] < 1e-3

    def test_cnot_flips_when_control_is_one(self, processor):
        processor.apply_gate(QuantumGate(kind="X", target=0))
        state = processor.apply_gate(QuantumGate(kind="CNOT", control=0, target=1))
        assert state.qubits[1] > 0.99

    def test_cnot_skips_when_control_is_zero(self, processor):
        state = processor.apply_gate(QuantumGate(kind="CNOT", control=0, target=1))
        assert state.qubits[1] == 0.0

    def test_global_recompute_overwrites_pairwise(self, processor):
        processor.apply_gate(QuantumGate(kind="X", target=0))
        state = processor.apply_gate(QuantumGate(kind="CNOT", control=0, target=1))
        assert state.entanglement == pytest.approx(global_entanglement(state.qubits))

    def test_rotations_and_phases(self, processor):
        state = processor.apply_gate(QuantumGate(kind="RX", target=0, angle=math.pi))
        assert state.qubits[0] == pytest.approx(1.0)
        state = processor.apply_gate(QuantumGate(kind="RY", target=0, angle=math.pi))
        assert state.qubits[0] == pytest.approx(0.0, abs=1e-12)
        before = processor.state.qubits
        for kind in ("Z", "T", "S"):
            state = processor.apply_gate(QuantumGate(kind=kind, target=1))
        state = processor.apply_gate(QuantumGate(kind="RZ", target=1, angle=0.3))
        assert state.qubits == before
        assert 0.0 <= state.coherence <= 1.0

    def test_pauli_y_flips(self, processor):
        state = processor.apply_gate(QuantumGate(kind="Y", target=2))
        assert state.qubits[2] == 1.0

    def test_circuit_defaults(self):
        circuit = QuantumCircuit(gates=[
            {"kind": "H", "target": 0},
            {"kind": "CNOT", "control": 3, "target": 1},
        ])
        assert circuit.depth == 2
        assert circuit.width == 4
        assert QuantumCircuit().width == 0

    def test_circuit_stops_at_invalid_gate(self, processor):
        with pytest.raises(InvalidQubitIndex):
            processor.run_circuit({"gates": [
                {"kind": "X", "target": 0},
                {"kind": "X", "target": 9},
                {"kind": "X", "target": 1},
            ]})
        state = processor.state
        assert state.qubits[0] == 1.0
        assert state.qubits[1] == 0.0


class TestMeasurement:
    """Test measurement reporting."""

    def test_values_in_unit_interval(self, rng):
        for n in (1, 3, 6):
            proc = QuantumProcessor(n, rng=rng)
            for gate in ({"kind": "H", "target": 0}, {"kind": "X", "target": n - 1}):
                proc.apply_gate(gate)
            result = proc.measure()
            assert len(result.state.qubits) == n
            assert all(0.0 <= q <= 1.0 for q in result.state.qubits)
            assert 0.0 <= result.probability <= 1.0
            assert 0.0 <= result.confidence <= 1.0
            assert 119.999 <= result.execution_time <= 170.001
            assert math.isfinite(result.energy)

    def test_measure_does_not_persist(self, processor):
        processor.apply_gate({"kind": "H", "target": 0})
        before = processor.state.qubits
        result = processor.measure()
        assert processor.state.qubits == before
        assert result.confidence == processor.state.coherence

    def test_result_is_frozen(self, processor):
        result = processor.measure()
        with pytest.raises(ValidationError):
            result.probability = 0.5

    def test_result_state_is_frozen(self, processor):
        processor.apply_gate({"kind": "H", "target": 0})
        result = processor.measure()
        with pytest.raises(ValidationError):
            result.state.coherence = 5.0
        with pytest.raises(AttributeError):
            result.state.qubits.append(0.4)
        assert len(result.state.qubits) == 4
        assert 0.0 <= result.state.coherence <= 1.0

    def test_snapshot_rejects_out_of_range(self):
        with pytest.raises(ValidationError):
            StateSnapshot(qubits=(0.0,), coherence=1.5)

    def test_fidelity_formula(self, processor):
        result = processor.measure()
        thermal = 0.015 * BOLTZMANN_CONSTANT / (PLANCK_CONSTANT * 1e9)
        expected = result.confidence * (1 - 0.001) * (1 - thermal)
        assert result.probability == pytest.approx(expected)

    def test_end_to_end_scenario(self):
        proc = QuantumProcessor(4, seed=2024)
        pre_gate_coherence = proc.state.coherence
        proc.apply_gate(QuantumGate(kind="H", target=0))
        proc.apply_gate(QuantumGate(kind="CNOT", control=0, target=1))
        proc.apply_gate(QuantumGate(kind="X", target=2))
        result = proc.measure()

        assert len(result.state.qubits) == 4
        assert all(0.0 <= q <= 1.0 for q in result.state.qubits)
        assert 0.0 <= result.state.entanglement <= 1.0
        assert result.state.coherence < pre_gate_coherence
