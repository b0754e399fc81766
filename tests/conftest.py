"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest

from hybrid_quantum.pkgs.core_physics import QuantumProcessor
from hybrid_quantum.pkgs.learning import QuantumAI


@pytest.fixture
def rng():
    """Seeded generator for deterministic draws."""
    return np.random.default_rng(1234)


@pytest.fixture
def processor(rng):
    """Fresh 4-qubit processor."""
    return QuantumProcessor(4, rng=rng)


@pytest.fixture
def trainer():
    """Small 3-layer trainer with a frozen clock."""
    return QuantumAI(3, seed=7, clock=lambda: 0.0)


@pytest.fixture
def engine_config():
    return {'log_level': 'WARNING', 'global_seed': 42}
