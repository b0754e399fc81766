"""Observability infrastructure for logging, metrics, seeding and events."""

from .logging import setup_logging
from .metrics import MetricsCollector, SeedManager
from .events import EventBus, QUANTUM_STATE_EVENT, MODEL_STATS_EVENT

__all__ = [
    'setup_logging',
    'MetricsCollector', 'SeedManager',
    'EventBus', 'QUANTUM_STATE_EVENT', 'MODEL_STATS_EVENT'
]
