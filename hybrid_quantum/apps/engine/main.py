#!/usr/bin/env python3
"""
Main CLI entrypoint for the hybrid quantum engine.

Loads configuration, initializes the engine service, runs the configured
circuit, measurement, training and optimisation, and writes a snapshot.
"""
import argparse
import copy
import logging
import signal
import sys
import time
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .engine_service import EngineService
from ...pkgs.core_physics import InvalidQubitIndex
from ...pkgs.engine_runtime import InitRequest, TrainRequest

logger = logging.getLogger(__name__)


def default_config() -> Dict[str, Any]:
    """Get default configuration."""
    return {
        'engine': {
            'seed': 0,
            'qubits': 4,
            'layers': 3,
            'log_level': 'INFO',
            'log_components': {},
        },
        'circuit': [
            {'kind': 'H', 'target': 0},
            {'kind': 'CNOT', 'control': 0, 'target': 1},
            {'kind': 'X', 'target': 2},
        ],
        'training': {
            'epochs': 5,
        },
        'optimization': {
            'qaoa_depth': 2,
            'run_vqe': True,
            'deadline_seconds': 10.0,
        },
        'output': {
            'snapshot_path': './snapshots',
            'recordings_path': './recordings/run',
        },
    }


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Optional[str]) -> Dict[str, Any]:
    """Load YAML configuration merged over the defaults."""
    defaults = default_config()
    if not path:
        return defaults
    try:
        with open(path, 'r') as f:
            loaded = yaml.safe_load(f) or {}
        logger.info(f"Loaded configuration from {path}")
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Failed to load config from {path}: {e}")
        return defaults
    if not isinstance(loaded, dict):
        logger.error(f"Config {path} is not a mapping, using defaults")
        return defaults
    return _deep_merge(defaults, loaded)


class EngineRunner:
    """Runs one configured session with graceful shutdown support."""

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        engine_cfg = config['engine']
        self.engine = EngineService({'log_level': engine_cfg.get('log_level', 'INFO'),
                                     'log_components': engine_cfg.get('log_components'),
                                     'global_seed': engine_cfg.get('seed', 0)})
        self.shutdown_requested = False

    def install_signal_handlers(self):
        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)

    def _signal_handler(self, signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        self.shutdown_requested = True

    def _should_stop(self) -> bool:
        return self.shutdown_requested

    def _save_snapshot(self, extra: Dict[str, Any]) -> Path:
        snapshot = self.engine.snapshot()
        snapshot.update(extra)
        snapshot_dir = Path(self.config['output']['snapshot_path'])
        snapshot_dir.mkdir(parents=True, exist_ok=True)
        snapshot_file = snapshot_dir / f"snapshot_{int(time.time())}.yaml"
        with open(snapshot_file, 'w') as f:
            yaml.safe_dump(snapshot, f, default_flow_style=False)
        logger.info(f"Saved snapshot to {snapshot_file}")
        return snapshot_file

    def run(self) -> Dict[str, Any]:
        engine_cfg = self.config['engine']
        self.engine.init(InitRequest(seed=engine_cfg['seed'], qubits=engine_cfg['qubits'],
                                     layers=engine_cfg['layers']))

        self.engine.run_circuit({'gates': self.config.get('circuit') or []})
        measurement = self.engine.measure()
        logger.info(f"Measured qubits={measurement.state.qubits}, fidelity={measurement.probability:.4f}, "
                    f"confidence={measurement.confidence:.4f}, t_exec={measurement.execution_time:.1f}ns")

        summary: Dict[str, Any] = {'measurement': measurement.model_dump(mode='json')}

        if not self.shutdown_requested:
            stats = self.engine.train(TrainRequest(epochs=self.config['training']['epochs']))
            logger.info(f"Model stats: accuracy={stats.accuracy:.4f}, loss={stats.loss:.4f}")

        opt_cfg = self.config['optimization']
        deadline = opt_cfg.get('deadline_seconds')
        if opt_cfg.get('qaoa_depth') and not self.shutdown_requested:
            qaoa = self.engine.optimize_qaoa(opt_cfg['qaoa_depth'], should_stop=self._should_stop, deadline=deadline)
            summary['qaoa'] = {'energy': qaoa.energy, 'iterations': qaoa.iterations, 'converged': qaoa.converged}
        if opt_cfg.get('run_vqe') and not self.shutdown_requested:
            vqe = self.engine.optimize_vqe(should_stop=self._should_stop, deadline=deadline)
            summary['vqe'] = {'eigenvalue': vqe.eigenvalue, 'iterations': vqe.iterations,
                              'converged': vqe.converged}

        self._save_snapshot({'optimization': {k: v for k, v in summary.items() if k != 'measurement'}})
        self.engine.export_logs('jsonl', self.config['output']['recordings_path'])
        return summary


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description='Hybrid Quantum Engine')
    parser.add_argument(
        '--config', '-c',
        default='configs/default.yaml',
        help='Path to configuration file (default: configs/default.yaml)'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )
    args = parser.parse_args()

    config = load_config(args.config)
    if args.verbose:
        config['engine']['log_level'] = 'DEBUG'

    runner = EngineRunner(config)
    runner.install_signal_handlers()

    try:
        runner.run()
        sys.exit(0)
    except InvalidQubitIndex as e:
        logger.error(f"Invalid circuit: {e}")
        sys.exit(2)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)


if __name__ == '__main__':
    main()
