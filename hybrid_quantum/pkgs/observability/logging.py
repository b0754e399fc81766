"""Logging configuration for the engine service and CLI."""

import logging
import sys
from typing import Dict, Optional, Union

FORMATS = {
    "structured": '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    "simple": '%(levelname)s - %(message)s',
}


def resolve_level(level: Union[str, int]) -> int:
    """Level name or number to a logging level; unknown names map to INFO."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: Union[str, int] = "INFO", format_type: str = "structured",
                  component_levels: Optional[Dict[str, str]] = None) -> logging.Logger:
    """Install a single stdout handler and return the ``hybrid_quantum`` logger.

    ``component_levels`` overrides the level of individual modules, keyed by
    logger name with or without the ``hybrid_quantum.`` prefix, e.g.
    ``{"pkgs.core_physics.gates": "WARNING"}`` to silence per-gate detail.
    """
    log_level = resolve_level(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(FORMATS.get(format_type, FORMATS["simple"])))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    logger = logging.getLogger('hybrid_quantum')
    logger.setLevel(log_level)

    for name, component_level in (component_levels or {}).items():
        if not name.startswith('hybrid_quantum'):
            name = f'hybrid_quantum.{name}'
        logging.getLogger(name).setLevel(resolve_level(component_level))

    return logger
