"""Engine service and command-line entry point."""

from .engine_service import EngineService

__all__ = ['EngineService']
