"""
Engine runtime components: request schemas and run recording.
"""

from .recorder import SimpleRecorder
from .schemas import InitRequest, TrainRequest

__all__ = ['SimpleRecorder', 'InitRequest', 'TrainRequest']
