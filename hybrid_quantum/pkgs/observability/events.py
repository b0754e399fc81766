"""Event bus used to publish state changes to display and assistant collaborators."""

from typing import Dict, List, Callable, Any, Optional
import logging

logger = logging.getLogger(__name__)

QUANTUM_STATE_EVENT = "quantum_state"
MODEL_STATS_EVENT = "model_stats"


class EventBus:
    """Simple synchronous publish/subscribe bus."""

    def __init__(self):
        self.listeners: Dict[str, List[Callable[[Any], None]]] = {}

    def subscribe(self, event_type: str, callback: Callable[[Any], None]):
        self.listeners.setdefault(event_type, []).append(callback)
        logger.debug(f"Subscribed to event: {event_type}")

    def unsubscribe(self, event_type: str, callback: Callable[[Any], None]):
        if event_type in self.listeners:
            try:
                self.listeners[event_type].remove(callback)
                logger.debug(f"Unsubscribed from event: {event_type}")
            except ValueError:
                logger.warning(f"Callback not found for event: {event_type}")

    def publish(self, event_type: str, data: Any = None):
        """Deliver to every subscriber; a failing subscriber does not stop delivery."""
        for callback in list(self.listeners.get(event_type, [])):
            try:
                callback(data)
            except Exception as e:
                logger.error(f"Error in event callback for {event_type}: {e}")
        logger.debug(f"Published event: {event_type}")

    def clear_listeners(self, event_type: Optional[str] = None):
        if event_type:
            self.listeners.pop(event_type, None)
        else:
            self.listeners.clear()

    def get_listener_count(self, event_type: str) -> int:
        return len(self.listeners.get(event_type, []))
