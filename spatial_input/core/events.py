"""
Lightweight event bus for decoupled inter-module communication.

The registry publishes attach/detach and category transitions here so that
haptic sinks, loggers and other consumers never need a reference to it.

Usage:
    bus = EventBus()
    bus.subscribe(Events.SPATIAL_INPUT_CHANGED, my_handler)
    bus.emit(Events.SPATIAL_INPUT_CHANGED, source_key="left", category=...)
"""

import time
import logging
import threading
from collections import defaultdict
from typing import Callable

logger = logging.getLogger(__name__)


class EventBus:
    """Thread-safe publish/subscribe event bus.

    Listeners run synchronously in priority order on the emitting thread.
    """

    _instance = None

    def __new__(cls):
        """Singleton pattern: one bus per application."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return
        self._listeners = defaultdict(list)  # event_name -> [(priority, callback)]
        self._lock = threading.Lock()
        self._event_history = []
        self._max_history = 100
        self._enabled = True
        self._initialized = True

    def subscribe(self, event_name: str, callback: Callable, priority: int = 0):
        """Register a listener for an event.

        Args:
            event_name: Event to listen for
            callback: Function to call. Receives **kwargs from emit().
            priority: Higher priority callbacks run first (default 0)
        """
        with self._lock:
            self._listeners[event_name].append((priority, callback))
            self._listeners[event_name].sort(key=lambda x: -x[0])
        logger.debug("Subscribed to '%s': %s (priority=%d)",
                     event_name, getattr(callback, "__name__", callback), priority)

    def unsubscribe(self, event_name: str, callback: Callable):
        """Remove a listener for an event."""
        with self._lock:
            self._listeners[event_name] = [
                (p, cb) for p, cb in self._listeners[event_name] if cb is not callback
            ]

    def emit(self, event_name: str, **kwargs):
        """Emit an event to all registered listeners.

        A failing listener is logged and skipped; it never interrupts the
        emitter or the remaining listeners.
        """
        if not self._enabled:
            return

        with self._lock:
            listeners = list(self._listeners.get(event_name, []))

        self._event_history.append({
            "event": event_name,
            "time": time.time(),
            "source_key": kwargs.get("source_key"),
            "data_keys": list(kwargs.keys()),
        })
        if len(self._event_history) > self._max_history:
            self._event_history = self._event_history[-self._max_history:]

        for priority, callback in listeners:
            try:
                callback(**kwargs)
            except Exception as e:
                logger.error("Event handler error [%s -> %s]: %s",
                             event_name, getattr(callback, "__name__", callback), e)

    def set_enabled(self, enabled: bool):
        self._enabled = enabled

    @property
    def listener_count(self) -> int:
        """Total number of registered listeners."""
        with self._lock:
            return sum(len(cbs) for cbs in self._listeners.values())

    def get_history(self, last_n: int = 10) -> list:
        """Get recent event history."""
        return self._event_history[-last_n:]

    def reset(self):
        """Reset singleton state (for testing)."""
        with self._lock:
            self._listeners.clear()
        self._event_history.clear()
        self._enabled = True


# =============================================================================
# Standard Event Names (constants to avoid typos)
# =============================================================================

class Events:
    """Standard event names used throughout the system."""

    # Registry lifecycle
    SOURCE_ATTACHED = "source_attached"
    SOURCE_DETACHED = "source_detached"

    # Classification edges
    SPATIAL_INPUT_CHANGED = "spatial_input_changed"
