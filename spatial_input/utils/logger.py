"""
Structured logging with spatial input transition logging.
"""

import os
import logging
import logging.handlers
import time
from functools import wraps


def setup_logging(level="INFO", log_file=None, max_size_mb=10, backup_count=3):
    """Configure structured logging for the application."""
    console_format = "%(asctime)s  %(levelname)-5s  %(message)s"
    file_format = "%(asctime)s [%(levelname)-7s] %(name)-32s | %(message)s"
    date_format = "%H:%M:%S"

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    root_logger.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(root_logger.level)
    console.setFormatter(logging.Formatter(console_format, datefmt=date_format))
    root_logger.addHandler(console)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count,
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(file_format, datefmt=date_format))
        root_logger.addHandler(file_handler)

    return root_logger


class TransitionLogger:
    """Records spatial input category transitions.

    Subscribe on_transition to Events.SPATIAL_INPUT_CHANGED.
    """

    def __init__(self):
        self.logger = logging.getLogger("spatial_input.transitions")
        self._history = []

    def on_transition(self, source_key, previous, category, haptic_pattern=None, record=None, **_):
        entry = {
            "timestamp": time.time(),
            "source": source_key,
            "previous": previous.value,
            "category": category.value,
            "haptic": haptic_pattern.value if haptic_pattern is not None else None,
            "delta": record.signed_delta_magnitude if record is not None else None,
        }
        self._history.append(entry)
        self.logger.info(
            "Source: %-8s | %-20s -> %-20s | Haptic: %-13s",
            source_key,
            entry["previous"],
            entry["category"],
            entry["haptic"] or "none",
        )

    def get_history(self, last_n=None):
        """Get recent transition history."""
        if last_n:
            return self._history[-last_n:]
        return self._history.copy()

    def count_for(self, source_key) -> int:
        return sum(1 for entry in self._history if entry["source"] == source_key)

    @property
    def total_transitions(self):
        return len(self._history)


def log_timing(func):
    """Decorator to log function execution time."""
    logger = logging.getLogger(func.__module__)

    @wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        elapsed = (time.perf_counter() - start) * 1000
        logger.debug("%s took %.2fms", func.__name__, elapsed)
        return result

    return wrapper
