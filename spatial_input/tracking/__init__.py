"""Per-source spatial input records."""
from .gesture_record import GestureRecord

__all__ = ["GestureRecord"]
