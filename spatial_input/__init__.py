"""
Spatial Input Detection
=======================

Classifies the pose stream of tracked controller-like input sources into
spatial gesture categories (idle, drag, single-axis rotation, free rotation)
and shares the result between any number of interested callers.

Modules:
    - core: Shared types, event bus and the per-source registry
    - capture: Pose providers
    - tracking: Per-source gesture records
    - recognition: Threshold-based spatial input classifier
    - utils: Configuration, logging and geometry helpers
"""

__version__ = "1.0.0"
__author__ = "HCI Team"
