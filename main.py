#!/usr/bin/env python3
"""
Spatial Input Detection - demo driver.

Plays a scripted motion on two tracked sources through an in-memory pose
provider and logs every category transition the registry reports.

Usage:
    python main.py                        # Default config/config.yaml
    python main.py --ticks 120 --fps 60   # Longer run, faster frame loop
    python main.py --fps 0                # Run as fast as possible
    python main.py --log-level DEBUG      # Include per-tick timings
"""

import sys
import os
import time
import signal
import argparse
import logging

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, PROJECT_ROOT)

from spatial_input.capture.pose_source import PoseSource
from spatial_input.core.events import EventBus, Events
from spatial_input.core.registry import SpatialInputRegistry
from spatial_input.core.types import InputCaller
from spatial_input.utils.config import Config
from spatial_input.utils.logger import setup_logging, TransitionLogger

logger = logging.getLogger(__name__)

LEFT = "left_hand"
RIGHT = "right_hand"


class SpatialInputDemo:
    """Host frame loop owning the registry and the pose provider."""

    def __init__(self, config: Config):
        self._config = config
        self._running = False

        self._bus = EventBus()
        self._poses = PoseSource()
        self._registry = SpatialInputRegistry.from_config(config, self._poses, event_bus=self._bus)

        self._transitions = TransitionLogger()
        self._bus.subscribe(Events.SPATIAL_INPUT_CHANGED, self._transitions.on_transition)

        # Two callers share the left hand, one watches the right
        self._scroller = InputCaller("scroller")
        self._menu = InputCaller("menu")
        self._dragger = InputCaller("dragger")

    def run(self, ticks: int, fps: float):
        frame_time = 1.0 / fps if fps > 0 else 0.0
        self._running = True

        self._registry.attach(self._scroller, LEFT)
        self._registry.attach(self._menu, LEFT)
        self._registry.attach(self._dragger, RIGHT)

        for frame in range(ticks):
            if not self._running:
                break
            start = time.perf_counter()

            self._script(frame)
            self._registry.tick()

            if frame_time:
                elapsed = time.perf_counter() - start
                if elapsed < frame_time:
                    time.sleep(frame_time - elapsed)

        self._shutdown()

    def _script(self, frame: int):
        """Scripted motion standing in for a real tracking device."""
        if frame == 2:
            self._scroller.polling = True
            self._dragger.polling = True
        if 5 <= frame < 12:
            # Wrist pitch only
            self._poses.rotate(LEFT, x=0.2)
            # Straight push of the right controller
            self._poses.translate(RIGHT, (0.01, 0.0, 0.0))
        if 18 <= frame < 22:
            self._poses.rotate(LEFT, x=0.5, y=0.5)
        if 26 <= frame < 30:
            self._poses.rotate(RIGHT, z=0.6)
        if frame == 32:
            self._scroller.polling = False
            self._registry.detach(self._menu, LEFT)

    def _shutdown(self):
        logger.info("Shutting down...")
        self._running = False

        for source_key in self._registry.tracked_sources:
            record = self._registry.lookup(None, source_key)
            logger.info("%-10s category=%-20s delta=%+.3f drag=%.3f callers=%d",
                        source_key, record.category.value, record.signed_delta_magnitude,
                        record.drag_distance, record.caller_count)

        self._registry.detach(self._scroller, LEFT)
        self._registry.detach(self._dragger, RIGHT)
        logger.info("%d transition(s) over %d tick(s)",
                    self._transitions.total_transitions, self._registry.tick_count)

    def handle_signal(self, signum, frame):
        """Handle SIGINT/SIGTERM for graceful shutdown."""
        logger.info("Signal %d received, shutting down...", signum)
        self._running = False


def parse_args():
    parser = argparse.ArgumentParser(
        description="Spatial Input Detection - scripted demo"
    )
    parser.add_argument(
        "--config", type=str, default=None,
        help="Path to config.yaml"
    )
    parser.add_argument(
        "--ticks", type=int, default=None,
        help="Number of frames to simulate"
    )
    parser.add_argument(
        "--fps", type=float, default=None,
        help="Frame loop rate (0 = unthrottled)"
    )
    parser.add_argument(
        "--log-level", type=str, default=None,
        help="Override logging.level"
    )
    return parser.parse_args()


def main():
    args = parse_args()

    config = Config()
    config.load(config_path=args.config)

    log_cfg = config.get_section("logging")
    setup_logging(
        level=args.log_level or log_cfg.get("level", "INFO"),
        log_file=log_cfg.get("file"),
        max_size_mb=log_cfg.get("max_size_mb", 10),
        backup_count=log_cfg.get("backup_count", 3),
    )

    ticks = args.ticks if args.ticks is not None else config.get("demo.ticks", 40)
    fps = args.fps if args.fps is not None else config.get("demo.fps", 30.0)

    logger.info("=" * 60)
    logger.info("  SPATIAL INPUT DETECTION - demo")
    logger.info("  Rotation threshold: %.2f deg | Drag threshold: %.3f",
                config.get("spatial_input.rotation_threshold_deg", 0.3),
                config.get("spatial_input.drag_distance_threshold", 0.05))
    logger.info("=" * 60)

    try:
        demo = SpatialInputDemo(config)
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        sys.exit(2)

    signal.signal(signal.SIGINT, demo.handle_signal)
    signal.signal(signal.SIGTERM, demo.handle_signal)

    demo.run(ticks=ticks, fps=fps)


if __name__ == "__main__":
    main()
