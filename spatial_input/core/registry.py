"""
Spatial input registry.

Owns one GestureRecord per input source, shared by every caller interested in
that source, and re-classifies the polled records once per tick.

Lifecycle:
    attach(caller, key)   - first caller creates the record
    detach(caller, key)   - last caller destroys it
    tick()                - one evaluation pass, driven by the host frame loop

Not thread-safe: attach, detach and tick must all run on the same thread or
be serialized by the host.
"""

import logging
from typing import Dict, Hashable, Optional

from spatial_input.core.events import EventBus, Events
from spatial_input.core.types import CATEGORY_HAPTIC_MAP, GestureCategory, caller_name
from spatial_input.recognition.classifier import ClassifierConfig, SpatialClassifier
from spatial_input.tracking.gesture_record import GestureRecord
from spatial_input.utils.logger import log_timing

logger = logging.getLogger(__name__)


class SpatialInputRegistry:
    """Tracks spatial input for every source that has an interested caller.

    Args:
        pose_provider: Object with get_pose(source_key) -> Pose
        classifier: SpatialClassifier (default thresholds if omitted)
        event_bus: EventBus for lifecycle and transition events
        count_duplicate_attach: If True, attaching the same caller twice
            needs two detaches; otherwise attach is idempotent per caller
    """

    def __init__(self, pose_provider, classifier: Optional[SpatialClassifier] = None,
                 event_bus: Optional[EventBus] = None, count_duplicate_attach: bool = False):
        self._pose_provider = pose_provider
        self._classifier = classifier or SpatialClassifier()
        self._bus = event_bus
        self._count_duplicates = count_duplicate_attach
        self._records: Dict[Hashable, GestureRecord] = {}
        self._tick_count = 0

    @classmethod
    def from_config(cls, config, pose_provider, event_bus: Optional[EventBus] = None):
        """Build a registry from the 'spatial_input' config section.

        Raises:
            ValueError: if a configured threshold is invalid
        """
        section = config.get_section("spatial_input") if hasattr(config, "get_section") else config
        classifier = SpatialClassifier(ClassifierConfig.from_dict(section))
        return cls(
            pose_provider,
            classifier=classifier,
            event_bus=event_bus,
            count_duplicate_attach=bool(section.get("count_duplicate_attach", False)),
        )

    # ------------------------------------------------------------------
    # Attachment
    # ------------------------------------------------------------------

    def attach(self, caller, source_key: Hashable) -> GestureRecord:
        """Register caller's interest in source_key, creating its record if needed."""
        record = self._records.get(source_key)
        if record is not None:
            record.add_caller(caller)
            logger.debug("Caller %s joined %r (%d interested)",
                         caller_name(caller), source_key, record.caller_count)
            return record

        record = GestureRecord(source_key, self._pose_provider, caller,
                               count_duplicates=self._count_duplicates)
        self._records[source_key] = record
        logger.info("Tracking spatial input for %r (caller %s)", source_key, caller_name(caller))
        self._emit(Events.SOURCE_ATTACHED, source_key=source_key, caller=caller)
        return record

    def detach(self, caller, source_key: Hashable) -> bool:
        """Withdraw caller's interest in source_key.

        Returns:
            True if any interest in the source remains
        """
        record = self._records.get(source_key)
        if record is None:
            return False

        if record.remove_caller(caller):
            return True

        del self._records[source_key]
        logger.info("Stopped tracking %r (last caller %s detached)", source_key, caller_name(caller))
        self._emit(Events.SOURCE_DETACHED, source_key=source_key, caller=caller)
        return False

    def lookup(self, caller, source_key: Hashable) -> Optional[GestureRecord]:
        """Live record for source_key, or None if nobody is tracking it."""
        return self._records.get(source_key)

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    @log_timing
    def tick(self) -> int:
        """Run one evaluation pass over every tracked record.

        Returns:
            Number of category transitions during this pass
        """
        self._tick_count += 1
        transitions = 0

        for record in list(self._records.values()):
            if not record.is_polled:
                transitions += self._apply(record, GestureCategory.NONE)
                continue

            # Baseline was just reset; give it one tick of motion first
            if record.changed_this_tick:
                record.changed_this_tick = False
                continue

            category = self._classifier.classify(record)
            if category is not None:
                transitions += self._apply(record, category)

        return transitions

    def _apply(self, record: GestureRecord, category: GestureCategory) -> int:
        previous = record.category
        record.category = category
        if not record.changed_this_tick:
            return 0

        logger.debug("Tick %d: %r %s -> %s", self._tick_count, record.source_key,
                     previous.value, category.value)
        self._emit(
            Events.SPATIAL_INPUT_CHANGED,
            source_key=record.source_key,
            previous=previous,
            category=category,
            haptic_pattern=CATEGORY_HAPTIC_MAP[category],
            record=record,
        )
        return 1

    def _emit(self, event_name: str, **kwargs):
        if self._bus is not None:
            self._bus.emit(event_name, **kwargs)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def tracked_sources(self) -> list:
        return list(self._records.keys())

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def classifier(self) -> SpatialClassifier:
        return self._classifier

    def __len__(self):
        return len(self._records)

    def __contains__(self, source_key):
        return source_key in self._records

    def reset(self):
        """Drop every record. Callers must attach again afterwards."""
        if self._records:
            logger.info("Registry reset, dropping %d record(s)", len(self._records))
        self._records.clear()
        self._tick_count = 0
