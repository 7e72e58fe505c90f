"""
Float Controller - execution markers for emitter dispatch.

Floats are lightweight markers recorded while events are dispatched:
1. Track which listeners actually ran
2. Debug namespace fan-out and once-expiry in tests
3. Verify that deferred listeners were scheduled

Pattern:
- Each float = one marker with optional data
- Controller collects markers
- Can be enabled/disabled via parameter or EmitterConfig.enable_floats
- In tests: enabled=True → check markers
- In production: enabled=False → zero overhead

Usage:
    >>> from nsemitter.toolkit.float_controller import FloatController
    >>>
    >>> fc = FloatController(enabled=True)
    >>> fc.float("emitter.emit", event="foo")
    >>> fc.float("emitter.listener.invoked", key="foo")
    >>>
    >>> assert fc.has_float("emitter.emit")
    >>> assert fc.get_float("emitter.emit").data["event"] == "foo"
"""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime
import logging
from typing import Any
from uuid import uuid4

from nsemitter.core.config import EmitterConfig, get_config

logger = logging.getLogger(__name__)


class FloatEvent:
    """
    Single float marker.

    Attributes:
        float_id: Unique float identifier
        name: Float name (e.g., "emitter.emit")
        timestamp: When float occurred
        data: Additional data attached to float
    """

    def __init__(self, name: str, data: dict[str, Any] | None = None):
        self.float_id = str(uuid4())
        self.name = name
        self.timestamp = datetime.now()
        self.data = data or {}

    def __repr__(self) -> str:
        return (
            f"FloatEvent(name={self.name!r}, "
            f"timestamp={self.timestamp.isoformat()}, "
            f"data={self.data})"
        )


class FloatController:
    """
    Collector for float markers.

    Singleton pattern: one controller per process, created from
    the global EmitterConfig on first use.
    """

    _instance: FloatController | None = None

    def __init__(self, enabled: bool = False, max_events: int = 0):
        """
        Initialize float controller.

        Args:
            enabled: Whether to collect floats
            max_events: Oldest floats are dropped past this count (0=unlimited)
        """
        self.enabled = enabled
        self.max_events = max_events
        self._floats: list[FloatEvent] = []
        self._floats_by_name: dict[str, list[FloatEvent]] = defaultdict(list)

        logger.debug(f"FloatController initialized: enabled={enabled}")

    @classmethod
    def get_instance(
        cls, enabled: bool | None = None, config: EmitterConfig | None = None
    ) -> FloatController:
        """
        Get singleton instance.

        Args:
            enabled: Override enabled state
            config: Settings used when the instance is first created
                (defaults to the global EmitterConfig)

        Returns:
            Global FloatController instance
        """
        if cls._instance is None:
            config = config or get_config()
            cls._instance = cls(
                enabled=config.enable_floats if enabled is None else enabled,
                max_events=config.max_floats,
            )
        elif enabled is not None:
            cls._instance.enabled = enabled

        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset singleton (for tests)."""
        cls._instance = None

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def float(self, event_name: str, **data: Any) -> FloatEvent | None:
        """
        Record a float marker.

        Args:
            event_name: Float name (e.g., "emitter.listener.invoked")
            **data: Additional data to attach

        Returns:
            FloatEvent if enabled, None otherwise
        """
        if not self.enabled:
            return None

        event = FloatEvent(name=event_name, data=data)

        self._floats.append(event)
        self._floats_by_name[event_name].append(event)

        if self.max_events and len(self._floats) > self.max_events:
            dropped = self._floats.pop(0)
            self._floats_by_name[dropped.name].remove(dropped)
            if not self._floats_by_name[dropped.name]:
                del self._floats_by_name[dropped.name]

        logger.debug(f"FLOAT[{event_name}] {data if data else ''}")

        return event

    def has_float(self, name: str) -> bool:
        """Check if a float with this exact name was recorded."""
        return name in self._floats_by_name

    def get_floats(self, pattern: str | None = None) -> list[FloatEvent]:
        """
        Get all floats, optionally filtered by pattern.

        Args:
            pattern: Exact name, or prefix ending in "*"
                (e.g., "emitter.listener.*")

        Returns:
            List of matching FloatEvents
        """
        if pattern is None:
            return self._floats.copy()

        if "*" in pattern:
            prefix = pattern.replace("*", "")
            return [event for event in self._floats if event.name.startswith(prefix)]
        return self._floats_by_name.get(pattern, []).copy()

    def get_float(self, name: str, index: int = 0) -> FloatEvent | None:
        """Get the index-th float recorded under name, or None."""
        events = self._floats_by_name.get(name, [])
        if index < len(events):
            return events[index]
        return None

    def count_floats(self, pattern: str | None = None) -> int:
        return len(self.get_floats(pattern))

    def clear(self) -> None:
        """Clear all collected floats."""
        self._floats.clear()
        self._floats_by_name.clear()

    def get_report(self) -> dict[str, Any]:
        """
        Get float report.

        Returns:
            Dict with statistics about collected floats
        """
        float_counts = {name: len(events) for name, events in self._floats_by_name.items()}

        return {
            "enabled": self.enabled,
            "total_floats": len(self._floats),
            "unique_names": len(self._floats_by_name),
            "float_counts": float_counts,
        }

    def __repr__(self) -> str:
        return f"FloatController(enabled={self.enabled}, floats={len(self._floats)})"


def get_float_controller(enabled: bool | None = None) -> FloatController:
    """Get global float controller instance."""
    return FloatController.get_instance(enabled=enabled)


def float_event(event_name: str, **data: Any) -> FloatEvent | None:
    """
    Record a float marker on the global controller.

    Example:
        >>> float_event("emitter.emit", event="foo")
    """
    return FloatController.get_instance().float(event_name, **data)


class FloatContext:
    """
    Context manager for float collection in tests.

    Usage:
        >>> with FloatContext() as fc:
        ...     emitter.emit("foo")
        ...     assert fc.has_float("emitter.emit")
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.fc = FloatController.get_instance()
        self._old_enabled = self.fc.enabled

    def __enter__(self) -> FloatController:
        self.fc.enabled = self.enabled
        self.fc.clear()
        return self.fc

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.fc.enabled = self._old_enabled
        return False


__all__ = [
    "FloatContext",
    "FloatController",
    "FloatEvent",
    "float_event",
    "get_float_controller",
]
