"""
Dispatch telemetry

Collects the counts and lifecycle events of a dispatch run in memory. Nothing
is exported; the collector exists so callers and tests can inspect a run.
"""
from typing import Dict, Any, List, Optional
from dataclasses import dataclass, field
import time


@dataclass
class Metric:
    """Numeric sample, e.g. the success count of a run"""
    name: str
    value: float
    timestamp: float = field(default_factory=time.time)
    tags: Dict[str, str] = field(default_factory=dict)


@dataclass
class Event:
    """Lifecycle event such as dispatch.started or dispatch.item_failed"""
    name: str
    timestamp: float = field(default_factory=time.time)
    metadata: Dict[str, Any] = field(default_factory=dict)


class Telemetry:
    """Per-process collector for dispatch metrics and events"""

    def __init__(self):
        self._metrics: List[Metric] = []
        self._events: List[Event] = []

    def record_metric(self, name: str, value: float, tags: Optional[Dict[str, str]] = None) -> None:
        """
        Record a dispatch metric.

        Args:
            name: Metric name, dotted by convention (dispatch.success)
            value: Sample value
            tags: Labels such as the submission plan
        """
        self._metrics.append(Metric(name=name, value=value, tags=tags or {}))

    def record_event(self, name: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        """Record a dispatch lifecycle event"""
        self._events.append(Event(name=name, metadata=metadata or {}))

    def get_metrics(self) -> List[Metric]:
        """Get all recorded metrics, oldest first"""
        return self._metrics.copy()

    def get_metric(self, name: str) -> Optional[Metric]:
        """Get the most recent metric recorded under name"""
        for metric in reversed(self._metrics):
            if metric.name == name:
                return metric
        return None

    def get_events(self, name: Optional[str] = None) -> List[Event]:
        """
        Get recorded events, oldest first.

        Args:
            name: Only return events with this name (all events if None)
        """
        if name is None:
            return self._events.copy()
        return [event for event in self._events if event.name == name]

    def clear(self) -> None:
        """Drop everything recorded so far"""
        self._metrics.clear()
        self._events.clear()


# Shared by every DispatchService built without an explicit collector
_telemetry = Telemetry()


def get_telemetry() -> Telemetry:
    """Get the process-wide collector"""
    return _telemetry
