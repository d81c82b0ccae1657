from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Hashable, List, Optional


class EventKind(str, Enum):
    POUR_STARTED = "pour_started"
    POUR_STOPPED = "pour_stopped"
    PROGRESS_HIDDEN = "progress_hidden"
    SHAKE_MIXED = "shake_mixed"
    DRINK_STARTED = "drink_started"
    DRINK_COMMITTED = "drink_committed"


@dataclass(frozen=True)
class EngineEvent:
    """Presentation cue emitted on a state transition."""
    kind: EventKind
    vessel: Hashable
    details: dict[str, Any] = field(default_factory=dict)


Listener = Callable[[EngineEvent], None]


class EventBus:
    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, kind: EventKind, vessel: Hashable, **details: Any) -> EngineEvent:
        event = EngineEvent(kind=kind, vessel=vessel, details=details)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as exc:
                self.logger.error("listener_failed", extra={"details": {"kind": kind.value, "error": str(exc)}})
        return event
