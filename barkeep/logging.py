import logging
import threading
from collections import deque
from typing import Deque, Dict, List, Optional


class RingBufferHandler(logging.Handler):
    """Keeps the most recent structured events of a logger in memory."""

    def __init__(self, max_entries: int = 200):
        super().__init__()
        self._events: Deque[Dict] = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    @property
    def max_entries(self) -> int:
        return self._events.maxlen

    def resize(self, max_entries: int) -> None:
        """Change the capacity, keeping the newest events that still fit."""
        with self._lock:
            if max_entries != self._events.maxlen:
                self._events = deque(self._events, maxlen=max_entries)

    def emit(self, record: logging.LogRecord) -> None:
        event = {
            "event": record.getMessage(),
            "level": record.levelname,
            "logger": record.name,
            "ts": record.created,
            "details": getattr(record, "details", {}),
        }
        with self._lock:
            self._events.append(event)

    def get_events(self) -> List[Dict]:
        with self._lock:
            return list(self._events)

    def clear(self) -> None:
        with self._lock:
            self._events.clear()


def ring_buffer(logger: logging.Logger) -> Optional[RingBufferHandler]:
    for handler in logger.handlers:
        if isinstance(handler, RingBufferHandler):
            return handler
    return None


def create_logger(name: str, ring_size: int) -> logging.Logger:
    """
    Return the logger ``name`` with a ring buffer of ``ring_size`` events.

    Loggers are process-wide, so a second call with the same name returns the
    same logger and buffer; the buffer is resized to the latest ``ring_size``.
    """
    logger = logging.getLogger(name)
    handler = ring_buffer(logger)
    if handler is not None:
        handler.resize(ring_size)
        return logger
    logger.setLevel(logging.INFO)
    handler = RingBufferHandler(max_entries=ring_size)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def round_details(details: Optional[dict], digits: int = 3) -> dict:
    if not details:
        return {}
    return {key: round(value, digits) if isinstance(value, float) else value for key, value in details.items()}
