from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Hashable, Optional, Tuple

from barkeep.config import EngineSettings
from barkeep.engine.events import EventBus, EventKind
from barkeep.engine.registry import VesselRegistry
from barkeep.errors import InvalidAmountError


@dataclass
class AgitationSession:
    vessel: Hashable
    elapsed: float = 0.0
    intensity: float = 0.0
    tilt: float = 0.0
    mixed: bool = False


class AgitationEngine:
    """
    Shaking a vessel.

    Wobble values are for presentation only. Once a gesture has been held past
    ``shake_mix_threshold`` seconds the vessel is marked as mixed; its blended
    color is always derived from the current contents.
    """

    def __init__(self, registry: VesselRegistry, settings: EngineSettings, events: EventBus, logger: logging.Logger):
        self.registry = registry
        self.settings = settings
        self.events = events
        self.logger = logger
        self.sessions: Dict[Hashable, AgitationSession] = {}

    def shake(self, vessel: Hashable, dt: float) -> Optional[AgitationSession]:
        content = self.registry.require(vessel)
        if not math.isfinite(dt):
            raise InvalidAmountError(f"dt must be finite, got {dt}")
        if content.is_empty():
            # an emptied vessel ends the gesture; a refill starts from zero
            self.sessions.pop(vessel, None)
            self.logger.info("shake_refused_empty", extra={"details": {"vessel": str(vessel)}})
            return None
        session = self.sessions.get(vessel)
        if session is None:
            session = AgitationSession(vessel=vessel)
            self.sessions[vessel] = session
        if dt <= 0:
            return session

        session.elapsed += dt
        session.intensity = math.sin(session.elapsed * self.settings.shake_frequency) * self.settings.shake_amplitude
        session.tilt = math.sin(session.elapsed * self.settings.shake_tilt_frequency) * self.settings.shake_tilt_amplitude

        if session.elapsed > self.settings.shake_mix_threshold:
            content.is_mixed = True
            if not session.mixed:
                session.mixed = True
                self.logger.info(
                    "shake_mixing_enhanced",
                    extra={"details": {"vessel": str(vessel), "elapsed": round(session.elapsed, 3)}},
                )
                self.events.emit(EventKind.SHAKE_MIXED, vessel, elapsed=session.elapsed)
        return session

    def stop(self, vessel: Hashable) -> bool:
        return self.sessions.pop(vessel, None) is not None

    def wobble(self, vessel: Hashable) -> Tuple[float, float]:
        session = self.sessions.get(vessel)
        if session is None:
            return 0.0, 0.0
        return session.intensity, session.tilt

    def elapsed(self, vessel: Hashable) -> float:
        session = self.sessions.get(vessel)
        return session.elapsed if session else 0.0
