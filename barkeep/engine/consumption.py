"""
Drinking from a vessel.

A drink request starts a fixed-length animation. When the host's ticks carry
it past ``drink_duration`` the contents are snapshotted, the vessel is
emptied, and the snapshot is parked in a single-slot mailbox that is cleared
on read.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Hashable, Optional

from barkeep.config import EngineSettings
from barkeep.core.color import Color
from barkeep.domain.content import IngredientQuantity, calculate_alcohol_content
from barkeep.domain.ingredients import IngredientCatalog
from barkeep.engine.events import EventBus, EventKind
from barkeep.engine.registry import VesselRegistry
from barkeep.errors import InvalidAmountError
from barkeep.logging import round_details
from barkeep.recognition import identify


class DrinkPhase(str, Enum):
    IDLE = "idle"
    ANIMATING = "animating"
    COMMITTED = "committed"


@dataclass
class DrinkSession:
    vessel: Hashable
    started_at: float
    duration: float
    elapsed: float = 0.0
    phase: DrinkPhase = DrinkPhase.ANIMATING

    @property
    def fraction(self) -> float:
        return min(1.0, self.elapsed / self.duration)


@dataclass(frozen=True)
class DrinkResult:
    """
    What was drunk.

    Attributes:
        vessel: Handle of the emptied vessel.
        volume: Total volume consumed.
        ingredients: The ingredient quantities at commit time.
        color: Blended color at commit time.
        name: Recognised recipe or classification name.
        abv: Volume-weighted alcohol content, percent.
    """
    vessel: Hashable
    volume: float
    ingredients: tuple[IngredientQuantity, ...]
    color: Color
    name: Optional[str]
    abv: float


class ConsumptionStateMachine:
    def __init__(
        self,
        registry: VesselRegistry,
        settings: EngineSettings,
        catalog: IngredientCatalog,
        events: EventBus,
        logger: logging.Logger,
        clock: Callable[[], float] = lambda: 0.0,
    ):
        self.registry = registry
        self.settings = settings
        self.catalog = catalog
        self.events = events
        self.logger = logger
        self.clock = clock
        self.sessions: Dict[Hashable, DrinkSession] = {}
        self._mailbox: Optional[DrinkResult] = None

    def drink(self, vessel: Hashable) -> Optional[DrinkSession]:
        """
        Request a drink (Idle -> Animating).

        Returns:
            The running session, or ``None`` when there is nothing to drink.
        """
        content = self.registry.require(vessel)
        existing = self.sessions.get(vessel)
        if existing is not None:
            return existing
        if content.is_empty():
            self.logger.info("nothing_to_drink", extra={"details": {"vessel": str(vessel)}})
            return None
        session = DrinkSession(vessel=vessel, started_at=self.clock(), duration=self.settings.drink_duration)
        self.sessions[vessel] = session
        self.logger.info("drink_started", extra={"details": {"vessel": str(vessel)}})
        self.events.emit(EventKind.DRINK_STARTED, vessel)
        return session

    def update(self, dt: float) -> list[DrinkResult]:
        """Advance every animation; commit the ones that finished."""
        if not math.isfinite(dt) or dt < 0:
            raise InvalidAmountError(f"dt must be a finite non-negative number, got {dt}")
        committed: list[DrinkResult] = []
        for vessel, session in list(self.sessions.items()):
            session.elapsed += dt
            if session.elapsed < session.duration:
                continue
            del self.sessions[vessel]
            session.phase = DrinkPhase.COMMITTED
            result = self._commit(vessel)
            if result is not None:
                committed.append(result)
        return committed

    def take_last_result(self) -> Optional[DrinkResult]:
        result, self._mailbox = self._mailbox, None
        return result

    def peek_last_result(self) -> Optional[DrinkResult]:
        return self._mailbox

    def phase(self, vessel: Hashable) -> DrinkPhase:
        return DrinkPhase.ANIMATING if vessel in self.sessions else DrinkPhase.IDLE

    def progress(self, vessel: Hashable) -> Optional[float]:
        session = self.sessions.get(vessel)
        return session.fraction if session else None

    def cancel_for(self, vessel: Hashable) -> bool:
        return self.sessions.pop(vessel, None) is not None

    def _commit(self, vessel: Hashable) -> Optional[DrinkResult]:
        content = self.registry.get(vessel)
        if content is None or content.is_empty():
            self.logger.info("nothing_to_drink", extra={"details": {"vessel": str(vessel)}})
            return None
        snapshot = content.snapshot()
        result = DrinkResult(
            vessel=vessel,
            volume=snapshot.volume,
            ingredients=snapshot.ingredients,
            color=snapshot.color,
            name=identify(snapshot, catalog=self.catalog),
            abv=calculate_alcohol_content(snapshot, self.catalog),
        )
        content.clear()
        self._mailbox = result
        self.logger.info(
            "drink_committed",
            extra={"details": round_details({"vessel": str(vessel), "name": result.name, "volume": result.volume})},
        )
        self.events.emit(EventKind.DRINK_COMMITTED, vessel, name=result.name, volume=result.volume)
        return result
