"""
Pouring: moving liquid from a bottle or another vessel into a vessel.

Each source handle has at most one pour session. A session is Idle until a
tick actually moves liquid, stays Pouring while ticks keep arriving, and
returns to Idle on an explicit stop or once the destination is full. After a
stop the progress readout stays available for a grace period, scheduled on
the host's ``Scheduler``.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Hashable, Iterable, Optional

from barkeep.config import EngineSettings
from barkeep.core.vector import Vec3, alignment, distance
from barkeep.domain.content import ContainerContent
from barkeep.domain.ingredients import IngredientCatalog
from barkeep.engine.events import EventBus, EventKind
from barkeep.engine.registry import VesselRegistry
from barkeep.errors import InvalidAmountError
from barkeep.logging import round_details
from barkeep.scheduling import Scheduler, TimerHandle


class PourState(str, Enum):
    IDLE = "idle"
    POURING = "pouring"


@dataclass(frozen=True)
class AimContext:
    """
    Where the operator is looking while pouring.

    Attributes:
        view_origin: Camera position.
        view_direction: Camera forward vector (need not be normalised).
        target_position: Position of the destination vessel.
        source_position: Position of the pouring bottle or vessel; distance is
            measured from here, or from ``view_origin`` when omitted.
    """
    view_origin: Vec3
    view_direction: Vec3
    target_position: Vec3
    source_position: Optional[Vec3] = None

    @classmethod
    def of(
        cls,
        view_origin: Iterable[float],
        view_direction: Iterable[float],
        target_position: Iterable[float],
        source_position: Optional[Iterable[float]] = None,
    ) -> "AimContext":
        return cls(
            view_origin=Vec3.of(view_origin),
            view_direction=Vec3.of(view_direction),
            target_position=Vec3.of(target_position),
            source_position=Vec3.of(source_position) if source_position is not None else None,
        )

    @property
    def alignment(self) -> float:
        return alignment(self.view_direction, self.view_origin, self.target_position)

    @property
    def distance(self) -> float:
        origin = self.source_position if self.source_position is not None else self.view_origin
        return distance(origin, self.target_position)


@dataclass
class PourSession:
    source: Hashable
    destination: Hashable
    ingredient_id: Optional[str]
    started_at: float
    poured: float = 0.0
    state: PourState = PourState.POURING


@dataclass(frozen=True)
class PourProgress:
    """Progress readout for the most recent pour from one source."""
    source: Hashable
    destination: Hashable
    destination_volume: float
    capacity: float
    poured: float
    active: bool

    @property
    def fill_fraction(self) -> float:
        return min(1.0, self.destination_volume / self.capacity) if self.capacity else 0.0

    @property
    def poured_fraction(self) -> float:
        return min(1.0, self.poured / self.capacity) if self.capacity else 0.0


class TransferEngine:
    def __init__(
        self,
        registry: VesselRegistry,
        settings: EngineSettings,
        scheduler: Scheduler,
        catalog: IngredientCatalog,
        events: EventBus,
        logger: logging.Logger,
        clock: Callable[[], float] = lambda: 0.0,
    ):
        self.registry = registry
        self.settings = settings
        self.scheduler = scheduler
        self.catalog = catalog
        self.events = events
        self.logger = logger
        self.clock = clock
        self.sessions: Dict[Hashable, PourSession] = {}
        self._progress: Dict[Hashable, PourProgress] = {}
        self._hide_timers: Dict[Hashable, TimerHandle] = {}

    # --- gating ---
    def aim_accepts(self, aim: AimContext) -> bool:
        return (
            aim.alignment >= self.settings.aim_min_alignment
            and aim.distance <= self.settings.aim_max_distance
        )

    # --- commands ---
    def pour(
        self,
        source: Hashable,
        destination: Hashable,
        ingredient_id: Optional[str],
        dt: float,
        aim: Optional[AimContext] = None,
    ) -> float:
        """
        Advance a pour by one tick.

        With ``ingredient_id`` the source is an unlimited bottle of that
        ingredient; without it the source must be a registered vessel whose
        contents are drawn proportionally.

        Returns:
            The volume that reached the destination this tick.

        Raises:
            VesselNotRegisteredError: For an unregistered destination, or an
                unregistered vessel source.
            UnknownIngredientError: For a bottle of an unknown ingredient.
            InvalidAmountError: For a NaN or infinite ``dt``.
        """
        dest = self.registry.require(destination)
        if ingredient_id is not None:
            info = self.catalog.require(ingredient_id)
            src = None
        else:
            info = None
            src = self.registry.require(source)

        if not math.isfinite(dt):
            raise InvalidAmountError(f"dt must be finite, got {dt}")
        if dt <= 0:
            return 0.0
        if source == destination:
            self.logger.debug("pour_ignored_self", extra={"details": {"vessel": str(source)}})
            return 0.0
        if dest.is_full():
            self._finish_if_active(source, reason="full")
            return 0.0
        if aim is not None and not self.aim_accepts(aim):
            self.logger.debug(
                "pour_rejected_aim",
                extra={"details": round_details({"alignment": aim.alignment, "distance": aim.distance})},
            )
            return 0.0

        if src is None:
            added = dest.add_ingredient(info.id, self.settings.pour_rate * dt, info.color)
        else:
            added = self._transfer_between(src, dest, dt)
        if added <= 0:
            return 0.0

        session = self._ensure_session(source, destination, ingredient_id)
        session.poured += added
        self._publish_progress(session, dest, active=True)
        self.logger.debug(
            "pour_tick",
            extra={"details": round_details({"source": str(source), "added": added, "volume": dest.volume})},
        )
        if dest.is_full():
            self._finish_if_active(source, reason="full")
        return added

    def stop(self, source: Optional[Hashable] = None) -> int:
        """
        Stop one source's pour, or every active pour when ``source`` is None.

        Returns:
            The number of sessions stopped.
        """
        keys = list(self.sessions) if source is None else [source]
        stopped = 0
        for key in keys:
            if self._finish_if_active(key, reason="released"):
                stopped += 1
        return stopped

    def cancel_for(self, vessel: Hashable) -> None:
        """Drop sessions and readouts that reference a vessel, without a grace period."""
        for key, session in list(self.sessions.items()):
            if vessel in (session.source, session.destination):
                del self.sessions[key]
        for key, progress in list(self._progress.items()):
            if vessel in (progress.source, progress.destination):
                self._clear_progress(key)

    # --- queries ---
    def is_pouring(self, source: Optional[Hashable] = None) -> bool:
        if source is None:
            return bool(self.sessions)
        return source in self.sessions

    def state(self, source: Hashable) -> PourState:
        session = self.sessions.get(source)
        return session.state if session else PourState.IDLE

    def progress(self, source: Hashable) -> Optional[PourProgress]:
        return self._progress.get(source)

    def all_progress(self) -> list[PourProgress]:
        return list(self._progress.values())

    # --- internals ---
    def _transfer_between(self, src: ContainerContent, dest: ContainerContent, dt: float) -> float:
        available = src.volume
        if available <= 0:
            return 0.0
        amount = min(self.settings.pour_rate * dt, available, dest.remaining)
        if amount <= 0:
            return 0.0
        added = 0.0
        for q in src.remove_fraction(amount / available):
            added += dest.add_ingredient(q.ingredient_id, q.amount, q.color)
        return added

    def _ensure_session(self, source: Hashable, destination: Hashable, ingredient_id: Optional[str]) -> PourSession:
        session = self.sessions.get(source)
        if session is not None and session.destination != destination:
            self._finish_if_active(source, reason="retargeted")
            session = None
        if session is None:
            timer = self._hide_timers.pop(source, None)
            if timer is not None:
                timer.cancel()
            session = PourSession(
                source=source,
                destination=destination,
                ingredient_id=ingredient_id,
                started_at=self.clock(),
            )
            self.sessions[source] = session
            self.logger.info(
                "pour_started",
                extra={"details": {"source": str(source), "destination": str(destination), "ingredient": ingredient_id}},
            )
            self.events.emit(EventKind.POUR_STARTED, source, destination=destination, ingredient=ingredient_id)
        return session

    def _finish_if_active(self, source: Hashable, reason: str) -> bool:
        session = self.sessions.pop(source, None)
        if session is None:
            return False
        session.state = PourState.IDLE
        dest = self.registry.get(session.destination)
        if dest is not None:
            self._publish_progress(session, dest, active=False)
        self.logger.info(
            "pour_stopped",
            extra={"details": round_details({"source": str(source), "poured": session.poured, "reason": reason})},
        )
        self.events.emit(EventKind.POUR_STOPPED, source, poured=session.poured, reason=reason)
        self._schedule_hide(source)
        return True

    def _publish_progress(self, session: PourSession, dest: ContainerContent, active: bool) -> None:
        self._progress[session.source] = PourProgress(
            source=session.source,
            destination=session.destination,
            destination_volume=dest.volume,
            capacity=dest.capacity,
            poured=session.poured,
            active=active,
        )

    def _schedule_hide(self, source: Hashable) -> None:
        previous = self._hide_timers.pop(source, None)
        if previous is not None:
            previous.cancel()

        def hide() -> None:
            if self._hide_timers.get(source) is timer:
                self._clear_progress(source)
                self.events.emit(EventKind.PROGRESS_HIDDEN, source)

        timer = self.scheduler.call_later(self.settings.progress_hide_delay, hide)
        self._hide_timers[source] = timer

    def _clear_progress(self, source: Hashable) -> None:
        self._progress.pop(source, None)
        timer = self._hide_timers.pop(source, None)
        if timer is not None:
            timer.cancel()
