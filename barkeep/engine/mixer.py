"""
The mixing engine facade.

``MixingEngine`` owns the vessel registry and wires the transfer, agitation
and consumption components to one settings object, one scheduler and one
logger. Every command runs to completion synchronously; the host drives time
through ``dt`` arguments and ``update``.
"""
from __future__ import annotations

import itertools
import math
from dataclasses import dataclass
from typing import Hashable, Optional, Tuple

from barkeep.config import EngineSettings, get_settings
from barkeep.domain.content import (
    ContentSnapshot,
    HasIngredients,
    calculate_alcohol_content,
    describe_ingredients,
)
from barkeep.domain.ingredients import DEFAULT_CATALOG, IngredientCatalog
from barkeep.domain.recipes import RecipeDefinition, list_known_recipes
from barkeep.engine.agitation import AgitationEngine, AgitationSession
from barkeep.engine.consumption import ConsumptionStateMachine, DrinkPhase, DrinkResult
from barkeep.engine.events import EventBus, Listener
from barkeep.engine.registry import VesselRegistry
from barkeep.engine.transfer import AimContext, PourProgress, TransferEngine
from barkeep.errors import InvalidAmountError
from barkeep.logging import create_logger, ring_buffer
from barkeep.recognition import identify
from barkeep.scheduling import Scheduler, TickScheduler

_engine_ids = itertools.count(1)


@dataclass(frozen=True)
class ContainerReport:
    """Summary of a vessel for an info panel."""
    name: Optional[str]
    ingredients: list[tuple[str, float]]
    volume: float
    capacity: float
    abv: float
    color_hex: str


class MixingEngine:
    def __init__(
        self,
        settings: Optional[EngineSettings] = None,
        scheduler: Optional[Scheduler] = None,
        catalog: IngredientCatalog = DEFAULT_CATALOG,
        logger_name: str = "barkeep.engine",
    ) -> None:
        self.settings = settings or get_settings()
        self.scheduler = scheduler if scheduler is not None else TickScheduler()
        self.catalog = catalog
        # one logger per instance so engines never share an event log
        self.logger = create_logger(f"{logger_name}.{next(_engine_ids)}", self.settings.log_ring_size)
        self.clock = 0.0

        self.registry = VesselRegistry(prune_epsilon=self.settings.prune_epsilon)
        self.bus = EventBus(self.logger)
        self.transfer = TransferEngine(
            self.registry,
            self.settings,
            self.scheduler,
            self.catalog,
            self.bus,
            self.logger,
            clock=lambda: self.clock,
        )
        self.agitation = AgitationEngine(self.registry, self.settings, self.bus, self.logger)
        self.consumption = ConsumptionStateMachine(
            self.registry,
            self.settings,
            self.catalog,
            self.bus,
            self.logger,
            clock=lambda: self.clock,
        )

    # --- vessel lifecycle ---
    def register_vessel(self, vessel: Hashable, capacity: Optional[float] = None) -> None:
        capacity = self.settings.default_capacity if capacity is None else capacity
        self.registry.register(vessel, capacity)
        self.logger.info("vessel_registered", extra={"details": {"vessel": str(vessel), "capacity": capacity}})

    def deregister_vessel(self, vessel: Hashable) -> None:
        self.registry.deregister(vessel)
        self.transfer.cancel_for(vessel)
        self.agitation.stop(vessel)
        self.consumption.cancel_for(vessel)
        self.logger.info("vessel_deregistered", extra={"details": {"vessel": str(vessel)}})

    def is_registered(self, vessel: Hashable) -> bool:
        return vessel in self.registry

    # --- commands ---
    def add_ingredient(self, vessel: Hashable, ingredient_id: str, amount: float) -> float:
        """Add a measured amount directly; the excess over capacity is dropped."""
        content = self.registry.require(vessel)
        info = self.catalog.require(ingredient_id)
        return content.add_ingredient(info.id, amount, info.color)

    def pour(
        self,
        source: Hashable,
        destination: Hashable,
        ingredient_id: Optional[str] = None,
        dt: float = 0.0,
        aim: Optional[AimContext] = None,
    ) -> float:
        added = self.transfer.pour(source, destination, ingredient_id, dt, aim)
        if ingredient_id is None and added > 0 and self.registry.require(source).is_empty():
            self.agitation.stop(source)
        return added

    def stop_pour(self, source: Optional[Hashable] = None) -> int:
        return self.transfer.stop(source)

    def shake(self, vessel: Hashable, dt: float) -> Optional[AgitationSession]:
        return self.agitation.shake(vessel, dt)

    def stop_shake(self, vessel: Hashable) -> bool:
        self.registry.require(vessel)
        return self.agitation.stop(vessel)

    def drink(self, vessel: Hashable) -> bool:
        return self.consumption.drink(vessel) is not None

    def empty_vessel(self, vessel: Hashable) -> None:
        self.registry.require(vessel).clear()
        self.agitation.stop(vessel)
        self.logger.info("vessel_emptied", extra={"details": {"vessel": str(vessel)}})

    def update(self, dt: float) -> list[DrinkResult]:
        """Advance the engine clock and any running drink animations."""
        if not math.isfinite(dt) or dt < 0:
            raise InvalidAmountError(f"dt must be a finite non-negative number, got {dt}")
        self.clock += dt
        committed = self.consumption.update(dt)
        for result in committed:
            self.agitation.stop(result.vessel)
        return committed

    # --- presentation queries ---
    def get_content(self, vessel: Hashable) -> Optional[ContentSnapshot]:
        content = self.registry.get(vessel)
        return content.snapshot() if content is not None else None

    def is_full(self, vessel: Hashable) -> bool:
        return self.registry.require(vessel).is_full()

    def is_empty(self, vessel: Hashable) -> bool:
        return self.registry.require(vessel).is_empty()

    def identify(self, content: HasIngredients) -> Optional[str]:
        return identify(content, catalog=self.catalog)

    def calculate_alcohol_content(self, content: HasIngredients) -> float:
        return calculate_alcohol_content(content, self.catalog)

    def get_last_drink_result(self) -> Optional[DrinkResult]:
        return self.consumption.take_last_result()

    def list_known_recipes(self) -> list[RecipeDefinition]:
        return list(list_known_recipes())

    def pour_progress(self, source: Hashable) -> Optional[PourProgress]:
        return self.transfer.progress(source)

    def is_pouring(self, source: Optional[Hashable] = None) -> bool:
        return self.transfer.is_pouring(source)

    def drink_phase(self, vessel: Hashable) -> DrinkPhase:
        return self.consumption.phase(vessel)

    def drink_progress(self, vessel: Hashable) -> Optional[float]:
        return self.consumption.progress(vessel)

    def wobble(self, vessel: Hashable) -> Tuple[float, float]:
        return self.agitation.wobble(vessel)

    def describe(self, vessel: Hashable) -> ContainerReport:
        snapshot = self.registry.require(vessel).snapshot()
        return ContainerReport(
            name=self.identify(snapshot),
            ingredients=describe_ingredients(snapshot, self.catalog),
            volume=snapshot.volume,
            capacity=snapshot.capacity,
            abv=self.calculate_alcohol_content(snapshot),
            color_hex=snapshot.color.to_hex_string(),
        )

    # --- observability ---
    def subscribe(self, listener: Listener):
        return self.bus.subscribe(listener)

    def events(self) -> list[dict]:
        handler = ring_buffer(self.logger)
        return handler.get_events() if handler else []
