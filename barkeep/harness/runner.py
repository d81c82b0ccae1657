"""
Drive a ``MixingEngine`` purely through its command surface.

A ``Scenario`` is a list of validated commands. Each command produces one
``StepResult``; failures of a single step are recorded and the script carries
on, so a transcript always covers every command.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from barkeep.config import EngineSettings
from barkeep.domain.content import ContentSnapshot
from barkeep.engine import AimContext, DrinkResult, MixingEngine
from barkeep.errors import BarkeepError
from barkeep.harness.models import (
    AddCommand,
    ContentModel,
    DrinkCommand,
    DrinkModel,
    EmptyCommand,
    InspectCommand,
    PourCommand,
    QuantityModel,
    RegisterCommand,
    Scenario,
    ShakeCommand,
    StepResult,
    StopPourCommand,
    StopShakeCommand,
    TakeDrinkCommand,
    TickCommand,
)
from barkeep.scheduling import TickScheduler

logger = logging.getLogger(__name__)


def content_model(engine: MixingEngine, snapshot: ContentSnapshot) -> ContentModel:
    return ContentModel(
        ingredients=[QuantityModel(ingredient=q.ingredient_id, amount=q.amount) for q in snapshot.ingredients],
        volume=snapshot.volume,
        capacity=snapshot.capacity,
        color=snapshot.color.to_hex_string(),
        name=engine.identify(snapshot),
        abv=engine.calculate_alcohol_content(snapshot),
    )


def drink_model(result: DrinkResult) -> DrinkModel:
    return DrinkModel(
        vessel=str(result.vessel),
        volume=result.volume,
        ingredients=[QuantityModel(ingredient=q.ingredient_id, amount=q.amount) for q in result.ingredients],
        color=result.color.to_hex_string(),
        name=result.name,
        abv=result.abv,
    )


def build_engine(scenario: Scenario) -> MixingEngine:
    settings = EngineSettings(**scenario.settings)
    return MixingEngine(settings=settings, scheduler=TickScheduler(), logger_name=f"barkeep.scenario.{scenario.name}")


def _advance(engine: MixingEngine, dt: float) -> None:
    engine.update(dt)
    if isinstance(engine.scheduler, TickScheduler):
        engine.scheduler.advance(dt)


def run_command(engine: MixingEngine, index: int, command) -> StepResult:
    result = StepResult(index=index, op=command.op)
    if isinstance(command, RegisterCommand):
        engine.register_vessel(command.vessel, command.capacity)
    elif isinstance(command, AddCommand):
        result.amount = engine.add_ingredient(command.vessel, command.ingredient, command.amount)
    elif isinstance(command, PourCommand):
        aim = AimContext.of(**command.aim.model_dump()) if command.aim else None
        total = 0.0
        for _ in range(command.ticks):
            total += engine.pour(command.source, command.destination, command.ingredient, command.dt, aim)
            _advance(engine, command.dt)
        result.amount = total
    elif isinstance(command, StopPourCommand):
        result.amount = float(engine.stop_pour(command.source))
    elif isinstance(command, ShakeCommand):
        for _ in range(command.ticks):
            if engine.shake(command.vessel, command.dt) is None:
                result.ok = False
                break
            _advance(engine, command.dt)
    elif isinstance(command, StopShakeCommand):
        result.ok = engine.stop_shake(command.vessel)
    elif isinstance(command, DrinkCommand):
        result.ok = engine.drink(command.vessel)
    elif isinstance(command, EmptyCommand):
        engine.empty_vessel(command.vessel)
    elif isinstance(command, TickCommand):
        for _ in range(command.ticks):
            _advance(engine, command.dt)
    elif isinstance(command, InspectCommand):
        snapshot = engine.get_content(command.vessel)
        if snapshot is None:
            result.ok = False
        else:
            result.content = content_model(engine, snapshot)
    elif isinstance(command, TakeDrinkCommand):
        drink = engine.get_last_drink_result()
        result.ok = drink is not None
        result.drink = drink_model(drink) if drink is not None else None
    return result


def run_scenario(scenario: Scenario, engine: Optional[MixingEngine] = None) -> List[StepResult]:
    engine = engine or build_engine(scenario)
    results: List[StepResult] = []
    for index, command in enumerate(scenario.commands):
        try:
            results.append(run_command(engine, index, command))
        except BarkeepError as exc:
            logger.warning("scenario_step_failed", extra={"details": {"index": index, "error": str(exc)}})
            results.append(StepResult(index=index, op=command.op, ok=False, error=str(exc)))
    return results
