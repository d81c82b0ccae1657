"""
Tick-driven simulation of pouring, shaking and drinking.

``MixingEngine`` is the entry point; the component engines are exposed for
hosts that want finer control.
"""
from barkeep.engine.agitation import AgitationEngine, AgitationSession
from barkeep.engine.consumption import ConsumptionStateMachine, DrinkPhase, DrinkResult, DrinkSession
from barkeep.engine.events import EngineEvent, EventBus, EventKind
from barkeep.engine.mixer import ContainerReport, MixingEngine
from barkeep.engine.registry import VesselRegistry
from barkeep.engine.transfer import AimContext, PourProgress, PourSession, PourState, TransferEngine

__all__ = [
    "AgitationEngine",
    "AgitationSession",
    "AimContext",
    "ConsumptionStateMachine",
    "ContainerReport",
    "DrinkPhase",
    "DrinkResult",
    "DrinkSession",
    "EngineEvent",
    "EventBus",
    "EventKind",
    "MixingEngine",
    "PourProgress",
    "PourSession",
    "PourState",
    "TransferEngine",
    "VesselRegistry",
]
