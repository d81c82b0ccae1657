from barkeep.config import EngineSettings, get_settings
from barkeep.domain import ContainerContent, ContentSnapshot, IngredientCatalog, list_known_recipes
from barkeep.engine import AimContext, MixingEngine
from barkeep.errors import (
    BarkeepError,
    InvalidAmountError,
    UnknownIngredientError,
    VesselAlreadyRegisteredError,
    VesselNotRegisteredError,
)
from barkeep.recognition import identify
from barkeep.scheduling import AsyncioScheduler, TickScheduler
from importlib.metadata import PackageNotFoundError, version

__all__ = [
    "AimContext",
    "AsyncioScheduler",
    "BarkeepError",
    "ContainerContent",
    "ContentSnapshot",
    "EngineSettings",
    "IngredientCatalog",
    "InvalidAmountError",
    "MixingEngine",
    "TickScheduler",
    "UnknownIngredientError",
    "VesselAlreadyRegisteredError",
    "VesselNotRegisteredError",
    "get_settings",
    "identify",
    "list_known_recipes",
]

try:
    __version__ = version("barkeep")
except PackageNotFoundError:
    __version__ = "0.0.0"
