from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, Field

Vector = Tuple[float, float, float]


class AimModel(BaseModel):
    view_origin: Vector
    view_direction: Vector
    target_position: Vector
    source_position: Optional[Vector] = None


class RegisterCommand(BaseModel):
    op: Literal["register"]
    vessel: str
    capacity: Optional[float] = Field(None, gt=0)


class AddCommand(BaseModel):
    op: Literal["add"]
    vessel: str
    ingredient: str
    amount: float = Field(gt=0)


class PourCommand(BaseModel):
    op: Literal["pour"]
    source: str
    destination: str
    ingredient: Optional[str] = None
    dt: float = Field(ge=0)
    ticks: int = Field(1, ge=1)
    aim: Optional[AimModel] = None


class StopPourCommand(BaseModel):
    op: Literal["stop_pour"]
    source: Optional[str] = None


class ShakeCommand(BaseModel):
    op: Literal["shake"]
    vessel: str
    dt: float = Field(ge=0)
    ticks: int = Field(1, ge=1)


class StopShakeCommand(BaseModel):
    op: Literal["stop_shake"]
    vessel: str


class DrinkCommand(BaseModel):
    op: Literal["drink"]
    vessel: str


class EmptyCommand(BaseModel):
    op: Literal["empty"]
    vessel: str


class TickCommand(BaseModel):
    op: Literal["tick"]
    dt: float = Field(ge=0)
    ticks: int = Field(1, ge=1)


class InspectCommand(BaseModel):
    op: Literal["inspect"]
    vessel: str


class TakeDrinkCommand(BaseModel):
    op: Literal["take_drink"]


Command = Annotated[
    Union[
        RegisterCommand,
        AddCommand,
        PourCommand,
        StopPourCommand,
        ShakeCommand,
        StopShakeCommand,
        DrinkCommand,
        EmptyCommand,
        TickCommand,
        InspectCommand,
        TakeDrinkCommand,
    ],
    Field(discriminator="op"),
]


class Scenario(BaseModel):
    name: str = "scenario"
    settings: Dict[str, Any] = Field(default_factory=dict)
    commands: List[Command] = Field(default_factory=list)


class QuantityModel(BaseModel):
    ingredient: str
    amount: float


class ContentModel(BaseModel):
    ingredients: List[QuantityModel] = Field(default_factory=list)
    volume: float
    capacity: float
    color: str
    name: Optional[str] = None
    abv: float = 0.0


class DrinkModel(BaseModel):
    vessel: str
    volume: float
    ingredients: List[QuantityModel] = Field(default_factory=list)
    color: str
    name: Optional[str] = None
    abv: float = 0.0


class StepResult(BaseModel):
    index: int
    op: str
    ok: bool = True
    amount: Optional[float] = None
    content: Optional[ContentModel] = None
    drink: Optional[DrinkModel] = None
    error: Optional[str] = None
