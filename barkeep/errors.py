"""
Exception types raised by the barkeep engine.

Only programmer errors and invalid references raise. Capacity overflows,
empty sources and aim rejections are reported as silent no-ops instead.
"""
from __future__ import annotations


class BarkeepError(Exception):
    """Base class for all errors raised by barkeep."""
    pass


class VesselNotRegisteredError(BarkeepError, KeyError):
    """Raised when an operation references a vessel that was never registered."""

    def __init__(self, vessel) -> None:
        super().__init__(f"Vessel {vessel!r} is not registered")
        self.vessel = vessel


class VesselAlreadyRegisteredError(BarkeepError, ValueError):
    """Raised when a vessel handle is registered twice."""

    def __init__(self, vessel) -> None:
        super().__init__(f"Vessel {vessel!r} is already registered")
        self.vessel = vessel


class UnknownIngredientError(BarkeepError, KeyError):
    """Raised when an ingredient id is missing from the catalog."""

    def __init__(self, ingredient_id: str, available: list[str] | None = None) -> None:
        message = f"Unknown ingredient '{ingredient_id}'"
        if available:
            message += f". Available: {available}"
        super().__init__(message)
        self.ingredient_id = ingredient_id


class InvalidAmountError(BarkeepError, ValueError):
    """Raised for non-positive amounts, capacities or out-of-range fractions."""
    pass
