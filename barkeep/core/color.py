from __future__ import annotations

from typing import Iterable, NamedTuple


class Color(NamedTuple):
    """An RGB color with channels in the 0-255 range (floats allowed)."""
    r: float
    g: float
    b: float

    @classmethod
    def from_hex(cls, value: int | str) -> "Color":
        if isinstance(value, str):
            value = int(value.lstrip("#"), 16)
        if value < 0 or value > 0xFFFFFF:
            raise ValueError(f"color out of range: {value:#x}")
        return cls(float((value >> 16) & 0xFF), float((value >> 8) & 0xFF), float(value & 0xFF))

    def to_hex(self) -> int:
        r, g, b = (max(0, min(255, round(c))) for c in self)
        return (r << 16) | (g << 8) | b

    def to_hex_string(self) -> str:
        return f"#{self.to_hex():06x}"


NEUTRAL_COLOR = Color(255.0, 255.0, 255.0)


def blend_colors(weighted: Iterable[tuple[Color, float]], fallback: Color = NEUTRAL_COLOR) -> Color:
    """
    Volume-weighted average of colors, channel by channel.

    Args:
        weighted: Pairs of ``(color, weight)``; weights are ingredient amounts.
        fallback: Returned when the total weight is zero.

    Returns:
        The blended ``Color``.
    """
    r = g = b = 0.0
    total = 0.0
    for color, weight in weighted:
        r += color.r * weight
        g += color.g * weight
        b += color.b * weight
        total += weight
    if total <= 0:
        return fallback
    return Color(r / total, g / total, b / total)
