from __future__ import annotations

import math
from typing import Iterable, NamedTuple


class Vec3(NamedTuple):
    x: float
    y: float
    z: float

    @classmethod
    def of(cls, value: Iterable[float]) -> "Vec3":
        x, y, z = value
        return cls(float(x), float(y), float(z))

    def __sub__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def dot(self, other: "Vec3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalized(self) -> "Vec3":
        n = self.length()
        if n == 0:
            return Vec3(0.0, 0.0, 0.0)
        return Vec3(self.x / n, self.y / n, self.z / n)


def distance(a: Vec3, b: Vec3) -> float:
    return (a - b).length()


def alignment(direction: Vec3, origin: Vec3, target: Vec3) -> float:
    """Cosine of the angle between ``direction`` and the ray ``origin -> target``."""
    return direction.normalized().dot((target - origin).normalized())
