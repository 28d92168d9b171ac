"""Small vector types and angle helpers used across the engine."""

from __future__ import annotations

import math
from dataclasses import dataclass

MATHS_PI = 3.14159265358979
MATHS_2PI = 2 * MATHS_PI


def radians_to_degrees(x: float) -> float:
    """Convert an angle in radians to degrees."""
    return x * 180.0 / MATHS_PI


def degrees_to_radians(x: float) -> float:
    """Convert an angle in degrees to radians."""
    return x * MATHS_PI / 180.0


def _fmt(value: float) -> str:
    return f"{value:g}"


@dataclass
class Vec3f:
    """Mutable three-component float vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def add(self, other: Vec3f) -> Vec3f:
        self.x += other.x
        self.y += other.y
        self.z += other.z
        return self

    def subtract(self, other: Vec3f) -> Vec3f:
        self.x -= other.x
        self.y -= other.y
        self.z -= other.z
        return self

    def multiply(self, other: Vec3f) -> Vec3f:
        self.x *= other.x
        self.y *= other.y
        self.z *= other.z
        return self

    def divide(self, other: Vec3f) -> Vec3f:
        """Divide component-wise; a zero component raises ZeroDivisionError."""
        self.x /= other.x
        self.y /= other.y
        self.z /= other.z
        return self

    def _copy(self) -> Vec3f:
        return Vec3f(self.x, self.y, self.z)

    def __add__(self, other: Vec3f) -> Vec3f:
        return self._copy().add(other)

    def __sub__(self, other: Vec3f) -> Vec3f:
        return self._copy().subtract(other)

    def __mul__(self, other: Vec3f) -> Vec3f:
        return self._copy().multiply(other)

    def __truediv__(self, other: Vec3f) -> Vec3f:
        return self._copy().divide(other)

    def __iadd__(self, other: Vec3f) -> Vec3f:
        return self.add(other)

    def __isub__(self, other: Vec3f) -> Vec3f:
        return self.subtract(other)

    def __imul__(self, other: Vec3f) -> Vec3f:
        return self.multiply(other)

    def __itruediv__(self, other: Vec3f) -> Vec3f:
        return self.divide(other)

    def __str__(self) -> str:
        return f"Vec3f: ({_fmt(self.x)}, {_fmt(self.y)}, {_fmt(self.z)})"


@dataclass
class Vec2f:
    """Mutable two-component float vector."""

    x: float = 0.0
    y: float = 0.0

    @classmethod
    def from_vec3(cls, vector: Vec3f) -> Vec2f:
        """Take the x and y components of a three-component vector."""
        return cls(vector.x, vector.y)

    def add(self, other: Vec2f) -> Vec2f:
        self.x += other.x
        self.y += other.y
        return self

    def subtract(self, other: Vec2f) -> Vec2f:
        self.x -= other.x
        self.y -= other.y
        return self

    def multiply(self, other: Vec2f) -> Vec2f:
        self.x *= other.x
        self.y *= other.y
        return self

    def divide(self, other: Vec2f) -> Vec2f:
        """Divide component-wise; a zero component raises ZeroDivisionError."""
        self.x /= other.x
        self.y /= other.y
        return self

    def _copy(self) -> Vec2f:
        return Vec2f(self.x, self.y)

    def __add__(self, other: Vec2f | float) -> Vec2f:
        if isinstance(other, (int, float)):
            return Vec2f(self.x + other, self.y + other)
        return self._copy().add(other)

    def __sub__(self, other: Vec2f) -> Vec2f:
        return self._copy().subtract(other)

    def __mul__(self, other: Vec2f | float) -> Vec2f:
        if isinstance(other, (int, float)):
            return Vec2f(self.x * other, self.y * other)
        return self._copy().multiply(other)

    def __truediv__(self, other: Vec2f) -> Vec2f:
        return self._copy().divide(other)

    def __iadd__(self, other: Vec2f) -> Vec2f:
        return self.add(other)

    def __isub__(self, other: Vec2f) -> Vec2f:
        return self.subtract(other)

    def __imul__(self, other: Vec2f) -> Vec2f:
        return self.multiply(other)

    def __itruediv__(self, other: Vec2f) -> Vec2f:
        return self.divide(other)

    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def normalise(self) -> Vec2f:
        length = self.magnitude()
        return Vec2f(self.x / length, self.y / length)

    def distance(self, other: Vec2f) -> float:
        a = self.x - other.x
        b = self.y - other.y
        return math.sqrt(a * a + b * b)

    def dot(self, other: Vec2f) -> float:
        return self.x * other.x + self.y * other.y

    def __str__(self) -> str:
        return f"Vec2f: ({_fmt(self.x)}, {_fmt(self.y)})"