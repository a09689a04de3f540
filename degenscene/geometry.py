"""Small vector helpers and a quaternion type for scene orientation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

Vec3 = Tuple[float, float, float]
Vec4 = Tuple[float, float, float, float]

_SLERP_EPSILON = 1.1920929e-07


def add(a: Sequence[float], b: Sequence[float]) -> tuple:
    """Component-wise sum of two vectors."""
    return tuple(x + y for x, y in zip(a, b, strict=True))


def sub(a: Sequence[float], b: Sequence[float]) -> tuple:
    """Component-wise difference ``a - b``."""
    return tuple(x - y for x, y in zip(a, b, strict=True))


def scale(v: Sequence[float], factor: float) -> tuple:
    """Vector multiplied by a scalar."""
    return tuple(x * factor for x in v)


def _dot(a: Sequence[float], b: Sequence[float]) -> float:
    return sum(x * y for x, y in zip(a, b, strict=True))


def length(v: Sequence[float]) -> float:
    """Euclidean length of a vector."""
    return math.sqrt(_dot(v, v))


def distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance between two points."""
    return length(sub(a, b))


def normalize(v: Sequence[float]) -> tuple:
    """Unit vector in the direction of ``v``; a zero vector has no direction."""
    n = length(v)
    if n == 0.0:
        raise ValueError("cannot normalise a zero-length vector")
    return scale(v, 1.0 / n)


@dataclass(frozen=True)
class Quaternion:
    """Rotation quaternion stored as (w, x, y, z)."""

    w: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def _components(self) -> Vec4:
        return (self.w, self.x, self.y, self.z)

    def __mul__(self, other: Quaternion) -> Quaternion:
        if not isinstance(other, Quaternion):
            return NotImplemented
        w1, x1, y1, z1 = self._components()
        w2, x2, y2, z2 = other._components()
        return Quaternion(
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 + y1 * w2 + z1 * x2 - x1 * z2,
            w1 * z2 + z1 * w2 + x1 * y2 - y1 * x2,
        )

    def normalized(self) -> Quaternion:
        """Unit-length copy; a zero quaternion becomes the identity."""
        n = length(self._components())
        if n <= 0.0:
            return Quaternion()
        return Quaternion(self.w / n, self.x / n, self.y / n, self.z / n)

    def to_euler(self) -> Vec3:
        """Euler angles (pitch, yaw, roll) in radians."""
        w, x, y, z = self._components()
        roll = math.atan2(2.0 * (x * y + w * z), w * w + x * x - y * y - z * z)

        py = 2.0 * (y * z + w * x)
        px = w * w - x * x - y * y + z * z
        if abs(px) < _SLERP_EPSILON and abs(py) < _SLERP_EPSILON:
            pitch = 2.0 * math.atan2(x, w)
        else:
            pitch = math.atan2(py, px)

        yaw = math.asin(max(-1.0, min(1.0, -2.0 * (x * z - w * y))))
        return (pitch, yaw, roll)

    def slerp(self, other: Quaternion, t: float) -> Quaternion:
        """Spherical interpolation along the shortest arc."""
        a = self._components()
        b = other._components()
        cos_theta = _dot(a, b)
        if cos_theta < 0.0:
            b = scale(b, -1.0)
            cos_theta = -cos_theta

        if cos_theta > 1.0 - _SLERP_EPSILON:
            mixed = add(scale(a, 1.0 - t), scale(b, t))
        else:
            angle = math.acos(cos_theta)
            sin_angle = math.sin(angle)
            mixed = scale(
                add(scale(a, math.sin((1.0 - t) * angle)), scale(b, math.sin(t * angle))),
                1.0 / sin_angle,
            )
        return Quaternion(*mixed)


def quaternion_from_euler(angles: Sequence[float]) -> Quaternion:
    """Quaternion from Euler angles (pitch, yaw, roll) given in radians."""
    pitch, yaw, roll = angles
    cx, cy, cz = math.cos(pitch * 0.5), math.cos(yaw * 0.5), math.cos(roll * 0.5)
    sx, sy, sz = math.sin(pitch * 0.5), math.sin(yaw * 0.5), math.sin(roll * 0.5)
    return Quaternion(
        cx * cy * cz + sx * sy * sz,
        sx * cy * cz - cx * sy * sz,
        cx * sy * cz + sx * cy * sz,
        cx * cy * sz - sx * sy * cz,
    )