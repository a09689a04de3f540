"""Explicit Euler integration and mesh transformation for scene objects."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

import numpy as np

from .geometry import Quaternion, Vec3, add, scale
from .mesh import Mesh, PlyVertex
from .scene import GameObject

DEFAULT_GRAVITY: Vec3 = (0.0, -1.0, 0.0)

_RK6_WEIGHTS = (1.0, 2.0, 3.0, 3.0, 2.0, 1.0)
_IDENTITY = Quaternion()


def rk6(value: Sequence[float], change: Sequence[float], delta: float) -> tuple:
    """Weighted average of six staged increments of ``value`` by ``change``."""
    step = scale(change, 1.0 / 6.0)
    total = tuple(0.0 for _ in value)
    for stage, weight in enumerate(_RK6_WEIGHTS, start=1):
        increment = add(value, scale(step, stage * delta))
        total = add(total, scale(increment, weight))
    return scale(total, 1.0 / 12.0)


def _as_matrix(matrix) -> np.ndarray:
    array = np.asarray(matrix, dtype=float)
    if array.shape != (4, 4):
        raise ValueError(f"expected a 4x4 matrix, got shape {array.shape}")
    return array


def transform_mesh(mesh: Mesh, matrix) -> Mesh:
    """Copy of ``mesh`` with positions moved into world space by ``matrix``.

    Positions are multiplied by the matrix as column vectors; normals by the
    inverse of its transpose, both taken with a fourth component of 1.
    """
    world = _as_matrix(matrix)
    normal_matrix = np.linalg.inv(world.T)

    vertices = []
    for vertex in mesh.vertices:
        px, py, pz, _ = world @ np.array([vertex.x, vertex.y, vertex.z, 1.0])
        nx, ny, nz, _ = normal_matrix @ np.array([vertex.nx, vertex.ny, vertex.nz, 1.0])
        vertices.append(
            PlyVertex(
                float(px), float(py), float(pz),
                float(nx), float(ny), float(nz),
                vertex.u, vertex.v,
            )
        )
    return Mesh(vertices=vertices, triangles=list(mesh.triangles))


class Physics:
    """Moves objects under gravity and their own acceleration."""

    def __init__(self, gravity: Sequence[float] = DEFAULT_GRAVITY) -> None:
        if len(gravity) != 3:
            raise ValueError("gravity must have three components")
        self.gravity: Vec3 = tuple(float(g) for g in gravity)

    def integration_step(self, objects: Iterable[GameObject], delta_time: float) -> None:
        """Advance every object with non-zero inverse mass by ``delta_time``."""
        for obj in objects:
            if obj.inverse_mass == 0.0:
                continue

            obj.velocity = add(obj.velocity, scale(add(self.gravity, obj.accel), delta_time))
            obj.position = add(obj.position, scale(obj.velocity, delta_time))

            if obj.angular_velocity != _IDENTITY:
                target = obj.orientation * obj.angular_velocity
                obj.orientation = obj.orientation.slerp(target, delta_time)