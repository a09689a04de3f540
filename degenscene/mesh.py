"""Triangle meshes and an ASCII PLY reader."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Iterator

from .geometry import Vec3, normalize


@dataclass
class PlyVertex:
    """Vertex with position, normal and texture coordinates."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    nx: float = 0.0
    ny: float = 0.0
    nz: float = 0.0
    u: float = 0.0
    v: float = 0.0

    @property
    def position(self) -> Vec3:
        return (self.x, self.y, self.z)

    @property
    def normal(self) -> Vec3:
        return (self.nx, self.ny, self.nz)


@dataclass(frozen=True)
class PlyTriangle:
    """Three vertex indices."""

    a: int
    b: int
    c: int


@dataclass
class Mesh:
    """Vertices and the triangles that index them."""

    vertices: list[PlyVertex] = field(default_factory=list)
    triangles: list[PlyTriangle] = field(default_factory=list)

    def triangle_points(self, index: int) -> tuple[Vec3, Vec3, Vec3]:
        """Positions of the three corners of a triangle."""
        tri = self.triangles[index]
        return (
            self.vertices[tri.a].position,
            self.vertices[tri.b].position,
            self.vertices[tri.c].position,
        )


def _skip_past(tokens: Iterator[str], word: str) -> None:
    for token in tokens:
        if token == word:
            return
    raise ValueError(f"PLY header has no {word!r}")


def _take(tokens: Iterator[str], kind, what: str):
    try:
        return kind(next(tokens))
    except StopIteration:
        raise ValueError(f"PLY data ends before {what}") from None


def load_ply(path: str | os.PathLike) -> Mesh:
    """Read an ASCII PLY file with x y z nx ny nz u v vertices."""
    with open(path, encoding="ascii", errors="replace") as handle:
        tokens = iter(handle.read().split())

    _skip_past(tokens, "vertex")
    vertex_count = _take(tokens, int, "the vertex count")
    _skip_past(tokens, "face")
    face_count = _take(tokens, int, "the face count")
    _skip_past(tokens, "end_header")

    mesh = Mesh()
    for _ in range(vertex_count):
        x, y, z, nx, ny, nz, u, v = (_take(tokens, float, "all vertices") for _ in range(8))
        try:
            nx, ny, nz = normalize((nx, ny, nz))
        except ValueError:
            pass
        mesh.vertices.append(PlyVertex(x, y, z, nx, ny, nz, u, v))

    for _ in range(face_count):
        _take(tokens, int, "all faces")
        a, b, c = (_take(tokens, int, "all faces") for _ in range(3))
        mesh.triangles.append(PlyTriangle(a, b, c))

    return mesh