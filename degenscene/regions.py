"""Uniform grid of cubic regions that index the triangles of a mesh."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from .geometry import Vec3, add, distance, scale, sub
from .mesh import Mesh

_CELL_OFFSET = 100000
_ID_BASE = 1000000
GRID_EXTENT = 50


@dataclass(frozen=True)
class UnravelledTriangle:
    """Triangle corners and their normals, detached from the mesh."""

    a: Vec3
    b: Vec3
    c: Vec3
    an: Vec3
    bn: Vec3
    cn: Vec3


@dataclass
class WorldRegion:
    """One cube of the grid and the indices of triangles touching it."""

    center: Vec3
    half_length: float
    triangles: set[int] = field(default_factory=set)

    def contains_point(self, point: Sequence[float]) -> bool:
        """True if the point lies inside or on the boundary of the cube."""
        return all(abs(p - c) <= self.half_length for p, c in zip(point, self.center))


class WorldRegions:
    """Grid of regions spanning ``GRID_EXTENT`` cells each way from the origin."""

    def __init__(self, half_length: float) -> None:
        if half_length <= 0.0:
            raise ValueError("half length must be positive")
        self.half_length = float(half_length)
        self.regions: dict[int, WorldRegion] = {}
        self.triangles: list[UnravelledTriangle] = []

    @property
    def _length(self) -> float:
        return 2.0 * self.half_length

    def _cell(self, point: Sequence[float]) -> tuple[int, int, int]:
        h, side = self.half_length, self._length
        return tuple(int(((p + side * _CELL_OFFSET) + h) / side) for p in point)

    @staticmethod
    def _compose(cell: tuple[int, int, int]) -> int:
        x, y, z = cell
        return x * _ID_BASE * _ID_BASE + y * _ID_BASE + z

    @staticmethod
    def _decompose(region_id: int) -> tuple[int, int, int]:
        return (
            region_id // (_ID_BASE * _ID_BASE),
            (region_id // _ID_BASE) % _ID_BASE,
            region_id % _ID_BASE,
        )

    @staticmethod
    def _in_grid(cell: tuple[int, int, int]) -> bool:
        return all(abs(c - _CELL_OFFSET) <= GRID_EXTENT for c in cell)

    def _region_for_cell(self, cell: tuple[int, int, int]) -> WorldRegion | None:
        if not self._in_grid(cell):
            return None
        region_id = self._compose(cell)
        region = self.regions.get(region_id)
        if region is None:
            center = tuple((c - _CELL_OFFSET) * self._length for c in cell)
            region = self.regions[region_id] = WorldRegion(center, self.half_length)
        return region

    def generate_id(self, point: Sequence[float]) -> int:
        """Identifier of the region that holds ``point``."""
        return self._compose(self._cell(point))

    def region_at(self, point: Sequence[float]) -> WorldRegion | None:
        """Region holding ``point``, or None outside the grid."""
        return self._region_for_cell(self._cell(point))

    def _insert(self, point: Sequence[float], index: int) -> None:
        region = self.region_at(point)
        if region is None:
            raise ValueError(f"point {tuple(point)} lies outside the region grid")
        region.triangles.add(index)

    def add_mesh(self, mesh: Mesh) -> None:
        """Append every triangle of the mesh to the triangle list."""
        for tri in mesh.triangles:
            va, vb, vc = mesh.vertices[tri.a], mesh.vertices[tri.b], mesh.vertices[tri.c]
            self.triangles.append(
                UnravelledTriangle(va.position, vb.position, vc.position, va.normal, vb.normal, vc.normal)
            )

    def divide_triangle(
        self,
        index: int,
        a: Sequence[float],
        b: Sequence[float],
        c: Sequence[float],
        max_side_length: float = 1.0,
    ) -> None:
        """Split the triangle until its sides are short, recording ``index`` in each corner's region."""
        if (
            distance(a, b) > max_side_length
            or distance(b, c) > max_side_length
            or distance(c, a) > max_side_length
        ):
            ab = add(scale(sub(b, a), 0.5), a)
            bc = add(scale(sub(c, b), 0.5), b)
            ca = add(scale(sub(a, c), 0.5), c)
            self.divide_triangle(index, a, ab, ca, max_side_length)
            self.divide_triangle(index, ab, b, bc, max_side_length)
            self.divide_triangle(index, ca, bc, c, max_side_length)
            self.divide_triangle(index, ca, ab, bc, max_side_length)
        else:
            for corner in (a, b, c):
                self._insert(corner, index)

    def save(self, path: str | os.PathLike) -> None:
        """Write one ``region-id triangle-index`` line per assignment."""
        with open(path, "w", encoding="ascii") as handle:
            for region_id in sorted(self.regions):
                for index in sorted(self.regions[region_id].triangles):
                    handle.write(f"{region_id} {index}\n")

    def load(self, path: str | os.PathLike) -> None:
        """Read assignments written by :meth:`save`."""
        tokens = Path(path).read_text(encoding="ascii").split()
        if len(tokens) % 2:
            raise ValueError("region file has an unpaired value")
        pairs = iter(tokens)
        for region_token, index_token in zip(pairs, pairs):
            region = self._region_for_cell(self._decompose(int(region_token)))
            if region is None:
                raise ValueError(f"region {region_token} lies outside the grid")
            region.triangles.add(int(index_token))

    def init(self, mesh_name: str, mesh: Mesh, directory: str | os.PathLike = "assets") -> Path:
        """Index a mesh, reusing a cached region file when one exists; returns its path."""
        first = len(self.triangles)
        self.add_mesh(mesh)
        region_file = Path(directory) / f"regions_{mesh_name}.txt"
        if region_file.is_file():
            self.load(region_file)
        else:
            for index in range(first, len(self.triangles)):
                tri = self.triangles[index]
                self.divide_triangle(index, tri.a, tri.b, tri.c, 1.0)
            self.save(region_file)
        return region_file