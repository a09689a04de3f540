"""Scene entities: game objects, lights and camera state."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Sequence

from .geometry import Quaternion, Vec3, Vec4, quaternion_from_euler

NUMBER_OF_TEXTURES = 4

_ORIGIN: Vec3 = (0.0, 0.0, 0.0)
_WHITE: Vec4 = (1.0, 1.0, 1.0, 1.0)


class ShapeType(IntEnum):
    """Physics shape used for collision tests."""

    UNKNOWN = 0
    SPHERE = 1
    MESH = 2
    POINTSET = 3


class LightType(IntEnum):
    """Kind of light source."""

    POINT = 0
    SPOT = 1
    DIRECTIONAL = 2


@dataclass
class GameObject:
    """A drawable, optionally physical object in the scene."""

    mesh_name: str = ""
    friendly_name: str = ""
    position: Vec3 = _ORIGIN
    velocity: Vec3 = _ORIGIN
    accel: Vec3 = _ORIGIN
    scale: float = 1.0
    inverse_mass: float = 0.0
    physics_shape_type: ShapeType = ShapeType.UNKNOWN
    aabb_min: Vec3 = _ORIGIN
    aabb_max: Vec3 = _ORIGIN
    radius: float = 0.0
    test_points: list[Vec3] = field(default_factory=list)
    object_colour: Vec4 = _WHITE
    diffuse_colour: Vec4 = _WHITE
    specular_colour: Vec4 = _WHITE
    debug_colour: Vec4 = _WHITE
    textures: list[str] = field(default_factory=lambda: [""] * NUMBER_OF_TEXTURES)
    texture_ratio: list[float] = field(default_factory=lambda: [0.0] * NUMBER_OF_TEXTURES)
    do_not_light: bool = False
    is_imposter: bool = False
    use_diffuse: bool = False
    is_wireframe: bool = False
    is_visible: bool = True
    disable_depth_test: bool = False
    disable_depth_write: bool = False
    orientation: Quaternion = field(default_factory=Quaternion)
    angular_velocity: Quaternion = field(default_factory=Quaternion)
    children: list[GameObject] = field(default_factory=list)

    def set_orientation(self, angles: Sequence[float]) -> None:
        """Set orientation from Euler angles in degrees."""
        self.orientation = quaternion_from_euler(tuple(math.radians(a) for a in angles))

    def euler_angles(self) -> Vec3:
        """Orientation as Euler angles in degrees."""
        return tuple(math.degrees(a) for a in self.orientation.to_euler())


@dataclass
class Light:
    """A light source and its attenuation settings."""

    position: Vec3 = _ORIGIN
    direction: Vec3 = _ORIGIN
    diffuse: Vec3 = (1.0, 1.0, 1.0)
    specular: Vec4 = _WHITE
    const_atten: float = 0.0
    linear_atten: float = 0.0
    quadratic_atten: float = 0.0
    cutoff_distance: float = math.inf
    light_type: LightType = LightType.POINT
    spot_inner_angle: float = 0.0
    spot_outer_angle: float = 0.0
    is_on: bool = True


@dataclass
class CameraState:
    """Position and aim of the free camera."""

    position: Vec3 = _ORIGIN
    pitch: float = 0.0
    yaw: float = 0.0
    target: Vec3 = _ORIGIN
    lock_target: bool = False