"""Reading and writing lights, camera and mesh lists as XML files."""

from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterable, MutableMapping

from .mesh import Mesh, load_ply
from .objectfile import (
    _bool,
    _float,
    _format_float,
    _int,
    _required_child,
    _set_vector,
    _vector,
)
from .scene import CameraState, Light, LightType

logger = logging.getLogger(__name__)

LIGHTS_ROOT = "LIGHTS"
LIGHT_TAG = "Light"
CAMERA_ROOT = "CAMERA"
CAMERA_TAG = "Camera"
MESHES_ROOT = "MESHES"
MESH_TAG = "Mesh"

_XYZ = ("x", "y", "z")
_RGB = ("r", "g", "b")
_RGBA = ("r", "g", "b", "a")

_LIGHT_SCALARS = (
    ("ConstAtten", "const_atten"),
    ("LinearAtten", "linear_atten"),
    ("QuadraticAtten", "quadratic_atten"),
)
_LIGHT_SPOT_ANGLES = (
    ("SpotInnerAngle", "spot_inner_angle"),
    ("SpotOuterAngle", "spot_outer_angle"),
)


def _root(path: str | os.PathLike, tag: str) -> ET.Element:
    root = ET.parse(path).getroot()
    if root.tag != tag:
        raise ValueError(f"expected <{tag}> root element, found <{root.tag}>")
    return root


def _entries(root: ET.Element, tag: str) -> list[ET.Element]:
    """Elements from the first ``tag`` child up to the last child."""
    elements = list(root)
    start = next((i for i, el in enumerate(elements) if el.tag == tag), len(elements))
    return elements[start:]


def _write(path: str | os.PathLike, root: ET.Element) -> None:
    tree = ET.ElementTree(root)
    ET.indent(tree)
    tree.write(path, encoding="utf-8", xml_declaration=False)


def _parse_light(element: ET.Element) -> Light:
    light = Light()

    node = element.find("Direction")
    if node is not None:
        light.direction = _vector(node, _XYZ)
    node = element.find("Position")
    if node is not None:
        light.position = _vector(node, _XYZ)
    node = element.find("Diffuse")
    if node is not None:
        light.diffuse = _vector(node, _RGB)
    node = element.find("Specular")
    if node is not None:
        light.specular = _vector(node, _RGBA)

    for tag, attr in _LIGHT_SCALARS:
        node = element.find(tag)
        if node is not None:
            setattr(light, attr, _float(node, "f"))

    # A stored cut-off distance is validated but never applied.
    node = element.find("CutOffDistance")
    if node is not None:
        _float(node, "f")

    node = element.find("LightType")
    if node is not None:
        light.light_type = LightType(_int(node, "type"))

    for tag, attr in _LIGHT_SPOT_ANGLES:
        node = element.find(tag)
        if node is not None:
            setattr(light, attr, _float(node, "f"))

    node = element.find("IsLightOn")
    if node is not None:
        light.is_on = _bool(node, "b")

    return light


def load_lights(path: str | os.PathLike) -> list[Light]:
    """Read every light listed in a ``LIGHTS`` file."""
    root = _root(path, LIGHTS_ROOT)
    return [_parse_light(el) for el in _entries(root, LIGHT_TAG)]


def _light_element(light: Light) -> ET.Element:
    element = ET.Element(LIGHT_TAG)
    _set_vector(ET.SubElement(element, "Direction"), _XYZ, light.direction)
    _set_vector(ET.SubElement(element, "Position"), _XYZ, light.position)
    _set_vector(ET.SubElement(element, "Diffuse"), _RGB, light.diffuse)
    _set_vector(ET.SubElement(element, "Specular"), _RGBA, light.specular)
    for tag, attr in _LIGHT_SCALARS:
        ET.SubElement(element, tag).set("f", _format_float(getattr(light, attr)))
    ET.SubElement(element, "LightType").set("type", str(int(light.light_type)))
    for tag, attr in _LIGHT_SPOT_ANGLES:
        ET.SubElement(element, tag).set("f", _format_float(getattr(light, attr)))
    ET.SubElement(element, "IsLightOn").set("b", "true" if light.is_on else "false")
    return element


def save_lights(path: str | os.PathLike, lights: Iterable[Light]) -> None:
    """Write lights to a ``LIGHTS`` file."""
    root = ET.Element(LIGHTS_ROOT)
    root.extend(_light_element(light) for light in lights)
    _write(path, root)


def load_camera(path: str | os.PathLike) -> CameraState:
    """Read the camera stored in a ``CAMERA`` file."""
    root = _root(path, CAMERA_ROOT)
    element = _required_child(root, CAMERA_TAG)
    return CameraState(
        position=_vector(_required_child(element, "Position"), _XYZ),
        pitch=_float(_required_child(element, "Pitch"), "f"),
        yaw=_float(_required_child(element, "Yaw"), "f"),
        target=_vector(_required_child(element, "Target"), _XYZ),
        lock_target=_bool(_required_child(element, "LockTarget"), "b"),
    )


def save_camera(path: str | os.PathLike, camera: CameraState) -> None:
    """Write the camera to a ``CAMERA`` file."""
    root = ET.Element(CAMERA_ROOT)
    element = ET.SubElement(root, CAMERA_TAG)
    _set_vector(ET.SubElement(element, "Position"), _XYZ, camera.position)
    ET.SubElement(element, "Pitch").set("f", _format_float(camera.pitch))
    ET.SubElement(element, "Yaw").set("f", _format_float(camera.yaw))
    _set_vector(ET.SubElement(element, "Target"), _XYZ, camera.target)
    ET.SubElement(element, "LockTarget").set("b", "true" if camera.lock_target else "false")
    _write(path, root)


def load_mesh_list(
    path: str | os.PathLike,
    mesh_dir: str | os.PathLike,
    meshes: MutableMapping[str, Mesh],
) -> list[str]:
    """Load each mesh listed in a ``MESHES`` file that ``meshes`` does not hold yet.

    Loaded meshes are stored in ``meshes`` under their names. Returns the names
    of the meshes whose files could not be read.
    """
    root = _root(path, MESHES_ROOT)
    failed: list[str] = []
    for element in _entries(root, MESH_TAG):
        name = _required_child(element, "Name").text or ""
        if name in meshes:
            continue
        file_name = _required_child(element, "File").text or ""
        try:
            meshes[name] = load_ply(Path(mesh_dir) / file_name)
        except (OSError, ValueError) as error:
            logger.warning("Didn't load mesh: %s (%s)", name, error)
            failed.append(name)
        else:
            logger.info("Loaded mesh: %s", name)
    return failed