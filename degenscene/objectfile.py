"""Reading and writing game objects as XML scene files."""

from __future__ import annotations

import os
import xml.etree.ElementTree as ET
from typing import Iterable, Sequence

from .scene import NUMBER_OF_TEXTURES, GameObject, ShapeType

ROOT_TAG = "GAMEOBJECTS"
OBJECT_TAG = "GameObject"

_XYZ = ("x", "y", "z")
_RGBA = ("r", "g", "b", "a")

_VECTOR_FIELDS = (
    ("Position", "position"),
    ("Velocity", "velocity"),
    ("Acceleration", "accel"),
)
_COLOUR_FIELDS = (
    ("ObjectColour", "object_colour"),
    ("DiffuseColour", "diffuse_colour"),
    ("SpecularColour", "specular_colour"),
    ("DebugColour", "debug_colour"),
)
_SCALAR_FIELDS = (
    ("Scale", "scale"),
    ("InverseMass", "inverse_mass"),
    ("Radius", "radius"),
)
_FLAG_FIELDS = (
    ("DoNotLight", "do_not_light"),
    ("IsImposter", "is_imposter"),
    ("UseDiffuse", "use_diffuse"),
    ("Wireframe", "is_wireframe"),
    ("Visible", "is_visible"),
    ("DisableDepthTest", "disable_depth_test"),
    ("DisableDepthWrite", "disable_depth_write"),
)


def _attribute(element: ET.Element, name: str) -> str:
    value = element.get(name)
    if value is None:
        raise ValueError(f"<{element.tag}> has no attribute {name!r}")
    return value


def _float(element: ET.Element, name: str) -> float:
    value = _attribute(element, name)
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"<{element.tag}> attribute {name!r} is not a number: {value!r}") from None


def _int(element: ET.Element, name: str) -> int:
    value = _attribute(element, name)
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"<{element.tag}> attribute {name!r} is not an integer: {value!r}") from None


def _bool(element: ET.Element, name: str) -> bool:
    value = _attribute(element, name).strip()
    try:
        return int(value) != 0
    except ValueError:
        pass
    if value in ("true", "True", "TRUE"):
        return True
    if value in ("false", "False", "FALSE"):
        return False
    raise ValueError(f"<{element.tag}> attribute {name!r} is not a boolean: {value!r}")


def _vector(element: ET.Element, names: Sequence[str]) -> tuple:
    return tuple(_float(element, name) for name in names)


def _required_child(element: ET.Element, tag: str) -> ET.Element:
    child = element.find(tag)
    if child is None:
        raise ValueError(f"<{element.tag}> has no <{tag}> element")
    return child


def _format_float(value: float) -> str:
    return format(float(value), ".8g")


def _set_vector(element: ET.Element, names: Sequence[str], values: Sequence[float]) -> None:
    for name, value in zip(names, values, strict=True):
        element.set(name, _format_float(value))


def parse_game_object(element: ET.Element) -> GameObject:
    """Build a game object, and its children, from a ``GameObject`` element."""
    obj = GameObject()

    for tag, attr in (("MeshName", "mesh_name"), ("FriendlyName", "friendly_name")):
        node = element.find(tag)
        if node is not None:
            setattr(obj, attr, node.text or "")

    for tag, attr in _VECTOR_FIELDS:
        node = element.find(tag)
        if node is not None:
            setattr(obj, attr, _vector(node, _XYZ))

    for tag, attr in _SCALAR_FIELDS:
        node = element.find(tag)
        if node is not None:
            setattr(obj, attr, _float(node, "f"))

    node = element.find("PhysicsShapeType")
    if node is not None:
        obj.physics_shape_type = ShapeType(_int(node, "type"))

    node = element.find("AABB")
    if node is not None:
        # The stored "max" corner is read into the minimum and vice versa.
        obj.aabb_min = _vector(_required_child(node, "max"), _XYZ)
        obj.aabb_max = _vector(_required_child(node, "min"), _XYZ)

    node = element.find("TestPoints")
    if node is not None:
        obj.test_points.extend(_vector(point, _XYZ) for point in node)

    for tag, attr in _COLOUR_FIELDS:
        node = element.find(tag)
        if node is not None:
            setattr(obj, attr, _vector(node, _RGBA))

    node = element.find("Textures")
    if node is not None:
        for texture in node:
            index = _int(texture, "index")
            if not 0 <= index < NUMBER_OF_TEXTURES:
                raise ValueError(f"texture index {index} is out of range")
            obj.textures[index] = _attribute(texture, "name")
            obj.texture_ratio[index] = _float(texture, "ratio")

    for tag, attr in _FLAG_FIELDS:
        node = element.find(tag)
        if node is not None:
            setattr(obj, attr, _bool(node, "b"))

    node = element.find("Rotation")
    if node is not None:
        obj.set_orientation(_vector(node, _XYZ))

    node = element.find("ChildObjects")
    if node is not None:
        obj.children.extend(parse_game_object(child) for child in node)

    return obj


def game_object_element(obj: GameObject) -> ET.Element:
    """Describe a game object, and its children, as a ``GameObject`` element."""
    element = ET.Element(OBJECT_TAG)

    ET.SubElement(element, "MeshName").text = obj.mesh_name
    ET.SubElement(element, "FriendlyName").text = obj.friendly_name

    for tag, attr in _VECTOR_FIELDS:
        _set_vector(ET.SubElement(element, tag), _XYZ, getattr(obj, attr))

    ET.SubElement(element, "Scale").set("f", _format_float(obj.scale))
    ET.SubElement(element, "InverseMass").set("f", _format_float(obj.inverse_mass))
    ET.SubElement(element, "PhysicsShapeType").set("type", str(int(obj.physics_shape_type)))

    aabb = ET.SubElement(element, "AABB")
    _set_vector(ET.SubElement(aabb, "max"), _XYZ, obj.aabb_max)
    _set_vector(ET.SubElement(aabb, "min"), _XYZ, obj.aabb_min)

    ET.SubElement(element, "Radius").set("f", _format_float(obj.radius))

    if obj.test_points:
        points = ET.SubElement(element, "TestPoints")
        for point in obj.test_points:
            _set_vector(ET.SubElement(points, "point"), _XYZ, point)

    for tag, attr in _COLOUR_FIELDS:
        _set_vector(ET.SubElement(element, tag), _RGBA, getattr(obj, attr))

    textures = ET.SubElement(element, "Textures")
    for index, (name, ratio) in enumerate(zip(obj.textures, obj.texture_ratio, strict=True)):
        texture = ET.SubElement(textures, "texture")
        texture.set("index", str(index))
        texture.set("name", name)
        texture.set("ratio", _format_float(ratio))

    for tag, attr in _FLAG_FIELDS:
        ET.SubElement(element, tag).set("b", "true" if getattr(obj, attr) else "false")

    _set_vector(ET.SubElement(element, "Rotation"), _XYZ, obj.euler_angles())

    if obj.children:
        children = ET.SubElement(element, "ChildObjects")
        children.extend(game_object_element(child) for child in obj.children)

    return element


def load_game_objects(path: str | os.PathLike) -> list[GameObject]:
    """Read every game object listed in a ``GAMEOBJECTS`` file."""
    root = ET.parse(path).getroot()
    if root.tag != ROOT_TAG:
        raise ValueError(f"expected <{ROOT_TAG}> root element, found <{root.tag}>")
    elements = list(root)
    start = next((i for i, el in enumerate(elements) if el.tag == OBJECT_TAG), len(elements))
    return [parse_game_object(el) for el in elements[start:]]


def save_game_objects(path: str | os.PathLike, objects: Iterable[GameObject]) -> None:
    """Write game objects to a ``GAMEOBJECTS`` file."""
    root = ET.Element(ROOT_TAG)
    root.extend(game_object_element(obj) for obj in objects)
    tree = ET.ElementTree(root)
    ET.indent(tree)
    tree.write(path, encoding="utf-8", xml_declaration=False)