import xml.etree.ElementTree as ET

import pytest

from degenscene.objectfile import (
    game_object_element,
    load_game_objects,
    parse_game_object,
    save_game_objects,
)
from degenscene.scene import GameObject, ShapeType


def _sample_object():
    obj = GameObject(
        mesh_name="Ship",
        friendly_name="Ship1",
        position=(1.5, -2.0, 3.25),
        velocity=(0.5, 0.0, -0.5),
        accel=(0.0, -1.0, 0.0),
        scale=5.0,
        inverse_mass=1.0,
        physics_shape_type=ShapeType.POINTSET,
        radius=2.5,
        test_points=[(0.0, -200.0, 804.0), (0.0, 267.0, -700.0)],
        diffuse_colour=(1.0, 0.0, 0.0, 1.0),
        debug_colour=(0.0, 1.0, 0.0, 1.0),
        use_diffuse=True,
        is_visible=False,
        is_wireframe=True,
    )
    obj.textures[0] = "Pizza.bmp"
    obj.texture_ratio[0] = 0.5
    obj.textures[1] = "pebbles-beach-textures.bmp"
    obj.texture_ratio[1] = 0.5
    return obj


def test_round_trip_preserves_fields(tmp_path):
    original = _sample_object()
    path = tmp_path / "objects.xml"
    save_game_objects(path, [original])
    (loaded,) = load_game_objects(path)

    assert loaded.mesh_name == original.mesh_name
    assert loaded.friendly_name == original.friendly_name
    assert loaded.position == original.position
    assert loaded.velocity == original.velocity
    assert loaded.accel == original.accel
    assert loaded.scale == original.scale
    assert loaded.inverse_mass == original.inverse_mass
    assert loaded.physics_shape_type is ShapeType.POINTSET
    assert loaded.radius == original.radius
    assert loaded.test_points == original.test_points
    assert loaded.diffuse_colour == original.diffuse_colour
    assert loaded.debug_colour == original.debug_colour
    assert loaded.textures == original.textures
    assert loaded.texture_ratio == original.texture_ratio
    assert loaded.use_diffuse is True
    assert loaded.is_visible is False
    assert loaded.is_wireframe is True


def test_rotation_round_trip(tmp_path):
    original = GameObject(friendly_name="rotated")
    original.set_orientation((10.0, 20.0, 30.0))
    path = tmp_path / "objects.xml"
    save_game_objects(path, [original])
    (loaded,) = load_game_objects(path)
    assert loaded.euler_angles() == pytest.approx(original.euler_angles(), abs=1e-4)


def test_aabb_corners_are_swapped_on_load():
    obj = GameObject(aabb_min=(-1.0, -2.0, -3.0), aabb_max=(1.0, 2.0, 3.0))
    loaded = parse_game_object(game_object_element(obj))
    assert loaded.aabb_min == obj.aabb_max
    assert loaded.aabb_max == obj.aabb_min


def test_children_round_trip(tmp_path):
    parent = GameObject(friendly_name="parent")
    child = GameObject(friendly_name="child", position=(0.0, 1.0, 0.0))
    grandchild = GameObject(friendly_name="grandchild")
    child.children.append(grandchild)
    parent.children.append(child)

    path = tmp_path / "objects.xml"
    save_game_objects(path, [parent])
    (loaded,) = load_game_objects(path)

    assert [c.friendly_name for c in loaded.children] == ["child"]
    assert loaded.children[0].position == child.position
    assert [g.friendly_name for g in loaded.children[0].children] == ["grandchild"]


def test_saved_document_layout(tmp_path):
    path = tmp_path / "objects.xml"
    save_game_objects(path, [GameObject(is_imposter=True), GameObject()])
    root = ET.parse(path).getroot()
    assert root.tag == "GAMEOBJECTS"
    assert [el.tag for el in root] == ["GameObject", "GameObject"]
    first = root[0]
    assert first.find("IsImposter").get("b") == "true"
    assert first.find("Wireframe").get("b") == "false"
    assert len(first.find("Textures")) == 4
    assert first.find("TestPoints") is None
    assert first.find("ChildObjects") is None


def test_order_of_objects_is_kept(tmp_path):
    names = ["Ship1", "Ship2", "Bullet1"]
    path = tmp_path / "objects.xml"
    save_game_objects(path, [GameObject(friendly_name=n) for n in names])
    assert [o.friendly_name for o in load_game_objects(path)] == names


def test_missing_fields_keep_defaults():
    element = ET.fromstring("<GameObject><MeshName>cube</MeshName></GameObject>")
    obj = parse_game_object(element)
    defaults = GameObject()
    assert obj.mesh_name == "cube"
    assert obj.position == defaults.position
    assert obj.scale == defaults.scale
    assert obj.is_visible == defaults.is_visible
    assert obj.textures == defaults.textures


def test_bool_accepts_integers():
    element = ET.fromstring('<GameObject><Visible b="0"/><Wireframe b="1"/></GameObject>')
    obj = parse_game_object(element)
    assert obj.is_visible is False
    assert obj.is_wireframe is True


def test_missing_coordinate_raises():
    element = ET.fromstring('<GameObject><Position x="1" y="2"/></GameObject>')
    with pytest.raises(ValueError):
        parse_game_object(element)


def test_texture_index_out_of_range_raises():
    element = ET.fromstring(
        '<GameObject><Textures><texture index="7" name="a.bmp" ratio="1"/></Textures></GameObject>'
    )
    with pytest.raises(ValueError):
        parse_game_object(element)


def test_wrong_root_raises(tmp_path):
    path = tmp_path / "objects.xml"
    path.write_text("<LIGHTS><Light/></LIGHTS>", encoding="utf-8")
    with pytest.raises(ValueError):
        load_game_objects(path)


def test_unknown_shape_type_raises():
    element = ET.fromstring('<GameObject><PhysicsShapeType type="99"/></GameObject>')
    with pytest.raises(ValueError):
        parse_game_object(element)