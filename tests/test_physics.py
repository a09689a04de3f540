import math

import numpy as np
import pytest

from degenscene.geometry import Quaternion, quaternion_from_euler
from degenscene.mesh import Mesh, PlyTriangle, PlyVertex
from degenscene.physics import DEFAULT_GRAVITY, Physics, rk6, transform_mesh
from degenscene.scene import GameObject


def _mesh():
    return Mesh(
        vertices=[
            PlyVertex(1.0, 2.0, 3.0, 0.0, 1.0, 0.0, 0.25, 0.75),
            PlyVertex(-1.0, 0.5, 2.0, 1.0, 0.0, 0.0, 0.5, 0.5),
            PlyVertex(0.0, -2.0, 4.0, 0.0, 0.0, 1.0, 1.0, 0.0),
        ],
        triangles=[PlyTriangle(0, 1, 2)],
    )


def _components(q):
    return (q.w, q.x, q.y, q.z)


def test_default_gravity_points_down():
    assert Physics().gravity == (0.0, -1.0, 0.0)
    assert DEFAULT_GRAVITY == (0.0, -1.0, 0.0)


def test_gravity_must_have_three_components():
    with pytest.raises(ValueError):
        Physics((0.0, -1.0))


def test_static_object_does_not_move():
    obj = GameObject(position=(1.0, 2.0, 3.0), inverse_mass=0.0)
    Physics().integration_step([obj], 1.0)
    assert obj.position == (1.0, 2.0, 3.0)
    assert obj.velocity == (0.0, 0.0, 0.0)


def test_one_unit_step_from_rest_moves_by_gravity():
    gravity = (0.0, -2.0, 0.5)
    obj = GameObject(inverse_mass=1.0)
    Physics(gravity).integration_step([obj], 1.0)
    assert obj.velocity == pytest.approx(gravity)
    assert obj.position == pytest.approx(gravity)


def test_acceleration_adds_to_gravity():
    obj = GameObject(inverse_mass=1.0, accel=(0.0, 1.0, 0.0))
    Physics((0.0, -1.0, 0.0)).integration_step([obj], 1.0)
    assert obj.velocity == pytest.approx((0.0, 0.0, 0.0))
    assert obj.position == pytest.approx((0.0, 0.0, 0.0))


def test_zero_time_step_keeps_state():
    obj = GameObject(inverse_mass=1.0, position=(4.0, 5.0, 6.0), velocity=(1.0, 1.0, 1.0))
    Physics().integration_step([obj], 0.0)
    assert obj.position == pytest.approx((4.0, 5.0, 6.0))
    assert obj.velocity == pytest.approx((1.0, 1.0, 1.0))


def test_identity_angular_velocity_keeps_orientation():
    start = quaternion_from_euler((0.3, 0.2, 0.1))
    obj = GameObject(inverse_mass=1.0, orientation=start)
    Physics().integration_step([obj], 1.0)
    assert obj.orientation == start


def test_full_step_applies_angular_velocity():
    start = quaternion_from_euler((0.1, 0.0, 0.0))
    spin = quaternion_from_euler((0.0, 0.4, 0.0))
    obj = GameObject(inverse_mass=1.0, orientation=start, angular_velocity=spin)
    Physics().integration_step([obj], 1.0)
    expected = start * spin
    assert _components(obj.orientation) == pytest.approx(_components(expected), abs=1e-6)
    assert _components(obj.orientation) != pytest.approx(_components(start), abs=1e-6)


def test_angular_velocity_ignored_for_static_object():
    spin = quaternion_from_euler((0.0, 0.4, 0.0))
    obj = GameObject(inverse_mass=0.0, angular_velocity=spin)
    Physics().integration_step([obj], 1.0)
    assert obj.orientation == Quaternion()


def test_rk6_without_change_returns_value():
    assert rk6((1.0, 2.0, 3.0), (0.0, 0.0, 0.0), 0.5) == pytest.approx((1.0, 2.0, 3.0))


def test_rk6_without_time_returns_value():
    assert rk6((1.0, -2.0, 3.0), (5.0, 6.0, 7.0), 0.0) == pytest.approx((1.0, -2.0, 3.0))


def test_rk6_is_linear_in_change():
    base = (0.0, 0.0, 0.0)
    once = rk6(base, (1.0, 2.0, 3.0), 1.0)
    twice = rk6(base, (2.0, 4.0, 6.0), 1.0)
    assert twice == pytest.approx(tuple(2.0 * c for c in once))


def test_rk6_is_translation_invariant():
    change = (1.0, -1.0, 0.5)
    a = rk6((0.0, 0.0, 0.0), change, 2.0)
    b = rk6((10.0, 10.0, 10.0), change, 2.0)
    assert tuple(y - x for x, y in zip(a, b)) == pytest.approx((10.0, 10.0, 10.0))


def test_transform_identity_keeps_mesh():
    mesh = _mesh()
    result = transform_mesh(mesh, np.eye(4))
    assert result == mesh


def test_translation_moves_positions_keeps_normals():
    mesh = _mesh()
    matrix = np.eye(4)
    matrix[:3, 3] = (10.0, -5.0, 2.0)
    result = transform_mesh(mesh, matrix)
    for before, after in zip(mesh.vertices, result.vertices):
        assert after.position == pytest.approx(
            (before.x + 10.0, before.y - 5.0, before.z + 2.0)
        )
        assert after.normal == pytest.approx(before.normal)
        assert (after.u, after.v) == (before.u, before.v)


def test_uniform_scale_scales_positions_and_shrinks_normals():
    mesh = _mesh()
    matrix = np.diag([2.0, 2.0, 2.0, 1.0])
    result = transform_mesh(mesh, matrix)
    for before, after in zip(mesh.vertices, result.vertices):
        assert after.position == pytest.approx(tuple(2.0 * p for p in before.position))
        assert after.normal == pytest.approx(tuple(n / 2.0 for n in before.normal))


def test_transform_leaves_original_untouched():
    mesh = _mesh()
    snapshot = [v.position for v in mesh.vertices]
    transform_mesh(mesh, np.diag([3.0, 3.0, 3.0, 1.0]))
    assert [v.position for v in mesh.vertices] == snapshot


def test_transform_keeps_triangles():
    mesh = _mesh()
    result = transform_mesh(mesh, np.diag([3.0, 3.0, 3.0, 1.0]))
    assert result.triangles == mesh.triangles


def test_rotation_preserves_distances():
    mesh = _mesh()
    c, s = math.cos(0.7), math.sin(0.7)
    matrix = np.array(
        [[c, -s, 0.0, 0.0], [s, c, 0.0, 0.0], [0.0, 0.0, 1.0, 0.0], [0.0, 0.0, 0.0, 1.0]]
    )
    result = transform_mesh(mesh, matrix)
    for before, after in zip(mesh.vertices, result.vertices):
        assert math.dist(after.position, (0.0, 0.0, 0.0)) == pytest.approx(
            math.dist(before.position, (0.0, 0.0, 0.0))
        )


def test_transform_rejects_wrong_shape():
    with pytest.raises(ValueError):
        transform_mesh(_mesh(), np.eye(3))


def test_transform_rejects_singular_matrix():
    with pytest.raises(np.linalg.LinAlgError):
        transform_mesh(_mesh(), np.zeros((4, 4)))