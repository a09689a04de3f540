# degenscene

Data handling for a small 3D game engine: reading and writing XML scene
description files, loading ASCII PLY meshes, bucketing mesh triangles into a
grid of world regions, and stepping a simple physics simulation.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modules

### `degenscene.geometry`

Vectors are plain tuples. `add`, `sub`, `scale`, `length`, `distance` and
`normalize` work on them; `normalize` raises `ValueError` for a zero vector.

`Quaternion(w, x, y, z)` is a frozen dataclass (identity by default) with
`*` for the Hamilton product, `normalized()`, `to_euler()` (pitch, yaw, roll
in radians) and `slerp(other, t)` along the shortest arc.
`quaternion_from_euler((pitch, yaw, roll))` builds one from radians.

### `degenscene.filters`

`LowPassFilter(size=50)` keeps the last `size` values in a ring.
`add_value(value)` replaces the oldest; `average()` is the mean over all
slots, where slots not yet filled count as zero. A size of zero or less
raises `ValueError`.

### `degenscene.mesh`

`Mesh` holds a list of `PlyVertex` (position, normal, `u`, `v`) and a list of
`PlyTriangle` (three vertex indices). `Mesh.triangle_points(index)` gives the
three corner positions of a triangle.

`load_ply(path)` reads an ASCII PLY file whose vertices are
`x y z nx ny nz u v` and whose faces are triangles. Normals are normalised on
load (zero normals are left as they are). A file that ends early or lacks
the `vertex`, `face` or `end_header` words raises `ValueError`.

### `degenscene.regions`

`WorldRegions(half_length)` divides space into cubes of side
`2 * half_length`, 50 cells each way from the origin. Each `WorldRegion`
has a `center`, a `half_length`, a set of triangle indices and
`contains_point(point)`.

- `generate_id(point)` gives the integer identifier of the cell holding a point.
- `region_at(point)` returns the region, or `None` outside the grid.
- `add_mesh(mesh)` appends the mesh's triangles as `UnravelledTriangle`
  records (corners and normals).
- `divide_triangle(index, a, b, c, max_side_length=1.0)` splits a triangle
  until no side is longer than the limit and records `index` in the region of
  every corner; a corner outside the grid raises `ValueError`.
- `save(path)` writes one `region-id triangle-index` line per assignment;
  `load(path)` reads such a file back.
- `init(mesh_name, mesh, directory="assets")` adds the mesh and either loads
  `regions_<mesh_name>.txt` from `directory` or, if it is missing, divides
  the new triangles and writes that file. It returns the file's path.

### `degenscene.scene`

Dataclass records: `GameObject` (mesh and friendly names, position,
velocity, acceleration, scale, inverse mass, `ShapeType`, AABB, radius, test
points, four colours, four textures with ratios, render flags, orientation
and angular velocity as quaternions, and child objects), `Light` (with a
`LightType`) and `CameraState`. `GameObject.set_orientation(angles)` takes
Euler angles in degrees and `euler_angles()` gives them back in degrees.

### `degenscene.objectfile`

`load_game_objects(path)` and `save_game_objects(path, objects)` handle the
`GAMEOBJECTS` XML format, nested `ChildObjects` included.
`parse_game_object(element)` and `game_object_element(obj)` work on single
`xml.etree.ElementTree` elements. Missing child elements keep the
`GameObject` defaults; malformed attributes raise `ValueError`. Note that the
`AABB` element's `max` child is read into `aabb_min` and its `min` child into
`aabb_max`, while saving writes `aabb_max` to `max` and `aabb_min` to `min`.

### `degenscene.scenefile`

- `load_lights(path)` / `save_lights(path, lights)` for `LIGHTS` files.
  A stored `CutOffDistance` is checked but not applied.
- `load_camera(path)` / `save_camera(path, camera)` for `CAMERA` files,
  returning and taking a `CameraState`.
- `load_mesh_list(path, mesh_dir, meshes)` reads a `MESHES` file and loads
  each listed PLY file from `mesh_dir` into the `meshes` mapping, skipping
  names already present. It logs each result and returns the names that
  could not be loaded.

### `degenscene.physics`

`Physics(gravity=(0.0, -1.0, 0.0))` has `integration_step(objects,
delta_time)`, which for every object with non-zero inverse mass adds
`(gravity + accel) * delta_time` to the velocity, then
`velocity * delta_time` to the position, and, when the angular velocity is
not the identity, slerps the orientation towards
`orientation * angular_velocity` by `delta_time`.

`rk6(value, change, delta)` returns a weighted average of six staged
increments. `transform_mesh(mesh, matrix)` returns a copy of a mesh with
positions multiplied by a 4x4 matrix and normals by its inverse transpose.

## Example

```python
from degenscene.mesh import load_ply
from degenscene.physics import Physics
from degenscene.objectfile import load_game_objects, save_game_objects

mesh = load_ply("assets/models/cube.ply")
objects = load_game_objects("assets/config/GameObjects.xml")

physics = Physics((0.0, -1.0, 0.0))
for _ in range(60):
    physics.integration_step(objects, 1.0 / 60.0)

save_game_objects("saved.xml", objects)
```

## What this package does not do

It has no window, renderer, shader or texture handling and no command to
run: it only reads, writes and updates scene data. Physics covers
integration only; there are no collision tests between objects or against
the region grid, and no light or camera manager beyond the plain
`Light` and `CameraState` records.