# lumenscene

Building blocks for a small global-illumination renderer:

- immutable `Vec3` / `Vec4` vectors and a column-major 4x4 `Matrix`;
- axis-aligned bounding boxes and ray `Hit` records;
- render settings (`RenderSettings`, `RenderMode`);
- sRGB conversion, normals, triangle areas, random directions, and
  triangle packing (quads, boxes, wireframed triangles) for display;
- a `RayTree` that records traced ray segments for visualisation;
- an implicit `Sphere` primitive that can be intersected by rays or
  rasterized into quad patches;
- a progressive-refinement (shooting) `Radiosity` solver.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

| Module                   | Contents                                                    |
|--------------------------|-------------------------------------------------------------|
| `lumenscene.vectors`     | `Vec3`, `Vec4`                                              |
| `lumenscene.matrix`      | `Matrix`, `SingularMatrixError`, `det2x2`, `det3x3`, `det4x4` |
| `lumenscene.boundingbox` | `BoundingBox`                                               |
| `lumenscene.hit`         | `Hit`, `FLT_MAX`                                            |
| `lumenscene.settings`    | `RenderMode`, `RenderSettings`                              |
| `lumenscene.utils`       | `linear_to_srgb`, `srgb_to_linear`, `distance`, `triangle_area`, `triangle_area_from_sides`, `compute_normal`, `reflection`, `random_unit_vector`, `random_diffuse_direction`, `quad`, `box`, `wireframe_triangle`, `EPSILON` |
| `lumenscene.raytree`     | `Segment`, `RayTree`, `segment_box`                         |
| `lumenscene.sphere`      | `Primitive`, `Sphere`, `compute_sphere_point`               |
| `lumenscene.radiosity`   | `Radiosity`, `collect_faces_with_vertex`                    |

## Vectors and matrices

`Vec3` and `Vec4` are frozen dataclasses. They support `+`, `-`, unary
`-`, multiplication and division by a scalar, and (for `Vec3`)
component-wise multiplication by another `Vec3`. `str(Vec3(1, 2, 3))` gives
`< 1 , 2 , 3 >`, and `Vec3.parse` reads that form back.

```python
import math
from lumenscene.vectors import Vec3
from lumenscene.matrix import Matrix

v = Vec3(1.0, 2.0, 2.0)
print(v.length())                 # 3.0
print(v.normalized())

m = Matrix.translation(Vec3(1, 0, 0)) * Matrix.z_rotation(math.pi / 2)
p = m.transform_point(Vec3(1, 0, 0))      # about (1, 1, 0)
d = m.transform_direction(Vec3(1, 0, 0))  # about (0, 1, 0); translation is ignored
back = m.inverse().transform_point(p)     # about (1, 0, 0)
```

`Matrix.inverse(epsilon=1e-08)` raises `SingularMatrixError` when the
determinant is smaller in magnitude than `epsilon`. `Matrix.from_rows`
builds a matrix row by row; iterating over a matrix yields its sixteen
values in column-major order, and `to_float_list` gives them rounded to
single precision. `Matrix.parse` reads sixteen numbers row by row.

## Bounding boxes and hits

```python
from lumenscene.boundingbox import BoundingBox
from lumenscene.vectors import Vec3

box = BoundingBox.from_point(Vec3(0, 0, 0))
box.extend(Vec3(2, 4, 1))
print(box.center(), box.max_dim())        # < 1 , 2 , 0.5 > 4.0
```

A box whose minimum exceeds its maximum on any axis raises `ValueError`.

A fresh `Hit` has `t` equal to `FLT_MAX` (the largest single-precision
float), meaning nothing has been hit yet. `Hit.set` records a closer
intersection and resets the texture coordinates.

## Settings

`RenderSettings` is a dataclass holding the image size and the
parameters used by the renderers. In this package `Radiosity` reads
`render_mode`, `interpolate` and `wireframe`, and `Sphere` reads
`sphere_horiz` and `sphere_vert`. The constructor raises `ValueError` for
a non-positive image size, an odd or non-positive `sphere_horiz`, a
`sphere_vert` below 2, or matrices without 16 entries.
`RenderMode.next()` cycles through the six visualisation modes.

## Colour and geometry helpers

```python
import random
from lumenscene.utils import linear_to_srgb, srgb_to_linear, random_diffuse_direction
from lumenscene.vectors import Vec3

print(srgb_to_linear(linear_to_srgb(0.5)))   # about 0.5
direction = random_diffuse_direction(Vec3(0, 0, 1), random.Random(1))
```

The random helpers take any object with a `random()` method.
`quad`, `box` and `wireframe_triangle` return lists of vertex records, each
a 12-tuple: position `(x, y, z, 1)`, normal `(x, y, z, 0)` and colour
`(r, g, b, 1)`, rounded to single precision.

## Spheres and ray trees

The sphere and ray tree work with any ray object that has `origin` and
`direction` attributes and a `point_at_parameter(t)` method.

```python
from dataclasses import dataclass
from lumenscene.hit import Hit
from lumenscene.raytree import RayTree
from lumenscene.sphere import Sphere
from lumenscene.vectors import Vec3

@dataclass
class Ray:
    origin: Vec3
    direction: Vec3

    def point_at_parameter(self, t):
        return self.origin + t * self.direction

ray = Ray(Vec3(0, 0, 5), Vec3(0, 0, -1))
hit = Hit()
sphere = Sphere(Vec3(0, 0, 0), 1.0, material="grey")
if sphere.intersect(ray, hit):
    print(hit.t, hit.normal)                  # 4.0 < 0 , 0 , 1 >

tree = RayTree()
tree.activate()                               # segments are recorded only while active
tree.add_main_segment(ray, 0.0, hit.t)
print(tree.num_segments(), tree.tri_count())  # 1 12
records = tree.pack_mesh()                    # 36 vertex records
```

`Sphere.intersect` only accepts an intersection closer than the hit's
current `t`. `Sphere.add_rasterized_faces(mesh, settings)` adds vertices
and quads through `mesh.add_vertex(position)` and
`mesh.add_rasterized_primitive_face(a, b, c, d, material)`.

## Radiosity

`Radiosity(mesh, settings, raytracer)` works with objects that provide:

- the mesh: a `faces()` method returning the quad patches;
- each face: `area`, `material` (with `diffuse_color` and
  `emitted_color`), `vertices` (each with a `position`), a writable
  `radiosity_patch_index`, `compute_normal()`, `compute_centroid()`, and
  an `edge` whose half-edges have `next`, `opposite` and `face`;
- the ray tracer: `cast_ray(ray, hit, use_rasterized_patches)`.

`iterate()` shoots the energy of the patch with the most undistributed
light and returns the total energy still undistributed, so you can
iterate until that value is small enough. The form factors are computed
on the first call; this needs a ray tracer and raises `RuntimeError`
without one. `pack_mesh()` returns display vertex records for the current
solution, coloured by `settings.render_mode`; `tri_count()` gives the
number of triangles (twelve per patch).

## What this package does not do

lumenscene provides the pieces above and nothing around them. It has no
mesh class or scene-file loader, no camera, no ray tracer or photon
mapper, no image output and no window or interactive viewer, and it
installs no command. The mesh, faces, materials, rays and ray caster that
`Sphere` and `Radiosity` use must be supplied by the caller.