# jellocube

A mass-spring simulation of a jello cube made of 8 × 8 × 8 point masses. The
masses are joined by structural, shear and bend springs. The cube moves
through an external force field and collides with the walls of the
[-2, 2]³ bounding box. It can also collide with an inclined plane. The
simulation advances by explicit Euler or by fourth-order Runge–Kutta steps.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## World files

A world file is plain text made of whitespace-separated values, in this order:

1. the integrator name (`RK4` or `Euler`; only the first letter, `R` or `E`,
   is looked at when stepping);
2. the timestep and the render interval `n` (e.g. `0.0005 1`);
3. `kElastic dElastic kCollision dCollision`;
4. the mass of each of the 512 points;
5. `1` followed by the plane coefficients `a b c d` of
   `a*x + b*y + c*z + d = 0`, or `0` if there is no inclined plane;
6. the force-field resolution, followed by resolution³ lines of `x y z`
   forces sampled on a grid spanning [-2, 2] on each axis (a resolution of
   `0` means no force field);
7. 512 lines of initial positions followed by 512 lines of initial
   velocities.

`read_world` raises `WorldFileError` when the file cannot be opened, ends
early or holds a value that does not parse. `write_world` writes numbers with
six decimal places.

## Commands

Write the example world (an RK4 cube flung towards a corner) to `jello.w`,
or to the path given:

```
jellocube-createworld
jellocube-createworld my-world.w
```

Load a world file and advance it without a display:

```
jellocube jello.w --frames 500 --output after.w
```

`--frames` is the number of idle ticks to run (default 1). Each tick takes
one Euler or RK4 step. `--output` writes the final state as a world file.
Both commands print `can't open file` and exit with status 1 when a file
cannot be read or written.

## Library use

```python
from jellocube.world import read_world, write_world
from jellocube.physics import compute_acceleration, euler, rk4

world = read_world("jello.w")
for _ in range(100):
    rk4(world)
write_world("after.w", world)
```

`compute_acceleration(world)` returns an 8×8×8 grid of `Vec3`
accelerations. `euler` and `rk4` update `world.p` and `world.v` in place. The
inclined plane is taken into account only for a world whose `file_name` is
`world/inclinedPlane.w`.

The modules:

- `jellocube.vector` holds `Vec3`, an immutable vector with arithmetic
  operators and `dot`, `cross`, `length` and `normalized`.
- `jellocube.world` holds `World`, with its `copy()`, and also `read_world`,
  `write_world` and `WorldFileError`.
- `jellocube.createworld` has `build_example_world()` and `main`.
- `jellocube.springs` has `hooke_force` and `damping_force`. It also has
  `structural_force`, `shear_force` and `bend_force`, which give the force on
  one mass point, and `spring_offsets(kind)`.
- `jellocube.collisions` has `wall_collision_force` and
  `force_field_force` (trilinear interpolation). It also has
  `check_inclined_collision`, `inclined_collision_force` and the collision
  spring helpers `collision_hooke_force` and `collision_damping_force`.
- `jellocube.physics` has `compute_acceleration`, `euler` and `rk4`.
- `jellocube.geometry` computes drawable geometry without any graphics API:
  - `point_map` and `surface_springs`;
  - `face_vertex_normals`, which gives averaged vertex normals of a cube
    face;
  - `bounding_box_lines`, `ground_plane_tiles` and
    `incline_plane_polygon`.

  `surface_springs` and `face_vertex_normals` raise `RuntimeError` if the
  cube has escaped far out of the box.
- `jellocube.picture` holds `Picture` and `FileFormat`,
  `file_format_from_name`, and the binary PPM (`P6`) functions `read_ppm`,
  `write_ppm` and `read_ppm_size`. Its errors raise `PpmError`.
- `jellocube.viewer` covers the camera and input state:
  - `Camera`, with `eye()`;
  - `ViewState`, with `key_press`, `mouse_button`, `mouse_drag`,
    `mouse_motion` and `idle`;
  - `screenshot_name(index)`, which gives names such as `pic0000.ppm`;
  - `main`, the `jellocube` command.

## What this package does not do

There is no window, and nothing is rendered on screen. `jellocube.viewer`
keeps the state that an interactive front end needs:

- camera orbit and zoom;
- key toggles for the spring kinds, pause and the viewing mode;
- screenshot numbering.

`jellocube.geometry` provides what such a front end would draw. Screenshots
are written only when a frame grabber is given to `ViewState.grab_frame`. The
`jellocube` command runs the simulation headless.