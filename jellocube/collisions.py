"""External forces on the jello cube.

This covers collisions with the bounding box, the interpolated external
force field and collisions with the inclined plane. Every function returns
the force on one mass point as a Vec3.
"""

from __future__ import annotations

import math
from itertools import product
from typing import Tuple

from jellocube.vector import Vec3
from jellocube.world import GRID_SIZE, World

BOX_HALF_SIZE = 2.0


def _check_index(i: int, j: int, k: int) -> None:
    if not all(0 <= index < GRID_SIZE for index in (i, j, k)):
        raise IndexError(f"mass point ({i}, {j}, {k}) is outside the grid")


def _sign(value: float) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def collision_hooke_force(src: Vec3, anchor: Vec3, k_hook: float, normal: Vec3) -> Vec3:
    """Penalty spring force pushing ``src`` back towards ``anchor`` along ``normal``."""
    stretched = (src - anchor) * -k_hook
    return normal * stretched.dot(normal)


def collision_damping_force(
    src: Vec3,
    anchor: Vec3,
    src_velocity: Vec3,
    anchor_velocity: Vec3,
    k_damp: float,
    normal: Vec3,
) -> Vec3:
    """Damping of a collision spring, projected onto ``normal``.

    Raises ZeroDivisionError when ``src`` and ``anchor`` coincide.
    """
    delta = src - anchor
    length = delta.length()
    relative = src_velocity - anchor_velocity
    if length == 0.0:
        raise ZeroDivisionError("collision spring has zero length")
    magnitude = -k_damp * (relative.dot(delta) / length)
    force = delta.normalized() * magnitude
    return normal * force.dot(normal)


def wall_collision_force(world: World, i: int, j: int, k: int) -> Vec3:
    """Force from the walls of the [-2, 2] bounding box on mass point (i, j, k)."""
    _check_index(i, j, k)
    p = world.p[i][j][k]
    limit = BOX_HALF_SIZE
    if all(-limit < coord < limit for coord in p):
        return Vec3()

    normal = []
    wall = []
    for coord in p:
        n, w = 0.0, coord
        if coord <= -limit:
            n, w = 1.0, -limit
        if coord >= limit:
            n, w = -1.0, limit
        normal.append(n)
        wall.append(w)
    normal_vec = Vec3(*normal)
    wall_point = Vec3(*wall)

    force = collision_hooke_force(p, wall_point, world.k_collision, normal_vec)
    return force + collision_damping_force(
        p, wall_point, world.v[i][j][k], Vec3(), world.d_collision, normal_vec
    )


def force_field_force(world: World, i: int, j: int, k: int) -> Vec3:
    """Trilinearly interpolated external force field at mass point (i, j, k).

    Returns the zero vector when the point maps outside the field's grid or
    when there is no force field.
    """
    _check_index(i, j, k)
    res = world.resolution
    if res < 2:
        return Vec3()
    last = res - 1
    p = world.p[i][j][k]

    def cell(coord: float) -> int:
        index = int((coord + 2) * last / 4)
        return index - 1 if index == last else index

    cx, cy, cz = cell(p.x), cell(p.y), cell(p.z)
    if not all(0 <= index < last for index in (cx, cy, cz)):
        return Vec3()

    spacing = 1.0 * 4 / last
    tx = (p.x - (-2 + 1.0 * 4 * cx / last)) / spacing
    ty = (p.y - (-2 + 1.0 * 4 * cy / last)) / spacing
    tz = (p.z - (-2 + 1.0 * 4 * cz / last)) / spacing

    field = world.force_field
    total = Vec3()
    for dx, dy, dz in product((0, 1), repeat=3):
        weight = (
            (tx if dx else 1 - tx)
            * (ty if dy else 1 - ty)
            * (tz if dz else 1 - tz)
        )
        sample = field[(cx + dx) * res * res + (cy + dy) * res + (cz + dz)]
        total = total + sample * weight
    return total


def check_inclined_collision(world: World, p: Vec3) -> Tuple[bool, Vec3]:
    """Return (no_collision, plane_normal) for point ``p`` and the inclined plane.

    A point collides when it is not strictly on the same side of the plane
    as the tip of the plane's normal vector. Without a plane there is never
    a collision and the normal is zero.
    """
    if not world.plane_present:
        return True, Vec3()
    point_side = _sign(world.a * p.x + world.b * p.y + world.c * p.z + world.d)
    normal = Vec3(world.a, world.b, world.c)
    plane_side = _sign(
        world.a * normal.x + world.b * normal.y + world.c * normal.z + world.d
    )
    return plane_side * point_side == 1, normal


def inclined_collision_force(
    world: World, i: int, j: int, k: int, no_collision: bool, normal: Vec3
) -> Vec3:
    """Penalty force from the inclined plane on mass point (i, j, k)."""
    if no_collision:
        return Vec3()
    _check_index(i, j, k)
    p = world.p[i][j][k]
    distance = (world.a * p.x + world.b * p.y + world.c * p.z + world.d) / math.sqrt(
        world.a * world.a + world.b * world.b + world.c * world.c
    )
    unit = normal / normal.length()
    on_plane = p - unit * distance

    force = collision_hooke_force(p, on_plane, world.k_collision, unit)
    return force + collision_damping_force(
        p, on_plane, world.v[i][j][k], Vec3(), world.d_collision, unit
    )