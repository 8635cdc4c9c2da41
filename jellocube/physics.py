"""Acceleration of the jello cube and the Euler and RK4 integrators."""

from __future__ import annotations

from typing import Callable

from jellocube.collisions import (
    check_inclined_collision,
    force_field_force,
    inclined_collision_force,
    wall_collision_force,
)
from jellocube.springs import bend_force, shear_force, structural_force
from jellocube.vector import Vec3
from jellocube.world import GRID_SIZE, Grid, World

INCLINED_PLANE_WORLD = "world/inclinedPlane.w"


def _map(fn: Callable[..., Vec3], *grids: Grid) -> Grid:
    """Apply ``fn`` element-wise across grids of the same shape."""
    return [
        [[fn(*values) for values in zip(*rows)] for rows in zip(*planes)]
        for planes in zip(*grids)
    ]


def _point_force(world: World, i: int, j: int, k: int, use_plane: bool) -> Vec3:
    force = structural_force(world, i, j, k)
    force = force + shear_force(world, i, j, k)
    force = force + bend_force(world, i, j, k)
    force = force + force_field_force(world, i, j, k)
    force = force + wall_collision_force(world, i, j, k)
    if use_plane:
        no_collision, normal = check_inclined_collision(world, world.p[i][j][k])
        force = force + inclined_collision_force(world, i, j, k, no_collision, normal)
    return force


def compute_acceleration(world: World) -> Grid:
    """Return the acceleration of every mass point as an 8x8x8 grid.

    The inclined plane takes part only for the world loaded from
    ``world/inclinedPlane.w``.
    """
    use_plane = world.file_name == INCLINED_PLANE_WORLD
    inv_mass = 1 / world.mass
    return [
        [
            [_point_force(world, i, j, k, use_plane) * inv_mass for k in range(GRID_SIZE)]
            for j in range(GRID_SIZE)
        ]
        for i in range(GRID_SIZE)
    ]


def euler(world: World) -> None:
    """Advance ``world`` by one explicit Euler step, in place."""
    dt = world.dt
    acceleration = compute_acceleration(world)
    velocities = world.v
    world.p = _map(lambda p, v: p + v * dt, world.p, velocities)
    world.v = _map(lambda v, a: v + a * dt, velocities, acceleration)


def rk4(world: World) -> None:
    """Advance ``world`` by one fourth-order Runge-Kutta step, in place."""
    dt = world.dt
    p0, v0 = world.p, world.v
    buffer = world.copy()

    def scaled(grid: Grid) -> Grid:
        return _map(lambda value: value * dt, grid)

    acceleration = compute_acceleration(world)
    f1p, f1v = scaled(v0), scaled(acceleration)
    buffer.p = _map(lambda p, f: p + f * 0.5, p0, f1p)
    buffer.v = _map(lambda v, f: v + f * 0.5, v0, f1v)

    acceleration = compute_acceleration(buffer)
    f2p, f2v = scaled(buffer.v), scaled(acceleration)
    buffer.p = _map(lambda p, f: p + f * 0.5, p0, f2p)
    buffer.v = _map(lambda v, f: v + f * 0.5, v0, f2v)

    acceleration = compute_acceleration(buffer)
    f3p, f3v = scaled(buffer.v), scaled(acceleration)
    buffer.p = _map(lambda p, f: p + f * 1.0, p0, f3p)
    buffer.v = _map(lambda v, f: v + f * 1.0, v0, f3v)

    acceleration = compute_acceleration(buffer)
    f4p, f4v = scaled(buffer.v), scaled(acceleration)

    def combine(x: Vec3, k1: Vec3, k2: Vec3, k3: Vec3, k4: Vec3) -> Vec3:
        return (k2 * 2 + k3 * 2 + k1 + k4) * (1.0 / 6) + x

    world.p = _map(combine, p0, f1p, f2p, f3p, f4p)
    world.v = _map(combine, v0, f1v, f2v, f3v, f4v)