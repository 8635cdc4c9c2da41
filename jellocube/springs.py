"""Internal spring forces of the jello cube: structural, shear and bend springs.

Every spring is a damped Hooke spring. Forces are returned as Vec3 values,
summed over all springs that attach the mass point at grid index (i, j, k).
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence, Tuple

from jellocube.vector import Vec3
from jellocube.world import GRID_SIZE, World

REST_LENGTH_STRUCTURAL = 1.0 / 7.0
REST_LENGTH_DIAGONAL_2D = REST_LENGTH_STRUCTURAL * math.sqrt(2.0)
REST_LENGTH_DIAGONAL_3D = math.sqrt(
    REST_LENGTH_STRUCTURAL * REST_LENGTH_STRUCTURAL
    + REST_LENGTH_DIAGONAL_2D * REST_LENGTH_DIAGONAL_2D
)
REST_LENGTH_BEND = 2.0 / 7.0

_Spring = Tuple[int, int, int, float]

_STRUCTURAL_SPRINGS: Tuple[_Spring, ...] = tuple(
    (di, dj, dk, REST_LENGTH_STRUCTURAL)
    for di, dj, dk in (
        (-1, 0, 0), (1, 0, 0),
        (0, -1, 0), (0, 1, 0),
        (0, 0, -1), (0, 0, 1),
    )
)

_BEND_SPRINGS: Tuple[_Spring, ...] = tuple(
    (di, dj, dk, REST_LENGTH_BEND)
    for di, dj, dk in (
        (-2, 0, 0), (2, 0, 0),
        (0, -2, 0), (0, 2, 0),
        (0, 0, -2), (0, 0, 2),
    )
)


def _shear_springs() -> Tuple[_Spring, ...]:
    springs = []
    for di in (-1, 1):
        springs += [
            (di, 0, -1, REST_LENGTH_DIAGONAL_2D),
            (di, 0, 1, REST_LENGTH_DIAGONAL_2D),
            (di, -1, 0, REST_LENGTH_DIAGONAL_2D),
            (di, 1, 0, REST_LENGTH_DIAGONAL_2D),
            (di, -1, -1, REST_LENGTH_DIAGONAL_3D),
            (di, -1, 1, REST_LENGTH_DIAGONAL_3D),
            (di, 1, -1, REST_LENGTH_DIAGONAL_3D),
            (di, 1, 1, REST_LENGTH_DIAGONAL_3D),
        ]
    for dj in (-1, 1):
        springs += [
            (0, dj, -1, REST_LENGTH_DIAGONAL_2D),
            (0, dj, 1, REST_LENGTH_DIAGONAL_2D),
        ]
    return tuple(springs)


_SHEAR_SPRINGS = _shear_springs()


def hooke_force(src: Vec3, ngbr: Vec3, k_hook: float, rest_length: float) -> Vec3:
    """Elastic force on ``src`` from a spring of the given rest length to ``ngbr``.

    F = -k * (|L| - rest) * L / |L|, with L = src - ngbr.
    Raises ZeroDivisionError when the two points coincide.
    """
    delta = src - ngbr
    length = delta.length()
    magnitude = -k_hook * (length - rest_length)
    return delta.normalized() * magnitude


def damping_force(
    src: Vec3,
    ngbr: Vec3,
    src_velocity: Vec3,
    ngbr_velocity: Vec3,
    k_damp: float,
) -> Vec3:
    """Damping force on ``src`` along the spring towards ``ngbr``.

    F = -k * ((vA - vB) . L) / |L| * L / |L|, with L = src - ngbr.
    Raises ZeroDivisionError when the two points coincide.
    """
    delta = src - ngbr
    relative = src_velocity - ngbr_velocity
    length = delta.length()
    unit = delta.normalized()
    magnitude = relative.dot(delta) * (-k_damp / length)
    return unit * magnitude


def _in_grid(index: int) -> bool:
    return 0 <= index < GRID_SIZE


def _spring_sum(world: World, i: int, j: int, k: int, springs: Iterable[_Spring]) -> Vec3:
    src = world.p[i][j][k]
    src_velocity = world.v[i][j][k]
    total = Vec3()
    for di, dj, dk, rest in springs:
        ni, nj, nk = i + di, j + dj, k + dk
        if not (_in_grid(ni) and _in_grid(nj) and _in_grid(nk)):
            continue
        ngbr = world.p[ni][nj][nk]
        total = hooke_force(src, ngbr, world.k_elastic, rest) + total
        total = damping_force(
            src, ngbr, src_velocity, world.v[ni][nj][nk], world.d_elastic
        ) + total
    return total


def _check_index(i: int, j: int, k: int) -> None:
    if not (_in_grid(i) and _in_grid(j) and _in_grid(k)):
        raise IndexError(f"mass point ({i}, {j}, {k}) is outside the grid")


def structural_force(world: World, i: int, j: int, k: int) -> Vec3:
    """Sum of the forces from the axis-aligned neighbours at distance one."""
    _check_index(i, j, k)
    return _spring_sum(world, i, j, k, _STRUCTURAL_SPRINGS)


def shear_force(world: World, i: int, j: int, k: int) -> Vec3:
    """Sum of the forces from the face- and body-diagonal neighbours."""
    _check_index(i, j, k)
    return _spring_sum(world, i, j, k, _SHEAR_SPRINGS)


def bend_force(world: World, i: int, j: int, k: int) -> Vec3:
    """Sum of the forces from the axis-aligned neighbours at distance two."""
    _check_index(i, j, k)
    return _spring_sum(world, i, j, k, _BEND_SPRINGS)


def spring_offsets(kind: str) -> Sequence[Tuple[int, int, int]]:
    """Grid offsets of the springs of one kind: 'structural', 'shear' or 'bend'."""
    table = {
        "structural": _STRUCTURAL_SPRINGS,
        "shear": _SHEAR_SPRINGS,
        "bend": _BEND_SPRINGS,
    }
    try:
        springs = table[kind]
    except KeyError:
        raise ValueError(f"unknown spring kind {kind!r}") from None
    return [(di, dj, dk) for di, dj, dk, _ in springs]