"""Drawable geometry of the jello scene, independent of any graphics API.

The functions here compute what the viewer draws: the surface springs of
the wireframe view, the smoothed vertex normals of the shaded view, the
bounding box, the checkered ground plane and the inclined plane polygon.
"""

from __future__ import annotations

import math
from itertools import product
from typing import List, NamedTuple, Tuple

from jellocube.vector import Vec3
from jellocube.world import GRID_SIZE, World

LAST = GRID_SIZE - 1
ESCAPE_LIMIT = 10.0

Color = Tuple[float, float, float, float]
Triangle = Tuple[Vec3, Vec3, Vec3]

DARK_TILE: Color = (0.1, 0.1, 0.1, 1.0)
CLEAR_TILE: Color = (0.0, 0.0, 0.0, 0.0)

_STRUCTURAL_OFFSETS = (
    (1, 0, 0), (0, 1, 0), (0, 0, 1),
    (-1, 0, 0), (0, -1, 0), (0, 0, -1),
)
_SHEAR_OFFSETS = (
    (1, 1, 0), (-1, 1, 0), (-1, -1, 0), (1, -1, 0),
    (0, 1, 1), (0, -1, 1), (0, -1, -1), (0, 1, -1),
    (1, 0, 1), (-1, 0, 1), (-1, 0, -1), (1, 0, -1),
    (1, 1, 1), (-1, 1, 1), (-1, -1, 1), (1, -1, 1),
    (1, 1, -1), (-1, 1, -1), (-1, -1, -1), (1, -1, -1),
)
_BEND_OFFSETS = (
    (2, 0, 0), (0, 2, 0), (0, 0, 2),
    (-2, 0, 0), (0, -2, 0), (0, 0, -2),
)


class SpringSegment(NamedTuple):
    """A spring drawn as a line from ``start`` to ``end``."""

    kind: str
    start: Vec3
    end: Vec3


class Tile(NamedTuple):
    """A coloured square of the ground plane, as two triangles."""

    color: Color
    triangles: Tuple[Triangle, Triangle]


def point_map(side: int, i: int, j: int) -> int:
    """Flat index into the 8x8x8 grid of node (i, j) on cube face ``side``.

    Faces: 1 bottom, 2 front, 3 left, 4 right, 5 back, 6 top.
    """
    if side == 1:
        return 64 * i + 8 * j
    if side == 6:
        return 64 * i + 8 * j + 7
    if side == 2:
        return 64 * i + j
    if side == 5:
        return 64 * i + 56 + j
    if side == 3:
        return 8 * i + j
    if side == 4:
        return 448 + 8 * i + j
    raise ValueError(f"unknown cube face {side}")


def _node(world: World, face: int, i: int, j: int) -> Vec3:
    index = point_map(face, i, j)
    return world.p[index // 64][(index // 8) % 8][index % 8]


def _check_escaped(world: World) -> None:
    if abs(world.p[0][0][0].x) > ESCAPE_LIMIT:
        raise RuntimeError("Your cube somehow escaped way out of the box.")


def _on_surface(i: int, j: int, k: int) -> bool:
    return any(index in (0, LAST) for index in (i, j, k))


def _in_grid(i: int, j: int, k: int) -> bool:
    return all(0 <= index <= LAST for index in (i, j, k))


def surface_springs(
    world: World, structural: bool, shear: bool, bend: bool
) -> List[SpringSegment]:
    """Springs between surface mass points, as drawn in wireframe mode.

    Each spring appears once from each end. Raises RuntimeError when the
    cube has escaped far out of the bounding box.
    """
    _check_escaped(world)
    kinds = [
        ("structural", _STRUCTURAL_OFFSETS, structural),
        ("shear", _SHEAR_OFFSETS, shear),
        ("bend", _BEND_OFFSETS, bend),
    ]
    segments: List[SpringSegment] = []
    for i, j, k in product(range(GRID_SIZE), repeat=3):
        if not _on_surface(i, j, k):
            continue
        for kind, offsets, enabled in kinds:
            if not enabled:
                continue
            for di, dj, dk in offsets:
                ni, nj, nk = i + di, j + dj, k + dk
                if _in_grid(ni, nj, nk) and _on_surface(ni, nj, nk):
                    segments.append(
                        SpringSegment(kind, world.p[i][j][k], world.p[ni][nj][nk])
                    )
    return segments


def face_vertex_normals(world: World, face: int) -> List[List[Vec3]]:
    """Averaged (Gouraud) vertex normals of one cube face as an 8x8 grid.

    Each of the 7x7 blocks is split into two triangles whose unit normals
    are accumulated at their corners and then averaged. Faces 1, 3 and 5
    have their orientation flipped so that normals point outwards.
    """
    point_map(face, 0, 0)
    _check_escaped(world)
    factor = -1.0 if face in (1, 3, 5) else 1.0
    sums = [[Vec3() for _ in range(GRID_SIZE)] for _ in range(GRID_SIZE)]
    counts = [[0] * GRID_SIZE for _ in range(GRID_SIZE)]

    def add(i: int, j: int, normal: Vec3) -> None:
        sums[i][j] = sums[i][j] + normal
        counts[i][j] += 1

    for i, j in product(range(LAST), repeat=2):
        origin = _node(world, face, i, j)
        r1 = _node(world, face, i + 1, j) - origin
        r2 = _node(world, face, i, j + 1) - origin
        normal = (r1.cross(r2) * factor).normalized()
        add(i + 1, j, normal)
        add(i, j + 1, normal)
        add(i, j, normal)

        corner = _node(world, face, i + 1, j + 1)
        r1 = _node(world, face, i, j + 1) - corner
        r2 = _node(world, face, i + 1, j) - corner
        normal = (r1.cross(r2) * factor).normalized()
        add(i + 1, j, normal)
        add(i, j + 1, normal)
        add(i + 1, j + 1, normal)

    return [
        [sums[i][j] / counts[i][j] for j in range(GRID_SIZE)]
        for i in range(GRID_SIZE)
    ]


def bounding_box_lines() -> List[Tuple[Vec3, Vec3]]:
    """Grid lines on the four side walls of the [-2, 2] bounding box."""
    lines: List[Tuple[Vec3, Vec3]] = []
    for y in (-2, 2):
        lines += [(Vec3(i, y, -2), Vec3(i, y, 2)) for i in range(-2, 3)]
        lines += [(Vec3(-2, y, j), Vec3(2, y, j)) for j in range(-2, 3)]
    for x in (-2, 2):
        lines += [(Vec3(x, i, -2), Vec3(x, i, 2)) for i in range(-2, 3)]
        lines += [(Vec3(x, -2, j), Vec3(x, 2, j)) for j in range(-2, 3)]
    return lines


def _square(x_hi: int, x_lo: int, j: int, color: Color) -> Tile:
    z = -2
    first = (Vec3(x_hi, j, z), Vec3(x_lo, j + 1, z), Vec3(x_lo, j, z))
    second = (Vec3(x_hi, j, z), Vec3(x_hi, j + 1, z), Vec3(x_lo, j + 1, z))
    return Tile(color, (first, second))


def ground_plane_tiles() -> List[Tile]:
    """Checkered tiles of the ground plane at z = -2.

    The row counter is never reset between columns, so only the first
    column of each stagger is produced.
    """
    i = -1
    tiles: List[Tile] = []
    for j in range(-2, 2):
        color = DARK_TILE if j % 2 == 0 else CLEAR_TILE
        tiles.append(_square(i, i - 1, j, color))
        tiles.append(_square(i + 2, i + 1, j, color))
    for j in range(-2, 2):
        color = CLEAR_TILE if j % 2 == 0 else DARK_TILE
        tiles.append(_square(i + 1, i, j, color))
        tiles.append(_square(i + 3, i + 2, j, color))
    return tiles


def _solve(numerator: float, denominator: float) -> float:
    """Return -(numerator / denominator) with IEEE semantics for zero."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return -math.copysign(math.inf, numerator)
    return -(numerator / denominator)


def incline_plane_polygon(world: World) -> List[Vec3]:
    """Vertices of the inclined plane clipped to the bounding box.

    Returns three vertices for a triangle, four for a quad, and an empty
    list when the plane cuts the box edges in any other number of points.
    """
    a, b, c, d = world.a, world.b, world.c, world.d
    front_left = _solve(a * -2.0 + c * -2.0 + d, b)
    front_right = _solve(a * 2.0 + c * -2.0 + d, b)
    back_left = _solve(a * -2.0 + c * 2.0 + d, b)
    back_right = _solve(a * 2.0 + c * 2.0 + d, b)
    up_front = _solve(b * 2.0 + c * -2.0 + d, a)
    up_back = _solve(b * 2.0 + c * 2.0 + d, a)
    bottom_front = _solve(b * -2.0 + c * -2.0 + d, a)
    bottom_back = _solve(b * -2.0 + c * 2.0 + d, a)

    candidates = [
        (-2 <= front_left <= 2, Vec3(-2, front_left, -2)),
        (-2 <= front_right <= 2, Vec3(2, front_right, -2)),
        (-2 <= back_left <= 2, Vec3(-2, back_left, 2)),
        (-2 <= back_right <= 2, Vec3(2, back_right, 2)),
        (-2 < up_front < 2, Vec3(up_front, 2, -2)),
        (-2 < up_back < 2, Vec3(up_back, 2, 2)),
        (-2 < bottom_front < 2, Vec3(bottom_front, -2, -2)),
        (-2 < bottom_back < 2, Vec3(bottom_back, -2, 2)),
    ]
    points = [point for hit, point in candidates if hit]

    if len(points) == 3:
        return [points[2], points[1], points[0]]
    if len(points) == 4:
        return [
            Vec3(2, back_right, 2),
            Vec3(-2, front_left, -2),
            Vec3(2, front_right, -2),
            Vec3(-2, back_left, 2),
        ]
    return []