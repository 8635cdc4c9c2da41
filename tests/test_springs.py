import itertools
import math
import random

import pytest

from jellocube.springs import (
    REST_LENGTH_BEND,
    REST_LENGTH_DIAGONAL_2D,
    REST_LENGTH_DIAGONAL_3D,
    REST_LENGTH_STRUCTURAL,
    bend_force,
    damping_force,
    hooke_force,
    shear_force,
    spring_offsets,
    structural_force,
)
from jellocube.vector import Vec3
from jellocube.world import World

FORCES = [structural_force, shear_force, bend_force]
ZERO = (0.0, 0.0, 0.0)


def _rest_grid(offset=Vec3()):
    return [
        [[Vec3(i / 7, j / 7, k / 7) + offset for k in range(8)] for j in range(8)]
        for i in range(8)
    ]


def _uniform_grid(vec):
    return [[[vec for _ in range(8)] for _ in range(8)] for _ in range(8)]


def _world(p=None, v=None, k_elastic=200.0, d_elastic=0.25):
    return World(
        k_elastic=k_elastic,
        d_elastic=d_elastic,
        p=p if p is not None else _rest_grid(),
        v=v if v is not None else _uniform_grid(Vec3()),
    )


def _perturbed_world(seed, scale=0.02):
    rng = random.Random(seed)
    p = [
        [
            [
                Vec3(i / 7 + rng.uniform(-scale, scale),
                     j / 7 + rng.uniform(-scale, scale),
                     k / 7 + rng.uniform(-scale, scale))
                for k in range(8)
            ]
            for j in range(8)
        ]
        for i in range(8)
    ]
    v = [
        [[Vec3(rng.uniform(-1, 1), rng.uniform(-1, 1), rng.uniform(-1, 1)) for _ in range(8)]
         for _ in range(8)]
        for _ in range(8)
    ]
    return _world(p=p, v=v)


@pytest.mark.parametrize(
    "rest, expected",
    [
        (REST_LENGTH_STRUCTURAL, 1 / 7),
        (REST_LENGTH_DIAGONAL_2D, math.sqrt(2) / 7),
        (REST_LENGTH_DIAGONAL_3D, math.sqrt(3) / 7),
        (REST_LENGTH_BEND, 2 / 7),
    ],
)
def test_rest_lengths(rest, expected):
    assert rest == pytest.approx(expected)
    at_rest = hooke_force(Vec3(expected, 0.0, 0.0), Vec3(), 3.0, rest)
    assert tuple(at_rest) == pytest.approx(ZERO, abs=1e-12)
    stretched = hooke_force(Vec3(expected + 0.1, 0.0, 0.0), Vec3(), 3.0, rest)
    assert tuple(stretched) == pytest.approx((-0.3, 0.0, 0.0))


def test_hooke_force_stretched_spring_pulls_back():
    force = hooke_force(Vec3(1.0, 0.0, 0.0), Vec3(), 2.0, 0.5)
    assert tuple(force) == pytest.approx((-1.0, 0.0, 0.0), abs=1e-9)


def test_hooke_force_at_rest_length_is_zero():
    force = hooke_force(Vec3(0.0, 0.3, 0.4), Vec3(), 10.0, 0.5)
    assert tuple(force) == pytest.approx(ZERO, abs=1e-9)


def test_hooke_force_is_antisymmetric_and_parallel():
    a, b = Vec3(0.2, -0.4, 1.1), Vec3(-0.3, 0.5, 0.2)
    fab = hooke_force(a, b, 7.0, 0.3)
    fba = hooke_force(b, a, 7.0, 0.3)
    assert tuple(fab) == pytest.approx(tuple(-fba), abs=1e-9)
    assert tuple(fab.cross(a - b)) == pytest.approx(ZERO, abs=1e-9)
    assert fab.length() == pytest.approx(7.0 * abs((a - b).length() - 0.3))


def test_hooke_force_coincident_points_raise():
    with pytest.raises(ZeroDivisionError):
        hooke_force(Vec3(1, 1, 1), Vec3(1, 1, 1), 1.0, 0.1)


def test_damping_force_zero_for_perpendicular_motion():
    force = damping_force(Vec3(1, 0, 0), Vec3(), Vec3(0, 3, -2), Vec3(), 5.0)
    assert tuple(force) == pytest.approx(ZERO, abs=1e-9)


def test_damping_force_opposes_separation():
    src, ngbr = Vec3(0.4, 0.1, -0.2), Vec3(-0.1, 0.2, 0.3)
    separating = (src - ngbr) * 2.0
    force = damping_force(src, ngbr, separating, Vec3(), 0.5)
    assert force.dot(separating) < 0
    assert tuple(force.cross(src - ngbr)) == pytest.approx(ZERO, abs=1e-9)
    reverse = damping_force(ngbr, src, Vec3(), separating, 0.5)
    assert tuple(force) == pytest.approx(tuple(-reverse), abs=1e-9)


def test_damping_force_coincident_points_raise():
    with pytest.raises(ZeroDivisionError):
        damping_force(Vec3(), Vec3(), Vec3(1, 0, 0), Vec3(), 1.0)


@pytest.mark.parametrize("func", FORCES)
@pytest.mark.parametrize("index", [(0, 0, 0), (3, 4, 5), (7, 0, 7), (1, 6, 2)])
def test_cube_at_rest_has_no_internal_force(func, index):
    assert tuple(func(_world(), *index)) == pytest.approx(ZERO, abs=1e-9)


@pytest.mark.parametrize("func", FORCES)
@pytest.mark.parametrize("index", [(0, 0, 0), (2, 5, 7), (4, 4, 4)])
def test_forces_invariant_under_translation_and_uniform_velocity(func, index):
    base = _perturbed_world(1)
    shift = Vec3(0.7, -1.2, 0.3)
    drift = Vec3(4.0, -2.0, 1.0)
    moved = _world(
        p=[[[pt + shift for pt in row] for row in plane] for plane in base.p],
        v=[[[vel + drift for vel in row] for row in plane] for plane in base.v],
    )
    assert tuple(func(base, *index)) == pytest.approx(tuple(func(moved, *index)), abs=1e-7)


@pytest.mark.parametrize("func", FORCES)
def test_internal_forces_sum_to_zero(func):
    world = _perturbed_world(7)
    total = sum(
        (func(world, i, j, k) for i, j, k in itertools.product(range(8), repeat=3)),
        Vec3(),
    )
    assert tuple(total) == pytest.approx(ZERO, abs=1e-7)


def test_displaced_point_is_pulled_back():
    p = _rest_grid()
    p[3][3][3] = p[3][3][3] + Vec3(0.05, 0.0, 0.0)
    world = _world(p=p)
    assert structural_force(world, 3, 3, 3).x < 0
    assert bend_force(world, 3, 3, 3).x < 0
    assert shear_force(world, 3, 3, 3).x < 0


def test_offset_counts():
    assert len(spring_offsets("structural")) == 6
    assert len(spring_offsets("shear")) == 20
    assert len(spring_offsets("bend")) == 6
    assert len(set(spring_offsets("shear"))) == 20


def test_unknown_spring_kind():
    with pytest.raises(ValueError):
        spring_offsets("torsion")


@pytest.mark.parametrize("func", FORCES)
def test_index_outside_grid_raises(func):
    with pytest.raises(IndexError):
        func(_world(), 8, 0, 0)