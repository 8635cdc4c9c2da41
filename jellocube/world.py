"""The jello world: simulation parameters and state, plus world-file I/O."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Union

from jellocube.vector import Vec3

PathLike = Union[str, "os.PathLike[str]"]

GRID_SIZE = 8

Grid = List[List[List[Vec3]]]


class WorldFileError(Exception):
    """Raised when a world file cannot be read or written."""


def _zero_grid() -> Grid:
    return [
        [[Vec3() for _ in range(GRID_SIZE)] for _ in range(GRID_SIZE)]
        for _ in range(GRID_SIZE)
    ]


def _grid_points(grid: Grid) -> Iterator[Vec3]:
    for plane in grid:
        for row in plane:
            yield from row


@dataclass
class World:
    """Parameters and state of the 8x8x8 mass-spring jello cube.

    The inclined plane satisfies ``a*x + b*y + c*z + d = 0``.  The force
    field is a flat list of ``resolution ** 3`` vectors sampled on a grid
    spanning [-2, 2] on each axis, indexed ``i*res*res + j*res + k``.
    """

    integrator: str = "RK4"
    dt: float = 0.001
    n: int = 1
    k_elastic: float = 0.0
    d_elastic: float = 0.0
    k_collision: float = 0.0
    d_collision: float = 0.0
    mass: float = 1.0 / 512
    plane_present: bool = False
    a: float = 0.0
    b: float = 0.0
    c: float = 0.0
    d: float = 0.0
    resolution: int = 0
    force_field: List[Vec3] = field(default_factory=list)
    p: Grid = field(default_factory=_zero_grid)
    v: Grid = field(default_factory=_zero_grid)
    file_name: Optional[str] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.resolution < 0:
            raise ValueError("force field resolution must be non-negative")
        expected = self.resolution ** 3
        if len(self.force_field) != expected:
            raise ValueError(
                f"force field holds {len(self.force_field)} values, expected {expected}"
            )
        for name in ("p", "v"):
            grid = getattr(self, name)
            if len(grid) != GRID_SIZE or any(
                len(plane) != GRID_SIZE or any(len(row) != GRID_SIZE for row in plane)
                for plane in grid
            ):
                raise ValueError(f"{name} must be an {GRID_SIZE}x{GRID_SIZE}x{GRID_SIZE} grid")

    def copy(self) -> World:
        """Return a copy whose position and velocity grids are independent.

        The force field is shared, as it is never modified by the simulation.
        """
        return World(
            integrator=self.integrator,
            dt=self.dt,
            n=self.n,
            k_elastic=self.k_elastic,
            d_elastic=self.d_elastic,
            k_collision=self.k_collision,
            d_collision=self.d_collision,
            mass=self.mass,
            plane_present=self.plane_present,
            a=self.a,
            b=self.b,
            c=self.c,
            d=self.d,
            resolution=self.resolution,
            force_field=self.force_field,
            p=[[list(row) for row in plane] for plane in self.p],
            v=[[list(row) for row in plane] for plane in self.v],
            file_name=self.file_name,
        )


class _Tokens:
    """Sequential reader over whitespace-separated tokens of a world file."""

    def __init__(self, text: str, name: str) -> None:
        self._tokens = iter(text.split())
        self._name = name

    def word(self, what: str) -> str:
        try:
            return next(self._tokens)
        except StopIteration:
            raise WorldFileError(f"{self._name}: unexpected end of file reading {what}") from None

    def integer(self, what: str) -> int:
        token = self.word(what)
        try:
            return int(token)
        except ValueError:
            raise WorldFileError(f"{self._name}: bad integer {token!r} for {what}") from None

    def real(self, what: str) -> float:
        token = self.word(what)
        try:
            return float(token)
        except ValueError:
            raise WorldFileError(f"{self._name}: bad number {token!r} for {what}") from None

    def vector(self, what: str) -> Vec3:
        return Vec3(self.real(what), self.real(what), self.real(what))

    def grid(self, what: str) -> Grid:
        return [
            [[self.vector(what) for _ in range(GRID_SIZE)] for _ in range(GRID_SIZE)]
            for _ in range(GRID_SIZE)
        ]


def read_world(path: PathLike) -> World:
    """Read a world file and return the World it describes."""
    name = os.fspath(path)
    try:
        with open(path, "r", encoding="ascii") as handle:
            text = handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise WorldFileError(f"can't open file {name}") from exc

    tokens = _Tokens(text, name)
    integrator = tokens.word("integrator")
    dt = tokens.real("timestep")
    n = tokens.integer("render interval")
    k_elastic = tokens.real("kElastic")
    d_elastic = tokens.real("dElastic")
    k_collision = tokens.real("kCollision")
    d_collision = tokens.real("dCollision")
    mass = tokens.real("mass")

    plane_present = tokens.integer("inclined plane flag") == 1
    a = b = c = d = 0.0
    if plane_present:
        a = tokens.real("plane a")
        b = tokens.real("plane b")
        c = tokens.real("plane c")
        d = tokens.real("plane d")

    resolution = tokens.integer("force field resolution")
    if resolution < 0:
        raise WorldFileError(f"{name}: negative force field resolution {resolution}")
    force_field = [tokens.vector("force field") for _ in range(resolution ** 3)]

    positions = tokens.grid("positions")
    velocities = tokens.grid("velocities")

    return World(
        integrator=integrator,
        dt=dt,
        n=n,
        k_elastic=k_elastic,
        d_elastic=d_elastic,
        k_collision=k_collision,
        d_collision=d_collision,
        mass=mass,
        plane_present=plane_present,
        a=a,
        b=b,
        c=c,
        d=d,
        resolution=resolution,
        force_field=force_field,
        p=positions,
        v=velocities,
        file_name=name,
    )


def _fmt(value: float) -> str:
    return f"{value:.6f}"


def _vector_lines(vectors: Iterable[Vec3]) -> Iterator[str]:
    for vec in vectors:
        yield f"{_fmt(vec.x)} {_fmt(vec.y)} {_fmt(vec.z)}"


def _world_lines(world: World) -> Iterator[str]:
    yield world.integrator
    yield f"{_fmt(world.dt)} {world.n}"
    yield " ".join(
        _fmt(value)
        for value in (world.k_elastic, world.d_elastic, world.k_collision, world.d_collision)
    )
    yield _fmt(world.mass)
    yield "1" if world.plane_present else "0"
    if world.plane_present:
        yield " ".join(_fmt(value) for value in (world.a, world.b, world.c, world.d))
    yield str(world.resolution)
    yield from _vector_lines(world.force_field)
    yield from _vector_lines(_grid_points(world.p))
    yield from _vector_lines(_grid_points(world.v))


def write_world(path: PathLike, world: World) -> None:
    """Write ``world`` to ``path`` in the world-file format."""
    text = "".join(line + "\n" for line in _world_lines(world))
    try:
        with open(path, "w", encoding="ascii") as handle:
            handle.write(text)
    except OSError as exc:
        raise WorldFileError(f"can't open file {os.fspath(path)}") from exc