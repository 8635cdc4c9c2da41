"""Create an example world file for the jello cube simulator."""

from __future__ import annotations

import sys
from typing import Optional, Sequence

from jellocube.vector import Vec3
from jellocube.world import GRID_SIZE, World, WorldFileError, write_world

DEFAULT_OUTPUT = "jello.w"


def build_example_world() -> World:
    """Return the example world: an RK4 cube flung towards a corner."""
    resolution = 30
    force_field = [Vec3(0.0, 0.0, 0.0) for _ in range(resolution ** 3)]

    last = GRID_SIZE - 1
    corner = 1.0 + 1.0 / 7
    positions = [
        [
            [
                Vec3(corner, corner, corner)
                if (i, j, k) == (last, last, last)
                else Vec3(1.0 * i / 7, 1.0 * j / 7, 1.0 * k / 7)
                for k in range(GRID_SIZE)
            ]
            for j in range(GRID_SIZE)
        ]
        for i in range(GRID_SIZE)
    ]
    velocities = [
        [[Vec3(10.0, -10.0, 20.0) for _ in range(GRID_SIZE)] for _ in range(GRID_SIZE)]
        for _ in range(GRID_SIZE)
    ]

    return World(
        integrator="RK4",
        dt=0.0005,
        n=1,
        k_elastic=200.0,
        d_elastic=0.25,
        k_collision=400.0,
        d_collision=0.25,
        mass=1.0 / 512,
        plane_present=True,
        a=-1.0,
        b=1.0,
        c=1.0,
        d=2.0,
        resolution=resolution,
        force_field=force_field,
        p=positions,
        v=velocities,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Write the example world to the given path, or to jello.w."""
    args = list(sys.argv[1:] if argv is None else argv)
    output = args[0] if args else DEFAULT_OUTPUT
    try:
        write_world(output, build_example_world())
    except WorldFileError:
        print("can't open file")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())