import pytest

from jellocube.vector import Vec3
from jellocube.world import World, WorldFileError, read_world, write_world


def _sample_world(plane=True, resolution=2):
    p = [
        [[Vec3(i * 0.125, j * 0.25, k * 0.5) for k in range(8)] for j in range(8)]
        for i in range(8)
    ]
    v = [
        [[Vec3(-i * 0.5, j * 1.0, -k * 0.25) for k in range(8)] for j in range(8)]
        for i in range(8)
    ]
    field = [Vec3(n * 0.5, -n * 0.25, 1.0) for n in range(resolution ** 3)]
    return World(
        integrator="Euler",
        dt=0.0005,
        n=3,
        k_elastic=200.0,
        d_elastic=0.25,
        k_collision=400.0,
        d_collision=0.5,
        mass=0.25,
        plane_present=plane,
        a=-1.0,
        b=1.0,
        c=1.0,
        d=2.0,
        resolution=resolution,
        force_field=field,
        p=p,
        v=v,
    )


def test_round_trip_preserves_world(tmp_path):
    world = _sample_world()
    path = tmp_path / "w.w"
    write_world(path, world)
    assert read_world(path) == world


def test_read_sets_file_name(tmp_path):
    path = tmp_path / "w.w"
    write_world(path, _sample_world())
    assert read_world(path).file_name == str(path)


def test_written_header_lines(tmp_path):
    path = tmp_path / "w.w"
    write_world(path, _sample_world())
    lines = path.read_text().splitlines()
    assert lines[0] == "Euler"
    assert lines[1] == "0.000500 3"
    assert lines[2] == "200.000000 0.250000 400.000000 0.500000"
    assert lines[4] == "1"
    assert lines[6] == "2"


def test_line_count_matches_layout(tmp_path):
    path = tmp_path / "w.w"
    write_world(path, _sample_world(plane=True, resolution=2))
    lines = path.read_text().splitlines()
    assert len(lines) == 7 + 2 ** 3 + 1024


def test_plane_absent_omits_coefficients(tmp_path):
    world = _sample_world(plane=False, resolution=0)
    path = tmp_path / "w.w"
    write_world(path, world)
    lines = path.read_text().splitlines()
    assert lines[4] == "0"
    assert lines[5] == "0"
    assert len(lines) == 6 + 1024
    back = read_world(path)
    assert back.plane_present is False
    assert back.force_field == []
    assert back.p == world.p


def test_missing_file_raises(tmp_path):
    with pytest.raises(WorldFileError):
        read_world(tmp_path / "absent.w")


def test_truncated_file_raises(tmp_path):
    path = tmp_path / "w.w"
    write_world(path, _sample_world())
    lines = path.read_text().splitlines()
    path.write_text("\n".join(lines[:-10]) + "\n")
    with pytest.raises(WorldFileError):
        read_world(path)


def test_bad_number_raises(tmp_path):
    path = tmp_path / "w.w"
    write_world(path, _sample_world())
    lines = path.read_text().splitlines()
    lines[3] = "heavy"
    path.write_text("\n".join(lines) + "\n")
    with pytest.raises(WorldFileError):
        read_world(path)


def test_write_to_unwritable_path_raises(tmp_path):
    with pytest.raises(WorldFileError):
        write_world(tmp_path / "missing_dir" / "w.w", _sample_world())


def test_copy_is_independent():
    world = _sample_world()
    clone = world.copy()
    clone.p[0][0][0] = Vec3(9.0, 9.0, 9.0)
    clone.v[7][7][7] = Vec3(1.0, 2.0, 3.0)
    assert world.p[0][0][0] == Vec3(0.0, 0.0, 0.0)
    assert world.v[7][7][7] != clone.v[7][7][7]
    assert clone.force_field is world.force_field


def test_copy_equals_original():
    world = _sample_world()
    assert world.copy() == world


def test_force_field_size_is_checked():
    with pytest.raises(ValueError):
        World(resolution=2, force_field=[Vec3()])


def test_default_world_has_full_grids():
    world = World()
    assert len(world.p) == 8
    assert all(len(row) == 8 for plane in world.v for row in plane)