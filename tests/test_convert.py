import pytest

from splashsurf.convert import (
    ConvertError,
    InputKind,
    check_overwrite,
    filter_particles,
    select_input,
)


def test_check_overwrite_existing_file_raises(tmp_path):
    target = tmp_path / "out.vtk"
    target.write_text("x")
    with pytest.raises(ConvertError, match="already exists"):
        check_overwrite(target, False)


def test_check_overwrite_allowed(tmp_path):
    target = tmp_path / "out.vtk"
    target.write_text("x")
    assert check_overwrite(target, True) == target


def test_check_overwrite_missing_file(tmp_path):
    target = tmp_path / "new.vtk"
    assert check_overwrite(str(target), False) == target


def test_select_input_particles(tmp_path):
    kind, path = select_input(tmp_path / "p.vtk", None)
    assert kind is InputKind.PARTICLES
    assert path == tmp_path / "p.vtk"


def test_select_input_mesh(tmp_path):
    kind, path = select_input(None, str(tmp_path / "m.ply"))
    assert kind is InputKind.MESH
    assert path == tmp_path / "m.ply"


def test_select_input_none_raises():
    with pytest.raises(ConvertError, match="No input file specified"):
        select_input(None, None)


def test_select_input_both_raises(tmp_path):
    with pytest.raises(ConvertError):
        select_input(tmp_path / "p.vtk", tmp_path / "m.vtk")


def test_filter_without_domain_keeps_all():
    points = [(0.0, 0.0, 0.0), (5.0, 5.0, 5.0)]
    assert filter_particles(points) == points


def test_filter_keeps_only_inside_preserving_order():
    points = [
        (0.5, 0.5, 0.5),
        (2.0, 0.5, 0.5),
        (0.0, 0.0, 0.0),
        (1.0, 0.5, 0.5),
        (0.25, 0.75, 0.5),
    ]
    kept = filter_particles(points, (0.0, 0.0, 0.0), (1.0, 1.0, 1.0))
    assert kept == [points[0], points[2], points[4]]


def test_filter_result_is_subset_of_input():
    points = [(float(i), float(i), float(i)) for i in range(-3, 4)]
    kept = filter_particles(points, (-1.0, -1.0, -1.0), (2.0, 2.0, 2.0))
    assert all(p in points for p in kept)
    assert all(-1.0 <= c < 2.0 for p in kept for c in p)


def test_filter_requires_both_bounds():
    with pytest.raises(ConvertError):
        filter_particles([(0.0, 0.0, 0.0)], (0.0, 0.0, 0.0), None)
    with pytest.raises(ConvertError):
        filter_particles([(0.0, 0.0, 0.0)], None, (1.0, 1.0, 1.0))


def test_filter_requires_three_values():
    with pytest.raises(ConvertError):
        filter_particles([(0.0, 0.0, 0.0)], (0.0, 0.0), (1.0, 1.0))